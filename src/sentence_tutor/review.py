"""Spaced-repetition scheduling over a caller-owned card store."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Collection, MutableMapping, Optional

from sentence_tutor.ladder import clamp_rank, ladder_update
from sentence_tutor.models import ReviewCard

logger = logging.getLogger(__name__)

CardStore = MutableMapping[int, ReviewCard]


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def due_items(saved_ids: Collection[int], cards: CardStore, now: Optional[datetime] = None) -> list[int]:
    """Saved ids that are due, new (card-less) items first, then by next review."""
    now = _now(now)
    new, scheduled = [], []
    for sentence_id in saved_ids:
        card = cards.get(sentence_id)
        if card is None:
            new.append(sentence_id)
        elif card.next_review_at <= now:
            scheduled.append((card.next_review_at, sentence_id))
    return sorted(new) + [sentence_id for _, sentence_id in sorted(scheduled)]


def _apply(sentence_id: int, known: bool, cards: CardStore, now: Optional[datetime]) -> ReviewCard:
    now = _now(now)
    card = cards.get(sentence_id)
    if card is None:
        updated = ladder_update(known, None)
    else:
        updated = ladder_update(known, clamp_rank(card.interval_rank), card.difficulty)
    card = ReviewCard(
        sentence_id=sentence_id,
        interval_rank=updated["interval_rank"],
        next_review_at=now + timedelta(hours=updated["interval_hours"]),
        difficulty=updated["difficulty"],
    )
    cards[sentence_id] = card
    logger.debug(
        "Sentence %s marked %s: rank %d, next review %s",
        sentence_id, "known" if known else "unknown", card.interval_rank, card.next_review_at.isoformat(),
    )
    return card


def mark_known(sentence_id: int, cards: CardStore, now: Optional[datetime] = None) -> ReviewCard:
    """Move the card one rung up the ladder (new cards start on the 4h rung)."""
    return _apply(sentence_id, True, cards, now)


def mark_unknown(sentence_id: int, cards: CardStore, now: Optional[datetime] = None) -> ReviewCard:
    """Reset the card to the 1h rung and raise its difficulty."""
    return _apply(sentence_id, False, cards, now)


def next_review_time(saved_ids: Collection[int], cards: CardStore) -> Optional[datetime]:
    """Earliest scheduled review among saved items, None if nothing is scheduled."""
    times = [cards[i].next_review_at for i in saved_ids if i in cards]
    return min(times) if times else None
