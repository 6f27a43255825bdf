"""Flashcard review backed by the review_cards table."""
from datetime import datetime, timezone
from typing import Sequence

from sentence_tutor.db import get_connection
from sentence_tutor.models import ReviewCard, Sentence
from sentence_tutor.review import due_items, mark_known, mark_unknown
from sentence_tutor.saved import get_saved_ids


def load_cards(db_path: str) -> dict[int, ReviewCard]:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM review_cards").fetchall()
    conn.close()
    return {
        r["sentence_id"]: ReviewCard(
            sentence_id=r["sentence_id"],
            interval_rank=r["interval_rank"],
            next_review_at=datetime.fromisoformat(r["next_review_at"]),
            difficulty=r["difficulty"],
        )
        for r in rows
    }


def save_cards(db_path: str, cards: dict[int, ReviewCard]) -> None:
    conn = get_connection(db_path)
    conn.executemany(
        """INSERT INTO review_cards (sentence_id, interval_rank, next_review_at, difficulty)
        VALUES (?, ?, ?, ?)
        ON CONFLICT(sentence_id) DO UPDATE SET
            interval_rank=excluded.interval_rank,
            next_review_at=excluded.next_review_at,
            difficulty=excluded.difficulty""",
        [
            (c.sentence_id, c.interval_rank, c.next_review_at.isoformat(), c.difficulty)
            for c in cards.values()
        ],
    )
    conn.commit()
    conn.close()


def get_due_sentences(
    db_path: str,
    corpus: Sequence[Sentence],
    language: str,
    now: datetime | None = None,
    limit: int | None = None,
) -> list[Sentence]:
    """Saved sentences due for review, in due order."""
    by_id = {s.id: s for s in corpus if s.text(language) is not None}
    saved = get_saved_ids(db_path, language) & by_id.keys()
    due = due_items(saved, load_cards(db_path), now)
    if limit is not None:
        due = due[:limit]
    return [by_id[i] for i in due]


def record_review(db_path: str, sentence_id: int, known: bool, now: datetime | None = None) -> ReviewCard:
    now = now or datetime.now(timezone.utc)
    cards = load_cards(db_path)
    card = mark_known(sentence_id, cards, now) if known else mark_unknown(sentence_id, cards, now)
    save_cards(db_path, {sentence_id: card})
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO review_results (sentence_id, known, reviewed_at) VALUES (?, ?, ?)",
        (sentence_id, int(known), now.isoformat()),
    )
    conn.commit()
    conn.close()
    return card
