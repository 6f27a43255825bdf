"""Tests for the review scheduler."""
from datetime import timedelta

from sentence_tutor.models import ReviewCard
from sentence_tutor.review import due_items, mark_known, mark_unknown, next_review_time


def test_known_then_unknown_scenario(now):
    cards = {5: ReviewCard(sentence_id=5, interval_rank=2, next_review_at=now, difficulty=1)}
    card = mark_known(5, cards, now)
    assert card.interval_rank == 3
    assert card.next_review_at == now + timedelta(hours=24)
    assert card.difficulty == 0
    card = mark_unknown(5, cards, now)
    assert card.interval_rank == 0
    assert card.next_review_at == now + timedelta(hours=1)
    assert cards[5] is card


def test_new_card_marked_known(now):
    cards = {}
    card = mark_known(9, cards, now)
    assert card.interval_rank == 1
    assert card.next_review_at == now + timedelta(hours=4)
    assert card.difficulty == 0
    assert cards[9] is card


def test_new_card_marked_unknown(now):
    cards = {}
    card = mark_unknown(9, cards, now)
    assert card.interval_rank == 0
    assert card.next_review_at == now + timedelta(hours=1)
    assert card.difficulty == 1


def test_unknown_always_resets_rank(now):
    for rank in range(8):
        cards = {1: ReviewCard(1, rank, now, 0)}
        assert mark_unknown(1, cards, now).interval_rank == 0


def test_difficulty_ceiling(now):
    cards = {}
    for _ in range(4):
        card = mark_unknown(3, cards, now)
    assert card.difficulty == 2


def test_repeated_known_is_monotonic(now):
    cards = {}
    previous = None
    for step in range(12):
        card = mark_known(1, cards, now + timedelta(hours=step))
        assert card.interval_rank <= 7
        if previous is not None:
            assert card.next_review_at >= previous
        previous = card.next_review_at
    assert cards[1].interval_rank == 7


def test_out_of_range_rank_is_clamped(now):
    cards = {1: ReviewCard(1, 99, now, 0)}
    assert mark_known(1, cards, now).interval_rank == 7


def test_due_items_ordering(now):
    cards = {
        2: ReviewCard(2, 1, now - timedelta(hours=1)),
        3: ReviewCard(3, 1, now - timedelta(hours=5)),
        4: ReviewCard(4, 1, now + timedelta(hours=1)),
        5: ReviewCard(5, 1, now),
    }
    assert due_items({1, 2, 3, 4, 5}, cards, now) == [1, 3, 2, 5]


def test_due_items_new_items_first(now):
    cards = {7: ReviewCard(7, 0, now - timedelta(days=30))}
    assert due_items({7, 8, 6}, cards, now) == [6, 8, 7]


def test_due_items_ignore_unsaved_cards(now):
    cards = {2: ReviewCard(2, 0, now - timedelta(hours=1))}
    assert due_items({1}, cards, now) == [1]


def test_next_review_time(now):
    cards = {
        1: ReviewCard(1, 0, now + timedelta(hours=3)),
        2: ReviewCard(2, 0, now + timedelta(hours=1)),
        3: ReviewCard(3, 0, now - timedelta(hours=9)),
    }
    assert next_review_time({1, 2}, cards) == now + timedelta(hours=1)
    assert next_review_time({4}, cards) is None
