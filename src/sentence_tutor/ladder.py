"""Fixed interval ladder for spaced repetition."""

# hours: 1h, 4h, 12h, 1d, 2d, 1w, 2w, 1m
LADDER_HOURS = (1, 4, 12, 24, 48, 168, 336, 720)
MAX_DIFFICULTY = 2
NEW_CARD_KNOWN_RANK = 1


def clamp_rank(rank: int) -> int:
    return min(max(rank, 0), len(LADDER_HOURS) - 1)


def ladder_update(known: bool, interval_rank: int | None, difficulty: int = 0) -> dict:
    """Calculate the next ladder position after a review outcome.

    Args:
        known: Whether the learner knew the item.
        interval_rank: Current rung, or None for an item never reviewed.
        difficulty: Current difficulty (0 easy .. 2 hard).

    Returns:
        Dict with updated interval_rank, interval_hours, difficulty.
    """
    if known:
        if interval_rank is None:
            # First encounter already succeeded: skip the shortest rung
            new_rank = NEW_CARD_KNOWN_RANK
            new_difficulty = 0
        else:
            new_rank = clamp_rank(interval_rank + 1)
            new_difficulty = max(0, difficulty - 1)
    else:
        new_rank = 0
        new_difficulty = min(MAX_DIFFICULTY, difficulty + 1)

    return {
        "interval_rank": new_rank,
        "interval_hours": LADDER_HOURS[new_rank],
        "difficulty": new_difficulty,
    }
