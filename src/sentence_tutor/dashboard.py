"""Progress statistics for saved sentences and reviews."""
from datetime import datetime, timezone

from sentence_tutor.activity import get_streak_stats
from sentence_tutor.db import get_connection
from sentence_tutor.flashcards import load_cards
from sentence_tutor.ladder import LADDER_HOURS, clamp_rank
from sentence_tutor.review import due_items, next_review_time
from sentence_tutor.saved import get_saved_ids
from sentence_tutor.streaks import DEFAULT_DAILY_GOAL


def get_mastery_label(interval_rank: int | None) -> str:
    if interval_rank is None:
        return "NEW"
    elif interval_rank >= 5:
        return "MASTERED"
    elif interval_rank >= 3:
        return "FAMILIAR"
    return "LEARNING"


def get_mastery_color(interval_rank: int | None) -> str:
    if interval_rank is None:
        return "cyan"
    elif interval_rank >= 5:
        return "green"
    elif interval_rank >= 3:
        return "yellow"
    return "red"


def get_ladder_distribution(db_path: str, language: str) -> dict[int, int]:
    """Number of saved cards on each rung of the ladder."""
    saved = get_saved_ids(db_path, language)
    cards = load_cards(db_path)
    counts = {rank: 0 for rank in range(len(LADDER_HOURS))}
    for sentence_id in saved:
        if sentence_id in cards:
            counts[clamp_rank(cards[sentence_id].interval_rank)] += 1
    return counts


def get_next_review_time(db_path: str, language: str) -> datetime | None:
    return next_review_time(get_saved_ids(db_path, language), load_cards(db_path))


def format_next_review(when: datetime | None, now: datetime | None = None) -> str:
    if when is None:
        return "No scheduled reviews"
    now = now or datetime.now(timezone.utc)
    seconds = (when - now).total_seconds()
    if seconds <= 0:
        return "now"
    minutes = int(seconds // 60)
    if minutes < 60:
        return f"in {max(minutes, 1)}m"
    hours = minutes // 60
    if hours < 48:
        return f"in {hours}h"
    return f"in {hours // 24}d"


def _retention(conn) -> float:
    row = conn.execute("SELECT COUNT(*) as t, SUM(known) as c FROM review_results").fetchone()
    if not row["t"]:
        return 0.0
    return round(row["c"] / row["t"] * 100, 1)


def get_study_stats(
    db_path: str, language: str, now: datetime | None = None, daily_goal: int = DEFAULT_DAILY_GOAL,
) -> dict:
    saved = get_saved_ids(db_path, language)
    cards = load_cards(db_path)
    conn = get_connection(db_path)
    reviews = conn.execute("SELECT COUNT(*) FROM review_results").fetchone()[0]
    quizzes = conn.execute("SELECT COUNT(*) FROM quiz_results").fetchone()[0]
    avg_row = conn.execute("SELECT AVG(is_correct) * 100 as avg FROM quiz_results").fetchone()
    avg_quiz = round(avg_row["avg"], 1) if avg_row["avg"] else 0.0
    retention = _retention(conn)
    conn.close()
    return {
        "saved": len(saved),
        "tracked": len(saved & cards.keys()),
        "due_now": len(due_items(saved, cards, now)),
        "reviews_done": reviews,
        "review_retention": retention,
        "answers_given": quizzes,
        "avg_quiz_score": avg_quiz,
        **get_streak_stats(db_path, now, daily_goal),
    }
