"""Per-day activity counts behind the daily goal and streaks."""
import logging
from datetime import date, datetime, timezone

from sentence_tutor.db import get_connection
from sentence_tutor.streaks import (
    DEFAULT_DAILY_GOAL,
    DailyActivity,
    current_streak,
    longest_streak,
)

logger = logging.getLogger(__name__)

ACTIVITY_COLUMNS = {"save": "saves", "quiz": "quizzes", "flashcard": "flashcards"}


def _today(now: datetime | None) -> date:
    return (now or datetime.now(timezone.utc)).date()


def _to_activity(row) -> DailyActivity:
    return DailyActivity(
        day=date.fromisoformat(row["day"]),
        saves=row["saves"],
        quizzes=row["quizzes"],
        flashcards=row["flashcards"],
        goal=row["goal"],
    )


def record_activity(
    db_path: str, kind: str, now: datetime | None = None, goal: int = DEFAULT_DAILY_GOAL,
) -> DailyActivity:
    """Count one save, finished quiz or known flashcard towards today's goal.

    The goal is fixed by the first activity of the day.
    """
    if kind not in ACTIVITY_COLUMNS:
        raise ValueError(f"Unknown activity kind: {kind!r}")
    column = ACTIVITY_COLUMNS[kind]
    day = _today(now).isoformat()
    conn = get_connection(db_path)
    before = conn.execute("SELECT * FROM daily_activity WHERE day = ?", (day,)).fetchone()
    conn.execute(
        "INSERT INTO daily_activity (day, goal) VALUES (?, ?) ON CONFLICT(day) DO NOTHING",
        (day, goal),
    )
    conn.execute(f"UPDATE daily_activity SET {column} = {column} + 1 WHERE day = ?", (day,))
    conn.commit()
    row = conn.execute("SELECT * FROM daily_activity WHERE day = ?", (day,)).fetchone()
    conn.close()
    entry = _to_activity(row)
    if entry.goal_reached and (before is None or not _to_activity(before).goal_reached):
        logger.info("Daily goal of %d reached on %s", entry.goal, day)
    return entry


def load_activity(db_path: str) -> dict[date, DailyActivity]:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM daily_activity").fetchall()
    conn.close()
    return {entry.day: entry for entry in map(_to_activity, rows)}


def get_streak_stats(db_path: str, now: datetime | None = None, goal: int = DEFAULT_DAILY_GOAL) -> dict:
    today = _today(now)
    days = load_activity(db_path)
    entry = days.get(today)
    return {
        "current_streak": current_streak(days, today),
        "longest_streak": longest_streak(days),
        "goals_reached": sum(1 for e in days.values() if e.goal_reached),
        "today_progress": entry.progress if entry else 0,
        "daily_goal": entry.goal if entry else goal,
        "goal_reached_today": bool(entry and entry.goal_reached),
    }
