"""Daily goal progress and streak counting."""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Mapping

DEFAULT_DAILY_GOAL = 5
# A finished quiz is worth this many goal points.
QUIZ_POINTS = 5


@dataclass
class DailyActivity:
    day: date
    saves: int = 0
    quizzes: int = 0
    flashcards: int = 0
    goal: int = DEFAULT_DAILY_GOAL

    @property
    def progress(self) -> int:
        return self.saves + self.quizzes * QUIZ_POINTS + self.flashcards

    @property
    def goal_reached(self) -> bool:
        return self.progress >= self.goal


def current_streak(days: Mapping[date, DailyActivity], today: date) -> int:
    """Consecutive goal days ending today.

    Today and yesterday may still be open: a missing or unfinished day there
    does not break the streak until counting has started.
    """
    yesterday = today - timedelta(days=1)
    streak = 0
    day = today
    while True:
        entry = days.get(day)
        if entry is not None and entry.goal_reached:
            streak += 1
        elif streak > 0 or day < yesterday:
            break
        day -= timedelta(days=1)
    return streak


def longest_streak(days: Mapping[date, DailyActivity]) -> int:
    longest = run = 0
    previous = None
    for day in sorted(d for d, entry in days.items() if entry.goal_reached):
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = day
    return longest
