"""Streak calculation over a habit's ledger."""
from datetime import date, timedelta
from typing import Iterable

from app.models.habit import Completion


def completed_dates(completions: Iterable[Completion]) -> set[date]:
    """Dates carrying a completed entry."""
    return {c.day for c in completions if c.completed}


def compute_streak(completions: Iterable[Completion], today: date) -> int:
    """
    Count consecutive completed days walking back from ``today``.

    A missing or uncompleted day breaks the chain, including ``today``
    itself: a habit not yet done today has a streak of 0.

    Args:
        completions: Ledger entries of one habit
        today: Caller's local date

    Returns:
        Length of the unbroken run ending on ``today``
    """
    done = completed_dates(completions)
    streak = 0
    while today - timedelta(days=streak) in done:
        streak += 1
    return streak


def longest_streak(completions: Iterable[Completion]) -> int:
    """Longest run of consecutive completed days anywhere in the ledger."""
    done = completed_dates(completions)
    best = 0
    for day in done:
        # Only count from the first day of each run
        if day - timedelta(days=1) in done:
            continue
        length = 1
        while day + timedelta(days=length) in done:
            length += 1
        best = max(best, length)
    return best
