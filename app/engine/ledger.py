"""Completion ledger - recording a day's result and re-deriving counters."""
import logging
from datetime import date, time
from typing import Optional

from app.engine.streak import compute_streak
from app.models.habit import Completion, Habit

logger = logging.getLogger(__name__)


def recompute(habit: Habit, today: date) -> Habit:
    """
    Re-derive every cached counter of a habit from its ledger.

    ``total_days`` never decreases; the other three are recomputed from
    scratch so un-completing a day shrinks them correctly.

    Args:
        habit: Habit to update in place
        today: Caller's local date

    Returns:
        The same habit
    """
    habit.completed_days = sum(1 for c in habit.completions if c.completed)
    distinct_days = len({c.day for c in habit.completions})
    habit.total_days = max(habit.total_days, distinct_days)
    habit.streak = compute_streak(habit.completions, today)
    entry = habit.completion_for(today)
    habit.completed_today = bool(entry and entry.completed)
    return habit


def set_completion(
    habit: Habit,
    day: date,
    completed: bool,
    today: date,
    occurred_at: Optional[time] = None,
    note: Optional[str] = None,
) -> Habit:
    """
    Record whether a habit was done on ``day``.

    An existing entry for the date is updated in place, otherwise one is
    appended; entries are never removed. Calling this twice with the same
    arguments leaves the same state as calling it once.

    Args:
        habit: Habit whose ledger is written
        day: Calendar date of the entry
        completed: Whether the habit was done
        today: Caller's local date, used for ``streak``/``completed_today``
        occurred_at: Wall-clock time of completion, kept only when completed
        note: Free text; ``None`` keeps the existing note

    Returns:
        The updated habit
    """
    completion_time = occurred_at if completed else None
    entry = habit.completion_for(day)
    if entry is None:
        habit.completions.append(
            Completion(
                day=day,
                completed=completed,
                completion_time=completion_time,
                note=note,
            )
        )
    else:
        entry.completed = completed
        entry.completion_time = completion_time
        if note is not None:
            entry.note = note

    logger.debug("Habit %s marked %s on %s", habit.id, completed, day)
    return recompute(habit, today)


def toggle_today(habit: Habit, today: date, occurred_at: Optional[time] = None) -> Habit:
    """Flip today's entry between done and not done."""
    entry = habit.completion_for(today)
    completed = not (entry and entry.completed)
    return set_completion(habit, today, completed, today, occurred_at=occurred_at)


def sorted_completions(habit: Habit) -> list[Completion]:
    """Ledger entries, most recent first."""
    return sorted(habit.completions, key=lambda c: c.day, reverse=True)
