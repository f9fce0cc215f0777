"""Daily rollover of the ``completed_today`` flags."""
import logging
from datetime import date
from typing import Optional

from app.models.habit import Habit

logger = logging.getLogger(__name__)


def apply_rollover(habits: list[Habit], last_reset: Optional[date], today: date) -> bool:
    """
    Re-derive "completed today" once per calendar day.

    Every habit takes the flag from its ledger entry for ``today``, so the
    carry-over from yesterday is cleared while a completion already recorded
    today survives. Ledgers and streaks are left alone. Running it again
    with the same ``today`` does nothing.

    Args:
        habits: Habits to update in place
        last_reset: Date of the previous rollover, if any
        today: Caller's local date

    Returns:
        True if a rollover happened and the reset date must be stored
    """
    if last_reset == today:
        return False

    for habit in habits:
        entry = habit.completion_for(today)
        habit.completed_today = bool(entry and entry.completed)

    logger.info("Rolled over %d habits from %s to %s", len(habits), last_reset, today)
    return True
