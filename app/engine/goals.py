"""Goal progress from manual input or a linked habit's ledger."""
import logging
from datetime import date, timedelta
from typing import Optional

from app.models.goal import Goal, GoalPeriod
from app.models.habit import Habit
from app.utils.dates import shift_months

logger = logging.getLogger(__name__)


def period_start(period: GoalPeriod, now: date) -> Optional[date]:
    """
    Exclusive lower bound of a goal's sliding period.

    Completions dated after the returned day and up to ``now`` count.
    ``None`` means the whole history.
    """
    if period == GoalPeriod.WEEK:
        return now - timedelta(days=7)
    if period == GoalPeriod.MONTH:
        return shift_months(now, -1)
    if period == GoalPeriod.YEAR:
        return shift_months(now, -12)
    return None


def count_in_period(habit: Habit, period: GoalPeriod, now: date) -> int:
    """Completed entries of ``habit`` inside the sliding period ending ``now``."""
    after = period_start(period, now)
    return sum(
        1
        for c in habit.completions
        if c.completed and c.day <= now and (after is None or c.day > after)
    )


def refresh_goal(goal: Goal, habits: dict[str, Habit], now: date) -> Goal:
    """
    Recompute a goal's progress in place.

    Args:
        goal: Goal to refresh
        habits: Current habits keyed by id
        now: Caller's local date

    Returns:
        The same goal. A goal whose linked habit no longer exists is flagged
        ``orphaned`` and from then on behaves like a free-standing goal,
        with its manual value starting again from 0.
    """
    if goal.habit_id is None:
        goal.orphaned = False
        goal.progress = goal.current_value
    elif goal.habit_id in habits:
        habit = habits[goal.habit_id]
        goal.orphaned = False
        goal.habit_name = habit.name
        goal.progress = count_in_period(habit, goal.period, now)
    else:
        if not goal.orphaned:
            logger.warning("Goal %s lost its habit %s", goal.id, goal.habit_id)
            goal.current_value = 0
        goal.orphaned = True
        goal.progress = goal.current_value

    goal.completed = goal.progress >= goal.target_value
    goal.percent = min(goal.progress * 100 // goal.target_value, 100)
    return goal


def refresh_goals(goals: list[Goal], habits: list[Habit], now: date) -> list[Goal]:
    """Refresh every goal against the same habit set."""
    by_id = {h.id: h for h in habits}
    for goal in goals:
        refresh_goal(goal, by_id, now)
    return goals
