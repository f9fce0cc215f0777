"""Read-only folds over all habits' ledgers.

Nothing here mutates a habit; every view is recomputed from the current
ledgers on each call.
"""
from collections import Counter
from datetime import date, timedelta
from typing import Iterable, Iterator

from app.models.analytics import (
    CategoryCount,
    HabitPerformance,
    PeriodCount,
    RatePoint,
    Summary,
    TimeSlot,
    WeekdayCount,
)
from app.models.habit import Completion, Habit, Weekday
from app.utils.dates import end_of_month, shift_months, start_of_week
from app.utils.rates import percent

UNCATEGORIZED = "Uncategorized"

# Nine 2-hour slots: 6-8, 8-10, ..., 22-24
FIRST_SLOT_HOUR = 6
SLOT_HOURS = 2
SLOT_COUNT = 9


def _entries(habits: Iterable[Habit]) -> Iterator[Completion]:
    for habit in habits:
        yield from habit.completions


def _completed_between(habits: Iterable[Habit], start: date, end: date) -> int:
    return sum(1 for c in _entries(habits) if c.completed and start <= c.day <= end)


def summary(habits: list[Habit]) -> Summary:
    """Headline numbers for the dashboard."""
    completed_today = sum(1 for h in habits if h.completed_today)
    return Summary(
        total_habits=len(habits),
        completed_today=completed_today,
        completion_rate=percent(completed_today, len(habits)),
        best_streak=max((h.streak for h in habits), default=0),
        total_check_ins=sum(h.completed_days for h in habits),
    )


def weekly_pattern(habits: list[Habit]) -> list[WeekdayCount]:
    """Lifetime completed entries per weekday, Sunday first."""
    counts = Counter(Weekday.of(c.day) for c in _entries(habits) if c.completed)
    return [WeekdayCount(day=d.value.capitalize(), completions=counts[d]) for d in Weekday]


def completion_rate_trend(habits: list[Habit], today: date, weeks: int = 12) -> list[RatePoint]:
    """
    Completion rate for each of the last ``weeks`` 7-day windows ending today.

    The rate is completed entries over all entries in the window; a window
    without entries has rate 0.

    Args:
        habits: All habits
        today: Caller's local date, last day of the newest window
        weeks: Number of windows

    Returns:
        Oldest window first
    """
    points = []
    for offset in range(weeks - 1, -1, -1):
        end = today - timedelta(days=7 * offset)
        start = end - timedelta(days=6)
        window = [c for c in _entries(habits) if start <= c.day <= end]
        completed = sum(1 for c in window if c.completed)
        points.append(
            RatePoint(
                label=f"Week {weeks - offset}",
                start=start,
                end=end,
                completed=completed,
                total=len(window),
                rate=percent(completed, len(window)),
            )
        )
    return points


def _slot_label(hour: int) -> str:
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}{suffix}"


def time_of_day(habits: list[Habit]) -> list[TimeSlot]:
    """
    Histogram of completion times in 2-hour slots from 6AM to midnight.

    Completed entries without a recorded time, or recorded before 6AM,
    are left out rather than counted as hour 0.
    """
    counts = Counter()
    for entry in _entries(habits):
        if not entry.completed or entry.completion_time is None:
            continue
        hour = entry.completion_time.hour
        if hour < FIRST_SLOT_HOUR:
            continue
        counts[(hour - FIRST_SLOT_HOUR) // SLOT_HOURS] += 1

    bucketed = sum(counts.values())
    slots = []
    for index in range(SLOT_COUNT):
        start_hour = FIRST_SLOT_HOUR + index * SLOT_HOURS
        slots.append(
            TimeSlot(
                label=_slot_label(start_hour),
                start_hour=start_hour,
                end_hour=start_hour + SLOT_HOURS,
                completions=counts[index],
                share=percent(counts[index], bucketed),
            )
        )
    return slots


def category_distribution(habits: list[Habit]) -> list[CategoryCount]:
    """Habits per category in order of first appearance."""
    counts = Counter()
    for habit in habits:
        counts[habit.category.strip() or UNCATEGORIZED] += 1
    return [CategoryCount(category=name, count=count) for name, count in counts.items()]


def habit_performance(habits: list[Habit]) -> list[HabitPerformance]:
    """Habits ranked by completed days; ties keep their original order."""
    ranking = [
        HabitPerformance(
            habit_id=h.id,
            name=h.name,
            completions=h.completed_days,
            rate=percent(h.completed_days, h.total_days),
        )
        for h in habits
    ]
    return sorted(ranking, key=lambda p: p.completions, reverse=True)


def weekly_completions(habits: list[Habit], today: date, weeks: int = 12) -> list[PeriodCount]:
    """Completed entries in each of the last ``weeks`` Sunday-to-Saturday weeks."""
    current = start_of_week(today)
    counts = []
    for offset in range(weeks - 1, -1, -1):
        start = current - timedelta(days=7 * offset)
        end = start + timedelta(days=6)
        counts.append(
            PeriodCount(
                label=f"Week {weeks - offset}",
                start=start,
                end=end,
                completions=_completed_between(habits, start, end),
            )
        )
    return counts


def monthly_completions(habits: list[Habit], today: date, months: int = 6) -> list[PeriodCount]:
    """Completed entries in each of the last ``months`` calendar months."""
    current = today.replace(day=1)
    counts = []
    for offset in range(months - 1, -1, -1):
        start = shift_months(current, -offset)
        end = end_of_month(start)
        counts.append(
            PeriodCount(
                label=start.strftime("%b %Y"),
                start=start,
                end=end,
                completions=_completed_between(habits, start, end),
            )
        )
    return counts
