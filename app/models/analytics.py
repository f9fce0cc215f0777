"""Response models for derived statistics."""
from datetime import date
from typing import Optional

from app.models.base import CamelModel


class Summary(CamelModel):
    """Dashboard headline numbers."""

    total_habits: int
    completed_today: int
    completion_rate: int
    best_streak: int
    total_check_ins: int


class WeekdayCount(CamelModel):
    """Lifetime completions falling on one weekday."""

    day: str
    completions: int


class RatePoint(CamelModel):
    """Completion rate inside one 7-day window."""

    label: str
    start: date
    end: date
    completed: int
    total: int
    rate: int


class TimeSlot(CamelModel):
    """Completions recorded inside a 2-hour slot."""

    label: str
    start_hour: int
    end_hour: int
    completions: int
    share: int


class CategoryCount(CamelModel):
    """Number of habits carrying a category label."""

    category: str
    count: int


class HabitPerformance(CamelModel):
    """Lifetime completion counters for one habit."""

    habit_id: str
    name: str
    completions: int
    rate: int


class PeriodCount(CamelModel):
    """Completions inside a calendar week or month."""

    label: str
    start: date
    end: date
    completions: int


class Record(CamelModel):
    """A personal best and the habit holding it."""

    value: int
    habit_name: str


class PersonalRecords(CamelModel):
    """Personal bests across all habits."""

    longest_streak: Record
    longest_run: Record
    most_completed: Record
    best_completion_rate: Record
    total_days_tracked: int


class Achievement(CamelModel):
    """An unlockable badge."""

    id: str
    title: str
    description: str
    unlocked: bool
    progress: Optional[int] = None
    target: Optional[int] = None
