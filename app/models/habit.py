"""Habit and completion model definitions."""
from datetime import date, datetime, time
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator, model_validator

from app.models.base import CamelModel


class Frequency(str, Enum):
    """How often a habit is meant to be performed."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class Weekday(str, Enum):
    """Weekday names, Sunday first (calendar display order)."""

    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Weekday of a calendar date."""
        return list(cls)[(day.weekday() + 1) % 7]


class Difficulty(str, Enum):
    """Self-assessed habit difficulty."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


CLOCK_FORMATS = ("%I:%M %p", "%I:%M:%S %p")


def _lower(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


class Completion(CamelModel):
    """A single day's record in a habit's ledger."""

    day: date = Field(alias="date")
    completed: bool = False
    completion_time: Optional[time] = None
    note: Optional[str] = None

    @field_validator("completion_time", mode="before")
    @classmethod
    def _parse_clock(cls, value):
        # Browser records hold locale strings such as "9:05:12 PM"
        if isinstance(value, str):
            text = value.strip()
            try:
                return time.fromisoformat(text)
            except ValueError:
                pass
            for fmt in CLOCK_FORMATS:
                try:
                    return datetime.strptime(text, fmt).time()
                except ValueError:
                    continue
            try:
                return datetime.fromisoformat(text).time()
            except ValueError:
                return None
        return value


class Schedule(CamelModel):
    """Frequency plus the weekday set that only ``custom`` carries."""

    frequency: Frequency = Frequency.DAILY
    custom_days: Optional[list[Weekday]] = None

    @field_validator("frequency", mode="before")
    @classmethod
    def _normalize_frequency(cls, value):
        return _lower(value)

    @field_validator("custom_days", mode="before")
    @classmethod
    def _normalize_days(cls, value):
        if isinstance(value, (list, tuple, set)):
            return [_lower(v) for v in value]
        return value

    @model_validator(mode="after")
    def _check_custom_days(self):
        if self.frequency == Frequency.CUSTOM:
            if not self.custom_days:
                raise ValueError("custom frequency requires at least one day in customDays")
            # Keep weekday order and drop repeats
            self.custom_days = [d for d in Weekday if d in set(self.custom_days)]
        elif self.custom_days:
            raise ValueError("customDays is only allowed with custom frequency")
        else:
            self.custom_days = None
        return self


class HabitBase(Schedule):
    """Base habit fields."""

    name: str = Field(min_length=1)
    description: str = ""
    category: str = ""
    icon: str = "💪"
    difficulty: Difficulty = Difficulty.MEDIUM

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value):
        return _lower(value)


class HabitCreate(HabitBase):
    """Habit creation model."""

    pass


class HabitUpdate(CamelModel):
    """Habit update model - all fields optional.

    Frequency and custom days are validated together once merged with the
    stored habit.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    icon: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    frequency: Optional[Frequency] = None
    custom_days: Optional[list[Weekday]] = None

    @field_validator("frequency", "difficulty", mode="before")
    @classmethod
    def _normalize_enums(cls, value):
        return _lower(value)

    @field_validator("custom_days", mode="before")
    @classmethod
    def _normalize_days(cls, value):
        if isinstance(value, (list, tuple, set)):
            return [_lower(v) for v in value]
        return value


class Habit(HabitBase):
    """Full habit model with its ledger and cached counters."""

    id: str
    streak: int = Field(default=0, ge=0)
    completed_today: bool = False
    total_days: int = Field(default=0, ge=0)
    completed_days: int = Field(default=0, ge=0)
    completions: list[Completion] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    def completion_for(self, day: date) -> Optional[Completion]:
        """Return the ledger entry for ``day``, if any."""
        for completion in self.completions:
            if completion.day == day:
                return completion
        return None


class CompletionSet(CamelModel):
    """Request body for recording a day's completion.

    A completion for today sent without ``completionTime`` is stamped with the
    service's local clock, so clients in other time zones should send it.
    """

    completed: bool = True
    completion_time: Optional[time] = None
    note: Optional[str] = None


class ToggleRequest(CamelModel):
    """Optional body for flipping today's completion.

    Clients in another time zone than the service send their own wall-clock
    time; without one the service's local clock is used.
    """

    completion_time: Optional[time] = None


class RolloverResult(CamelModel):
    """Outcome of a daily rollover run."""

    performed: bool
    last_reset_date: date
    reset_habits: int = 0
