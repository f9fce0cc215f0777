"""Goal model definitions."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field, field_validator

from app.models.base import CamelModel


class GoalPeriod(str, Enum):
    """Sliding window a habit-linked goal counts completions over."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class GoalBase(CamelModel):
    """Base goal fields."""

    title: str = Field(min_length=1)
    description: str = ""
    habit_id: Optional[str] = None
    # Older records call this targetDays
    target_value: int = Field(
        default=30,
        ge=1,
        alias="targetValue",
        validation_alias=AliasChoices("targetValue", "targetDays", "target_value"),
    )
    unit: str = "days"
    period: GoalPeriod = GoalPeriod.WEEK
    deadline: Optional[date] = None

    @field_validator("habit_id", "deadline", mode="before")
    @classmethod
    def _normalize_blank(cls, value):
        return _blank_to_none(value)


class GoalCreate(GoalBase):
    """Goal creation model."""

    pass


class GoalUpdate(CamelModel):
    """Goal update model - all fields optional.

    ``habitId`` can only be cleared: sending null turns a linked goal into a
    free-standing one that keeps its current progress.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    target_value: Optional[int] = Field(default=None, ge=1)
    unit: Optional[str] = None
    period: Optional[GoalPeriod] = None
    deadline: Optional[date] = None
    habit_id: Optional[str] = None

    @field_validator("deadline", mode="before")
    @classmethod
    def _normalize_blank(cls, value):
        return _blank_to_none(value)

    @field_validator("habit_id", mode="before")
    @classmethod
    def _only_unlink(cls, value):
        value = _blank_to_none(value)
        if value is not None:
            raise ValueError("habitId can only be cleared")
        return value


class GoalProgressUpdate(CamelModel):
    """Manual progress change for a free-standing goal."""

    amount: int = 1


class Goal(GoalBase):
    """Full goal model with derived progress."""

    id: str
    habit_name: Optional[str] = None
    current_value: int = Field(default=0, ge=0)
    progress: int = 0
    percent: int = 0
    completed: bool = False
    orphaned: bool = False
    created_at: Optional[datetime] = None
