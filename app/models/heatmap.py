"""Heatmap model definitions."""
from datetime import date
from enum import Enum
from typing import Optional

from app.models.base import CamelModel


class HeatmapWindow(str, Enum):
    """How far back a heatmap reaches."""

    MONTH = "month"
    SIX_MONTHS = "6months"
    YEAR = "year"


class HeatmapCell(CamelModel):
    """One day of the grid.

    Days after today are placeholders: ``in_range`` is false and the
    completion fields are empty.
    """

    day: date
    in_range: bool
    is_today: bool = False
    completed: Optional[bool] = None
    intensity: Optional[int] = None


class Heatmap(CamelModel):
    """Weeks x 7 grid for one habit, Sunday first."""

    habit_id: str
    window: HeatmapWindow
    start: date
    end: date
    weeks: list[list[HeatmapCell]]
    tracked_days: int
    completed_days: int
