"""Reminder model definitions."""
from datetime import time
from typing import Optional

from pydantic import Field

from app.models.base import CamelModel


class ReminderCreate(CamelModel):
    """Reminder creation model."""

    habit_id: str
    remind_at: time = Field(default=time(9, 0), alias="time")


class Reminder(ReminderCreate):
    """Stored reminder. Nothing is scheduled from it."""

    id: str
    habit_name: Optional[str] = None
    enabled: bool = True
