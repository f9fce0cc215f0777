"""Reminder service - reminder records, nothing is scheduled."""
from typing import Optional

from bson import ObjectId

from app.models.reminder import Reminder, ReminderCreate
from app.services.store_service import StoreService


class ReminderService:
    """Service for handling reminder records."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.store = StoreService(db)

    async def create_reminder(self, reminder_create: ReminderCreate) -> Reminder:
        """
        Create an enabled reminder for a habit.

        Raises:
            ValueError: If the habit does not exist
        """
        habits, _ = await self.store.load_habits()
        habit = next((h for h in habits if h.id == reminder_create.habit_id), None)
        if habit is None:
            raise ValueError("Habit not found")

        reminders, version = await self.store.load_reminders()
        reminder = Reminder(
            id=str(ObjectId()),
            habit_id=habit.id,
            habit_name=habit.name,
            remind_at=reminder_create.remind_at,
        )
        reminders.append(reminder)

        await self.store.save_reminders(reminders, version)
        return reminder

    async def list_reminders(self) -> list[Reminder]:
        """List reminders, earliest time first."""
        reminders, _ = await self.store.load_reminders()
        return sorted(reminders, key=lambda r: r.remind_at)

    async def toggle_reminder(self, reminder_id: str) -> Optional[Reminder]:
        """Flip a reminder between enabled and disabled; None if unknown."""
        reminders, version = await self.store.load_reminders()
        reminder = next((r for r in reminders if r.id == reminder_id), None)
        if reminder is None:
            return None

        reminder.enabled = not reminder.enabled
        await self.store.save_reminders(reminders, version)
        return reminder

    async def delete_reminder(self, reminder_id: str) -> dict:
        """Delete a reminder; returns a dictionary with deleted_count."""
        reminders, version = await self.store.load_reminders()
        remaining = [r for r in reminders if r.id != reminder_id]
        deleted = len(reminders) - len(remaining)

        if deleted:
            await self.store.save_reminders(remaining, version)

        return {"deleted_count": deleted}
