"""Reminder router - reminder records."""
from fastapi import APIRouter, Depends, HTTPException, status

from app.database import get_database
from app.models.reminder import Reminder, ReminderCreate
from app.services.reminder_service import ReminderService


router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.post("", response_model=Reminder, status_code=status.HTTP_201_CREATED)
async def create_reminder(reminder: ReminderCreate, db=Depends(get_database)):
    """
    Create a reminder for a habit.

    - Returns 400 if the habit does not exist
    """
    service = ReminderService(db)
    try:
        return await service.create_reminder(reminder)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[Reminder])
async def list_reminders(db=Depends(get_database)):
    """List reminders, earliest first."""
    service = ReminderService(db)
    return await service.list_reminders()


@router.post("/{reminder_id}/toggle", response_model=Reminder)
async def toggle_reminder(reminder_id: str, db=Depends(get_database)):
    """
    Enable or disable a reminder.

    - Returns 404 if reminder not found
    """
    service = ReminderService(db)
    reminder = await service.toggle_reminder(reminder_id)
    if reminder is None:
        raise HTTPException(status_code=404, detail="Reminder not found")
    return reminder


@router.delete("/{reminder_id}")
async def delete_reminder(reminder_id: str, db=Depends(get_database)):
    """Delete a reminder."""
    service = ReminderService(db)
    return await service.delete_reminder(reminder_id)
