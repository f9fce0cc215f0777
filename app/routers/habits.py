"""Habit router - API endpoints for habits and their ledgers."""
from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.database import get_database
from app.models.habit import (
    Completion,
    CompletionSet,
    Habit,
    HabitCreate,
    HabitUpdate,
    ToggleRequest,
)
from app.models.heatmap import Heatmap, HeatmapWindow
from app.routers.deps import get_today
from app.services.habit_service import HabitService


router = APIRouter(prefix="/habits", tags=["habits"])

NOT_FOUND = "Habit not found"


@router.post("", response_model=Habit, status_code=status.HTTP_201_CREATED)
async def create_habit(
    habit: HabitCreate,
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Create a new habit.

    - Starts with an empty ledger and zeroed counters
    - ``customDays`` is required for custom frequency only
    """
    service = HabitService(db)
    return await service.create_habit(habit_create=habit, today=today)


@router.get("", response_model=list[Habit])
async def list_habits(
    category: Optional[str] = Query(None, description="Filter by category"),
    habit_status: Optional[Literal["pending", "completed"]] = Query(
        None, alias="status", description="Filter by today's state"
    ),
    db=Depends(get_database),
):
    """
    List habits.

    - Optional filters: category, status (pending, completed)
    """
    service = HabitService(db)
    return await service.list_habits(category=category, status=habit_status)


@router.get("/{habit_id}", response_model=Habit)
async def get_habit(habit_id: str, db=Depends(get_database)):
    """
    Get a single habit with its ledger.

    - Returns 404 if habit not found
    """
    service = HabitService(db)
    habit = await service.get_habit(habit_id)
    if habit is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return habit


@router.patch("/{habit_id}", response_model=Habit)
async def update_habit(
    habit_id: str,
    habit_update: HabitUpdate,
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Update a habit's descriptive fields or schedule.

    - Ledger and counters are not editable here
    - Returns 400 for an invalid frequency / customDays combination
    - Returns 404 if habit not found
    """
    service = HabitService(db)
    try:
        habit = await service.update_habit(habit_id, habit_update, today)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if habit is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return habit


@router.delete("/{habit_id}")
async def delete_habit(
    habit_id: str,
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Delete a habit and its ledger.

    - Unknown ids are a no-op (deleted_count 0)
    - Goals linked to the habit become orphaned
    """
    service = HabitService(db)
    return await service.delete_habit(habit_id, today)


@router.put("/{habit_id}/completions/{day}", response_model=Habit)
async def set_completion(
    habit_id: str,
    day: date,
    completion: CompletionSet,
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Record whether the habit was done on a date.

    - Replaces any existing entry for the date (repeat calls are idempotent)
    - Returns the habit with recomputed streak and counters
    - Returns 404 if habit not found
    """
    service = HabitService(db)
    habit = await service.set_completion(habit_id, day, completion, today)
    if habit is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return habit


@router.post("/{habit_id}/toggle", response_model=Habit)
async def toggle_today(
    habit_id: str,
    body: Optional[ToggleRequest] = None,
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Flip today's completion.

    - Optional body ``{"completionTime": "HH:MM"}`` with the caller's clock
    - Returns 404 if habit not found
    """
    service = HabitService(db)
    occurred_at = body.completion_time if body else None
    habit = await service.toggle_today(habit_id, today, occurred_at)
    if habit is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return habit


@router.get("/{habit_id}/completions", response_model=list[Completion])
async def list_completions(habit_id: str, db=Depends(get_database)):
    """
    List a habit's ledger, most recent first.

    - Returns 404 if habit not found
    """
    service = HabitService(db)
    completions = await service.list_completions(habit_id)
    if completions is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return completions


@router.get("/{habit_id}/heatmap", response_model=Heatmap)
async def get_heatmap(
    habit_id: str,
    window: HeatmapWindow = Query(HeatmapWindow.MONTH, description="month, 6months or year"),
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Calendar heatmap of a habit.

    - Weeks run Sunday to Saturday
    - Days after today are placeholders
    - Returns 404 if habit not found
    """
    service = HabitService(db)
    heatmap = await service.get_heatmap(habit_id, window, today)
    if heatmap is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return heatmap
