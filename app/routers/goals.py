"""Goal router - API endpoints for goal management."""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status

from app.database import get_database
from app.models.goal import Goal, GoalCreate, GoalProgressUpdate, GoalUpdate
from app.routers.deps import get_today
from app.services.goal_service import GoalService


router = APIRouter(prefix="/goals", tags=["goals"])

NOT_FOUND = "Goal not found"


@router.post("", response_model=Goal, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal: GoalCreate,
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Create a new goal.

    - Free-standing, or linked to a habit through ``habitId``
    - Returns 400 if the linked habit does not exist
    """
    service = GoalService(db)
    try:
        return await service.create_goal(goal_create=goal, today=today)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[Goal])
async def list_goals(today: date = Depends(get_today), db=Depends(get_database)):
    """
    List goals with progress computed for today.

    - Goals whose habit was deleted are returned with ``orphaned`` set
    """
    service = GoalService(db)
    return await service.list_goals(today=today)


@router.get("/{goal_id}", response_model=Goal)
async def get_goal(
    goal_id: str,
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Get a single goal.

    - Returns 404 if goal not found
    """
    service = GoalService(db)
    goal = await service.get_goal(goal_id, today)
    if goal is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return goal


@router.patch("/{goal_id}", response_model=Goal)
async def update_goal(
    goal_id: str,
    goal_update: GoalUpdate,
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Update a goal.

    - The linked habit cannot be changed, only cleared with ``habitId: null``
    - Returns 404 if goal not found
    """
    service = GoalService(db)
    goal = await service.update_goal(goal_id, goal_update, today)
    if goal is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return goal


@router.post("/{goal_id}/progress", response_model=Goal)
async def add_progress(
    goal_id: str,
    progress: GoalProgressUpdate,
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Add manual progress to a free-standing goal.

    - Returns 400 for habit-linked goals
    - Returns 404 if goal not found
    """
    service = GoalService(db)
    try:
        goal = await service.add_progress(goal_id, progress.amount, today)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if goal is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return goal


@router.delete("/{goal_id}")
async def delete_goal(goal_id: str, db=Depends(get_database)):
    """
    Delete a goal.

    - Unknown ids are a no-op (deleted_count 0)
    """
    service = GoalService(db)
    return await service.delete_goal(goal_id)
