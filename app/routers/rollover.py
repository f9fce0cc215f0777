"""Rollover router - daily reset triggered by a starting client."""
from datetime import date

from fastapi import APIRouter, Depends

from app.database import get_database
from app.models.habit import RolloverResult
from app.routers.deps import get_today
from app.services.rollover_service import RolloverService


router = APIRouter(prefix="/rollover", tags=["rollover"])


@router.post("", response_model=RolloverResult)
async def run_rollover(today: date = Depends(get_today), db=Depends(get_database)):
    """
    Run the daily rollover for the caller's date.

    - Clears "completed today" on daily habits once per date
    - Calling again on the same date changes nothing
    """
    return await RolloverService(db).run(today)
