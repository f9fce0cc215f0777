"""Export router - CSV and JSON views of the habit list."""
from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.database import get_database
from app.engine.export import json_snapshot, to_csv
from app.routers.deps import get_today
from app.services.habit_service import HabitService
from app.utils.dates import local_now


router = APIRouter(prefix="/export", tags=["export"])


@router.get("/csv")
async def export_csv(today: date = Depends(get_today), db=Depends(get_database)):
    """
    Export one row per habit as CSV.

    - Sent as an attachment named ``habits-export-<date>.csv``
    """
    habits = await HabitService(db).list_habits()
    return Response(
        content=to_csv(habits),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="habits-export-{today.isoformat()}.csv"'
        },
    )


@router.get("/json")
async def export_json(db=Depends(get_database)):
    """Export every habit with its ledger and a summary block."""
    habits = await HabitService(db).list_habits()
    return json_snapshot(habits, local_now())
