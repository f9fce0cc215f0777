"""Shared router dependencies."""
from datetime import date
from typing import Optional

from fastapi import Query

from app.utils.dates import local_today


async def get_today(
    today: Optional[date] = Query(None, description="Caller's local date (YYYY-MM-DD)"),
) -> date:
    """
    Dependency resolving the caller's "today".

    Clients pass their own local date; without one the service's configured
    time zone decides.
    """
    return today or local_today()
