"""Analytics router - derived statistics, read only."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.config import settings
from app.database import get_database
from app.models.analytics import (
    Achievement,
    CategoryCount,
    HabitPerformance,
    PeriodCount,
    PersonalRecords,
    RatePoint,
    Summary,
    TimeSlot,
    WeekdayCount,
)
from app.routers.deps import get_today
from app.services.analytics_service import AnalyticsService


router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/summary", response_model=Summary)
async def get_summary(db=Depends(get_database)):
    """Dashboard numbers: habits, done today, rate, best streak, check-ins."""
    return await AnalyticsService(db).summary()


@router.get("/weekly-pattern", response_model=list[WeekdayCount])
async def get_weekly_pattern(db=Depends(get_database)):
    """Lifetime completions per weekday, Sunday first."""
    return await AnalyticsService(db).weekly_pattern()


@router.get("/trend", response_model=list[RatePoint])
async def get_trend(
    weeks: Optional[int] = Query(None, ge=1, le=52, description="Number of 7-day windows"),
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Completion rate per 7-day window ending today.

    - Defaults to the configured number of weeks
    - Windows without entries report 0
    """
    return await AnalyticsService(db).completion_rate_trend(today, weeks or settings.trend_weeks)


@router.get("/time-of-day", response_model=list[TimeSlot])
async def get_time_of_day(db=Depends(get_database)):
    """Completions per 2-hour slot from 6AM; untimed entries are skipped."""
    return await AnalyticsService(db).time_of_day()


@router.get("/categories", response_model=list[CategoryCount])
async def get_categories(db=Depends(get_database)):
    """Habits per category."""
    return await AnalyticsService(db).category_distribution()


@router.get("/performance", response_model=list[HabitPerformance])
async def get_performance(db=Depends(get_database)):
    """Habits ranked by completed days."""
    return await AnalyticsService(db).habit_performance()


@router.get("/weekly", response_model=list[PeriodCount])
async def get_weekly(today: date = Depends(get_today), db=Depends(get_database)):
    """Completions in each of the last 12 calendar weeks."""
    return await AnalyticsService(db).weekly_completions(today)


@router.get("/monthly", response_model=list[PeriodCount])
async def get_monthly(today: date = Depends(get_today), db=Depends(get_database)):
    """Completions in each of the last 6 calendar months."""
    return await AnalyticsService(db).monthly_completions(today)


@router.get("/records", response_model=PersonalRecords)
async def get_records(db=Depends(get_database)):
    """Personal bests."""
    return await AnalyticsService(db).personal_records()


@router.get("/achievements", response_model=list[Achievement])
async def get_achievements(db=Depends(get_database)):
    """Achievement badges and progress."""
    return await AnalyticsService(db).achievements()
