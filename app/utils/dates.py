"""Calendar helpers and the local-date policy."""
import calendar
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from app.config import settings


def local_now() -> datetime:
    """
    Current wall-clock time in the configured time zone.

    Returns:
        Aware datetime in ``settings.timezone``
    """
    return datetime.now(ZoneInfo(settings.timezone))


def local_today() -> date:
    """Today's calendar date in the configured time zone."""
    return local_now().date()


def local_time() -> time:
    """Current local wall-clock time, truncated to seconds."""
    return local_now().time().replace(microsecond=0, tzinfo=None)


def shift_months(day: date, months: int) -> date:
    """
    Move a date by whole calendar months, clamping the day of month.

    Args:
        day: Starting date
        months: Number of months to move (negative goes back)

    Returns:
        Shifted date

    Examples:
        >>> shift_months(date(2026, 3, 31), -1)
        datetime.date(2026, 2, 28)
        >>> shift_months(date(2024, 2, 29), -12)
        datetime.date(2023, 2, 28)
    """
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def start_of_week(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def end_of_week(day: date) -> date:
    """Saturday on or after ``day``."""
    return start_of_week(day) + timedelta(days=6)


def end_of_month(day: date) -> date:
    """Last day of the month containing ``day``."""
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])
