"""Calendar heatmap of one habit's ledger."""
from datetime import date, timedelta

from app.engine.streak import completed_dates
from app.models.habit import Habit
from app.models.heatmap import Heatmap, HeatmapCell, HeatmapWindow
from app.utils.dates import end_of_month, end_of_week, shift_months, start_of_week


def window_bounds(window: HeatmapWindow, today: date) -> tuple[date, date]:
    """
    First and last day covered by a heatmap window, before snapping to weeks.

    ``month`` covers the whole current month, so days after today show as
    placeholders. The longer windows end today.
    """
    if window == HeatmapWindow.MONTH:
        return today.replace(day=1), end_of_month(today)
    if window == HeatmapWindow.SIX_MONTHS:
        return shift_months(today, -6), today
    return shift_months(today, -12), today


def generate_heatmap(habit: Habit, window: HeatmapWindow, today: date) -> Heatmap:
    """
    Build a weeks x 7 grid for ``habit`` over ``window``.

    The grid starts on the Sunday on or before the window start and ends on
    the Saturday closing the window. Intensity is binary: 1 for a completed
    day, 0 otherwise. The result depends only on the ledger and ``today``.

    Args:
        habit: Habit to render
        window: Requested window
        today: Caller's local date

    Returns:
        Heatmap with one list of 7 cells per week
    """
    window_start, window_end = window_bounds(window, today)
    start = start_of_week(window_start)
    end = end_of_week(window_end)
    done = completed_dates(habit.completions)

    weeks: list[list[HeatmapCell]] = []
    tracked = completed = 0
    day = start
    while day <= end:
        if day > today:
            cell = HeatmapCell(day=day, in_range=False)
        else:
            is_done = day in done
            cell = HeatmapCell(
                day=day,
                in_range=True,
                is_today=day == today,
                completed=is_done,
                intensity=1 if is_done else 0,
            )
            tracked += 1
            completed += is_done

        if not weeks or len(weeks[-1]) == 7:
            weeks.append([])
        weeks[-1].append(cell)
        day += timedelta(days=1)

    return Heatmap(
        habit_id=habit.id,
        window=window,
        start=start,
        end=end,
        weeks=weeks,
        tracked_days=tracked,
        completed_days=completed,
    )
