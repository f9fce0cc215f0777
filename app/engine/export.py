"""CSV and JSON export views of the habit list."""
import csv
import io
import math
from datetime import datetime

from app.models.habit import Habit
from app.utils.rates import percent

CSV_HEADERS = [
    "Habit Name",
    "Category",
    "Description",
    "Current Streak",
    "Total Days",
    "Completed Days",
    "Completion Rate",
]


def csv_rows(habits: list[Habit]) -> list[list[str]]:
    """One row per habit, header first."""
    rows = [CSV_HEADERS]
    for habit in habits:
        rows.append([
            habit.name,
            habit.category,
            habit.description,
            str(habit.streak),
            str(habit.total_days),
            str(habit.completed_days),
            f"{percent(habit.completed_days, habit.total_days)}%",
        ])
    return rows


def to_csv(habits: list[Habit]) -> str:
    """Render the export rows with every field quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(csv_rows(habits))
    return buffer.getvalue()


def json_snapshot(habits: list[Habit], exported_at: datetime) -> dict:
    """
    Full habit snapshot with a summary block.

    The average completion rate is the mean of per-habit rates, where a
    habit with no tracked days counts as 0.
    """
    if habits:
        mean = sum(h.completed_days / h.total_days if h.total_days else 0 for h in habits) / len(habits)
        average = math.floor(mean * 100 + 0.5)
    else:
        average = 0

    return {
        "exportDate": exported_at.isoformat(),
        "habits": [h.model_dump(mode="json", by_alias=True) for h in habits],
        "summary": {
            "totalHabits": len(habits),
            "totalCompletions": sum(h.completed_days for h in habits),
            "averageCompletionRate": average,
        },
    }
