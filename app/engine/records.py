"""Personal records and achievement badges."""
from app.engine.streak import longest_streak
from app.models.analytics import Achievement, PersonalRecords, Record
from app.models.habit import Habit
from app.utils.rates import percent

NO_HABIT = "None"


def _best(habits: list[Habit], value) -> Record:
    best = Record(value=0, habit_name=NO_HABIT)
    for habit in habits:
        score = value(habit)
        # Strictly greater so the first habit wins a tie
        if score > best.value:
            best = Record(value=score, habit_name=habit.name)
    return best


def personal_records(habits: list[Habit]) -> PersonalRecords:
    """Bests across all habits; zero values name no habit."""
    return PersonalRecords(
        longest_streak=_best(habits, lambda h: h.streak),
        longest_run=_best(habits, lambda h: longest_streak(h.completions)),
        most_completed=_best(habits, lambda h: h.completed_days),
        best_completion_rate=_best(habits, lambda h: percent(h.completed_days, h.total_days)),
        total_days_tracked=sum(h.total_days for h in habits),
    )


def achievements(habits: list[Habit]) -> list[Achievement]:
    """Badge list with unlock state and progress toward each target."""
    total_habits = len(habits)
    total_completions = sum(h.completed_days for h in habits)
    max_streak = max((h.streak for h in habits), default=0)
    perfect = sum(1 for h in habits if h.total_days > 0 and h.completed_days == h.total_days)

    return [
        Achievement(
            id="first-habit",
            title="Getting Started",
            description="Create your first habit",
            unlocked=total_habits >= 1,
        ),
        Achievement(
            id="habit-collector",
            title="Habit Collector",
            description="Create 5 habits",
            unlocked=total_habits >= 5,
            progress=min(total_habits, 5),
            target=5,
        ),
        Achievement(
            id="week-warrior",
            title="Week Warrior",
            description="Maintain a 7-day streak",
            unlocked=max_streak >= 7,
            progress=min(max_streak, 7),
            target=7,
        ),
        Achievement(
            id="consistency-king",
            title="Consistency King",
            description="Maintain a 30-day streak",
            unlocked=max_streak >= 30,
            progress=min(max_streak, 30),
            target=30,
        ),
        Achievement(
            id="century-club",
            title="Century Club",
            description="Complete 100 habits total",
            unlocked=total_completions >= 100,
            progress=min(total_completions, 100),
            target=100,
        ),
        Achievement(
            id="perfectionist",
            title="Perfectionist",
            description="Have 3 habits with 100% completion",
            unlocked=perfect >= 3,
            progress=min(perfect, 3),
            target=3,
        ),
    ]
