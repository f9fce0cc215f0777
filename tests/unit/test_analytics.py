"""Tests for the analytics folds."""
from datetime import date, time, timedelta

from app.engine.analytics import (
    UNCATEGORIZED,
    category_distribution,
    completion_rate_trend,
    habit_performance,
    monthly_completions,
    summary,
    time_of_day,
    weekly_completions,
    weekly_pattern,
)
from app.models.habit import Completion, Habit

TODAY = date(2026, 10, 19)  # Monday


def make_habit(habit_id: str, entries=(), **kwargs) -> Habit:
    habit = Habit(id=habit_id, name=kwargs.pop("name", habit_id), **kwargs)
    for day, completed, *clock in entries:
        habit.completions.append(
            Completion(day=day, completed=completed, completion_time=clock[0] if clock else None)
        )
    return habit


class TestWeeklyPattern:
    """Tests for weekly_pattern."""

    def test_counts_per_weekday_sunday_first(self):
        """Test weekday bucketing and ordering."""
        habits = [
            make_habit("a", [(date(2026, 10, 18), True), (date(2026, 10, 19), True)]),
            make_habit("b", [(date(2026, 10, 19), True), (date(2026, 10, 20), False)]),
        ]

        pattern = weekly_pattern(habits)

        assert [p.day for p in pattern] == [
            "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
        ]
        assert pattern[0].completions == 1
        assert pattern[1].completions == 2
        assert pattern[2].completions == 0

    def test_total_equals_completed_entries(self):
        """Test that the pattern sums to all completed entries."""
        habits = [
            make_habit("a", [(TODAY - timedelta(days=i), i % 3 != 0) for i in range(40)]),
            make_habit("b", [(TODAY - timedelta(days=i), True) for i in range(0, 60, 2)]),
        ]
        completed = sum(1 for h in habits for c in h.completions if c.completed)

        assert sum(p.completions for p in weekly_pattern(habits)) == completed

    def test_empty(self):
        """Test no habits at all."""
        assert all(p.completions == 0 for p in weekly_pattern([]))


class TestCompletionRateTrend:
    """Tests for completion_rate_trend."""

    def test_windows_end_today(self):
        """Test the window bounds and ordering."""
        trend = completion_rate_trend([], TODAY, weeks=12)

        assert len(trend) == 12
        assert trend[-1].end == TODAY
        assert trend[-1].start == TODAY - timedelta(days=6)
        assert trend[0].end == TODAY - timedelta(days=77)
        assert trend[0].label == "Week 1"
        assert trend[-1].label == "Week 12"

    def test_empty_window_rate_is_zero(self):
        """Test the division-by-zero guard."""
        trend = completion_rate_trend([make_habit("a")], TODAY, weeks=6)

        assert len(trend) == 6
        assert all(p.rate == 0 and p.total == 0 for p in trend)

    def test_rate_rounds_half_up(self):
        """Test rate = completed / observed entries in the window."""
        entries = [(TODAY - timedelta(days=i), i < 5) for i in range(7)]
        entries.append((TODAY - timedelta(days=7), True))  # previous window
        habits = [make_habit("a", entries), make_habit("b", [(TODAY, False)])]

        trend = completion_rate_trend(habits, TODAY, weeks=2)

        assert (trend[-1].completed, trend[-1].total, trend[-1].rate) == (5, 8, 63)
        assert (trend[0].completed, trend[0].total, trend[0].rate) == (1, 1, 100)


class TestTimeOfDay:
    """Tests for time_of_day."""

    def test_buckets_and_exclusions(self):
        """Test slot placement and skipped entries."""
        habit = make_habit(
            "a",
            [
                (TODAY, True, time(7, 45)),
                (TODAY - timedelta(days=1), True, time(6, 0)),
                (TODAY - timedelta(days=2), True, time(23, 59)),
                (TODAY - timedelta(days=3), True, time(12, 30)),
                (TODAY - timedelta(days=4), True),  # no time
                (TODAY - timedelta(days=5), True, time(5, 59)),  # before 6AM
                (TODAY - timedelta(days=6), False, time(9, 0)),  # not completed
            ],
        )

        slots = time_of_day([habit])

        assert len(slots) == 9
        assert [s.label for s in slots] == [
            "6AM", "8AM", "10AM", "12PM", "2PM", "4PM", "6PM", "8PM", "10PM",
        ]
        assert slots[0].completions == 2
        assert slots[3].completions == 1
        assert slots[8].completions == 1
        assert (slots[8].start_hour, slots[8].end_hour) == (22, 24)
        assert sum(s.completions for s in slots) == 4
        assert slots[0].share == 50

    def test_no_timed_entries(self):
        """Test that shares stay 0 without timed entries."""
        slots = time_of_day([make_habit("a", [(TODAY, True)])])

        assert all(s.completions == 0 and s.share == 0 for s in slots)


class TestCategoryDistribution:
    """Tests for category_distribution."""

    def test_counts_and_default_bucket(self):
        """Test counting with blank categories grouped."""
        habits = [
            make_habit("a", category="Health"),
            make_habit("b", category="Personal"),
            make_habit("c", category="Health"),
            make_habit("d"),
            make_habit("e", category="  "),
        ]

        result = {c.category: c.count for c in category_distribution(habits)}

        assert result == {"Health": 2, "Personal": 1, UNCATEGORIZED: 2}


class TestHabitPerformance:
    """Tests for habit_performance."""

    def test_sorted_descending_and_stable(self):
        """Test ordering by completed days with stable ties."""
        habits = [
            make_habit("a", completed_days=5, total_days=10),
            make_habit("b", completed_days=8, total_days=8),
            make_habit("c", completed_days=5, total_days=20),
            make_habit("d", completed_days=0, total_days=0),
        ]

        ranking = habit_performance(habits)

        assert [p.habit_id for p in ranking] == ["b", "a", "c", "d"]
        assert [p.rate for p in ranking] == [100, 50, 25, 0]


class TestPeriodCounts:
    """Tests for weekly_completions and monthly_completions."""

    def test_weekly_calendar_weeks(self):
        """Test Sunday-to-Saturday weeks ending with the current one."""
        habit = make_habit(
            "a",
            [(date(2026, 10, 18), True), (date(2026, 10, 17), True), (date(2026, 10, 19), False)],
        )

        weeks = weekly_completions([habit], TODAY)

        assert len(weeks) == 12
        assert weeks[-1].start == date(2026, 10, 18)
        assert weeks[-1].end == date(2026, 10, 24)
        assert weeks[-1].completions == 1
        assert weeks[-2].completions == 1

    def test_monthly_labels_and_counts(self):
        """Test six calendar months ending with the current one."""
        habit = make_habit("a", [(date(2026, 10, 1), True), (date(2026, 5, 31), True)])

        months = monthly_completions([habit], TODAY)

        assert [m.label for m in months] == [
            "May 2026", "Jun 2026", "Jul 2026", "Aug 2026", "Sep 2026", "Oct 2026",
        ]
        assert months[0].completions == 1
        assert months[0].end == date(2026, 5, 31)
        assert months[-1].completions == 1


class TestSummary:
    """Tests for summary."""

    def test_summary_numbers(self):
        """Test dashboard headline numbers."""
        habits = [
            make_habit("a", completed_today=True, streak=7, completed_days=23),
            make_habit("b", streak=12, completed_days=18),
            make_habit("c", completed_today=True, streak=5, completed_days=20),
        ]

        result = summary(habits)

        assert result.total_habits == 3
        assert result.completed_today == 2
        assert result.completion_rate == 67
        assert result.best_streak == 12
        assert result.total_check_ins == 61

    def test_summary_empty(self):
        """Test summary without habits."""
        result = summary([])

        assert result.completion_rate == 0
        assert result.best_streak == 0
