"""Tests for the completion ledger."""
from datetime import date, time, timedelta

from app.engine.ledger import recompute, set_completion, sorted_completions, toggle_today
from app.engine.rollover import apply_rollover
from app.engine.streak import compute_streak
from app.models.habit import Completion, Habit

TODAY = date(2026, 10, 19)


def make_habit(**kwargs) -> Habit:
    return Habit(id="h1", name="Exercise", **kwargs)


class TestSetCompletion:
    """Tests for set_completion."""

    def test_first_completion(self):
        """Test recording the first completion of a habit."""
        habit = make_habit()

        set_completion(habit, TODAY, True, TODAY)

        assert habit.streak == 1
        assert habit.completed_days == 1
        assert habit.total_days == 1
        assert habit.completed_today is True

    def test_repeat_call_is_idempotent(self):
        """Test that setting the same day twice does not accumulate."""
        habit = make_habit()

        set_completion(habit, TODAY, True, TODAY)
        set_completion(habit, TODAY, True, TODAY)

        assert len(habit.completions) == 1
        assert habit.completed_days == 1
        assert habit.total_days == 1
        assert habit.streak == 1

    def test_last_call_wins(self):
        """Test that completing then un-completing leaves it not completed."""
        habit = make_habit()

        set_completion(habit, TODAY, True, TODAY)
        set_completion(habit, TODAY, False, TODAY)

        assert len(habit.completions) == 1
        assert habit.completions[0].completed is False
        assert habit.completed_days == 0
        assert habit.total_days == 1
        assert habit.completed_today is False

    def test_uncompleting_today_shrinks_streak(self):
        """Test that removing today's completion re-walks the streak."""
        habit = make_habit()
        for offset in range(3, -1, -1):
            day = TODAY - timedelta(days=offset)
            set_completion(habit, day, True, TODAY)
        assert habit.streak == 4

        set_completion(habit, TODAY, False, TODAY)

        assert habit.streak == 0
        assert habit.completed_days == 3
        assert habit.total_days == 4

    def test_uncompleting_past_day_splits_streak(self):
        """Test that un-completing yesterday cuts the streak to today only."""
        habit = make_habit()
        for offset in range(3):
            set_completion(habit, TODAY - timedelta(days=offset), True, TODAY)

        set_completion(habit, TODAY - timedelta(days=1), False, TODAY)

        assert habit.streak == 1

    def test_total_days_never_decreases(self):
        """Test that a higher stored total_days is kept."""
        habit = make_habit(total_days=14, completed_days=2)

        set_completion(habit, TODAY, True, TODAY)

        assert habit.total_days == 14
        assert habit.completed_days == 1

    def test_completion_time_kept_only_when_completed(self):
        """Test that the time is set on completion and cleared on undo."""
        habit = make_habit()

        set_completion(habit, TODAY, True, TODAY, occurred_at=time(7, 30))
        assert habit.completions[0].completion_time == time(7, 30)

        set_completion(habit, TODAY, False, TODAY, occurred_at=time(8, 0))
        assert habit.completions[0].completion_time is None

    def test_note_kept_when_not_given(self):
        """Test that a later call without a note keeps the earlier note."""
        habit = make_habit()

        set_completion(habit, TODAY, True, TODAY, note="Felt great")
        set_completion(habit, TODAY, True, TODAY)
        assert habit.completions[0].note == "Felt great"

        set_completion(habit, TODAY, True, TODAY, note="Updated")
        assert habit.completions[0].note == "Updated"

    def test_past_day_does_not_set_completed_today(self):
        """Test that completing yesterday leaves today untouched."""
        habit = make_habit()

        set_completion(habit, TODAY - timedelta(days=1), True, TODAY)

        assert habit.completed_today is False
        assert habit.streak == 0
        assert habit.completed_days == 1


class TestRecompute:
    """Tests for recompute."""

    def test_fixes_incrementally_patched_counters(self):
        """Test that stale cached counters are rebuilt from the ledger."""
        habit = make_habit(streak=12, completed_days=18, total_days=3, completed_today=True)
        habit.completions = [
            Completion(day=TODAY - timedelta(days=1), completed=True),
            Completion(day=TODAY - timedelta(days=2), completed=True),
        ]

        recompute(habit, TODAY)

        assert habit.streak == 0
        assert habit.completed_days == 2
        assert habit.total_days == 3
        assert habit.completed_today is False


class TestToggleToday:
    """Tests for toggle_today."""

    def test_toggle_twice_returns_to_start(self):
        """Test toggling on then off."""
        habit = make_habit()

        toggle_today(habit, TODAY, occurred_at=time(9, 0))
        assert habit.completed_today is True
        assert habit.completions[0].completion_time == time(9, 0)

        toggle_today(habit, TODAY)
        assert habit.completed_today is False
        assert habit.completed_days == 0


class TestSortedCompletions:
    """Tests for sorted_completions."""

    def test_most_recent_first(self):
        """Test ordering of the ledger listing."""
        habit = make_habit()
        for offset in (2, 0, 1):
            set_completion(habit, TODAY - timedelta(days=offset), True, TODAY)

        days = [c.day for c in sorted_completions(habit)]

        assert days == [TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=2)]


class TestExerciseScenario:
    """Walk through three days of a daily habit."""

    def test_three_day_scenario(self):
        """Test completion, rollover and a skipped day."""
        day1 = date(2026, 10, 19)
        day2 = day1 + timedelta(days=1)
        day3 = day2 + timedelta(days=1)
        habit = make_habit(frequency="daily")

        set_completion(habit, day1, True, day1)
        assert (habit.streak, habit.completed_days, habit.total_days) == (1, 1, 1)

        apply_rollover([habit], day1, day2)
        assert habit.completed_today is False
        assert habit.streak == 1

        set_completion(habit, day2, True, day2)
        assert habit.streak == 2

        apply_rollover([habit], day2, day3)
        assert habit.completed_today is False
        assert compute_streak(habit.completions, day3) == 0
