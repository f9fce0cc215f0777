"""Goal service - business logic for goal management."""
import logging
from datetime import date, datetime
from typing import Optional

from bson import ObjectId

from app.engine.goals import refresh_goal, refresh_goals
from app.models.goal import Goal, GoalCreate, GoalUpdate
from app.models.habit import Habit
from app.services.store_service import StoreService

logger = logging.getLogger(__name__)


class GoalService:
    """Service for handling goal operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.store = StoreService(db)

    async def _load(self, today: date) -> tuple[list[Goal], int, list[Habit]]:
        """Load goals refreshed against the current habits."""
        goals, version = await self.store.load_goals()
        habits, _ = await self.store.load_habits()
        refresh_goals(goals, habits, today)
        return goals, version, habits

    @staticmethod
    def _find(goals: list[Goal], goal_id: str) -> Optional[Goal]:
        return next((g for g in goals if g.id == goal_id), None)

    async def create_goal(self, goal_create: GoalCreate, today: date) -> Goal:
        """
        Create a new goal.

        Args:
            goal_create: Goal creation data
            today: Caller's local date

        Returns:
            Created goal with its initial progress

        Raises:
            ValueError: If the linked habit does not exist
        """
        goals, version, habits = await self._load(today)
        by_id = {h.id: h for h in habits}

        if goal_create.habit_id is not None and goal_create.habit_id not in by_id:
            raise ValueError("Habit not found")

        goal = Goal(
            id=str(ObjectId()),
            created_at=datetime.utcnow(),
            **goal_create.model_dump(),
        )
        refresh_goal(goal, by_id, today)
        goals.append(goal)

        await self.store.save_goals(goals, version)
        logger.info("Created goal %s (%s)", goal.id, goal.title)
        return goal

    async def list_goals(self, today: date) -> list[Goal]:
        """List goals with progress computed for ``today``."""
        goals, _, _ = await self._load(today)
        return goals

    async def get_goal(self, goal_id: str, today: date) -> Optional[Goal]:
        """Get a single goal by id, or None."""
        goals, _, _ = await self._load(today)
        return self._find(goals, goal_id)

    async def update_goal(
        self,
        goal_id: str,
        goal_update: GoalUpdate,
        today: date,
    ) -> Optional[Goal]:
        """
        Update a goal.

        Args:
            goal_id: Goal id
            goal_update: Update data
            today: Caller's local date

        Returns:
            Updated goal, or None if the id is unknown
        """
        goals, version, habits = await self._load(today)
        goal = self._find(goals, goal_id)
        if goal is None:
            return None

        changes = goal_update.model_dump(exclude_unset=True)
        if "habit_id" in changes and goal.habit_id is not None:
            goal.current_value = goal.progress
            goal.habit_id = None
            goal.habit_name = None

        for field, value in changes.items():
            if field == "habit_id":
                continue
            if value is not None or field == "deadline":
                setattr(goal, field, value)

        refresh_goal(goal, {h.id: h for h in habits}, today)
        await self.store.save_goals(goals, version)
        return goal

    async def add_progress(self, goal_id: str, amount: int, today: date) -> Optional[Goal]:
        """
        Change the manual progress of a free-standing goal.

        Args:
            goal_id: Goal id
            amount: Value to add (negative to subtract, floored at 0)
            today: Caller's local date

        Returns:
            Updated goal, or None if the id is unknown

        Raises:
            ValueError: If the goal takes its progress from a habit that
                still exists
        """
        goals, version, habits = await self._load(today)
        goal = self._find(goals, goal_id)
        if goal is None:
            return None

        if goal.habit_id is not None and not goal.orphaned:
            raise ValueError("Progress of a habit-linked goal comes from its habit")

        goal.current_value = max(0, goal.current_value + amount)
        refresh_goal(goal, {h.id: h for h in habits}, today)
        await self.store.save_goals(goals, version)
        return goal

    async def delete_goal(self, goal_id: str) -> dict:
        """
        Delete a goal.

        Returns:
            Dictionary with deleted_count
        """
        goals, version = await self.store.load_goals()
        remaining = [g for g in goals if g.id != goal_id]
        deleted = len(goals) - len(remaining)

        if deleted:
            await self.store.save_goals(remaining, version)

        return {"deleted_count": deleted}

    async def refresh_all(self, habits: list[Habit], today: date) -> list[Goal]:
        """
        Recompute every goal after the habit set or a ledger changed.

        Args:
            habits: Habits as just written
            today: Caller's local date

        Returns:
            Refreshed goals
        """
        goals, version = await self.store.load_goals()
        if not goals:
            return goals

        refresh_goals(goals, habits, today)
        await self.store.save_goals(goals, version)
        return goals
