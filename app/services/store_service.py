"""Key/value store service - JSON-encoded records under string keys."""
import logging
from datetime import date, datetime
from typing import Any, Callable, Optional

from pydantic import TypeAdapter
from pymongo.errors import DuplicateKeyError

from app.config import settings
from app.database import STORE_COLLECTION
from app.models.goal import Goal
from app.models.habit import Habit
from app.models.reminder import Reminder

logger = logging.getLogger(__name__)

HABITS_KEY = "habits"
GOALS_KEY = "habit-goals"
LEGACY_GOALS_KEY = "goals"
REMINDERS_KEY = "habit-reminders"
LAST_RESET_KEY = "lastResetDate"

habits_adapter = TypeAdapter(list[Habit])
goals_adapter = TypeAdapter(list[Goal])
reminders_adapter = TypeAdapter(list[Reminder])
date_adapter = TypeAdapter(Optional[date])


class StaleWriteError(Exception):
    """Raised when a record changed since it was loaded."""

    def __init__(self, key: str):
        super().__init__(f"Record '{key}' was modified by another writer")
        self.key = key


class StoreService:
    """Service for reading and writing persisted records.

    Each record is one document ``{_id: key, value: <json>, version: n}``.
    Writes are last-write-wins unless ``settings.strict_writes`` is on, in
    which case a write carrying an outdated version is rejected.
    """

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.records = db[STORE_COLLECTION]

    async def load(
        self,
        key: str,
        adapter: TypeAdapter,
        default: Callable[[], Any],
    ) -> tuple[Any, int]:
        """
        Load and validate a record.

        Args:
            key: Record key
            adapter: Adapter validating the decoded value
            default: Factory for the value used when the record is missing
                or malformed

        Returns:
            Tuple of (value, version). Version is 0 for a missing record.
        """
        doc = await self.records.find_one({"_id": key})
        if not doc:
            return default(), 0

        version = doc.get("version", 0)
        try:
            return adapter.validate_json(doc["value"]), version
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring malformed record '%s': %s", key, e)
            return default(), version

    async def save(
        self,
        key: str,
        value: Any,
        adapter: TypeAdapter,
        version: Optional[int] = None,
    ) -> None:
        """
        Encode and write a record.

        Args:
            key: Record key
            value: Value to encode
            adapter: Adapter encoding the value
            version: Version the value was loaded at; only checked when
                strict writes are enabled

        Raises:
            StaleWriteError: If strict writes are enabled and the stored
                version moved on
        """
        update_doc = {
            "value": adapter.dump_json(value, by_alias=True).decode("utf-8"),
            "updated_at": datetime.utcnow(),
        }

        if not settings.strict_writes or version is None:
            await self.records.update_one(
                {"_id": key},
                {"$set": update_doc, "$inc": {"version": 1}},
                upsert=True,
            )
            return

        if version == 0:
            try:
                await self.records.insert_one({"_id": key, "version": 1, **update_doc})
            except DuplicateKeyError:
                raise StaleWriteError(key)
            return

        result = await self.records.update_one(
            {"_id": key, "version": version},
            {"$set": update_doc, "$inc": {"version": 1}},
        )
        if result.matched_count == 0:
            raise StaleWriteError(key)

    async def load_habits(self) -> tuple[list[Habit], int]:
        """Load the habit list."""
        return await self.load(HABITS_KEY, habits_adapter, list)

    async def save_habits(self, habits: list[Habit], version: Optional[int] = None) -> None:
        """Write the habit list."""
        await self.save(HABITS_KEY, habits, habits_adapter, version)

    async def load_goals(self) -> tuple[list[Goal], int]:
        """Load the goal list, falling back to the legacy key."""
        goals, version = await self.load(GOALS_KEY, goals_adapter, list)
        if version == 0:
            goals, _ = await self.load(LEGACY_GOALS_KEY, goals_adapter, list)
        return goals, version

    async def save_goals(self, goals: list[Goal], version: Optional[int] = None) -> None:
        """Write the goal list."""
        await self.save(GOALS_KEY, goals, goals_adapter, version)

    async def load_reminders(self) -> tuple[list[Reminder], int]:
        """Load the reminder list."""
        return await self.load(REMINDERS_KEY, reminders_adapter, list)

    async def save_reminders(self, reminders: list[Reminder], version: Optional[int] = None) -> None:
        """Write the reminder list."""
        await self.save(REMINDERS_KEY, reminders, reminders_adapter, version)

    async def load_last_reset(self) -> tuple[Optional[date], int]:
        """Load the date of the last daily rollover."""
        return await self.load(LAST_RESET_KEY, date_adapter, lambda: None)

    async def save_last_reset(self, day: date, version: Optional[int] = None) -> None:
        """Write the date of the last daily rollover."""
        await self.save(LAST_RESET_KEY, day, date_adapter, version)
