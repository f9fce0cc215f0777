"""One-time import script: Load a browser localStorage dump into MongoDB.

The dump is a JSON object mapping localStorage keys to their values, either
as the stored JSON strings or already decoded.

Usage:
    python scripts/import_local_storage.py \\
        --source /path/to/localStorage.json \\
        --mongodb-url mongodb://localhost:27017
"""
import argparse
import asyncio
import json
import sys
from datetime import date
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from motor.motor_asyncio import AsyncIOMotorClient
from pydantic import ValidationError
from app.engine.goals import refresh_goals
from app.engine.ledger import recompute
from app.services.store_service import (
    GOALS_KEY,
    HABITS_KEY,
    LAST_RESET_KEY,
    LEGACY_GOALS_KEY,
    REMINDERS_KEY,
    StoreService,
    date_adapter,
    goals_adapter,
    habits_adapter,
    reminders_adapter,
)
from app.utils.dates import local_today


class LocalStorageImporter:
    """Imports localStorage records into the key/value store."""

    def __init__(
        self,
        source_path: Path,
        mongodb_url: str,
        db_name: str,
        today: date,
        dry_run: bool = False,
    ):
        """Initialize importer.

        Args:
            source_path: Path to the JSON dump
            mongodb_url: MongoDB connection URL
            db_name: Database to write into
            today: Date used to re-derive streaks and goal progress
            dry_run: If True, validate only and write nothing
        """
        self.source_path = source_path
        self.mongodb_url = mongodb_url
        self.db_name = db_name
        self.today = today
        self.dry_run = dry_run
        self.client: Optional[AsyncIOMotorClient] = None
        self.store: Optional[StoreService] = None

        # Stats
        self.stats = {"imported": [], "skipped": [], "failed": []}

    async def connect(self):
        """Connect to MongoDB."""
        self.client = AsyncIOMotorClient(self.mongodb_url)
        self.store = StoreService(self.client[self.db_name])
        print(f"Connected to MongoDB: {self.db_name}")

    async def close(self):
        """Close MongoDB connection."""
        if self.client:
            self.client.close()
            print("Closed MongoDB connection")

    def read_dump(self) -> dict:
        """Read the dump and normalize every value to a JSON string."""
        data = json.loads(self.source_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Dump must be a JSON object of localStorage keys")
        return {
            key: value if isinstance(value, str) else json.dumps(value)
            for key, value in data.items()
        }

    def parse(self, raw: dict, key: str, adapter, default):
        """Validate one record, recording failures instead of raising."""
        if key not in raw:
            self.stats["skipped"].append(key)
            return default
        try:
            value = adapter.validate_json(raw[key])
        except ValidationError as e:
            print(f"  ✗ {key}: {e.error_count()} validation errors")
            self.stats["failed"].append(key)
            return default
        print(f"  ✓ {key}")
        self.stats["imported"].append(key)
        return value

    async def run(self):
        """Run the import."""
        print(f"Starting import from {self.source_path}")
        raw = self.read_dump()

        habits = self.parse(raw, HABITS_KEY, habits_adapter, [])
        goal_key = GOALS_KEY if GOALS_KEY in raw else LEGACY_GOALS_KEY
        goals = self.parse(raw, goal_key, goals_adapter, [])
        reminders = self.parse(raw, REMINDERS_KEY, reminders_adapter, [])
        last_reset = self.parse(raw, LAST_RESET_KEY, date_adapter, None)

        # Cached counters in old dumps were patched incrementally
        for habit in habits:
            recompute(habit, self.today)
        refresh_goals(goals, habits, self.today)

        if self.dry_run:
            print("\nDry run - nothing written")
        else:
            await self.connect()
            try:
                await self.store.save_habits(habits)
                await self.store.save_goals(goals)
                await self.store.save_reminders(reminders)
                if last_reset is not None:
                    await self.store.save_last_reset(last_reset)
            finally:
                await self.close()

        print("\n=== Import Summary ===")
        print(f"Habits: {len(habits)}")
        print(f"Goals: {len(goals)}")
        print(f"Reminders: {len(reminders)}")
        for status, keys in self.stats.items():
            print(f"{status.capitalize()}: {', '.join(keys) or '-'}")


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Import a localStorage dump into MongoDB")
    parser.add_argument(
        "--source",
        required=True,
        help="Path to the localStorage JSON dump",
    )
    parser.add_argument(
        "--mongodb-url",
        default="mongodb://localhost:27017",
        help="MongoDB connection URL",
    )
    parser.add_argument(
        "--db-name",
        default="habit_tracker",
        help="Database name",
    )
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Date used to recompute streaks (defaults to the local date)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the dump without writing",
    )

    args = parser.parse_args()

    source_path = Path(args.source)
    if not source_path.exists():
        print(f"Error: Source path does not exist: {source_path}")
        sys.exit(1)

    importer = LocalStorageImporter(
        source_path=source_path,
        mongodb_url=args.mongodb_url,
        db_name=args.db_name,
        today=args.today or local_today(),
        dry_run=args.dry_run,
    )

    await importer.run()


if __name__ == "__main__":
    asyncio.run(main())
