"""SQLite storage for sport events."""

import logging
from pathlib import Path
from typing import Any

import aiosqlite

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".sportevents" / "sportevents.db"

SCHEMA_VERSION = 1

SCHEMA = """
CREATE TABLE IF NOT EXISTS sport_events (
    id TEXT PRIMARY KEY,
    sport_type TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'INACTIVE',
    start_time TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_sport_events_status_sport
    ON sport_events (status, sport_type);
"""


class Database:
    """Async SQLite connection owned by whoever opens it.

    The app lifespan and each CLI command open their own instance:

        async with Database(path) as db:
            repo = SportEventRepository(db)
    """

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self._connection: aiosqlite.Connection | None = None

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.disconnect()

    async def connect(self) -> None:
        """Open the connection and bring the schema up to date."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self.db_path)
        self._connection.row_factory = aiosqlite.Row

        await self._connection.execute("PRAGMA journal_mode = WAL")
        await self._connection.execute("PRAGMA busy_timeout = 5000")

        try:
            await self._ensure_schema()
        except Exception:
            await self.disconnect()
            raise
        logger.info(f"Connected to database: {self.db_path}")

    async def disconnect(self) -> None:
        """Close the connection if it is open."""
        if self._connection:
            await self._connection.close()
            self._connection = None
            logger.info("Database connection closed")

    @property
    def connection(self) -> aiosqlite.Connection:
        if not self._connection:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    async def execute(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> aiosqlite.Cursor:
        return await self.connection.execute(query, params or ())

    async def fetchone(self, query: str, params: tuple[Any, ...] | None = None) -> aiosqlite.Row | None:
        cursor = await self.execute(query, params)
        return await cursor.fetchone()

    async def fetchall(self, query: str, params: tuple[Any, ...] | None = None) -> list[aiosqlite.Row]:
        cursor = await self.execute(query, params)
        return list(await cursor.fetchall())

    async def commit(self) -> None:
        await self.connection.commit()

    async def schema_version(self) -> int:
        """Schema version recorded in the SQLite header (0 = empty file)."""
        row = await self.fetchone("PRAGMA user_version")
        return row[0] if row else 0

    async def _ensure_schema(self) -> None:
        version = await self.schema_version()
        if version > SCHEMA_VERSION:
            raise RuntimeError(
                f"Database {self.db_path} has schema version {version}, "
                f"newer than supported version {SCHEMA_VERSION}"
            )
        if version == SCHEMA_VERSION:
            return

        logger.info(f"Creating sport_events schema (version {SCHEMA_VERSION})")
        await self.connection.executescript(SCHEMA)
        await self.connection.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        await self.commit()
