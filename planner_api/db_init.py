from __future__ import annotations

import logging

from sqlalchemy import text as sql_text

from planner_api.db import get_engine

logger = logging.getLogger(__name__)

ITEMS_TABLE = "calendar_items"


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {ITEMS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    event_name TEXT NOT NULL,
                    "Description" TEXT,
                    start_datetime TEXT NOT NULL,
                    end_datetime TEXT NOT NULL,
                    start_utc TEXT NOT NULL,
                    end_utc TEXT NOT NULL,
                    importance TEXT DEFAULT 'NONE',
                    is_task INTEGER DEFAULT 0,
                    complete INTEGER DEFAULT 0,
                    archived INTEGER DEFAULT 0,
                    created_at TEXT NOT NULL,
                    updated_at TEXT
                )
                """
            )
        )

    async def ensure_index(index_sql: str) -> None:
        try:
            async with engine.begin() as conn:
                await conn.execute(sql_text(index_sql))
        except Exception as exc:
            logger.warning("Index creation skipped: %s", exc)

    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{ITEMS_TABLE}_user_start "
        f"ON {ITEMS_TABLE} (user_id, archived, start_utc)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{ITEMS_TABLE}_user_task "
        f"ON {ITEMS_TABLE} (user_id, is_task, archived)"
    )
