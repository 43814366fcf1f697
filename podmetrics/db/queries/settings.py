"""Persisted operator overrides for runtime settings (app_settings table)."""

import json
from typing import Any

import asyncpg


async def get_setting_overrides(pool: asyncpg.Pool) -> dict[str, Any]:
    rows = await pool.fetch("SELECT key, value FROM app_settings")
    return {row["key"]: json.loads(row["value"]) for row in rows}


async def upsert_setting(pool: asyncpg.Pool, key: str, value: Any) -> None:
    await pool.execute(
        """
        INSERT INTO app_settings (key, value)
        VALUES ($1, $2::jsonb)
        ON CONFLICT (key) DO UPDATE SET value = $2::jsonb, updated_at = NOW()
        """,
        key,
        json.dumps(value),
    )
