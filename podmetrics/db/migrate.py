"""Apply the schema files under db/migrations/ in name order, once each."""

import asyncio
import glob
import os

import asyncpg
import structlog

from podmetrics.config.settings import get_settings

log = structlog.get_logger()

MIGRATION_DIR = os.path.join(os.path.dirname(__file__), "migrations")


async def apply_migrations(pool: asyncpg.Pool, migration_dir: str = MIGRATION_DIR) -> list[str]:
    """Apply pending migrations. Returns the names applied by this call."""
    await pool.execute("""
        CREATE TABLE IF NOT EXISTS _migrations (
            name TEXT PRIMARY KEY,
            applied_at TIMESTAMPTZ DEFAULT NOW()
        )
    """)

    applied = []
    for path in sorted(glob.glob(f"{migration_dir}/*.sql")):
        name = os.path.basename(path)
        if await pool.fetchval("SELECT 1 FROM _migrations WHERE name = $1", name):
            log.debug("migration_skipped", name=name)
            continue
        with open(path) as f:
            sql = f.read()
        # schema change and bookkeeping row commit together
        async with pool.acquire() as conn, conn.transaction():
            await conn.execute(sql)
            await conn.execute("INSERT INTO _migrations (name) VALUES ($1)", name)
        log.info("migration_applied", name=name)
        applied.append(name)
    return applied


async def run_migrations() -> None:
    pool = await asyncpg.create_pool(get_settings().database_url)
    assert pool is not None
    try:
        applied = await apply_migrations(pool)
    finally:
        await pool.close()
    log.info("migrations_complete", applied=len(applied))


if __name__ == "__main__":
    asyncio.run(run_migrations())
