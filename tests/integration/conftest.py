import os
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import psycopg
import pytest
import pytest_asyncio

from agenda_insights.config.settings import Settings
from agenda_insights.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "agenda_insights" / "database" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "agenda_insights_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest_asyncio.fixture
async def integration_pool(test_settings: Settings) -> AsyncGenerator[None, None]:
    try:
        await init_pool(test_settings, open_timeout=5.0)
    except Exception as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        async with get_connection() as conn:
            await conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            await conn.commit()
        yield
    finally:
        await close_pool()


@pytest_asyncio.fixture
async def db_conn(
    integration_pool: None,
) -> AsyncGenerator[psycopg.AsyncConnection[Any], None]:
    async with get_connection() as conn:
        yield conn


@pytest_asyncio.fixture
async def file_reference_cleanup(
    integration_pool: None,
) -> AsyncGenerator[list[str], None]:
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    async with get_connection() as conn:
        await conn.execute(
            "DELETE FROM agenda_insights WHERE file_reference = ANY(%s)", (cleanup,)
        )
        await conn.commit()
