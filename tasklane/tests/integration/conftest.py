"""集成测试共享 fixture"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tasklane.core.store import create_store_group


@pytest_asyncio.fixture
async def integration_db_path(tmp_path: Path) -> Path:
    return tmp_path / "sqlite" / "integration.db"


@pytest_asyncio.fixture
async def integration_app(integration_db_path: Path):
    """集成测试用 FastAPI app（完整中间件 + 真实 SQLite）"""
    os.environ["TASKLANE_DB_PATH"] = str(integration_db_path)
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from tasklane.gateway.main import create_app

    app = create_app()

    store_group = await create_store_group(str(integration_db_path))
    app.state.store_group = store_group

    yield app

    await store_group.conn.close()
    os.environ.pop("TASKLANE_DB_PATH", None)
    os.environ.pop("LOGFIRE_SEND_TO_LOGFIRE", None)


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def team(integration_app) -> dict[str, str]:
    """预置 u1 / u2 / u3，返回 name -> user_id"""
    from datetime import UTC, datetime

    from tasklane.core.models import User

    directory = integration_app.state.store_group.user_directory
    ids = {}
    for i, name in enumerate(["u1", "u2", "u3"], start=1):
        user = User(
            user_id=f"01JTEAM000000000000000000{i}",
            name=name.upper(),
            email=f"{name}@example.com",
            created_at=datetime(2026, 2, i, tzinfo=UTC),
        )
        await directory.create_user(user)
        ids[name] = user.user_id
    return ids
