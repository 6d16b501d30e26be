"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient + 预置用户"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def app(tmp_path: Path, store_group):
    """创建测试用 FastAPI app 实例（绕过 lifespan，直接挂载 StoreGroup）"""
    os.environ["TASKLANE_DB_PATH"] = str(tmp_path / "sqlite" / "test.db")
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from tasklane.gateway.main import create_app

    application = create_app()
    application.state.store_group = store_group
    yield application

    for key in ["TASKLANE_DB_PATH", "LOGFIRE_SEND_TO_LOGFIRE"]:
        os.environ.pop(key, None)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def as_user():
    """构造带 X-User-ID 的请求头"""

    def _headers(user) -> dict[str, str]:
        return {"X-User-ID": user.user_id}

    return _headers
