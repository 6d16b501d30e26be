"""全局 pytest 配置 -- 临时 SQLite 数据库 + 用户目录 fixture"""

from datetime import UTC, datetime
from pathlib import Path

import pytest_asyncio


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "test.db"


@pytest_asyncio.fixture
async def store_group(tmp_db_path: Path):
    """提供 StoreGroup（共享连接）"""
    from tasklane.core.store import create_store_group

    group = await create_store_group(str(tmp_db_path))
    yield group
    await group.conn.close()


@pytest_asyncio.fixture
async def users(store_group):
    """预置三个用户：alice / bob / carol"""
    from tasklane.core.models import User

    created = {}
    for i, name in enumerate(["alice", "bob", "carol"], start=1):
        user = User(
            user_id=f"01JUSER00000000000000000{i:02d}",
            name=name.capitalize(),
            email=f"{name}@example.com",
            created_at=datetime(2026, 1, i, tzinfo=UTC),
        )
        created[name] = await store_group.user_directory.create_user(user)
    return created
