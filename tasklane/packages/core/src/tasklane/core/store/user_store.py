"""UserDirectory SQLite 实现

为任务引用提供 id -> {id, name, email} 解析，不涉及任何凭据。
"""

from collections.abc import Iterable
from datetime import datetime

import aiosqlite

from ..models.user import User, UserSummary
from .transaction import write_transaction

_USER_COLUMNS = "user_id, name, email, role, created_at"


class SqliteUserDirectory:
    """UserDirectory 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_user(self, user: User) -> User:
        """新增用户（email 唯一，冲突时抛出 aiosqlite.IntegrityError）"""
        async with write_transaction(self._conn):
            await self._conn.execute(
                f"INSERT INTO users ({_USER_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                (
                    user.user_id,
                    user.name,
                    user.email,
                    user.role.value,
                    user.created_at.isoformat(),
                ),
            )
        return user

    async def get_user(self, user_id: str) -> User | None:
        cursor = await self._conn.execute(
            f"SELECT {_USER_COLUMNS} FROM users WHERE user_id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        return self._row_to_user(row) if row else None

    async def get_user_by_email(self, email: str) -> User | None:
        cursor = await self._conn.execute(
            f"SELECT {_USER_COLUMNS} FROM users WHERE email = ?",
            (email,),
        )
        row = await cursor.fetchone()
        return self._row_to_user(row) if row else None

    async def list_users(self) -> list[User]:
        """按创建时间正序返回全部用户"""
        cursor = await self._conn.execute(
            f"SELECT {_USER_COLUMNS} FROM users ORDER BY created_at ASC, user_id ASC"
        )
        rows = await cursor.fetchall()
        return [self._row_to_user(r) for r in rows]

    async def get_summaries(self, user_ids: Iterable[str]) -> dict[str, UserSummary]:
        """批量解析用户摘要，不存在的 ID 不出现在结果中"""
        ids = sorted(set(user_ids))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        cursor = await self._conn.execute(
            f"SELECT user_id, name, email FROM users WHERE user_id IN ({placeholders})",
            ids,
        )
        rows = await cursor.fetchall()
        return {r[0]: UserSummary(id=r[0], name=r[1], email=r[2]) for r in rows}

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        return User(
            user_id=row[0],
            name=row[1],
            email=row[2],
            role=row[3],
            created_at=datetime.fromisoformat(row[4]),
        )
