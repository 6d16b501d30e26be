"""写事务封装 + 存储异常转换

write_transaction: 在同一连接上执行写操作，成功则提交，任何异常都回滚后原样抛出。
store_operation: 把 aiosqlite 异常转换为 StoreFailureError，记录日志，不重试。
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite
import structlog

from ..errors import StoreFailureError

log = structlog.get_logger()


@asynccontextmanager
async def write_transaction(conn: aiosqlite.Connection) -> AsyncIterator[aiosqlite.Connection]:
    """写事务上下文

    Args:
        conn: 数据库连接（需在同一连接上操作以保证事务性）

    Raises:
        Exception: 块内或提交时的异常，回滚后重新抛出
    """
    try:
        yield conn
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise


@asynccontextmanager
async def store_operation(operation: str) -> AsyncIterator[None]:
    """存储调用保护：aiosqlite.Error -> StoreFailureError

    Args:
        operation: 操作名，写入日志与异常
    """
    try:
        yield
    except aiosqlite.Error as e:
        log.error(
            "store_operation_failed",
            operation=operation,
            error_type=type(e).__name__,
        )
        raise StoreFailureError(operation) from e
