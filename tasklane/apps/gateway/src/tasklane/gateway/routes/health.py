"""健康检查路由

GET /health: Liveness 检查，永远返回 200，不需要身份。
GET /ready: Readiness 检查，验证任务库可读、WAL 生效、磁盘有余量。
"""

import shutil

import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse
from tasklane.core.store.sqlite_init import verify_wal_mode

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request):
    """Readiness 检查

    检查项：
    1. sqlite: tasks / users 两张表可查询
    2. wal: journal_mode 为 WAL（仅告警，不影响 ready）
    3. disk_space_mb: 数据盘剩余空间
    """
    checks: dict[str, str | int] = {}
    ready_ok = True
    conn = request.app.state.store_group.conn

    try:
        for table in ("tasks", "users"):
            cursor = await conn.execute(f"SELECT COUNT(*) FROM {table}")
            await cursor.fetchone()
        checks["sqlite"] = "ok"
        checks["wal"] = "ok" if await verify_wal_mode(conn) else "disabled"
    except Exception as e:
        log.warning("readiness_sqlite_failed", error_type=type(e).__name__)
        checks["sqlite"] = "error"
        checks["wal"] = "unknown"
        ready_ok = False

    try:
        checks["disk_space_mb"] = shutil.disk_usage("/").free // (1024 * 1024)
    except OSError:
        checks["disk_space_mb"] = 0
        ready_ok = False

    return JSONResponse(
        status_code=200 if ready_ok else 503,
        content={
            "status": "ready" if ready_ok else "not_ready",
            "checks": checks,
        },
    )
