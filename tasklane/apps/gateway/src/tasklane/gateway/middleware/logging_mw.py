"""LoggingMiddleware -- 请求级日志

每个请求分配 ULID request_id 并通过 X-Request-ID 响应头返回。
request_id、requester_id、task_id 在进入路由前绑定到 structlog contextvars，
服务层日志无需重复传递。完成日志的级别随结果变化：
5xx 为 error，4xx（拒绝、无权限、不存在）为 warning，其余为 info。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

from .trace_mw import trace_context

REQUEST_ID_HEADER = "X-Request-ID"

log = structlog.get_logger()


def _outcome(status_code: int) -> str:
    if status_code >= 500:
        return "failed"
    if status_code >= 400:
        return "rejected"
    return "ok"


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            **trace_context(request),
        )

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        outcome = _outcome(response.status_code)
        emit = {"failed": log.aerror, "rejected": log.awarning}.get(outcome, log.ainfo)
        await emit(
            "request_completed",
            status_code=response.status_code,
            outcome=outcome,
            duration_ms=duration_ms,
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
