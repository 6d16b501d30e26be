"""请求追踪上下文

从 /api/tasks/{task_id}[/...] 路径提取 task_id，从 X-User-ID 提取请求者。
由 LoggingMiddleware 在进入路由前绑定到 structlog contextvars，
请求内的全部日志（包括 request_completed）都带有这两个字段。
"""

from starlette.requests import Request

from ..deps import USER_ID_HEADER

# 列表子路由，不是 task_id
_LIST_SEGMENTS = {"assigned", "created"}


def extract_task_id(path: str) -> str | None:
    """从路径提取 task_id，非单任务路由返回 None"""
    parts = [p for p in path.split("/") if p]
    # ["api", "tasks", "{task_id}", ...]
    if len(parts) >= 3 and parts[0] == "api" and parts[1] == "tasks":
        candidate = parts[2]
        if candidate not in _LIST_SEGMENTS:
            return candidate
    return None


def trace_context(request: Request) -> dict[str, str]:
    """请求的任务追踪字段，缺失的字段不出现"""
    context: dict[str, str] = {}
    task_id = extract_task_id(request.url.path)
    if task_id:
        context["task_id"] = task_id
    requester_id = (request.headers.get(USER_ID_HEADER) or "").strip()
    if requester_id:
        context["requester_id"] = requester_id
    return context
