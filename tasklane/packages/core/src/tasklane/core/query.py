"""任务列表查询构建

三种列表（全部 / 指派给我 / 我创建的）共用同一套排序与分页逻辑，
仅过滤条件不同：

- ALL:      created_by == user OR assigned_to == user
- ASSIGNED: assigned_to == user AND created_by != user
- CREATED:  created_by == user
"""

import re

import structlog

from .config import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, PAGE_LIMIT_WARN_THRESHOLD
from .models.enums import ListScope
from .models.query import SQLITE_INT_MAX, SQLITE_INT_MIN, PageRequest, TaskFilter

log = structlog.get_logger()

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_MAX_DIGITS = len(str(SQLITE_INT_MAX))


def build_task_filter(scope: ListScope, user_id: str) -> TaskFilter:
    """根据列表范围生成过滤条件"""
    if scope == ListScope.ALL:
        return TaskFilter(participant=user_id)
    if scope == ListScope.ASSIGNED:
        return TaskFilter(assigned_to=user_id, created_by_not=user_id)
    if scope == ListScope.CREATED:
        return TaskFilter(created_by=user_id)
    raise ValueError(f"Unknown list scope: {scope}")


def parse_page_param(raw: str | int | None, default: int) -> int:
    """解析分页参数：取开头的整数部分，缺失 / 非数字 / 0 时回退到默认值

    负数原样保留（不做上下界限制）。超出 SQLite 64 位整数范围的值无法绑定，
    按无法解析处理并记录告警。
    """
    if raw is None:
        return default
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT.match(raw)
        if match is None:
            return default
        digits = match.group(1).lstrip("+-").lstrip("0")
        # 超长数字串不交给 int()，避免触发整数位数上限
        value = int(match.group(1)) if len(digits) <= _MAX_DIGITS else None
    if value is None or not SQLITE_INT_MIN <= value <= SQLITE_INT_MAX:
        log.warning("page_param_out_of_range", fallback=default)
        return default
    return value or default


def build_page_request(
    page: str | int | None = None,
    limit: str | int | None = None,
) -> PageRequest:
    """构建分页请求，limit 超出合理范围时记录告警"""
    request = PageRequest(
        page=parse_page_param(page, DEFAULT_PAGE),
        limit=parse_page_param(limit, DEFAULT_PAGE_SIZE),
    )
    if request.limit < 1 or request.limit > PAGE_LIMIT_WARN_THRESHOLD:
        log.warning(
            "page_limit_out_of_range",
            limit=request.limit,
            threshold=PAGE_LIMIT_WARN_THRESHOLD,
        )
    return request
