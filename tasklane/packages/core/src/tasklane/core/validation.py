"""任务业务校验

所有校验失败抛出 InvalidInputError，且发生在任何写入之前。
截止日期只比较日期部分（忽略时分秒），等于今天视为合法。
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from .errors import InvalidInputError
from .models.enums import TaskPriority, TaskStatus

# 创建任务的必填字段
CREATE_REQUIRED_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "due_date",
    "priority",
    "assigned_to",
)

# 通用更新必填字段（due_date 可省略，省略时沿用原值）
UPDATE_REQUIRED_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "priority",
    "status",
)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def require_fields(payload: Mapping[str, Any], fields: tuple[str, ...]) -> None:
    """任一字段缺失或为空即失败，提示信息不指明具体字段"""
    if any(_is_blank(payload.get(name)) for name in fields):
        raise InvalidInputError("Please provide all required fields")


def parse_due_date(raw: Any) -> date:
    """解析截止日期，支持 date / datetime / ISO 字符串，只保留日期部分"""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        try:
            return date.fromisoformat(raw)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(raw).date()
        except ValueError:
            pass
    raise InvalidInputError("Invalid due date")


def ensure_due_date_not_past(due_date: date, today: date) -> None:
    """截止日期严格早于今天则失败"""
    if due_date < today:
        raise InvalidInputError("Due date cannot be in the past")


def parse_priority(raw: Any) -> TaskPriority:
    try:
        return TaskPriority(raw)
    except ValueError:
        raise InvalidInputError(
            "Please provide a valid priority (low, medium or high)"
        ) from None


def parse_status(raw: Any) -> TaskStatus:
    """状态必须严格为 pending 或 completed（含空值在内的其他值均失败）"""
    try:
        return TaskStatus(raw)
    except ValueError:
        raise InvalidInputError(
            "Please provide a valid status (pending or completed)"
        ) from None
