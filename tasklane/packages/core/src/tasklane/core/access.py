"""任务授权规则

- 读取 / 更新 / 状态更新：请求者必须是创建者或被指派人（participant）
- 删除：请求者必须是创建者

调用方需先确认任务存在，再做授权判断（不存在优先于无权限）。
"""

from typing import Literal

from .errors import ForbiddenError
from .models.task import Task


def is_creator(task: Task, user_id: str) -> bool:
    return task.created_by == user_id


def is_assignee(task: Task, user_id: str) -> bool:
    return task.assigned_to == user_id


def is_participant(task: Task, user_id: str) -> bool:
    """创建者或被指派人"""
    return is_creator(task, user_id) or is_assignee(task, user_id)


def ensure_participant(
    task: Task,
    user_id: str,
    action: Literal["view", "update"] = "view",
) -> None:
    """非 participant 抛出 ForbiddenError"""
    if not is_participant(task, user_id):
        raise ForbiddenError(f"You are not authorized to {action} this task")


def ensure_creator(task: Task, user_id: str) -> None:
    """非创建者抛出 ForbiddenError（被指派人也不能删除）"""
    if not is_creator(task, user_id):
        raise ForbiddenError("Only the task creator can delete this task")
