"""Store Protocol 接口定义

定义 TaskStore、UserDirectory 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol

from ..models.enums import TaskStatus
from ..models.query import TaskFilter
from ..models.task import Task, TaskFields
from ..models.user import User, UserSummary


class TaskStore(Protocol):
    """Task 存储接口"""

    async def create_task(self, task: Task) -> Task:
        """创建任务记录"""
        ...

    async def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        ...

    async def find_tasks(
        self,
        task_filter: TaskFilter,
        limit: int,
        skip: int,
        newest_first: bool = True,
    ) -> tuple[list[Task], int]:
        """按条件分页查询，返回 (本页任务, 匹配总数)"""
        ...

    async def update_task(
        self,
        task_id: str,
        fields: TaskFields,
        updated_at: datetime,
    ) -> Task | None:
        """整体替换可变字段，任务不存在返回 None"""
        ...

    async def update_task_status(
        self,
        task_id: str,
        status: TaskStatus,
        updated_at: datetime,
    ) -> Task | None:
        """只修改状态，任务不存在返回 None"""
        ...

    async def delete_task(self, task_id: str) -> bool:
        """删除任务"""
        ...


class UserDirectory(Protocol):
    """用户目录接口"""

    async def create_user(self, user: User) -> User:
        ...

    async def get_user(self, user_id: str) -> User | None:
        ...

    async def get_user_by_email(self, email: str) -> User | None:
        ...

    async def list_users(self) -> list[User]:
        ...

    async def get_summaries(self, user_ids: Iterable[str]) -> dict[str, UserSummary]:
        """批量解析用户摘要"""
        ...
