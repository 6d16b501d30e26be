"""TaskLane Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import ListScope, TaskPriority, TaskStatus, UserRole
from .query import PageRequest, TaskFilter
from .task import Task, TaskFields, TaskPage, TaskView
from .user import User, UserSummary

__all__ = [
    # 枚举
    "TaskStatus",
    "TaskPriority",
    "UserRole",
    "ListScope",
    # Task
    "Task",
    "TaskFields",
    "TaskView",
    "TaskPage",
    # User
    "User",
    "UserSummary",
    # 查询
    "TaskFilter",
    "PageRequest",
]
