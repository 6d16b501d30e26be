"""Task Domain Model

created_by 在创建时写入一次，之后不可修改。
对外返回时 assigned_to / created_by 必须解析为 UserSummary，不暴露原始 ID。
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from .enums import TaskPriority, TaskStatus
from .user import UserSummary


class Task(BaseModel):
    """Task 存储模型（引用字段为原始用户 ID）"""

    task_id: str = Field(description="唯一标识，ULID 格式")
    title: str = Field(min_length=1, description="标题")
    description: str = Field(min_length=1, description="描述")
    due_date: date = Field(description="截止日期（仅日期部分）")
    priority: TaskPriority = Field(description="优先级")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="当前状态")
    assigned_to: str = Field(description="被指派人用户 ID")
    created_by: str = Field(description="创建者用户 ID，不可变")
    created_at: datetime = Field(description="创建时间，列表排序键")
    updated_at: datetime = Field(description="更新时间")


class TaskFields(BaseModel):
    """通用更新整体替换的字段集合"""

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    due_date: date
    priority: TaskPriority
    status: TaskStatus


class TaskView(BaseModel):
    """对外返回的 Task（引用已解析为用户摘要）"""

    task_id: str
    title: str
    description: str
    due_date: date
    priority: TaskPriority
    status: TaskStatus
    assigned_to: UserSummary
    created_by: UserSummary
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(
        cls,
        task: Task,
        users: dict[str, UserSummary],
    ) -> "TaskView":
        """用已解析的用户摘要组装 TaskView

        Raises:
            KeyError: 引用的用户不在 users 中
        """
        return cls(
            task_id=task.task_id,
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            priority=task.priority,
            status=task.status,
            assigned_to=users[task.assigned_to],
            created_by=users[task.created_by],
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskPage(BaseModel):
    """分页列表结果"""

    tasks: list[TaskView] = Field(default_factory=list)
    count: int = Field(description="本页记录数")
    total: int = Field(description="匹配记录总数")
    page: int = Field(description="当前页码")
    pages: int = Field(description="总页数 ceil(total/limit)")
