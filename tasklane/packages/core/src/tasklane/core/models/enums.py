"""枚举定义

包含 TaskStatus、TaskPriority、UserRole 以及列表查询范围 ListScope。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """任务状态"""

    PENDING = "pending"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    """任务优先级"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UserRole(StrEnum):
    """用户角色（仅目录信息，不参与任务授权）"""

    USER = "user"
    ADMIN = "admin"


class ListScope(StrEnum):
    """任务列表查询范围

    - ALL: 我创建的或指派给我的
    - ASSIGNED: 别人指派给我的（排除自己创建的）
    - CREATED: 我创建的
    """

    ALL = "all"
    ASSIGNED = "assigned"
    CREATED = "created"
