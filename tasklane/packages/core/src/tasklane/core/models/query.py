"""查询模型 -- 任务过滤条件与分页请求

TaskFilter 由查询构建器生成，Store 负责翻译为具体查询语句。
所有非 None 条件之间为 AND 关系。
"""

import math

from pydantic import BaseModel, Field

# SQLite INTEGER 为有符号 64 位
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1


class TaskFilter(BaseModel):
    """任务过滤条件"""

    participant: str | None = Field(
        default=None,
        description="created_by == 值 OR assigned_to == 值",
    )
    assigned_to: str | None = Field(default=None, description="assigned_to == 值")
    created_by: str | None = Field(default=None, description="created_by == 值")
    created_by_not: str | None = Field(default=None, description="created_by != 值")

    model_config = {"frozen": True}


class PageRequest(BaseModel):
    """分页请求（page 从 1 开始）"""

    page: int
    limit: int

    model_config = {"frozen": True}

    @property
    def skip(self) -> int:
        """偏移量，截断到 SQLite 可绑定范围（超出末页时结果为空）"""
        return max(SQLITE_INT_MIN, min((self.page - 1) * self.limit, SQLITE_INT_MAX))

    def pages_for(self, total: int) -> int:
        """总页数 = ceil(total / limit)"""
        return math.ceil(total / self.limit)
