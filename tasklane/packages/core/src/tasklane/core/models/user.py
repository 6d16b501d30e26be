"""User 目录模型

任务侧只消费 UserSummary（id/name/email），不涉及凭据。
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .enums import UserRole


class UserSummary(BaseModel):
    """用户摘要"""

    id: str = Field(description="用户 ID")
    name: str = Field(description="用户名")
    email: str = Field(description="邮箱")


class User(BaseModel):
    """用户目录记录"""

    user_id: str = Field(description="唯一标识，ULID 格式")
    name: str = Field(min_length=1, description="用户名")
    email: str = Field(min_length=3, description="邮箱，唯一")
    role: UserRole = Field(default=UserRole.USER, description="角色")
    created_at: datetime = Field(description="创建时间")

    def summary(self) -> UserSummary:
        return UserSummary(id=self.user_id, name=self.name, email=self.email)
