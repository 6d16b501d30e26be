"""UserService -- 用户目录查询

只暴露 {id, name, email} 摘要，用于选择被指派人。
"""

from tasklane.core.models import UserSummary
from tasklane.core.store import StoreGroup, store_operation


class UserService:
    """用户目录服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_users(self) -> list[UserSummary]:
        async with store_operation("list_users"):
            users = await self._stores.user_directory.list_users()
        return [u.summary() for u in users]
