"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 实例与请求者身份

Store 实例通过 app.state 管理，在 lifespan 中初始化/清理。
请求者 ID 由上游认证层写入 X-User-ID 请求头，此处信任且不再校验。
"""

from fastapi import Header, Request
from tasklane.core.errors import UnauthenticatedError
from tasklane.core.store import StoreGroup

from .services.task_service import TaskService
from .services.user_service import UserService

USER_ID_HEADER = "X-User-ID"


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
) -> str:
    """读取认证后的请求者 ID，缺失时抛出 UnauthenticatedError"""
    if not x_user_id or not x_user_id.strip():
        raise UnauthenticatedError()
    return x_user_id.strip()


def get_task_service(request: Request) -> TaskService:
    return TaskService(get_store_group(request))


def get_user_service(request: Request) -> UserService:
    return UserService(get_store_group(request))
