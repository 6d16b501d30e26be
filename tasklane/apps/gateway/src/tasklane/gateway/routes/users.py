"""用户目录路由

GET /api/users: 返回全部用户摘要（需要认证身份）。
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from tasklane.core.models import UserSummary

from ..deps import get_current_user_id, get_user_service
from ..services.user_service import UserService

router = APIRouter()


class UserListResponse(BaseModel):
    """用户目录响应"""

    count: int
    users: list[UserSummary]


@router.get("/api/users", response_model=UserListResponse)
async def list_users(
    _user_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    users = await service.list_users()
    return UserListResponse(count=len(users), users=users)
