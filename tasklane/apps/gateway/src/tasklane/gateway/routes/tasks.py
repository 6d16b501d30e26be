"""任务路由

POST   /api/tasks                   创建任务
GET    /api/tasks                   我创建的或指派给我的任务（分页）
GET    /api/tasks/assigned          别人指派给我的任务（分页）
GET    /api/tasks/created           我创建的任务（分页）
GET    /api/tasks/{task_id}         任务详情
PUT    /api/tasks/{task_id}         通用更新（整体替换）
DELETE /api/tasks/{task_id}         删除任务（仅创建者）
PATCH  /api/tasks/{task_id}/status  只更新状态

错误由全局 exception handler 统一渲染。
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from tasklane.core.models import ListScope, TaskPage, TaskView

from ..deps import get_current_user_id, get_task_service
from ..services.task_service import TaskService

router = APIRouter()


class TaskCreateRequest(BaseModel):
    """创建任务请求体（必填校验由 TaskService 完成）"""

    title: str | None = None
    description: str | None = None
    due_date: str | None = Field(default=None, description="YYYY-MM-DD 或 ISO 时间")
    priority: str | None = Field(default=None, description="low / medium / high")
    assigned_to: str | None = Field(default=None, description="被指派人用户 ID")


class TaskUpdateRequest(BaseModel):
    """通用更新请求体 -- due_date 可省略（沿用原值），其余字段必填"""

    title: str | None = None
    description: str | None = None
    due_date: str | None = None
    priority: str | None = None
    status: str | None = None


class TaskStatusRequest(BaseModel):
    """状态更新请求体"""

    status: str | None = Field(default=None, description="pending / completed")


class TaskResponse(BaseModel):
    """单任务响应"""

    message: str
    task: TaskView


class TaskDeleteResponse(BaseModel):
    """删除响应"""

    message: str
    task_id: str


@router.post("/api/tasks", response_model=TaskResponse, status_code=201)
async def create_task(
    body: TaskCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """创建任务，创建者为当前用户，状态为 pending"""
    task = await service.create_task(user_id, body.model_dump())
    return TaskResponse(message="Task created successfully", task=task)


async def _list(
    service: TaskService,
    user_id: str,
    scope: ListScope,
    page: str | None,
    limit: str | None,
) -> TaskPage:
    return await service.list_tasks(user_id, scope, page=page, limit=limit)


@router.get("/api/tasks", response_model=TaskPage)
async def list_tasks(
    page: str | None = Query(default=None, description="页码，从 1 开始"),
    limit: str | None = Query(default=None, description="每页条数"),
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """我创建的或指派给我的任务，按 created_at 倒序"""
    return await _list(service, user_id, ListScope.ALL, page, limit)


@router.get("/api/tasks/assigned", response_model=TaskPage)
async def list_assigned_tasks(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """别人指派给我的任务（不含自己创建的）"""
    return await _list(service, user_id, ListScope.ASSIGNED, page, limit)


@router.get("/api/tasks/created", response_model=TaskPage)
async def list_created_tasks(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """我创建的任务"""
    return await _list(service, user_id, ListScope.CREATED, page, limit)


@router.get("/api/tasks/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    task = await service.get_task(user_id, task_id)
    return TaskResponse(message="Task retrieved successfully", task=task)


@router.put("/api/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: TaskUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    task = await service.update_task(user_id, task_id, body.model_dump())
    return TaskResponse(message="Task updated successfully", task=task)


@router.delete("/api/tasks/{task_id}", response_model=TaskDeleteResponse)
async def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    await service.delete_task(user_id, task_id)
    return TaskDeleteResponse(message="Task deleted successfully", task_id=task_id)


@router.patch("/api/tasks/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: str,
    body: TaskStatusRequest,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    task = await service.update_task_status(user_id, task_id, body.status)
    return TaskResponse(message="Task status updated successfully", task=task)
