"""TaskService -- 任务授权、查询与响应组装

每个操作的流程：
1. 校验输入（任何写入之前完成）
2. 读取任务：不存在 -> TaskNotFoundError（先于授权判断）
3. 授权：读/改要求 participant，删除要求创建者
4. 委托 Store 读写
5. 显式 join 用户目录，把 assigned_to / created_by 解析为用户摘要

读-改-写之间不加锁，并发修改按最后写入生效。
"""

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import ValidationError
from tasklane.core.access import ensure_creator, ensure_participant
from tasklane.core.errors import InvalidInputError, StoreFailureError, TaskNotFoundError
from tasklane.core.models import (
    ListScope,
    Task,
    TaskFields,
    TaskPage,
    TaskStatus,
    TaskView,
)
from tasklane.core.query import build_page_request, build_task_filter
from tasklane.core.store import StoreGroup, store_operation
from tasklane.core.validation import (
    CREATE_REQUIRED_FIELDS,
    UPDATE_REQUIRED_FIELDS,
    ensure_due_date_not_past,
    parse_due_date,
    parse_priority,
    parse_status,
    require_fields,
)
from ulid import ULID

log = structlog.get_logger()


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TaskService:
    """任务业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._stores = store_group
        self._clock = clock

    async def create_task(self, requester_id: str, payload: Mapping[str, Any]) -> TaskView:
        """创建任务，created_by 固定为请求者，status 固定为 pending

        Raises:
            InvalidInputError: 必填字段缺失、截止日期已过、优先级非法、被指派人不存在
            StoreFailureError: 存储失败
        """
        require_fields(payload, CREATE_REQUIRED_FIELDS)
        now = self._clock()
        due_date = parse_due_date(payload["due_date"])
        ensure_due_date_not_past(due_date, now.date())
        priority = parse_priority(payload["priority"])

        assigned_to = payload["assigned_to"]
        async with store_operation("get_user"):
            assignee = await self._stores.user_directory.get_user(str(assigned_to))
        if assignee is None:
            raise InvalidInputError("Assigned user does not exist")

        try:
            task = Task(
                task_id=str(ULID()),
                title=payload["title"],
                description=payload["description"],
                due_date=due_date,
                priority=priority,
                status=TaskStatus.PENDING,
                assigned_to=assignee.user_id,
                created_by=requester_id,
                created_at=now,
                updated_at=now,
            )
        except ValidationError:
            raise InvalidInputError("Please provide all required fields") from None

        async with store_operation("create_task"):
            await self._stores.task_store.create_task(task)

        log.info(
            "task_created",
            task_id=task.task_id,
            created_by=task.created_by,
            assigned_to=task.assigned_to,
        )
        return await self._resolve_one(task)

    async def list_tasks(
        self,
        requester_id: str,
        scope: ListScope = ListScope.ALL,
        page: str | int | None = None,
        limit: str | int | None = None,
    ) -> TaskPage:
        """按范围分页查询，created_at 倒序"""
        task_filter = build_task_filter(scope, requester_id)
        page_request = build_page_request(page, limit)

        async with store_operation("find_tasks"):
            tasks, total = await self._stores.task_store.find_tasks(
                task_filter,
                limit=page_request.limit,
                skip=page_request.skip,
            )

        views = await self._resolve(tasks)
        return TaskPage(
            tasks=views,
            count=len(views),
            total=total,
            page=page_request.page,
            pages=page_request.pages_for(total),
        )

    async def get_task(self, requester_id: str, task_id: str) -> TaskView:
        """查询任务详情（仅 participant 可见）"""
        task = await self._load_task(task_id)
        ensure_participant(task, requester_id, "view")
        return await self._resolve_one(task)

    async def update_task(
        self,
        requester_id: str,
        task_id: str,
        payload: Mapping[str, Any],
    ) -> TaskView:
        """通用更新：整体替换 title/description/priority/status

        due_date 仅在提供时替换并校验，未提供时沿用原值（已过期的任务仍可编辑）。
        created_by / assigned_to 不可通过此路径修改，payload 中的其他键被忽略。
        """
        task = await self._load_task(task_id)
        ensure_participant(task, requester_id, "update")

        require_fields(payload, UPDATE_REQUIRED_FIELDS)
        due_date = task.due_date
        if payload.get("due_date"):
            due_date = parse_due_date(payload["due_date"])
            ensure_due_date_not_past(due_date, self._clock().date())
        try:
            fields = TaskFields(
                title=payload["title"],
                description=payload["description"],
                due_date=due_date,
                priority=parse_priority(payload["priority"]),
                status=parse_status(payload["status"]),
            )
        except ValidationError:
            raise InvalidInputError("Please provide all required fields") from None

        async with store_operation("update_task"):
            updated = await self._stores.task_store.update_task(
                task_id, fields, self._clock()
            )
        if updated is None:
            raise TaskNotFoundError(task_id)

        log.info("task_updated", task_id=task_id, requester_id=requester_id)
        return await self._resolve_one(updated)

    async def update_task_status(
        self,
        requester_id: str,
        task_id: str,
        status: Any,
    ) -> TaskView:
        """只修改状态（状态值校验先于任务读取）"""
        new_status = parse_status(status)

        task = await self._load_task(task_id)
        ensure_participant(task, requester_id, "update")

        async with store_operation("update_task_status"):
            updated = await self._stores.task_store.update_task_status(
                task_id, new_status, self._clock()
            )
        if updated is None:
            raise TaskNotFoundError(task_id)

        log.info(
            "task_status_updated",
            task_id=task_id,
            requester_id=requester_id,
            from_status=task.status.value,
            to_status=new_status.value,
        )
        return await self._resolve_one(updated)

    async def delete_task(self, requester_id: str, task_id: str) -> None:
        """删除任务（仅创建者）"""
        task = await self._load_task(task_id)
        ensure_creator(task, requester_id)

        async with store_operation("delete_task"):
            deleted = await self._stores.task_store.delete_task(task_id)
        if not deleted:
            raise TaskNotFoundError(task_id)

        log.info("task_deleted", task_id=task_id, requester_id=requester_id)

    async def _load_task(self, task_id: str) -> Task:
        async with store_operation("get_task"):
            task = await self._stores.task_store.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def _resolve_one(self, task: Task) -> TaskView:
        views = await self._resolve([task])
        return views[0]

    async def _resolve(self, tasks: list[Task]) -> list[TaskView]:
        """批量解析 assigned_to / created_by 为用户摘要

        引用的用户不存在时视为存储失败（写入不回滚）。
        """
        user_ids = {t.assigned_to for t in tasks} | {t.created_by for t in tasks}
        async with store_operation("get_user_summaries"):
            users = await self._stores.user_directory.get_summaries(user_ids)

        missing = user_ids - users.keys()
        if missing:
            log.error(
                "task_reference_unresolved",
                user_ids=sorted(missing),
            )
            raise StoreFailureError("get_user_summaries", "Referenced user not found")

        return [TaskView.from_task(t, users) for t in tasks]
