"""packages/core 测试配置 -- 核心层 fixture"""

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta

import pytest

BASE_TIME = datetime(2026, 10, 18, 9, 0, tzinfo=UTC)


@pytest.fixture
def make_task() -> Callable:
    """构造 Task，created_at 按 seq 递增（seq 越大越新）"""
    from tasklane.core.models import Task, TaskPriority, TaskStatus

    def _make(
        seq: int,
        created_by: str,
        assigned_to: str,
        status: TaskStatus = TaskStatus.PENDING,
    ) -> Task:
        created_at = BASE_TIME + timedelta(minutes=seq)
        return Task(
            task_id=f"01JTASK{seq:019d}",
            title=f"Task {seq}",
            description=f"Description {seq}",
            due_date=date(2026, 12, 31),
            priority=TaskPriority.MEDIUM,
            status=status,
            assigned_to=assigned_to,
            created_by=created_by,
            created_at=created_at,
            updated_at=created_at,
        )

    return _make
