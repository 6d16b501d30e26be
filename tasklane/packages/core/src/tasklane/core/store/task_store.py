"""TaskStore SQLite 实现

仅提供数据库操作，授权与业务校验由上层服务负责。
写操作在 write_transaction 内提交，失败回滚。
"""

from datetime import date, datetime

import aiosqlite

from ..models.enums import TaskStatus
from ..models.query import TaskFilter
from ..models.task import Task, TaskFields
from .transaction import write_transaction

_TASK_COLUMNS = (
    "task_id, title, description, due_date, priority, status, "
    "assigned_to, created_by, created_at, updated_at"
)


def _ts(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_task(self, task: Task) -> Task:
        """创建任务记录"""
        async with write_transaction(self._conn):
            await self._conn.execute(
                f"""
                INSERT INTO tasks ({_TASK_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    task.task_id,
                    task.title,
                    task.description,
                    task.due_date.isoformat(),
                    task.priority.value,
                    task.status.value,
                    task.assigned_to,
                    task.created_by,
                    _ts(task.created_at),
                    _ts(task.updated_at),
                ),
            )
        return task

    async def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        cursor = await self._conn.execute(
            f"SELECT {_TASK_COLUMNS} FROM tasks WHERE task_id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def find_tasks(
        self,
        task_filter: TaskFilter,
        limit: int,
        skip: int,
        newest_first: bool = True,
    ) -> tuple[list[Task], int]:
        """按条件分页查询

        Returns:
            (本页任务列表, 匹配总数)
        """
        where, params = self._build_where(task_filter)
        direction = "DESC" if newest_first else "ASC"

        cursor = await self._conn.execute(
            f"SELECT COUNT(*) FROM tasks{where}",
            params,
        )
        row = await cursor.fetchone()
        total = int(row[0]) if row else 0

        cursor = await self._conn.execute(
            f"""
            SELECT {_TASK_COLUMNS} FROM tasks{where}
            ORDER BY created_at {direction}, task_id {direction}
            LIMIT ? OFFSET ?
            """,
            (*params, limit, skip),
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(r) for r in rows], total

    async def update_task(
        self,
        task_id: str,
        fields: TaskFields,
        updated_at: datetime,
    ) -> Task | None:
        """整体替换可变字段（不触碰 created_by / assigned_to）"""
        async with write_transaction(self._conn):
            cursor = await self._conn.execute(
                """
                UPDATE tasks
                SET title = ?, description = ?, due_date = ?, priority = ?,
                    status = ?, updated_at = ?
                WHERE task_id = ?
                """,
                (
                    fields.title,
                    fields.description,
                    fields.due_date.isoformat(),
                    fields.priority.value,
                    fields.status.value,
                    _ts(updated_at),
                    task_id,
                ),
            )
            updated = cursor.rowcount > 0
        if not updated:
            return None
        return await self.get_task(task_id)

    async def update_task_status(
        self,
        task_id: str,
        status: TaskStatus,
        updated_at: datetime,
    ) -> Task | None:
        """只修改 status"""
        async with write_transaction(self._conn):
            cursor = await self._conn.execute(
                "UPDATE tasks SET status = ?, updated_at = ? WHERE task_id = ?",
                (status.value, _ts(updated_at), task_id),
            )
            updated = cursor.rowcount > 0
        if not updated:
            return None
        return await self.get_task(task_id)

    async def delete_task(self, task_id: str) -> bool:
        """删除任务，返回是否有记录被删除"""
        async with write_transaction(self._conn):
            cursor = await self._conn.execute(
                "DELETE FROM tasks WHERE task_id = ?",
                (task_id,),
            )
            return cursor.rowcount > 0

    @staticmethod
    def _build_where(task_filter: TaskFilter) -> tuple[str, tuple]:
        """TaskFilter -> (WHERE 子句, 参数)"""
        clauses: list[str] = []
        params: list[str] = []

        if task_filter.participant is not None:
            clauses.append("(created_by = ? OR assigned_to = ?)")
            params.extend([task_filter.participant, task_filter.participant])
        if task_filter.assigned_to is not None:
            clauses.append("assigned_to = ?")
            params.append(task_filter.assigned_to)
        if task_filter.created_by is not None:
            clauses.append("created_by = ?")
            params.append(task_filter.created_by)
        if task_filter.created_by_not is not None:
            clauses.append("created_by != ?")
            params.append(task_filter.created_by_not)

        if not clauses:
            return "", ()
        return " WHERE " + " AND ".join(clauses), tuple(params)

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            task_id=row[0],
            title=row[1],
            description=row[2],
            due_date=date.fromisoformat(row[3]),
            priority=row[4],
            status=row[5],
            assigned_to=row[6],
            created_by=row[7],
            created_at=datetime.fromisoformat(row[8]),
            updated_at=datetime.fromisoformat(row[9]),
        )
