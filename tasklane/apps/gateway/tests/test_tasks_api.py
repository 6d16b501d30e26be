"""任务 REST API 测试

测试内容：
1. 状态码与响应体结构
2. X-User-ID 身份
3. 列表路由与分页参数
4. 错误响应格式
"""

from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient


def _today() -> str:
    return datetime.now(UTC).date().isoformat()


def _create_body(assignee, **overrides) -> dict:
    body = {
        "title": "Fix login bug",
        "description": "Users cannot log in with SSO",
        "due_date": (datetime.now(UTC).date() + timedelta(days=3)).isoformat(),
        "priority": "high",
        "assigned_to": assignee.user_id,
    }
    body.update(overrides)
    return body


@pytest.fixture
async def created_task(client: AsyncClient, users, as_user) -> dict:
    """alice 创建并指派给 bob 的任务"""
    resp = await client.post(
        "/api/tasks",
        json=_create_body(users["bob"]),
        headers=as_user(users["alice"]),
    )
    assert resp.status_code == 201
    return resp.json()["task"]


class TestCreateTaskApi:
    async def test_create_returns_201_with_user_summaries(
        self, client: AsyncClient, users, as_user
    ):
        resp = await client.post(
            "/api/tasks",
            json=_create_body(users["bob"], due_date=_today()),
            headers=as_user(users["alice"]),
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["message"] == "Task created successfully"
        task = data["task"]
        assert task["status"] == "pending"
        assert task["due_date"] == _today()
        assert task["created_by"] == {
            "id": users["alice"].user_id,
            "name": "Alice",
            "email": "alice@example.com",
        }
        assert task["assigned_to"]["id"] == users["bob"].user_id
        assert len(task["task_id"]) == 26

    async def test_missing_fields_400(self, client: AsyncClient, users, as_user):
        resp = await client.post(
            "/api/tasks",
            json={"title": "Only a title"},
            headers=as_user(users["alice"]),
        )
        assert resp.status_code == 400
        assert resp.json() == {
            "error": {
                "code": "INVALID_INPUT",
                "message": "Please provide all required fields",
            }
        }

    async def test_past_due_date_400(self, client: AsyncClient, users, as_user):
        past = (datetime.now(UTC).date() - timedelta(days=2)).isoformat()
        resp = await client.post(
            "/api/tasks",
            json=_create_body(users["bob"], due_date=past),
            headers=as_user(users["alice"]),
        )
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "Due date cannot be in the past"

    async def test_wrong_json_type_400(self, client: AsyncClient, users, as_user):
        resp = await client.post(
            "/api/tasks",
            json=_create_body(users["bob"], title=["not", "a", "string"]),
            headers=as_user(users["alice"]),
        )
        assert resp.status_code == 400
        error = resp.json()["error"]
        assert error["code"] == "INVALID_INPUT"
        assert error["details"]

    async def test_missing_identity_401(self, client: AsyncClient, users):
        resp = await client.post("/api/tasks", json=_create_body(users["bob"]))
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "UNAUTHENTICATED"

    async def test_blank_identity_401(self, client: AsyncClient, users):
        resp = await client.get("/api/tasks", headers={"X-User-ID": "   "})
        assert resp.status_code == 401

    async def test_unknown_requester_500(self, client: AsyncClient, users):
        resp = await client.post(
            "/api/tasks",
            json=_create_body(users["bob"]),
            headers={"X-User-ID": "01JGHOST00000000000000000X"},
        )
        assert resp.status_code == 500
        assert resp.json() == {"error": {"code": "STORE_FAILURE", "message": "Server error"}}


class TestListTasksApi:
    async def test_list_shape_and_defaults(self, client: AsyncClient, users, as_user):
        for i in range(4):
            await client.post(
                "/api/tasks",
                json=_create_body(users["bob"], title=f"Task {i}"),
                headers=as_user(users["alice"]),
            )

        resp = await client.get("/api/tasks", headers=as_user(users["alice"]))
        assert resp.status_code == 200
        data = resp.json()
        assert set(data) == {"tasks", "count", "total", "page", "pages"}
        assert data["count"] == 3
        assert data["total"] == 4
        assert data["page"] == 1
        assert data["pages"] == 2
        assert [t["title"] for t in data["tasks"]] == ["Task 3", "Task 2", "Task 1"]

        resp = await client.get(
            "/api/tasks", params={"page": "2"}, headers=as_user(users["alice"])
        )
        assert [t["title"] for t in resp.json()["tasks"]] == ["Task 0"]

    async def test_assigned_and_created_routes(
        self, client: AsyncClient, users, as_user, created_task
    ):
        bob_assigned = await client.get("/api/tasks/assigned", headers=as_user(users["bob"]))
        assert bob_assigned.status_code == 200
        assert [t["task_id"] for t in bob_assigned.json()["tasks"]] == [created_task["task_id"]]

        bob_created = await client.get("/api/tasks/created", headers=as_user(users["bob"]))
        assert bob_created.json()["total"] == 0

        alice_created = await client.get("/api/tasks/created", headers=as_user(users["alice"]))
        assert alice_created.json()["total"] == 1

    async def test_garbage_pagination_params_fall_back(
        self, client: AsyncClient, users, as_user, created_task
    ):
        resp = await client.get(
            "/api/tasks",
            params={"page": "abc", "limit": "0"},
            headers=as_user(users["alice"]),
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["page"] == 1
        assert data["count"] == 1

    async def test_twenty_digit_params_fall_back(
        self, client: AsyncClient, users, as_user, created_task
    ):
        huge = "99999999999999999999"
        resp = await client.get(
            "/api/tasks",
            params={"page": huge, "limit": huge},
            headers=as_user(users["alice"]),
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["page"] == 1
        assert data["count"] == 1

    async def test_largest_page_is_empty(
        self, client: AsyncClient, users, as_user, created_task
    ):
        resp = await client.get(
            "/api/tasks",
            params={"page": str(2**63 - 1), "limit": "3"},
            headers=as_user(users["alice"]),
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["tasks"] == []
        assert data["total"] == 1

    async def test_outsider_sees_nothing(
        self, client: AsyncClient, users, as_user, created_task
    ):
        resp = await client.get("/api/tasks", headers=as_user(users["carol"]))
        assert resp.json() == {"tasks": [], "count": 0, "total": 0, "page": 1, "pages": 0}


class TestSingleTaskApi:
    async def test_get_task(self, client: AsyncClient, users, as_user, created_task):
        resp = await client.get(
            f"/api/tasks/{created_task['task_id']}", headers=as_user(users["bob"])
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["message"] == "Task retrieved successfully"
        assert data["task"]["title"] == "Fix login bug"
        assert data["task"]["assigned_to"]["id"] == users["bob"].user_id

    async def test_get_forbidden(self, client: AsyncClient, users, as_user, created_task):
        resp = await client.get(
            f"/api/tasks/{created_task['task_id']}", headers=as_user(users["carol"])
        )
        assert resp.status_code == 403
        assert resp.json() == {
            "error": {
                "code": "FORBIDDEN",
                "message": "You are not authorized to view this task",
            }
        }

    async def test_get_missing(self, client: AsyncClient, users, as_user):
        resp = await client.get("/api/tasks/01JMISSING000000000000000X", headers=as_user(users["alice"]))
        assert resp.status_code == 404
        assert resp.json()["error"] == {"code": "TASK_NOT_FOUND", "message": "Task not found"}

    async def test_put_replaces_fields(self, client: AsyncClient, users, as_user, created_task):
        body = {
            "title": "Fix login bug (SSO)",
            "description": "Also affects Safari",
            "due_date": _today(),
            "priority": "low",
            "status": "completed",
        }
        resp = await client.put(
            f"/api/tasks/{created_task['task_id']}",
            json=body,
            headers=as_user(users["bob"]),
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["message"] == "Task updated successfully"
        assert data["task"]["title"] == "Fix login bug (SSO)"
        assert data["task"]["status"] == "completed"
        assert data["task"]["created_by"]["id"] == users["alice"].user_id

    async def test_put_partial_400(self, client: AsyncClient, users, as_user, created_task):
        resp = await client.put(
            f"/api/tasks/{created_task['task_id']}",
            json={"title": "Only title"},
            headers=as_user(users["alice"]),
        )
        assert resp.status_code == 400

    async def test_put_without_due_date_keeps_it(
        self, client: AsyncClient, users, as_user, created_task
    ):
        body = {
            "title": "Fix login bug",
            "description": "Users cannot log in with SSO",
            "priority": "medium",
            "status": "pending",
        }
        resp = await client.put(
            f"/api/tasks/{created_task['task_id']}",
            json=body,
            headers=as_user(users["alice"]),
        )
        assert resp.status_code == 200
        task = resp.json()["task"]
        assert task["due_date"] == created_task["due_date"]
        assert task["priority"] == "medium"

    async def test_patch_status(self, client: AsyncClient, users, as_user, created_task):
        resp = await client.patch(
            f"/api/tasks/{created_task['task_id']}/status",
            json={"status": "completed"},
            headers=as_user(users["bob"]),
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["message"] == "Task status updated successfully"
        assert data["task"]["status"] == "completed"

    async def test_patch_invalid_status(self, client: AsyncClient, users, as_user, created_task):
        resp = await client.patch(
            f"/api/tasks/{created_task['task_id']}/status",
            json={"status": "archived"},
            headers=as_user(users["bob"]),
        )
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == (
            "Please provide a valid status (pending or completed)"
        )

    async def test_delete_by_assignee_forbidden(
        self, client: AsyncClient, users, as_user, created_task
    ):
        resp = await client.delete(
            f"/api/tasks/{created_task['task_id']}", headers=as_user(users["bob"])
        )
        assert resp.status_code == 403
        assert resp.json()["error"]["message"] == "Only the task creator can delete this task"

    async def test_delete_by_creator(self, client: AsyncClient, users, as_user, created_task):
        task_id = created_task["task_id"]
        resp = await client.delete(f"/api/tasks/{task_id}", headers=as_user(users["alice"]))
        assert resp.status_code == 200
        assert resp.json() == {"message": "Task deleted successfully", "task_id": task_id}

        resp = await client.get(f"/api/tasks/{task_id}", headers=as_user(users["alice"]))
        assert resp.status_code == 404


class TestUsersApi:
    async def test_list_users(self, client: AsyncClient, users, as_user):
        resp = await client.get("/api/users", headers=as_user(users["alice"]))
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 3
        assert data["users"][0] == {
            "id": users["alice"].user_id,
            "name": "Alice",
            "email": "alice@example.com",
        }

    async def test_list_users_requires_identity(self, client: AsyncClient, users):
        resp = await client.get("/api/users")
        assert resp.status_code == 401
