"""TaskLane 异常体系

领域层只抛出以下异常，HTTP 状态码映射仅在 gateway 层使用。
面向调用方的 message 不包含底层驱动错误细节。
"""


class TaskLaneError(Exception):
    """TaskLane 基础异常"""

    code: str = "INTERNAL_ERROR"
    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        """REST 错误响应体"""
        return {"error": {"code": self.code, "message": self.message}}


class InvalidInputError(TaskLaneError):
    """必填字段缺失、截止日期非法、状态值非法等

    在任何写入之前抛出，不产生副作用。
    """

    code = "INVALID_INPUT"
    http_status = 400


class TaskNotFoundError(TaskLaneError):
    """任务不存在（先于授权检查）"""

    code = "TASK_NOT_FOUND"
    http_status = 404

    def __init__(self, task_id: str) -> None:
        super().__init__("Task not found")
        self.task_id = task_id


class ForbiddenError(TaskLaneError):
    """任务存在但请求者不满足授权条件"""

    code = "FORBIDDEN"
    http_status = 403


class StoreFailureError(TaskLaneError):
    """存储操作意外失败（超时、连接、约束冲突、引用用户缺失）

    不重试，由调用方决定后续处理。
    """

    code = "STORE_FAILURE"
    http_status = 500

    def __init__(self, operation: str, message: str = "Server error") -> None:
        super().__init__(message)
        self.operation = operation


class UnauthenticatedError(TaskLaneError):
    """缺少认证身份（由上游认证层提供）"""

    code = "UNAUTHENTICATED"
    http_status = 401

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)
