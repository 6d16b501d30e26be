"""全局异常处理

- TaskLaneError -> {"error": {"code", "message"}}，状态码取 http_status
- RequestValidationError -> 400 INVALID_INPUT
- 其他异常 -> 500 INTERNAL_ERROR，不暴露内部细节
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from tasklane.core.errors import TaskLaneError

log = structlog.get_logger()


def register_error_handlers(app: FastAPI) -> None:
    """在 app 上注册全部异常处理器"""

    @app.exception_handler(TaskLaneError)
    async def tasklane_error_handler(request: Request, exc: TaskLaneError):
        if exc.http_status >= 500:
            log.error("request_failed", code=exc.code, path=request.url.path)
        else:
            log.info("request_rejected", code=exc.code, path=request.url.path)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        log.info(
            "request_validation_failed",
            path=request.url.path,
            error_count=len(exc.errors()),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "code": "INVALID_INPUT",
                    "message": "Invalid request data",
                    "details": [
                        {
                            "field": ".".join(str(loc) for loc in e["loc"]),
                            "message": e["msg"],
                        }
                        for e in exc.errors()
                    ],
                }
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        log.error(
            "unhandled_exception",
            path=request.url.path,
            error_type=type(exc).__name__,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "Server error",
                }
            },
        )
