"""structlog 配置模块

TASKLANE_LOG_FORMAT=dev（默认）输出 console 格式，json 输出单行 JSON。
标准库 logging（uvicorn、aiosqlite）经 ProcessorFormatter 走同一条处理链，
所有日志行都带 service 字段；请求内的 request_id / requester_id / task_id
由 LoggingMiddleware 绑定后经 merge_contextvars 合入。
Logfire APM 由 LOGFIRE_SEND_TO_LOGFIRE 控制，默认只输出本地日志。
"""

import logging
import os

import structlog
from fastapi import FastAPI

SERVICE_NAME = "tasklane-gateway"

# 第三方库日志默认级别
_QUIET_LOGGERS = ("aiosqlite", "httpx", "uvicorn.access")


def _add_service(_logger, _method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def shared_processors() -> list[structlog.types.Processor]:
    """structlog 与标准库 logging 共用的前置处理链"""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        _add_service,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def build_renderer(log_format: str) -> list[structlog.types.Processor]:
    """按输出格式返回最终渲染步骤（json 模式先把异常展开为字符串）"""
    if log_format == "json":
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return [structlog.dev.ConsoleRenderer()]


def setup_logging() -> None:
    """初始化 structlog 并接管根 logger

    环境变量：
    - TASKLANE_LOG_FORMAT: "json" / "dev"（默认）
    - TASKLANE_LOG_LEVEL: 根 logger 级别（默认 INFO，非法值按 INFO）
    """
    log_format = os.environ.get("TASKLANE_LOG_FORMAT", "dev").lower()
    log_level = os.environ.get("TASKLANE_LOG_LEVEL", "INFO").upper()
    processors = shared_processors()

    structlog.configure(
        processors=[
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *build_renderer(log_format),
            ],
            foreign_pre_chain=processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.getLevelNamesMapping().get(log_level, logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logfire(app: FastAPI) -> None:
    """Logfire 可选初始化

    LOGFIRE_SEND_TO_LOGFIRE="true" 时启用（需要 LOGFIRE_TOKEN，安装 apm extra），
    初始化失败只记录告警。
    """
    if os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() != "true":
        return
    try:
        import logfire

        logfire.configure(service_name=SERVICE_NAME)
        logfire.instrument_fastapi(app)
    except Exception as e:
        structlog.get_logger().warning(
            "logfire_init_failed",
            error_type=type(e).__name__,
        )
