"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、分页默认值等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKLANE_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKLANE_DB_PATH",
        str(_get_base_dir() / "sqlite" / "tasklane.db"),
    )


# 默认页码（从 1 开始）
DEFAULT_PAGE: int = 1

# 默认每页条数
DEFAULT_PAGE_SIZE: int = int(os.environ.get("TASKLANE_DEFAULT_PAGE_SIZE", "3"))

# limit 超出 [1, 阈值] 时仅记录告警，不做截断
PAGE_LIMIT_WARN_THRESHOLD: int = int(
    os.environ.get("TASKLANE_PAGE_LIMIT_WARN_THRESHOLD", "100")
)

# seed-admin 使用的管理员账号
ADMIN_NAME: str = "Admin User"
ADMIN_EMAIL: str = "admin@taskmanager.com"
