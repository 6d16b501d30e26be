"""CLI 入口模块 -- python -m tasklane.core <command>

支持的命令：
  init-db      初始化数据库
  add-user     新增用户目录条目
  seed-admin   创建默认管理员（已存在则跳过）
  list-users   列出用户目录
"""

import argparse
import asyncio
import sys
from datetime import UTC, datetime

import aiosqlite
from ulid import ULID

from .config import ADMIN_EMAIL, ADMIN_NAME, get_db_path
from .models import User, UserRole


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m tasklane.core",
        description="TaskLane 数据库与用户目录管理",
    )
    parser.add_argument(
        "--db",
        help="SQLite 数据库路径（默认 TASKLANE_DB_PATH 或 data/sqlite/tasklane.db）",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="初始化数据库")

    s = sub.add_parser("add-user", help="新增用户")
    s.add_argument("name", help="用户名")
    s.add_argument("email", help="邮箱（唯一）")
    s.add_argument("--admin", action="store_true", help="设为管理员")

    sub.add_parser("seed-admin", help="创建默认管理员")
    sub.add_parser("list-users", help="列出用户目录")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI 主入口"""
    ns = build_parser().parse_args(argv)
    db_path = ns.db or get_db_path()
    return asyncio.run(_run(ns, db_path))


async def _run(ns: argparse.Namespace, db_path: str) -> int:
    from .store import create_store_group

    store_group = await create_store_group(db_path)
    try:
        if ns.command == "init-db":
            print(f"数据库已初始化: {db_path}")
            return 0
        if ns.command == "add-user":
            role = UserRole.ADMIN if ns.admin else UserRole.USER
            return await _add_user(store_group, ns.name, ns.email, role)
        if ns.command == "seed-admin":
            return await seed_admin(store_group)
        if ns.command == "list-users":
            users = await store_group.user_directory.list_users()
            if not users:
                print("用户目录为空")
            for user in users:
                print(f"{user.user_id}  {user.role.value:<5}  {user.name} <{user.email}>")
            return 0
    finally:
        await store_group.conn.close()

    print(f"未知命令: {ns.command}", file=sys.stderr)
    return 1


async def _add_user(store_group, name: str, email: str, role: UserRole) -> int:
    user = User(
        user_id=str(ULID()),
        name=name,
        email=email,
        role=role,
        created_at=datetime.now(UTC),
    )
    try:
        await store_group.user_directory.create_user(user)
    except aiosqlite.IntegrityError:
        print(f"邮箱已存在: {email}", file=sys.stderr)
        return 1
    print(f"已创建用户 {user.user_id}: {name} <{email}>")
    return 0


async def seed_admin(store_group) -> int:
    """创建默认管理员，已存在时直接返回"""
    existing = await store_group.user_directory.get_user_by_email(ADMIN_EMAIL)
    if existing is not None:
        print("管理员已存在")
        print(f"ID: {existing.user_id}")
        print(f"Email: {existing.email}")
        return 0
    return await _add_user(store_group, ADMIN_NAME, ADMIN_EMAIL, UserRole.ADMIN)


if __name__ == "__main__":
    sys.exit(main())
