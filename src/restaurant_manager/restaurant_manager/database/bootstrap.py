from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DBConfig, DatabaseConnection


@dataclass(frozen=True)
class DemoUser:
    full_name: str
    email: str
    password: str
    role: Role
    permissions: Sequence[str] = ()
    vacation_carryover: float = 0


DEMO_USERS: tuple[DemoUser, ...] = (
    DemoUser("System Architect", "architect@demo.local", "architect123", Role.SYSTEM_ARCHITECT),
    DemoUser(
        "Admin Demo",
        "admin@demo.local",
        "admin123",
        Role.ADMIN,
        permissions=(
            "users:access",
            "users:manage",
            "users:permissions",
            "vacation:access",
            "vacation:create",
            "vacation:approve",
            "vacation:blocked_days",
        ),
    ),
    DemoUser(
        "Crew Demo",
        "crew@demo.local",
        "crew123",
        Role.CREW,
        permissions=("vacation:create",),
        vacation_carryover=5,
    ),
)


def _connect(db_config: dict, *, with_database: bool = True):
    return DatabaseConnection(DBConfig.from_mapping(db_config)).connect(with_database=with_database)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema/seed file on ';' outside of quotes."""

    buf: list[str] = []
    quote = ""
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif ch in ("'", '"'):
            if not quote:
                quote = ch
            elif quote == ch:
                quote = ""
        elif ch == ";" and not quote:
            buf.pop()
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql_file(db_config: dict, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    database = DBConfig.from_mapping(db_config).database
    conn = _connect(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _exec_sql_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _exec_sql_file(db_config, seed_path)


def ensure_demo_users(db_config: dict, users: Sequence[DemoUser] = DEMO_USERS) -> None:
    conn = _connect(db_config)
    try:
        cur = conn.cursor(dictionary=True)

        for u in users:
            password_hash = generate_password_hash(u.password)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (u.email,))
            existing = cur.fetchone()
            if existing:
                user_id = int(existing["user_id"])
                cur.execute(
                    """
                    UPDATE users
                    SET full_name=%s, password_hash=%s, role=%s, vacation_carryover=%s, is_active=1
                    WHERE user_id=%s
                    """,
                    (u.full_name, password_hash, u.role.value, u.vacation_carryover, user_id),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (full_name, email, password_hash, role, vacation_carryover)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (u.full_name, u.email, password_hash, u.role.value, u.vacation_carryover),
                )
                user_id = int(cur.lastrowid)

            cur.execute("DELETE FROM user_permissions WHERE user_id=%s", (user_id,))
            for key in u.permissions:
                cur.execute(
                    "INSERT INTO user_permissions (user_id, permission_key) VALUES (%s, %s)",
                    (user_id, key),
                )

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
