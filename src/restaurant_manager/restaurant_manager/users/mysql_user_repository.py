from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_number, split_csv
from .model import User
from .repository import UserRepository

_SELECT_USER = """
    SELECT u.user_id, u.full_name, u.email, u.password_hash, u.role, u.is_active,
           u.vacation_entitlement, u.vacation_carryover,
           GROUP_CONCAT(p.permission_key) AS permission_keys
    FROM users u
    LEFT JOIN user_permissions p ON p.user_id = u.user_id
"""


def _row_to_user(row: dict) -> User:
    entitlement = row.get("vacation_entitlement")
    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        permissions=frozenset(split_csv(row.get("permission_keys"))),
        is_active=bool(row.get("is_active", True)),
        vacation_entitlement=normalize_mysql_number(entitlement) if entitlement is not None else None,
        vacation_carryover=normalize_mysql_number(row.get("vacation_carryover")),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_USER + " WHERE u.user_id=%s GROUP BY u.user_id", (int(user_id),))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_USER + " WHERE u.email=%s GROUP BY u.user_id", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def list_active(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_USER + " WHERE u.is_active=1 GROUP BY u.user_id ORDER BY u.full_name")
            return [_row_to_user(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_USER + " GROUP BY u.user_id ORDER BY u.is_active DESC, u.full_name")
            return [_row_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        full_name: str,
        email: str,
        password_hash: str,
        role: Role,
        permissions: Sequence[str],
        vacation_entitlement: Optional[float],
        vacation_carryover: float,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(full_name, email, password_hash, role, is_active, vacation_entitlement, vacation_carryover)
                VALUES(%s,%s,%s,%s,1,%s,%s)
                """,
                (full_name, email, password_hash, role.value, vacation_entitlement, vacation_carryover),
            )
            user_id = int(cur.lastrowid)
            _replace_permissions(cur, user_id, permissions)
            return user_id

    def update_user(self, user: User) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 FROM users WHERE user_id=%s", (user.user_id,))
            if not cur.fetchall():
                return False
            cur.execute(
                """
                UPDATE users
                SET full_name=%s, email=%s, password_hash=%s, role=%s, is_active=%s,
                    vacation_entitlement=%s, vacation_carryover=%s
                WHERE user_id=%s
                """,
                (
                    user.full_name,
                    user.email,
                    user.password_hash,
                    user.role.value,
                    1 if user.is_active else 0,
                    user.vacation_entitlement,
                    user.vacation_carryover,
                    user.user_id,
                ),
            )
            _replace_permissions(cur, user.user_id, sorted(user.permissions))
            return True

    def set_active(self, *, user_id: int, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET is_active=%s WHERE user_id=%s", (1 if is_active else 0, int(user_id)))
            return cur.rowcount > 0


def _replace_permissions(cur, user_id: int, keys: Sequence[str]) -> None:
    cur.execute("DELETE FROM user_permissions WHERE user_id=%s", (user_id,))
    if keys:
        cur.executemany(
            "INSERT INTO user_permissions(user_id, permission_key) VALUES(%s,%s)",
            [(user_id, key) for key in keys],
        )
