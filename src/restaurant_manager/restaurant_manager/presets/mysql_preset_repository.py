from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import RolePresetRepository


class MySQLRolePresetRepository(RolePresetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_keys(self, role: Role) -> Optional[Sequence[str]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 FROM role_permission_presets WHERE role=%s", (role.value,))
            if not cur.fetchall():
                return None
            cur.execute(
                "SELECT permission_key FROM role_preset_permissions WHERE role=%s ORDER BY position",
                (role.value,),
            )
            return [r["permission_key"] for r in fetchall(cur)]

    def save_keys(self, role: Role, keys: Sequence[str]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO role_permission_presets(role) VALUES(%s)
                ON DUPLICATE KEY UPDATE updated_at=CURRENT_TIMESTAMP
                """,
                (role.value,),
            )
            cur.execute("DELETE FROM role_preset_permissions WHERE role=%s", (role.value,))
            if keys:
                cur.executemany(
                    "INSERT INTO role_preset_permissions(role, permission_key, position) VALUES(%s,%s,%s)",
                    [(role.value, key, i) for i, key in enumerate(keys)],
                )
