from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_mapping(cls, db_config: Mapping) -> "DBConfig":
        """Build from a settings ``DB_CONFIG`` dict (see config/*.py)."""
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "restaurant_db")),
        )


class DatabaseConnection:
    """Shared connection factory for the MySQL repositories.

    Every repository call opens its own short-lived connection through
    ``db_cursor``; nothing is pooled. Schema and names are utf8mb4, matching
    database/schema.sql.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        # A different config (e.g. APP_ENV switched to testing) replaces the shared factory.
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        kwargs = dict(
            host=self._config.host,
            port=self._config.port,
            user=self._config.user,
            password=self._config.password,
            charset="utf8mb4",
            collation="utf8mb4_unicode_ci",
            use_pure=True,
        )
        if with_database:
            kwargs["database"] = self._config.database
        return mysql.connector.connect(**kwargs)
