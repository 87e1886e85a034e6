from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import mysql.connector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    charset: str = "utf8mb4"
    # Attendance days and payroll months are stored as local wall-clock values.
    time_zone: str = "+05:30"

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "cafe_backoffice")),
            charset=str(db_config.get("charset", "utf8mb4")),
            time_zone=str(db_config.get("time_zone", "+05:30")),
        )


class DatabaseConnection:
    """Process-wide handle that opens one short-lived MySQL connection per repository call."""

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            logger.debug("Connecting repositories to %s@%s/%s", config.user, config.host, config.database)
            cls._instance = cls(config)
        return cls._instance

    def connect(self):
        conn = mysql.connector.connect(
            host=self._config.host,
            port=self._config.port,
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            charset=self._config.charset,
            autocommit=False,
        )
        conn.time_zone = self._config.time_zone
        return conn
