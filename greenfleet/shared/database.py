"""Database configuration utilities."""

import os
from dataclasses import dataclass

import pymysql
from pymysql.cursors import DictCursor


@dataclass
class DBConfig:
    """Database connection configuration."""
    host: str
    user: str
    password: str
    database: str

    @classmethod
    def from_env(cls) -> "DBConfig":
        """Create config from environment variables."""
        return cls(
            host=os.getenv("DB_HOST", "localhost"),
            user=os.getenv("DB_USER", ""),
            password=os.getenv("DB_PASSWORD", ""),
            database=os.getenv("DB_DATABASE", "greenfleet"),
        )


def connect(db_config: DBConfig) -> pymysql.Connection:
    """Open a new connection returning rows as dictionaries."""
    return pymysql.connect(
        host=db_config.host,
        user=db_config.user,
        password=db_config.password,
        database=db_config.database,
        cursorclass=DictCursor,
    )
