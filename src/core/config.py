"""Application settings, read from environment variables."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    database_url: str
    sql_echo: bool
    log_level: str
    move_retries: int


@lru_cache
def get_settings() -> Settings:
    return Settings(
        database_url=os.environ.get("TICTACTOE_DATABASE_URL", "sqlite:///tictactoe.db"),
        sql_echo=_env_flag("TICTACTOE_SQL_ECHO"),
        log_level=os.environ.get("TICTACTOE_LOG_LEVEL", "INFO").upper(),
        move_retries=int(os.environ.get("TICTACTOE_MOVE_RETRIES", "3")),
    )


def configure_logging(level: str | None = None) -> None:
    """Set up the root logger once (at application start-up)."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format=LOG_FORMAT,
    )
