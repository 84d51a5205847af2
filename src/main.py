"""
Application start-up: wires configuration, logging, persistence and the service together.

An HTTP layer (or any other front end) calls `startup()` once, then builds a `GameService` per database session.
"""

import logging

from sqlalchemy.orm import Session

from src.core.config import configure_logging, get_settings
from src.db import database
from src.db.sql_repository import SQLGameRepository
from src.services.game_service import GameService

logger = logging.getLogger(__name__)


def startup() -> None:
    """Configure the root logger and make sure the tables exist."""
    configure_logging()
    database.init_db()
    logger.info("Tic-tac-toe backend ready (database: %s)", get_settings().database_url)


def create_game_service(db_session: Session) -> GameService:
    return GameService(SQLGameRepository(db_session))
