"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.models import GameModel, MoveModel
from src.core.shared_types import Status
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def new_game_model() -> GameModel:
    """A freshly created game: only X registered, no moves."""
    return GameModel(
        moves=[],
        registered_players={"X": "player_x"},
        status=Status.IN_PROGRESS,
        winner=None,
    )


@pytest.fixture
def game_model_after_two_moves() -> GameModel:
    return GameModel(
        moves=[
            MoveModel(position=4, marker="X", timestamp="2026-01-01T12:00:00+00:00"),
            MoveModel(position=0, marker="O", timestamp="2026-01-01T12:00:05+00:00"),
        ],
        registered_players={"X": "player_x", "O": "player_o"},
        status=Status.IN_PROGRESS,
        winner=None,
    )
