"""Unit tests for src/main.py"""

from unittest.mock import Mock

import pytest
from sqlalchemy import StaticPool, create_engine, inspect
from sqlalchemy.orm import Session

import src.main
from src.api.models import CreateGameRequest, JoinGameRequest, MoveRequest
from src.core.shared_types import Status
from src.db import database
from src.db.sql_repository import SQLGameRepository
from src.main import create_game_service, startup


def test_startup_configures_logging_and_creates_tables(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    test_engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    configure_logging = Mock()
    monkeypatch.setattr(database, "engine", test_engine)
    monkeypatch.setattr(src.main, "configure_logging", configure_logging)

    startup()

    configure_logging.assert_called_once_with()
    assert "games" in inspect(test_engine).get_table_names()


def test_service_plays_a_game_through_sql_repository(db_session_repo: Session) -> None:
    service = create_game_service(db_session_repo)
    assert isinstance(service.repo, SQLGameRepository)

    game_id = service.create_new_game(CreateGameRequest(player_name="alice")).game_id
    service.join_game(JoinGameRequest(game_id=game_id, player_name="bob"))
    for player, position in [("alice", 0), ("bob", 3), ("alice", 1), ("bob", 4)]:
        service.make_move(MoveRequest(game_id=game_id, player_name=player, position=position))
    response = service.make_move(
        MoveRequest(game_id=game_id, player_name="alice", position=2)
    )

    assert response.status == Status.WINNER
    assert response.winner == "X"
    assert service.repo.get_game(game_id).version == 6
