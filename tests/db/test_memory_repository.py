"""Unit tests for src/db/memory_repository.py"""

from concurrent.futures import ThreadPoolExecutor
from uuid import uuid4

import pytest

from src.core.exceptions import ConcurrencyConflictError, GameNotFoundError
from src.core.models import GameModel
from src.db.memory_repository import InMemoryGameRepository


@pytest.fixture
def repo() -> InMemoryGameRepository:
    return InMemoryGameRepository()


def test_create_game_returns_unique_ids(
    repo: InMemoryGameRepository, new_game_model: GameModel
) -> None:
    _, first_id = repo.create_game(new_game_model)
    _, second_id = repo.create_game(new_game_model)
    assert first_id != second_id


def test_get_created_game(repo: InMemoryGameRepository, new_game_model: GameModel) -> None:
    stored, game_id = repo.create_game(new_game_model)
    assert repo.get_game(game_id) == stored == new_game_model


def test_get_unknown_game(repo: InMemoryGameRepository) -> None:
    with pytest.raises(GameNotFoundError):
        repo.get_game(uuid4())


def test_stored_game_is_isolated_from_caller(
    repo: InMemoryGameRepository, new_game_model: GameModel
) -> None:
    """Mutating a model after handing it over (or after reading it) must not change the record"""
    _, game_id = repo.create_game(new_game_model)
    new_game_model.registered_players["O"] = "sneaky"
    fetched = repo.get_game(game_id)
    fetched.registered_players["O"] = "sneaky"

    assert repo.get_game(game_id).registered_players == {"X": "player_x"}


def test_update_game(
    repo: InMemoryGameRepository,
    new_game_model: GameModel,
    game_model_after_two_moves: GameModel,
) -> None:
    stored, game_id = repo.create_game(new_game_model)
    updated = repo.update_game(
        game_id, game_model_after_two_moves, expected_version=stored.version
    )
    assert updated.moves == game_model_after_two_moves.moves
    assert updated.version == 1
    assert repo.get_game(game_id) == updated


def test_stale_update_is_rejected(
    repo: InMemoryGameRepository,
    new_game_model: GameModel,
    game_model_after_two_moves: GameModel,
) -> None:
    stored, game_id = repo.create_game(new_game_model)
    repo.update_game(game_id, game_model_after_two_moves, expected_version=stored.version)

    with pytest.raises(ConcurrencyConflictError):
        repo.update_game(game_id, new_game_model, expected_version=stored.version)
    assert repo.get_game(game_id).moves == game_model_after_two_moves.moves


def test_update_without_expected_version_always_writes(
    repo: InMemoryGameRepository,
    new_game_model: GameModel,
    game_model_after_two_moves: GameModel,
) -> None:
    _, game_id = repo.create_game(new_game_model)
    repo.update_game(game_id, game_model_after_two_moves)
    assert repo.update_game(game_id, new_game_model).version == 2


def test_update_unknown_game(repo: InMemoryGameRepository, new_game_model: GameModel) -> None:
    with pytest.raises(GameNotFoundError):
        repo.update_game(uuid4(), new_game_model, expected_version=0)


def test_only_one_concurrent_writer_wins(
    repo: InMemoryGameRepository,
    new_game_model: GameModel,
    game_model_after_two_moves: GameModel,
) -> None:
    """Many threads all read version 0 and try to write: exactly one compare-and-swap can succeed."""
    stored, game_id = repo.create_game(new_game_model)

    def _attempt(_: int) -> bool:
        try:
            repo.update_game(
                game_id, game_model_after_two_moves, expected_version=stored.version
            )
        except ConcurrencyConflictError:
            return False
        return True

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(_attempt, range(32)))

    assert results.count(True) == 1
    assert repo.get_game(game_id).version == 1


def test_list_games(repo: InMemoryGameRepository, new_game_model: GameModel) -> None:
    assert repo.list_games() == []
    _, game_id = repo.create_game(new_game_model)
    assert repo.list_games() == [(game_id, new_game_model)]


def test_delete_game(repo: InMemoryGameRepository, new_game_model: GameModel) -> None:
    _, game_id = repo.create_game(new_game_model)
    repo.delete_game(game_id)
    with pytest.raises(GameNotFoundError):
        repo.get_game(game_id)

    # deleting again is fine
    repo.delete_game(game_id)
