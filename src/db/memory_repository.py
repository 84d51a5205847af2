"""Implementation of (Game)Repository keeping all records in a dictionary"""

import logging
import threading
from copy import deepcopy
from dataclasses import replace
from typing import Optional
from uuid import UUID, uuid4

from src.core.exceptions import ConcurrencyConflictError, GameNotFoundError
from src.core.models import GameModel

logger = logging.getLogger(__name__)


class InMemoryGameRepository:
    """Data lives as long as the process. Safe to share between threads."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}
        self._lock = threading.Lock()

    def get_game(self, game_id: UUID) -> GameModel:
        """Get game by ID. Raises GameNotFoundError if no record exists."""
        with self._lock:
            game = self._games.get(game_id)
        if game is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        logger.debug("Fetched game %s (version %d)", game_id, game.version)
        return deepcopy(game)

    def list_games(self) -> list[tuple[UUID, GameModel]]:
        with self._lock:
            return [(game_id, deepcopy(game)) for game_id, game in self._games.items()]

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        new_id = uuid4()
        stored = replace(deepcopy(game), version=0)
        with self._lock:
            self._games[new_id] = stored
        logger.info("Created game %s", new_id)
        return deepcopy(stored), new_id

    def update_game(
        self, game_id: UUID, game: GameModel, expected_version: Optional[int] = None
    ) -> GameModel:
        """Compare-and-swap: check the version and write under the same lock."""
        with self._lock:
            current = self._games.get(game_id)
            if current is None:
                raise GameNotFoundError(f"Game with {game_id=} not found.")
            if expected_version is not None and current.version != expected_version:
                raise ConcurrencyConflictError(
                    f"Game with {game_id=} was modified by another operation "
                    f"(expected version {expected_version}, found {current.version})."
                )
            stored = replace(deepcopy(game), version=current.version + 1)
            self._games[game_id] = stored
        return deepcopy(stored)

    def delete_game(self, game_id: UUID) -> None:
        """Remove a game's record."""
        with self._lock:
            removed = self._games.pop(game_id, None)
        if removed is not None:
            logger.info("Deleted game %s", game_id)
