"""Protocol repository (implemented in memory and with SQLAlchemy)"""

from typing import Optional, Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel:
        """Get game by ID. Raises GameNotFoundError if no record exists."""
        ...

    def list_games(self) -> list[tuple[UUID, GameModel]]:
        """All stored games with their IDs."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(
        self, game_id: UUID, game: GameModel, expected_version: Optional[int] = None
    ) -> GameModel:
        """
        Replace an existing record.

        If expected_version is given, the update only succeeds if the stored record still has that version (compare-and-swap).
        Raises GameNotFoundError or ConcurrencyConflictError.
        """
        ...

    def delete_game(self, game_id: UUID) -> None:
        """Remove a game's record (no-op if it does not exist)."""
        ...
