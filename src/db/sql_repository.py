"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from dataclasses import asdict
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from src.core.exceptions import ConcurrencyConflictError, GameNotFoundError
from src.core.models import GameModel, MoveModel
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel:
        """Get game by ID. Raises GameNotFoundError if no record exists."""
        game_db = self._fetch_game(game_id)
        if game_db is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        logger.debug("Fetched game %s (version %d)", game_id, game_db.version)
        return self._to_model(game_db)

    def list_games(self) -> list[tuple[UUID, GameModel]]:
        query = select(DBGame).order_by(DBGame.created_at)
        return [(game_db.id, self._to_model(game_db)) for game_db in self.db.scalars(query)]

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            moves=[asdict(move) for move in game.moves],
            registered_players=game.registered_players,
            status=game.status,
            winner=game.winner,
            version=0,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        logger.info("Created game %s", new_id)
        return self._to_model(game_db), new_id

    def update_game(
        self, game_id: UUID, game: GameModel, expected_version: Optional[int] = None
    ) -> GameModel:
        """
        Replace the record in a single UPDATE statement.
        ----

        The version check is part of the WHERE clause, so the check and the write cannot be interleaved with another writer.
        No rows affected means: either the game does not exist, or somebody else updated it first.
        """
        statement = (
            update(DBGame)
            .where(DBGame.id == game_id)
            .values(
                moves=[asdict(move) for move in game.moves],
                registered_players=game.registered_players,
                status=game.status,
                winner=game.winner,
                version=DBGame.version + 1,
            )
        )
        if expected_version is not None:
            statement = statement.where(DBGame.version == expected_version)

        result = self.db.execute(statement)
        if result.rowcount == 0:
            self.db.rollback()
            if self._fetch_game(game_id) is None:
                raise GameNotFoundError(f"Game with {game_id=} not found.")
            raise ConcurrencyConflictError(
                f"Game with {game_id=} was modified by another operation (expected version {expected_version})."
            )
        self.db.commit()

        game_db = self._fetch_game(game_id)
        # for the type checker: the row was just updated within this session
        assert game_db is not None
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if game_db is None:
            return
        self.db.delete(game_db)
        self.db.commit()
        logger.info("Deleted game %s", game_id)

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            moves=[MoveModel(**move) for move in game_db.moves],
            registered_players=dict(game_db.registered_players),
            status=game_db.status,
            winner=game_db.winner,
            version=game_db.version,
        )
