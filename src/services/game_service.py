"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    MoveRequest,
)
from src.core.config import get_settings
from src.core.exceptions import ConcurrencyConflictError, GameError, GameStateError
from src.core.models import GameModel
from src.db.repository import GameRepository
from src.services.conversion import (
    game_from_model,
    game_status,
    game_to_model,
    players_from_model,
)
from src.tictactoe.game import Game
from src.tictactoe.marker import Marker
from src.tictactoe.move import Move

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for a tic-tac-toe game."""

    def __init__(
        self, repository: GameRepository, max_conflict_retries: Optional[int] = None
    ) -> None:
        self.repo = repository
        self.max_conflict_retries = (
            max_conflict_retries
            if max_conflict_retries is not None
            else get_settings().move_retries
        )

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game. The creator always plays X (and so moves first)."""
        new_game = Game.create()
        game_data = game_to_model(new_game, players={Marker.X: request.player_name})

        stored_game, game_id = self.repo.create_game(game_data)
        logger.info("Player %r created game %s", request.player_name, game_id)
        return self._create_game_response(game_id, stored_game)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game. Gets the O marker."""
        stored_model = self.repo.get_game(request.game_id)
        players = players_from_model(stored_model)

        if request.player_name in players.values():
            raise GameStateError(
                f"Player {request.player_name!r} already joined game {request.game_id}."
            )
        if Marker.O in players:
            raise GameStateError(
                f"Cannot join game {request.game_id}. Game is not accepting new players."
            )

        players[Marker.O] = request.player_name
        game = game_from_model(stored_model)
        with_player = game_to_model(game, players, stored_model.version)
        updated = self.repo.update_game(
            request.game_id, with_player, expected_version=stored_model.version
        )
        logger.info("Player %r joined game %s", request.player_name, request.game_id)
        return self._create_game_response(request.game_id, updated)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self.repo.get_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def list_games(self) -> list[GameResponse]:
        """
        Show all recorded games.
        ----
        A record whose move history can no longer be replayed is left out of the listing (and logged),
        so one corrupt game does not hide all the others. Fetching that game directly still raises.
        """
        responses = []
        for game_id, model in self.repo.list_games():
            try:
                responses.append(self._create_game_response(game_id, model))
            except GameError as e:
                logger.warning("Skipping game %s in listing: %s", game_id, e)
        return responses

    def make_move(self, request: MoveRequest) -> GameResponse:
        """
        Make a move attempt.
        ----

        1. read the stored game and rebuild it from its moves
        2. find the marker of the requesting player
        3. let the engine apply the move (raises for any rule violation)
        4. write back, but only if nobody else changed the game in the meantime

        When another request did get there first, start over from 1. (the move may well be illegal by then).
        """
        attempt = 0
        while True:
            stored_model = self.repo.get_game(request.game_id)
            after_move = self._apply_move(stored_model, request)
            try:
                updated = self.repo.update_game(
                    request.game_id, after_move, expected_version=stored_model.version
                )
            except ConcurrencyConflictError:
                attempt += 1
                if attempt > self.max_conflict_retries:
                    raise
                logger.warning(
                    "Concurrent update of game %s, retrying move (attempt %d/%d)",
                    request.game_id,
                    attempt,
                    self.max_conflict_retries,
                )
                continue

            logger.info(
                "Player %r played position %d in game %s (%s)",
                request.player_name,
                request.position,
                request.game_id,
                updated.status,
            )
            return self._create_game_response(request.game_id, updated)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _apply_move(self, stored_model: GameModel, request: MoveRequest) -> GameModel:
        players = players_from_model(stored_model)
        marker = self._player_marker(players, request.player_name, request.game_id)
        if Marker.O not in players:
            raise GameStateError(
                f"Game {request.game_id} is still waiting for a second player."
            )

        game = game_from_model(stored_model)
        next_game = game.with_move(Move.create(request.position, marker))
        return game_to_model(next_game, players, stored_model.version)

    def _player_marker(
        self, players: dict[Marker, str], player_name: str, game_id: UUID
    ) -> Marker:
        marker = next(
            (marker for marker, name in players.items() if name == player_name), None
        )
        if marker is None:
            raise GameStateError(
                f"Player {player_name!r} is not registered for game {game_id}."
            )
        return marker

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = game_from_model(model)
        return GameResponse(
            game_id=game_id,
            players=model.registered_players,
            board=[marker.value if marker else None for marker in game.board.markers()],
            current_player=game.current_player.value if game.current_player else None,
            is_complete=game.is_complete,
            winner=game.winner.value if game.winner else None,
            status=game_status(game),
            move_history=[move.position.index for move in game.moves],
        )
