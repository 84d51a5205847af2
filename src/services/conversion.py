"""Translate between the engine's immutable values and the transport-safe GameModel."""

from datetime import datetime

from src.core.models import GameModel, MoveModel, PlayerName
from src.core.shared_types import Status
from src.tictactoe.game import Draw, Game, Winner
from src.tictactoe.marker import Marker
from src.tictactoe.move import Move
from src.tictactoe.position import Position


def to_move_model(move: Move) -> MoveModel:
    return MoveModel(
        position=move.position.index,
        marker=move.marker.value,
        timestamp=move.timestamp.isoformat(),
    )


def from_move_model(model: MoveModel) -> Move:
    return Move(
        position=Position(model.position),
        marker=Marker(model.marker),
        timestamp=datetime.fromisoformat(model.timestamp),
    )


def game_status(game: Game) -> Status:
    if isinstance(game, Winner):
        return Status.WINNER
    if isinstance(game, Draw):
        return Status.DRAW
    return Status.IN_PROGRESS


def game_to_model(
    game: Game, players: dict[Marker, PlayerName], version: int = 0
) -> GameModel:
    """Encode into a format the repository can store"""
    return GameModel(
        moves=[to_move_model(move) for move in game.moves],
        registered_players={marker.value: name for marker, name in players.items()},
        status=game_status(game).value,
        winner=game.winner.value if game.winner else None,
        version=version,
    )


def game_from_model(model: GameModel) -> Game:
    """
    Rebuild the Game by replaying the stored moves.

    NOTE the stored status/winner are NOT trusted: replaying the history re-validates every move and re-derives the outcome.
    """
    return Game.from_moves(from_move_model(move) for move in model.moves)


def players_from_model(model: GameModel) -> dict[Marker, PlayerName]:
    return {Marker(marker): name for marker, name in model.registered_players.items()}
