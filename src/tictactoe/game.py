"""
The Game is the entrypoint into the domain layer for the service layer.

A game is always in exactly one of three states:
* InProgress: moves can still be made.
* Winner: one of the markers completed a line. Terminal.
* Draw: the board is full and nobody completed a line. Terminal.

Nothing is ever mutated: each move produces a new Game, and it is up to the caller to replace its stored copy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from src.core.exceptions import GameAlreadyCompleteError, InvalidMoveError
from src.tictactoe.board import EMPTY_BOARD, GameBoard
from src.tictactoe.marker import Marker
from src.tictactoe.move import Move
from src.tictactoe.square import Taken

# 3 rows, 3 columns, 2 diagonals
WINNING_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def has_winner(board: GameBoard, marker: Marker) -> bool:
    """Did this marker claim all three squares of any line?"""
    return any(
        all(board[idx] == Taken(marker) for idx in line) for line in WINNING_LINES
    )


def is_draw(board: GameBoard) -> bool:
    return (
        board.is_full()
        and not has_winner(board, Marker.X)
        and not has_winner(board, Marker.O)
    )


def _is_game_over(board: GameBoard) -> bool:
    return has_winner(board, Marker.X) or has_winner(board, Marker.O) or is_draw(board)


@dataclass(frozen=True)
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: GameBoard

    # every state declares its own history field (after any state-specific fields)
    if TYPE_CHECKING:
        moves: tuple[Move, ...]

    def __post_init__(self) -> None:
        if type(self) is Game:
            raise TypeError(
                "Game is abstract: use Game.create() / Game.from_moves(), or one of InProgress, Winner, Draw."
            )

    @classmethod
    def create(cls) -> Game:
        return InProgress(EMPTY_BOARD, ())

    @classmethod
    def from_moves(cls, moves: Iterable[Move]) -> Game:
        """
        Rebuild a game from its history of moves
        ----

        Every move is validated against the board it is played on (range, free square, correct turn).
        Only the final move may end the game. Anything played after a completed line is rejected.
        """
        history = tuple(moves)
        if not history:
            return cls.create()

        board = EMPTY_BOARD
        for move in history[:-1]:
            board = board.with_move(move)
            if _is_game_over(board):
                raise InvalidMoveError(
                    f"Invalid move sequence: game already ended after {move.marker} played position {move.position.index}."
                )

        return _classify(board, history[-1], history)

    @property
    def is_complete(self) -> bool:
        return not isinstance(self, InProgress)

    @property
    def current_player(self) -> Optional[Marker]:
        """Whose turn it is. Finished games have no current player."""
        return None

    @property
    def winner(self) -> Optional[Marker]:
        return None

    def with_move(self, move: Move) -> Game:
        """Make a move. Only possible while the game is in progress."""
        raise GameAlreadyCompleteError(
            f"Game is already complete. Cannot play position {move.position.index}."
        )


@dataclass(frozen=True)
class InProgress(Game):
    moves: tuple[Move, ...]

    @property
    def current_player(self) -> Optional[Marker]:
        return self.board.next_marker

    def with_move(self, move: Move) -> Game:
        return _classify(self.board, move, self.moves + (move,))


@dataclass(frozen=True)
class Winner(Game):
    winning_player: Marker
    moves: tuple[Move, ...]

    @property
    def winner(self) -> Optional[Marker]:
        return self.winning_player


@dataclass(frozen=True)
class Draw(Game):
    moves: tuple[Move, ...]


def _classify(board: GameBoard, move: Move, moves: tuple[Move, ...]) -> Game:
    """
    Apply the move to the board and decide what state the game ends up in.
    ----

    Whether the move ends the game is only known after making it. If it does, the move gets applied a second time
    (on the original board) with the end-of-game flag set, so all remaining open squares become Unavailable.
    """
    next_board = board.with_move(move)
    if has_winner(next_board, move.marker) or is_draw(next_board):
        next_board = board.with_move(move, will_end_game=True)

    if has_winner(next_board, move.marker):
        return Winner(next_board, move.marker, moves)

    if is_draw(next_board):
        return Draw(next_board, moves)

    return InProgress(next_board, moves)
