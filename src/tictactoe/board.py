"""The GameBoard holds the 9 squares and implements the rules that affect a single cell (is it free? whose turn is it?)"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from src.core.exceptions import InvalidMoveError
from src.tictactoe.marker import Marker
from src.tictactoe.move import Move
from src.tictactoe.position import NUM_SQUARES, Position
from src.tictactoe.square import Available, Square, Taken, Unavailable


@dataclass(frozen=True)
class GameBoard:
    """
    Immutable: every move returns a new board.

    NOTE There is no turn counter. Every Available square carries the marker that may claim it next,
    so "whose turn is it" can be read from the board alone (even for a board not built from a move list).
    """

    squares: tuple[Square, ...]

    def __post_init__(self) -> None:
        if len(self.squares) != NUM_SQUARES:
            raise ValueError(
                f"A board has exactly {NUM_SQUARES} squares, got {len(self.squares)}."
            )

    @classmethod
    def empty(cls) -> GameBoard:
        """Starting board: every square is open and X moves first."""
        return cls(tuple(Available(Marker.X) for _ in range(NUM_SQUARES)))

    @classmethod
    def from_moves(cls, moves: Iterable[Move]) -> GameBoard:
        """Replay the moves one by one. Raises at the first move that does not fit the board at that point."""
        board = EMPTY_BOARD
        for move in moves:
            board = board.with_move(move)
        return board

    def __getitem__(self, position: Position | int) -> Square:
        return self.squares[position]

    def __iter__(self) -> Iterator[Square]:
        return iter(self.squares)

    def __len__(self) -> int:
        return len(self.squares)

    def is_valid_move(self, move: Move) -> bool:
        """The target square must be open AND expecting exactly this marker."""
        square = self[move.position]
        return isinstance(square, Available) and square.next_marker == move.marker

    def with_move(self, move: Move, will_end_game: bool = False) -> GameBoard:
        """
        Place the marker and update all other open squares
        ----

        1. the target square becomes Taken
        2. any other open square either expects the opponent next, or (if this move ends the game) becomes Unavailable
        """
        if not self.is_valid_move(move):
            raise InvalidMoveError(
                f"Invalid move: {move.marker} cannot play on position {move.position.index}."
            )

        next_square: Square = (
            Unavailable() if will_end_game else Available(move.marker.opponent)
        )
        squares = [
            next_square if isinstance(square, Available) else square
            for square in self.squares
        ]
        squares[move.position.index] = Taken(move.marker)
        return GameBoard(tuple(squares))

    # -- Convenience methods for the rendering boundary --
    @property
    def next_marker(self) -> Optional[Marker]:
        """The marker that is allowed to play, or None when no square is open."""
        # all open squares agree on this, so just look at the first one
        return next(
            (square.next_marker for square in self.squares if isinstance(square, Available)),
            None,
        )

    def markers(self) -> list[Optional[Marker]]:
        """Marker per cell (None for any cell nobody has claimed)"""
        return [
            square.marker if isinstance(square, Taken) else None
            for square in self.squares
        ]

    def is_full(self) -> bool:
        return all(isinstance(square, Taken) for square in self.squares)


EMPTY_BOARD = GameBoard.empty()
