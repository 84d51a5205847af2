"""
A position on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import OutOfRangeError

# Tic-tac-toe board is 3x3, cells are numbered 0-8 reading left-to-right, top-to-bottom
BOARD_SIZE = 3
NUM_SQUARES = BOARD_SIZE * BOARD_SIZE


@dataclass(frozen=True)
class Position:
    index: int

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise OutOfRangeError(
                f"Position must be an integer between 0 and {NUM_SQUARES - 1}, got {self.index!r}."
            )
        if not 0 <= self.index < NUM_SQUARES:
            raise OutOfRangeError(
                f"Position must be between 0 and {NUM_SQUARES - 1}, got {self.index}."
            )

    @classmethod
    def at(cls, row: int, column: int) -> Position:
        """Zero-based row and column: (0, 0) is the top-left cell, (2, 2) the bottom-right."""
        if not (0 <= row < BOARD_SIZE and 0 <= column < BOARD_SIZE):
            raise OutOfRangeError(
                f"Row and column must be between 0 and {BOARD_SIZE - 1}, got ({row}, {column})."
            )
        return cls(row * BOARD_SIZE + column)

    @property
    def row(self) -> int:
        return self.index // BOARD_SIZE

    @property
    def column(self) -> int:
        return self.index % BOARD_SIZE

    def __index__(self) -> int:
        # lets a Position be used directly to index the board's squares
        return self.index

    def __int__(self) -> int:
        return self.index


ALL_POSITIONS: tuple[Position, ...] = tuple(Position(i) for i in range(NUM_SQUARES))
