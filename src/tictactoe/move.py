"""A single placement of a marker"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from src.tictactoe.marker import Marker
from src.tictactoe.position import Position


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Move:
    position: Position
    marker: Marker
    timestamp: datetime

    @classmethod
    def create(cls, position: Position | int, marker: Marker) -> Move:
        """
        Stamp a new move with the current time.

        Only the range of the position is checked here. Whether it is actually this marker's turn is decided by the board.
        """
        if not isinstance(position, Position):
            position = Position(position)
        return cls(position, marker, utc_now())
