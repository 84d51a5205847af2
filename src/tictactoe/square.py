"""
A single cell on the board.

Each cell is exactly one of three states:
* Taken: a marker has been placed here (permanently).
* Available: still empty. Also records which marker is allowed to play here next.
* Unavailable: still empty, but the game is over.
"""

from dataclasses import dataclass

from src.tictactoe.marker import Marker


@dataclass(frozen=True)
class Taken:
    marker: Marker


@dataclass(frozen=True)
class Available:
    next_marker: Marker


@dataclass(frozen=True)
class Unavailable:
    pass


Square = Taken | Available | Unavailable
