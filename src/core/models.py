"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
MarkerName = str
PlayerName = str


@dataclass
class MoveModel:
    """A single move using primitive types only. The timestamp is an ISO 8601 string (UTC)."""

    position: int
    marker: MarkerName
    timestamp: str


@dataclass
class GameModel:
    """Transport-safe representation of a tic-tac-toe game used between API, Service, DB, and Game layers."""

    moves: list[MoveModel]
    registered_players: dict[MarkerName, PlayerName]
    status: str
    winner: Optional[MarkerName] = None
    # bumped by the repository on every successful update (compare-and-swap)
    version: int = field(default=0)
