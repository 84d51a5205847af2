"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Status
from src.tictactoe.position import NUM_SQUARES

MarkerName = str
PlayerName = str


class PlayerRequest(BaseModel):
    player_name: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player name cannot be empty.")
        return value


# --- REQUEST MODELS ---
class CreateGameRequest(PlayerRequest):
    pass


class JoinGameRequest(PlayerRequest):
    game_id: UUID


class MoveRequest(PlayerRequest):
    """NOTE no marker here: the marker is looked up from the player's registration, never taken from the client."""

    game_id: UUID
    position: int

    @field_validator("position")
    @classmethod
    def validate_position(cls, value: int) -> int:
        if not 0 <= value < NUM_SQUARES:
            raise InvalidRequestError(
                f"Cannot interpret position: {value!r} as a square on the board (0-{NUM_SQUARES - 1})."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    """Everything needed to draw the board and the status line."""

    game_id: UUID
    players: dict[MarkerName, PlayerName]
    board: list[Optional[MarkerName]]
    current_player: Optional[MarkerName]
    is_complete: bool
    winner: Optional[MarkerName]
    status: Status
    move_history: list[int]
