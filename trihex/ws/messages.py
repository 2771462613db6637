from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SocketEvent(str, Enum):
    MOVE = "move"
    TURN_UPDATED = "turn-updated"
    GAME_UPDATED = "game-updated"
    ERROR = "error"


class TurnUpdated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_turn: str = Field(alias="currentTurn")


class GameUpdated(BaseModel):
    """Lobby/status notice. Only the status is interpreted by the board."""

    model_config = ConfigDict(extra="allow")

    status: str | None = None


class ErrorPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: str = "Unknown error"
