"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.models import GameModel
from src.core.shared_types import SUPPORTED_SIZES, Mark, Status


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    size: int = 3

    @field_validator("size")
    @classmethod
    def validate_size(cls, value: int) -> int:
        if value not in SUPPORTED_SIZES:
            raise InvalidRequestError(
                f"Board size must be one of {', '.join(str(s) for s in SUPPORTED_SIZES)}. Got {value}."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    player: Mark
    position: int


class ComputerMoveRequest(BaseModel):
    game_id: UUID


class RematchRequest(BaseModel):
    game_id: UUID
    player: Mark


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- REQUEST BODIES (the game id travels in the URL) ---
class PlayerBody(BaseModel):
    player: Mark


class MoveBody(PlayerBody):
    position: int


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    board: list[str]
    size: int
    current_player: Mark
    winner: Optional[str]
    status: Status
    last_move: int
    move_history: list[int]
    rematch_requested: Optional[Mark]
    rematch_accepted: bool

    @classmethod
    def from_model(cls, game_id: UUID, model: GameModel) -> Self:
        return cls(
            game_id=game_id,
            board=list(model.board),
            size=model.size,
            current_player=model.current_player,
            winner=model.winner,
            status=model.status,
            last_move=model.last_move,
            move_history=list(model.history),
            rematch_requested=model.rematch_requested,
            rematch_accepted=model.rematch_accepted,
        )


class MoveResponse(BaseModel):
    applied: bool
    game: GameResponse


class ComputerMoveResponse(BaseModel):
    applied: bool
    position: int
    game: GameResponse
