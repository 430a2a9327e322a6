"""HTTP routes for the game resource. Thin: every route builds a request model and hands it to the GameService."""

from typing import Generator
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from src.api.models import (
    ComputerMoveRequest,
    ComputerMoveResponse,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveBody,
    MoveRequest,
    MoveResponse,
    PlayerBody,
    RematchRequest,
)
from src.db.database import get_db
from src.db.sql_repository import SQLGameRepository
from src.services.game_service import GameService

router = APIRouter(prefix="/games", tags=["games"])


def get_session(request: Request) -> Generator[Session, None, None]:
    yield from get_db(request.app.state.session_factory)


def get_service(request: Request, db: Session = Depends(get_session)) -> GameService:
    return GameService(
        SQLGameRepository(db),
        reasoning_client=request.app.state.reasoning_client,
        reasoning_timeout=request.app.state.settings.ai_timeout,
    )


@router.post("", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
def create_game(
    body: CreateGameRequest, service: GameService = Depends(get_service)
) -> GameResponse:
    return service.create_new_game(body)


@router.get("/{game_id}", response_model=GameResponse)
def get_game(game_id: UUID, service: GameService = Depends(get_service)) -> GameResponse:
    return service.get_game_state(GetGameRequest(game_id=game_id))


@router.post("/{game_id}/moves", response_model=MoveResponse)
def make_move(
    game_id: UUID, body: MoveBody, service: GameService = Depends(get_service)
) -> MoveResponse:
    return service.make_move(
        MoveRequest(game_id=game_id, player=body.player, position=body.position)
    )


@router.post("/{game_id}/computer-move", response_model=ComputerMoveResponse)
async def computer_move(
    game_id: UUID, service: GameService = Depends(get_service)
) -> ComputerMoveResponse:
    return await service.computer_move(ComputerMoveRequest(game_id=game_id))


@router.post("/{game_id}/rematch/request", response_model=GameResponse)
def request_rematch(
    game_id: UUID, body: PlayerBody, service: GameService = Depends(get_service)
) -> GameResponse:
    return service.request_rematch(RematchRequest(game_id=game_id, player=body.player))


@router.post("/{game_id}/rematch/accept", response_model=GameResponse)
def accept_rematch(
    game_id: UUID, body: PlayerBody, service: GameService = Depends(get_service)
) -> GameResponse:
    return service.accept_rematch(RematchRequest(game_id=game_id, player=body.player))


@router.post("/{game_id}/rematch/decline", response_model=GameResponse)
def decline_rematch(
    game_id: UUID, body: PlayerBody, service: GameService = Depends(get_service)
) -> GameResponse:
    return service.decline_rematch(RematchRequest(game_id=game_id, player=body.player))


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_game(game_id: UUID, service: GameService = Depends(get_service)) -> None:
    service.delete_game(DeleteGameRequest(game_id=game_id))
