"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import asyncio
import logging
import random
from uuid import UUID

from src.api.models import (
    ComputerMoveRequest,
    ComputerMoveResponse,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    MoveResponse,
    RematchRequest,
)
from src.core.exceptions import GameStateError, RepositoryError
from src.core.models import GameModel
from src.db.repository import GameRepository
from src.tictactoe import reasoning, rules
from src.tictactoe.reasoning import ReasoningClient

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for a tic-tac-toe game."""

    def __init__(
        self,
        repository: GameRepository,
        reasoning_client: ReasoningClient | None = None,
        reasoning_timeout: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.repo = repository
        self.reasoning_client = reasoning_client
        self.reasoning_timeout = reasoning_timeout
        self.rng = rng

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """A player requested a new (empty) game."""
        created = rules.new_game(game_id=None, size=request.size)
        stored_game, game_id = self.repo.create_game(created)
        logger.info("Created %dx%d game %s", request.size, request.size, game_id)
        return GameResponse.from_model(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return GameResponse.from_model(request.game_id, game_model)

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.

        The move is always checked against the latest stored snapshot. A rejected move leaves the record untouched
        and comes back as `applied=False` (the client simply re-renders).
        """
        stored_model = self._fetch_game(request.game_id)
        after_move = rules.apply_move(stored_model, request.position, request.player)
        if after_move is None:
            return MoveResponse(
                applied=False,
                game=GameResponse.from_model(request.game_id, stored_model),
            )
        self._store(request.game_id, after_move)
        return MoveResponse(
            applied=True, game=GameResponse.from_model(request.game_id, after_move)
        )

    async def computer_move(self, request: ComputerMoveRequest) -> ComputerMoveResponse:
        """
        The computer plays the mark that is to move.

        The repository is synchronous, so its calls run in a worker thread and the event loop stays free
        while the remote service is thinking.
        """
        stored_model = await asyncio.to_thread(self._fetch_game, request.game_id)
        if stored_model.winner is not None or not stored_model.empty_positions:
            raise GameStateError(
                f"Game {request.game_id} is over, the computer cannot move."
            )

        position = await reasoning.choose_move(
            stored_model,
            self.reasoning_client,
            timeout=self.reasoning_timeout,
            rng=self.rng,
        )

        # the game may have changed while waiting for the remote service
        latest = await asyncio.to_thread(self._fetch_game, request.game_id)
        after_move = rules.apply_move(latest, position, stored_model.current_player)
        if after_move is None:
            logger.info(
                "Computer move %d for game %s went stale, not applied",
                position,
                request.game_id,
            )
            return ComputerMoveResponse(
                applied=False,
                position=position,
                game=GameResponse.from_model(request.game_id, latest),
            )
        await asyncio.to_thread(self._store, request.game_id, after_move)
        return ComputerMoveResponse(
            applied=True,
            position=position,
            game=GameResponse.from_model(request.game_id, after_move),
        )

    def request_rematch(self, request: RematchRequest) -> GameResponse:
        stored_model = self._fetch_game(request.game_id)
        updated = rules.request_rematch(stored_model, request.player)
        return self._rematch_response(request, stored_model, updated, "request")

    def accept_rematch(self, request: RematchRequest) -> GameResponse:
        stored_model = self._fetch_game(request.game_id)
        updated = rules.accept_rematch(stored_model, request.player)
        return self._rematch_response(request, stored_model, updated, "accept")

    def decline_rematch(self, request: RematchRequest) -> GameResponse:
        stored_model = self._fetch_game(request.game_id)
        updated = rules.decline_rematch(stored_model, request.player)
        return self._rematch_response(request, stored_model, updated, "decline")

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")

    # -- Internal helpers --
    def _rematch_response(
        self,
        request: RematchRequest,
        stored_model: GameModel,
        updated: GameModel | None,
        action: str,
    ) -> GameResponse:
        if updated is None:
            raise GameStateError(
                f"Cannot {action} a rematch for game {request.game_id}. status: {stored_model.status}"
            )
        self._store(request.game_id, updated)
        return GameResponse.from_model(request.game_id, updated)

    def _store(self, game_id: UUID, model: GameModel) -> None:
        if self.repo.update_game(game_id, model) is None:
            raise RepositoryError(f"Game with {game_id=} not found.")

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
