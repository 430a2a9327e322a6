"""
Tic-tac-toe game service - FastAPI application

Run with: uvicorn src.main:create_app --factory
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.core.config import LOG_FORMAT, Settings
from src.core.exceptions import GameError, InvalidRequestError, RepositoryError
from src.db.database import build_engine, init_db, session_factory
from src.tictactoe.reasoning import ChatCompletionClient

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    engine = build_engine(settings)
    init_db(engine)

    app = FastAPI(
        title="Tic-tac-toe service",
        description="N x N tic-tac-toe games, with a computer opponent",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.session_factory = session_factory(engine)
    app.state.reasoning_client = ChatCompletionClient.from_settings(settings)
    if app.state.reasoning_client is None:
        logger.info("Reasoning service not configured, computer plays heuristic moves only")

    app.include_router(router)

    @app.exception_handler(RepositoryError)
    async def not_found(request: Request, exc: RepositoryError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(GameError)
    async def game_error(request: Request, exc: GameError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(InvalidRequestError)
    async def invalid_request(request: Request, exc: InvalidRequestError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
