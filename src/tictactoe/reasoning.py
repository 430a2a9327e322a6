"""
Computer opponent that asks a remote language model for its move.

The remote answer is only a suggestion: it is parsed, checked against the board, and whenever anything goes wrong
(transport error, bad status, timeout, unparsable/illegal answer, no service configured) the heuristic opponent moves instead.
`choose_move` therefore never fails because of the remote service.
"""

import asyncio
import logging
import random
import re
from dataclasses import dataclass
from typing import Any, Protocol, Self

import aiohttp

from src.core.config import Settings
from src.core.exceptions import ReasoningServiceError
from src.core.models import GameModel
from src.core.shared_types import Mark
from src.tictactoe.board import Board
from src.tictactoe.opponent import choose_fallback_move
from src.tictactoe.rules import board_of

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"-?\d+")

SYSTEM_PROMPT = (
    "You are a Tic Tac Toe AI. Respond with only a single integer: the board position of your move. "
    "Positions are numbered from 0, left to right, top to bottom."
)


@dataclass(frozen=True)
class ReasoningRequest:
    """Everything the remote service gets to see about the game."""

    size: int
    board: tuple[str, ...]
    empty_positions: tuple[int, ...]
    grid: str
    mark: Mark

    @classmethod
    def from_state(cls, state: GameModel) -> Self:
        board = board_of(state)
        return cls(
            size=board.size,
            board=board.cells,
            empty_positions=tuple(board.empty_cells()),
            grid=board.render(),
            mark=Mark(state.current_player),
        )

    @property
    def prompt(self) -> str:
        board = Board(self.board, self.size)
        opponent = self.mark.opponent
        last_position = self.size * self.size - 1
        available = ", ".join(str(position) for position in self.empty_positions)
        return (
            f"You are playing Tic Tac Toe on a {self.size}x{self.size} board as '{self.mark}'. "
            f"Your opponent is '{opponent}'.\n\n"
            f"Current board ('_' is an empty cell):\n{self.grid}\n\n"
            f"Board positions are numbered from 0 to {last_position} as follows:\n"
            f"{board.render_positions()}\n\n"
            "Rules:\n"
            f"1. A player wins with {self.size} marks in a row, column or diagonal. "
            "The game is a draw when the board is full.\n"
            "2. If you can complete a line with this move, take that winning position.\n"
            f"3. Otherwise, if '{opponent}' could complete a line on their next move, block that position.\n"
            "4. Otherwise prefer positions that build towards your own line.\n\n"
            f"Available positions: {available}\n\n"
            "Answer with only the number of the chosen position (e.g. 4). No other text."
        )


class ReasoningClient(Protocol):
    """Boundary to a text completion service."""

    async def complete(self, request: ReasoningRequest) -> str:
        """Return the raw text answer of the service. Raise on any failure."""
        ...


class ChatCompletionClient:
    """ReasoningClient for an Azure OpenAI style chat completions deployment, implemented using aiohttp."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        deployment: str,
        api_version: str = "2024-02-01",
        temperature: float = 0.3,
        max_tokens: int = 10,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self.deployment = deployment
        self.api_version = api_version
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls, settings: Settings) -> Self | None:
        """None if the remote opponent is not configured (the heuristic opponent then plays on its own)."""
        if not settings.reasoning_configured:
            return None
        return cls(
            endpoint=settings.ai_endpoint,
            api_key=settings.ai_api_key,
            deployment=settings.ai_deployment,
            api_version=settings.ai_api_version,
            temperature=settings.ai_temperature,
            max_tokens=settings.ai_max_tokens,
        )

    @property
    def url(self) -> str:
        return f"{self.endpoint}/openai/deployments/{self.deployment}/chat/completions"

    def payload(self, request: ReasoningRequest) -> dict[str, Any]:
        return {
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": request.prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    async def complete(self, request: ReasoningRequest) -> str:
        headers = {"api-key": self.api_key, "Content-Type": "application/json"}
        params = {"api-version": self.api_version}
        async with aiohttp.ClientSession() as session:
            async with session.post(
                self.url, json=self.payload(request), headers=headers, params=params
            ) as resp:
                if resp.status // 100 != 2:
                    body = await resp.text()
                    raise ReasoningServiceError(
                        f"Reasoning service answered with status {resp.status}: {body[:200]}"
                    )
                data = await resp.json(content_type=None)
        return extract_message(data)


def extract_message(data: Any) -> str:
    """Pull the text of the first choice out of a chat completions response body."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ReasoningServiceError(f"Malformed completion response: {data!r}") from e
    if not isinstance(content, str):
        raise ReasoningServiceError(f"Completion content is not text: {content!r}")
    return content


def parse_position(text: str) -> int | None:
    """First base-10 integer in the answer ('4', ' 4.', 'Position: 4' all give 4), None if there is none."""
    match = INTEGER_PATTERN.search(text or "")
    if match is None:
        return None
    try:
        return int(match.group())
    except ValueError:  # longer than the int conversion limit
        return None


def validate_position(position: int | None, state: GameModel) -> bool:
    return position is not None and board_of(state).is_vacant(position)


async def choose_move(
    state: GameModel,
    client: ReasoningClient | None,
    *,
    timeout: float | None = None,
    rng: random.Random | None = None,
) -> int:
    """
    Ask the remote service for a move, falling back to the heuristic opponent.
    ----

    1. describe the game (grid, empty positions)
    2. ask the service (bounded by `timeout` seconds)
    3. parse + validate the answer
    4. anything off? -> heuristic move for the very same state
    """
    if client is None:
        logger.debug("No reasoning service configured, using heuristic move")
        return choose_fallback_move(state, rng)

    request = ReasoningRequest.from_state(state)
    logger.debug("Reasoning request for game %s:\n%s", state.id, request.prompt)
    try:
        async with asyncio.timeout(timeout):
            answer = await client.complete(request)
    except TimeoutError:
        logger.warning("Reasoning service timed out after %ss, using heuristic move", timeout)
        return choose_fallback_move(state, rng)
    except Exception as e:  # any boundary failure is answered by the heuristic
        logger.warning("Reasoning service failed (%s), using heuristic move", e)
        return choose_fallback_move(state, rng)

    position = parse_position(answer)
    logger.info("Reasoning answer for game %s: %r -> %s", state.id, answer, position)
    if not validate_position(position, state):
        logger.info("Reasoning answer %r is not a legal move, using heuristic move", answer)
        return choose_fallback_move(state, rng)
    return position
