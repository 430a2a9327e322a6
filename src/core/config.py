"""
Runtime configuration, read from environment variables.

Everything has a default so a local game (without the remote opponent) runs out of the box.
"""

import os
from dataclasses import dataclass
from typing import Self

DEFAULT_DATABASE_URL = "sqlite:///./tictactoe.db"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name, str(default))
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, str(default))
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    database_echo: bool = False

    # Azure OpenAI style chat completions endpoint used by the computer opponent
    ai_api_key: str | None = None
    ai_endpoint: str | None = None
    ai_deployment: str | None = None
    ai_api_version: str = "2024-02-01"
    ai_temperature: float = 0.3
    ai_max_tokens: int = 10
    ai_timeout: float = 5.0

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Self:
        return cls(
            database_url=os.getenv("TICTACTOE_DATABASE_URL", DEFAULT_DATABASE_URL),
            database_echo=_env_flag("TICTACTOE_DB_ECHO"),
            ai_api_key=os.getenv("AZURE_API_KEY") or None,
            ai_endpoint=os.getenv("AZURE_ENDPOINT") or None,
            ai_deployment=os.getenv("AZURE_DEPLOYMENT_NAME") or None,
            ai_api_version=os.getenv("OPENAI_API_VERSION", "2024-02-01"),
            ai_temperature=_env_float("TICTACTOE_AI_TEMPERATURE", 0.3),
            ai_max_tokens=_env_int("TICTACTOE_AI_MAX_TOKENS", 10),
            ai_timeout=_env_float("TICTACTOE_AI_TIMEOUT", 5.0),
            log_level=os.getenv("TICTACTOE_LOG_LEVEL", "INFO").upper(),
        )

    @property
    def reasoning_configured(self) -> bool:
        """The remote opponent needs a key, an endpoint and a deployment. Without them the heuristic plays alone."""
        return bool(self.ai_api_key and self.ai_endpoint and self.ai_deployment)
