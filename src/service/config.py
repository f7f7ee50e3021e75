"""Configuration for the game service."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class ServiceConfig(BaseModel):
    """Settings for stores, the word source and the service layer."""

    # Directory for JSON game files; None keeps games in memory
    data_dir: Path | None = None

    max_players: int = 8
    max_write_retries: int = 3

    # Word generation
    use_ai_words: bool = True
    words_api_key: str | None = None
    words_api_base_url: str = "https://api.openai.com/v1"
    words_model: str = "gpt-4o-mini"
    words_cache_ttl_seconds: float = 300.0


def load_config(env_file: Path | None = None) -> ServiceConfig:
    """Build a ServiceConfig from the environment, loading .env first."""
    load_dotenv(env_file or Path(__file__).resolve().parents[2] / ".env")

    data_dir = os.environ.get("CODENAMES_DATA_DIR")
    return ServiceConfig(
        data_dir=Path(data_dir) if data_dir else None,
        max_players=int(os.environ.get("CODENAMES_MAX_PLAYERS", "8")),
        max_write_retries=int(os.environ.get("CODENAMES_MAX_WRITE_RETRIES", "3")),
        use_ai_words=_env_bool("CODENAMES_USE_AI_WORDS", True),
        words_api_key=os.environ.get("WORDS_API_KEY") or os.environ.get("OPENAI_API_KEY"),
        words_api_base_url=os.environ.get("WORDS_API_BASE_URL", "https://api.openai.com/v1"),
        words_model=os.environ.get("WORDS_MODEL", "gpt-4o-mini"),
        words_cache_ttl_seconds=float(os.environ.get("WORDS_CACHE_TTL_SECONDS", "300")),
    )
