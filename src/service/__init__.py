"""Persistence and service layer around the game engine."""

from .config import ServiceConfig, load_config
from .games import GameService
from .store import GameStore, InMemoryGameStore, JsonFileGameStore

__all__ = [
    "ServiceConfig",
    "load_config",
    "GameService",
    "GameStore",
    "InMemoryGameStore",
    "JsonFileGameStore",
]
