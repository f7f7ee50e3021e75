"""Game persistence with versioned writes and change subscriptions."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from threading import RLock
from typing import Callable, Iterable

from src.engine import GameNotFound, GameState, Phase, StaleSnapshot
from src.engine.models import utcnow

logger = logging.getLogger(__name__)

Subscriber = Callable[[GameState | None], None]


class GameStore(ABC):
    """One record per game.

    ``save`` is a conditional write: it only succeeds when the stored version
    equals ``expected_version``, then bumps the version and notifies
    subscribers with the new snapshot. Subscribers run under the store lock,
    so they must return quickly and may read the store from the same thread.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subscribers: dict[str, list[Subscriber]] = {}

    # Backend primitives, called with the lock held

    @abstractmethod
    def _read(self, game_id: str) -> GameState | None:
        ...

    @abstractmethod
    def _write(self, state: GameState) -> None:
        ...

    @abstractmethod
    def _remove(self, game_id: str) -> bool:
        ...

    @abstractmethod
    def _all(self) -> Iterable[GameState]:
        ...

    # Public API

    def create(self, state: GameState) -> GameState:
        with self._lock:
            if self._read(state.id) is not None:
                raise StaleSnapshot(f"Game {state.id!r} already exists")
            stored = state.model_copy(update={"version": 1, "updated_at": utcnow()})
            self._write(stored)
            self._notify(stored.id, stored)
        return stored

    def get(self, game_id: str) -> GameState:
        with self._lock:
            state = self._read(game_id)
        if state is None:
            raise GameNotFound(f"Game {game_id!r} not found")
        return state

    def save(self, state: GameState, expected_version: int) -> GameState:
        with self._lock:
            current = self._read(state.id)
            if current is None:
                raise GameNotFound(f"Game {state.id!r} not found")
            if current.version != expected_version:
                raise StaleSnapshot(
                    f"Game {state.id!r} is at version {current.version}, "
                    f"write was based on {expected_version}"
                )
            stored = state.model_copy(update={
                "version": expected_version + 1,
                "updated_at": utcnow(),
            })
            self._write(stored)
            self._notify(stored.id, stored)
        return stored

    def delete(self, game_id: str) -> None:
        with self._lock:
            if not self._remove(game_id):
                raise GameNotFound(f"Game {game_id!r} not found")
            self._notify(game_id, None)

    def list_games(self, phases: set[Phase] | None = None, limit: int = 10) -> list[GameState]:
        """Games newest first, optionally filtered by phase."""
        with self._lock:
            games = [g for g in self._all() if phases is None or g.phase in phases]
        games.sort(key=lambda g: g.created_at, reverse=True)
        return games[:limit]

    def subscribe(self, game_id: str, callback: Subscriber) -> Callable[[], None]:
        """Register for change notifications. Returns an unsubscribe function."""
        with self._lock:
            self._subscribers.setdefault(game_id, []).append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(game_id, [])
                if callback in callbacks:
                    callbacks.remove(callback)
                if not callbacks:
                    self._subscribers.pop(game_id, None)

        return unsubscribe

    def _notify(self, game_id: str, state: GameState | None) -> None:
        # Called with the lock held so subscribers see writes in version order
        callbacks = list(self._subscribers.get(game_id, []))
        for callback in callbacks:
            try:
                callback(state)
            except Exception:
                logger.exception(f"Subscriber for game {game_id} failed")


class InMemoryGameStore(GameStore):
    """Dict-backed store for tests and single-process servers."""

    def __init__(self) -> None:
        super().__init__()
        self._games: dict[str, GameState] = {}

    def _read(self, game_id: str) -> GameState | None:
        state = self._games.get(game_id)
        return state.model_copy(deep=True) if state is not None else None

    def _write(self, state: GameState) -> None:
        self._games[state.id] = state.model_copy(deep=True)

    def _remove(self, game_id: str) -> bool:
        return self._games.pop(game_id, None) is not None

    def _all(self) -> Iterable[GameState]:
        return [g.model_copy(deep=True) for g in self._games.values()]


class JsonFileGameStore(GameStore):
    """One ``<game_id>.json`` file per game, written atomically."""

    def __init__(self, directory: Path | str) -> None:
        super().__init__()
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, game_id: str) -> Path:
        # Game ids become file names; keep them inside the directory
        if not game_id or Path(game_id).name != game_id or game_id.startswith("."):
            raise GameNotFound(f"Game {game_id!r} not found")
        return self.directory / f"{game_id}.json"

    def _read(self, game_id: str) -> GameState | None:
        path = self._path(game_id)
        if not path.exists():
            return None
        with open(path, "r") as f:
            return GameState.model_validate(json.load(f))

    def _write(self, state: GameState) -> None:
        path = self._path(state.id)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(state.model_dump(mode="json"), f, indent=2)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def _remove(self, game_id: str) -> bool:
        path = self._path(game_id)
        if not path.exists():
            return False
        path.unlink()
        return True

    def _all(self) -> Iterable[GameState]:
        games = []
        for path in sorted(self.directory.glob("*.json")):
            with open(path, "r") as f:
                games.append(GameState.model_validate(json.load(f)))
        return games
