"""Service layer: runs engine actions against a game store."""

from __future__ import annotations

import logging
import random
import uuid
from typing import Callable, TypeVar

from src.engine import (
    GameSettings,
    GameState,
    GameStatus,
    NotGameCreator,
    Phase,
    PlayerIdentityConflict,
    RevealResult,
    Role,
    StaleSnapshot,
    Team,
    VisibleCard,
    add_player,
    assign_team,
    create_game,
    end_turn,
    get_game_status,
    get_visible_cards,
    give_clue,
    remove_player,
    reset_roster,
    restart_game,
    reveal_card,
    set_player_online,
    start_game,
)
from src.words import CuratedWordSource, WordGenerator, WordSource

from .config import ServiceConfig
from .store import GameStore, InMemoryGameStore, JsonFileGameStore, Subscriber

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACTIVE_PHASES = {Phase.WAITING, Phase.IN_PROGRESS}


def new_game_id() -> str:
    return f"game_{uuid.uuid4().hex[:12]}"


class GameService:
    """Read-compute-write wrapper around the pure engine.

    Each action reads the latest snapshot, applies one engine function and
    writes back conditioned on the version it read. A concurrent write makes
    the save fail with StaleSnapshot; the action is then replayed on a fresh
    snapshot, up to ``config.max_write_retries`` times. Engine rejections are
    raised straight to the caller.
    """

    def __init__(
        self,
        store: GameStore,
        words: WordSource,
        config: ServiceConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.words = words
        self.config = config or ServiceConfig()
        self.rng = rng or random.Random()

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "GameService":
        store: GameStore
        if config.data_dir is not None:
            store = JsonFileGameStore(config.data_dir)
        else:
            store = InMemoryGameStore()

        words: WordSource
        if config.use_ai_words:
            words = WordGenerator(
                api_key=config.words_api_key,
                base_url=config.words_api_base_url,
                model=config.words_model,
                cache_ttl_seconds=config.words_cache_ttl_seconds,
            )
        else:
            words = CuratedWordSource()

        return cls(store=store, words=words, config=config)

    def _mutate(
        self,
        game_id: str,
        action: Callable[[GameState], tuple[GameState, T]],
    ) -> tuple[GameState, T]:
        attempts = max(1, self.config.max_write_retries)
        attempt = 0
        while True:
            attempt += 1
            current = self.store.get(game_id)
            new_state, result = action(current)
            if new_state is current:
                return current, result
            try:
                return self.store.save(new_state, expected_version=current.version), result
            except StaleSnapshot:
                if attempt >= attempts:
                    raise
                logger.warning(
                    f"Stale write on game {game_id}, retrying (attempt {attempt}/{attempts})"
                )

    def _apply(self, game_id: str, action: Callable[[GameState], GameState]) -> GameState:
        state, _ = self._mutate(game_id, lambda s: (action(s), None))
        return state

    # Lifecycle

    async def create_game(
        self,
        creator_id: str,
        creator_name: str,
        use_ai: bool = True,
    ) -> GameState:
        """Create a game with fresh words and the creator as its first player."""
        words, origin = await self._get_words(use_ai)
        settings = GameSettings(max_players=self.config.max_players)
        state = create_game(
            words,
            creator_id=creator_id,
            game_id=new_game_id(),
            rng=self.rng,
            words_generated_by=origin,
            settings=settings,
        )
        state = add_player(state, creator_id, creator_name)
        stored = self.store.create(state)
        logger.info(
            f"Game created: {stored.id} ({origin} words, {stored.starting_team.value} starts)"
        )
        return stored

    async def restart_game(self, game_id: str, player_id: str, use_ai: bool = True) -> GameState:
        """Deal a new board for a finished game. Any player may restart."""
        words, origin = await self._get_words(use_ai)
        current = self.store.get(game_id)
        if current.created_by and current.created_by != player_id:
            logger.warning(f"Non-creator {player_id} restarted game {game_id}")

        state = self._apply(
            game_id,
            lambda s: restart_game(s, words, rng=self.rng, words_generated_by=origin),
        )
        logger.info(f"Game {game_id} restarted ({origin} words)")
        return state

    async def _get_words(self, use_ai: bool) -> tuple[list[str], str]:
        if use_ai:
            return await self.words.get_words(25)
        return await CuratedWordSource(self.rng).get_words(25)

    def delete_game(self, game_id: str, player_id: str) -> None:
        state = self.store.get(game_id)
        if state.created_by != player_id:
            raise NotGameCreator("Only the creator can delete the game")
        self.store.delete(game_id)
        logger.info(f"Game {game_id} deleted by {player_id}")

    def get_game(self, game_id: str) -> GameState:
        return self.store.get(game_id)

    def list_active_games(self, limit: int = 10) -> list[GameState]:
        return self.store.list_games(phases=ACTIVE_PHASES, limit=limit)

    # Roster

    def join_game(self, game_id: str, player_id: str, name: str) -> GameState:
        try:
            state = self._apply(game_id, lambda s: add_player(s, player_id, name))
        except PlayerIdentityConflict:
            logger.warning(f"Player id {player_id} already taken in {game_id}, rejected name {name!r}")
            raise
        logger.info(f"Player joined: {name} ({player_id}) -> {game_id}")
        return state

    def assign_player(
        self,
        game_id: str,
        player_id: str,
        team: Team,
        role: Role,
        allow_replace: bool = True,
    ) -> GameState:
        return self._apply(
            game_id,
            lambda s: assign_team(s, player_id, team, role, allow_replace=allow_replace),
        )

    def leave_game(self, game_id: str, player_id: str) -> GameState:
        state = self._apply(game_id, lambda s: remove_player(s, player_id))
        logger.info(f"Player {player_id} left game {game_id}")
        return state

    def reset_players(self, game_id: str, requester_id: str) -> GameState:
        def action(state: GameState) -> GameState:
            if state.created_by != requester_id:
                raise NotGameCreator("Only the game creator can reset players")
            return reset_roster(state)

        state = self._apply(game_id, action)
        logger.info(f"Game {game_id} players reset by {requester_id}")
        return state

    def update_player_status(self, game_id: str, player_id: str, is_online: bool) -> GameState:
        return self._apply(game_id, lambda s: set_player_online(s, player_id, is_online))

    # Play

    def start_game(self, game_id: str) -> GameState:
        state = self._apply(game_id, start_game)
        logger.info(f"Game {game_id} started, {state.starting_team.value} team first")
        return state

    def give_clue(self, game_id: str, player_id: str, word: str, count: int) -> GameState:
        return self._apply(game_id, lambda s: give_clue(s, player_id, word, count))

    def end_turn(self, game_id: str, player_id: str) -> GameState:
        return self._apply(game_id, lambda s: end_turn(s, player_id))

    def reveal_card(self, game_id: str, card_id: str, player_id: str) -> tuple[GameState, RevealResult]:
        state, result = self._mutate(game_id, lambda s: reveal_card(s, card_id, player_id))
        if result.game_ended:
            logger.info(f"Game {game_id} finished, winner: {result.winner.value}")
        return state, result

    # Views

    def get_status(self, game_id: str, player_id: str) -> GameStatus:
        return get_game_status(self.store.get(game_id), player_id)

    def get_visible_cards(self, game_id: str, player_id: str) -> list[VisibleCard]:
        return get_visible_cards(self.store.get(game_id), player_id)

    def subscribe(self, game_id: str, callback: Subscriber) -> Callable[[], None]:
        self.store.get(game_id)
        return self.store.subscribe(game_id, callback)
