"""Shared fixtures for engine and service tests."""

import random

import pytest

from src.engine import (
    CardType, GameState, Role, Team, add_player, create_game, start_game,
)

WORDS = [f"word{i}" for i in range(25)]

SEATS = {
    "red_cluer": (Team.RED, Role.CLUER),
    "red_guesser": (Team.RED, Role.GUESSER),
    "blue_cluer": (Team.BLUE, Role.CLUER),
    "blue_guesser": (Team.BLUE, Role.GUESSER),
}


def seat_players(state: GameState) -> GameState:
    for player_id, (team, role) in SEATS.items():
        state = add_player(state, player_id, player_id.upper(), team, role)
    return state


def cards_of(state: GameState, card_type: CardType, revealed: bool = False):
    return [c for c in state.cards if c.type == card_type and c.revealed == revealed]


def guesser(team: Team) -> str:
    return f"{team.value}_guesser"


def cluer(team: Team) -> str:
    return f"{team.value}_cluer"


@pytest.fixture
def words() -> list[str]:
    return list(WORDS)


@pytest.fixture
def new_game() -> GameState:
    """A waiting game with an empty roster."""
    return create_game(WORDS, creator_id="red_cluer", game_id="g1", rng=random.Random(42))


@pytest.fixture
def seated_game(new_game) -> GameState:
    """A waiting game with a cluer and a guesser on each team."""
    return seat_players(new_game)


@pytest.fixture
def active_game(seated_game) -> GameState:
    return start_game(seated_game)
