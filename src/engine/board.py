"""Board generation: pairs 25 words with a shuffled key."""

from __future__ import annotations

import random
import uuid
from typing import Any

from .errors import InvalidWordCount
from .models import (
    ASSASSIN_CARDS, BOARD_SIZE, NEUTRAL_CARDS, OTHER_TEAM_CARDS,
    STARTING_TEAM_CARDS, Card, CardType, Team,
)


def new_id() -> str:
    return uuid.uuid4().hex


def choose_starting_team(rng: random.Random | None = None) -> Team:
    rng = rng or random.Random()
    return rng.choice([Team.RED, Team.BLUE])


def team_card_totals(starting_team: Team) -> dict[Team, int]:
    """Number of cards each team owns; the starting team gets the extra one."""
    return {
        starting_team: STARTING_TEAM_CARDS,
        starting_team.other: OTHER_TEAM_CARDS,
    }


def generate_cards(
    words: list[str],
    starting_team: Team,
    rng: random.Random | None = None,
) -> list[Card]:
    """
    Build the 25 cards for a board.

    Words keep their order (and so their position); only the key is shuffled.

    Raises:
        InvalidWordCount: if ``words`` does not hold exactly 25 entries.
    """
    if len(words) != BOARD_SIZE:
        raise InvalidWordCount(
            f"Exactly {BOARD_SIZE} words are required, got {len(words)}"
        )

    rng = rng or random.Random()

    assignments = (
        [CardType.for_team(starting_team)] * STARTING_TEAM_CARDS +
        [CardType.for_team(starting_team.other)] * OTHER_TEAM_CARDS +
        [CardType.NEUTRAL] * NEUTRAL_CARDS +
        [CardType.ASSASSIN] * ASSASSIN_CARDS
    )
    rng.shuffle(assignments)

    return [
        Card(
            id=new_id(),
            word=word.upper(),
            type=card_type,
            position=index,
        )
        for index, (word, card_type) in enumerate(zip(words, assignments))
    ]


def generate_board(
    words: list[str],
    rng: random.Random | None = None,
) -> tuple[list[Card], Team]:
    """
    Pick a starting team and generate its board.

    Returns:
        Tuple of (cards, starting_team).
    """
    if len(words) != BOARD_SIZE:
        raise InvalidWordCount(
            f"Exactly {BOARD_SIZE} words are required, got {len(words)}"
        )
    rng = rng or random.Random()
    starting_team = choose_starting_team(rng)
    return generate_cards(words, starting_team, rng), starting_team


def validate_card_distribution(cards: list[Card], starting_team: Team) -> dict[str, Any]:
    """Count card types and compare them with the expected 9/8/7/1 split."""
    counts = {card_type.value: 0 for card_type in CardType}
    for card in cards:
        counts[card.type.value] += 1

    other_team = starting_team.other
    expected = {
        starting_team.value: STARTING_TEAM_CARDS,
        other_team.value: OTHER_TEAM_CARDS,
        CardType.NEUTRAL.value: NEUTRAL_CARDS,
        CardType.ASSASSIN.value: ASSASSIN_CARDS,
    }

    return {
        "counts": counts,
        "expected_counts": expected,
        "is_valid": counts == expected and len(cards) == BOARD_SIZE,
        "starting_team": starting_team.value,
        "other_team": other_team.value,
    }
