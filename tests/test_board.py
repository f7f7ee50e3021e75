"""Tests for board generation."""

import random

import pytest

from src.engine import (
    CardType, ErrorKind, InvalidWordCount, Team,
    generate_board, generate_cards, validate_card_distribution,
)

from conftest import WORDS


def _counts(cards):
    counts = {t: 0 for t in CardType}
    for card in cards:
        counts[card.type] += 1
    return counts


class TestGenerateCards:
    """Tests for pairing words with a shuffled key."""

    @pytest.mark.parametrize("starting_team", [Team.RED, Team.BLUE])
    def test_distribution(self, starting_team):
        """Starting team owns 9, the other 8, with 7 neutral and 1 assassin."""
        cards = generate_cards(WORDS, starting_team, random.Random(1))
        counts = _counts(cards)

        assert len(cards) == 25
        assert counts[CardType(starting_team.value)] == 9
        assert counts[CardType(starting_team.other.value)] == 8
        assert counts[CardType.NEUTRAL] == 7
        assert counts[CardType.ASSASSIN] == 1

    def test_distribution_holds_across_seeds(self):
        for seed in range(50):
            cards, starting_team = generate_board(WORDS, random.Random(seed))
            assert validate_card_distribution(cards, starting_team)["is_valid"]

    def test_words_keep_order_and_are_uppercased(self):
        cards = generate_cards(WORDS, Team.RED, random.Random(3))

        assert [c.position for c in cards] == list(range(25))
        assert [c.word for c in cards] == [w.upper() for w in WORDS]

    def test_cards_start_hidden_with_unique_ids(self):
        cards = generate_cards(WORDS, Team.BLUE, random.Random(3))

        assert len({c.id for c in cards}) == 25
        assert all(not c.revealed for c in cards)
        assert all(c.revealed_by is None and c.revealed_at is None for c in cards)

    def test_same_seed_same_key(self):
        first = generate_cards(WORDS, Team.RED, random.Random(7))
        second = generate_cards(WORDS, Team.RED, random.Random(7))

        assert [c.type for c in first] == [c.type for c in second]

    @pytest.mark.parametrize("count", [0, 24, 26])
    def test_rejects_wrong_word_count(self, count):
        words = [f"w{i}" for i in range(count)]
        with pytest.raises(InvalidWordCount) as exc_info:
            generate_cards(words, Team.RED)
        assert exc_info.value.kind == ErrorKind.INVALID_WORD_COUNT


class TestGenerateBoard:
    """Tests for starting team selection."""

    def test_both_teams_can_start(self):
        starters = {generate_board(WORDS, random.Random(seed))[1] for seed in range(40)}
        assert starters == {Team.RED, Team.BLUE}

    def test_rejects_wrong_word_count(self):
        with pytest.raises(InvalidWordCount):
            generate_board(WORDS[:-1])


class TestValidateDistribution:

    def test_reports_invalid_distribution(self):
        cards = generate_cards(WORDS, Team.RED, random.Random(5))
        # Checking against the wrong starting team flips the 9/8 expectation
        report = validate_card_distribution(cards, Team.BLUE)

        assert report["is_valid"] is False
        assert report["counts"]["red"] == 9
        assert report["expected_counts"]["blue"] == 9
