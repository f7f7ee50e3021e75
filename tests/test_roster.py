"""Tests for roster management."""

import pytest

from src.engine import (
    CallerSlotOccupied, CardType, CluerReplaced, GameFull, GameSettings, Phase,
    PlayerIdentityConflict, PlayerNotFound, Role, Team,
    add_player, assign_team, remove_player, reset_roster, reveal_card,
    set_player_online,
)


# ============================================================================
# Joining
# ============================================================================

class TestAddPlayer:

    def test_adds_unassigned_player(self, new_game):
        state = add_player(new_game, "p1", "Alice")

        player = state.players["p1"]
        assert player.name == "Alice"
        assert player.team is None
        assert player.role is None
        assert player.is_online is True
        assert "p1" not in new_game.players  # input untouched

    def test_rejoin_same_name_is_idempotent(self, new_game):
        state = add_player(new_game, "p1", "Alice")
        again = add_player(state, "p1", "Alice")

        assert list(again.players) == ["p1"]
        joined = [e for e in again.history if e.event_type == "player_joined"]
        assert len(joined) == 1

    def test_rejoin_clears_assignment(self, seated_game):
        state = add_player(seated_game, "red_guesser", "RED_GUESSER")

        assert state.players["red_guesser"].team is None
        assert "red_guesser" not in state.teams[Team.RED].guessers

    def test_identity_conflict(self, new_game):
        state = add_player(new_game, "p1", "Alice")
        with pytest.raises(PlayerIdentityConflict):
            add_player(state, "p1", "Bob")

    def test_with_team_and_role(self, new_game):
        state = add_player(new_game, "p1", "Alice", Team.BLUE, Role.CLUER)

        assert state.players["p1"].team == Team.BLUE
        assert state.teams[Team.BLUE].cluer == "p1"

    def test_game_full(self, new_game):
        state = new_game.model_copy(update={"settings": GameSettings(max_players=2)})
        state = add_player(state, "p1", "A")
        state = add_player(state, "p2", "B")

        with pytest.raises(GameFull):
            add_player(state, "p3", "C")
        # Re-joining an existing seat is still allowed
        add_player(state, "p2", "B")


# ============================================================================
# Team assignment
# ============================================================================

class TestAssignTeam:

    def test_unknown_player(self, new_game):
        with pytest.raises(PlayerNotFound):
            assign_team(new_game, "ghost", Team.RED, Role.GUESSER)

    def test_guesser_insert_has_no_duplicates(self, new_game):
        state = add_player(new_game, "p1", "A")
        state = assign_team(state, "p1", Team.RED, Role.GUESSER)
        state = assign_team(state, "p1", Team.RED, Role.GUESSER)

        assert state.teams[Team.RED].guessers == ["p1"]

    def test_switching_team_detaches_first(self, seated_game):
        state = assign_team(seated_game, "red_guesser", Team.BLUE, Role.GUESSER)

        assert "red_guesser" not in state.teams[Team.RED].guessers
        assert "red_guesser" in state.teams[Team.BLUE].guessers

    def test_switching_role_detaches_first(self, seated_game):
        state = assign_team(seated_game, "red_cluer", Team.RED, Role.GUESSER)

        assert state.teams[Team.RED].cluer is None
        assert "red_cluer" in state.teams[Team.RED].guessers
        assert state.players["red_cluer"].role == Role.GUESSER

    def test_new_cluer_kicks_previous(self, seated_game):
        state = assign_team(seated_game, "red_guesser", Team.RED, Role.CLUER)

        assert state.teams[Team.RED].cluer == "red_guesser"
        displaced = state.players["red_cluer"]
        assert displaced.team is None
        assert displaced.role is None

        replaced = [e for e in state.history if isinstance(e, CluerReplaced)]
        assert len(replaced) == 1
        assert replaced[0].previous_player_id == "red_cluer"
        assert replaced[0].player_id == "red_guesser"

    def test_strict_assignment_refuses_occupied_slot(self, seated_game):
        with pytest.raises(CallerSlotOccupied):
            assign_team(seated_game, "red_guesser", Team.RED, Role.CLUER, allow_replace=False)

    def test_same_cluer_reassign_is_not_a_conflict(self, seated_game):
        state = assign_team(seated_game, "red_cluer", Team.RED, Role.CLUER, allow_replace=False)
        assert state.teams[Team.RED].cluer == "red_cluer"


# ============================================================================
# Removal and reset
# ============================================================================

class TestRemoveAndReset:

    def test_remove_detaches_and_deletes(self, seated_game):
        state = remove_player(seated_game, "blue_cluer")

        assert "blue_cluer" not in state.players
        assert state.teams[Team.BLUE].cluer is None

    def test_remove_absent_is_noop(self, new_game):
        assert remove_player(new_game, "ghost") is new_game

    def test_assign_remove_readd_round_trip(self, new_game):
        state = add_player(new_game, "p1", "Alice")
        state = assign_team(state, "p1", Team.RED, Role.CLUER)
        state = remove_player(state, "p1")
        state = add_player(state, "p1", "Alice")

        assert state.players["p1"].team is None
        assert state.players["p1"].role is None
        assert state.teams[Team.RED].cluer is None

    def test_reset_roster_keeps_board(self, active_game):
        state = reset_roster(active_game)

        assert state.players == {}
        assert state.phase == Phase.WAITING
        for team in Team:
            assert state.teams[team].cluer is None
            assert state.teams[team].guessers == []
            assert state.teams[team].cards_revealed == 0
            assert state.teams[team].cards_total == active_game.teams[team].cards_total
        assert [c.id for c in state.cards] == [c.id for c in active_game.cards]

    def test_reset_keeps_revealed_cards_but_zeroes_counters(self, active_game):
        team = active_game.current_team
        card = next(c for c in active_game.cards if c.type == CardType(team.value))
        state, _ = reveal_card(active_game, card.id, f"{team.value}_guesser")

        state = reset_roster(state)

        assert state.find_card(card.id).revealed is True
        assert state.teams[team].cards_revealed == 0
        assert state.winner is None


class TestPresence:

    def test_marks_offline(self, seated_game):
        state = set_player_online(seated_game, "red_cluer", False)

        assert state.players["red_cluer"].is_online is False
        assert state.players["red_cluer"].last_seen is not None

    def test_unknown_player_ignored(self, seated_game):
        assert set_player_online(seated_game, "ghost", False) is seated_game
