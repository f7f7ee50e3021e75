"""Roster management: joining, team/role assignment and removal."""

from __future__ import annotations

from .errors import CallerSlotOccupied, GameFull, PlayerIdentityConflict, PlayerNotFound
from .models import (
    CluerReplaced, GameState, Phase, Player, PlayerJoined, PlayerLeft, Role,
    RosterReset, Team, TeamAssigned, TeamState, utcnow,
)
from .game import add_event


def _detach(state: GameState, player_id: str) -> None:
    """Remove a player from their team slot in place. Works on a copy only."""
    player = state.players.get(player_id)
    if player is None or player.team is None:
        return

    team = state.teams[player.team]
    if player.role == Role.CLUER and team.cluer == player_id:
        team.cluer = None
    elif player.role == Role.GUESSER and player_id in team.guessers:
        team.guessers.remove(player_id)

    player.team = None
    player.role = None


def add_player(
    state: GameState,
    player_id: str,
    name: str,
    team: Team | None = None,
    role: Role | None = None,
) -> GameState:
    """
    Add a player to the roster, or re-join an existing one.

    A re-join with the same name resets the player's team and role.

    Raises:
        PlayerIdentityConflict: the id is already taken by a different name.
        GameFull: a new player would exceed settings.max_players.
    """
    existing = state.players.get(player_id)
    if existing is not None and existing.name != name:
        raise PlayerIdentityConflict(
            f"Player id {player_id!r} already belongs to {existing.name!r}"
        )
    if existing is None and len(state.players) >= state.settings.max_players:
        raise GameFull(f"Game is full ({state.settings.max_players} players)")

    new_state = state.model_copy(deep=True)
    _detach(new_state, player_id)
    new_state.players[player_id] = Player(id=player_id, name=name)

    if existing is None:
        new_state = add_event(new_state, PlayerJoined(player_id=player_id, name=name))

    if team is not None and role is not None:
        new_state = assign_team(new_state, player_id, team, role)

    return new_state


def assign_team(
    state: GameState,
    player_id: str,
    team: Team,
    role: Role,
    allow_replace: bool = True,
) -> GameState:
    """
    Move a player onto a team with a role.

    Taking the cluer slot from someone else kicks them: the displaced player
    stays in the roster with no team or role and a CluerReplaced event is
    logged. With ``allow_replace=False`` an occupied slot is rejected instead.

    Raises:
        PlayerNotFound: unknown player id.
        CallerSlotOccupied: strict mode and another player holds the slot.
    """
    if player_id not in state.players:
        raise PlayerNotFound(f"Player {player_id!r} not found")

    previous_cluer = state.teams[team].cluer
    displacing = (
        role == Role.CLUER
        and previous_cluer is not None
        and previous_cluer != player_id
    )
    if displacing and not allow_replace:
        raise CallerSlotOccupied(
            f"The {team.value} team already has a cluer ({previous_cluer!r})"
        )

    new_state = state.model_copy(deep=True)
    _detach(new_state, player_id)

    player = new_state.players[player_id]
    player.team = team
    player.role = role

    team_state = new_state.teams[team]
    if role == Role.CLUER:
        if displacing:
            _detach(new_state, previous_cluer)
            new_state = add_event(new_state, CluerReplaced(
                team=team,
                previous_player_id=previous_cluer,
                player_id=player_id,
            ))
            team_state = new_state.teams[team]
        team_state.cluer = player_id
    elif player_id not in team_state.guessers:
        team_state.guessers.append(player_id)

    return add_event(new_state, TeamAssigned(player_id=player_id, team=team, role=role))


def remove_player(state: GameState, player_id: str) -> GameState:
    """Remove a player from their team and the roster. No-op when absent."""
    if player_id not in state.players:
        return state

    new_state = state.model_copy(deep=True)
    _detach(new_state, player_id)
    del new_state.players[player_id]
    return add_event(new_state, PlayerLeft(player_id=player_id))


def reset_roster(state: GameState) -> GameState:
    """
    Clear every player and team slot and go back to waiting.

    The board stays as it is, revealed cards included, but team counters restart
    at zero. A team that had revealed cards can then no longer reach its
    ``cards_total`` on this layout. Finished games get a fresh board through
    ``restart_game`` instead.
    """
    new_state = state.model_copy(deep=True)
    new_state.players = {}
    new_state.teams = {
        team: TeamState(cards_total=team_state.cards_total)
        for team, team_state in state.teams.items()
    }
    new_state.phase = Phase.WAITING
    new_state.winner = None
    return add_event(new_state, RosterReset())


def set_player_online(state: GameState, player_id: str, is_online: bool) -> GameState:
    """Update a player's presence. Unknown players are ignored."""
    if player_id not in state.players:
        return state

    new_state = state.model_copy(deep=True)
    player = new_state.players[player_id]
    player.is_online = is_online
    player.last_seen = utcnow()
    return new_state
