"""Core game logic for Codenames: lifecycle, clues, turns and reveals."""

from __future__ import annotations

import logging
import random
from typing import Literal

from .board import generate_board, new_id, team_card_totals, validate_card_distribution
from .errors import (
    AlreadyRevealed, CardNotFound, CountOutOfRange, EmptyClue, GameNotActive,
    NotYourTurn, PlayerNotFound, TeamIncomplete, WrongRole,
)
from .models import (
    MAX_CLUE_COUNT, CardRevealed, CardType, Clue, ClueGiven, GameEvent,
    GameRestarted, GameSettings, GameStarted, GameState, Phase, Player,
    RevealResult, Role, Team, TeamState, TurnEnded, utcnow,
)

logger = logging.getLogger(__name__)


def add_event(state: GameState, event: GameEvent) -> GameState:
    """Append an event to the history with the next global index."""
    new_state = state.model_copy(deep=True)
    new_state.event_counter += 1
    event = event.model_copy(update={"event_index": new_state.event_counter})
    new_state.history.append(event)
    return new_state


def _fresh_teams(starting_team: Team) -> dict[Team, TeamState]:
    totals = team_card_totals(starting_team)
    return {team: TeamState(cards_total=totals[team]) for team in Team}


def create_game(
    words: list[str],
    creator_id: str | None = None,
    game_id: str | None = None,
    rng: random.Random | None = None,
    words_generated_by: Literal["ai", "curated"] = "curated",
    settings: GameSettings | None = None,
) -> GameState:
    """Create a new game in the waiting phase with an empty roster."""
    cards, starting_team = generate_board(words, rng)

    validation = validate_card_distribution(cards, starting_team)
    if not validation["is_valid"]:
        logger.error(f"Invalid card distribution: {validation}")

    settings = (settings or GameSettings()).model_copy(
        update={"words_generated_by": words_generated_by}
    )

    return GameState(
        id=game_id or new_id(),
        created_by=creator_id,
        phase=Phase.WAITING,
        current_team=starting_team,
        starting_team=starting_team,
        cards=cards,
        teams=_fresh_teams(starting_team),
        settings=settings,
    )


def start_game(state: GameState) -> GameState:
    """
    Move a waiting game into play.

    Raises:
        GameNotActive: the game is not waiting to start.
        TeamIncomplete: a team lacks a cluer or has no guessers.
    """
    if state.phase != Phase.WAITING:
        raise GameNotActive(f"Cannot start game in phase {state.phase.value}")

    for team in Team:
        if not state.teams[team].is_complete:
            raise TeamIncomplete(
                f"The {team.value} team needs a cluer and at least one guesser"
            )

    new_state = state.model_copy(deep=True)
    new_state.phase = Phase.IN_PROGRESS
    new_state.started_at = utcnow()
    return add_event(new_state, GameStarted(starting_team=state.starting_team))


def _acting_player(state: GameState, player_id: str) -> Player:
    """Look up a player who wants to act on the current turn."""
    player = state.players.get(player_id)
    if player is None:
        raise PlayerNotFound(f"Player {player_id!r} not found")
    if state.phase != Phase.IN_PROGRESS:
        raise GameNotActive("Game is not in progress")
    if player.team != state.current_team:
        raise NotYourTurn(f"It is the {state.current_team.value} team's turn")
    return player


def give_clue(state: GameState, player_id: str, word: str, count: int) -> GameState:
    """
    Record a clue from the current team's cluer.

    The turn does not change; guessers act next.
    """
    player = _acting_player(state, player_id)

    if player.role != Role.CLUER:
        raise WrongRole("Only cluers can give clues")

    word = (word or "").strip().upper()
    if not word:
        raise EmptyClue("Clue cannot be empty")

    if count < 0 or count > MAX_CLUE_COUNT:
        raise CountOutOfRange(f"Count must be between 0 and {MAX_CLUE_COUNT}")

    clue = Clue(
        id=new_id(),
        word=word,
        count=count,
        team=player.team,
        player_id=player_id,
        guesses_remaining=count + 1,  # One extra guess
    )

    new_state = state.model_copy(deep=True)
    new_state.clues.append(clue)
    return add_event(new_state, ClueGiven(
        player_id=player_id,
        team=player.team,
        clue=clue.word,
        count=count,
    ))


def end_turn(state: GameState, player_id: str) -> GameState:
    """Pass the turn to the other team. Any member of the current team may do this."""
    player = _acting_player(state, player_id)

    new_state = state.model_copy(deep=True)
    new_state.current_team = state.current_team.other
    return add_event(new_state, TurnEnded(player_id=player_id, team=player.team))


def check_winner(state: GameState) -> Team | None:
    """Return the first team (red, then blue) that has revealed all its cards."""
    for team in (Team.RED, Team.BLUE):
        team_state = state.teams[team]
        if team_state.cards_revealed >= team_state.cards_total:
            return team
    return None


def reveal_card(
    state: GameState,
    card_id: str,
    player_id: str,
) -> tuple[GameState, RevealResult]:
    """
    Reveal a card for the current team's guesser and resolve its effect.

    Returns:
        (new_state, result)
        - own card: team count +1, turn continues
        - opponent card: opponent count +1, turn ends
        - neutral: turn ends
        - assassin: game over, opponents win
    """
    card = state.find_card(card_id)
    if card is None:
        raise CardNotFound(f"Card {card_id!r} not found")
    if player_id not in state.players:
        raise PlayerNotFound(f"Player {player_id!r} not found")
    if card.revealed:
        raise AlreadyRevealed(f"Card {card.word!r} is already revealed")

    player = _acting_player(state, player_id)
    if player.role != Role.GUESSER:
        raise WrongRole("Only guessers can reveal cards")

    team = player.team
    new_state = state.model_copy(deep=True)
    revealed = new_state.find_card(card_id)
    revealed.revealed = True
    revealed.revealed_by = player_id
    revealed.revealed_at = utcnow()

    continues_turn = False
    game_ended = False

    if revealed.type == CardType.ASSASSIN:
        new_state.phase = Phase.FINISHED
        new_state.winner = team.other
        game_ended = True
    elif revealed.type in (CardType.RED, CardType.BLUE):
        owner = Team(revealed.type.value)
        new_state.teams[owner].cards_revealed += 1
        continues_turn = owner == team

    if not game_ended:
        winner = check_winner(new_state)
        if winner is not None:
            new_state.phase = Phase.FINISHED
            new_state.winner = winner
            game_ended = True

    if not continues_turn and not game_ended:
        new_state.current_team = state.current_team.other

    new_state = add_event(new_state, CardRevealed(
        card_id=card_id,
        player_id=player_id,
        team=team,
        card_type=revealed.type,
    ))

    return new_state, RevealResult(
        card_type=revealed.type,
        continues_turn=continues_turn,
        game_ended=game_ended,
        winner=new_state.winner,
    )


def restart_game(
    state: GameState,
    new_words: list[str],
    rng: random.Random | None = None,
    words_generated_by: Literal["ai", "curated"] | None = None,
) -> GameState:
    """
    Reset a finished game onto a fresh board.

    The roster, teams, clues and history are cleared; identity, creator and
    settings carry over.
    """
    if state.phase != Phase.FINISHED:
        raise GameNotActive("Can only restart finished games")

    cards, starting_team = generate_board(new_words, rng)

    validation = validate_card_distribution(cards, starting_team)
    if not validation["is_valid"]:
        logger.error(f"Invalid card distribution on restart: {validation}")

    settings = state.settings
    if words_generated_by is not None:
        settings = settings.model_copy(update={"words_generated_by": words_generated_by})

    new_state = state.model_copy(deep=True, update={
        "phase": Phase.WAITING,
        "current_team": starting_team,
        "starting_team": starting_team,
        "cards": cards,
        "players": {},
        "teams": _fresh_teams(starting_team),
        "winner": None,
        "clues": [],
        "history": [],
        "started_at": None,
        "settings": settings,
    })
    return add_event(new_state, GameRestarted(starting_team=starting_team))
