"""Per-player views of a game.

Nothing here mutates the snapshot. Unknown player ids are treated as
spectators: every capability flag is False and no hidden card type leaks.
"""

from __future__ import annotations

from .models import GameState, GameStatus, Phase, Role, TeamProgress, VisibleCard


def _progress(cards_revealed: int, cards_total: int) -> float:
    if cards_total <= 0:
        return 0.0
    return cards_revealed / cards_total * 100


def get_game_status(state: GameState, player_id: str) -> GameStatus:
    """Project the snapshot into what one player can currently do."""
    player = state.players.get(player_id)

    is_your_turn = player is not None and player.team == state.current_team
    in_play = state.phase == Phase.IN_PROGRESS
    is_cluer = player is not None and player.role == Role.CLUER

    return GameStatus(
        phase=state.phase,
        current_team=state.current_team,
        is_your_turn=is_your_turn,
        can_reveal_cards=in_play and is_your_turn and player.role == Role.GUESSER,
        can_give_clues=in_play and is_your_turn and is_cluer,
        is_cluer=is_cluer,
        winner=state.winner,
        teams={
            team: TeamProgress(
                cards_revealed=team_state.cards_revealed,
                cards_total=team_state.cards_total,
                progress=_progress(team_state.cards_revealed, team_state.cards_total),
            )
            for team, team_state in state.teams.items()
        },
        last_clue=state.last_clue,
    )


def get_visible_cards(state: GameState, player_id: str) -> list[VisibleCard]:
    """
    The board as one player may see it.

    Cluers see the full key. Everyone else, spectators included, only sees the
    type of cards that have been revealed. Once the game is finished the whole
    key is shown.
    """
    player = state.players.get(player_id)
    sees_key = (
        (player is not None and player.role == Role.CLUER)
        or state.phase == Phase.FINISHED
    )

    return [
        VisibleCard(
            id=card.id,
            word=card.word,
            position=card.position,
            revealed=card.revealed,
            type=card.type if (sees_key or card.revealed) else None,
        )
        for card in sorted(state.cards, key=lambda c: c.position)
    ]
