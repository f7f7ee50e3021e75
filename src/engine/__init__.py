from .models import (
    Team, CardType, Phase, Role, Card, Player, TeamState, Clue, GameSettings,
    GameState, GameEvent, RevealResult, TeamProgress, GameStatus, VisibleCard,
)
from .models import (
    PlayerJoined, PlayerLeft, TeamAssigned, CluerReplaced, RosterReset,
    GameStarted, ClueGiven, CardRevealed, TurnEnded, GameRestarted,
)
from .errors import (
    ErrorKind, GameError, InvalidWordCount, PlayerNotFound, PlayerIdentityConflict,
    CallerSlotOccupied, GameFull, TeamIncomplete, GameNotActive, NotYourTurn,
    WrongRole, EmptyClue, CountOutOfRange, CardNotFound, AlreadyRevealed,
    GameNotFound, NotGameCreator, StaleSnapshot,
)
from .board import generate_board, generate_cards, validate_card_distribution
from .game import (
    add_event, create_game, start_game, give_clue, end_turn, reveal_card,
    check_winner, restart_game,
)
from .roster import add_player, assign_team, remove_player, reset_roster, set_player_online
from .status import get_game_status, get_visible_cards

__all__ = [
    "Team", "CardType", "Phase", "Role", "Card", "Player", "TeamState", "Clue",
    "GameSettings", "GameState", "GameEvent", "RevealResult", "TeamProgress",
    "GameStatus", "VisibleCard",
    "PlayerJoined", "PlayerLeft", "TeamAssigned", "CluerReplaced", "RosterReset",
    "GameStarted", "ClueGiven", "CardRevealed", "TurnEnded", "GameRestarted",
    "ErrorKind", "GameError", "InvalidWordCount", "PlayerNotFound",
    "PlayerIdentityConflict", "CallerSlotOccupied", "GameFull", "TeamIncomplete",
    "GameNotActive", "NotYourTurn", "WrongRole", "EmptyClue", "CountOutOfRange",
    "CardNotFound", "AlreadyRevealed", "GameNotFound", "NotGameCreator",
    "StaleSnapshot",
    "generate_board", "generate_cards", "validate_card_distribution",
    "add_event", "create_game", "start_game", "give_clue", "end_turn",
    "reveal_card", "check_winner", "restart_game",
    "add_player", "assign_team", "remove_player", "reset_roster", "set_player_online",
    "get_game_status", "get_visible_cards",
]
