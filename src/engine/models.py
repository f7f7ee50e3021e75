"""Data models for the Codenames game engine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


BOARD_SIZE = 25
STARTING_TEAM_CARDS = 9  # First team advantage
OTHER_TEAM_CARDS = 8
NEUTRAL_CARDS = 7
ASSASSIN_CARDS = 1
MAX_CLUE_COUNT = 9


def utcnow() -> datetime:
    return datetime.utcnow()


class Team(str, Enum):
    """Team enumeration."""
    RED = "red"
    BLUE = "blue"

    @property
    def other(self) -> "Team":
        return Team.BLUE if self == Team.RED else Team.RED


class CardType(str, Enum):
    """Card type enumeration."""
    RED = "red"
    BLUE = "blue"
    NEUTRAL = "neutral"
    ASSASSIN = "assassin"

    @classmethod
    def for_team(cls, team: Team) -> "CardType":
        return cls(team.value)


class Phase(str, Enum):
    """Game phase enumeration."""
    WAITING = "waiting"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Role(str, Enum):
    """Team roles. The cluer sees the key and gives clues, guessers reveal cards."""
    CLUER = "cluer"
    GUESSER = "guesser"


class Card(BaseModel):
    """A single card on the board."""
    id: str
    word: str
    type: CardType
    revealed: bool = False
    revealed_by: str | None = None
    revealed_at: datetime | None = None
    position: int = Field(ge=0, lt=BOARD_SIZE)


class Player(BaseModel):
    """A player in the game roster."""
    id: str
    name: str
    team: Team | None = None
    role: Role | None = None
    is_online: bool = True
    joined_at: datetime = Field(default_factory=utcnow)
    last_seen: datetime | None = None


class TeamState(BaseModel):
    """Roster slots and progress for one team."""
    cluer: str | None = None
    guessers: list[str] = Field(default_factory=list)
    cards_revealed: int = 0
    cards_total: int

    @property
    def is_complete(self) -> bool:
        return self.cluer is not None and len(self.guessers) > 0


class Clue(BaseModel):
    """A clue given by a cluer."""
    id: str
    word: str
    count: int = Field(ge=0, le=MAX_CLUE_COUNT)
    team: Team
    player_id: str
    timestamp: datetime = Field(default_factory=utcnow)
    guesses_remaining: int


class GameSettings(BaseModel):
    """Per-game settings. time_limit is carried for clients but unused by the rules."""
    max_players: int = 8
    allow_spectators: bool = True
    time_limit: int | None = None  # seconds
    words_generated_by: Literal["ai", "curated"] = "curated"


# Game history events

class _BaseEvent(BaseModel):
    event_index: int = 0
    timestamp: datetime = Field(default_factory=utcnow)


class PlayerJoined(_BaseEvent):
    event_type: Literal["player_joined"] = "player_joined"
    player_id: str
    name: str


class PlayerLeft(_BaseEvent):
    event_type: Literal["player_left"] = "player_left"
    player_id: str


class TeamAssigned(_BaseEvent):
    event_type: Literal["team_assigned"] = "team_assigned"
    player_id: str
    team: Team
    role: Role


class CluerReplaced(_BaseEvent):
    """The cluer slot was taken over; the displaced player is now unassigned."""
    event_type: Literal["cluer_replaced"] = "cluer_replaced"
    team: Team
    previous_player_id: str
    player_id: str


class RosterReset(_BaseEvent):
    event_type: Literal["roster_reset"] = "roster_reset"


class GameStarted(_BaseEvent):
    event_type: Literal["game_started"] = "game_started"
    starting_team: Team


class ClueGiven(_BaseEvent):
    event_type: Literal["clue_given"] = "clue_given"
    player_id: str
    team: Team
    clue: str
    count: int


class CardRevealed(_BaseEvent):
    event_type: Literal["card_revealed"] = "card_revealed"
    card_id: str
    player_id: str
    team: Team
    card_type: CardType


class TurnEnded(_BaseEvent):
    event_type: Literal["turn_ended"] = "turn_ended"
    player_id: str
    team: Team


class GameRestarted(_BaseEvent):
    event_type: Literal["game_restarted"] = "game_restarted"
    starting_team: Team


# Union type for history events
GameEvent = (
    PlayerJoined | PlayerLeft | TeamAssigned | CluerReplaced | RosterReset
    | GameStarted | ClueGiven | CardRevealed | TurnEnded | GameRestarted
)


class GameState(BaseModel):
    """Complete serializable snapshot of one game."""
    id: str
    created_at: datetime = Field(default_factory=utcnow)
    created_by: str | None = None
    started_at: datetime | None = None
    updated_at: datetime | None = None
    version: int = 0  # Bumped by the store on every successful write
    phase: Phase = Phase.WAITING
    current_team: Team
    starting_team: Team
    cards: list[Card]
    players: dict[str, Player] = Field(default_factory=dict)
    teams: dict[Team, TeamState]
    winner: Team | None = None
    clues: list[Clue] = Field(default_factory=list)
    history: list[GameEvent] = Field(default_factory=list)
    event_counter: int = 0  # Global, never resets
    settings: GameSettings = Field(default_factory=GameSettings)

    def find_card(self, card_id: str) -> Card | None:
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    @property
    def last_clue(self) -> Clue | None:
        return self.clues[-1] if self.clues else None


class RevealResult(BaseModel):
    """Outcome of revealing one card, used by clients to pick a notification."""
    card_type: CardType
    continues_turn: bool
    game_ended: bool
    winner: Team | None = None


class TeamProgress(BaseModel):
    cards_revealed: int
    cards_total: int
    progress: float  # percentage


class GameStatus(BaseModel):
    """Read-only view of a game from one player's perspective."""
    phase: Phase
    current_team: Team
    is_your_turn: bool
    can_reveal_cards: bool
    can_give_clues: bool
    is_cluer: bool
    winner: Team | None = None
    teams: dict[Team, TeamProgress]
    last_clue: Clue | None = None


class VisibleCard(BaseModel):
    """A card as one player is allowed to see it."""
    id: str
    word: str
    position: int
    revealed: bool
    type: CardType | None = None  # None when hidden from this player
