"""Typed rejections raised by the game engine and its collaborators."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable error kinds."""
    INVALID_WORD_COUNT = "InvalidWordCount"
    PLAYER_NOT_FOUND = "PlayerNotFound"
    PLAYER_IDENTITY_CONFLICT = "PlayerIdentityConflict"
    CALLER_SLOT_OCCUPIED = "CallerSlotOccupied"
    GAME_FULL = "GameFull"
    TEAM_INCOMPLETE = "TeamIncomplete"
    GAME_NOT_ACTIVE = "GameNotActive"
    NOT_YOUR_TURN = "NotYourTurn"
    WRONG_ROLE = "WrongRole"
    EMPTY_CLUE = "EmptyClue"
    COUNT_OUT_OF_RANGE = "CountOutOfRange"
    CARD_NOT_FOUND = "CardNotFound"
    ALREADY_REVEALED = "AlreadyRevealed"
    GAME_NOT_FOUND = "GameNotFound"
    NOT_GAME_CREATOR = "NotGameCreator"
    STALE_SNAPSHOT = "StaleSnapshot"


class GameError(ValueError):
    """Base class for every anticipated rejection.

    Subclasses pin ``kind``; callers branch on ``kind`` rather than the message.
    """
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


class InvalidWordCount(GameError):
    kind = ErrorKind.INVALID_WORD_COUNT


class PlayerNotFound(GameError):
    kind = ErrorKind.PLAYER_NOT_FOUND


class PlayerIdentityConflict(GameError):
    kind = ErrorKind.PLAYER_IDENTITY_CONFLICT


class CallerSlotOccupied(GameError):
    kind = ErrorKind.CALLER_SLOT_OCCUPIED


class GameFull(GameError):
    kind = ErrorKind.GAME_FULL


class TeamIncomplete(GameError):
    kind = ErrorKind.TEAM_INCOMPLETE


class GameNotActive(GameError):
    kind = ErrorKind.GAME_NOT_ACTIVE


class NotYourTurn(GameError):
    kind = ErrorKind.NOT_YOUR_TURN


class WrongRole(GameError):
    kind = ErrorKind.WRONG_ROLE


class EmptyClue(GameError):
    kind = ErrorKind.EMPTY_CLUE


class CountOutOfRange(GameError):
    kind = ErrorKind.COUNT_OUT_OF_RANGE


class CardNotFound(GameError):
    kind = ErrorKind.CARD_NOT_FOUND


class AlreadyRevealed(GameError):
    kind = ErrorKind.ALREADY_REVEALED


class GameNotFound(GameError):
    kind = ErrorKind.GAME_NOT_FOUND


class NotGameCreator(GameError):
    kind = ErrorKind.NOT_GAME_CREATOR


class StaleSnapshot(GameError):
    kind = ErrorKind.STALE_SNAPSHOT
