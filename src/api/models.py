"""Request/response models for the game API."""
from __future__ import annotations

from pydantic import BaseModel

from src.engine import Phase, Role, Team


class CreateGameRequest(BaseModel):
    creator_id: str
    creator_name: str
    use_ai: bool = True


class JoinRequest(BaseModel):
    player_id: str
    name: str


class AssignRequest(BaseModel):
    player_id: str
    team: Team
    role: Role
    allow_replace: bool = True


class PlayerRequest(BaseModel):
    """Body for actions that only need the acting player."""
    player_id: str


class ClueRequest(BaseModel):
    player_id: str
    word: str
    count: int


class RevealRequest(BaseModel):
    player_id: str
    card_id: str


class RestartRequest(BaseModel):
    player_id: str
    use_ai: bool = True


class PresenceRequest(BaseModel):
    player_id: str
    is_online: bool


class GameSummary(BaseModel):
    id: str
    phase: Phase
    created_by: str | None = None
    player_count: int
    max_players: int
