"""FastAPI app exposing the game service."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, AsyncGenerator

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

from src.engine import ErrorKind, GameError, GameState, GameStatus, RevealResult, VisibleCard
from src.service import GameService, load_config

from .models import (
    AssignRequest,
    ClueRequest,
    CreateGameRequest,
    GameSummary,
    JoinRequest,
    PlayerRequest,
    PresenceRequest,
    RestartRequest,
    RevealRequest,
)

logger = logging.getLogger("api")

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.GAME_NOT_FOUND: 404,
    ErrorKind.PLAYER_NOT_FOUND: 404,
    ErrorKind.CARD_NOT_FOUND: 404,
    ErrorKind.STALE_SNAPSHOT: 409,
    ErrorKind.CALLER_SLOT_OCCUPIED: 409,
    ErrorKind.GAME_FULL: 409,
    ErrorKind.PLAYER_IDENTITY_CONFLICT: 409,
    ErrorKind.NOT_GAME_CREATOR: 403,
    ErrorKind.NOT_YOUR_TURN: 403,
    ErrorKind.WRONG_ROLE: 403,
}

app = FastAPI(title="Codenames Game API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_origin_regex=r".*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_service: GameService | None = None


def get_service() -> GameService:
    global _service
    if _service is None:
        _service = GameService.from_config(load_config())
    return _service


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, 400)
    if status_code >= 409:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.kind.value} {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.to_dict()})


def _snapshot(state: GameState) -> dict[str, Any]:
    return state.model_dump(mode="json")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/games", response_model=list[GameSummary])
def list_games(limit: int = 10, service: GameService = Depends(get_service)) -> list[GameSummary]:
    return [
        GameSummary(
            id=game.id,
            phase=game.phase,
            created_by=game.created_by,
            player_count=len(game.players),
            max_players=game.settings.max_players,
        )
        for game in service.list_active_games(limit)
    ]


@app.post("/games")
async def create_game(req: CreateGameRequest, service: GameService = Depends(get_service)) -> dict[str, Any]:
    state = await service.create_game(req.creator_id, req.creator_name, use_ai=req.use_ai)
    return _snapshot(state)


@app.get("/games/{game_id}")
def get_game(game_id: str, service: GameService = Depends(get_service)) -> dict[str, Any]:
    return _snapshot(service.get_game(game_id))


@app.delete("/games/{game_id}")
def delete_game(game_id: str, player_id: str, service: GameService = Depends(get_service)) -> dict[str, str]:
    service.delete_game(game_id, player_id)
    return {"status": "deleted"}


@app.post("/games/{game_id}/join")
def join_game(game_id: str, req: JoinRequest, service: GameService = Depends(get_service)) -> dict[str, Any]:
    return _snapshot(service.join_game(game_id, req.player_id, req.name))


@app.post("/games/{game_id}/assign")
def assign_player(game_id: str, req: AssignRequest, service: GameService = Depends(get_service)) -> dict[str, Any]:
    state = service.assign_player(
        game_id, req.player_id, req.team, req.role, allow_replace=req.allow_replace,
    )
    return _snapshot(state)


@app.post("/games/{game_id}/leave")
def leave_game(game_id: str, req: PlayerRequest, service: GameService = Depends(get_service)) -> dict[str, Any]:
    return _snapshot(service.leave_game(game_id, req.player_id))


@app.post("/games/{game_id}/reset-players")
def reset_players(game_id: str, req: PlayerRequest, service: GameService = Depends(get_service)) -> dict[str, Any]:
    return _snapshot(service.reset_players(game_id, req.player_id))


@app.post("/games/{game_id}/presence")
def update_presence(game_id: str, req: PresenceRequest, service: GameService = Depends(get_service)) -> dict[str, Any]:
    return _snapshot(service.update_player_status(game_id, req.player_id, req.is_online))


@app.post("/games/{game_id}/start")
def start_game(game_id: str, service: GameService = Depends(get_service)) -> dict[str, Any]:
    return _snapshot(service.start_game(game_id))


@app.post("/games/{game_id}/clue")
def give_clue(game_id: str, req: ClueRequest, service: GameService = Depends(get_service)) -> dict[str, Any]:
    return _snapshot(service.give_clue(game_id, req.player_id, req.word, req.count))


@app.post("/games/{game_id}/end-turn")
def end_turn(game_id: str, req: PlayerRequest, service: GameService = Depends(get_service)) -> dict[str, Any]:
    return _snapshot(service.end_turn(game_id, req.player_id))


@app.post("/games/{game_id}/reveal", response_model=RevealResult)
def reveal_card(game_id: str, req: RevealRequest, service: GameService = Depends(get_service)) -> RevealResult:
    _, result = service.reveal_card(game_id, req.card_id, req.player_id)
    return result


@app.post("/games/{game_id}/restart")
async def restart_game(game_id: str, req: RestartRequest, service: GameService = Depends(get_service)) -> dict[str, Any]:
    state = await service.restart_game(game_id, req.player_id, use_ai=req.use_ai)
    return _snapshot(state)


@app.get("/games/{game_id}/status/{player_id}", response_model=GameStatus)
def get_status(game_id: str, player_id: str, service: GameService = Depends(get_service)) -> GameStatus:
    return service.get_status(game_id, player_id)


@app.get("/games/{game_id}/board/{player_id}", response_model=list[VisibleCard])
def get_board(game_id: str, player_id: str, service: GameService = Depends(get_service)) -> list[VisibleCard]:
    return service.get_visible_cards(game_id, player_id)


@app.get("/games/{game_id}/events")
async def game_events(game_id: str, service: GameService = Depends(get_service)) -> StreamingResponse:
    """SSE stream of game snapshots. Ends when the game is deleted."""
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[GameState | None] = asyncio.Queue()

    def on_change(state: GameState | None) -> None:
        # Sync endpoints run in the threadpool, so hop back onto the loop
        loop.call_soon_threadsafe(queue.put_nowait, state)

    unsubscribe = service.subscribe(game_id, on_change)
    initial = service.get_game(game_id)

    async def event_generator() -> AsyncGenerator[str, None]:
        try:
            yield f"event: snapshot\ndata: {json.dumps(_snapshot(initial))}\n\n"
            while True:
                try:
                    state = await asyncio.wait_for(queue.get(), timeout=30)
                except asyncio.TimeoutError:
                    yield ": keepalive\n\n"
                    continue
                if state is None:
                    yield f"event: deleted\ndata: {json.dumps({'id': game_id})}\n\n"
                    break
                yield f"event: snapshot\ndata: {json.dumps(_snapshot(state))}\n\n"
        finally:
            unsubscribe()

    return StreamingResponse(event_generator(), media_type="text/event-stream")
