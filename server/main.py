"""FastAPI server exposing room lookup over HTTP and room actions over WebSocket."""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from uuid import uuid4

from fastapi import APIRouter, FastAPI, HTTPException, Request, WebSocket, WebSocketDisconnect, status
from fastapi.middleware.cors import CORSMiddleware

from codenames.codenames_game import CodenamesGame
from framework.errors import GameError
from framework.events import RoomEventLog
from framework.settings import ServerSettings
from framework.serialize import to_serializable
from server.connections import ConnectionManager
from server.dispatcher import RoomDispatcher, Session
from server.registry import GameRegistry
from server.schemas import CreateGameRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _registry(request: Request) -> GameRegistry:
    return request.app.state.registry


@router.get("/api/health")
def health() -> dict[str, str]:
    """Healthcheck endpoint."""
    return {"status": "ok"}


@router.post("/api/games", status_code=status.HTTP_201_CREATED)
def create_game(payload: CreateGameRequest, request: Request) -> dict[str, str]:
    """Create an empty room."""
    try:
        state = _registry(request).create(payload.name)
    except GameError as exc:
        raise HTTPException(status_code=400, detail=exc.to_dict()) from exc
    return {"name": state.name}


@router.get("/api/games/{name}")
def get_game(name: str, request: Request) -> dict[str, Any]:
    """Return the current snapshot of a room."""
    state = _registry(request).find(name)
    if state is None:
        raise HTTPException(status_code=404, detail=f"Unknown game: {name}")
    return to_serializable(state)


@router.websocket("/ws")
async def room_socket(websocket: WebSocket) -> None:
    """One client connection; frames are `{"type": <action>, "data": {...}}`."""
    connections: ConnectionManager = websocket.app.state.connections
    dispatcher: RoomDispatcher = websocket.app.state.dispatcher

    await websocket.accept()
    session = Session(connection_id=uuid4().hex)
    connections.register(session.connection_id, websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                frame = json.loads(raw)
            except json.JSONDecodeError:
                frame = None
            await dispatcher.handle_frame(session, frame)
    except WebSocketDisconnect:
        pass
    finally:
        await dispatcher.disconnect(session)
        connections.unregister(session.connection_id)


def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build the application with its own registry and dispatcher."""
    settings = settings or ServerSettings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    registry = GameRegistry(
        CodenamesGame(
            min_players=settings.min_players,
            unique_player_names=settings.unique_player_names,
        )
    )
    connections = ConnectionManager()
    dispatcher = RoomDispatcher(
        registry,
        connections,
        disconnect_grace_sec=settings.disconnect_grace_sec,
        event_log=RoomEventLog(settings.event_log_path) if settings.event_log_path else None,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("Room server ready (grace=%ss, min_players=%s)", settings.disconnect_grace_sec, settings.min_players)
        yield
        await dispatcher.shutdown()

    application = FastAPI(title="Codenames Room Server", version="0.1.0", lifespan=lifespan)
    application.state.settings = settings
    application.state.registry = registry
    application.state.connections = connections
    application.state.dispatcher = dispatcher
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = app.state.settings
    uvicorn.run("server.main:app", host=_settings.host, port=_settings.port, reload=True)
