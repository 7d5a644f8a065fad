"""Room action dispatch: client actions -> registry -> pushed events."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Protocol

from pydantic import ValidationError

from codenames.codenames_state import Player
from framework.errors import (
    GameError,
    GameNotFoundError,
    InvalidRequestError,
    NotInGameError,
    PlayerNotFoundError,
)
from framework.events import EventType, RoomEvent, RoomEventLog
from server.registry import GameRegistry, normalize_game_name
from server.schemas import ActionMessage, JoinPayload, RevealPayload, RoomNamePayload

logger = logging.getLogger(__name__)

DEFAULT_DISCONNECT_GRACE_SEC = 30.0


class Connections(Protocol):
    """What the dispatcher needs from the transport layer."""

    def join_room(self, room: str, connection_id: str) -> None: ...

    def leave_room(self, room: str, connection_id: str) -> None: ...

    async def send_to(self, connection_id: str, event: RoomEvent) -> None: ...

    async def broadcast(self, room: str, event: RoomEvent, exclude: str | None = None) -> None: ...


@dataclass
class Session:
    """Binding of one live connection to the room and player it joined as."""

    connection_id: str
    room: str | None = None
    player_id: str | None = None

    @property
    def is_bound(self) -> bool:
        return self.room is not None and self.player_id is not None

    def require_binding(self) -> tuple[str, str]:
        if self.room is None or self.player_id is None:
            raise NotInGameError()
        return self.room, self.player_id

    def unbind(self) -> None:
        self.room = None
        self.player_id = None


Handler = Callable[[Session, Mapping[str, Any]], Awaitable[None]]


class RoomDispatcher:
    """Executes room actions one at a time and pushes the resulting events.

    Every registry call completes synchronously before the first `await`,
    so each action sees the fully-settled result of the previous one.
    Rule violations are reported only to the requesting connection.
    Each `(room, player_id)` is owned by at most one session; a join that
    takes over a player unbinds the session that held it before.
    """

    def __init__(
        self,
        registry: GameRegistry,
        connections: Connections,
        *,
        disconnect_grace_sec: float = DEFAULT_DISCONNECT_GRACE_SEC,
        event_log: RoomEventLog | None = None,
    ) -> None:
        self.registry = registry
        self.connections = connections
        self.disconnect_grace_sec = disconnect_grace_sec
        self.event_log = event_log
        self._timers: set[asyncio.Task[None]] = set()
        self._owners: dict[tuple[str, str], Session] = {}
        self._handlers: dict[str, Handler] = {
            "create": self._on_create,
            "findGame": self._on_find_game,
            "join": self._on_join,
            "startGame": self._on_start_game,
            "reveal": self._on_reveal,
            "revealAll": self._on_reveal_all,
            "assignSpymaster": self._on_assign_spymaster,
            "switchTeam": self._on_switch_team,
            "endTurn": self._on_end_turn,
            "reset": self._on_reset,
            "leaveGame": self._on_leave_game,
        }

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    async def handle_frame(self, session: Session, frame: Any) -> None:
        """Validate a raw inbound frame and dispatch it."""
        try:
            message = ActionMessage.model_validate(frame)
        except ValidationError as exc:
            await self._report(session, InvalidRequestError(f"Malformed message: {exc.errors()[0]['msg']}"))
            return
        await self.dispatch(session, message.type, message.data)

    async def dispatch(self, session: Session, action: str, data: Mapping[str, Any] | None = None) -> None:
        """Run one action for `session`, turning failures into `gameError` events."""
        handler = self._handlers.get(action)
        logger.debug("[%s] action=%s connection=%s", session.room, action, session.connection_id)
        try:
            if handler is None:
                raise InvalidRequestError(f"Unknown action {action!r}.")
            await handler(session, data or {})
        except ValidationError as exc:
            await self._report(session, InvalidRequestError(f"Invalid {action} payload: {exc.errors()[0]['msg']}"))
        except GameError as exc:
            logger.info("[%s] %s rejected: %s", session.room, action, exc)
            await self._report(session, exc)
        except Exception:
            logger.exception("[%s] Unhandled error in %s", session.room, action)
            await self._send(session, EventType.GAME_ERROR, {"type": "ServerError", "message": "Internal server error"})

    async def disconnect(self, session: Session) -> None:
        """Mark the session's player disconnected and start the grace timer."""
        if not session.is_bound:
            return
        room, player_id = session.require_binding()
        self.connections.leave_room(room, session.connection_id)
        session.unbind()
        self._owners.pop((room, player_id), None)
        try:
            _, player = self.registry.disconnect_player(room, player_id)
        except GameError as exc:
            logger.info("[%s] disconnect of %s ignored: %s", room, player_id, exc)
            return

        await self._broadcast(room, EventType.PLAYER_DISCONNECTED, player)
        timer = asyncio.create_task(self._expire_after_grace(room, player_id))
        self._timers.add(timer)
        timer.add_done_callback(self._timers.discard)

    async def shutdown(self) -> None:
        """Cancel pending grace timers."""
        timers = list(self._timers)
        for timer in timers:
            timer.cancel()
        await asyncio.gather(*timers, return_exceptions=True)
        self._timers.clear()
        self._owners.clear()

    async def _expire_after_grace(self, room: str, player_id: str) -> None:
        await asyncio.sleep(self.disconnect_grace_sec)
        removed = self.registry.expire_player(room, player_id)
        if removed is None:
            logger.debug("[%s] %s reconnected before grace expired", room, player_id)
            return
        logger.info("[%s] %s removed after disconnect grace period", room, removed.name)
        await self._broadcast(room, EventType.PLAYER_LEFT, removed)

    # Handlers

    async def _on_create(self, session: Session, data: Mapping[str, Any]) -> None:
        payload = RoomNamePayload.model_validate(data)
        state = self.registry.create(payload.name)
        logger.info("[%s] room created", state.name)
        await self._send(session, EventType.GAME_FOUND, state.name)

    async def _on_find_game(self, session: Session, data: Mapping[str, Any]) -> None:
        payload = RoomNamePayload.model_validate(data)
        state = self.registry.find_or_fail(payload.name)
        await self._send(session, EventType.GAME_FOUND, state.name)

    async def _on_join(self, session: Session, data: Mapping[str, Any]) -> None:
        payload = JoinPayload.model_validate(data)
        room = normalize_game_name(payload.name)
        requested = Player.create(payload.player.name, team=payload.player.team, player_id=payload.player.id)
        _, player = self.registry.join(room, requested)
        binding = (room, player.id)

        released = None
        if session.is_bound and (session.room, session.player_id) != binding:
            released = self._release(session)
        previous = self._owners.get(binding)
        if previous is not None and previous is not session:
            self.connections.leave_room(room, previous.connection_id)
            previous.unbind()
        session.room, session.player_id = binding
        self._owners[binding] = session
        self.connections.join_room(room, session.connection_id)
        state = self.registry.find_or_fail(room)

        await self._send(session, EventType.GAME_JOINED, {"game": state, "player": player})
        await self._broadcast(room, EventType.NEW_USER_JOINED, player, exclude=session.connection_id)
        if released is not None:
            await self._broadcast(released[0], EventType.PLAYER_LEFT, released[1])

    async def _on_start_game(self, session: Session, data: Mapping[str, Any]) -> None:
        room, _ = session.require_binding()
        self.registry.start_game(room)
        await self._broadcast(room, EventType.GAME_STARTED)

    async def _on_reveal(self, session: Session, data: Mapping[str, Any]) -> None:
        room, _ = session.require_binding()
        payload = RevealPayload.model_validate(data)
        state, _ = self.registry.reveal_card(room, payload.target_word)
        await self._broadcast(room, EventType.UPDATE_GAME, state)

    async def _on_reveal_all(self, session: Session, data: Mapping[str, Any]) -> None:
        room, _ = session.require_binding()
        state = self.registry.reveal_all(room)
        await self._broadcast(room, EventType.UPDATE_GAME, state)

    async def _on_assign_spymaster(self, session: Session, data: Mapping[str, Any]) -> None:
        room, player_id = session.require_binding()
        _, player = self.registry.assign_spymaster(room, player_id)
        await self._broadcast(room, EventType.SPYMASTER_ASSIGNED, player)

    async def _on_switch_team(self, session: Session, data: Mapping[str, Any]) -> None:
        room, player_id = session.require_binding()
        _, player = self.registry.switch_team(room, player_id)
        await self._broadcast(room, EventType.TEAM_SWITCHED, player)

    async def _on_end_turn(self, session: Session, data: Mapping[str, Any]) -> None:
        room, _ = session.require_binding()
        self.registry.end_turn(room)
        await self._broadcast(room, EventType.TURN_ENDED)

    async def _on_reset(self, session: Session, data: Mapping[str, Any]) -> None:
        room, _ = session.require_binding()
        state = self.registry.reset(room)
        await self._broadcast(room, EventType.NEW_GAME, state)

    async def _on_leave_game(self, session: Session, data: Mapping[str, Any]) -> None:
        room, player_id = session.require_binding()
        _, player = self.registry.remove_player(room, player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        self.connections.leave_room(room, session.connection_id)
        session.unbind()
        self._owners.pop((room, player_id), None)
        await self._broadcast(room, EventType.PLAYER_LEFT, player)

    def _release(self, session: Session) -> tuple[str, Player] | None:
        """Remove the player a rebinding session leaves behind."""
        room, player_id = session.require_binding()
        self.connections.leave_room(room, session.connection_id)
        session.unbind()
        self._owners.pop((room, player_id), None)
        try:
            _, removed = self.registry.remove_player(room, player_id)
        except GameNotFoundError:
            return None
        if removed is None:
            return None
        logger.info("[%s] %s left by joining elsewhere", room, removed.name)
        return room, removed

    # Emitting

    async def _report(self, session: Session, error: GameError) -> None:
        await self._send(session, EventType.GAME_ERROR, error.to_dict())

    async def _send(self, session: Session, event_type: EventType, payload: Any = None) -> None:
        event = self._record(RoomEvent.create(event_type, session.room, payload))
        await self.connections.send_to(session.connection_id, event)

    async def _broadcast(
        self,
        room: str,
        event_type: EventType,
        payload: Any = None,
        *,
        exclude: str | None = None,
    ) -> None:
        event = self._record(RoomEvent.create(event_type, room, payload))
        await self.connections.broadcast(room, event, exclude=exclude)

    def _record(self, event: RoomEvent) -> RoomEvent:
        if self.event_log is not None:
            self.event_log.append(event)
        return event
