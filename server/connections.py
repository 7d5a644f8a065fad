"""WebSocket connection tracking and room fan-out."""

from __future__ import annotations

import logging

from fastapi import WebSocket

from framework.events import RoomEvent

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks open sockets by connection id and their room membership.

    Runs on the single asyncio event loop, so no locking is needed.
    """

    def __init__(self) -> None:
        self._sockets: dict[str, WebSocket] = {}
        # {room: [connection_id, ...]} in join order
        self._rooms: dict[str, list[str]] = {}

    def register(self, connection_id: str, websocket: WebSocket) -> None:
        self._sockets[connection_id] = websocket

    def unregister(self, connection_id: str) -> None:
        self._sockets.pop(connection_id, None)
        for room in list(self._rooms):
            self.leave_room(room, connection_id)

    def join_room(self, room: str, connection_id: str) -> None:
        members = self._rooms.setdefault(room, [])
        if connection_id not in members:
            members.append(connection_id)

    def leave_room(self, room: str, connection_id: str) -> None:
        members = self._rooms.get(room)
        if members is None:
            return
        if connection_id in members:
            members.remove(connection_id)
        if not members:
            self._rooms.pop(room, None)

    def members(self, room: str) -> list[str]:
        return list(self._rooms.get(room, []))

    async def send_to(self, connection_id: str, event: RoomEvent) -> None:
        """Send an event to a single connection."""
        websocket = self._sockets.get(connection_id)
        if websocket is None:
            return
        try:
            await websocket.send_json(event.to_message())
        except Exception as exc:
            logger.warning("send_to %s failed: %s", connection_id, exc)
            self.unregister(connection_id)

    async def broadcast(self, room: str, event: RoomEvent, exclude: str | None = None) -> None:
        """Send an event to every connection in `room` except `exclude`."""
        for connection_id in self.members(room):
            if connection_id == exclude:
                continue
            await self.send_to(connection_id, event)
