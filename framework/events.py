"""Room event schema and JSONL event logging."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from time import time
from typing import Any, Mapping

from .serialize import json_dumps, to_serializable
from .state import State


class EventType(str, Enum):
    """Events pushed from the server to room clients."""

    GAME_FOUND = "gameFound"
    GAME_JOINED = "gameJoined"
    NEW_USER_JOINED = "newUserJoined"
    GAME_STARTED = "gameStarted"
    UPDATE_GAME = "updateGame"
    SPYMASTER_ASSIGNED = "spymasterAssigned"
    TEAM_SWITCHED = "teamSwitched"
    TURN_ENDED = "turnEnded"
    NEW_GAME = "newGame"
    PLAYER_LEFT = "playerLeft"
    PLAYER_DISCONNECTED = "playerDisconnected"
    GAME_ERROR = "gameError"


@dataclass(frozen=True)
class RoomEvent:
    """Single outbound event addressed to a room (or one of its clients)."""

    event_type: EventType
    room: str | None
    payload: Any = None
    timestamp_ms: int = field(default=0, compare=False)

    def to_message(self) -> dict[str, Any]:
        """Return the wire frame sent to clients."""
        return {"event": self.event_type.value, "data": to_serializable(self.payload)}

    def to_dict(self) -> dict[str, Any]:
        """Return JSON-serializable event data for the event log."""
        data = {
            "event_type": self.event_type.value,
            "room": self.room,
            "timestamp_ms": self.timestamp_ms,
            "payload": to_serializable(self.payload),
        }
        if isinstance(self.payload, State):
            data["state_digest"] = self.payload.state_digest()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoomEvent":
        """Build an event from a dictionary payload."""
        return cls(
            event_type=EventType(str(data["event_type"])),
            room=data.get("room"),
            payload=data.get("payload"),
            timestamp_ms=int(data.get("timestamp_ms", 0)),
        )

    @classmethod
    def create(cls, event_type: EventType, room: str | None, payload: Any = None) -> "RoomEvent":
        """Construct an event with the current wall-clock timestamp."""
        return cls(
            event_type=event_type,
            room=room,
            payload=payload,
            timestamp_ms=int(time() * 1000),
        )


class RoomEventLog:
    """Append-only JSONL sink for room events."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, event: RoomEvent) -> None:
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json_dumps(event.to_dict()))
            handle.write("\n")


def read_jsonl(path: str | Path) -> list[RoomEvent]:
    """Load events written by `RoomEventLog`."""
    events: list[RoomEvent] = []
    with Path(path).open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if line:
                events.append(RoomEvent.from_dict(json.loads(line)))
    return events
