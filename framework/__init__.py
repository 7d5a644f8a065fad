"""Shared building blocks: errors, serialization, events, settings."""

from .errors import GameError
from .events import EventType, RoomEvent, RoomEventLog
from .settings import ServerSettings
from .state import State

__all__ = [
    "EventType",
    "GameError",
    "RoomEvent",
    "RoomEventLog",
    "ServerSettings",
    "State",
]
