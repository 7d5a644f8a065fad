"""Base class for immutable, serializable game values."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from .serialize import digest, to_serializable


@dataclass(frozen=True)
class State:
    """Frozen value with serialization helpers.

    Subclasses hold only immutable members (tuples, enums, other `State`
    values), so an instance can be handed to any caller as a snapshot.
    """

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dictionary."""
        return {field.name: to_serializable(getattr(self, field.name)) for field in fields(self)}

    def state_digest(self) -> str:
        """Return a deterministic digest, written next to snapshots in the event log."""
        return digest(self.to_dict())
