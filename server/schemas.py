"""Pydantic request schemas for the HTTP API and WebSocket actions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from codenames.codenames_state import Team, parse_team


class CreateGameRequest(BaseModel):
    """Request body for creating a room."""

    name: str


class ActionMessage(BaseModel):
    """Inbound WebSocket frame: `{"type": <action>, "data": {...}}`."""

    type: str
    data: dict[str, Any] = Field(default_factory=dict)


class RoomNamePayload(BaseModel):
    name: str


class PlayerPayload(BaseModel):
    """Player as sent by a client. A known `id` means reconnect."""

    name: str
    team: Team | None = None
    id: str | None = None

    @field_validator("team", mode="before")
    @classmethod
    def _parse_team(cls, value: Any) -> Team | None:
        return parse_team(value)


class JoinPayload(BaseModel):
    name: str
    player: PlayerPayload


class CardRef(BaseModel):
    word: str


class RevealPayload(BaseModel):
    """Accepts either `{"word": ...}` or a whole card `{"card": {"word": ...}}`."""

    word: str | None = None
    card: CardRef | None = None

    @model_validator(mode="after")
    def _require_word(self) -> "RevealPayload":
        if self.word is None and self.card is None:
            raise ValueError("reveal needs a word or a card.")
        return self

    @property
    def target_word(self) -> str:
        return self.word if self.word is not None else self.card.word  # type: ignore[union-attr]
