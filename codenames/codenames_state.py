"""State values and enums for Codenames rooms."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any
from uuid import uuid4

from framework.state import State

BOARD_SIZE = 25


class Team(str, Enum):
    """Codenames teams."""

    RED = "RED"
    BLUE = "BLUE"

    @property
    def other(self) -> "Team":
        return Team.BLUE if self is Team.RED else Team.RED


def parse_team(raw: Any) -> Team | None:
    """Parse an optional team value from client payloads."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, Team):
        return raw
    value = str(raw).strip().upper()
    if value == Team.RED.value:
        return Team.RED
    if value == Team.BLUE.value:
        return Team.BLUE
    raise ValueError(f"Invalid team: {raw!r}")


@dataclass(frozen=True)
class Card(State):
    """One board card. Neutral and assassin cards have no team."""

    word: str
    team: Team | None
    is_revealed: bool = False
    is_assassin: bool = False

    def revealed(self) -> "Card":
        return replace(self, is_revealed=True)


@dataclass(frozen=True)
class Player(State):
    """A participant in a room, identified by `id`."""

    id: str
    name: str
    team: Team | None = None
    is_spymaster: bool = False
    disconnected: bool = False

    @classmethod
    def create(cls, name: str, team: Team | None = None, player_id: str | None = None) -> "Player":
        """Build a player, assigning a fresh id unless one is supplied."""
        if name is None:
            raise ValueError("Player name is required.")
        return cls(id=player_id or uuid4().hex, name=str(name), team=team)

    def make_spymaster(self) -> "Player":
        return replace(self, is_spymaster=True)

    def relinquish_spymaster(self) -> "Player":
        return replace(self, is_spymaster=False)

    def with_team(self, team: Team) -> "Player":
        return replace(self, team=team)

    def switched_team(self) -> "Player":
        # Unassigned players land on RED.
        return replace(self, team=self.team.other if self.team is not None else Team.RED)

    def mark_disconnected(self) -> "Player":
        return replace(self, disconnected=True)

    def mark_connected(self) -> "Player":
        return replace(self, disconnected=False)

    def renamed(self, name: str) -> "Player":
        return replace(self, name=name)


@dataclass(frozen=True)
class Scores(State):
    """Per-team round wins, kept across resets."""

    red: int = 0
    blue: int = 0

    def get(self, team: Team) -> int:
        return self.red if team is Team.RED else self.blue

    def incremented(self, team: Team) -> "Scores":
        if team is Team.RED:
            return replace(self, red=self.red + 1)
        return replace(self, blue=self.blue + 1)

    def to_dict(self) -> dict[str, Any]:
        return {Team.RED.value: self.red, Team.BLUE.value: self.blue}


@dataclass(frozen=True)
class GameState(State):
    """Immutable snapshot of one room.

    Every rule operation in `CodenamesGame` returns a new `GameState`;
    instances are never mutated after construction.
    """

    name: str
    starting_team: Team
    active_team: Team
    cards: tuple[Card, ...]
    players: tuple[Player, ...] = ()
    scores: Scores = field(default_factory=Scores)
    started: bool = False
    game_over: bool = False

    def remaining(self, team: Team) -> int:
        """Count unrevealed cards belonging to `team`."""
        return sum(1 for card in self.cards if card.team is team and not card.is_revealed)

    def team_counts(self) -> dict[Team, int]:
        counts = {Team.RED: 0, Team.BLUE: 0}
        for player in self.players:
            if player.team is not None:
                counts[player.team] += 1
        return counts

    def player(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def card(self, word: str) -> Card | None:
        for card in self.cards:
            if card.word == word:
                return card
        return None

    @property
    def is_empty(self) -> bool:
        return not self.players

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["remaining_red"] = self.remaining(Team.RED)
        payload["remaining_blue"] = self.remaining(Team.BLUE)
        return payload
