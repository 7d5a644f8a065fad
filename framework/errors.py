"""Structured exceptions raised by game rules and the room registry."""

from __future__ import annotations

from typing import Any


class GameError(Exception):
    """Base class for recoverable, request-scoped game failures."""

    kind: str = "GameError"

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {"type": self.kind, "message": str(self)}


class GameNotFoundError(GameError):
    """Raised when no room exists under the requested name."""

    kind = "GameNotFound"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Game {name!r} not found.")


class GameNameTakenError(GameError):
    """Raised when creating a room whose name is already in use."""

    kind = "GameNameTaken"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Game name {name!r} is already taken.")


class InvalidGameNameError(GameError):
    kind = "InvalidGameName"


class PlayerNameTakenError(GameError):
    """Raised when unique player names are enforced and the name is in use."""

    kind = "PlayerNameTaken"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Name {name} is already taken!")


class PlayerNotFoundError(GameError):
    kind = "PlayerNotFound"

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player {player_id!r} is not in this game.")


class CardNotFoundError(GameError):
    kind = "CardNotFound"

    def __init__(self, word: str):
        self.word = word
        super().__init__(f"No card {word!r} on the board.")


class NotEnoughPlayersError(GameError):
    kind = "NotEnoughPlayers"

    def __init__(self, count: int, minimum: int):
        self.count = count
        self.minimum = minimum
        super().__init__(f"Not enough players! {count} joined, {minimum} required.")


class NoSpymasterError(GameError):
    kind = "NoSpymaster"

    def __init__(self) -> None:
        super().__init__("Both teams need a spymaster!")


class AlreadyStartedError(GameError):
    kind = "AlreadyStarted"

    def __init__(self) -> None:
        super().__init__("The game has already started!")


class SpymasterAlreadyAssignedError(GameError):
    """Raised when a team already has a spymaster."""

    kind = "SpymasterAlreadyAssigned"

    def __init__(self, spymaster_name: str):
        self.spymaster_name = spymaster_name
        super().__init__(f"{spymaster_name} is already spymaster!")

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["spymaster"] = self.spymaster_name
        return payload


class SpymasterCannotSwitchError(GameError):
    kind = "SpymasterCannotSwitch"

    def __init__(self) -> None:
        super().__init__("Spymasters cannot switch teams!")


class NotInGameError(GameError):
    kind = "NotInGame"

    def __init__(self) -> None:
        super().__init__("Join a game first.")


class InvalidRequestError(GameError):
    kind = "InvalidRequest"
