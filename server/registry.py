"""In-memory registry of Codenames rooms keyed by name."""

from __future__ import annotations

from typing import Callable, TypeVar

from codenames.codenames_game import CodenamesGame
from codenames.codenames_state import Card, GameState, Player
from framework.errors import GameNameTakenError, GameNotFoundError, InvalidGameNameError

T = TypeVar("T")


def normalize_game_name(name: str | None) -> str:
    normalized = (name or "").strip()
    if not normalized:
        raise InvalidGameNameError("Game name cannot be empty.")
    return normalized


class GameRegistry:
    """Owns every room's `GameState` and serializes updates to it.

    Each mutating method reads the stored state, applies one rule from
    `CodenamesGame`, and swaps the result in before returning it. No method
    awaits, so on a single event loop no caller can observe a room between
    the read and the swap. Returned states are frozen snapshots.
    """

    def __init__(self, game: CodenamesGame | None = None) -> None:
        self.game = game or CodenamesGame()
        self._games: dict[str, GameState] = {}

    def __len__(self) -> int:
        return len(self._games)

    def __contains__(self, name: object) -> bool:
        return name in self._games

    def names(self) -> list[str]:
        return list(self._games)

    def create(self, name: str) -> GameState:
        name = normalize_game_name(name)
        if name in self._games:
            raise GameNameTakenError(name)
        state = self.game.new_game(name)
        self._games[name] = state
        return state

    def find(self, name: str | None) -> GameState | None:
        if name is None:
            return None
        return self._games.get(name.strip())

    def find_or_fail(self, name: str | None) -> GameState:
        state = self.find(name)
        if state is None:
            raise GameNotFoundError(name or "")
        return state

    def remove(self, name: str) -> bool:
        return self._games.pop(name.strip(), None) is not None

    def find_player(self, name: str, player_id: str) -> Player | None:
        state = self.find(name)
        if state is None:
            return None
        return self.game.find_player(state, player_id)

    def join(self, name: str, player: Player) -> tuple[GameState, Player]:
        """Add `player`, or reconnect them when their id is already in the room."""
        state = self.find_or_fail(name)
        if state.player(player.id) is not None:
            return self._update(state, lambda s: self.game.reconnect_player(s, player.id, player.name))
        next_state = self.game.add_player(state, player)
        self._store(next_state)
        return next_state, next_state.players[-1]

    def start_game(self, name: str) -> GameState:
        return self._apply(name, self.game.start_game)

    def reveal_card(self, name: str, word: str) -> tuple[GameState, Card]:
        return self._update(self.find_or_fail(name), lambda s: self.game.reveal_card(s, word))

    def reveal_all(self, name: str) -> GameState:
        return self._apply(name, self.game.reveal_all)

    def assign_spymaster(self, name: str, player_id: str) -> tuple[GameState, Player]:
        return self._update(self.find_or_fail(name), lambda s: self.game.assign_spymaster(s, player_id))

    def switch_team(self, name: str, player_id: str) -> tuple[GameState, Player]:
        return self._update(self.find_or_fail(name), lambda s: self.game.switch_team(s, player_id))

    def end_turn(self, name: str) -> GameState:
        return self._apply(name, self.game.end_turn)

    def reset(self, name: str) -> GameState:
        return self._apply(name, self.game.reset)

    def disconnect_player(self, name: str, player_id: str) -> tuple[GameState, Player]:
        return self._update(self.find_or_fail(name), lambda s: self.game.disconnect_player(s, player_id))

    def reconnect_player(self, name: str, player_id: str) -> tuple[GameState, Player]:
        return self._update(self.find_or_fail(name), lambda s: self.game.reconnect_player(s, player_id))

    def remove_player(self, name: str, player_id: str) -> tuple[GameState | None, Player | None]:
        """Remove a player; the room is deleted once its last player is gone."""
        state = self.find_or_fail(name)
        next_state, removed = self.game.remove_player(state, player_id)
        if removed is None:
            return state, None
        if next_state.is_empty:
            self.remove(state.name)
            return None, removed
        self._store(next_state)
        return next_state, removed

    def expire_player(self, name: str, player_id: str) -> Player | None:
        """Drop a player whose disconnect grace period ran out.

        Reads the room as it is now: if the player reconnected (or the room
        or player is already gone) nothing happens and `None` is returned.
        """
        player = self.find_player(name, player_id)
        if player is None or not player.disconnected:
            return None
        _, removed = self.remove_player(name, player_id)
        return removed

    def _apply(self, name: str, operation: Callable[[GameState], GameState]) -> GameState:
        next_state = operation(self.find_or_fail(name))
        self._store(next_state)
        return next_state

    def _update(
        self,
        state: GameState,
        operation: Callable[[GameState], tuple[GameState, T]],
    ) -> tuple[GameState, T]:
        next_state, result = operation(state)
        self._store(next_state)
        return next_state, result

    def _store(self, state: GameState) -> None:
        self._games[state.name] = state
