"""Codenames room rules as pure state transitions."""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Sequence

from framework.errors import (
    AlreadyStartedError,
    CardNotFoundError,
    NoSpymasterError,
    NotEnoughPlayersError,
    PlayerNameTakenError,
    PlayerNotFoundError,
    SpymasterAlreadyAssignedError,
    SpymasterCannotSwitchError,
)

from .codenames_deck import DEFAULT_WORDS, generate_deck
from .codenames_state import Card, GameState, Player, Scores, Team

DEFAULT_MIN_PLAYERS = 4


class CodenamesGame:
    """Rules for a Codenames room.

    The game object itself holds no room state. Every operation takes a
    `GameState` and returns the next one (sometimes paired with the player
    or card it touched). Rule violations raise a `GameError` subclass and
    leave the input state as it was.
    """

    game_name = "codenames"

    def __init__(
        self,
        *,
        words: Sequence[str] = DEFAULT_WORDS,
        min_players: int = DEFAULT_MIN_PLAYERS,
        unique_player_names: bool = False,
        rng: random.Random | None = None,
    ):
        self.words = tuple(words)
        self.min_players = min_players
        self.unique_player_names = unique_player_names
        self.rng = rng or random.Random()

    def new_game(self, name: str) -> GameState:
        """Create an empty room with a random starting team and a fresh board."""
        starting_team = self.rng.choice([Team.RED, Team.BLUE])
        return GameState(
            name=name,
            starting_team=starting_team,
            active_team=starting_team,
            cards=self._deal(starting_team),
            players=(),
            scores=Scores(),
        )

    # Players

    def find_player(self, state: GameState, player_id: str) -> Player | None:
        return state.player(player_id)

    def spymasters(self, state: GameState) -> dict[Team, Player | None]:
        """Return the current spymaster of each team, if any."""
        result: dict[Team, Player | None] = {Team.RED: None, Team.BLUE: None}
        for player in state.players:
            if player.is_spymaster and player.team is not None:
                result[player.team] = player
        return result

    def add_player(self, state: GameState, player: Player) -> GameState:
        """Append a player, balancing teams when none was requested."""
        if self.unique_player_names:
            for existing in state.players:
                if existing.name == player.name and existing.id != player.id:
                    raise PlayerNameTakenError(player.name)

        if player.team is None:
            player = player.with_team(self._auto_assign_team(state))
        return replace(state, players=state.players + (player,))

    def remove_player(self, state: GameState, player_id: str) -> tuple[GameState, Player | None]:
        """Remove a player by id. Returns `None` for the player when absent."""
        removed = state.player(player_id)
        if removed is None:
            return state, None
        players = tuple(player for player in state.players if player.id != player_id)
        return replace(state, players=players), removed

    def disconnect_player(self, state: GameState, player_id: str) -> tuple[GameState, Player]:
        player = self._require_player(state, player_id)
        return self._replace_player(state, player.mark_disconnected())

    def reconnect_player(
        self,
        state: GameState,
        player_id: str,
        name: str | None = None,
    ) -> tuple[GameState, Player]:
        """Clear the disconnected flag, optionally taking a new display name."""
        player = self._require_player(state, player_id).mark_connected()
        if name:
            player = player.renamed(name)
        return self._replace_player(state, player)

    def assign_spymaster(self, state: GameState, player_id: str) -> tuple[GameState, Player]:
        player = self._require_player(state, player_id)
        if player.is_spymaster:
            return state, player
        current = self.spymasters(state).get(player.team) if player.team is not None else None
        if current is not None:
            raise SpymasterAlreadyAssignedError(current.name)
        return self._replace_player(state, player.make_spymaster())

    def switch_team(self, state: GameState, player_id: str) -> tuple[GameState, Player]:
        player = self._require_player(state, player_id)
        if player.is_spymaster:
            raise SpymasterCannotSwitchError()
        return self._replace_player(state, player.switched_team())

    # Round lifecycle

    def start_game(self, state: GameState) -> GameState:
        """Start the round once enough players joined and both teams have a spymaster."""
        if state.started:
            raise AlreadyStartedError()
        if len(state.players) < self.min_players:
            raise NotEnoughPlayersError(len(state.players), self.min_players)
        for team in (Team.RED, Team.BLUE):
            count = sum(1 for player in state.players if player.is_spymaster and player.team is team)
            if count != 1:
                raise NoSpymasterError()
        return replace(state, started=True)

    def reveal_card(self, state: GameState, word: str) -> tuple[GameState, Card]:
        """Reveal the card showing `word` and evaluate the win conditions.

        A wrong-team reveal ends the turn before the win check, so revealing
        the other team's last card can immediately finish the round. The
        point goes to the team that made the reveal.
        """
        card = state.card(word)
        if card is None:
            raise CardNotFoundError(word)
        if card.is_revealed or state.game_over:
            return state, card

        revealing_team = state.active_team
        revealed = card.revealed()
        cards = tuple(revealed if c.word == word else c for c in state.cards)
        active_team = revealing_team if card.team is revealing_team else revealing_team.other
        next_state = replace(state, cards=cards, active_team=active_team)

        if self.is_won(next_state):
            next_state = replace(
                next_state,
                scores=state.scores.incremented(revealing_team),
                game_over=True,
            )
        return next_state, revealed

    def is_won(self, state: GameState) -> bool:
        """Win by a revealed assassin, or when the active team has no cards left."""
        by_assassin = any(card.is_assassin and card.is_revealed for card in state.cards)
        by_exhaustion = state.remaining(state.active_team) == 0
        return by_assassin or by_exhaustion

    def end_turn(self, state: GameState) -> GameState:
        return replace(state, active_team=state.active_team.other)

    def reveal_all(self, state: GameState) -> GameState:
        """Turn every card face up, e.g. to show the key after a round."""
        return replace(state, cards=tuple(card.revealed() for card in state.cards))

    def reset(self, state: GameState) -> GameState:
        """Start the next round: the other team goes first, players and scores stay."""
        starting_team = state.starting_team.other
        return replace(
            state,
            starting_team=starting_team,
            active_team=starting_team,
            started=False,
            game_over=False,
            players=tuple(player.relinquish_spymaster() for player in state.players),
            cards=self._deal(starting_team),
        )

    def _deal(self, starting_team: Team) -> tuple[Card, ...]:
        return generate_deck(starting_team, self.words, self.rng)

    def _auto_assign_team(self, state: GameState) -> Team:
        counts = state.team_counts()
        if counts[Team.RED] == counts[Team.BLUE]:
            return self.rng.choice([Team.RED, Team.BLUE])
        return Team.BLUE if counts[Team.RED] > counts[Team.BLUE] else Team.RED

    def _require_player(self, state: GameState, player_id: str) -> Player:
        player = state.player(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return player

    def _replace_player(self, state: GameState, updated: Player) -> tuple[GameState, Player]:
        players = tuple(updated if player.id == updated.id else player for player in state.players)
        return replace(state, players=players), updated
