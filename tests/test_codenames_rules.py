"""Rule-level tests for Codenames turns, win conditions and roles."""

from __future__ import annotations

import random
from dataclasses import FrozenInstanceError, replace

import pytest

from codenames.codenames_game import CodenamesGame
from codenames.codenames_state import Card, GameState, Player, Team
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


def _players() -> tuple[Player, ...]:
    return (
        Player(id="r1", name="Ruby", team=Team.RED),
        Player(id="r2", name="Rex", team=Team.RED),
        Player(id="b1", name="Bea", team=Team.BLUE),
        Player(id="b2", name="Bo", team=Team.BLUE),
    )


def _base_state() -> GameState:
    return GameState(
        name="room",
        starting_team=Team.RED,
        active_team=Team.RED,
        cards=(
            Card(word="alpha", team=Team.RED),
            Card(word="beta", team=Team.RED),
            Card(word="gamma", team=Team.BLUE),
            Card(word="delta", team=None),
            Card(word="omega", team=None, is_assassin=True),
        ),
        players=_players(),
    )


def _game(seed: int = 1, **kwargs) -> CodenamesGame:
    return CodenamesGame(rng=random.Random(seed), **kwargs)


def test_new_game_is_an_empty_lobby() -> None:
    state = _game().new_game("room")

    assert state.players == ()
    assert state.active_team is state.starting_team
    assert not state.started and not state.game_over
    assert state.scores.get(Team.RED) == 0 and state.scores.get(Team.BLUE) == 0
    assert state.remaining(state.starting_team) == 9
    assert state.remaining(state.starting_team.other) == 8


def test_unassigned_players_are_balanced() -> None:
    for seed in range(20):
        game = _game(seed)
        state = game.new_game("room")
        for index in range(7):
            state = game.add_player(state, Player.create(f"p{index}"))
            counts = state.team_counts()
            assert abs(counts[Team.RED] - counts[Team.BLUE]) <= 1

        assert all(player.team is not None for player in state.players)


def test_auto_assignment_fills_smaller_team() -> None:
    game = _game()
    state = game.new_game("room")
    state = game.add_player(state, Player.create("a", team=Team.BLUE))
    state = game.add_player(state, Player.create("b", team=Team.BLUE))
    state = game.add_player(state, Player.create("c"))

    assert state.players[-1].team is Team.RED
    assert [player.name for player in state.players] == ["a", "b", "c"]


def test_duplicate_names_allowed_unless_unique_names_enforced() -> None:
    lenient = _game()
    state = lenient.add_player(_base_state(), Player.create("Ruby"))
    assert [player.name for player in state.players].count("Ruby") == 2

    strict = _game(unique_player_names=True)
    with pytest.raises(PlayerNameTakenError):
        strict.add_player(_base_state(), Player.create("Ruby"))


def test_second_spymaster_on_same_team_is_rejected() -> None:
    game = _game()
    state, first = game.assign_spymaster(_base_state(), "r1")

    with pytest.raises(SpymasterAlreadyAssignedError) as excinfo:
        game.assign_spymaster(state, "r2")

    assert "Ruby" in str(excinfo.value)
    assert excinfo.value.to_dict()["type"] == "SpymasterAlreadyAssigned"
    assert state.player("r1") == first
    assert first.is_spymaster
    assert not state.player("r2").is_spymaster


def test_each_team_can_have_one_spymaster() -> None:
    game = _game()
    state, _ = game.assign_spymaster(_base_state(), "r1")
    state, _ = game.assign_spymaster(state, "b2")

    spymasters = game.spymasters(state)
    assert spymasters[Team.RED].id == "r1"
    assert spymasters[Team.BLUE].id == "b2"


def test_assigning_current_spymaster_again_is_a_no_op() -> None:
    game = _game()
    state, first = game.assign_spymaster(_base_state(), "r1")

    again, player = game.assign_spymaster(state, "r1")

    assert again is state
    assert player == first and player.is_spymaster


def test_spymaster_cannot_switch_team() -> None:
    game = _game()
    state, _ = game.assign_spymaster(_base_state(), "r1")

    with pytest.raises(SpymasterCannotSwitchError):
        game.switch_team(state, "r1")

    state, switched = game.switch_team(state, "r2")
    assert switched.team is Team.BLUE
    assert state.player("r2").team is Team.BLUE


def test_unknown_player_is_reported() -> None:
    with pytest.raises(PlayerNotFoundError):
        _game().assign_spymaster(_base_state(), "nobody")


def test_start_game_preconditions() -> None:
    game = _game()
    base = _base_state()

    with pytest.raises(NotEnoughPlayersError):
        game.start_game(replace(base, players=base.players[:3]))

    with pytest.raises(NoSpymasterError):
        game.start_game(base)

    state, _ = game.assign_spymaster(base, "r1")
    with pytest.raises(NoSpymasterError):
        game.start_game(state)

    state, _ = game.assign_spymaster(state, "b1")
    started = game.start_game(state)
    assert started.started

    with pytest.raises(AlreadyStartedError):
        game.start_game(started)


def test_removing_spymaster_after_start_keeps_game_started() -> None:
    game = _game()
    state, _ = game.assign_spymaster(_base_state(), "r1")
    state, _ = game.assign_spymaster(state, "b1")
    state = game.start_game(state)

    state, removed = game.remove_player(state, "r1")

    assert removed is not None and removed.id == "r1"
    assert state.started
    assert game.remove_player(state, "r1") == (state, None)


def test_own_card_keeps_turn_and_other_card_ends_it() -> None:
    game = _game()
    state, card = game.reveal_card(_base_state(), "alpha")
    assert card.is_revealed
    assert state.active_team is Team.RED
    assert not state.game_over

    state, _ = game.reveal_card(state, "delta")
    assert state.active_team is Team.BLUE
    assert not state.game_over


def test_re_revealing_a_card_changes_nothing() -> None:
    game = _game()
    state, _ = game.reveal_card(_base_state(), "delta")
    again, card = game.reveal_card(state, "delta")

    assert again is state
    assert card.is_revealed
    assert again.active_team is Team.BLUE
    assert again.scores == state.scores
    assert again.game_over == state.game_over


def test_assassin_ends_round_and_scores_revealing_team() -> None:
    game = _game()
    state, card = game.reveal_card(_base_state(), "omega")

    assert card.is_assassin and card.is_revealed
    assert state.game_over
    assert state.scores.get(Team.RED) == 1
    assert state.scores.get(Team.BLUE) == 0


def test_revealing_last_own_card_wins() -> None:
    game = _game()
    state, _ = game.reveal_card(_base_state(), "alpha")
    assert not state.game_over

    state, _ = game.reveal_card(state, "beta")

    assert state.game_over
    assert state.active_team is Team.RED
    assert state.scores.get(Team.RED) == 1


def test_turn_flips_before_exhaustion_check() -> None:
    game = _game()
    state, _ = game.reveal_card(_base_state(), "gamma")

    assert state.active_team is Team.BLUE
    assert state.remaining(Team.BLUE) == 0
    assert state.game_over
    assert state.scores.get(Team.RED) == 1


def test_reveal_after_game_over_is_ignored() -> None:
    game = _game()
    finished, _ = game.reveal_card(_base_state(), "omega")
    state, card = game.reveal_card(finished, "alpha")

    assert state is finished
    assert not card.is_revealed


def test_unknown_word_is_rejected() -> None:
    with pytest.raises(CardNotFoundError):
        _game().reveal_card(_base_state(), "zeta")


def test_end_turn_flips_active_team() -> None:
    game = _game()
    state = game.end_turn(_base_state())
    assert state.active_team is Team.BLUE
    assert game.end_turn(state).active_team is Team.RED


def test_reveal_all_shows_every_card_without_scoring() -> None:
    game = _game()
    state = game.reveal_all(_base_state())

    assert all(card.is_revealed for card in state.cards)
    assert state.scores.get(Team.RED) == 0
    assert state.active_team is Team.RED


def test_reset_after_finished_round() -> None:
    game = _game()
    state, _ = game.assign_spymaster(_base_state(), "r1")
    state, _ = game.assign_spymaster(state, "b1")
    state = game.start_game(state)
    state, _ = game.reveal_card(state, "omega")
    assert state.game_over

    fresh = game.reset(state)

    assert not fresh.game_over and not fresh.started
    assert fresh.starting_team is Team.BLUE
    assert fresh.active_team is Team.BLUE
    assert not any(player.is_spymaster for player in fresh.players)
    assert [player.id for player in fresh.players] == [player.id for player in state.players]
    assert fresh.scores == state.scores
    assert len(fresh.cards) == 25
    assert fresh.remaining(Team.BLUE) == 9
    assert not any(card.is_revealed for card in fresh.cards)


def test_disconnect_and_reconnect_keep_player() -> None:
    game = _game()
    state, player = game.disconnect_player(_base_state(), "b1")
    assert player.disconnected
    assert len(state.players) == 4

    state, player = game.reconnect_player(state, "b1", name="Beatrice")
    assert not player.disconnected
    assert state.player("b1").name == "Beatrice"


def test_states_are_frozen() -> None:
    state = _base_state()

    with pytest.raises(FrozenInstanceError):
        state.active_team = Team.BLUE  # type: ignore[misc]
    with pytest.raises(FrozenInstanceError):
        state.cards[0].is_revealed = True  # type: ignore[misc]


def test_snapshot_serialization() -> None:
    payload = _base_state().to_dict()

    assert payload["active_team"] == "RED"
    assert payload["scores"] == {"RED": 0, "BLUE": 0}
    assert payload["remaining_red"] == 2
    assert payload["remaining_blue"] == 1
    assert payload["cards"][4] == {"word": "omega", "team": None, "is_revealed": False, "is_assassin": True}
    assert payload["players"][0]["id"] == "r1"
