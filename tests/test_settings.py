"""Settings parsing and error payload tests."""

from __future__ import annotations

import pytest

from framework.errors import GameNotFoundError, NotEnoughPlayersError
from framework.settings import DEFAULT_CORS_ORIGINS, ServerSettings


def test_defaults_without_environment(monkeypatch) -> None:
    for name in ("CORS_ORIGINS", "MIN_PLAYERS", "DISCONNECT_GRACE_SEC", "UNIQUE_PLAYER_NAMES", "EVENT_LOG_PATH", "PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = ServerSettings.from_env()

    assert settings.disconnect_grace_sec == 30.0
    assert settings.min_players == 4
    assert settings.unique_player_names is False
    assert settings.event_log_path is None
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("MIN_PLAYERS", "2")
    monkeypatch.setenv("DISCONNECT_GRACE_SEC", "5.5")
    monkeypatch.setenv("UNIQUE_PLAYER_NAMES", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = ServerSettings.from_env()

    assert settings.cors_origins == ("http://a.test", "http://b.test")
    assert settings.min_players == 2
    assert settings.disconnect_grace_sec == 5.5
    assert settings.unique_player_names is True
    assert settings.log_level == "DEBUG"


def test_invalid_minimum_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("MIN_PLAYERS", "0")

    with pytest.raises(ValueError):
        ServerSettings.from_env()


def test_error_payloads_use_kind() -> None:
    assert GameNotFoundError("A").to_dict() == {"type": "GameNotFound", "message": "Game 'A' not found."}
    assert NotEnoughPlayersError(2, 4).to_dict()["type"] == "NotEnoughPlayers"


def test_dotenv_file_fills_unset_variables(monkeypatch, tmp_path) -> None:
    dotenv = tmp_path / ".env"
    dotenv.write_text("# room server\nMIN_PLAYERS=2\nEVENT_LOG_PATH='logs/rooms.jsonl'\nPORT=9000\n", encoding="utf-8")
    for name in ("MIN_PLAYERS", "EVENT_LOG_PATH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PORT", "8100")

    settings = ServerSettings.from_env(dotenv)

    assert settings.min_players == 2
    assert settings.event_log_path == "logs/rooms.jsonl"
    assert settings.port == 8100
