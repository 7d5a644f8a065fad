"""Room server settings, read from the process environment and `.env`.

Variables: HOST, PORT, CORS_ORIGINS (comma separated), DISCONNECT_GRACE_SEC,
MIN_PLAYERS, UNIQUE_PLAYER_NAMES, EVENT_LOG_PATH and LOG_LEVEL. Values already
set in the environment win over the `.env` file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CORS_ORIGINS: tuple[str, ...] = ("http://localhost:5173", "http://127.0.0.1:5173")


def read_dotenv(path: str | Path = ".env") -> dict[str, str]:
    """Parse `KEY=value` lines; blank lines and `#` comments are skipped."""
    dotenv_path = Path(path)
    if not dotenv_path.is_file():
        return {}

    values: dict[str, str] = {}
    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        key, sep, value = raw_line.strip().partition("=")
        if not sep or not key or key.startswith("#"):
            continue
        values[key.strip()] = value.strip().strip("'\"")
    return values


def _parse_bool(raw: str | None) -> bool:
    return (raw or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ServerSettings:
    """Process configuration for the room server."""

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    disconnect_grace_sec: float = 30.0
    min_players: int = 4
    unique_player_names: bool = False
    event_log_path: str | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: str | Path = ".env") -> "ServerSettings":
        """Build settings from the environment, falling back to `dotenv_path`."""
        env = read_dotenv(dotenv_path)
        env.update((key, value) for key, value in os.environ.items() if value)

        origins_raw = env.get("CORS_ORIGINS")
        origins = (
            tuple(origin.strip() for origin in origins_raw.split(",") if origin.strip())
            if origins_raw
            else DEFAULT_CORS_ORIGINS
        )
        min_players = int(env.get("MIN_PLAYERS", "4"))
        if min_players < 1:
            raise ValueError("MIN_PLAYERS must be >= 1.")
        grace = float(env.get("DISCONNECT_GRACE_SEC", "30"))
        if grace < 0:
            raise ValueError("DISCONNECT_GRACE_SEC must be >= 0.")
        return cls(
            host=env.get("HOST", "0.0.0.0"),
            port=int(env.get("PORT", "8000")),
            cors_origins=origins,
            disconnect_grace_sec=grace,
            min_players=min_players,
            unique_player_names=_parse_bool(env.get("UNIQUE_PLAYER_NAMES")),
            event_log_path=env.get("EVENT_LOG_PATH"),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
