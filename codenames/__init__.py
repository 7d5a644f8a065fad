"""Codenames package exports."""

from .codenames_deck import DEFAULT_WORDS, generate_deck
from .codenames_game import CodenamesGame
from .codenames_state import BOARD_SIZE, Card, GameState, Player, Scores, Team, parse_team

__all__ = [
    "BOARD_SIZE",
    "Card",
    "CodenamesGame",
    "DEFAULT_WORDS",
    "GameState",
    "Player",
    "Scores",
    "Team",
    "generate_deck",
    "parse_team",
]
