"""
Rules engine for the two-player card game Kadi.
"""

from .ai import make_ai_move
from .bots import BaseBot, EasyBot, HardBot, MediumBot, get_bot
from .cards import (
    can_play_card, can_win_with_cards, get_card_category, get_penalty_value, is_valid_starting_card,
)
from .constants import CardCategory, MoveType
from .engine import (
    ActionResult, declare_niko_kadi, draw_card, handle_penalty_draw, initialize_game,
    play_cards, select_suit, submit_play, submit_suit,
)
from .errors import GameError
from .intents import PlayIntent, apply_move, parse_move
from .models import Card, GameState, Player
from .rules import RuleConfig, create_rules, default_rules
from .serialization import dumps_state, loads_state, sanitize_state, state_from_dict, state_to_dict
from .shuffle import create_deck, shuffle_deck
from .validate import ValidationResult, can_player_play, validate_play

__all__ = [
    "ActionResult", "BaseBot", "Card", "CardCategory", "EasyBot", "GameError", "GameState",
    "HardBot", "MediumBot", "MoveType", "Player", "PlayIntent", "RuleConfig", "ValidationResult",
    "apply_move", "can_play_card", "can_player_play", "can_win_with_cards", "create_deck",
    "create_rules", "declare_niko_kadi", "default_rules", "draw_card", "dumps_state",
    "get_bot", "get_card_category", "get_penalty_value", "handle_penalty_draw",
    "initialize_game", "is_valid_starting_card", "loads_state", "make_ai_move", "parse_move",
    "play_cards", "sanitize_state", "select_suit", "shuffle_deck", "state_from_dict",
    "state_to_dict", "submit_play", "submit_suit", "validate_play",
]
