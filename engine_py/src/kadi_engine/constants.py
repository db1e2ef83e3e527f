"""Game constants and utilities"""

from enum import Enum
from typing import Dict, List, Literal

Suit = Literal['hearts', 'diamonds', 'clubs', 'spades']
Rank = Literal['A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K']
AIDifficulty = Literal['easy', 'medium', 'hard']

SUITS: List[str] = ['hearts', 'diamonds', 'clubs', 'spades']
RANKS: List[str] = ['A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K']
DIFFICULTIES: List[str] = ['easy', 'medium', 'hard']

SUIT_SYMBOLS: Dict[str, str] = {
    'hearts': '♥',
    'diamonds': '♦',
    'clubs': '♣',
    'spades': '♠',
}

DECK_SIZE = 52
PLAYER_COUNT = 2


class CardCategory(str, Enum):
    """Special-effect category of a rank."""
    PENALTY = "penalty"
    JUMP = "jump"
    KICKBACK = "kickback"
    QUESTION = "question"
    ANSWER = "answer"
    WILD = "wild"


RANK_CATEGORIES: Dict[str, CardCategory] = {
    '2': CardCategory.PENALTY,
    '3': CardCategory.PENALTY,
    'J': CardCategory.JUMP,
    'K': CardCategory.KICKBACK,
    'Q': CardCategory.QUESTION,
    '8': CardCategory.QUESTION,
    'A': CardCategory.WILD,
}

PENALTY_VALUES: Dict[str, int] = {'2': 2, '3': 3}

# Ranks that carry an effect and may not open the discard pile
INVALID_STARTING_RANKS = frozenset({'2', '3', '8', 'Q', 'K', 'J', 'A'})

# Ranks that leave an unresolved effect and may not end the game
INVALID_WINNING_RANKS = frozenset({'J', 'K', 'A', '2', '3'})

# Game phases
PHASE_SETUP = "setup"
PHASE_PLAYING = "playing"
PHASE_SELECTING_SUIT = "selectingSuit"
PHASE_GAME_OVER = "gameOver"

GamePhase = Literal['setup', 'playing', 'selectingSuit', 'gameOver']


class MoveType(str, Enum):
    """Player intents accepted by the engine."""
    PLAY_CARDS = "playCards"
    DRAW_CARD = "drawCard"
    DRAW_PENALTY = "drawPenalty"
    DECLARE_NIKO_KADI = "declareNikoKadi"
    SELECT_SUIT = "selectSuit"


# Error codes
ERROR_NOT_YOUR_TURN = "NOT_YOUR_TURN"
ERROR_OWNERSHIP = "OWNERSHIP"
ERROR_PATTERN_MISMATCH = "PATTERN_MISMATCH"
ERROR_ILLEGAL_PLAY = "ILLEGAL_PLAY"
ERROR_PENALTY_PENDING = "PENALTY_PENDING"
ERROR_WRONG_PHASE = "WRONG_PHASE"
ERROR_GAME_OVER = "GAME_OVER"
ERROR_INVALID_SUIT = "INVALID_SUIT"
ERROR_INVALID_MOVE = "INVALID_MOVE"
ERROR_CORRUPT_STATE = "CORRUPT_STATE"
