"""Drives the computer opponent through the engine"""

import copy
import logging
import random
from typing import Optional

from .bots import get_bot
from .cards import format_cards
from .constants import PHASE_GAME_OVER, PHASE_SELECTING_SUIT
from .engine import declare_niko_kadi, draw_card, handle_penalty_draw, play_cards, select_suit
from .models import GameState
from .rules import default_rules

logger = logging.getLogger(__name__)


def make_ai_move(
    state: GameState,
    difficulty: Optional[str] = None,
    rng: Optional[random.Random] = None,
    pressure_threshold: Optional[int] = None
) -> GameState:
    """
    Make one move for the computer opponent.

    Args:
        state: Current game state
        difficulty: Strategy tier, defaults to the game's ``ai_difficulty``
        rng: Optional random generator for any reshuffle
        pressure_threshold: Opponent hand size that triggers the hard bot's penalty play,
            defaults to the game's ``hard_pressure_threshold``

    Returns:
        New game state, or an unchanged copy if it is not the computer's turn
    """
    player = state.current_player
    if state.game_phase == PHASE_GAME_OVER or not player.is_bot:
        return copy.deepcopy(state)

    difficulty = difficulty or state.ai_difficulty or default_rules.ai_difficulty
    if pressure_threshold is None:
        pressure_threshold = state.hard_pressure_threshold
    if pressure_threshold is None:
        pressure_threshold = default_rules.hard_pressure_threshold
    bot = get_bot(difficulty, pressure_threshold=pressure_threshold)

    if state.game_phase == PHASE_SELECTING_SUIT:
        suit = bot.choose_suit(player.hand, fallback=state.top_card.suit)
        logger.debug(f"{player.name} names {suit} for a suspended Ace")
        return select_suit(state, suit, rng)

    new_state = state
    if len(player.hand) == 1 and not player.niko_kadi_called:
        new_state = declare_niko_kadi(new_state)

    action = bot.choose_action(new_state)
    logger.debug(f"{player.name} ({bot.difficulty}) chose {action}")

    if action.type == 'play':
        logger.info(f"{player.name} plays {format_cards(action.data['cards'])}")
        return play_cards(new_state, action.card_ids, action.data.get('declared_suit'), rng)
    if action.type == 'penalty_draw':
        return handle_penalty_draw(new_state, rng)
    return draw_card(new_state, new_state.current_player_index, rng)
