"""
Player intent models and dispatch.

The UI or sync layer hands raw intents (``{"type": "playCards", ...}``) to
``parse_move`` and applies the parsed move with ``apply_move``.
"""

import logging
import random
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from .constants import (
    ERROR_GAME_OVER, ERROR_INVALID_MOVE, ERROR_NOT_YOUR_TURN, ERROR_PENALTY_PENDING,
    ERROR_WRONG_PHASE, MoveType, PHASE_GAME_OVER, PHASE_PLAYING, Suit,
)
from .engine import (
    ActionResult, declare_niko_kadi, draw_card, handle_penalty_draw, submit_play, submit_suit,
)
from .models import GameState

logger = logging.getLogger(__name__)


class PlayIntent(BaseModel):
    """Cards to play and, for an Ace, the suit to declare."""
    card_ids: List[str] = Field(..., min_length=1, max_length=4)
    declared_suit: Optional[Suit] = None


# Move models
class BaseMove(BaseModel):
    """Base move model."""
    type: MoveType
    player_index: Optional[int] = Field(default=None, ge=0, le=1)


class PlayCardsMove(BaseMove):
    """Play cards move."""
    type: MoveType = MoveType.PLAY_CARDS
    card_ids: List[str] = Field(..., min_length=1, max_length=4)
    declared_suit: Optional[Suit] = None

    def to_intent(self) -> PlayIntent:
        return PlayIntent(card_ids=self.card_ids, declared_suit=self.declared_suit)


class DrawCardMove(BaseMove):
    """Draw one card move."""
    type: MoveType = MoveType.DRAW_CARD


class DrawPenaltyMove(BaseMove):
    """Draw the penalty stack move."""
    type: MoveType = MoveType.DRAW_PENALTY


class DeclareNikoKadiMove(BaseMove):
    """Declare Niko Kadi move."""
    type: MoveType = MoveType.DECLARE_NIKO_KADI


class SelectSuitMove(BaseMove):
    """Name the suit for an Ace move."""
    type: MoveType = MoveType.SELECT_SUIT
    suit: Suit


# Union type for all moves
Move = Union[
    PlayCardsMove,
    DrawCardMove,
    DrawPenaltyMove,
    DeclareNikoKadiMove,
    SelectSuitMove,
]

MOVE_MODELS = {
    MoveType.PLAY_CARDS: PlayCardsMove,
    MoveType.DRAW_CARD: DrawCardMove,
    MoveType.DRAW_PENALTY: DrawPenaltyMove,
    MoveType.DECLARE_NIKO_KADI: DeclareNikoKadiMove,
    MoveType.SELECT_SUIT: SelectSuitMove,
}


def parse_move(data: Dict[str, Any]) -> Move:
    """
    Parse raw intent data into the appropriate move model.

    Args:
        data: Raw intent data from the caller

    Returns:
        Parsed move model

    Raises:
        ValueError: If the move type is invalid or the data is malformed
    """
    move_type = data.get("type")

    if not move_type:
        raise ValueError("Missing move type")

    try:
        move_type = MoveType(move_type)
    except ValueError:
        raise ValueError(f"Invalid move type: {move_type}")

    move_class = MOVE_MODELS.get(move_type)
    if not move_class:
        raise ValueError(f"No handler for move type: {move_type}")

    try:
        return move_class(**data)
    except Exception as e:
        raise ValueError(f"Invalid move data: {str(e)}")


def apply_move(state: GameState, move: Move, rng: Optional[random.Random] = None) -> ActionResult:
    """
    Check a move against the state and apply it.

    Args:
        state: Current game state
        move: Parsed move
        rng: Optional random generator for any reshuffle

    Returns:
        ActionResult holding the new state, or the untouched state and the rejection reason
    """
    if state.game_phase == PHASE_GAME_OVER:
        return ActionResult.error(state, ERROR_GAME_OVER, "The game is over")

    if move.player_index is not None and move.player_index != state.current_player_index:
        return ActionResult.error(
            state,
            ERROR_NOT_YOUR_TURN,
            f"It's not your turn (current turn: {state.current_player.name})"
        )

    if isinstance(move, SelectSuitMove):
        return submit_suit(state, move.suit, rng)

    if isinstance(move, DeclareNikoKadiMove):
        return ActionResult.ok(declare_niko_kadi(state))

    if state.game_phase != PHASE_PLAYING:
        return ActionResult.error(
            state,
            ERROR_WRONG_PHASE,
            f"Cannot {move.type.value} during phase {state.game_phase}"
        )

    if isinstance(move, PlayCardsMove):
        intent = move.to_intent()
        return submit_play(state, intent.card_ids, intent.declared_suit, rng)

    if isinstance(move, DrawCardMove):
        if state.draw_stack > 0:
            return ActionResult.error(
                state,
                ERROR_PENALTY_PENDING,
                f"Must draw the {state.draw_stack} penalty cards"
            )
        return ActionResult.ok(draw_card(state, state.current_player_index, rng))

    if isinstance(move, DrawPenaltyMove):
        if state.draw_stack == 0:
            return ActionResult.error(state, ERROR_INVALID_MOVE, "No penalty to draw")
        return ActionResult.ok(handle_penalty_draw(state, rng))

    return ActionResult.error(state, ERROR_INVALID_MOVE, f"Unsupported move: {move.type}")
