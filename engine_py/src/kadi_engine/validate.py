"""
Play validation for card selections.
"""

import logging
from typing import List, Optional, Tuple

from .cards import (
    answers_card, can_play_card, get_card_category, is_penalty_mix, is_question_answer_combo,
)
from .constants import (
    CardCategory,
    ERROR_GAME_OVER, ERROR_ILLEGAL_PLAY, ERROR_OWNERSHIP, ERROR_PATTERN_MISMATCH,
    ERROR_PENALTY_PENDING, ERROR_WRONG_PHASE,
    PHASE_GAME_OVER, PHASE_PLAYING,
)
from .models import Card, GameState, Player

logger = logging.getLogger(__name__)


class ValidationResult:
    """Result of play validation."""

    def __init__(
        self,
        valid: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        cards: Optional[List[Card]] = None
    ):
        self.valid = valid
        self.error_code = error_code
        self.error_message = error_message
        self.cards = cards or []

    def __bool__(self) -> bool:
        return self.valid

    def __repr__(self) -> str:
        if self.valid:
            return f"ValidationResult(valid=True, cards={[c.id for c in self.cards]})"
        return f"ValidationResult(valid=False, error_code={self.error_code!r})"

    @classmethod
    def success(cls, cards: List[Card]) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True, cards=cards)

    @classmethod
    def error(cls, error_code: str, error_message: str) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error_code=error_code, error_message=error_message)


def resolve_cards(player: Player, card_ids: List[str]) -> Tuple[List[Card], List[str]]:
    """
    Map card ids to the player's cards.

    Returns:
        The resolved cards, in selection order, and the ids that are not in the hand
    """
    cards = []
    missing = []
    for card_id in card_ids:
        card = player.find_card(card_id)
        if card is None:
            missing.append(card_id)
        else:
            cards.append(card)
    return cards, missing


def detect_rank(cards: List[Card]) -> Optional[str]:
    """
    Detect the shared rank of a selection.

    Returns:
        The rank when every card has it, None for an empty or mixed selection
    """
    if not cards:
        return None
    rank = cards[0].rank
    if all(card.rank == rank for card in cards):
        return rank
    return None


def validate_play(state: GameState, card_ids: List[str]) -> ValidationResult:
    """
    Validate a card play by the current player.

    Args:
        state: Current game state
        card_ids: Ids of the cards the current player wants to play

    Returns:
        ValidationResult with validation outcome
    """
    if state.game_phase == PHASE_GAME_OVER:
        return ValidationResult.error(ERROR_GAME_OVER, "The game is over")

    if state.game_phase != PHASE_PLAYING:
        return ValidationResult.error(
            ERROR_WRONG_PHASE,
            f"Cannot play cards during phase {state.game_phase}"
        )

    if not card_ids:
        return ValidationResult.error(ERROR_PATTERN_MISMATCH, "No cards selected")

    if len(set(card_ids)) != len(card_ids):
        return ValidationResult.error(ERROR_PATTERN_MISMATCH, "A card was selected more than once")

    player = state.current_player
    cards, missing = resolve_cards(player, card_ids)
    if missing:
        return ValidationResult.error(
            ERROR_OWNERSHIP,
            f"{player.name} does not hold {', '.join(missing)}"
        )

    top_card = state.top_card
    mixed = len(cards) > 1 and detect_rank(cards) is None

    if state.draw_stack > 0:
        for card in cards:
            category = get_card_category(card.rank)
            if category is not CardCategory.PENALTY and category is not CardCategory.WILD:
                return ValidationResult.error(
                    ERROR_PENALTY_PENDING,
                    f"Must counter the penalty of {state.draw_stack} with a 2, 3 or Ace, or draw"
                )
        if mixed and not is_penalty_mix(cards):
            return ValidationResult.error(
                ERROR_PATTERN_MISMATCH,
                "Only 2s and 3s may be stacked together"
            )
        return ValidationResult.success(cards)

    if mixed:
        # Q or 8 with its answer is the only other mixed play
        if not is_question_answer_combo(cards):
            return ValidationResult.error(
                ERROR_PATTERN_MISMATCH,
                "All cards played together must share a rank"
            )
        question = cards[0]
        if state.pending_question:
            playable = answers_card(question, top_card, state.selected_suit)
        else:
            playable = can_play_card(question, top_card, state.selected_suit)
        if playable:
            return ValidationResult.success(cards)
        return ValidationResult.error(ERROR_ILLEGAL_PLAY, "The question card does not match the top card")

    if state.pending_question:
        if all(answers_card(card, top_card, state.selected_suit) for card in cards):
            return ValidationResult.success(cards)
        return ValidationResult.error(ERROR_ILLEGAL_PLAY, "Cards do not answer the question")

    if any(can_play_card(card, top_card, state.selected_suit) for card in cards):
        return ValidationResult.success(cards)

    return ValidationResult.error(ERROR_ILLEGAL_PLAY, "Cards do not match the top card")


def can_player_play(state: GameState, card_ids: List[str]) -> bool:
    """Pure legality check for the current player's selection."""
    result = validate_play(state, card_ids)
    if not result.valid:
        logger.debug(f"Rejected play {card_ids}: {result.error_message}")
    return result.valid
