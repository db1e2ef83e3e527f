"""
Card classification and matching rules.
"""

from typing import Iterable, List, Optional

from .constants import (
    CardCategory, INVALID_STARTING_RANKS, INVALID_WINNING_RANKS,
    PENALTY_VALUES, RANK_CATEGORIES, RANKS, SUIT_SYMBOLS,
)
from .models import Card


def get_card_category(rank: str) -> CardCategory:
    """Get the special-effect category for a rank."""
    if rank not in RANKS:
        raise ValueError(f"Invalid rank: {rank}")
    return RANK_CATEGORIES.get(rank, CardCategory.ANSWER)


def get_penalty_value(rank: str) -> int:
    """Cards the next player must draw for this rank (0 for non-penalty ranks)."""
    return PENALTY_VALUES.get(rank, 0)


def is_wild(card: Card) -> bool:
    return get_card_category(card.rank) is CardCategory.WILD


def is_special(card: Card) -> bool:
    """Penalty, jump or wild: the cards the medium bot likes to lead with."""
    return get_card_category(card.rank) in (
        CardCategory.PENALTY, CardCategory.JUMP, CardCategory.WILD
    )


def can_play_card(card: Card, top_card: Optional[Card], selected_suit: Optional[str]) -> bool:
    """
    Check whether a single card may be laid on the top card.

    Args:
        card: Card being played
        top_card: Current top of the discard pile
        selected_suit: Suit declared by an earlier Ace, if still in effect

    Returns:
        True if the card is an Ace, follows the declared suit, or (with no
        declared suit) matches the top card's suit or rank
    """
    if is_wild(card):
        return True

    if selected_suit:
        return card.suit == selected_suit

    if top_card is None:
        return False

    return card.suit == top_card.suit or card.rank == top_card.rank


def answers_card(card: Card, top_card: Optional[Card], selected_suit: Optional[str]) -> bool:
    """A card answers a question when it shares suit or rank with it, or follows the declared suit."""
    if selected_suit and card.suit == selected_suit:
        return True
    if top_card is None:
        return False
    return card.suit == top_card.suit or card.rank == top_card.rank


def is_question_answer_combo(cards: List[Card]) -> bool:
    """A question card followed by a plain card that answers it."""
    if len(cards) != 2:
        return False
    question, answer = cards
    return (
        get_card_category(question.rank) is CardCategory.QUESTION
        and get_card_category(answer.rank) is CardCategory.ANSWER
        and answers_card(answer, question, None)
    )


def is_penalty_mix(cards: List[Card]) -> bool:
    """Several penalty cards, possibly of different ranks, stacked onto a chain."""
    return len(cards) > 1 and all(
        get_card_category(card.rank) is CardCategory.PENALTY for card in cards
    )


def is_valid_starting_card(card: Card) -> bool:
    """The opening discard must not carry a special effect."""
    return card.rank not in INVALID_STARTING_RANKS


def can_win_with_cards(cards: Iterable[Card]) -> bool:
    """A hand cannot be emptied by cards that leave an effect unresolved."""
    return all(card.rank not in INVALID_WINNING_RANKS for card in cards)


def format_card(card: Card) -> str:
    return f"{card.rank}{SUIT_SYMBOLS[card.suit]}"


def format_cards(cards: Iterable[Card]) -> str:
    return ', '.join(format_card(c) for c in cards)
