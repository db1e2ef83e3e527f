"""
Card shuffling and dealing utilities.
"""

import logging
import random
from collections import Counter
from typing import Dict, List, Optional, Tuple

from .cards import format_card, is_valid_starting_card
from .constants import RANKS, SUITS
from .models import Card, GameState, Player

logger = logging.getLogger(__name__)


def resolve_rng(rng: Optional[random.Random] = None, seed: Optional[int] = None) -> random.Random:
    if rng is not None:
        return rng
    if seed is not None:
        return random.Random(seed)
    return random.Random()


def build_deck() -> List[Card]:
    """Create the 52 suit x rank cards in a fixed order."""
    return [Card.of(rank, suit) for suit in SUITS for rank in RANKS]


def shuffle_deck(
    deck: List[Card],
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None
) -> List[Card]:
    """
    Shuffle a deck deterministically if a seed or generator is provided.

    Args:
        deck: Cards to shuffle (left untouched)
        rng: Optional random generator to draw from
        seed: Optional seed, used only when no generator is given

    Returns:
        Shuffled copy of the deck
    """
    deck_copy = list(deck)
    resolve_rng(rng, seed).shuffle(deck_copy)
    return deck_copy


def create_deck(rng: Optional[random.Random] = None, seed: Optional[int] = None) -> List[Card]:
    """Create a full, shuffled deck."""
    return shuffle_deck(build_deck(), rng=rng, seed=seed)


def take_starting_card(deck: List[Card]) -> Tuple[Card, List[Card]]:
    """
    Pull the first card without a special effect out of the deck.

    Returns:
        The starting card and the remaining deck
    """
    for i, card in enumerate(deck):
        if is_valid_starting_card(card):
            return card, deck[:i] + deck[i + 1:]
    raise ValueError("Deck holds no valid starting card")


def deal_cards(deck: List[Card], player_count: int, hand_size: int) -> Tuple[List[List[Card]], List[Card]]:
    """
    Deal consecutive blocks of ``hand_size`` cards from the front of the deck.

    Returns:
        The dealt hands, in seat order, and the undealt remainder
    """
    needed = player_count * hand_size
    if needed > len(deck):
        raise ValueError(f"Cannot deal {needed} cards from a deck of {len(deck)}")

    hands = [deck[i * hand_size:(i + 1) * hand_size] for i in range(player_count)]
    return hands, deck[needed:]


def reshuffle_discard(state: GameState, rng: Optional[random.Random] = None) -> bool:
    """
    Turn everything under the top discard into a fresh draw pile.

    Only acts when the draw pile is empty. Mutates ``state``; callers pass a copy.

    Returns:
        True if a reshuffle happened
    """
    if state.draw_pile or len(state.discard_pile) <= 1:
        return False

    top_card = state.discard_pile[-1]
    state.draw_pile = shuffle_deck(state.discard_pile[:-1], rng=rng)
    state.discard_pile = [top_card]
    logger.debug(f"Reshuffled {len(state.draw_pile)} discards into the draw pile")
    return True


def draw_one(state: GameState, player: Player, rng: Optional[random.Random] = None) -> Optional[Card]:
    """
    Move the top of the draw pile into a player's hand, reshuffling if needed.

    Returns:
        The drawn card, or None if no card is left anywhere
    """
    if not state.draw_pile:
        reshuffle_discard(state, rng)

    if not state.draw_pile:
        logger.info(f"No card left for {player.name} to draw")
        return None

    card = state.draw_pile.pop()
    player.hand.append(card)
    logger.debug(f"{player.name} drew {format_card(card)}")
    return card


def validate_deck_integrity(state: GameState) -> bool:
    """
    Validate that all cards are accounted for and no duplicates exist.

    Args:
        state: Game state to validate

    Returns:
        True if deck integrity is valid
    """
    all_ids = [c.id for c in state.draw_pile]
    all_ids.extend(c.id for c in state.discard_pile)
    for player in state.players:
        all_ids.extend(c.id for c in player.hand)

    expected_ids = {c.id for c in build_deck()}
    return len(all_ids) == len(set(all_ids)) and set(all_ids) == expected_ids


def get_hand_summary(hand: List[Card]) -> Dict[str, int]:
    """
    Get a summary of cards in a hand by rank.

    Args:
        hand: Cards in the hand

    Returns:
        Dictionary mapping rank to count
    """
    return dict(Counter(card.rank for card in hand))


def sort_hand(hand: List[Card]) -> List[Card]:
    """Sort a hand by suit, then rank, for display."""
    return sorted(hand, key=lambda c: (SUITS.index(c.suit), RANKS.index(c.rank)))
