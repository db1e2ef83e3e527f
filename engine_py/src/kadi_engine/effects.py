"""
Special card effects implementation.

Every function here works on the engine's private working copy of the game
state and mutates it in place; the public operations in ``engine`` take care
of copying the caller's snapshot first.
"""

import logging
import random
from dataclasses import dataclass, field
from itertools import permutations
from typing import List, Optional

from .cards import answers_card, can_win_with_cards, format_cards, get_card_category, get_penalty_value
from .constants import CardCategory, PHASE_GAME_OVER, PHASE_SELECTING_SUIT
from .models import Card, GameState, Player
from .shuffle import draw_one

logger = logging.getLogger(__name__)


@dataclass
class PlayTally:
    """Cards of one play grouped by category."""
    penalty_total: int = 0
    wild_count: int = 0
    jump_count: int = 0
    kickback_count: int = 0
    questions: List[Card] = field(default_factory=list)
    others: List[Card] = field(default_factory=list)


@dataclass
class TurnOutcome:
    """What the effect resolver decided about the rest of the turn."""
    suspended: bool = False  # waiting for a suit declaration
    question_pending: bool = False
    repeat_turn: bool = False


def tally_play(cards: List[Card]) -> PlayTally:
    tally = PlayTally()
    for card in cards:
        category = get_card_category(card.rank)
        if category is CardCategory.PENALTY:
            tally.penalty_total += get_penalty_value(card.rank)
        elif category is CardCategory.WILD:
            tally.wild_count += 1
        elif category is CardCategory.JUMP:
            tally.jump_count += 1
        elif category is CardCategory.KICKBACK:
            tally.kickback_count += 1
        elif category is CardCategory.QUESTION:
            tally.questions.append(card)
            continue
        elif category is CardCategory.ANSWER:
            pass
        else:
            raise ValueError(f"Unhandled card category: {category}")
        tally.others.append(card)
    return tally


def questions_covered(questions: List[Card], others: List[Card]) -> bool:
    """
    Check that every question has its own answering card in the same play.

    Args:
        questions: Question cards played
        others: Non-question cards played alongside them

    Returns:
        True if each question can be paired with a distinct card that answers it
    """
    if not questions:
        return True
    if len(others) < len(questions):
        return False
    return any(
        all(answers_card(answer, question, None) for question, answer in zip(questions, pairing))
        for pairing in permutations(others, len(questions))
    )


def apply_question_clearance(state: GameState, player: Player) -> None:
    """Any legal play answers a pending question."""
    state.pending_question = False
    state.log(f"{player.name} answered the question")


def apply_penalty(state: GameState, player: Player, total: int) -> None:
    """Add played penalty values to the draw stack."""
    state.draw_stack += total
    state.log(f"{player.name} played penalty cards (+{total} cards, {state.draw_stack} to draw)")


def apply_wild(
    state: GameState,
    player: Player,
    chain_active: bool,
    declared_suit: Optional[str]
) -> bool:
    """
    Apply Ace effects: counter a penalty chain or declare the active suit.

    Returns:
        True if the turn is suspended until a suit is selected
    """
    if chain_active:
        state.draw_stack = 0
        state.log(f"{player.name} countered the penalty with an Ace")
        return False

    if declared_suit is None:
        state.game_phase = PHASE_SELECTING_SUIT
        state.log(f"{player.name} played an Ace and must choose a suit")
        return True

    state.selected_suit = declared_suit
    state.log(f"{player.name} played an Ace and chose {declared_suit}")
    return False


def apply_question(state: GameState, player: Player, tally: PlayTally) -> bool:
    """
    Apply question effects.

    Returns:
        True if a question is left pending
    """
    if questions_covered(tally.questions, tally.others):
        state.log(f"{player.name} played a question and answered it")
        return False

    state.pending_question = True
    state.log(f"{player.name} played a question ({format_cards(tally.questions)}) - must answer")
    return True


def apply_jump(state: GameState, player: Player) -> bool:
    state.log(f"{player.name} played a Jack - plays again!")
    return True


def apply_kickback(state: GameState, player: Player, count: int) -> bool:
    """
    Kings cancel in pairs.

    Returns:
        True if the kick-backs cancel out and the turn repeats
    """
    if count % 2 == 0:
        state.log(f"{player.name} played {count} Kings - the kick-backs cancel, plays again")
        return True
    state.log(f"{player.name} played a kick-back")
    return False


def resolve_effects(
    state: GameState,
    player: Player,
    cards: List[Card],
    chain_active: bool,
    question_was_pending: bool,
    declared_suit: Optional[str] = None
) -> TurnOutcome:
    """
    Resolve the effects of all cards played this turn.

    Args:
        state: Working state, already holding the cards on the discard pile
        player: Player who made the play
        cards: Cards played
        chain_active: Whether a penalty chain was open before the play
        question_was_pending: Whether a question was pending before the play
        declared_suit: Suit named for an Ace, if any

    Returns:
        TurnOutcome describing whether the turn ends, repeats or waits
    """
    outcome = TurnOutcome()
    tally = tally_play(cards)

    if question_was_pending:
        apply_question_clearance(state, player)

    if tally.penalty_total:
        apply_penalty(state, player, tally.penalty_total)

    if tally.wild_count:
        if apply_wild(state, player, chain_active, declared_suit):
            outcome.suspended = True
            return outcome

    if tally.questions:
        if apply_question(state, player, tally):
            outcome.question_pending = True
            return outcome

    if tally.jump_count:
        outcome.repeat_turn = apply_jump(state, player)

    if tally.kickback_count:
        outcome.repeat_turn = apply_kickback(state, player, tally.kickback_count) or outcome.repeat_turn

    if not tally.wild_count:
        state.selected_suit = None

    return outcome


def resolve_win(
    state: GameState,
    player: Player,
    cards: List[Card],
    rng: Optional[random.Random] = None
) -> bool:
    """
    Arbitrate a player emptying their hand.

    Returns:
        True if the game is over
    """
    if player.hand:
        return False

    if not player.niko_kadi_called:
        # Dealt a card lazily by the turn change
        state.log(f"{player.name} ran out of cards without declaring Niko Kadi")
        return False

    if can_win_with_cards(cards):
        state.winner = player.name
        state.game_phase = PHASE_GAME_OVER
        state.log(f"{player.name} wins the game!")
        logger.info(f"Game {state.game_id} won by {player.name}")
        return True

    draw_one(state, player, rng)
    player.niko_kadi_called = False
    state.log(f"{player.name} tried to win with {format_cards(cards)} and drew a card")
    return False
