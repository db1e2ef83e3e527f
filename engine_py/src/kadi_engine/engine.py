"""Main game engine: state transitions for a two-player game of Kadi"""

import copy
import logging
import random
import uuid
from typing import List, Optional

from .cards import format_card, format_cards
from .constants import (
    ERROR_GAME_OVER, ERROR_INVALID_SUIT, ERROR_WRONG_PHASE,
    PHASE_GAME_OVER, PHASE_PLAYING, PHASE_SELECTING_SUIT, SUITS,
)
from .effects import resolve_effects, resolve_win
from .models import Card, GameState, Player
from .rules import RuleConfig, default_rules
from .shuffle import resolve_rng, create_deck, deal_cards, draw_one, take_starting_card
from .validate import validate_play

logger = logging.getLogger(__name__)


class ActionResult:
    """Outcome of a guarded engine call."""

    def __init__(
        self,
        success: bool,
        state: GameState,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None
    ):
        self.success = success
        self.state = state
        self.error_code = error_code
        self.error_message = error_message

    def __repr__(self) -> str:
        if self.success:
            return f"ActionResult(success=True, version={self.state.version})"
        return f"ActionResult(success=False, error_code={self.error_code!r})"

    @classmethod
    def ok(cls, state: GameState) -> 'ActionResult':
        return cls(success=True, state=state)

    @classmethod
    def error(cls, state: GameState, error_code: str, error_message: str) -> 'ActionResult':
        logger.warning(f"Rejected action [{error_code}]: {error_message}")
        return cls(success=False, state=state, error_code=error_code, error_message=error_message)


def initialize_game(
    rules: Optional[RuleConfig] = None,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    game_id: Optional[str] = None
) -> GameState:
    """
    Start a new game: shuffle, reserve a plain starting card and deal.

    Args:
        rules: Game configuration, defaults to ``default_rules``
        seed: Optional seed for a reproducible deal
        rng: Optional random generator (takes precedence over ``seed``)
        game_id: Optional id, a random one is generated otherwise

    Returns:
        Fresh state in the playing phase with player 1 to move
    """
    rules = rules or default_rules
    deck = create_deck(rng=resolve_rng(rng, seed))

    starting_card, deck = take_starting_card(deck)
    hands, draw_pile = deal_cards(deck, len(rules.player_names), rules.starting_hand_size)

    players = []
    for seat, (name, hand) in enumerate(zip(rules.seat_names(), hands)):
        players.append(Player(
            id=str(seat + 1),
            name=name,
            hand=hand,
            is_bot=rules.vs_computer and seat == 1
        ))

    state = GameState(
        players=players,
        current_player_index=0,
        draw_pile=draw_pile,
        discard_pile=[starting_card],
        game_phase=PHASE_PLAYING,
        ai_difficulty=rules.ai_difficulty if rules.vs_computer else None,
        hard_pressure_threshold=rules.hard_pressure_threshold,
        game_id=game_id or str(uuid.uuid4())[:8],
    )
    state.log(f"Game started! {players[0].name} goes first on {format_card(starting_card)}")
    logger.info(f"Started game {state.game_id}: {', '.join(p.name for p in players)}")
    return state


def get_top_card(state: GameState) -> Optional[Card]:
    return state.top_card


def get_current_player(state: GameState) -> Player:
    return state.current_player


def _is_finished(state: GameState, operation: str) -> bool:
    if state.game_phase == PHASE_GAME_OVER:
        logger.warning(f"Ignoring {operation} on finished game {state.game_id}")
        return True
    return False


def _next_turn(state: GameState, rng: Optional[random.Random] = None) -> None:
    """Pass the turn; a player left cardless without declaring is dealt a card."""
    state.current_player_index = (state.current_player_index + 1) % len(state.players)

    player = state.current_player
    if not player.hand and not player.niko_kadi_called:
        draw_one(state, player, rng)
        state.log(f"{player.name} forgot to declare \"Niko Kadi\" and drew a card")


def next_turn(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Advance the turn on a copy of ``state``."""
    new_state = copy.deepcopy(state)
    _next_turn(new_state, rng)
    new_state.increment_version()
    return new_state


def _complete_turn(
    state: GameState,
    player: Player,
    cards: List[Card],
    repeat_turn: bool,
    rng: Optional[random.Random] = None
) -> None:
    """Win check, Niko Kadi reset and turn advance after effects are resolved."""
    if resolve_win(state, player, cards, rng):
        return

    if len(player.hand) > 1 and player.niko_kadi_called:
        player.niko_kadi_called = False
        state.log(f"{player.name}'s Niko Kadi status reset - didn't finish")

    if not repeat_turn:
        _next_turn(state, rng)


def play_cards(
    state: GameState,
    card_ids: List[str],
    declared_suit: Optional[str] = None,
    rng: Optional[random.Random] = None
) -> GameState:
    """
    Play cards from the current player's hand and resolve their effects.

    The play is not validated here; check it with ``can_player_play`` first
    or use ``submit_play``. Ids missing from the hand are ignored, and a play
    naming an unknown suit changes nothing.

    Args:
        state: Current game state (left untouched)
        card_ids: Ids of the cards to play, in order
        declared_suit: Suit named for an Ace played outside a penalty chain
        rng: Optional random generator for any reshuffle

    Returns:
        New game state
    """
    new_state = copy.deepcopy(state)
    if _is_finished(new_state, "play_cards"):
        return new_state

    if declared_suit is not None and declared_suit not in SUITS:
        logger.warning(f"Ignoring play with invalid suit {declared_suit!r}")
        return new_state

    player = new_state.current_player
    played = [card for card in (player.find_card(cid) for cid in dict.fromkeys(card_ids)) if card is not None]
    if not played:
        logger.warning(f"{player.name} played no card they hold: {card_ids}")
        return new_state

    played_ids = {card.id for card in played}
    chain_active = new_state.draw_stack > 0
    question_was_pending = new_state.pending_question

    player.hand = [card for card in player.hand if card.id not in played_ids]
    new_state.discard_pile.extend(played)
    new_state.log(f"{player.name} played: {format_cards(played)}")
    new_state.increment_version()

    outcome = resolve_effects(
        new_state, player, played, chain_active, question_was_pending, declared_suit
    )
    if outcome.suspended or outcome.question_pending:
        logger.debug(f"{player.name}'s turn continues (phase={new_state.game_phase})")
        return new_state

    _complete_turn(new_state, player, played, outcome.repeat_turn, rng)
    return new_state


def draw_card(
    state: GameState,
    player_index: Optional[int] = None,
    rng: Optional[random.Random] = None
) -> GameState:
    """
    Draw one card for a player and pass the turn.

    Drawing forfeits an open question and cancels a Niko Kadi declaration.
    """
    new_state = copy.deepcopy(state)
    if _is_finished(new_state, "draw_card"):
        return new_state

    if player_index is None:
        player_index = new_state.current_player_index
    player = new_state.players[player_index]

    if draw_one(new_state, player, rng) is not None:
        new_state.log(f"{player.name} drew a card")

    if player.niko_kadi_called:
        player.niko_kadi_called = False
        new_state.log(f"{player.name}'s Niko Kadi status reset - drew a card")

    if new_state.pending_question:
        new_state.pending_question = False
        new_state.log(f"{player.name} drew a card - question cleared")

    _next_turn(new_state, rng)
    new_state.increment_version()
    return new_state


def handle_penalty_draw(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """The current player draws the whole penalty stack and passes the turn."""
    new_state = copy.deepcopy(state)
    if _is_finished(new_state, "handle_penalty_draw") or new_state.draw_stack <= 0:
        return new_state

    penalty = new_state.draw_stack
    player = new_state.current_player
    drawn = 0
    for _ in range(penalty):
        if draw_one(new_state, player, rng) is not None:
            drawn += 1

    new_state.log(f"{player.name} drew {drawn} penalty cards")
    new_state.draw_stack = 0

    if player.niko_kadi_called:
        player.niko_kadi_called = False
        new_state.log(f"{player.name}'s Niko Kadi status reset - drew penalty cards")

    _next_turn(new_state, rng)
    new_state.increment_version()
    return new_state


def declare_niko_kadi(state: GameState) -> GameState:
    """The current player announces they are about to finish."""
    new_state = copy.deepcopy(state)
    if _is_finished(new_state, "declare_niko_kadi"):
        return new_state

    player = new_state.current_player
    if player.niko_kadi_called:
        return new_state

    player.niko_kadi_called = True
    new_state.log(f"{player.name} declared \"Niko Kadi\"!")
    new_state.increment_version()
    return new_state


def select_suit(state: GameState, suit: str, rng: Optional[random.Random] = None) -> GameState:
    """
    Name the suit for an Ace and finish the suspended turn.

    Only acts on a known suit while the game is waiting for one; anything
    else leaves the state unchanged.
    """
    new_state = copy.deepcopy(state)
    if suit not in SUITS:
        logger.warning(f"Ignoring invalid suit {suit!r}")
        return new_state
    if new_state.game_phase != PHASE_SELECTING_SUIT:
        logger.warning(f"Ignoring suit selection during phase {new_state.game_phase}")
        return new_state

    player = new_state.current_player
    new_state.selected_suit = suit
    new_state.game_phase = PHASE_PLAYING
    new_state.log(f"{player.name} chose {suit}")
    new_state.increment_version()

    aces = [new_state.top_card] if new_state.top_card else []
    _complete_turn(new_state, player, aces, repeat_turn=False, rng=rng)
    return new_state


def submit_play(
    state: GameState,
    card_ids: List[str],
    declared_suit: Optional[str] = None,
    rng: Optional[random.Random] = None
) -> ActionResult:
    """Validate a play and apply it only if it is legal."""
    if declared_suit is not None and declared_suit not in SUITS:
        return ActionResult.error(state, ERROR_INVALID_SUIT, f"Invalid suit: {declared_suit}")

    validation = validate_play(state, card_ids)
    if not validation.valid:
        return ActionResult.error(state, validation.error_code, validation.error_message)

    return ActionResult.ok(play_cards(state, card_ids, declared_suit, rng))


def submit_suit(state: GameState, suit: str, rng: Optional[random.Random] = None) -> ActionResult:
    """Guarded ``select_suit``."""
    if state.game_phase == PHASE_GAME_OVER:
        return ActionResult.error(state, ERROR_GAME_OVER, "The game is over")
    if state.game_phase != PHASE_SELECTING_SUIT:
        return ActionResult.error(state, ERROR_WRONG_PHASE, "No suit choice is outstanding")
    if suit not in SUITS:
        return ActionResult.error(state, ERROR_INVALID_SUIT, f"Invalid suit: {suit}")
    return ActionResult.ok(select_suit(state, suit, rng))
