"""
Shared fixtures for engine tests.
"""

import random

import pytest

from kadi_engine.constants import PHASE_PLAYING
from kadi_engine.models import Card, GameState, Player
from kadi_engine.shuffle import build_deck


def card(code: str) -> Card:
    """Short card notation: ``card("Q-diamonds")`` or ``card("10-hearts")``."""
    rank, suit = code.split("-")
    return Card.of(rank, suit)


@pytest.fixture
def make_state():
    """
    Build a playing-phase state from short card codes.

    Every card not placed in a hand or on the discard pile goes to the draw
    pile, so the 52-card total always holds.
    """
    def _make(hands, discard, draw_pile=None, current=0, bot_seat=None, **kwargs):
        used = set()
        players = []
        for i, codes in enumerate(hands):
            hand = [card(c) for c in codes]
            used.update(c.id for c in hand)
            players.append(Player(
                id=str(i + 1),
                name=f"Player {i + 1}",
                hand=hand,
                is_bot=(bot_seat == i),
            ))
        discard_pile = [card(c) for c in discard]
        used.update(c.id for c in discard_pile)

        if draw_pile is None:
            pile = [c for c in build_deck() if c.id not in used]
        else:
            pile = [card(c) for c in draw_pile]

        state = GameState(
            players=players,
            current_player_index=current,
            draw_pile=pile,
            discard_pile=discard_pile,
            game_phase=PHASE_PLAYING,
            game_id="test",
        )
        for key, value in kwargs.items():
            setattr(state, key, value)
        return state

    return _make


@pytest.fixture
def rng():
    return random.Random(1234)


def all_ids(state: GameState):
    ids = [c.id for c in state.draw_pile] + [c.id for c in state.discard_pile]
    for player in state.players:
        ids.extend(c.id for c in player.hand)
    return ids
