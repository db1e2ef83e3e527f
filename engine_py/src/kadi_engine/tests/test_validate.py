"""
Tests for play validation.
"""

import itertools

from kadi_engine.constants import (
    ERROR_GAME_OVER, ERROR_ILLEGAL_PLAY, ERROR_OWNERSHIP, ERROR_PATTERN_MISMATCH,
    ERROR_PENALTY_PENDING, ERROR_WRONG_PHASE, PHASE_GAME_OVER, PHASE_SELECTING_SUIT,
)
from kadi_engine.cards import is_penalty_mix, is_question_answer_combo
from kadi_engine.validate import can_player_play, detect_rank, validate_play

from conftest import card


def test_single_card_matches_suit_or_rank(make_state):
    state = make_state(hands=[["9-hearts", "7-clubs", "9-clubs"], []], discard=["7-hearts"])
    assert can_player_play(state, ["9-hearts"])
    assert can_player_play(state, ["7-clubs"])
    assert not can_player_play(state, ["9-clubs"])


def test_ace_is_always_playable(make_state):
    state = make_state(hands=[["A-clubs"], []], discard=["7-hearts"])
    assert can_player_play(state, ["A-clubs"])


def test_selected_suit_overrides_top_card(make_state):
    state = make_state(
        hands=[["9-spades", "9-hearts"], []],
        discard=["A-hearts"],
        selected_suit="spades",
    )
    assert can_player_play(state, ["9-spades"])
    assert not can_player_play(state, ["9-hearts"])


def test_penalty_chain_accepts_only_penalties_and_aces(make_state):
    state = make_state(
        hands=[["2-clubs", "3-spades", "A-spades", "5-hearts"], []],
        discard=["2-hearts"],
        draw_stack=2,
    )
    assert can_player_play(state, ["2-clubs"])
    assert can_player_play(state, ["3-spades"])
    assert can_player_play(state, ["A-spades"])

    result = validate_play(state, ["5-hearts"])
    assert not result.valid
    assert result.error_code == ERROR_PENALTY_PENDING


def test_pending_question_requires_an_answer(make_state):
    state = make_state(
        hands=[["5-diamonds", "Q-clubs", "6-clubs", "A-spades"], []],
        discard=["Q-diamonds"],
        pending_question=True,
    )
    assert can_player_play(state, ["5-diamonds"])
    assert can_player_play(state, ["Q-clubs"])
    assert not can_player_play(state, ["6-clubs"])
    # An Ace still has to answer the question card
    assert not can_player_play(state, ["A-spades"])

    result = validate_play(state, ["6-clubs"])
    assert result.error_code == ERROR_ILLEGAL_PLAY


def test_multi_card_same_rank_with_one_match(make_state):
    state = make_state(hands=[["9-hearts", "9-clubs", "9-spades"], []], discard=["4-hearts"])
    assert can_player_play(state, ["9-clubs", "9-hearts"])
    assert can_player_play(state, ["9-clubs", "9-spades", "9-hearts"])
    assert not can_player_play(state, ["9-clubs", "9-spades"])


def test_mixed_ranks_only_as_combos(make_state):
    """Mixed ranks are rejected in every situation unless they form a penalty stack or a question and its answer."""
    hand = ["2-hearts", "3-hearts", "A-hearts", "5-hearts", "Q-hearts", "5-clubs", "2-clubs", "8-clubs"]
    situations = [
        {},
        {"draw_stack": 2},
        {"pending_question": True},
        {"selected_suit": "hearts"},
    ]
    for extra in situations:
        state = make_state(hands=[hand, []], discard=["7-hearts"], **extra)
        for a, b in itertools.permutations(hand, 2):
            pair = [card(a), card(b)]
            if a.split("-")[0] == b.split("-")[0] or is_penalty_mix(pair) or is_question_answer_combo(pair):
                continue
            result = validate_play(state, [a, b])
            assert not result.valid, (extra, a, b)
            assert result.error_code in (ERROR_PATTERN_MISMATCH, ERROR_PENALTY_PENDING)


def test_question_with_its_answer(make_state):
    state = make_state(
        hands=[["Q-hearts", "5-hearts", "5-clubs", "Q-clubs", "Q-spades"], []],
        discard=["7-hearts"],
    )
    assert can_player_play(state, ["Q-hearts", "5-hearts"])
    assert validate_play(state, ["5-hearts", "Q-hearts"]).error_code == ERROR_PATTERN_MISMATCH
    assert validate_play(state, ["Q-hearts", "5-clubs"]).error_code == ERROR_PATTERN_MISMATCH
    assert validate_play(state, ["Q-clubs", "5-clubs"]).error_code == ERROR_ILLEGAL_PLAY
    assert validate_play(state, ["Q-hearts", "Q-clubs", "5-clubs"]).error_code == ERROR_PATTERN_MISMATCH


def test_question_with_its_answer_follows_selected_suit(make_state):
    state = make_state(
        hands=[["Q-spades", "5-spades", "Q-hearts", "5-hearts"], []],
        discard=["A-hearts"],
        selected_suit="spades",
    )
    assert can_player_play(state, ["Q-spades", "5-spades"])
    assert not can_player_play(state, ["Q-hearts", "5-hearts"])


def test_question_with_its_answer_on_a_pending_question(make_state):
    state = make_state(
        hands=[["Q-clubs", "5-clubs", "8-spades", "5-spades"], []],
        discard=["Q-diamonds"],
        pending_question=True,
    )
    assert can_player_play(state, ["Q-clubs", "5-clubs"])
    assert validate_play(state, ["8-spades", "5-spades"]).error_code == ERROR_ILLEGAL_PLAY


def test_penalty_ranks_stack_together(make_state):
    state = make_state(
        hands=[["2-clubs", "3-clubs", "3-spades", "A-spades"], []],
        discard=["2-hearts"],
        draw_stack=2,
    )
    assert can_player_play(state, ["2-clubs", "3-clubs"])
    assert can_player_play(state, ["2-clubs", "3-clubs", "3-spades"])
    assert validate_play(state, ["2-clubs", "A-spades"]).error_code == ERROR_PATTERN_MISMATCH

    state.draw_stack = 0
    assert validate_play(state, ["2-clubs", "3-clubs"]).error_code == ERROR_PATTERN_MISMATCH


def test_empty_selection_is_rejected(make_state):
    state = make_state(hands=[["9-hearts"], []], discard=["4-hearts"])
    assert not can_player_play(state, [])


def test_unknown_ids_reject_the_whole_selection(make_state):
    """Ids that are not in the hand are not silently dropped."""
    state = make_state(hands=[["9-hearts"], ["9-clubs"]], discard=["4-hearts"])
    result = validate_play(state, ["9-hearts", "9-clubs"])
    assert not result.valid
    assert result.error_code == ERROR_OWNERSHIP
    assert not can_player_play(state, ["not-a-card"])


def test_duplicate_ids_are_rejected(make_state):
    state = make_state(hands=[["9-hearts"], []], discard=["4-hearts"])
    result = validate_play(state, ["9-hearts", "9-hearts"])
    assert result.error_code == ERROR_PATTERN_MISMATCH


def test_wrong_phase(make_state):
    state = make_state(hands=[["9-hearts"], []], discard=["A-hearts"], game_phase=PHASE_SELECTING_SUIT)
    assert validate_play(state, ["9-hearts"]).error_code == ERROR_WRONG_PHASE

    state.game_phase = PHASE_GAME_OVER
    assert validate_play(state, ["9-hearts"]).error_code == ERROR_GAME_OVER


def test_validation_result_carries_cards(make_state):
    state = make_state(hands=[["9-hearts", "9-clubs"], []], discard=["4-hearts"])
    result = validate_play(state, ["9-hearts", "9-clubs"])
    assert result
    assert [c.id for c in result.cards] == ["9-hearts", "9-clubs"]


def test_detect_rank():
    assert detect_rank([card("9-hearts"), card("9-clubs")]) == '9'
    assert detect_rank([card("9-hearts"), card("8-hearts")]) is None
    assert detect_rank([]) is None
