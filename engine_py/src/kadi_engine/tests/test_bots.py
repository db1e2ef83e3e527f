"""
Tests for the computer opponent.
"""

import random

import pytest

from kadi_engine.ai import make_ai_move
from kadi_engine.bots import EasyBot, HardBot, MediumBot, get_bot
from kadi_engine.cards import get_card_category
from kadi_engine.constants import CardCategory, PHASE_GAME_OVER, PHASE_PLAYING, PHASE_SELECTING_SUIT
from kadi_engine.engine import initialize_game
from kadi_engine.rules import create_rules
from kadi_engine.shuffle import validate_deck_integrity
from kadi_engine.validate import validate_play

from conftest import all_ids, card


def ids(cards):
    return [c.id for c in cards]


def test_get_valid_plays(make_state):
    state = make_state(hands=[["9-hearts", "9-clubs", "5-clubs"], ["6-spades"]], discard=["4-hearts"])
    plays = EasyBot().get_valid_plays(state)
    assert [ids(p) for p in plays] == [["9-hearts"], ["9-hearts", "9-clubs"]]


def test_easy_bot_takes_first_play(make_state):
    state = make_state(hands=[["9-hearts", "9-clubs", "5-clubs"], ["6-spades"]], discard=["4-hearts"])
    action = EasyBot().choose_action(state)
    assert action.type == 'play'
    assert action.card_ids == ["9-hearts"]


def test_medium_bot_sheds_most_cards(make_state):
    state = make_state(hands=[["9-hearts", "9-clubs", "5-clubs"], ["6-spades"]], discard=["4-hearts"])
    assert MediumBot().choose_action(state).card_ids == ["9-hearts", "9-clubs"]


def test_medium_bot_prefers_special_cards_on_ties(make_state):
    state = make_state(hands=[["5-hearts", "J-hearts", "9-clubs"], ["6-spades"]], discard=["4-hearts"])
    assert MediumBot().choose_action(state).card_ids == ["J-hearts"]


def test_hard_bot_pressures_a_nearly_finished_opponent(make_state):
    hands = [["2-hearts", "3-hearts", "9-hearts", "9-clubs"], ["6-spades", "7-spades"]]
    state = make_state(hands=hands, discard=["4-hearts"])
    assert HardBot().choose_action(state).card_ids == ["3-hearts"]

    state.players[1].hand.extend([card("8-spades"), card("10-spades")])
    assert HardBot().choose_action(state).card_ids == ["9-hearts", "9-clubs"]


def test_hard_bot_threshold_is_configurable(make_state):
    hands = [["2-hearts", "9-hearts", "9-clubs"], ["6-spades", "7-spades", "8-spades"]]
    state = make_state(hands=hands, discard=["4-hearts"])
    assert HardBot().choose_action(state).card_ids == ["9-hearts", "9-clubs"]
    assert HardBot(pressure_threshold=3).choose_action(state).card_ids == ["2-hearts"]


def test_bot_answers_question_with_largest_group(make_state):
    state = make_state(
        hands=[["Q-clubs", "Q-hearts", "5-diamonds", "9-spades"], ["6-spades"]],
        discard=["Q-diamonds"],
        pending_question=True,
    )
    action = EasyBot().choose_action(state)
    assert action.card_ids == ["Q-clubs", "Q-hearts"]
    assert validate_play(state, action.card_ids).valid


def test_bot_draws_without_an_answer(make_state):
    state = make_state(
        hands=[["9-spades", "A-clubs"], ["6-spades"]],
        discard=["Q-diamonds"],
        pending_question=True,
    )
    assert MediumBot().choose_action(state).type == 'draw'


def test_bot_takes_penalty_without_a_counter(make_state):
    state = make_state(hands=[["9-hearts", "5-clubs"], ["6-spades"]], discard=["2-hearts"], draw_stack=2)
    assert MediumBot().choose_action(state).type == 'penalty_draw'


def test_bot_counters_penalty_without_naming_a_suit(make_state):
    state = make_state(hands=[["A-spades", "5-clubs"], ["6-spades"]], discard=["2-hearts"], draw_stack=2)
    action = MediumBot().choose_action(state)
    assert action.card_ids == ["A-spades"]
    assert action.data['declared_suit'] is None


def test_bot_names_its_strongest_suit_for_an_ace(make_state):
    state = make_state(
        hands=[["A-spades", "5-clubs", "6-clubs", "9-hearts"], ["6-spades"]],
        discard=["4-diamonds"],
    )
    action = MediumBot().choose_action(state)
    assert action.card_ids == ["A-spades"]
    assert action.data['declared_suit'] == "clubs"


def test_choose_suit_falls_back_on_empty_hand():
    assert EasyBot().choose_suit([], fallback="diamonds") == "diamonds"
    assert EasyBot().choose_suit([card("5-spades"), card("9-spades"), card("9-hearts")]) == "spades"


def test_get_bot():
    assert isinstance(get_bot("easy"), EasyBot)
    assert isinstance(get_bot("hard", pressure_threshold=4), HardBot)
    assert get_bot("hard", pressure_threshold=4).pressure_threshold == 4
    with pytest.raises(ValueError):
        get_bot("impossible")


def test_ai_move_waits_for_its_turn(make_state):
    state = make_state(hands=[["9-hearts"], ["9-clubs"]], discard=["4-hearts"], bot_seat=1)
    assert make_ai_move(state) == state


def test_ai_declares_and_wins(make_state):
    state = make_state(hands=[["5-hearts"], ["9-clubs"]], discard=["4-hearts"], bot_seat=0)
    new_state = make_ai_move(state, "easy")
    assert new_state.game_phase == PHASE_GAME_OVER
    assert new_state.winner == "Player 1"
    assert new_state.players[0].niko_kadi_called


def test_ai_names_suit_for_suspended_ace(make_state):
    state = make_state(
        hands=[["5-clubs", "6-clubs", "9-hearts"], ["9-spades"]],
        discard=["A-hearts"],
        bot_seat=0,
        game_phase=PHASE_SELECTING_SUIT,
    )
    new_state = make_ai_move(state)
    assert new_state.selected_suit == "clubs"
    assert new_state.game_phase == PHASE_PLAYING
    assert new_state.current_player_index == 1


@pytest.mark.parametrize("seed", range(12))
def test_computer_playthrough_keeps_invariants(seed):
    """Two computer players play out a seeded game; core invariants hold after every move."""
    rng = random.Random(seed)
    difficulties = ["easy", "medium", "hard"]
    state = initialize_game(seed=seed, game_id=f"sim-{seed}")
    for player in state.players:
        player.is_bot = True

    for turn in range(400):
        if state.game_phase == PHASE_GAME_OVER:
            break
        difficulty = difficulties[(seed + state.current_player_index) % 3]

        if state.game_phase == PHASE_PLAYING:
            action = get_bot(difficulty).choose_action(state)
            if action.type == 'play':
                assert validate_play(state, action.card_ids).valid, (turn, action)

        new_state = make_ai_move(state, difficulty, rng)

        assert validate_deck_integrity(new_state)
        assert len(set(all_ids(new_state))) == 52
        assert new_state.draw_stack >= 0
        if new_state.draw_stack > state.draw_stack:
            assert get_card_category(new_state.top_card.rank) is CardCategory.PENALTY
        elif new_state.draw_stack < state.draw_stack:
            assert new_state.draw_stack == 0
        if new_state.game_phase == PHASE_GAME_OVER:
            winner = next(p for p in new_state.players if p.name == new_state.winner)
            assert winner.hand == []
            assert winner.niko_kadi_called

        state = new_state


def test_valid_plays_include_question_with_answer(make_state):
    state = make_state(hands=[["Q-hearts", "5-hearts", "9-clubs"], ["6-spades"]], discard=["4-hearts"])
    plays = EasyBot().get_valid_plays(state)
    assert [ids(p) for p in plays] == [["Q-hearts"], ["5-hearts"], ["Q-hearts", "5-hearts"]]
    assert MediumBot().choose_action(state).card_ids == ["Q-hearts", "5-hearts"]


def test_bot_stacks_mixed_penalties(make_state):
    state = make_state(
        hands=[["2-clubs", "3-clubs", "9-hearts"], ["6-spades", "7-spades"]],
        discard=["2-hearts"],
        draw_stack=2,
    )
    assert [ids(p) for p in EasyBot().get_valid_plays(state)] == [
        ["2-clubs"], ["3-clubs"], ["2-clubs", "3-clubs"],
    ]
    assert HardBot().choose_action(state).card_ids == ["2-clubs", "3-clubs"]


def test_pressure_threshold_comes_from_game_rules(make_state):
    rules = create_rules(vs_computer=True, ai_difficulty="hard", hard_pressure_threshold=0)
    game = initialize_game(rules, seed=5)
    assert game.hard_pressure_threshold == 0

    state = make_state(
        hands=[["6-spades", "7-spades"], ["2-hearts", "9-hearts", "9-clubs"]],
        discard=["4-hearts"],
        current=1,
        bot_seat=1,
        ai_difficulty=game.ai_difficulty,
        hard_pressure_threshold=game.hard_pressure_threshold,
    )
    relaxed = make_ai_move(state)
    assert relaxed.draw_stack == 0
    assert relaxed.top_card == card("9-clubs")

    state.hard_pressure_threshold = 2
    pressed = make_ai_move(state)
    assert pressed.draw_stack == 2
    assert pressed.top_card == card("2-hearts")
