"""
State serialization and sanitization utilities.
"""

from typing import Any, Dict, Optional, Union

import orjson

from .constants import ERROR_CORRUPT_STATE, RANKS, SUITS
from .errors import raise_error
from .models import Card, GameState, Player
from .shuffle import validate_deck_integrity


def card_to_dict(card: Card) -> Dict[str, str]:
    return {"suit": card.suit, "rank": card.rank, "id": card.id}


def card_from_dict(data: Dict[str, Any]) -> Card:
    try:
        card = Card(suit=data["suit"], rank=data["rank"], id=data["id"])
    except (KeyError, TypeError) as e:
        raise_error(ERROR_CORRUPT_STATE, f"Malformed card {data!r}: {e}")
    if card.suit not in SUITS or card.rank not in RANKS:
        raise_error(ERROR_CORRUPT_STATE, f"Unknown card {card.id}")
    return card


def _player_to_dict(player: Player, show_hand: bool = True) -> Dict[str, Any]:
    data = {
        "id": player.id,
        "name": player.name,
        "niko_kadi_called": player.niko_kadi_called,
        "is_bot": player.is_bot,
        "hand_count": len(player.hand),
    }
    if show_hand:
        data["hand"] = [card_to_dict(c) for c in player.hand]
    return data


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """
    Convert a snapshot to plain data.

    The result is the full authoritative state, hands included.
    """
    return {
        "game_id": state.game_id,
        "version": state.version,
        "players": [_player_to_dict(p) for p in state.players],
        "current_player_index": state.current_player_index,
        "draw_pile": [card_to_dict(c) for c in state.draw_pile],
        "discard_pile": [card_to_dict(c) for c in state.discard_pile],
        "draw_stack": state.draw_stack,
        "pending_question": state.pending_question,
        "selected_suit": state.selected_suit,
        "game_phase": state.game_phase,
        "winner": state.winner,
        "turn_history": list(state.turn_history),
        "ai_difficulty": state.ai_difficulty,
        "hard_pressure_threshold": state.hard_pressure_threshold,
    }


def state_from_dict(data: Dict[str, Any], check_integrity: bool = True) -> GameState:
    """
    Rebuild a snapshot produced by ``state_to_dict``.

    Raises:
        GameError: If the data is malformed or cards are missing or duplicated
    """
    try:
        players = [
            Player(
                id=p["id"],
                name=p["name"],
                hand=[card_from_dict(c) for c in p["hand"]],
                niko_kadi_called=p.get("niko_kadi_called", False),
                is_bot=p.get("is_bot", False),
            )
            for p in data["players"]
        ]
        state = GameState(
            players=players,
            current_player_index=data["current_player_index"],
            draw_pile=[card_from_dict(c) for c in data["draw_pile"]],
            discard_pile=[card_from_dict(c) for c in data["discard_pile"]],
            draw_stack=data.get("draw_stack", 0),
            pending_question=data.get("pending_question", False),
            selected_suit=data.get("selected_suit"),
            game_phase=data["game_phase"],
            winner=data.get("winner"),
            turn_history=list(data.get("turn_history", [])),
            ai_difficulty=data.get("ai_difficulty"),
            hard_pressure_threshold=data.get("hard_pressure_threshold"),
            game_id=data.get("game_id"),
            version=data.get("version", 0),
        )
    except (KeyError, TypeError) as e:
        raise_error(ERROR_CORRUPT_STATE, f"Malformed game state: missing {e}")

    if not 0 <= state.current_player_index < len(state.players):
        raise_error(ERROR_CORRUPT_STATE, f"Invalid current player {state.current_player_index}")
    if check_integrity and not validate_deck_integrity(state):
        raise_error(ERROR_CORRUPT_STATE, "Cards are missing or duplicated")
    return state


def dumps_state(state: GameState) -> bytes:
    """Serialize a snapshot to JSON bytes for storage or transmission."""
    return orjson.dumps(state_to_dict(state))


def loads_state(raw: Union[bytes, str], check_integrity: bool = True) -> GameState:
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise_error(ERROR_CORRUPT_STATE, f"Invalid JSON: {e}")
    return state_from_dict(data, check_integrity=check_integrity)


def sanitize_state(state: GameState, viewer_index: Optional[int] = None) -> Dict[str, Any]:
    """
    Sanitize a snapshot for display to one player.

    Args:
        state: Game state to sanitize
        viewer_index: Seat of the viewing player (to show their cards)

    Returns:
        Dictionary with the opponent's hand and the draw pile reduced to counts
    """
    top_card = state.top_card
    return {
        "game_id": state.game_id,
        "version": state.version,
        "players": [
            _player_to_dict(p, show_hand=(i == viewer_index))
            for i, p in enumerate(state.players)
        ],
        "current_player_index": state.current_player_index,
        "draw_pile_count": len(state.draw_pile),
        "top_card": card_to_dict(top_card) if top_card else None,
        "discard_count": len(state.discard_pile),
        "draw_stack": state.draw_stack,
        "pending_question": state.pending_question,
        "selected_suit": state.selected_suit,
        "game_phase": state.game_phase,
        "winner": state.winner,
        "recent_history": state.turn_history[-5:],
    }
