"""
Base bot interface and utilities.
"""

from abc import ABC, abstractmethod
from collections import Counter
from itertools import combinations, permutations
from typing import Dict, List, Optional

from ..cards import get_card_category, is_question_answer_combo, is_wild
from ..constants import CardCategory, SUITS
from ..models import Card, GameState
from ..validate import can_player_play, detect_rank


class BotAction:
    """Represents a bot action."""

    def __init__(self, action_type: str, **kwargs):
        self.type = action_type
        self.data = kwargs

    def __repr__(self) -> str:
        return f"BotAction({self.type!r}, {self.data!r})"

    @classmethod
    def play(cls, cards: List[Card], declared_suit: Optional[str] = None) -> 'BotAction':
        """Create a play action."""
        return cls('play', cards=cards, declared_suit=declared_suit)

    @classmethod
    def draw(cls) -> 'BotAction':
        """Create an ordinary draw action."""
        return cls('draw')

    @classmethod
    def penalty_draw(cls) -> 'BotAction':
        """Create a penalty draw action."""
        return cls('penalty_draw')

    @property
    def card_ids(self) -> List[str]:
        return [card.id for card in self.data.get('cards', [])]


class BaseBot(ABC):
    """
    Abstract base class for computer opponents.

    Subclasses only decide which of the legal plays to make; finding the
    legal plays, answering questions, drawing and naming suits is shared.
    """

    difficulty = "base"

    def __init__(self, pressure_threshold: int = 2):
        self.pressure_threshold = pressure_threshold

    @abstractmethod
    def select_play(self, state: GameState, plays: List[List[Card]]) -> List[Card]:
        """
        Pick one play.

        Args:
            state: Current game state
            plays: Non-empty list of legal plays, in enumeration order

        Returns:
            The chosen play
        """

    def choose_action(self, state: GameState) -> BotAction:
        """Choose the action for the bot's turn."""
        if state.pending_question and state.draw_stack == 0:
            return self._choose_answer(state)

        plays = self.get_valid_plays(state)
        if not plays:
            return self._draw_action(state)

        chosen = self.select_play(state, plays)
        return BotAction.play(chosen, self._declared_suit_for(state, chosen))

    def _choose_answer(self, state: GameState) -> BotAction:
        answers = [card for card in self.get_player_hand(state) if can_player_play(state, [card.id])]
        if not answers:
            return self._draw_action(state)

        groups = [group for group in self.group_by_rank(answers).values() if len(group) > 1]
        if groups:
            chosen = max(groups, key=len)
        else:
            chosen = self.select_play(state, [[card] for card in answers])
        return BotAction.play(chosen, self._declared_suit_for(state, chosen))

    def _draw_action(self, state: GameState) -> BotAction:
        if state.draw_stack > 0:
            return BotAction.penalty_draw()
        return BotAction.draw()

    def _declared_suit_for(self, state: GameState, cards: List[Card]) -> Optional[str]:
        if state.draw_stack > 0 or not any(is_wild(card) for card in cards):
            return None
        played_ids = {card.id for card in cards}
        remaining = [card for card in self.get_player_hand(state) if card.id not in played_ids]
        return self.choose_suit(remaining, fallback=cards[0].suit)

    def choose_suit(self, hand: List[Card], fallback: str = SUITS[0]) -> str:
        """Most frequent suit in the hand, ties broken by suit order."""
        if not hand:
            return fallback
        counts = Counter(card.suit for card in hand)
        return max(SUITS, key=lambda suit: counts.get(suit, 0))

    def get_player_hand(self, state: GameState) -> List[Card]:
        """Get this bot's current hand."""
        return list(state.current_player.hand)

    def count_opponent_cards(self, state: GameState) -> int:
        return len(state.players[state.opponent_index()].hand)

    @staticmethod
    def group_by_rank(cards: List[Card]) -> Dict[str, List[Card]]:
        groups: Dict[str, List[Card]] = {}
        for card in cards:
            groups.setdefault(card.rank, []).append(card)
        return groups

    def get_valid_plays(self, state: GameState) -> List[List[Card]]:
        """
        Get all valid plays this bot can make.

        Args:
            state: Current game state

        Returns:
            Every legal single card, then every legal same-rank group of two
            or more cards, then legal mixed penalty stacks and
            question-answer pairs
        """
        hand = self.get_player_hand(state)
        if not hand:
            return []

        valid_plays = [[card] for card in hand if can_player_play(state, [card.id])]

        for cards in self.group_by_rank(hand).values():
            for size in range(2, len(cards) + 1):
                for group in combinations(cards, size):
                    if can_player_play(state, [card.id for card in group]):
                        valid_plays.append(list(group))

        penalties = [card for card in hand if get_card_category(card.rank) is CardCategory.PENALTY]
        for size in range(2, len(penalties) + 1):
            for group in combinations(penalties, size):
                group = list(group)
                if detect_rank(group) is None and can_player_play(state, [card.id for card in group]):
                    valid_plays.append(group)

        for question, answer in permutations(hand, 2):
            pair = [question, answer]
            if is_question_answer_combo(pair) and can_player_play(state, [question.id, answer.id]):
                valid_plays.append(pair)

        return valid_plays
