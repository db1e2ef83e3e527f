"""
Difficulty tiers for the computer opponent.
"""

from typing import Dict, List, Type

from .base import BaseBot
from ..cards import get_card_category, get_penalty_value, is_special
from ..constants import CardCategory
from ..models import Card, GameState


class EasyBot(BaseBot):
    """Plays the first legal play it finds."""

    difficulty = "easy"

    def select_play(self, state: GameState, plays: List[List[Card]]) -> List[Card]:
        return plays[0]


class MediumBot(BaseBot):
    """
    Sheds as many cards as possible.

    Among equally long plays, one holding a penalty, jump or wild card wins;
    remaining ties go to the earliest play.
    """

    difficulty = "medium"

    def select_play(self, state: GameState, plays: List[List[Card]]) -> List[Card]:
        return max(plays, key=self._score_play)

    def _score_play(self, cards: List[Card]):
        return len(cards), any(is_special(card) for card in cards)


class HardBot(MediumBot):
    """
    Pressures an opponent close to finishing.

    When the opponent holds ``pressure_threshold`` cards or fewer the largest
    penalty play is made; otherwise it plays like the medium bot.
    """

    difficulty = "hard"

    def select_play(self, state: GameState, plays: List[List[Card]]) -> List[Card]:
        if self.count_opponent_cards(state) <= self.pressure_threshold:
            penalty_plays = [
                play for play in plays
                if all(get_card_category(card.rank) is CardCategory.PENALTY for card in play)
            ]
            if penalty_plays:
                return max(
                    penalty_plays,
                    key=lambda play: (len(play), sum(get_penalty_value(c.rank) for c in play))
                )
        return super().select_play(state, plays)


BOT_STRATEGIES: Dict[str, Type[BaseBot]] = {
    EasyBot.difficulty: EasyBot,
    MediumBot.difficulty: MediumBot,
    HardBot.difficulty: HardBot,
}


def get_bot(difficulty: str, **kwargs) -> BaseBot:
    """Instantiate the strategy for a difficulty tier."""
    try:
        bot_class = BOT_STRATEGIES[difficulty]
    except KeyError:
        raise ValueError(f"Unknown AI difficulty: {difficulty}")
    return bot_class(**kwargs)
