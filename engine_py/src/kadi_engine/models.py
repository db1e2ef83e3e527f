"""Game models and data structures"""

from dataclasses import dataclass, field
from typing import List, Optional

from .constants import PHASE_SETUP


@dataclass(frozen=True)
class Card:
    suit: str
    rank: str
    id: str

    @classmethod
    def of(cls, rank: str, suit: str) -> 'Card':
        """Build a card with its canonical id, e.g. ``Card.of('Q', 'diamonds')``."""
        return cls(suit=suit, rank=rank, id=f"{rank}-{suit}")


@dataclass
class Player:
    id: str
    name: str
    hand: List[Card] = field(default_factory=list)
    niko_kadi_called: bool = False
    is_bot: bool = False

    def find_card(self, card_id: str) -> Optional[Card]:
        for card in self.hand:
            if card.id == card_id:
                return card
        return None


@dataclass
class GameState:
    players: List[Player] = field(default_factory=list)
    current_player_index: int = 0
    draw_pile: List[Card] = field(default_factory=list)  # last card is drawn first
    discard_pile: List[Card] = field(default_factory=list)  # last card is the top card
    draw_stack: int = 0
    pending_question: bool = False
    selected_suit: Optional[str] = None
    game_phase: str = PHASE_SETUP  # setup|playing|selectingSuit|gameOver
    winner: Optional[str] = None
    turn_history: List[str] = field(default_factory=list)
    ai_difficulty: Optional[str] = None
    hard_pressure_threshold: Optional[int] = None
    game_id: Optional[str] = None
    version: int = 0

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def top_card(self) -> Optional[Card]:
        return self.discard_pile[-1] if self.discard_pile else None

    def opponent_index(self, player_index: Optional[int] = None) -> int:
        if player_index is None:
            player_index = self.current_player_index
        return (player_index + 1) % len(self.players)

    def log(self, message: str) -> None:
        self.turn_history.append(message)

    def increment_version(self) -> None:
        self.version += 1

    def card_count(self) -> int:
        """Total cards across piles and hands."""
        return (
            len(self.draw_pile)
            + len(self.discard_pile)
            + sum(len(p.hand) for p in self.players)
        )
