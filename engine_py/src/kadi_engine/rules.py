"""
Game rule configuration and validation.
"""

from typing import List

from pydantic import BaseModel, Field, field_validator

from .constants import AIDifficulty, PLAYER_COUNT


class RuleConfig(BaseModel):
    """Configuration for game setup and the computer opponent."""

    starting_hand_size: int = Field(
        default=4,
        ge=1,
        le=20,
        description="Cards dealt to each player at the start of a game"
    )
    player_names: List[str] = Field(
        default_factory=lambda: ["Player 1", "Player 2"],
        description="Display names, in seat order"
    )
    vs_computer: bool = Field(
        default=False,
        description="Whether the second seat is the computer opponent"
    )
    computer_name: str = Field(
        default="Computer",
        min_length=1,
        max_length=30,
        description="Name given to the computer opponent"
    )
    ai_difficulty: AIDifficulty = Field(
        default="medium",
        description="Strategy used by the computer opponent"
    )
    hard_pressure_threshold: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Opponent hand size at or below which the hard bot plays penalties first"
    )

    @field_validator('player_names')
    @classmethod
    def validate_player_names(cls, v):
        """Exactly two non-empty, distinct names."""
        if len(v) != PLAYER_COUNT:
            raise ValueError(f'player_names must hold {PLAYER_COUNT} names (got {len(v)})')
        if any(not name.strip() for name in v):
            raise ValueError('player names must not be empty')
        if len(set(v)) != len(v):
            raise ValueError('player names must be distinct')
        return v

    def get_deal_size(self) -> int:
        """Cards taken from the deck by the initial deal."""
        return self.starting_hand_size * PLAYER_COUNT

    def seat_names(self) -> List[str]:
        """Names actually used for the two seats."""
        names = list(self.player_names)
        if self.vs_computer:
            names[1] = self.computer_name
        return names


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
