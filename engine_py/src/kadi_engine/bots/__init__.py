"""
Computer opponents for Kadi.
"""

from .base import BaseBot, BotAction
from .strategies import BOT_STRATEGIES, EasyBot, HardBot, MediumBot, get_bot

__all__ = ["BOT_STRATEGIES", "BaseBot", "BotAction", "EasyBot", "HardBot", "MediumBot", "get_bot"]
