"""Blackjack skills trainer engine - 100% UI-agnostic."""

from trainer.cards import Rank, Shoe, card_value, draw_random_rank, normalize_rank
from trainer.hand import HandValue, evaluate_hand

__all__ = [
    "Rank",
    "Shoe",
    "card_value",
    "draw_random_rank",
    "normalize_rank",
    "HandValue",
    "evaluate_hand",
]
