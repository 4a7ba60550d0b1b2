"""Hand evaluation for blackjack."""

from dataclasses import dataclass
from typing import Iterable

from trainer.cards import Rank


@dataclass(frozen=True, slots=True)
class HandValue:
    """Derived value of a hand: best total, softness and pair rank."""

    total: int
    soft: bool = False
    pair_rank: Rank | None = None
    num_cards: int = 2

    @property
    def is_pair(self) -> bool:
        """Check if the hand is a splittable pair."""
        return self.pair_rank is not None

    @property
    def is_bust(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.total > 21

    @property
    def is_natural(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return self.num_cards == 2 and self.total == 21

    @property
    def label(self) -> str:
        """Return a short description such as 'Soft 18' or 'Hard 16'."""
        return f"{'Soft' if self.soft else 'Hard'} {self.total}"

    def __str__(self) -> str:
        if self.pair_rank is not None:
            return f"{self.label} (pair of {self.pair_rank}s)"
        return self.label


def evaluate_hand(cards: Iterable[Rank]) -> HandValue:
    """
    Evaluate a hand of two or more ranks.

    Every Ace starts at 11 and is demoted to 1 only while the total exceeds
    21. The hand is soft if an Ace still counts 11 afterwards.
    """
    cards = list(cards)
    total = sum(card.blackjack_value for card in cards)
    aces_as_eleven = sum(1 for card in cards if card.is_ace)

    # Reduce aces from 11 to 1 as needed
    while total > 21 and aces_as_eleven > 0:
        total -= 10
        aces_as_eleven -= 1

    pair_rank = None
    if len(cards) == 2 and cards[0].normalized == cards[1].normalized:
        pair_rank = cards[0].normalized

    return HandValue(
        total=total,
        soft=aces_as_eleven > 0,
        pair_rank=pair_rank,
        num_cards=len(cards),
    )
