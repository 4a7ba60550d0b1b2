"""Abstract base class for card counting systems."""

import math
from abc import ABC, abstractmethod
from typing import Mapping

from trainer.cards import Rank


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


class CountingSystem(ABC):
    """
    Abstract base class for card counting systems.

    Tracks an integer running count and converts it to a true count using
    the decks remaining in the shoe.
    """

    def __init__(self) -> None:
        """Initialize the counting system."""
        self._running_count: int = 0
        self._cards_seen: int = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the counting system."""
        ...

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, int]:
        """
        Return the tag value mapping for this system.

        Maps each Rank to its count value.
        """
        ...

    @property
    def full_deck_sum(self) -> int:
        """Sum of tag values over a complete 52-card deck (0 when balanced)."""
        return sum(self.tag_values[rank] * 4 for rank in Rank)

    def tag(self, rank: Rank) -> int:
        """Return the tag value of a rank without counting it."""
        return self.tag_values[rank]

    def count_card(self, rank: Rank) -> int:
        """
        Count a single card and update the running count.

        Args:
            rank: The rank of the card seen

        Returns:
            The tag value of the card
        """
        tag_value = self.tag_values[rank]
        self._running_count += tag_value
        self._cards_seen += 1
        return tag_value

    @property
    def running_count(self) -> int:
        """Return the current running count."""
        return self._running_count

    def true_count(self, decks_remaining: float) -> int:
        """
        Calculate the true count.

        The divisor is the remaining decks rounded to the nearest whole deck,
        never less than one; the quotient is truncated toward zero.

        Args:
            decks_remaining: Number of decks remaining in the shoe

        Returns:
            The true count as an integer
        """
        divisor = max(1, round_half_up(decks_remaining))
        return math.trunc(self._running_count / divisor)

    @property
    def cards_seen(self) -> int:
        """Return the number of cards seen."""
        return self._cards_seen

    def reset(self) -> None:
        """Reset the count to zero."""
        self._running_count = 0
        self._cards_seen = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(running_count={self._running_count})"
