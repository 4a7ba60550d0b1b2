"""Ranks and the counting shoe - suits are not modelled, only rank multiplicity."""

import logging
from enum import Enum
from random import Random
from typing import Iterator

logger = logging.getLogger(__name__)


class Rank(Enum):
    """Card ranks, valued by their display label."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self == Rank.ACE:
            return 11
        if self.is_ten_value:
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        """Check if this rank has a value of 10."""
        return self in (Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING)

    @property
    def normalized(self) -> "Rank":
        """Return the rank used for strategy lookups (J/Q/K become 10)."""
        return Rank.TEN if self.is_ten_value else self

    @classmethod
    def from_string(cls, s: str) -> "Rank":
        """Create a rank from a label like 'A', '10', 'T' or 'k'."""
        label = s.strip().upper()
        if label == "T":
            label = "10"
        try:
            return cls(label)
        except ValueError:
            raise ValueError(f"Invalid rank: {s}") from None


# Dealer upcards after normalisation, in chart column order
UPCARDS: tuple[Rank, ...] = (
    Rank.TWO,
    Rank.THREE,
    Rank.FOUR,
    Rank.FIVE,
    Rank.SIX,
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.NINE,
    Rank.TEN,
    Rank.ACE,
)


def normalize_rank(rank: Rank) -> Rank:
    """Map J, Q and K to 10, leaving every other rank unchanged."""
    return rank.normalized


def card_value(rank: Rank) -> int:
    """Return the blackjack point value of a rank."""
    return rank.blackjack_value


def draw_random_rank(rng: Random | None = None) -> Rank:
    """Draw a uniformly random rank, independent of any shoe."""
    return (rng or Random()).choice(list(Rank))


class Shoe:
    """A shuffled multi-deck shoe read front to back through a cursor."""

    def __init__(self, num_decks: int = 6, rng: Random | None = None) -> None:
        """
        Initialize a shuffled shoe.

        Args:
            num_decks: Number of 52-card decks in the shoe
            rng: Random number generator for shuffling
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")

        self._num_decks = num_decks
        self._rng = rng or Random()
        self._cards: list[Rank] = []
        self._cursor = 0
        self.reset()

    def reset(self, num_decks: int | None = None) -> None:
        """Rebuild the full shoe and reshuffle it, optionally changing size."""
        if num_decks is not None:
            if num_decks < 1:
                raise ValueError("Shoe must have at least 1 deck")
            self._num_decks = num_decks

        self._cards = [
            rank
            for _ in range(self._num_decks)
            for rank in Rank
            for _suit in range(4)
        ]
        # random.shuffle is an in-place Fisher-Yates over the whole list
        self._rng.shuffle(self._cards)
        self._cursor = 0
        logger.debug("Shuffled %d-deck shoe (%d cards)", self._num_decks, len(self._cards))

    def draw(self) -> Rank | None:
        """Draw the next card, or None once the shoe is exhausted."""
        if self._cursor >= len(self._cards):
            return None
        card = self._cards[self._cursor]
        self._cursor += 1
        return card

    @property
    def is_exhausted(self) -> bool:
        """Check if every card has been drawn."""
        return self._cursor >= len(self._cards)

    @property
    def remaining_cards(self) -> int:
        """Return the number of undrawn cards."""
        return len(self._cards) - self._cursor

    @property
    def remaining_decks(self) -> float:
        """Return the remaining decks, floored at a quarter deck."""
        return max(0.25, self.remaining_cards / 52)

    @property
    def cards_dealt(self) -> int:
        """Return the number of cards dealt."""
        return self._cursor

    @property
    def total_cards(self) -> int:
        """Return the total number of cards in a full shoe."""
        return self._num_decks * 52

    @property
    def num_decks(self) -> int:
        """Return the number of decks in the shoe."""
        return self._num_decks

    def __len__(self) -> int:
        return self.remaining_cards

    def __iter__(self) -> Iterator[Rank]:
        return iter(self._cards[self._cursor:])
