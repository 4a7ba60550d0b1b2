"""Rule variants and strategy rule records.

All tables assume S17 / DAS / no surrender. The 2-deck variant applies a
small set of double-down tweaks on top of the 6-deck baseline.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from trainer.cards import UPCARDS, Rank

if TYPE_CHECKING:
    from trainer.strategy.basic import Action


class Variant(Enum):
    """Table rule variants the trainer drills."""

    SIX_DECK = "6-deck"
    TWO_DECK = "2-deck"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, s: str) -> "Variant":
        """Parse '6-deck', '6D', '2-deck' or '2D' (case-insensitive)."""
        label = s.strip().lower()
        aliases = {
            "6-deck": cls.SIX_DECK,
            "6d": cls.SIX_DECK,
            "2-deck": cls.TWO_DECK,
            "2d": cls.TWO_DECK,
        }
        if label not in aliases:
            raise ValueError(f"Invalid variant: {s}")
        return aliases[label]


class RuleKind(Enum):
    """Strategy table a rule belongs to."""

    PAIR = auto()
    SOFT = auto()
    HARD = auto()
    TWEAK = auto()  # hard-total override, 2-deck only

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class StrategyRule:
    """
    A single chart entry.

    ``key`` is the normalised pair rank for PAIR rules and the hand total for
    every other kind.
    """

    kind: RuleKind
    key: Rank | int
    upcards: frozenset[Rank]
    action: "Action"


def upcard_range(first: str, last: str) -> frozenset[Rank]:
    """
    Return the upcards between two labels inclusive, in chart order.

    Face cards are treated as 10, so ``upcard_range("2", "A")`` is every
    upcard.
    """
    start = UPCARDS.index(Rank.from_string(first).normalized)
    end = UPCARDS.index(Rank.from_string(last).normalized)
    if start > end:
        start, end = end, start
    return frozenset(UPCARDS[start:end + 1])


def upcards(*labels: str) -> frozenset[Rank]:
    """Return the set of normalised upcards for the given labels."""
    return frozenset(Rank.from_string(label).normalized for label in labels)
