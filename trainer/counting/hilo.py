"""Hi-Lo card counting system."""

from typing import Mapping

from trainer.cards import Rank
from trainer.counting.base import CountingSystem

# Answer labels offered by the counting drill
GUESS_LABELS: tuple[str, ...] = ("+1", "0", "-1")


def label_for(delta: int) -> str:
    """Return the answer label for a count increment."""
    if delta > 0:
        return "+1"
    if delta < 0:
        return "-1"
    return "0"


def parse_guess(guess: str) -> str:
    """Validate a guess label, returning it stripped of whitespace."""
    label = guess.strip()
    if label not in GUESS_LABELS:
        raise ValueError(f"Invalid guess: {guess!r} (expected one of {GUESS_LABELS})")
    return label


class HiLoSystem(CountingSystem):
    """
    Hi-Lo counting system.

    Tag values:
        2-6: +1 (low cards)
        7-9: 0  (neutral)
        10-A: -1 (high cards)

    Full deck sum: 0 (balanced)
    """

    _TAG_VALUES: Mapping[Rank, int] = {
        Rank.TWO: 1,
        Rank.THREE: 1,
        Rank.FOUR: 1,
        Rank.FIVE: 1,
        Rank.SIX: 1,
        Rank.SEVEN: 0,
        Rank.EIGHT: 0,
        Rank.NINE: 0,
        Rank.TEN: -1,
        Rank.JACK: -1,
        Rank.QUEEN: -1,
        Rank.KING: -1,
        Rank.ACE: -1,
    }

    @property
    def name(self) -> str:
        return "Hi-Lo"

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES

    def label(self, rank: Rank) -> str:
        """Return the correct answer label for a rank."""
        return label_for(self.tag(rank))
