"""Drill state enumerations."""

from enum import Enum, auto


class StrategyState(Enum):
    """
    Strategy drill states.

    Flow: AWAITING_ANSWER → FEEDBACK → AWAITING_ANSWER (next scenario)
    """

    AWAITING_ANSWER = auto()
    FEEDBACK = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class CountingState(Enum):
    """
    Counting drill states.

    Flow: NO_CARD → CARD_SHOWN → CARD_SHOWN ... → NO_CARD (shoe exhausted)
    """

    NO_CARD = auto()
    CARD_SHOWN = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()
