"""Basic strategy tables for blackjack (S17 / DAS / no surrender)."""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from trainer.cards import UPCARDS, Rank
from trainer.hand import HandValue
from trainer.strategy.rules import (
    RuleKind,
    StrategyRule,
    Variant,
    upcard_range,
    upcards,
)

logger = logging.getLogger(__name__)


class Action(Enum):
    """Possible player actions, valued by their keyboard letter."""

    HIT = "H"
    STAND = "S"
    DOUBLE = "D"
    SPLIT = "P"

    def __str__(self) -> str:
        return self.name.title()

    @property
    def label(self) -> str:
        """Return the button label for this action."""
        return self.name.title()

    @classmethod
    def from_string(cls, s: str) -> "Action":
        """Create an action from a letter ('h') or name ('Stand')."""
        text = s.strip().upper()
        for action in cls:
            if text in (action.value, action.name):
                return action
        raise ValueError(f"Invalid action: {s}")


H = Action.HIT
S = Action.STAND
D = Action.DOUBLE
P = Action.SPLIT

EVERY_UPCARD = upcard_range("2", "A")


def _pair(rank: str, ups: frozenset[Rank], action: Action) -> StrategyRule:
    return StrategyRule(RuleKind.PAIR, Rank.from_string(rank), ups, action)


def _soft(total: int, ups: frozenset[Rank], action: Action) -> StrategyRule:
    return StrategyRule(RuleKind.SOFT, total, ups, action)


def _hard(total: int, ups: frozenset[Rank], action: Action) -> StrategyRule:
    return StrategyRule(RuleKind.HARD, total, ups, action)


# Pairs not covered here (e.g. 5,5 vs 10) fall through to the total tables.
PAIR_RULES: tuple[StrategyRule, ...] = (
    _pair("A", EVERY_UPCARD, P),
    _pair("8", EVERY_UPCARD, P),
    _pair("10", EVERY_UPCARD, S),
    _pair("9", upcards("2", "3", "4", "5", "6", "8", "9"), P),
    _pair("7", upcard_range("2", "7"), P),
    _pair("6", upcard_range("2", "6"), P),
    _pair("5", upcard_range("2", "9"), D),
    _pair("4", upcards("5", "6"), P),
    _pair("3", upcard_range("2", "7"), P),
    _pair("2", upcard_range("2", "7"), P),
)

SOFT_RULES: tuple[StrategyRule, ...] = (
    _soft(20, EVERY_UPCARD, S),
    _soft(19, EVERY_UPCARD, S),
    _soft(18, upcard_range("2", "6"), D),
    _soft(18, upcards("7", "8"), S),
    _soft(18, upcards("9", "10", "A"), H),
    _soft(17, upcard_range("3", "6"), D),
    _soft(17, upcards("2", "7", "8", "9", "10", "A"), H),
    _soft(16, upcard_range("4", "6"), D),
    _soft(16, upcards("2", "3", "7", "8", "9", "10", "A"), H),
    _soft(15, upcard_range("4", "6"), D),
    _soft(15, upcards("2", "3", "7", "8", "9", "10", "A"), H),
    _soft(14, upcards("5", "6"), D),
    _soft(14, upcards("2", "3", "4", "7", "8", "9", "10", "A"), H),
    _soft(13, upcards("5", "6"), D),
    _soft(13, upcards("2", "3", "4", "7", "8", "9", "10", "A"), H),
)

HARD_RULES: tuple[StrategyRule, ...] = (
    _hard(20, EVERY_UPCARD, S),
    _hard(19, EVERY_UPCARD, S),
    _hard(18, EVERY_UPCARD, S),
    _hard(17, EVERY_UPCARD, S),
    _hard(16, upcard_range("2", "6"), S),
    _hard(16, upcard_range("7", "A"), H),
    _hard(15, upcard_range("2", "6"), S),
    _hard(15, upcard_range("7", "A"), H),
    _hard(14, upcard_range("2", "6"), S),
    _hard(14, upcard_range("7", "A"), H),
    _hard(13, upcard_range("2", "6"), S),
    _hard(13, upcard_range("7", "A"), H),
    _hard(12, upcard_range("4", "6"), S),
    _hard(12, upcards("2", "3", "7", "8", "9", "10", "A"), H),
    _hard(11, upcard_range("2", "10"), D),
    _hard(11, upcards("A"), H),
    _hard(10, upcard_range("2", "9"), D),
    _hard(10, upcards("10", "A"), H),
    _hard(9, upcard_range("3", "6"), D),
    _hard(9, upcards("2", "7", "8", "9", "10", "A"), H),
    _hard(8, EVERY_UPCARD, H),
    _hard(7, EVERY_UPCARD, H),
    _hard(6, EVERY_UPCARD, H),
    _hard(5, EVERY_UPCARD, H),
)

# Applied before HARD_RULES under the 2-deck variant only
TWO_DECK_TWEAKS: tuple[StrategyRule, ...] = (
    StrategyRule(RuleKind.TWEAK, 9, upcards("2"), D),
)

# Lookup key: (kind, pair rank or total, normalised upcard)
LookupKey = tuple[RuleKind, Rank | int, Rank]


def _build_index(rules: Iterable[StrategyRule]) -> Mapping[LookupKey, Action]:
    """Index rules by (kind, key, upcard); the first rule listed wins."""
    index: dict[LookupKey, Action] = {}
    for rule in rules:
        for upcard in rule.upcards:
            index.setdefault((rule.kind, rule.key, upcard), rule.action)
    return MappingProxyType(index)


class BasicStrategy:
    """
    Basic strategy lookup tables.

    The rule tables are loaded once into an immutable index. Resolution
    follows a fixed priority: pair table, then soft table, then the hard
    table (with 2-deck tweaks checked first under that variant).
    """

    SOFT_TOTALS = range(13, 21)

    def __init__(
        self,
        pair_rules: Iterable[StrategyRule] = PAIR_RULES,
        soft_rules: Iterable[StrategyRule] = SOFT_RULES,
        hard_rules: Iterable[StrategyRule] = HARD_RULES,
        tweak_rules: Iterable[StrategyRule] = TWO_DECK_TWEAKS,
    ) -> None:
        self._rules: dict[RuleKind, tuple[StrategyRule, ...]] = {
            RuleKind.PAIR: tuple(pair_rules),
            RuleKind.SOFT: tuple(soft_rules),
            RuleKind.HARD: tuple(hard_rules),
            RuleKind.TWEAK: tuple(tweak_rules),
        }
        self._index = _build_index(
            rule for kind in RuleKind for rule in self._rules[kind]
        )

    def lookup_order(
        self,
        hand: HandValue,
        variant: Variant = Variant.SIX_DECK,
    ) -> list[tuple[RuleKind, Rank | int]]:
        """
        Return the (table, key) lookups tried for a hand, in priority order.

        A pair is always tried against the pair table first. If that misses,
        a soft 13-20 goes to the soft table; anything else goes to the hard
        table, preceded by the tweak table under the 2-deck variant.
        """
        order: list[tuple[RuleKind, Rank | int]] = []
        if hand.pair_rank is not None:
            order.append((RuleKind.PAIR, hand.pair_rank.normalized))

        if hand.soft and hand.total in self.SOFT_TOTALS:
            order.append((RuleKind.SOFT, hand.total))
        else:
            if variant == Variant.TWO_DECK:
                order.append((RuleKind.TWEAK, hand.total))
            order.append((RuleKind.HARD, hand.total))
        return order

    def get_action(
        self,
        hand: HandValue,
        dealer_upcard: Rank,
        variant: Variant = Variant.SIX_DECK,
    ) -> Action:
        """
        Get the basic strategy action.

        Args:
            hand: Evaluated player hand
            dealer_upcard: Dealer's upcard (face cards are treated as 10)
            variant: Table variant to resolve under

        Returns:
            The recommended action; Hit if no rule covers the hand
        """
        upcard = dealer_upcard.normalized
        for kind, key in self.lookup_order(hand, variant):
            action = self._index.get((kind, key, upcard))
            if action is not None:
                return action

        logger.debug(
            "No %s rule for %s vs %s, defaulting to Hit", variant, hand, upcard
        )
        return Action.HIT

    def rules(self, kind: RuleKind) -> tuple[StrategyRule, ...]:
        """Return the ordered rules of one table."""
        return self._rules[kind]

    def chart(
        self,
        kind: RuleKind,
        variant: Variant = Variant.SIX_DECK,
    ) -> Mapping[tuple[Rank | int, Rank], Action]:
        """
        Render a table as ``(key, upcard) -> action`` for every upcard.

        The hard chart includes the 2-deck tweaks under that variant. Keys are
        taken from the table's own rules, in table order.
        """
        keys = list(dict.fromkeys(rule.key for rule in self._rules[kind]))
        chart: dict[tuple[Rank | int, Rank], Action] = {}
        for key in keys:
            for upcard in UPCARDS:
                action = None
                if kind == RuleKind.HARD and variant == Variant.TWO_DECK:
                    action = self._index.get((RuleKind.TWEAK, key, upcard))
                if action is None:
                    action = self._index.get((kind, key, upcard))
                if action is not None:
                    chart[(key, upcard)] = action
        return chart


_default_strategy = BasicStrategy()


def resolve_action(
    hand: HandValue,
    dealer_upcard: Rank,
    variant: Variant = Variant.SIX_DECK,
) -> Action:
    """Resolve the textbook action for a hand with the default tables."""
    return _default_strategy.get_action(hand, dealer_upcard, variant)
