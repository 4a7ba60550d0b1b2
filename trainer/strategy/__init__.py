"""Strategy tables and rule variants."""

from trainer.strategy.rules import RuleKind, StrategyRule, Variant
from trainer.strategy.basic import Action, BasicStrategy, resolve_action

__all__ = [
    "RuleKind",
    "StrategyRule",
    "Variant",
    "BasicStrategy",
    "Action",
    "resolve_action",
]
