"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _parse_deck_choices() -> tuple[int, ...]:
    """Parse TRAINER_DECK_CHOICES environment variable."""
    choices = os.getenv("TRAINER_DECK_CHOICES", "1,2,4,6,8")
    return tuple(int(c.strip()) for c in choices.split(",") if c.strip())


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(
        default_factory=lambda: os.getenv("TRAINER_LOG_LEVEL", "INFO").upper()
    )
    format: str = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
    datefmt: str = "%H:%M:%S"


@dataclass(frozen=True)
class StrategyDrillConfig:
    """Basic strategy drill defaults."""

    variant: str = field(default_factory=lambda: os.getenv("TRAINER_VARIANT", "6-deck"))
    auto_advance_seconds: float = field(
        default_factory=lambda: float(os.getenv("TRAINER_AUTO_ADVANCE", "1.2"))
    )
    history_limit: int = 200


@dataclass(frozen=True)
class CountingDrillConfig:
    """Hi-Lo counting drill defaults."""

    num_decks: int = field(default_factory=lambda: int(os.getenv("TRAINER_DECKS", "6")))
    deck_choices: tuple[int, ...] = field(default_factory=_parse_deck_choices)
    timed_seconds: int = field(
        default_factory=lambda: int(os.getenv("TRAINER_TIMED_SECONDS", "60"))
    )
    tick_seconds: float = 1.0
    history_limit: int = 200


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    strategy: StrategyDrillConfig = field(default_factory=StrategyDrillConfig)
    counting: CountingDrillConfig = field(default_factory=CountingDrillConfig)


# Global configuration instance
config = AppConfig()
