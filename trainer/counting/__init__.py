"""Card counting systems."""

from trainer.counting.base import CountingSystem
from trainer.counting.hilo import GUESS_LABELS, HiLoSystem, label_for, parse_guess

__all__ = [
    "CountingSystem",
    "HiLoSystem",
    "GUESS_LABELS",
    "label_for",
    "parse_guess",
]
