"""Score keeping and bounded answer history for drill sessions."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Iterator, TypeVar

from trainer.cards import Rank
from trainer.counting.base import round_half_up
from trainer.hand import HandValue
from trainer.strategy.basic import Action
from trainer.strategy.rules import Variant

T = TypeVar("T")


def accuracy_percent(corrects: int, attempts: int) -> int:
    """Return accuracy as a whole percentage (0 when nothing was attempted)."""
    if not attempts:
        return 0
    return round_half_up(100 * corrects / attempts)


@dataclass
class SessionStats:
    """Running score of a drill session."""

    attempts: int = 0
    corrects: int = 0
    streak: int = 0
    best_streak: int = 0

    def record(self, is_correct: bool) -> None:
        """Count one answer."""
        self.attempts += 1
        if is_correct:
            self.corrects += 1
            self.streak += 1
            self.best_streak = max(self.best_streak, self.streak)
        else:
            self.streak = 0

    @property
    def accuracy(self) -> int:
        """Return accuracy as a whole percentage."""
        return accuracy_percent(self.corrects, self.attempts)


class History(Generic[T]):
    """Most-recent-first log that keeps only the newest ``limit`` entries."""

    def __init__(self, limit: int = 200) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self._entries: deque[T] = deque(maxlen=limit)

    def record(self, entry: T) -> None:
        """Prepend an entry, dropping the oldest when full."""
        self._entries.appendleft(entry)

    @property
    def limit(self) -> int:
        return self._entries.maxlen or 0

    @property
    def latest(self) -> T | None:
        return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> T:
        return self._entries[index]


@dataclass(frozen=True)
class StrategyRecord:
    """Snapshot of one strategy question and the answer given."""

    player: tuple[Rank, Rank]
    upcard: Rank
    hand: HandValue
    variant: Variant
    chosen: Action
    correct: Action
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_correct(self) -> bool:
        return self.chosen == self.correct


@dataclass(frozen=True)
class CountRecord:
    """Snapshot of one counting answer and the counts after it."""

    card: Rank
    guess: str
    correct: str
    running_count: int
    true_count: int
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_correct(self) -> bool:
        return self.guess == self.correct
