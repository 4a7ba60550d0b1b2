"""Hi-Lo counting drill over a finite shoe."""

import logging
from dataclasses import dataclass
from random import Random
from typing import Callable

from transitions import Machine

from config import config
from trainer.cards import Rank, Shoe
from trainer.counting.hilo import GUESS_LABELS, HiLoSystem, label_for, parse_guess
from trainer.drills.events import DrillEvent, EventEmitter, EventType
from trainer.drills.state import CountingState
from trainer.drills.stats import CountRecord, History, SessionStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuessResult:
    """Outcome of the last submitted guess."""

    card: Rank
    guess: str
    correct: str

    @property
    def is_correct(self) -> bool:
        return self.guess == self.correct


def _empty_tally() -> dict[str, int]:
    return {label: 0 for label in GUESS_LABELS}


class CountingSession:
    """
    Hi-Lo counting drill using a state machine.

    Each ``submit`` judges the card on show, updates the running and true
    count, then deals the next card. When the shoe runs out it is replaced
    by a fresh shuffle and the counts start again from zero.
    """

    # State machine states
    STATES = [s.name.lower() for s in CountingState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "show_card", "source": ["no_card", "card_shown"], "dest": "card_shown"},
        {"trigger": "clear_card", "source": ["no_card", "card_shown"], "dest": "no_card"},
    ]

    def __init__(
        self,
        num_decks: int | None = None,
        rng: Random | None = None,
        history_limit: int | None = None,
    ) -> None:
        """
        Initialize a counting drill with a freshly shuffled shoe.

        Args:
            num_decks: Decks in the shoe (defaults to the configured count)
            rng: Random number generator for shuffling
            history_limit: Maximum number of history records kept
        """
        num_decks = config.counting.num_decks if num_decks is None else num_decks
        self._validate_deck_count(num_decks)
        self._deck_count = num_decks
        self._rng = rng or Random()
        self._history_limit = (
            config.counting.history_limit if history_limit is None else history_limit
        )

        self.events = EventEmitter()
        self.shoe = Shoe(num_decks=self._deck_count, rng=self._rng)
        self.counter = HiLoSystem()
        self.true_count = 0
        self.current_card: Rank | None = None
        self.last_result: GuessResult | None = None
        self.stats = SessionStats()
        self.history: History[CountRecord] = History(self._history_limit)
        self.error_tally = _empty_tally()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="no_card",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> CountingState:
        """Get current drill state as enum."""
        return CountingState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[DrillEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to drill events."""
        self.events.subscribe(handler, event_type)

    @property
    def deck_count(self) -> int:
        return self._deck_count

    @property
    def running_count(self) -> int:
        return self.counter.running_count

    def deal_next(self) -> Rank | None:
        """
        Show the next card from the shoe.

        If the shoe is exhausted it is replaced and the counts are zeroed;
        no card is shown and the player must deal again.
        """
        card = self.shoe.draw()
        if card is None:
            self._reshuffle()
            return None

        self.current_card = card
        self.show_card()
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=card,
            remaining_cards=self.shoe.remaining_cards,
        )
        return card

    def submit(self, guess: str) -> GuessResult | None:
        """
        Judge a Hi-Lo guess for the card on show, then deal the next card.

        Args:
            guess: One of "+1", "0" or "-1"

        Returns:
            The result, or None if no card was on show
        """
        label = parse_guess(guess)
        card = self.current_card
        if card is None:
            return None

        delta = self.counter.count_card(card)
        result = GuessResult(card=card, guess=label, correct=label_for(delta))

        self.stats.record(result.is_correct)
        if not result.is_correct:
            self.error_tally[label] += 1

        self.true_count = self.counter.true_count(self.shoe.remaining_decks)
        self.history.record(
            CountRecord(
                card=card,
                guess=label,
                correct=result.correct,
                running_count=self.running_count,
                true_count=self.true_count,
            )
        )
        self.last_result = result
        self.events.emit_new(
            EventType.GUESS_JUDGED,
            card=card,
            guess=label,
            correct=result.correct,
            is_correct=result.is_correct,
            running_count=self.running_count,
            true_count=self.true_count,
        )

        self.deal_next()
        return result

    def set_deck_count(self, num_decks: int) -> None:
        """Change the shoe size, fully resetting the session if it differs."""
        self._validate_deck_count(num_decks)
        if num_decks == self._deck_count:
            return
        self._deck_count = num_decks
        self.reset_session()

    def reset_session(self) -> None:
        """Start over with a fresh shoe, zero counts and an empty score."""
        shoe = Shoe(num_decks=self._deck_count, rng=self._rng)
        counter = HiLoSystem()
        stats = SessionStats()
        history = History[CountRecord](self._history_limit)

        self.shoe, self.counter, self.true_count = shoe, counter, 0
        self.stats, self.history, self.error_tally = stats, history, _empty_tally()
        self.current_card, self.last_result = None, None
        self.clear_card()

        logger.info("Counting session reset with %d deck(s)", self._deck_count)
        self.events.emit_new(
            EventType.SESSION_RESET, drill="counting", num_decks=self._deck_count
        )

    def _reshuffle(self) -> None:
        shoe = Shoe(num_decks=self._deck_count, rng=self._rng)
        counter = HiLoSystem()

        self.shoe, self.counter, self.true_count = shoe, counter, 0
        self.current_card = None
        self.clear_card()

        logger.debug("Shoe exhausted, reshuffled %d deck(s)", self._deck_count)
        self.events.emit_new(EventType.SHOE_RESHUFFLED, num_decks=self._deck_count)

    @staticmethod
    def _validate_deck_count(num_decks: int) -> None:
        if num_decks not in config.counting.deck_choices:
            raise ValueError(
                f"num_decks must be one of {config.counting.deck_choices}, got {num_decks}"
            )
