"""Basic strategy drill: scenario generation and the answer/feedback loop."""

import logging
from dataclasses import dataclass
from random import Random
from typing import Callable

from transitions import Machine

from config import config
from trainer.cards import Rank, draw_random_rank
from trainer.drills.events import DrillEvent, EventEmitter, EventType
from trainer.drills.scheduler import AsyncioScheduler, Scheduler, TaskSlot
from trainer.drills.state import StrategyState
from trainer.drills.stats import History, SessionStats, StrategyRecord
from trainer.hand import HandValue, evaluate_hand
from trainer.strategy.basic import Action, BasicStrategy
from trainer.strategy.rules import Variant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scenario:
    """A two-card player hand against a normalised dealer upcard."""

    player: tuple[Rank, Rank]
    upcard: Rank

    @property
    def hand(self) -> HandValue:
        return evaluate_hand(self.player)

    def __str__(self) -> str:
        return f"{self.player[0]} {self.player[1]} vs {self.upcard}"


@dataclass(frozen=True)
class Feedback:
    """Outcome of the last answer, shown until the next scenario."""

    chosen: Action
    correct: Action

    @property
    def is_correct(self) -> bool:
        return self.chosen == self.correct


def generate_scenario(rng: Random | None = None) -> Scenario:
    """
    Deal a random two-card hand and dealer upcard.

    Naturals are never quizzed: a hand totalling 21 is redrawn.
    """
    rng = rng or Random()
    while True:
        player = (draw_random_rank(rng), draw_random_rank(rng))
        upcard = draw_random_rank(rng).normalized
        if evaluate_hand(player).total != 21:
            return Scenario(player=player, upcard=upcard)
        logger.debug("Redrawing natural %s %s", *player)


class StrategySession:
    """
    Basic strategy drill using a state machine.

    A correct answer schedules an automatic advance to the next scenario;
    an incorrect one waits for ``next_scenario``.
    """

    # State machine states
    STATES = [s.name.lower() for s in StrategyState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "show_feedback", "source": "awaiting_answer", "dest": "feedback"},
        {"trigger": "deal_scenario", "source": ["awaiting_answer", "feedback"], "dest": "awaiting_answer"},
        {"trigger": "clear_feedback", "source": "feedback", "dest": "awaiting_answer"},
    ]

    def __init__(
        self,
        variant: Variant | str | None = None,
        scheduler: Scheduler | None = None,
        rng: Random | None = None,
        strategy: BasicStrategy | None = None,
        auto_advance_seconds: float | None = None,
        history_limit: int | None = None,
    ) -> None:
        """
        Initialize a strategy drill with a fresh scenario.

        Args:
            variant: Rule variant (defaults to the configured variant)
            scheduler: Runs the delayed auto-advance (asyncio by default)
            rng: Random number generator for scenarios
            strategy: Strategy tables to judge against
            auto_advance_seconds: Delay before advancing after a correct answer
            history_limit: Maximum number of history records kept
        """
        self._variant = _coerce_variant(variant or config.strategy.variant)
        self._rng = rng or Random()
        self._strategy = strategy or BasicStrategy()
        self._auto_advance_seconds = (
            config.strategy.auto_advance_seconds
            if auto_advance_seconds is None
            else auto_advance_seconds
        )
        self._history_limit = (
            config.strategy.history_limit if history_limit is None else history_limit
        )
        self._advance = TaskSlot(scheduler or AsyncioScheduler(), name="auto-advance")

        self.events = EventEmitter()
        self.stats = SessionStats()
        self.history: History[StrategyRecord] = History(self._history_limit)
        self.feedback: Feedback | None = None
        self.scenario = generate_scenario(self._rng)

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="awaiting_answer",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> StrategyState:
        """Get current drill state as enum."""
        return StrategyState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[DrillEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to drill events."""
        self.events.subscribe(handler, event_type)

    @property
    def variant(self) -> Variant:
        return self._variant

    @property
    def current_scenario(self) -> Scenario:
        return self.scenario

    @property
    def correct_action(self) -> Action:
        """Return the chart action for the current scenario and variant."""
        return self._strategy.get_action(
            self.scenario.hand, self.scenario.upcard, self._variant
        )

    @property
    def auto_advance_pending(self) -> bool:
        return self._advance.active

    def answer(self, action: Action | str) -> Feedback | None:
        """
        Judge an answer for the current scenario.

        Answers given while feedback is showing are ignored.

        Returns:
            The feedback, or None if the answer was ignored
        """
        chosen = action if isinstance(action, Action) else Action.from_string(action)
        if self.state != StrategyState.AWAITING_ANSWER:
            return None

        hand = self.scenario.hand
        correct = self._strategy.get_action(hand, self.scenario.upcard, self._variant)
        feedback = Feedback(chosen=chosen, correct=correct)

        # Arm the timer first so a scheduler error leaves the session untouched
        if feedback.is_correct:
            self._advance.schedule(self._auto_advance_seconds, self._auto_advance)
        else:
            self._advance.cancel()

        self.stats.record(feedback.is_correct)
        self.history.record(
            StrategyRecord(
                player=self.scenario.player,
                upcard=self.scenario.upcard,
                hand=hand,
                variant=self._variant,
                chosen=chosen,
                correct=correct,
            )
        )
        self.feedback = feedback
        self.show_feedback()

        self.events.emit_new(
            EventType.ANSWER_JUDGED,
            scenario=self.scenario,
            chosen=chosen,
            correct=correct,
            is_correct=feedback.is_correct,
        )
        return feedback

    def next_scenario(self) -> Scenario:
        """Cancel any pending auto-advance, clear feedback and deal a new hand."""
        self._advance.cancel()
        return self._deal()

    def _auto_advance(self) -> None:
        logger.debug("Auto-advancing after correct answer")
        self._deal()

    def _deal(self) -> Scenario:
        self.scenario = generate_scenario(self._rng)
        self.feedback = None
        self.deal_scenario()
        self.events.emit_new(EventType.SCENARIO_DEALT, scenario=self.scenario)
        return self.scenario

    def set_variant(self, variant: Variant | str) -> None:
        """Switch variant for future resolutions; score and history are kept."""
        variant = _coerce_variant(variant)
        if variant == self._variant:
            return
        self._variant = variant
        self.events.emit_new(EventType.VARIANT_CHANGED, variant=variant)

    def reset_session(self) -> None:
        """Zero the score and history and clear feedback, keeping the hand."""
        self._advance.cancel()
        stats, history = SessionStats(), History[StrategyRecord](self._history_limit)
        self.stats, self.history, self.feedback = stats, history, None
        if self.state == StrategyState.FEEDBACK:
            self.clear_feedback()
        logger.info("Strategy session reset")
        self.events.emit_new(EventType.SESSION_RESET, drill="strategy")


def _coerce_variant(variant: Variant | str) -> Variant:
    return variant if isinstance(variant, Variant) else Variant.from_string(variant)
