"""Drill sessions: basic strategy quiz, Hi-Lo counting and the timed drill."""

from trainer.drills.counting_session import CountingSession, GuessResult
from trainer.drills.events import DrillEvent, EventEmitter, EventType
from trainer.drills.scheduler import AsyncioScheduler, FrameScheduler, TaskSlot
from trainer.drills.state import CountingState, StrategyState
from trainer.drills.stats import CountRecord, History, SessionStats, StrategyRecord
from trainer.drills.strategy_session import (
    Feedback,
    Scenario,
    StrategySession,
    generate_scenario,
)
from trainer.drills.timed_drill import TimedDrill, TimedDrillSummary

__all__ = [
    "CountingSession",
    "GuessResult",
    "DrillEvent",
    "EventEmitter",
    "EventType",
    "AsyncioScheduler",
    "FrameScheduler",
    "TaskSlot",
    "CountingState",
    "StrategyState",
    "CountRecord",
    "History",
    "SessionStats",
    "StrategyRecord",
    "Feedback",
    "Scenario",
    "StrategySession",
    "generate_scenario",
    "TimedDrill",
    "TimedDrillSummary",
]
