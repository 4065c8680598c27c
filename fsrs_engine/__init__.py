"""
FSRS - Free Spaced Repetition Scheduler

Scheduling engine for a single flashcard.

This package implements the FSRS v4 algorithm with:
- Memory state per card (Stability, Difficulty, Retrievability)
- Power forgetting curve: R = (1 + FACTOR * t / S)^DECAY
- Card lifecycle: NEW -> LEARNING -> REVIEW <-> RELEARNING
- Deterministic interval fuzzing
- Rollback and forget with auditable review logs

Quick start:
    import fsrs_engine as fsrs

    card = fsrs.new_card()

    # All four possible outcomes of reviewing now
    outcomes = fsrs.schedule(card, now)
    card, log = outcomes[fsrs.Grade.GOOD]

    # Undo it
    card = fsrs.rollback(card, log)
"""

# Core scheduler API
from fsrs_engine.scheduler import (
    schedule,
    review,
    current_retrievability,
    retrievability_percent,
)
from fsrs_engine.reversal import rollback, forget

# Configuration
from fsrs_engine.parameters import Parameters, DEFAULT_PARAMETERS

# Records
from fsrs_engine.memory_state import (
    Card,
    ReviewLog,
    RecordLogItem,
    new_card,
)

# Enums and constants
from fsrs_engine.constants import (
    Grade,
    Rating,
    State,
    DECAY,
    FACTOR,
    DEFAULT_WEIGHTS,
)

# Errors
from fsrs_engine.exceptions import (
    FSRSError,
    InvalidConfig,
    InvalidRating,
    UnknownState,
)


__all__ = [
    # Core algorithm
    "schedule",
    "review",
    "current_retrievability",
    "retrievability_percent",
    "rollback",
    "forget",

    # Configuration
    "Parameters",
    "DEFAULT_PARAMETERS",

    # Records
    "Card",
    "ReviewLog",
    "RecordLogItem",
    "new_card",

    # Enums
    "Grade",
    "Rating",
    "State",

    # Constants
    "DECAY",
    "FACTOR",
    "DEFAULT_WEIGHTS",

    # Errors
    "FSRSError",
    "InvalidConfig",
    "InvalidRating",
    "UnknownState",
]
