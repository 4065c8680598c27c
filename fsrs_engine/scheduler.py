"""
Scheduler - FSRS Scheduling Engine

Pure FSRS scheduling (no persistence, no clock other than the optional
default for `now`).

Main workflow:
1. Fan the card out into four candidates (one per grade)
2. Move each candidate to its next state
3. Update stability/difficulty according to the card's current state
4. Pick intervals and due dates
5. Return every candidate with its review log

The caller picks the candidate matching the user's grade and persists
both the card and the log (the log is needed for rollback).
"""

from __future__ import annotations
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fsrs_engine import memory_model
from fsrs_engine.constants import (
    NEW_AGAIN_MINUTES,
    NEW_GOOD_MINUTES,
    NEW_HARD_MINUTES,
    Grade,
    Rating,
    State,
)
from fsrs_engine.exceptions import InvalidRating, UnknownState
from fsrs_engine.fuzz import make_seed
from fsrs_engine.memory_state import Card, RecordLogItem, coerce_rating, coerce_state, days_between
from fsrs_engine.parameters import DEFAULT_PARAMETERS, Parameters
from fsrs_engine.scheduling import SchedulingCards

logger = logging.getLogger(__name__)


def schedule(
    card: Card,
    now: Optional[datetime] = None,
    params: Optional[Parameters] = None
) -> Dict[Grade, RecordLogItem]:
    """
    Compute the outcome of every possible grade for a review at `now`.

    The given card is not modified.

    Args:
        card: Card being reviewed
        now: Review timestamp (defaults to now, UTC)
        params: Model parameters (defaults to Parameters())

    Returns:
        Dict mapping each Grade to (candidate card, review log)

    Raises:
        UnknownState: If card.state is not a known state
    """
    if params is None:
        params = DEFAULT_PARAMETERS
    if now is None:
        now = datetime.now(timezone.utc)

    state = coerce_state(card.state)
    cards = SchedulingCards.from_card(card, now).update_state(state)
    seed = make_seed(now, cards.again.reps)

    if state == State.NEW:
        _schedule_new(cards, now, params, seed)
    elif state in (State.LEARNING, State.RELEARNING):
        _schedule_learning(cards, now, params, seed)
    elif state == State.REVIEW:
        _schedule_review(cards, card, now, params, seed)
    else:
        raise UnknownState(f"Unknown state: {state!r}")

    logger.debug(
        "Scheduled %s card at %s: again=%s hard=%s good=%s easy=%s days",
        state.name,
        now.isoformat(),
        cards.again.scheduled_days,
        cards.hard.scheduled_days,
        cards.good.scheduled_days,
        cards.easy.scheduled_days,
    )

    return cards.record_log(card, now)


def review(
    card: Card,
    rating: Any,
    now: Optional[datetime] = None,
    params: Optional[Parameters] = None
) -> RecordLogItem:
    """
    Apply a single grade to a card.

    Convenience wrapper around `schedule` for callers that already know
    the user's answer.

    Raises:
        InvalidRating: If rating is MANUAL or not a known rating
    """
    rating = coerce_rating(rating)
    if rating == Rating.MANUAL:
        raise InvalidRating("MANUAL is not a review rating; use forget()")

    return schedule(card, now, params)[Grade(int(rating))]


def _init_ds(cards: SchedulingCards, params: Parameters):
    """Initial difficulty and stability after the first rating."""
    for grade in Grade:
        candidate = cards[grade]
        candidate.difficulty = memory_model.init_difficulty(params, grade)
        candidate.stability = memory_model.init_stability(params, grade)


def _next_ds(
    cards: SchedulingCards,
    params: Parameters,
    last_d: float,
    last_s: float,
    retrievability: float
):
    """
    Difficulty and stability after a review of a REVIEW card.

    AGAIN uses the forget formula; the other grades use recall.
    """
    for grade in Grade:
        candidate = cards[grade]
        candidate.difficulty = memory_model.next_difficulty(params, last_d, grade)
        if grade == Grade.AGAIN:
            candidate.stability = memory_model.next_forget_stability(
                params, last_d, last_s, retrievability
            )
        else:
            candidate.stability = memory_model.next_recall_stability(
                params, last_d, last_s, retrievability, grade
            )


def _schedule_new(cards: SchedulingCards, now: datetime, params: Parameters, seed: str):
    _init_ds(cards, params)

    cards.again.due = now + timedelta(minutes=NEW_AGAIN_MINUTES)
    cards.hard.due = now + timedelta(minutes=NEW_HARD_MINUTES)
    cards.good.due = now + timedelta(minutes=NEW_GOOD_MINUTES)

    easy_interval = memory_model.interval_from_stability(params, cards.easy.stability, seed)
    cards.easy.scheduled_days = easy_interval
    cards.easy.due = now + timedelta(days=easy_interval)


def _schedule_learning(cards: SchedulingCards, now: datetime, params: Parameters, seed: str):
    # Memory state is left as is while (re)learning
    hard_interval = 0
    good_interval = memory_model.interval_from_stability(params, cards.good.stability, seed)
    easy_interval = max(
        memory_model.interval_from_stability(params, cards.easy.stability, seed),
        good_interval + 1,
    )
    cards.schedule(now, hard_interval, good_interval, easy_interval)


def _schedule_review(
    cards: SchedulingCards,
    card: Card,
    now: datetime,
    params: Parameters,
    seed: str
):
    # Recall probability at this review, from the memory state before it
    retrievability = memory_model.retrievability(cards.elapsed_days, card.stability)
    _next_ds(cards, params, card.difficulty, card.stability, retrievability)
    cards.again.lapses += 1

    hard_interval = memory_model.interval_from_stability(params, cards.hard.stability, seed)
    good_interval = memory_model.interval_from_stability(params, cards.good.stability, seed)
    hard_interval = min(hard_interval, good_interval)
    good_interval = max(good_interval, hard_interval + 1)
    easy_interval = max(
        memory_model.interval_from_stability(params, cards.easy.stability, seed),
        good_interval + 1,
    )
    cards.schedule(now, hard_interval, good_interval, easy_interval)


def current_retrievability(card: Card, now: Optional[datetime] = None) -> Optional[float]:
    """
    Estimated recall probability of a REVIEW card at `now`, as a percentage.

    Args:
        card: Card to inspect
        now: Time of the estimate (defaults to now, UTC)

    Returns:
        Percentage rounded to 2 decimals, or None if the card is not in REVIEW
    """
    if coerce_state(card.state) != State.REVIEW:
        return None
    if now is None:
        now = datetime.now(timezone.utc)

    elapsed = 0
    if card.last_review is not None:
        elapsed = max(days_between(now, card.last_review), 0)

    return round(memory_model.retrievability(elapsed, card.stability) * 100, 2)


def retrievability_percent(card: Card, now: Optional[datetime] = None) -> str:
    """Display form of `current_retrievability`, e.g. "94.12%" or "90%" ("" if not in REVIEW)."""
    value = current_retrievability(card, now)
    if value is None:
        return ""
    return f"{value:g}%"
