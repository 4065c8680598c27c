"""
Reversal - Rollback and Forget

Operations that undo or reset scheduling, independent of the memory model:
- rollback: restore a card from the review log of its last review
- forget: send a card back to NEW, with a MANUAL log entry for the record
"""

from __future__ import annotations
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from fsrs_engine.constants import Rating, State
from fsrs_engine.exceptions import InvalidRating, UnknownState
from fsrs_engine.memory_state import Card, RecordLogItem, ReviewLog, coerce_rating, coerce_state, days_between

logger = logging.getLogger(__name__)


def rollback(card: Card, log: ReviewLog) -> Card:
    """
    Undo the review recorded in `log`.

    Args:
        card: Card produced by that review
        log: Review log emitted alongside it

    Returns:
        The card as it was before the review (a new Card)

    Raises:
        InvalidRating: If the log is a MANUAL (forget) entry or its rating is unknown
        UnknownState: If the log's previous state is not a known state
    """
    rating = coerce_rating(log.rating)
    if rating == Rating.MANUAL:
        raise InvalidRating("Cannot rollback a manual rating")

    prev_state = coerce_state(log.prev_state)

    if prev_state == State.NEW:
        prev_due = log.prev_last_review
        prev_last_review = None
        prev_lapses = 0
    elif prev_state in (State.LEARNING, State.RELEARNING, State.REVIEW):
        prev_due = log.prev_due
        prev_last_review = log.prev_last_review
        prev_lapses = card.lapses
        if rating == Rating.AGAIN and prev_state == State.REVIEW:
            prev_lapses -= 1
    else:
        raise UnknownState(f"Unknown state: {prev_state!r}")

    logger.debug(
        "Rolled back %s review, restoring %s state",
        rating.name,
        prev_state.name,
    )

    return replace(
        card,
        due=prev_due,
        stability=log.prev_stability,
        difficulty=log.prev_difficulty,
        elapsed_days=log.prev_elapsed_days,
        scheduled_days=log.prev_scheduled_days,
        reps=max(0, card.reps - 1),
        lapses=max(0, prev_lapses),
        state=prev_state,
        last_review=prev_last_review,
    )


def forget(
    card: Card,
    now: Optional[datetime] = None,
    reset_count: bool = False
) -> RecordLogItem:
    """
    Reset a card to NEW, due immediately.

    The returned log (rating MANUAL) keeps a snapshot of the card before
    the reset. It cannot be passed to `rollback`.

    Args:
        card: Card to reset
        now: Time of the reset (defaults to now, UTC)
        reset_count: Also zero reps and lapses

    Returns:
        (reset card, MANUAL review log)
    """
    if now is None:
        now = datetime.now(timezone.utc)

    state = coerce_state(card.state)
    if state == State.NEW or card.last_review is None:
        scheduled_days = 0
    else:
        scheduled_days = max(days_between(now, card.last_review), 0)

    forget_log = ReviewLog(
        rating=Rating.MANUAL,
        prev_due=card.due,
        prev_stability=card.stability,
        prev_difficulty=card.difficulty,
        prev_elapsed_days=card.elapsed_days,
        prev_scheduled_days=scheduled_days,
        prev_state=state,
        prev_last_review=card.last_review,
        elapsed_days=0,
        review=now,
    )

    forget_card = replace(
        card,
        due=now,
        stability=0.0,
        difficulty=0.0,
        elapsed_days=0,
        scheduled_days=0,
        reps=0 if reset_count else card.reps,
        lapses=0 if reset_count else card.lapses,
        state=State.NEW,
    )

    logger.debug("Forgot %s card at %s (reset_count=%s)", state.name, now.isoformat(), reset_count)

    return RecordLogItem(card=forget_card, log=forget_log)
