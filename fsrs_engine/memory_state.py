"""
Memory State - Cards, Review Logs and Time Helpers

Defines the records the engine operates on.

Key concepts:
- Card: the persisted scheduling state of one flashcard
- ReviewLog: an immutable snapshot of a card taken before a scheduling
  decision, enough to restore that card exactly
- RecordLogItem: a candidate card paired with its review log
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from typing import Any, NamedTuple, Optional

from fsrs_engine.constants import Rating, State
from fsrs_engine.exceptions import InvalidRating, UnknownState


def _as_int(value: Any) -> int:
    """int() that refuses bools and fractional floats instead of truncating them."""
    if isinstance(value, bool):
        raise TypeError(f"Expected an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"Expected an integer, got {value!r}")
    return int(value)


def coerce_state(value: Any) -> State:
    """
    Convert a stored state value (State, int or name) into a State.

    Raises:
        UnknownState: If the value is not one of the four states
    """
    if isinstance(value, State):
        return value
    if isinstance(value, str) and not value.isdigit():
        try:
            return State[value.upper()]
        except KeyError:
            raise UnknownState(f"Unknown state: {value!r}") from None
    try:
        return State(_as_int(value))
    except (TypeError, ValueError):
        raise UnknownState(f"Unknown state: {value!r}") from None


def coerce_rating(value: Any) -> Rating:
    """
    Convert a stored rating value (Rating, Grade, int or name) into a Rating.

    Raises:
        InvalidRating: If the value is not a known rating
    """
    if isinstance(value, Rating):
        return value
    if isinstance(value, str) and not value.isdigit():
        try:
            return Rating[value.upper()]
        except KeyError:
            raise InvalidRating(f"Unknown rating: {value!r}") from None
    try:
        return Rating(_as_int(value))
    except (TypeError, ValueError):
        raise InvalidRating(f"Unknown rating: {value!r}") from None


def days_between(later: datetime, earlier: datetime) -> int:
    """Whole days from `earlier` to `later` (partial days are dropped)."""
    return (later - earlier).days


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value)


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


@dataclass
class Card:
    """
    Scheduling state for a single card.

    The engine never mutates a Card it is given; every operation returns
    new Card values.
    """
    due: datetime  # Next scheduled review

    # Memory state
    stability: float = 0.0  # S, days until R drops to 90%
    difficulty: float = 0.0  # D, range 1-10 once reviewed

    # Review tracking
    elapsed_days: int = 0  # Days between the last two reviews
    scheduled_days: int = 0  # Interval chosen at the last review
    reps: int = 0
    lapses: int = 0  # REVIEW -> RELEARNING transitions
    state: State = State.NEW
    last_review: Optional[datetime] = None  # None until first review

    def __post_init__(self):
        """Normalize state values loaded from storage."""
        self.state = coerce_state(self.state)

    def copy(self) -> Card:
        return replace(self)

    def to_dict(self) -> dict:
        """Plain-dict form with ISO-8601 timestamps and int enums."""
        data = asdict(self)
        data["due"] = _format_timestamp(self.due)
        data["last_review"] = _format_timestamp(self.last_review)
        data["state"] = int(self.state)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Card:
        return cls(
            due=_parse_timestamp(data["due"]),
            stability=float(data.get("stability", 0.0)),
            difficulty=float(data.get("difficulty", 0.0)),
            elapsed_days=int(data.get("elapsed_days", 0)),
            scheduled_days=int(data.get("scheduled_days", 0)),
            reps=int(data.get("reps", 0)),
            lapses=int(data.get("lapses", 0)),
            state=coerce_state(data.get("state", State.NEW)),
            last_review=_parse_timestamp(data.get("last_review")),
        )


@dataclass(frozen=True)
class ReviewLog:
    """
    Audit entry for one scheduling decision (or a manual reset).

    Captures the card as it was before the decision so the decision can
    be rolled back.
    """
    rating: Rating

    # Card state before this review
    prev_due: datetime
    prev_stability: float
    prev_difficulty: float
    prev_elapsed_days: int
    prev_scheduled_days: int
    prev_state: State
    prev_last_review: Optional[datetime]

    # This review
    elapsed_days: int
    review: datetime

    def to_dict(self) -> dict:
        data = asdict(self)
        data["rating"] = int(self.rating)
        data["prev_state"] = int(self.prev_state)
        data["prev_due"] = _format_timestamp(self.prev_due)
        data["prev_last_review"] = _format_timestamp(self.prev_last_review)
        data["review"] = _format_timestamp(self.review)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> ReviewLog:
        return cls(
            rating=coerce_rating(data["rating"]),
            prev_due=_parse_timestamp(data["prev_due"]),
            prev_stability=float(data["prev_stability"]),
            prev_difficulty=float(data["prev_difficulty"]),
            prev_elapsed_days=int(data["prev_elapsed_days"]),
            prev_scheduled_days=int(data["prev_scheduled_days"]),
            prev_state=coerce_state(data["prev_state"]),
            prev_last_review=_parse_timestamp(data.get("prev_last_review")),
            elapsed_days=int(data["elapsed_days"]),
            review=_parse_timestamp(data["review"]),
        )


class RecordLogItem(NamedTuple):
    """A candidate card and the log that produced it."""
    card: Card
    log: ReviewLog


def new_card(now: Optional[datetime] = None) -> Card:
    """
    Initialize a card that has never been reviewed.

    Args:
        now: Creation time, used as the first due date (default: now, UTC)

    Returns:
        New Card in state NEW with all counters zeroed
    """
    if now is None:
        now = datetime.now(timezone.utc)

    return Card(due=now)
