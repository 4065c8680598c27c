"""
Scheduling - State Transitions and Candidate Outcomes

Builds the four tentative next cards (one per grade) for a review:

1. Advance a copy of the card to "now" (elapsed days, last review, reps)
2. Move each copy to its next state via the transition table
3. Assign intervals and due dates (caller supplies the intervals)
4. Pair each candidate with a review log of the original card

The memory-model math lives in memory_model; this module only shapes
candidate cards.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict

from fsrs_engine.constants import AGAIN_MINUTES, HARD_MINUTES, Grade, State
from fsrs_engine.exceptions import UnknownState
from fsrs_engine.memory_state import Card, RecordLogItem, ReviewLog, coerce_state, days_between


# ---- State Transition Table ----
#
# |   State    |   AGAIN    |    HARD    |    GOOD    |    EASY    |
# | ---------- | ---------- | ---------- | ---------- | ---------- |
# |    NEW     |  LEARNING  |  LEARNING  |  LEARNING  |   REVIEW   |
# |  LEARNING  |  LEARNING  |  LEARNING  |   REVIEW   |   REVIEW   |
# |   REVIEW   | RELEARNING |   REVIEW   |   REVIEW   |   REVIEW   |
# | RELEARNING | RELEARNING | RELEARNING |   REVIEW   |   REVIEW   |

TRANSITIONS: Dict[State, Dict[Grade, State]] = {
    State.NEW: {
        Grade.AGAIN: State.LEARNING,
        Grade.HARD: State.LEARNING,
        Grade.GOOD: State.LEARNING,
        Grade.EASY: State.REVIEW,
    },
    State.LEARNING: {
        Grade.AGAIN: State.LEARNING,
        Grade.HARD: State.LEARNING,
        Grade.GOOD: State.REVIEW,
        Grade.EASY: State.REVIEW,
    },
    State.REVIEW: {
        Grade.AGAIN: State.RELEARNING,
        Grade.HARD: State.REVIEW,
        Grade.GOOD: State.REVIEW,
        Grade.EASY: State.REVIEW,
    },
    State.RELEARNING: {
        Grade.AGAIN: State.RELEARNING,
        Grade.HARD: State.RELEARNING,
        Grade.GOOD: State.REVIEW,
        Grade.EASY: State.REVIEW,
    },
}


def next_state(state: State, grade: Grade) -> State:
    """
    Look up the state a card moves to when given `grade` in `state`.

    Raises:
        UnknownState: If `state` is not one of the four card states
    """
    try:
        return TRANSITIONS[state][grade]
    except KeyError:
        raise UnknownState(f"Unknown state: {state!r}") from None


@dataclass
class SchedulingCards:
    """
    The four candidate outcomes of reviewing one card.

    Build with `SchedulingCards.from_card`; the original card is left
    untouched and each candidate is an independent copy.
    """
    again: Card
    hard: Card
    good: Card
    easy: Card

    # Snapshot of the original card for the review logs
    prev_last_review: datetime
    prev_elapsed_days: int

    @classmethod
    def from_card(cls, card: Card, now: datetime) -> SchedulingCards:
        """
        Advance a copy of `card` to `now` and fan it out into four candidates.

        - elapsed_days: 0 for NEW cards, else whole days since last review
        - last_review: now
        - reps: incremented
        """
        state = coerce_state(card.state)
        prev_last_review = card.last_review if card.last_review is not None else card.due

        if state == State.NEW or card.last_review is None:
            elapsed_days = 0
        else:
            elapsed_days = max(days_between(now, card.last_review), 0)

        advanced = card.copy()
        advanced.elapsed_days = elapsed_days
        advanced.last_review = now
        advanced.reps = card.reps + 1

        return cls(
            again=advanced.copy(),
            hard=advanced.copy(),
            good=advanced.copy(),
            easy=advanced.copy(),
            prev_last_review=prev_last_review,
            prev_elapsed_days=card.elapsed_days,
        )

    def __getitem__(self, grade: Grade) -> Card:
        return {
            Grade.AGAIN: self.again,
            Grade.HARD: self.hard,
            Grade.GOOD: self.good,
            Grade.EASY: self.easy,
        }[grade]

    @property
    def elapsed_days(self) -> int:
        """Elapsed days of the advanced card (same for every candidate)."""
        return self.again.elapsed_days

    def update_state(self, state: State) -> SchedulingCards:
        """Move every candidate to its next state from `state`."""
        for grade in Grade:
            self[grade].state = next_state(state, grade)
        return self

    def schedule(
        self,
        now: datetime,
        hard_interval: int,
        good_interval: int,
        easy_interval: int
    ) -> SchedulingCards:
        """
        Assign scheduled days and due dates for (re)learning and review cards.

        AGAIN always comes back in 5 minutes; HARD with a zero interval
        comes back in 10 minutes.
        """
        self.again.scheduled_days = 0
        self.hard.scheduled_days = hard_interval
        self.good.scheduled_days = good_interval
        self.easy.scheduled_days = easy_interval

        self.again.due = now + timedelta(minutes=AGAIN_MINUTES)
        if hard_interval > 0:
            self.hard.due = now + timedelta(days=hard_interval)
        else:
            self.hard.due = now + timedelta(minutes=HARD_MINUTES)
        self.good.due = now + timedelta(days=good_interval)
        self.easy.due = now + timedelta(days=easy_interval)
        return self

    def record_log(self, card: Card, now: datetime) -> Dict[Grade, RecordLogItem]:
        """
        Pair each candidate with a review log of the original `card`.

        Args:
            card: The card as it was before this review
            now: Review timestamp

        Returns:
            Dict keyed by every Grade
        """
        state = coerce_state(card.state)
        return {
            grade: RecordLogItem(
                card=self[grade],
                log=ReviewLog(
                    rating=grade.rating,
                    prev_due=card.due,
                    prev_stability=card.stability,
                    prev_difficulty=card.difficulty,
                    prev_elapsed_days=self.prev_elapsed_days,
                    prev_scheduled_days=card.scheduled_days,
                    prev_state=state,
                    prev_last_review=self.prev_last_review,
                    elapsed_days=self.elapsed_days,
                    review=now,
                ),
            )
            for grade in Grade
        }

