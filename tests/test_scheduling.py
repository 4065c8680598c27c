from datetime import timedelta

import pytest

from fsrs_engine import Card, Grade, Rating, State, UnknownState
from fsrs_engine.scheduling import TRANSITIONS, SchedulingCards, next_state


@pytest.mark.parametrize("state, expected", [
    (State.NEW, [State.LEARNING, State.LEARNING, State.LEARNING, State.REVIEW]),
    (State.LEARNING, [State.LEARNING, State.LEARNING, State.REVIEW, State.REVIEW]),
    (State.REVIEW, [State.RELEARNING, State.REVIEW, State.REVIEW, State.REVIEW]),
    (State.RELEARNING, [State.RELEARNING, State.RELEARNING, State.REVIEW, State.REVIEW]),
])
def test_transition_table(state, expected):
    assert [next_state(state, grade) for grade in Grade] == expected


def test_transition_table_is_complete():
    assert set(TRANSITIONS) == set(State)
    for row in TRANSITIONS.values():
        assert set(row) == set(Grade)


def test_unknown_state_has_no_transition():
    with pytest.raises(UnknownState):
        next_state(9, Grade.GOOD)


def test_from_card_advances_copies(review_card, now):
    cards = SchedulingCards.from_card(review_card, now)

    for grade in Grade:
        candidate = cards[grade]
        assert candidate.elapsed_days == 10
        assert candidate.last_review == now
        assert candidate.reps == 5

    assert cards.prev_last_review == now - timedelta(days=10)
    assert cards.prev_elapsed_days == 8

    # Original untouched
    assert review_card.reps == 4
    assert review_card.elapsed_days == 8


def test_from_card_new_card_uses_due_as_prev_last_review(fresh_card, now):
    cards = SchedulingCards.from_card(fresh_card, now + timedelta(hours=3))

    assert cards.elapsed_days == 0
    assert cards.prev_last_review == fresh_card.due


def test_candidates_are_independent(review_card, now):
    cards = SchedulingCards.from_card(review_card, now)
    cards.again.stability = 99.0

    assert cards.hard.stability == 10.0
    assert review_card.stability == 10.0


def test_schedule_assigns_due_dates(learning_card, now):
    cards = SchedulingCards.from_card(learning_card, now).schedule(now, 0, 2, 3)

    assert cards.again.scheduled_days == 0
    assert cards.again.due == now + timedelta(minutes=5)
    assert cards.hard.due == now + timedelta(minutes=10)
    assert cards.good.due == now + timedelta(days=2)
    assert cards.easy.due == now + timedelta(days=3)


def test_schedule_hard_interval_in_days(review_card, now):
    cards = SchedulingCards.from_card(review_card, now).schedule(now, 4, 9, 20)

    assert cards.hard.scheduled_days == 4
    assert cards.hard.due == now + timedelta(days=4)


def test_record_log_snapshots_original(review_card, now):
    records = SchedulingCards.from_card(review_card, now).update_state(State.REVIEW).record_log(review_card, now)

    assert list(records) == list(Grade)
    for grade, (card, log) in records.items():
        assert isinstance(card, Card)
        assert log.rating == Rating(int(grade))
        assert log.prev_due == review_card.due
        assert log.prev_stability == 10.0
        assert log.prev_difficulty == 5.0
        assert log.prev_elapsed_days == 8
        assert log.prev_scheduled_days == 10
        assert log.prev_state == State.REVIEW
        assert log.prev_last_review == review_card.last_review
        assert log.elapsed_days == 10
        assert log.review == now

    assert records[Grade.AGAIN].card.state == State.RELEARNING
