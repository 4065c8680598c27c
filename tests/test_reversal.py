from dataclasses import replace
from datetime import timedelta

import pytest

from fsrs_engine import (
    Grade,
    InvalidRating,
    Rating,
    State,
    UnknownState,
    forget,
    rollback,
    schedule,
)


@pytest.mark.parametrize("card_fixture", ["fresh_card", "learning_card", "review_card", "relearning_card"])
@pytest.mark.parametrize("grade", list(Grade))
def test_rollback_restores_card(request, card_fixture, grade, now):
    card = request.getfixturevalue(card_fixture)
    next_card, log = schedule(card, now)[grade]

    assert rollback(next_card, log) == card


def test_rollback_after_several_reviews(fresh_card, now):
    history = [fresh_card]
    logs = []
    card, when = fresh_card, now
    for grade in (Grade.GOOD, Grade.GOOD, Grade.AGAIN, Grade.GOOD):
        card, log = schedule(card, when)[grade]
        history.append(card)
        logs.append(log)
        when = card.due

    for previous, log in zip(reversed(history[:-1]), reversed(logs)):
        card = rollback(card, log)
        assert card == previous


def test_rollback_new_card_clears_last_review(fresh_card, now):
    next_card, log = schedule(fresh_card, now)[Grade.GOOD]
    restored = rollback(next_card, log)

    assert restored.state == State.NEW
    assert restored.last_review is None
    assert restored.due == fresh_card.due
    assert restored.lapses == 0


def test_rollback_review_again_removes_lapse(review_card, now):
    next_card, log = schedule(review_card, now)[Grade.AGAIN]

    assert next_card.lapses == 2
    assert rollback(next_card, log).lapses == 1


def test_rollback_lapses_never_negative(review_card, now):
    next_card, log = schedule(replace(review_card, lapses=0), now)[Grade.AGAIN]

    assert rollback(replace(next_card, lapses=0), log).lapses == 0


def test_rollback_reps_never_negative(learning_card, now):
    next_card, log = schedule(learning_card, now)[Grade.HARD]

    assert rollback(replace(next_card, reps=0), log).reps == 0


def test_rollback_does_not_mutate(review_card, now):
    next_card, log = schedule(review_card, now)[Grade.GOOD]
    before = next_card.copy()

    rollback(next_card, log)

    assert next_card == before


def test_rollback_rejects_manual_log(review_card, now):
    reset_card, log = forget(review_card, now)

    with pytest.raises(InvalidRating):
        rollback(reset_card, log)


def test_rollback_rejects_manual_rating_name(review_card, now):
    next_card, log = schedule(review_card, now)[Grade.GOOD]

    with pytest.raises(InvalidRating):
        rollback(next_card, replace(log, rating="manual"))


def test_rollback_accepts_rating_name(review_card, now):
    next_card, log = schedule(review_card, now)[Grade.AGAIN]

    assert rollback(next_card, replace(log, rating="again")) == review_card


def test_rollback_rejects_unknown_state(review_card, now):
    next_card, log = schedule(review_card, now)[Grade.GOOD]

    with pytest.raises(UnknownState):
        rollback(next_card, replace(log, prev_state=8))


def test_forget_keeps_counts(review_card, now):
    reset_card, log = forget(review_card, now)

    assert reset_card.state == State.NEW
    assert reset_card.due == now
    assert reset_card.stability == 0
    assert reset_card.difficulty == 0
    assert reset_card.elapsed_days == 0
    assert reset_card.scheduled_days == 0
    assert reset_card.reps == 4
    assert reset_card.lapses == 1
    assert reset_card.last_review == review_card.last_review


def test_forget_reset_count(review_card, now):
    reset_card, _ = forget(review_card, now, reset_count=True)

    assert reset_card.state == State.NEW
    assert reset_card.stability == 0
    assert reset_card.difficulty == 0
    assert reset_card.reps == 0
    assert reset_card.lapses == 0


def test_forget_log(review_card, now):
    _, log = forget(review_card, now + timedelta(hours=5))

    assert log.rating == Rating.MANUAL
    assert log.prev_due == review_card.due
    assert log.prev_stability == 10.0
    assert log.prev_difficulty == 5.0
    assert log.prev_elapsed_days == 8
    assert log.prev_scheduled_days == 10  # days since last review
    assert log.prev_state == State.REVIEW
    assert log.prev_last_review == review_card.last_review
    assert log.elapsed_days == 0
    assert log.review == now + timedelta(hours=5)


def test_forget_new_card(fresh_card, now):
    reset_card, log = forget(fresh_card, now + timedelta(days=3))

    assert log.prev_scheduled_days == 0
    assert log.prev_last_review is None
    assert reset_card.due == now + timedelta(days=3)


def test_forget_does_not_mutate(review_card, now):
    before = review_card.copy()

    forget(review_card, now, reset_count=True)

    assert review_card == before
