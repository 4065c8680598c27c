from datetime import datetime, timedelta, timezone

import pytest

from fsrs_engine import Card, Parameters, State, new_card


@pytest.fixture
def now():
    return datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def params():
    return Parameters()


@pytest.fixture
def fuzz_params():
    return Parameters(enable_fuzz=True)


@pytest.fixture
def fresh_card(now):
    return new_card(now)


@pytest.fixture
def learning_card(now):
    # Rated AGAIN on first sight, one hour ago
    return Card(
        due=now - timedelta(minutes=59),
        stability=0.4,
        difficulty=6.81,
        elapsed_days=0,
        scheduled_days=0,
        reps=1,
        lapses=0,
        state=State.LEARNING,
        last_review=now - timedelta(hours=1),
    )


@pytest.fixture
def review_card(now):
    # Reviewed 10 days ago with S=10, so R is exactly 0.9 now
    return Card(
        due=now,
        stability=10.0,
        difficulty=5.0,
        elapsed_days=8,
        scheduled_days=10,
        reps=4,
        lapses=1,
        state=State.REVIEW,
        last_review=now - timedelta(days=10),
    )


@pytest.fixture
def relearning_card(now):
    return Card(
        due=now - timedelta(minutes=1),
        stability=2.87,
        difficulty=6.7,
        elapsed_days=10,
        scheduled_days=0,
        reps=5,
        lapses=2,
        state=State.RELEARNING,
        last_review=now - timedelta(minutes=6),
    )
