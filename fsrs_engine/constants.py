"""
FSRS Constants and Parameters

Enums, default parameters and fixed model constants in one place.
Defaults follow the FSRS v4 reference weights.
"""

from enum import IntEnum


# ---- Card States ----

class State(IntEnum):
    """Lifecycle state of a card."""
    NEW = 0         # Never reviewed
    LEARNING = 1    # First steps after introduction
    REVIEW = 2      # Graduated, scheduled in days
    RELEARNING = 3  # Forgotten during review, being relearned


# ---- Ratings ----

class Rating(IntEnum):
    """Rating recorded in a review log."""
    MANUAL = 0  # Manual reset (forget), not a review
    AGAIN = 1   # Retrieval failed
    HARD = 2    # Retrieved with high effort
    GOOD = 3    # Retrieved normally
    EASY = 4    # Retrieved fluently


class Grade(IntEnum):
    """The four ratings a user can give after a review."""
    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4

    @property
    def rating(self) -> Rating:
        return Rating(int(self))


# ---- Forgetting Curve ----

DECAY = -0.5
FACTOR = 0.9 ** (1 / DECAY) - 1  # R(S, S) = 0.9


# ---- Default Parameters ----

DEFAULT_REQUEST_RETENTION = 0.9
DEFAULT_MAXIMUM_INTERVAL = 36500
DEFAULT_ENABLE_FUZZ = False
DEFAULT_WEIGHTS = (
    0.4, 0.6, 2.4, 5.8,
    4.93, 0.94, 0.86, 0.01,
    1.49, 0.14, 0.94,
    2.18, 0.05, 0.34, 1.26,
    0.29, 2.61,
)
WEIGHT_COUNT = 17


# ---- Weight Indices ----
# w[0..3] are the initial stabilities for AGAIN..EASY

W_INIT_DIFFICULTY = 4       # D0 for GOOD, also the mean-reversion target
W_INIT_DIFFICULTY_STEP = 5  # D0 change per grade step
W_DIFFICULTY_STEP = 6       # D change per grade step on review
W_MEAN_REVERSION = 7
W_RECALL_SCALE = 8          # e^w8
W_RECALL_STABILITY_DECAY = 9
W_RECALL_RETRIEVABILITY = 10
W_FORGET_SCALE = 11
W_FORGET_DIFFICULTY = 12
W_FORGET_STABILITY = 13
W_FORGET_RETRIEVABILITY = 14
W_HARD_PENALTY = 15


# ---- Short-Term Steps ----
# Due offsets in minutes for cards that stay in (re)learning

NEW_AGAIN_MINUTES = 1
NEW_HARD_MINUTES = 5
NEW_GOOD_MINUTES = 10
AGAIN_MINUTES = 5
HARD_MINUTES = 10


# ---- Fuzz ----

FUZZ_MIN_INTERVAL = 2.5  # Intervals below this are never fuzzed
