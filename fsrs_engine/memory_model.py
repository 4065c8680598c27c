"""
Memory Model - Stability, Difficulty and Retrievability

Implements the FSRS v4 retention-decay formulas. Every function is pure:
it reads the given Parameters and returns a number.

Key principles:
- Initial stability and difficulty depend only on the first grade
- Difficulty drifts with each grade and reverts toward the GOOD baseline
- Successful recall grows stability most when recall was unlikely
- Forgetting resets stability to a fraction of its old value

Ref: https://github.com/open-spaced-repetition/fsrs4anki/wiki/The-Algorithm
"""

from __future__ import annotations
import math
from typing import Optional

from fsrs_engine.constants import (
    DECAY,
    FACTOR,
    W_DIFFICULTY_STEP,
    W_FORGET_DIFFICULTY,
    W_FORGET_RETRIEVABILITY,
    W_FORGET_SCALE,
    W_FORGET_STABILITY,
    W_HARD_PENALTY,
    W_INIT_DIFFICULTY,
    W_INIT_DIFFICULTY_STEP,
    W_MEAN_REVERSION,
    W_RECALL_RETRIEVABILITY,
    W_RECALL_SCALE,
    W_RECALL_STABILITY_DECAY,
    Grade,
)
from fsrs_engine.fuzz import apply_fuzz
from fsrs_engine.parameters import Parameters


def init_stability(params: Parameters, grade: Grade) -> float:
    """
    Stability after the first rating.

    Formula: S0(G) = max(w[G-1], 0.1)
    """
    return max(params.weights[int(grade) - 1], 0.1)


def init_difficulty(params: Parameters, grade: Grade) -> float:
    """
    Difficulty after the first rating.

    Formula: D0(G) = w4 - w5 * (G - 3), constrained to [1, 10]
    """
    w = params.weights
    return constrain_difficulty(
        w[W_INIT_DIFFICULTY] - w[W_INIT_DIFFICULTY_STEP] * (int(grade) - 3)
    )


def constrain_difficulty(difficulty: float) -> float:
    """Round to 2 decimals and clip to [1, 10]."""
    return min(max(round(difficulty, 2), 1), 10)


def mean_reversion(params: Parameters, init: float, current: float) -> float:
    """Pull `current` toward `init` by w7 to avoid difficulty drifting to 10."""
    w7 = params.weights[W_MEAN_REVERSION]
    return w7 * init + (1 - w7) * current


def next_difficulty(params: Parameters, difficulty: float, grade: Grade) -> float:
    """
    Difficulty after a review.

    Formula:
        next_d = D - w6 * (G - 3)
        D' = w7 * w4 + (1 - w7) * next_d, constrained to [1, 10]

    Args:
        params: Model parameters
        difficulty: Difficulty before the review
        grade: Grade given

    Returns:
        New difficulty in [1, 10]
    """
    w = params.weights
    next_d = difficulty - w[W_DIFFICULTY_STEP] * (int(grade) - 3)
    return constrain_difficulty(
        mean_reversion(params, w[W_INIT_DIFFICULTY], next_d)
    )


def next_recall_stability(
    params: Parameters,
    difficulty: float,
    stability: float,
    retrievability: float,
    grade: Grade
) -> float:
    """
    Stability after a successful review (HARD, GOOD or EASY).

    Formula:
        S' = S * (1 + e^w8 * (11 - D) * S^-w9 * (e^(w10 * (1 - R)) - 1)
                  * hard_penalty * easy_bonus)

    hard_penalty is w15 for HARD and easy_bonus is w15 for EASY (1 otherwise).
    EASY reads w15, not w16.

    Args:
        params: Model parameters
        difficulty: Difficulty before the review
        stability: Stability before the review, must be > 0
        retrievability: Recall probability at review time
        grade: Grade given

    Returns:
        New stability
    """
    w = params.weights
    hard_penalty = w[W_HARD_PENALTY] if grade == Grade.HARD else 1
    easy_bonus = w[W_HARD_PENALTY] if grade == Grade.EASY else 1
    return stability * (
        1
        + math.exp(w[W_RECALL_SCALE])
        * (11 - difficulty)
        * math.pow(stability, -w[W_RECALL_STABILITY_DECAY])
        * (math.exp(w[W_RECALL_RETRIEVABILITY] * (1 - retrievability)) - 1)
        * hard_penalty
        * easy_bonus
    )


def next_forget_stability(
    params: Parameters,
    difficulty: float,
    stability: float,
    retrievability: float
) -> float:
    """
    Stability after a failed review (AGAIN).

    Formula:
        S' = w11 * D^-w12 * ((S + 1)^w13 - 1) * e^(w14 * (1 - R)), rounded to 2 decimals
    """
    w = params.weights
    return round(
        w[W_FORGET_SCALE]
        * math.pow(difficulty, -w[W_FORGET_DIFFICULTY])
        * (math.pow(stability + 1, w[W_FORGET_STABILITY]) - 1)
        * math.exp((1 - retrievability) * w[W_FORGET_RETRIEVABILITY]),
        2,
    )


def retrievability(elapsed_days: float, stability: float) -> float:
    """
    Probability of recall after `elapsed_days` without review.

    Formula: R(t, S) = (1 + FACTOR * t / S)^DECAY

    Interpretation:
    - Immediately after review: R = 1.0
    - After S days: R = 0.9
    - Decays smoothly toward 0 as t grows

    Args:
        elapsed_days: Days since the last review (>= 0)
        stability: Current stability in days (> 0)

    Returns:
        Retrievability in (0, 1]
    """
    return math.pow(1 + FACTOR * elapsed_days / stability, DECAY)


def interval_from_stability(
    params: Parameters,
    stability: float,
    seed: Optional[str] = None
) -> int:
    """
    Interval in whole days at which recall drops to the requested retention.

    The raw interval S * interval_modifier is fuzzed (when enabled and a
    seed is given), rounded and clipped to [1, maximum_interval].

    Args:
        params: Model parameters
        stability: Stability in days
        seed: Fuzz seed for this review (see fuzz.make_seed)

    Returns:
        Interval in days
    """
    raw = apply_fuzz(stability * params.interval_modifier, seed, params.enable_fuzz)
    return int(min(max(round(raw), 1), params.maximum_interval))
