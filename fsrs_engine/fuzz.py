"""
Fuzz - Deterministic Interval Jitter

Spreads due dates of cards reviewed together so they don't keep coming
due on the same day. The jitter is drawn from a PRNG seeded per review,
so the same review always produces the same interval.
"""

from __future__ import annotations
import math
import random
from datetime import datetime
from typing import Optional

from fsrs_engine.constants import FUZZ_MIN_INTERVAL


def make_seed(now: datetime, reps: int) -> str:
    """Seed for one review: the review time followed by the card's rep count."""
    return f"{now.isoformat()}{reps}"


def apply_fuzz(interval: float, seed: Optional[str], enable_fuzz: bool) -> float:
    """
    Apply fuzz to a raw interval.

    Formula:
        min_ivl = max(2, round(ivl * 0.95 - 1))
        max_ivl = round(ivl * 1.05 + 1)
        fuzzed = floor(u * (max_ivl - min_ivl + 1) + min_ivl),  u ~ U[0, 1) from seed

    Intervals below 2.5 days, a disabled fuzz or a missing seed leave the
    interval unchanged.

    Args:
        interval: Raw interval in days
        seed: Per-review seed (see make_seed)
        enable_fuzz: Parameters.enable_fuzz

    Returns:
        Fuzzed interval in days
    """
    if not enable_fuzz or interval < FUZZ_MIN_INTERVAL or seed is None:
        return interval

    # random.Random hashes str seeds with SHA-512, independent of PYTHONHASHSEED
    fuzz_factor = random.Random(seed).random()

    min_ivl = max(2, round(interval * 0.95 - 1))
    max_ivl = round(interval * 1.05 + 1)
    return math.floor(fuzz_factor * (max_ivl - min_ivl + 1) + min_ivl)
