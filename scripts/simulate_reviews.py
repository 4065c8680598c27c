"""
Simulate a sequence of reviews for one card.

Walks a fresh card through the given ratings, reviewing each time the
card comes due, and prints the state after every review. Useful for
eyeballing parameter changes.

Usage:
    # Default parameters
    python -m scripts.simulate_reviews good good hard again good

    # With fuzz and a lower target retention
    python -m scripts.simulate_reviews good easy good --fuzz --retention 0.85

    # Parameters from FSRS_* environment variables / .env
    python -m scripts.simulate_reviews good good --from-env
"""

import argparse
import logging
from datetime import datetime, timezone

import fsrs_engine as fsrs


def display_outcome(step: int, rating: fsrs.Grade, card: fsrs.Card) -> None:
    """Print one review outcome."""
    print(
        f"{step:>3}. {rating.name:<5} -> {card.state.name:<10} "
        f"S={card.stability:7.2f}  D={card.difficulty:5.2f}  "
        f"ivl={card.scheduled_days:>4}d  due={card.due:%Y-%m-%d %H:%M}  "
        f"reps={card.reps} lapses={card.lapses}"
    )


def main():
    parser = argparse.ArgumentParser(description="Simulate FSRS reviews for one card")
    parser.add_argument(
        "ratings",
        nargs="+",
        choices=[g.name.lower() for g in fsrs.Grade],
        help="Ratings to apply, in order"
    )
    parser.add_argument("--retention", type=float, default=None, help="Target retention (0-1)")
    parser.add_argument("--max-interval", type=int, default=None, help="Maximum interval in days")
    parser.add_argument("--fuzz", action="store_true", help="Enable interval fuzz")
    parser.add_argument("--from-env", action="store_true", help="Load parameters from FSRS_* env vars")
    parser.add_argument("--verbose", action="store_true", help="Show engine debug logs")

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.from_env:
        params = fsrs.Parameters.from_env()
    else:
        overrides = {"enable_fuzz": args.fuzz}
        if args.retention is not None:
            overrides["request_retention"] = args.retention
        if args.max_interval is not None:
            overrides["maximum_interval"] = args.max_interval
        params = fsrs.Parameters(**overrides)

    now = datetime.now(timezone.utc)
    card = fsrs.new_card(now)

    print("=" * 80)
    print(f"Simulating {len(args.ratings)} reviews (retention={params.request_retention}, fuzz={params.enable_fuzz})")
    print("=" * 80)

    for step, name in enumerate(args.ratings, 1):
        rating = fsrs.Grade[name.upper()]
        card, _ = fsrs.review(card, rating, card.due, params)
        display_outcome(step, rating, card)

    retention = fsrs.retrievability_percent(card, card.due)
    if retention:
        print(f"\nRetrievability when next due: {retention}")


if __name__ == "__main__":
    main()
