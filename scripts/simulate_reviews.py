"""
Replay a sequence of ratings on one card and print the schedule.

Each review happens on the card's due date (or --step-days after the
previous review if given), using only the scheduling engine.

Usage:
    # Good, Good, Again, Good with default parameters
    python -m scripts.simulate_reviews good good again good

    # Custom retention, fixed two-day steps
    python -m scripts.simulate_reviews 3 3 4 --retention 0.8 --step-days 2
"""

import argparse
from datetime import datetime, timedelta, timezone

from internalize import fsrs


def parse_rating(raw: str) -> fsrs.Rating:
    """Accept 1-4 or again/hard/good/easy."""
    if raw.isdigit():
        return fsrs.coerce_rating(int(raw))
    try:
        return fsrs.Rating[raw.upper()]
    except KeyError:
        raise argparse.ArgumentTypeError(f"Unknown rating: {raw}") from None


def display_step(index: int, rating: fsrs.Rating, result: fsrs.SchedulingResult) -> None:
    card = result.card
    log = result.review_log
    print(
        f"{index:>3}. {fsrs.get_rating_label(rating):<5} "
        f"{fsrs.get_state_label(log.state):>10} -> {fsrs.get_state_label(card.state):<10} "
        f"S={card.stability:8.3f}  D={card.difficulty:5.2f}  "
        f"elapsed={log.elapsed_days:<4} interval={fsrs.format_interval(card.scheduled_days):<10} "
        f"lapses={card.lapses}"
    )


def main():
    parser = argparse.ArgumentParser(description="Replay ratings through the FSRS scheduler")
    parser.add_argument(
        "ratings",
        nargs="+",
        type=parse_rating,
        help="Ratings in order (1-4 or again/hard/good/easy)"
    )
    parser.add_argument(
        "--retention",
        type=float,
        default=None,
        help="Request retention in (0, 1] (default: from environment or 0.9)"
    )
    parser.add_argument(
        "--maximum-interval",
        type=int,
        default=None,
        help="Maximum interval in days (default: from environment or 36500)"
    )
    parser.add_argument(
        "--step-days",
        type=int,
        default=None,
        help="Days between reviews (default: review when due)"
    )

    args = parser.parse_args()

    params = fsrs.FSRSParameters.from_env()
    overrides = {}
    if args.retention is not None:
        overrides["request_retention"] = args.retention
    if args.maximum_interval is not None:
        overrides["maximum_interval"] = args.maximum_interval
    if overrides:
        params = params.with_overrides(**overrides)

    scheduler = fsrs.FSRS(params)
    now = datetime.now(timezone.utc).replace(microsecond=0)
    card = fsrs.create_new_card(now)

    print("=" * 100)
    print(f"FSRS replay: retention={params.request_retention} max_interval={params.maximum_interval}")
    print("=" * 100)

    for index, rating in enumerate(args.ratings, 1):
        result = scheduler.schedule(card, rating, now)
        display_step(index, rating, result)
        card = result.card
        if args.step_days is not None:
            now = now + timedelta(days=args.step_days)
        else:
            now = card.due

    print("-" * 100)
    preview = scheduler.get_preview(card, now)
    labels = ", ".join(f"{name}: {item['label']}" for name, item in preview.as_dict().items())
    print(f"Next review ({now.date().isoformat()}): {labels}")


if __name__ == "__main__":
    main()
