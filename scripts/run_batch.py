#!/usr/bin/env python3
"""
Batch valuation runner for LOTSTATS.

Values every item in a CSV of observed prices.

Input CSV columns:
    item_id  - item identifier
    price    - observed price
    date     - optional observation date (rows are kept in file order)

Usage:
    python scripts/run_batch.py listings.csv
    python scripts/run_batch.py listings.csv --output results/valuations.csv
"""

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from lotstats.core.config import get_settings
from lotstats.core.exceptions import ConfigurationError
from lotstats.pipeline.batch import BatchValuationPipeline


def load_items(path: Path) -> tuple[dict[str, list[float]], dict[str, list[str]]]:
    """
    Group observed prices by item.

    Args:
        path: CSV with item_id, price and optional date columns

    Returns:
        (prices by item, dates by item) - dates empty if no date column
    """
    df = pd.read_csv(path, dtype={"item_id": str})

    missing = {"item_id", "price"} - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in {path}: {sorted(missing)}")

    items: dict[str, list[float]] = {}
    dates: dict[str, list[str]] = {}

    for item_id, group in df.groupby("item_id", sort=False):
        items[item_id] = group["price"].tolist()
        if "date" in group.columns:
            dates[item_id] = group["date"].astype(str).tolist()

    return items, dates


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Value multiple items from a CSV of prices")
    parser.add_argument(
        "input",
        type=str,
        help="CSV with item_id,price[,date] rows",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output CSV (default: <output_dir>/valuations.csv)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail items with fewer prices than min_sample_size",
    )

    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        items, dates = load_items(Path(args.input))
    except (OSError, ValueError) as e:
        print(f"FAILED to read {args.input}: {e}")
        return 1

    try:
        pipeline = BatchValuationPipeline(settings=settings, require_min_samples=args.strict)
    except ConfigurationError as e:
        print(f"FAILED to load configuration: {e}")
        return 1

    print(f"\n{'='*60}")
    print(f"LOTSTATS - Batch Valuation")
    print(f"Items: {len(items)}")
    print(f"Strict: {args.strict}")
    print(f"{'='*60}\n")

    results = pipeline.run_batch(items, dates)

    for result in results:
        print(pipeline.explainer.generate_short_summary(
            result.estimate, result.trend, label=result.item_id
        ))

    output = Path(args.output) if args.output else None
    path = pipeline.save_results(results, output)

    # Summary
    print(f"\n{'='*60}")
    print(f"SUMMARY")
    print(f"  Success: {len(results)}")
    print(f"  Failed:  {len(items) - len(results)}")
    print(f"  Output:  {path}")
    print(f"{'='*60}\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
