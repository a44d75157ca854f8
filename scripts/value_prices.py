#!/usr/bin/env python3
"""
LOTSTATS - Single Item Valuation

Usage:
    python scripts/value_prices.py 120 135 128 990 131 125
    python scripts/value_prices.py --file prices.txt
    python scripts/value_prices.py --weight-method median --json 10 20 30 40 50
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lotstats.core.config import get_settings
from lotstats.core.exceptions import LotStatsError
from lotstats.core.types import WeightMethod
from lotstats.explain.generator import ExplanationGenerator
from lotstats.outliers.filter import filter_outliers_smart
from lotstats.trends.analyzer import analyze_price_trends
from lotstats.valuation.aggregator import estimate_market_value


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="LOTSTATS - Market value estimate from observed prices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/value_prices.py 120 135 128 990 131 125
    python scripts/value_prices.py --file prices.txt --json
    python scripts/value_prices.py --dates 2024-01 2024-02 2024-03 -- 10 12 15

Prices are read oldest first; trend analysis depends on that order.
        """,
    )

    parser.add_argument(
        "prices",
        nargs="*",
        type=float,
        help="Observed prices, oldest first",
    )

    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read prices from a file (one per line or comma separated)",
    )

    parser.add_argument(
        "--weight-method", "-m",
        type=str,
        choices=[m.value for m in WeightMethod],
        default=WeightMethod.HYBRID.value,
        help="How the final value is picked (default: hybrid)",
    )

    parser.add_argument(
        "--skip-outlier-filtering",
        action="store_true",
        help="Value raw prices without outlier filtering",
    )

    parser.add_argument(
        "--dates",
        type=str,
        nargs="+",
        default=None,
        help="Observation dates parallel to prices (enables seasonality check)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON instead of text",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args()


def read_prices_file(path: Path) -> list[float]:
    """Read prices separated by newlines and/or commas."""
    text = path.read_text()
    tokens = [t.strip() for line in text.splitlines() for t in line.split(",")]
    return [float(t) for t in tokens if t]


def main() -> int:
    """Main entry point."""
    args = parse_args()

    settings = get_settings()
    setup_logging("DEBUG" if args.verbose else settings.log_level)
    logger = logging.getLogger(__name__)

    prices = list(args.prices)
    if args.file:
        try:
            prices.extend(read_prices_file(Path(args.file)))
        except (OSError, ValueError) as e:
            logger.error(f"Could not read prices from {args.file}: {e}")
            return 1

    try:
        outliers = None
        if not args.skip_outlier_filtering:
            outliers = filter_outliers_smart(prices)

        estimate = estimate_market_value(
            prices,
            outliers,
            weight_method=args.weight_method,
        )
        trend = analyze_price_trends(prices, args.dates)
    except LotStatsError as e:
        logger.error(f"Invalid input: {e}")
        return 1

    if args.json:
        print(json.dumps(
            {
                "marketValue": estimate.to_dict(),
                "outliers": outliers.to_dict() if outliers else None,
                "trend": trend.to_dict(),
            },
            indent=2,
        ))
    else:
        explainer = ExplanationGenerator()
        print(explainer.generate_full_report(estimate, trend, outliers=outliers))

    return 0


if __name__ == "__main__":
    sys.exit(main())
