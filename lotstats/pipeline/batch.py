"""
Batch valuation pipeline.

Coordinates the full flow for one or many items:
Validate → Filter outliers → Aggregate value → Analyze trend → Explain

Each item is independent and every engine call is pure, so items fan out
across a thread pool with no coordination. One failing item is logged
and skipped; it never stops the batch.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

import pandas as pd

from lotstats.core.config import Settings, ValuationConfig, get_settings, load_config
from lotstats.core.exceptions import InsufficientDataError, LotStatsError
from lotstats.core.types import MarketValueEstimate, OutlierResult, TrendReport
from lotstats.explain.generator import ExplanationGenerator
from lotstats.guardrails.validators import validate_prices
from lotstats.outliers.filter import filter_outliers_smart
from lotstats.trends.analyzer import analyze_price_trends
from lotstats.valuation.aggregator import estimate_market_value


logger = logging.getLogger(__name__)


FRAME_COLUMNS = [
    "item_id",
    "value",
    "confidence",
    "method",
    "sample_size",
    "median",
    "mean",
    "outlier_filtered",
    "outlier_method",
    "outlier_count",
    "trend",
    "volatility",
    "seasonality",
]

SKIPPED_OUTLIER_METHOD = "skipped"


@dataclass
class ItemValuation:
    """Result of the pipeline for a single item."""

    item_id: str
    estimate: MarketValueEstimate
    outliers: OutlierResult | None  # None when filtering was skipped
    trend: TrendReport
    explanation: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "itemId": self.item_id,
            "marketValue": self.estimate.to_dict(),
            "outliers": self.outliers.to_dict() if self.outliers else None,
            "trend": self.trend.to_dict(),
            "explanation": self.explanation,
        }

    def to_row(self) -> dict[str, Any]:
        """Flatten into one table row."""
        factors = self.estimate.factors
        if self.outliers is None:
            outlier_method, outlier_count = SKIPPED_OUTLIER_METHOD, 0
        else:
            outlier_method = self.outliers.method.value
            outlier_count = self.outliers.statistics.outlier_count

        return {
            "item_id": self.item_id,
            "value": self.estimate.value,
            "confidence": round(self.estimate.confidence, 4),
            "method": self.estimate.method,
            "sample_size": factors.sample_size,
            "median": factors.median,
            "mean": factors.mean,
            "outlier_filtered": factors.outlier_filtered,
            "outlier_method": outlier_method,
            "outlier_count": outlier_count,
            "trend": self.trend.trend.value,
            "volatility": self.trend.volatility.value,
            "seasonality": self.trend.seasonality,
        }


class BatchValuationPipeline:
    """
    Values items from their observed prices.

    Flow per item:
    1. Validate prices (reject NaN, infinities, negatives)
    2. Filter outliers with the configured strategy (unless skipped)
    3. Value the item from that same filter run with the configured
       weight method
    4. Analyze trend and volatility on the raw series
    5. Generate explanation
    """

    def __init__(
        self,
        settings: Settings | None = None,
        config: ValuationConfig | None = None,
        require_min_samples: bool = False,
    ) -> None:
        """
        Initialize batch pipeline.

        Args:
            settings: Application settings
            config: Valuation defaults (loaded from YAML if not provided)
            require_min_samples: If True, fail items with fewer prices than
                the configured min_sample_size instead of valuing them
        """
        self.settings = settings or get_settings()
        self.config = config or load_config("valuation")
        self.require_min_samples = require_min_samples
        self.explainer = ExplanationGenerator()

    def run(
        self,
        item_id: str,
        prices: Any,
        dates: Sequence[str] | None = None,
    ) -> ItemValuation:
        """
        Run the pipeline for a single item.

        Args:
            item_id: Caller's identifier for the item
            prices: Observed prices, oldest first
            dates: Optional observation dates parallel to prices

        Returns:
            ItemValuation with estimate, outliers, trend and explanation

        Raises:
            ValidationError: If prices are malformed
            InsufficientDataError: In strict mode, if too few prices
        """
        sample = validate_prices(prices)
        min_sample_size = self.config.min_sample_size

        if self.require_min_samples and len(sample) < min_sample_size:
            raise InsufficientDataError(
                "Not enough prices to value item",
                required=min_sample_size,
                available=len(sample),
                item_id=item_id,
            )

        outliers = None
        if not self.config.skip_outlier_filtering:
            outliers = filter_outliers_smart(
                sample,
                method=self.config.outlier_method,
                confidence_threshold=self.config.confidence_threshold,
                min_sample_size=min_sample_size,
            )

        estimate = estimate_market_value(
            sample,
            outliers,
            weight_method=self.config.weight_method,
            confidence_threshold=self.config.confidence_threshold,
        )
        trend = analyze_price_trends(sample, dates)

        explanation = self.explainer.generate_full_report(
            estimate,
            trend,
            outliers=outliers,
            title=item_id,
        )

        return ItemValuation(
            item_id=item_id,
            estimate=estimate,
            outliers=outliers,
            trend=trend,
            explanation=explanation,
        )

    def run_batch(
        self,
        items: Mapping[str, Any],
        dates: Mapping[str, Sequence[str]] | None = None,
    ) -> list[ItemValuation]:
        """
        Run the pipeline for many items in parallel.

        Args:
            items: Mapping of item id to observed prices
            dates: Optional mapping of item id to observation dates

        Returns:
            List of ItemValuation in input order (failed items omitted)
        """
        dates = dates or {}
        logger.info(
            f"Valuing {len(items)} items with {self.settings.max_workers} workers"
        )

        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
            futures: dict[str, Future[ItemValuation]] = {
                item_id: executor.submit(self.run, item_id, prices, dates.get(item_id))
                for item_id, prices in items.items()
            }

            results = []
            for item_id, future in futures.items():
                try:
                    results.append(future.result())
                except LotStatsError as e:
                    logger.warning(f"Valuation failed for {item_id}: {e}")
                except Exception as e:
                    logger.exception(f"Unexpected error valuing {item_id}: {e}")

        logger.info(f"Valued {len(results)}/{len(items)} items")
        return results

    @staticmethod
    def to_frame(results: Sequence[ItemValuation]) -> pd.DataFrame:
        """
        Tabulate results, one row per item.

        Args:
            results: Pipeline results

        Returns:
            DataFrame with FRAME_COLUMNS
        """
        return pd.DataFrame([r.to_row() for r in results], columns=FRAME_COLUMNS)

    def save_results(
        self,
        results: Sequence[ItemValuation],
        path: Path | None = None,
    ) -> Path:
        """
        Save results as CSV.

        Args:
            results: Pipeline results
            path: Output file (defaults to output_dir/valuations.csv)

        Returns:
            Path to saved file
        """
        path = path or self.settings.output_dir / "valuations.csv"
        path.parent.mkdir(parents=True, exist_ok=True)

        self.to_frame(results).to_csv(path, index=False)

        logger.info(f"Saved {len(results)} valuations to {path}")
        return path
