"""
Tests for the batch valuation pipeline.
"""

import logging

import pandas as pd
import pytest

from lotstats.core.config import Settings, ValuationConfig
from lotstats.core.exceptions import InsufficientDataError, ValidationError
from lotstats.core.types import OutlierMethod
from lotstats.pipeline import FRAME_COLUMNS, BatchValuationPipeline
from lotstats.valuation import calculate_weighted_market_value


@pytest.fixture
def pipeline(settings: Settings, valuation_config: ValuationConfig) -> BatchValuationPipeline:
    return BatchValuationPipeline(settings=settings, config=valuation_config)


class TestRun:
    """Tests for single-item valuation."""

    def test_heavy_tail_item(self, pipeline: BatchValuationPipeline, heavy_tail_prices: list[float]):
        """One item runs through filter, aggregator, trend and explainer."""
        result = pipeline.run("lot-1", heavy_tail_prices)

        assert result.item_id == "lot-1"
        assert result.estimate.value == 13.0
        assert result.estimate.method == "outlier_filtered_mad"
        assert result.outliers.method == OutlierMethod.MAD
        assert result.outliers.outliers == (1000.0,)
        assert result.explanation.startswith("=== lot-1 ===")

    def test_small_item_valued_by_default(self, pipeline: BatchValuationPipeline):
        """Short series still get a median fallback value."""
        result = pipeline.run("lot-2", [10, 20, 30])

        assert result.estimate.method == "median_fallback"
        assert result.outliers.method == OutlierMethod.INSUFFICIENT_DATA

    def test_strict_mode(self, settings: Settings, valuation_config: ValuationConfig):
        """Strict mode rejects short series."""
        strict = BatchValuationPipeline(settings=settings, config=valuation_config, require_min_samples=True)

        with pytest.raises(InsufficientDataError) as exc_info:
            strict.run("lot-3", [10, 20, 30])

        assert exc_info.value.required == 4
        assert exc_info.value.available == 3
        assert exc_info.value.item_id == "lot-3"

    def test_invalid_prices(self, pipeline: BatchValuationPipeline):
        """Malformed prices raise."""
        with pytest.raises(ValidationError):
            pipeline.run("lot-4", [10, float("nan")])

    def test_config_drives_weight_method(self, settings: Settings, linear_prices: list[float]):
        """weight_method from config is applied."""
        config = ValuationConfig.from_dict({"valuation": {"weight_method": "mean"}})
        result = BatchValuationPipeline(settings=settings, config=config).run("lot-5", linear_prices)

        assert result.estimate.method == "mean"

    def test_to_dict(self, pipeline: BatchValuationPipeline, linear_prices: list[float]):
        """Serialized result nests engine outputs."""
        data = pipeline.run("lot-6", linear_prices).to_dict()

        assert data["itemId"] == "lot-6"
        assert data["marketValue"]["value"] == 30
        assert data["trend"]["trend"] == "increasing"


class TestReportedFilterRun:
    """Tests that the reported outliers are the ones behind the value."""

    def test_configured_method_drives_value(self, settings: Settings, linear_prices: list[float]):
        """An explicit outlier method shows up in both the value and the row."""
        config = ValuationConfig.from_dict({"outliers": {"method": "mad"}})
        result = BatchValuationPipeline(settings=settings, config=config).run("lot-7", linear_prices)
        row = result.to_row()

        assert row["method"] == "outlier_filtered_mad"
        assert row["outlier_method"] == "mad"

    def test_skipped_filtering_reports_no_outliers(
        self,
        settings: Settings,
        heavy_tail_prices: list[float],
    ):
        """With filtering skipped nothing is reported as removed."""
        config = ValuationConfig.from_dict({"valuation": {"skip_outlier_filtering": True}})
        result = BatchValuationPipeline(settings=settings, config=config).run("lot-8", heavy_tail_prices)
        row = result.to_row()

        assert result.estimate.method == "median_fallback"
        assert result.outliers is None
        assert row["outlier_method"] == "skipped"
        assert row["outlier_count"] == 0
        assert result.to_dict()["outliers"] is None
        assert "OUTLIERS:" not in result.explanation

    def test_default_config_matches_one_call_estimate(
        self,
        pipeline: BatchValuationPipeline,
        heavy_tail_prices: list[float],
    ):
        """Default config values items exactly like calculate_weighted_market_value."""
        result = pipeline.run("lot-9", heavy_tail_prices)

        assert result.estimate == calculate_weighted_market_value(heavy_tail_prices)
        assert result.estimate.method == f"outlier_filtered_{result.outliers.method.value}"


class TestRunBatch:
    """Tests for multi-item valuation."""

    def test_order_preserved_and_failures_skipped(
        self,
        pipeline: BatchValuationPipeline,
        linear_prices: list[float],
        heavy_tail_prices: list[float],
        caplog,
    ):
        """Results follow input order; a bad item is logged and skipped."""
        items = {
            "a": linear_prices,
            "bad": [10.0, float("nan")],
            "b": heavy_tail_prices,
        }

        with caplog.at_level(logging.WARNING):
            results = pipeline.run_batch(items)

        assert [r.item_id for r in results] == ["a", "b"]
        assert "Valuation failed for bad" in caplog.text

    def test_unexpected_error_does_not_stop_batch(
        self,
        pipeline: BatchValuationPipeline,
        linear_prices: list[float],
        monkeypatch,
        caplog,
    ):
        """A non-LotStatsError in one item is logged and the rest survive."""
        run = pipeline.run

        def flaky_run(item_id, prices, dates=None):
            if item_id == "boom":
                raise RuntimeError("disk on fire")
            return run(item_id, prices, dates)

        monkeypatch.setattr(pipeline, "run", flaky_run)

        with caplog.at_level(logging.WARNING):
            results = pipeline.run_batch({"a": linear_prices, "boom": linear_prices, "b": [5.0]})

        assert [r.item_id for r in results] == ["a", "b"]
        assert "Unexpected error valuing boom" in caplog.text

    def test_huge_int_item_skipped(self, pipeline: BatchValuationPipeline):
        """An int too large for a float fails validation for that item only."""
        results = pipeline.run_batch({"a": [10, 20, 30, 40], "b": [1, 2, 10**400]})

        assert [r.item_id for r in results] == ["a"]

    def test_dates_passed_per_item(self, pipeline: BatchValuationPipeline):
        """Dates mapping feeds seasonality."""
        items = {"s": [10, 20, 10, 20, 10, 20]}
        dates = {"s": ["d1", "d2", "d3", "d4", "d5", "d6"]}

        results = pipeline.run_batch(items, dates)

        assert results[0].trend.seasonality is True

    def test_empty_batch(self, pipeline: BatchValuationPipeline):
        """No items, no results."""
        assert pipeline.run_batch({}) == []


class TestOutput:
    """Tests for tabulation and saving."""

    def test_to_frame(self, pipeline: BatchValuationPipeline, linear_prices: list[float]):
        """One row per item with fixed columns."""
        results = pipeline.run_batch({"a": linear_prices, "b": [5.0]})
        frame = BatchValuationPipeline.to_frame(results)

        assert list(frame.columns) == FRAME_COLUMNS
        assert list(frame["item_id"]) == ["a", "b"]
        assert frame.loc[1, "value"] == 5.0

    def test_save_results(self, pipeline: BatchValuationPipeline, settings: Settings, linear_prices: list[float]):
        """CSV is written under output_dir by default."""
        results = pipeline.run_batch({"a": linear_prices})
        path = pipeline.save_results(results)

        assert path == settings.output_dir / "valuations.csv"
        saved = pd.read_csv(path)
        assert saved.loc[0, "item_id"] == "a"
        assert saved.loc[0, "value"] == 30
