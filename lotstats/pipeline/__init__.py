"""Pipeline module for batch valuation."""

from lotstats.pipeline.batch import FRAME_COLUMNS, BatchValuationPipeline, ItemValuation

__all__ = ["FRAME_COLUMNS", "BatchValuationPipeline", "ItemValuation"]
