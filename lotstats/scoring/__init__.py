"""Confidence scoring module."""

from lotstats.scoring.confidence import (
    ConfidenceBreakdown,
    clamp_confidence,
    confidence_breakdown,
    score_confidence,
)

__all__ = [
    "ConfidenceBreakdown",
    "clamp_confidence",
    "confidence_breakdown",
    "score_confidence",
]
