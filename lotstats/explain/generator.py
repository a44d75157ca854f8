"""
Explanation generator.

Produces human-readable explanations for valuation results.
"""

from typing import Any

from lotstats.core.types import (
    MarketValueEstimate,
    OutlierMethod,
    OutlierResult,
    TrendReport,
)


METHOD_DESCRIPTIONS = {
    "median": "Median of all observed prices",
    "mean": "Average of all observed prices",
    "median_fallback": (
        "Median of all observed prices (outlier filtering was skipped "
        "or not confident enough)"
    ),
    "outlier_filtered_mad": "Median after removing prices far from the median (MAD filter)",
    "outlier_filtered_iqr": "Median after removing prices outside the interquartile fences (IQR filter)",
    "outlier_filtered_trimmed": "Median after trimming the cheapest and priciest 10% of listings",
    "no_data": "No prices available",
}

OUTLIER_METHOD_NAMES = {
    OutlierMethod.MAD: "MAD",
    OutlierMethod.IQR: "IQR",
    OutlierMethod.TRIMMED: "trimmed",
    OutlierMethod.INSUFFICIENT_DATA: "none (too few prices)",
}


class ExplanationGenerator:
    """
    Generates explanations for valuation results.

    Combines the market value estimate, outlier filtering and trend
    report into a readable summary.
    """

    def describe_method(self, method: str) -> str:
        """Plain-language description of a valuation method tag."""
        return METHOD_DESCRIPTIONS.get(method, method)

    def explain_outliers(self, result: OutlierResult) -> str:
        """
        One-line summary of an outlier filtering run.

        Args:
            result: Outlier filtering result

        Returns:
            Summary string
        """
        stats = result.statistics
        method_name = OUTLIER_METHOD_NAMES.get(result.method, result.method.value)
        return (
            f"Kept {stats.filtered_count} of {stats.original_count} prices, "
            f"removed {stats.outlier_count} as outliers "
            f"(method: {method_name}, confidence {result.confidence:.0%})"
        )

    def explain_estimate(self, estimate: MarketValueEstimate) -> str:
        """
        Multi-line explanation of a market value estimate.

        Args:
            estimate: Market value estimate

        Returns:
            Explanation text
        """
        if not estimate.has_data:
            return "No prices available - market value cannot be estimated."

        factors = estimate.factors
        lines = [
            f"MARKET VALUE: {estimate.value:,.2f}",
            f"Method: {self.describe_method(estimate.method)}",
            f"Confidence: {estimate.confidence:.0%}",
            f"Based on {factors.sample_size} prices "
            f"(median {factors.median:,.2f}, mean {factors.mean:,.2f}, "
            f"filtered median {factors.outlier_filtered:,.2f})",
        ]
        return "\n".join(lines)

    def generate_full_report(
        self,
        estimate: MarketValueEstimate,
        trend: TrendReport,
        outliers: OutlierResult | None = None,
        title: str | None = None,
    ) -> str:
        """
        Generate comprehensive report combining value, outliers and trend.

        Args:
            estimate: Market value estimate
            trend: Trend report
            outliers: Optional outlier filtering result
            title: Optional header (e.g. item name)

        Returns:
            Full human-readable report
        """
        lines = []

        if title:
            lines.append(f"=== {title} ===")
            lines.append("")

        lines.append(self.explain_estimate(estimate))
        lines.append("")

        if outliers is not None:
            lines.append(f"OUTLIERS: {self.explain_outliers(outliers)}")
            lines.append("")

        lines.append(f"TREND: {trend.trend.value} (volatility: {trend.volatility.value})")
        if trend.seasonality:
            lines.append("Seasonality: detected")

        if trend.insights:
            lines.append("INSIGHTS:")
            for insight in trend.insights:
                lines.append(f"  - {insight}")

        return "\n".join(lines)

    def generate_short_summary(
        self,
        estimate: MarketValueEstimate,
        trend: TrendReport,
        label: str = "",
    ) -> str:
        """
        Generate one-line summary.

        Args:
            estimate: Market value estimate
            trend: Trend report
            label: Optional item label prefix

        Returns:
            Short summary string
        """
        prefix = f"{label}: " if label else ""
        return (
            f"{prefix}{estimate.value:,.2f} "
            f"({estimate.method}, confidence={estimate.confidence:.0%}, "
            f"trend={trend.trend.value}, volatility={trend.volatility.value})"
        )

    def generate_detail(
        self,
        estimate: MarketValueEstimate,
        trend: TrendReport,
    ) -> dict[str, Any]:
        """
        Generate detailed breakdown for API consumers.

        Args:
            estimate: Market value estimate
            trend: Trend report

        Returns:
            Dictionary with formatted fields
        """
        return {
            "value": f"{estimate.value:,.2f}",
            "confidence": f"{estimate.confidence:.0%}",
            "method": estimate.method,
            "methodDescription": self.describe_method(estimate.method),
            "trend": trend.trend.value,
            "volatility": trend.volatility.value,
            "insights": list(trend.insights),
        }
