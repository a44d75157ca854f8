"""
Constants for LOTSTATS.

Central location for thresholds, default values, and output strings.
These values are documented and intentionally chosen - not optimized.
Changing any of them changes which prices are classified as outliers
and how much an estimate is trusted.
"""

# ============================================================
# OUTLIER FILTER
# ============================================================

# Below this many prices no filtering is attempted
DEFAULT_MIN_SAMPLE_SIZE = 4

# Confidence reported when the sample is too small to filter
INSUFFICIENT_DATA_CONFIDENCE = 0.1

# Strategy auto-selection
MAD_MIN_SAMPLE_SIZE = 8       # MAD needs at least this many prices...
MAD_MIN_CV = 0.8              # ...and CV strictly above this
IQR_MIN_SAMPLE_SIZE = 6       # Otherwise IQR from this size up, else trimmed

# MAD filter: keep |price - median| <= 2.5 * MAD (~99% for normal data)
MAD_THRESHOLD_MULTIPLIER = 2.5

# IQR filter: keep [q1 - 1.5*iqr, q3 + 1.5*iqr] (Tukey fences)
IQR_FENCE_MULTIPLIER = 1.5

# Positional quartile indices: sorted[floor(n * q)]
Q1_POSITION = 0.25
Q3_POSITION = 0.75

# Trimmed filter: drop floor(n * 0.1) prices from each end
TRIM_FRACTION = 0.1

# ============================================================
# CONFIDENCE SCORING
# ============================================================
# Additive heuristic, clamped to [0, MAX_CONFIDENCE].

BASE_CONFIDENCE = 0.5
MAX_CONFIDENCE = 0.95
MIN_CONFIDENCE = 0.0

# (minimum sample size, bonus) - highest matching tier only
SAMPLE_SIZE_TIERS = (
    (12, 0.20),
    (8, 0.15),
    (6, 0.10),
)

# Ratio of kept prices to original count
DATA_QUALITY_HIGH = 0.8
DATA_QUALITY_HIGH_BONUS = 0.15
DATA_QUALITY_GOOD = 0.6
DATA_QUALITY_GOOD_BONUS = 0.10
DATA_QUALITY_POOR = 0.4
DATA_QUALITY_POOR_PENALTY = -0.10

# Price stability (coefficient of variation)
CV_VERY_STABLE = 0.3
CV_VERY_STABLE_BONUS = 0.10
CV_STABLE = 0.5
CV_STABLE_BONUS = 0.05
CV_HIGH_VARIANCE = 0.8
CV_HIGH_VARIANCE_PENALTY = -0.15

# Method reliability
METHOD_ADJUSTMENTS = {
    "mad": 0.05,       # Robust to heavy tails
    "iqr": 0.0,
    "trimmed": -0.05,  # Trims blindly
}

# ============================================================
# MARKET VALUE AGGREGATION
# ============================================================

DEFAULT_CONFIDENCE_THRESHOLD = 0.3

# Sample-size contribution to overall confidence: (n / 20) * 0.3
SAMPLE_SIZE_CONFIDENCE_DIVISOR = 20
SAMPLE_SIZE_CONFIDENCE_WEIGHT = 0.3

VALUE_DECIMALS = 2

# ============================================================
# TREND ANALYSIS
# ============================================================

TREND_MIN_SAMPLES = 3

TREND_VOLATILE_CV = 0.8
TREND_INCREASE_RATIO = 1.1    # last > first * 1.1
TREND_DECREASE_RATIO = 0.9    # last < first * 0.9

VOLATILITY_LOW_CV = 0.3
VOLATILITY_MEDIUM_CV = 0.6

SEASONALITY_MIN_DATES = 6
SEASONALITY_MIN_AVG_CHANGE = 0.2

# ============================================================
# INSIGHTS
# ============================================================
# Exact text is part of the output contract - UI and API tests match it.

INSIGHT_UPWARD = "Prices showing upward trend - consider holding for appreciation"
INSIGHT_DECLINING = "Prices declining - good time to buy, but monitor for further drops"
INSIGHT_VOLATILE_TREND = "High price volatility - consider dollar-cost averaging approach"
INSIGHT_HIGH_VOLATILITY = "High price volatility indicates market uncertainty"
INSIGHT_LOW_VOLATILITY = "Stable prices suggest established market value"
INSIGHT_SEASONAL = "Seasonal price patterns detected - timing may affect value"
INSIGHT_INSUFFICIENT_DATA = "Insufficient data for trend analysis"

# ============================================================
# BATCH PROCESSING
# ============================================================

DEFAULT_MAX_WORKERS = 4
