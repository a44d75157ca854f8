"""
Input validators.

Boundary checks applied before any statistic is computed.

GUARDRAIL: Bad numbers must never propagate silently.
NaN, infinities and negative prices would poison means, variances and
confidence scores without raising anywhere downstream, so they are
rejected here with a ValidationError naming the offending value.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from numbers import Real
from typing import Any

from lotstats.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _ensure_iterable(values: Any, field: str) -> Iterable[Any]:
    """Reject scalars, strings and mappings posing as sequences."""
    if values is None:
        raise ValidationError("Expected a sequence, got None", field=field)
    if isinstance(values, (str, bytes, Mapping)) or not isinstance(values, Iterable):
        raise ValidationError(
            f"Expected a sequence, got {type(values).__name__}",
            field=field,
        )
    return values


def validate_price(value: Any, index: int, field: str = "prices") -> float:
    """
    Validate a single price.

    Args:
        value: Candidate price
        index: Position in the sample (for error messages)
        field: Field name reported on failure

    Returns:
        The price as float
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(
            f"Price at index {index} is not a number",
            field=field,
            value=value,
        )

    try:
        price = float(value)
    except OverflowError:
        raise ValidationError(
            f"Price at index {index} is not finite",
            field=field,
            value=value,
        )

    if math.isnan(price) or math.isinf(price):
        raise ValidationError(
            f"Price at index {index} is not finite",
            field=field,
            value=value,
        )
    if price < 0:
        raise ValidationError(
            f"Price at index {index} is negative",
            field=field,
            value=value,
        )
    return price


def validate_prices(prices: Any, field: str = "prices") -> tuple[float, ...]:
    """
    Validate and normalize a price sample.

    Accepts lists, tuples, numpy arrays, pandas Series or any other
    non-string iterable of real numbers.

    Args:
        prices: Raw price sample
        field: Field name reported on failure

    Returns:
        Tuple of finite, non-negative floats in input order
    """
    values = _ensure_iterable(prices, field)
    return tuple(validate_price(v, i, field) for i, v in enumerate(values))


def validate_dates(dates: Any, field: str = "dates") -> tuple[str, ...] | None:
    """
    Validate optional observation dates.

    Dates are only counted, never parsed, so any string is accepted.

    Args:
        dates: None or a sequence of strings
        field: Field name reported on failure

    Returns:
        Tuple of date strings, or None when no dates were given
    """
    if dates is None:
        return None

    values = tuple(_ensure_iterable(dates, field))
    for i, value in enumerate(values):
        if not isinstance(value, str):
            raise ValidationError(
                f"Date at index {i} is not a string",
                field=field,
                value=value,
            )
    return values


def check_dates_alignment(prices: tuple[float, ...], dates: tuple[str, ...] | None) -> bool:
    """
    Check that dates run parallel to prices.

    A mismatch is logged, not rejected - dates only gate the seasonality
    check, which reads prices alone.

    Returns:
        True if aligned (or no dates given)
    """
    if dates is None or len(dates) == len(prices):
        return True

    logger.warning(
        f"DATES_MISALIGNED: {len(dates)} dates for {len(prices)} prices"
    )
    return False
