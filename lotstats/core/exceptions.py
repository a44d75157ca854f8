"""
Custom exceptions for LOTSTATS.

All exceptions inherit from LotStatsError for easy catching.

Expected edge cases (empty or undersized samples) are NOT errors - they
produce sentinel results. These exceptions cover malformed input and
broken configuration.
"""


class LotStatsError(Exception):
    """Base exception for all LOTSTATS errors."""

    pass


class ConfigurationError(LotStatsError):
    """Raised when configuration is invalid or missing."""

    pass


class InsufficientDataError(LotStatsError):
    """Raised when there's not enough data and the caller asked to fail loudly."""

    def __init__(
        self,
        message: str,
        required: int,
        available: int,
        item_id: str | None = None,
    ):
        super().__init__(message)
        self.required = required
        self.available = available
        self.item_id = item_id

    def __str__(self) -> str:
        return (
            f"{self.args[0]} | "
            f"required={self.required}, available={self.available}"
            + (f", item={self.item_id}" if self.item_id else "")
        )


class ValidationError(LotStatsError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: object = None,
    ):
        super().__init__(message)
        self.field = field
        self.value = value

    def __str__(self) -> str:
        parts = [self.args[0]]
        if self.field:
            parts.append(f"field={self.field}")
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        return " | ".join(parts)
