"""
Exceptions raised by the analysis core.

Almost every degraded-input condition resolves to a neutral value instead of
an exception. The only one surfaced to callers is insufficient data for pair
analysis, whose message is meant to be shown to the user as-is.
"""


class InsufficientDataError(ValueError):
    """Not enough (aligned) history to run an analysis."""

    def __init__(self, message: str, available: int = 0, required: int = 0) -> None:
        super().__init__(message)
        self.available = available
        self.required = required
