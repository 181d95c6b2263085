"""
app/errors.py

Error taxonomy shared by the generator, the analysis adapters and the
batch pipeline.

Caller-input errors also derive from :class:`ValueError` so that code
written against plain ``ValueError`` keeps working.
"""

from __future__ import annotations


class AnalyticsError(Exception):
    """Base class for every error raised by this project."""


class GenerationError(AnalyticsError):
    """
    The synthetic dataset violated one of its own invariants.

    Unreachable at the fixed generation parameters; treated as fatal.
    """


class InsufficientDataError(AnalyticsError, ValueError):
    """Not enough observations for the requested analysis."""


class InvalidParameterError(AnalyticsError, ValueError):
    """A numeric or structural parameter is out of range."""


class UnsupportedMethodError(AnalyticsError, ValueError):
    """The requested model or algorithm name is not supported."""

    def __init__(self, method: str, supported: tuple[str, ...] | list[str]) -> None:
        self.method = method
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported method '{method}'. "
            f"Choose one of: {', '.join(self.supported)}."
        )


# Adapter failures the batch pipeline absorbs: the adapter's output is
# omitted and the run continues.
RECOVERABLE_ERRORS: tuple[type[Exception], ...] = (
    InsufficientDataError,
    InvalidParameterError,
    UnsupportedMethodError,
)
