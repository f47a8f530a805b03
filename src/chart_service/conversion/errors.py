"""Exceptions raised inside the conversion domain layer.

They never escape ``ConversionService``: every one of them is turned into a
tagged failure result at the facade boundary.
"""


class ConversionError(Exception):
    """Base class for failures detected while converting a chart spec."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidSpecError(ConversionError):
    """Raised when the spec text does not parse as JSON."""


class InvalidRendererError(ConversionError):
    """Raised when an HTML renderer name is not one of the supported back-ends."""


class InvalidVersionError(ConversionError):
    """Raised when a Vega-Lite version string is not supported."""


class UnsupportedOperationError(ConversionError):
    """Raised for a (grammar, format) pair with no engine operation."""


class EngineError(ConversionError):
    """Raised when the conversion engine reports a failure."""
