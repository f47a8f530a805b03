"""
Domain layer for chart conversion.
Parses Vega and Vega-Lite specs, resolves engine options, dispatches to the
conversion engine and encodes every outcome as a tagged result, so front-ends
(HTTP, UI, CLI) share the same core logic.
"""

from .interfaces import ConversionOptions, ConverterGateway, Grammar, TargetFormat
from .results import BinaryResult, ResultStatus, TextResult
from .service import ConversionService
