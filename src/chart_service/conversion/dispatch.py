"""Static dispatch table over (grammar, target format) pairs."""

from dataclasses import dataclass
from typing import Any

from .errors import EngineError, UnsupportedOperationError
from .interfaces import ConversionOptions, ConverterGateway, Grammar, PayloadKind, TargetFormat


@dataclass(frozen=True)
class Operation:
    name: str
    grammar: str
    fmt: str
    payload_kind: str


def _op(grammar: str, fmt: str, payload_kind: str) -> Operation:
    prefix = "vega" if grammar == Grammar.VEGA else "vegalite"
    return Operation(f"{prefix}_to_{fmt}", grammar, fmt, payload_kind)


OPERATIONS: dict[tuple[str, str], Operation] = {
    (Grammar.VEGA, TargetFormat.SVG): _op(Grammar.VEGA, TargetFormat.SVG, PayloadKind.TEXT),
    (Grammar.VEGA, TargetFormat.HTML): _op(Grammar.VEGA, TargetFormat.HTML, PayloadKind.TEXT),
    (Grammar.VEGA, TargetFormat.PNG): _op(Grammar.VEGA, TargetFormat.PNG, PayloadKind.BINARY),
    (Grammar.VEGA, TargetFormat.JPEG): _op(Grammar.VEGA, TargetFormat.JPEG, PayloadKind.BINARY),
    (Grammar.VEGA, TargetFormat.PDF): _op(Grammar.VEGA, TargetFormat.PDF, PayloadKind.BINARY),
    (Grammar.VEGA_LITE, TargetFormat.SVG): _op(Grammar.VEGA_LITE, TargetFormat.SVG, PayloadKind.TEXT),
    (Grammar.VEGA_LITE, TargetFormat.HTML): _op(Grammar.VEGA_LITE, TargetFormat.HTML, PayloadKind.TEXT),
    (Grammar.VEGA_LITE, TargetFormat.PNG): _op(Grammar.VEGA_LITE, TargetFormat.PNG, PayloadKind.BINARY),
    (Grammar.VEGA_LITE, TargetFormat.JPEG): _op(Grammar.VEGA_LITE, TargetFormat.JPEG, PayloadKind.BINARY),
    (Grammar.VEGA_LITE, TargetFormat.PDF): _op(Grammar.VEGA_LITE, TargetFormat.PDF, PayloadKind.BINARY),
    (Grammar.VEGA_LITE, TargetFormat.VEGA): _op(Grammar.VEGA_LITE, TargetFormat.VEGA, PayloadKind.TEXT),
}


def lookup(grammar: str, fmt: str) -> Operation:
    try:
        return OPERATIONS[(grammar, fmt)]
    except KeyError:
        raise UnsupportedOperationError(f"Unsupported conversion: {grammar} to {fmt}") from None


def dispatch(engine: ConverterGateway, operation: Operation, spec: Any, options: ConversionOptions) -> Any:
    """Invoke the single engine method for ``operation`` and return its payload.

    Whatever the engine raises is re-raised as EngineError with its text unchanged.
    """
    method = getattr(engine, operation.name)
    try:
        return method(spec, options)
    except Exception as e:
        raise EngineError(str(e)) from e
