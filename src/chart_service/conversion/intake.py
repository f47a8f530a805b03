import json
from typing import Any

from .errors import InvalidSpecError
from .interfaces import Grammar

INVALID_JSON_MESSAGES = {
    Grammar.VEGA: "Vega spec is not valid JSON",
    Grammar.VEGA_LITE: "VegaLite spec is not valid JSON",
}


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"invalid JSON constant: {name}")


def parse_spec(text: object, grammar: str) -> Any:
    """Parse spec text as JSON, or raise InvalidSpecError naming the grammar.

    Accepts str, bytes and bytearray. Anything else, including None, is
    rejected the same way as malformed text.
    """
    message = INVALID_JSON_MESSAGES[grammar]
    if not isinstance(text, (str, bytes, bytearray)):
        raise InvalidSpecError(message)
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise InvalidSpecError(message) from e
