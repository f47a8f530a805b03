"""Tagged result values returned by every conversion operation.

A result is always a status marker plus a payload and unpacks as a pair::

    status, payload = service.vega_to_png(spec)

Text operations return ``TextResult`` (text on success and on failure).
Binary operations return ``BinaryResult`` (bytes on success, text on failure).
The payload kind is fixed by the operation, never guessed from the payload.
"""

import json
from dataclasses import dataclass
from typing import Any, Iterator

from .interfaces import PayloadKind

EMPTY_PAYLOAD_MESSAGE = "Conversion engine returned an empty payload"


class ResultStatus:
    OK = "ok"
    ERROR = "error"


@dataclass(frozen=True)
class TextResult:
    status: str
    payload: str

    kind = PayloadKind.TEXT

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    def as_tuple(self) -> tuple[str, str]:
        return (self.status, self.payload)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.as_tuple())


@dataclass(frozen=True)
class BinaryResult:
    status: str
    payload: bytes | str

    kind = PayloadKind.BINARY

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    def as_tuple(self) -> tuple[str, bytes | str]:
        return (self.status, self.payload)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.as_tuple())


ConversionResult = TextResult | BinaryResult


def encode_failure(kind: str, message: str) -> ConversionResult:
    if kind == PayloadKind.BINARY:
        return BinaryResult(ResultStatus.ERROR, str(message))
    return TextResult(ResultStatus.ERROR, str(message))


def encode_success(kind: str, payload: Any) -> ConversionResult:
    if kind == PayloadKind.BINARY:
        if not isinstance(payload, (bytes, bytearray)) or not payload:
            return BinaryResult(ResultStatus.ERROR, EMPTY_PAYLOAD_MESSAGE)
        return BinaryResult(ResultStatus.OK, bytes(payload))
    if not isinstance(payload, str):
        # compiled Vega comes back from the engine as a mapping
        payload = json.dumps(payload)
    return TextResult(ResultStatus.OK, payload)
