"""Export helpers on top of ``ConversionService``.

``save`` writes a converted chart to disk, picking the output format from the
file extension unless one is given. ``to_json`` returns the spec as JSON,
optionally compiled from Vega-Lite down to Vega. Both return tagged results
like every other conversion operation.
"""

import json
from pathlib import Path
from typing import Any

from ..logging_config import get_logger
from .dispatch import OPERATIONS
from .errors import InvalidSpecError
from .interfaces import Grammar, PayloadKind, TargetFormat
from .intake import parse_spec
from .results import ConversionResult, ResultStatus, TextResult, encode_failure
from .service import ConversionService, payload_kind

logger = get_logger(__name__)

JSON_FORMAT = "json"

EXTENSION_FORMATS = {
    ".json": JSON_FORMAT,
    ".html": TargetFormat.HTML,
    ".png": TargetFormat.PNG,
    ".svg": TargetFormat.SVG,
    ".pdf": TargetFormat.PDF,
    ".jpeg": TargetFormat.JPEG,
    ".jpg": TargetFormat.JPEG,
}

FORMAT_EXTENSIONS = {
    JSON_FORMAT: ".json",
    TargetFormat.HTML: ".html",
    TargetFormat.PNG: ".png",
    TargetFormat.SVG: ".svg",
    TargetFormat.PDF: ".pdf",
    TargetFormat.JPEG: ".jpeg",
    TargetFormat.VEGA: ".vg.json",
}


def infer_format(path: str | Path) -> str | None:
    return EXTENSION_FORMATS.get(Path(path).suffix.lower())


def to_json(
    service: ConversionService,
    spec: object,
    *,
    grammar: str = Grammar.VEGA_LITE,
    target: str = Grammar.VEGA_LITE,
    vl_version: str | None = None,
) -> TextResult:
    """Return the spec as JSON text in the ``target`` grammar.

    A Vega-Lite spec with ``target="vega"`` is compiled through the engine;
    otherwise the spec is parsed and re-serialized as-is.
    """
    if grammar not in Grammar.ALL or target not in Grammar.ALL:
        return TextResult(ResultStatus.ERROR, f"Unsupported JSON export: {grammar} to {target}")
    if grammar == Grammar.VEGA_LITE and target == Grammar.VEGA:
        return service.vegalite_to_vega(spec, vl_version=vl_version)
    if grammar != target:
        return TextResult(ResultStatus.ERROR, f"Unsupported JSON export: {grammar} to {target}")
    try:
        parsed = parse_spec(spec, grammar)
    except InvalidSpecError as e:
        return TextResult(ResultStatus.ERROR, e.message)
    return TextResult(ResultStatus.OK, json.dumps(parsed))


def save(
    service: ConversionService,
    spec: object,
    path: str | Path,
    *,
    grammar: str = Grammar.VEGA_LITE,
    fmt: str | None = None,
    **params: Any,
) -> ConversionResult:
    """Convert ``spec`` and write the payload to ``path``.

    Nothing is written when the format is unsupported or the conversion fails.
    """
    path = Path(path)
    fmt = fmt or infer_format(path)
    if fmt == JSON_FORMAT:
        result = to_json(
            service, spec, grammar=grammar, target=grammar, vl_version=params.get("vl_version")
        )
    elif fmt is None or (grammar, fmt) not in OPERATIONS:
        return encode_failure(
            payload_kind(grammar, fmt or ""),
            "unsupported export format, expected json, html, png, svg, pdf, jpeg or jpg "
            f"got: {fmt or path.suffix or '<none>'}",
        )
    else:
        result = service.convert(grammar, fmt, spec, **params)

    if not result.ok:
        return result

    path.parent.mkdir(parents=True, exist_ok=True)
    if result.kind == PayloadKind.BINARY:
        path.write_bytes(result.payload)  # type: ignore[arg-type]
    else:
        path.write_text(result.payload, encoding="utf-8")  # type: ignore[arg-type]
    logger.info("Chart written", extra={"path": str(path), "format": fmt})
    return result
