from dataclasses import dataclass
from typing import Any, Protocol


class Grammar:
    VEGA = "vega"
    VEGA_LITE = "vega-lite"

    ALL = (VEGA, VEGA_LITE)


class TargetFormat:
    SVG = "svg"
    HTML = "html"
    PNG = "png"
    JPEG = "jpeg"
    PDF = "pdf"
    VEGA = "vega"

    ALL = (SVG, HTML, PNG, JPEG, PDF, VEGA)


class PayloadKind:
    TEXT = "text"
    BINARY = "binary"


@dataclass(frozen=True)
class ConversionOptions:
    """Resolved option bundle handed to the engine for a single call."""

    vl_version: str | None = None
    renderer: str = "svg"
    bundle: bool = True
    scale: float = 1.0
    ppi: float = 72.0
    quality: int = 90


class ConverterGateway(Protocol):
    """One operation per (grammar, target format) pair.

    Calls are blocking and may take a while; the facade runs them on its
    worker pool. Failures are raised as exceptions carrying the engine's text.
    """

    def vega_to_svg(self, spec: Any, options: ConversionOptions) -> str:
        ...

    def vega_to_html(self, spec: Any, options: ConversionOptions) -> str:
        ...

    def vega_to_png(self, spec: Any, options: ConversionOptions) -> bytes:
        ...

    def vega_to_jpeg(self, spec: Any, options: ConversionOptions) -> bytes:
        ...

    def vega_to_pdf(self, spec: Any, options: ConversionOptions) -> bytes:
        ...

    def vegalite_to_svg(self, spec: Any, options: ConversionOptions) -> str:
        ...

    def vegalite_to_html(self, spec: Any, options: ConversionOptions) -> str:
        ...

    def vegalite_to_png(self, spec: Any, options: ConversionOptions) -> bytes:
        ...

    def vegalite_to_jpeg(self, spec: Any, options: ConversionOptions) -> bytes:
        ...

    def vegalite_to_pdf(self, spec: Any, options: ConversionOptions) -> bytes:
        ...

    def vegalite_to_vega(self, spec: Any, options: ConversionOptions) -> str | dict[str, Any]:
        ...
