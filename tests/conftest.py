"""Shared fixtures: a recording stand-in for the conversion engine."""

from __future__ import annotations

import json
from typing import Any

import pytest

from chart_service.conversion import ConversionService
from chart_service.conversion.interfaces import ConversionOptions

VEGA_SPEC = {
    "$schema": "https://vega.github.io/schema/vega/v5.json",
    "width": 100,
    "height": 100,
    "marks": [
        {
            "type": "rect",
            "encode": {"enter": {"x": {"value": 0}, "y": {"value": 0}, "width": {"value": 50}, "height": {"value": 50}}},
        }
    ],
}

VEGA_LITE_SPEC = {
    "$schema": "https://vega.github.io/schema/vega-lite/v5.json",
    "data": {"values": [{"a": "A", "b": 28}, {"a": "B", "b": 55}]},
    "mark": "bar",
    "encoding": {
        "x": {"field": "a", "type": "nominal"},
        "y": {"field": "b", "type": "quantitative"},
    },
}

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"
JPEG_BYTES = b"\xff\xd8\xff\xe0fake"
PDF_BYTES = b"%PDF-1.7 fake"


class FakeEngine:
    """Records every call; behaves like the engine for well-formed specs.

    Instances share a class-level call log so tests can observe calls made
    through fresh per-call handles.
    """

    calls: list[tuple[str, Any, ConversionOptions]] = []
    instances = 0
    fail_with: str | None = None

    def __init__(self) -> None:
        type(self).instances += 1

    def _record(self, name: str, spec: Any, options: ConversionOptions) -> None:
        type(self).calls.append((name, spec, options))
        if type(self).fail_with is not None:
            raise ValueError(type(self).fail_with)
        if isinstance(spec, dict) and "mark" in spec and "encoding" not in spec:
            raise ValueError("Invalid specification: missing encoding for mark")
        if options.quality is not None and not 0 <= options.quality <= 100:
            raise ValueError(f"JPEG quality must be between 0 and 100, got {options.quality}")

    def vega_to_svg(self, spec, options):
        self._record("vega_to_svg", spec, options)
        return "<svg>vega</svg>"

    def vega_to_html(self, spec, options):
        self._record("vega_to_html", spec, options)
        return f"<html>{options.renderer}</html>"

    def vega_to_png(self, spec, options):
        self._record("vega_to_png", spec, options)
        return PNG_BYTES

    def vega_to_jpeg(self, spec, options):
        self._record("vega_to_jpeg", spec, options)
        return JPEG_BYTES

    def vega_to_pdf(self, spec, options):
        self._record("vega_to_pdf", spec, options)
        return PDF_BYTES

    def vegalite_to_svg(self, spec, options):
        self._record("vegalite_to_svg", spec, options)
        return "<svg>vega-lite</svg>"

    def vegalite_to_html(self, spec, options):
        self._record("vegalite_to_html", spec, options)
        return f"<html>{options.renderer}</html>"

    def vegalite_to_png(self, spec, options):
        self._record("vegalite_to_png", spec, options)
        return PNG_BYTES

    def vegalite_to_jpeg(self, spec, options):
        self._record("vegalite_to_jpeg", spec, options)
        return JPEG_BYTES

    def vegalite_to_pdf(self, spec, options):
        self._record("vegalite_to_pdf", spec, options)
        return PDF_BYTES

    def vegalite_to_vega(self, spec, options):
        self._record("vegalite_to_vega", spec, options)
        return {"$schema": "https://vega.github.io/schema/vega/v5.json", "marks": []}


@pytest.fixture
def fake_engine():
    FakeEngine.calls = []
    FakeEngine.instances = 0
    FakeEngine.fail_with = None
    yield FakeEngine
    FakeEngine.calls = []
    FakeEngine.fail_with = None


@pytest.fixture
def service(fake_engine):
    svc = ConversionService(fake_engine, workers=2)
    yield svc
    svc.close()


@pytest.fixture
def vega_text() -> str:
    return json.dumps(VEGA_SPEC)


@pytest.fixture
def vega_lite_text() -> str:
    return json.dumps(VEGA_LITE_SPEC)
