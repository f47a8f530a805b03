"""Tests for save/to_json export helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from chart_service.conversion.export import infer_format, save, to_json

from .conftest import JPEG_BYTES, PNG_BYTES, VEGA_LITE_SPEC, VEGA_SPEC


class TestInferFormat:
    @pytest.mark.parametrize(
        "path, fmt",
        [
            ("chart.json", "json"),
            ("chart.HTML", "html"),
            ("out/chart.png", "png"),
            ("chart.svg", "svg"),
            ("chart.pdf", "pdf"),
            ("chart.jpeg", "jpeg"),
            ("chart.jpg", "jpeg"),
        ],
    )
    def test_known(self, path: str, fmt: str) -> None:
        assert infer_format(path) == fmt

    @pytest.mark.parametrize("path", ["chart.gif", "chart", "chart.txt"])
    def test_unknown(self, path: str) -> None:
        assert infer_format(path) is None


class TestToJson:
    def test_vega_lite_roundtrip(self, service, vega_lite_text) -> None:
        status, payload = to_json(service, vega_lite_text)
        assert status == "ok"
        assert json.loads(payload) == VEGA_LITE_SPEC

    def test_compile_to_vega(self, service, fake_engine, vega_lite_text) -> None:
        status, payload = to_json(service, vega_lite_text, target="vega")
        assert status == "ok"
        assert "vega/v5.json" in payload
        assert fake_engine.calls[0][0] == "vegalite_to_vega"

    def test_vega_to_vega_lite_unsupported(self, service, vega_text) -> None:
        status, payload = to_json(service, vega_text, grammar="vega", target="vega-lite")
        assert status == "error"
        assert "Unsupported JSON export" in payload

    def test_invalid_json(self, service) -> None:
        assert to_json(service, "nope", grammar="vega", target="vega").as_tuple() == (
            "error",
            "Vega spec is not valid JSON",
        )


class TestSave:
    def test_png_inferred(self, service, vega_lite_text, tmp_path: Path) -> None:
        out = tmp_path / "charts" / "bar.png"
        result = save(service, vega_lite_text, out, scale=2.0)
        assert result.ok
        assert out.read_bytes() == PNG_BYTES

    def test_jpg_uses_jpeg_conversion(self, service, fake_engine, vega_lite_text, tmp_path: Path) -> None:
        out = tmp_path / "bar.jpg"
        assert save(service, vega_lite_text, out, quality=50).ok
        assert out.read_bytes() == JPEG_BYTES
        name, _, opts = fake_engine.calls[0]
        assert name == "vegalite_to_jpeg"
        assert opts.quality == 50

    def test_svg_written_as_text(self, service, vega_text, tmp_path: Path) -> None:
        out = tmp_path / "chart.svg"
        assert save(service, vega_text, out, grammar="vega").ok
        assert out.read_text(encoding="utf-8") == "<svg>vega</svg>"

    def test_json(self, service, vega_lite_text, tmp_path: Path) -> None:
        out = tmp_path / "chart.json"
        assert save(service, vega_lite_text, out).ok
        assert json.loads(out.read_text(encoding="utf-8")) == VEGA_LITE_SPEC

    def test_vega_json(self, service, fake_engine, vega_text, tmp_path: Path) -> None:
        out = tmp_path / "chart.json"
        assert save(service, vega_text, out, grammar="vega").ok
        assert json.loads(out.read_text(encoding="utf-8")) == VEGA_SPEC
        assert fake_engine.calls == []

    def test_explicit_format_overrides_extension(self, service, vega_lite_text, tmp_path: Path) -> None:
        out = tmp_path / "compiled.txt"
        assert save(service, vega_lite_text, out, fmt="vega").ok
        assert "vega/v5.json" in out.read_text(encoding="utf-8")

    def test_unsupported_extension(self, service, fake_engine, vega_lite_text, tmp_path: Path) -> None:
        out = tmp_path / "chart.gif"
        status, payload = save(service, vega_lite_text, out)
        assert status == "error"
        assert "unsupported export format" in payload
        assert not out.exists()
        assert fake_engine.calls == []

    def test_failed_conversion_writes_nothing(self, service, tmp_path: Path) -> None:
        out = tmp_path / "chart.pdf"
        assert save(service, "not json", out).as_tuple() == ("error", "VegaLite spec is not valid JSON")
        assert not out.exists()
