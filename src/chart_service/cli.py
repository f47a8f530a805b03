"""Command-line converter for Vega and Vega-Lite spec files."""

import argparse
import sys
from pathlib import Path

from chart_service.config import Settings
from chart_service.conversion import ConversionService, Grammar
from chart_service.conversion.export import FORMAT_EXTENSIONS, infer_format, save
from chart_service.logging_config import setup_logging


def default_output_path(input_path: str, fmt: str) -> Path:
    """``chart.vl.json`` + png -> ``chart.vl.png``; only the last suffix is replaced.

    Never returns the input itself: ``bar.json`` + json -> ``bar.out.json``.
    """
    source = Path(input_path)
    extension = FORMAT_EXTENSIONS[fmt]
    output = source.with_suffix(extension)
    if output.resolve() == source.resolve():
        output = source.with_suffix(".out" + extension)
    return output


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chart-convert",
        description="Convert a Vega or Vega-Lite spec file to SVG, HTML, PNG, JPEG, PDF, or Vega",
    )
    parser.add_argument("input", help="Input spec file (JSON)")
    parser.add_argument("-o", "--output", help="Output file; the format is inferred from its extension")
    parser.add_argument("-g", "--grammar", choices=Grammar.ALL, default=Grammar.VEGA_LITE,
                        help="Grammar of the input spec (default: vega-lite)")
    parser.add_argument("-f", "--format", dest="fmt",
                        choices=sorted(FORMAT_EXTENSIONS),
                        help="Output format (default: inferred from --output, else svg)")
    parser.add_argument("--scale", type=float, help="Image scale factor (png, jpeg)")
    parser.add_argument("--ppi", type=float, help="Pixels per inch (png)")
    parser.add_argument("--quality", type=int, help="JPEG quality 0-100")
    parser.add_argument("--renderer", help="HTML renderer: svg, canvas or hybrid")
    parser.add_argument("--no-bundle", dest="bundle", action="store_false", default=None,
                        help="Load JavaScript dependencies from a CDN instead of embedding them (html)")
    parser.add_argument("--vl-version", help="Vega-Lite version, e.g. 5.20")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    setup_logging(json_output=settings.log_json, log_level="DEBUG" if args.verbose else "WARNING")

    fmt = args.fmt or (infer_format(args.output) if args.output else None) or "svg"
    output = Path(args.output) if args.output else default_output_path(args.input, fmt)

    try:
        spec_text = Path(args.input).read_text(encoding="utf-8")
    except OSError as e:
        print(f"error: cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    params: dict[str, object] = {
        "scale": args.scale,
        "ppi": args.ppi,
        "quality": args.quality,
        "renderer": args.renderer,
        "bundle": args.bundle,
    }
    if args.grammar == Grammar.VEGA_LITE:
        params["vl_version"] = args.vl_version

    with ConversionService.from_settings(settings) as service:
        status, payload = save(service, spec_text, output, grammar=args.grammar, fmt=fmt, **params)

    if status != "ok":
        print(f"error: {payload}", file=sys.stderr)
        return 1
    print(f"Rendered to: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
