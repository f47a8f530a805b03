from typing import Any

import vl_convert as vlc

from .interfaces import ConversionOptions, ConverterGateway


class VlConvertEngine(ConverterGateway):
    """Conversion engine backed by vl-convert.

    vl-convert raises ``ValueError`` with its own message when a spec cannot
    be compiled or rendered; those propagate to the dispatcher untouched.
    """

    # Vega

    def vega_to_svg(self, spec: Any, options: ConversionOptions) -> str:
        return vlc.vega_to_svg(spec)

    def vega_to_html(self, spec: Any, options: ConversionOptions) -> str:
        return vlc.vega_to_html(spec, bundle=options.bundle, renderer=options.renderer)

    def vega_to_png(self, spec: Any, options: ConversionOptions) -> bytes:
        return vlc.vega_to_png(spec, scale=options.scale, ppi=options.ppi)

    def vega_to_jpeg(self, spec: Any, options: ConversionOptions) -> bytes:
        return vlc.vega_to_jpeg(spec, scale=options.scale, quality=options.quality)

    def vega_to_pdf(self, spec: Any, options: ConversionOptions) -> bytes:
        return vlc.vega_to_pdf(spec)

    # Vega-Lite

    def vegalite_to_svg(self, spec: Any, options: ConversionOptions) -> str:
        return vlc.vegalite_to_svg(spec, vl_version=options.vl_version)

    def vegalite_to_html(self, spec: Any, options: ConversionOptions) -> str:
        return vlc.vegalite_to_html(
            spec,
            vl_version=options.vl_version,
            bundle=options.bundle,
            renderer=options.renderer,
        )

    def vegalite_to_png(self, spec: Any, options: ConversionOptions) -> bytes:
        return vlc.vegalite_to_png(
            spec, vl_version=options.vl_version, scale=options.scale, ppi=options.ppi
        )

    def vegalite_to_jpeg(self, spec: Any, options: ConversionOptions) -> bytes:
        return vlc.vegalite_to_jpeg(
            spec, vl_version=options.vl_version, scale=options.scale, quality=options.quality
        )

    def vegalite_to_pdf(self, spec: Any, options: ConversionOptions) -> bytes:
        return vlc.vegalite_to_pdf(spec, vl_version=options.vl_version)

    def vegalite_to_vega(self, spec: Any, options: ConversionOptions) -> dict[str, Any]:
        return vlc.vegalite_to_vega(spec, vl_version=options.vl_version)
