"""Builds the engine option bundle for one conversion call.

Renderer names and Vega-Lite versions are checked here; numeric parameters
(scale, ppi, quality) are passed through as given and left to the engine.
"""

from ..logging_config import get_logger
from .errors import InvalidRendererError, InvalidVersionError
from .interfaces import ConversionOptions, Grammar

logger = get_logger(__name__)

RENDERERS = ("svg", "canvas", "hybrid")
SUPPORTED_VL_VERSIONS = ("5.8", "5.14", "5.15", "5.16", "5.17", "5.19", "5.20")
DEFAULT_VL_VERSION = "5.20"

DEFAULT_RENDERER = "svg"
DEFAULT_BUNDLE = True
DEFAULT_SCALE = 1.0
DEFAULT_PPI = 72.0
DEFAULT_QUALITY = 90


def normalize_vl_version(version: str) -> str | None:
    """Return the canonical ``major.minor`` form of a supported version, else None.

    ``"v5_20"``, ``"5_20"`` and ``"v5.20"`` all normalize to ``"5.20"``.
    """
    candidate = str(version).strip().lower()
    if candidate.startswith("v"):
        candidate = candidate[1:]
    candidate = candidate.replace("_", ".")
    return candidate if candidate in SUPPORTED_VL_VERSIONS else None


def resolve_vl_version(
    version: str | None,
    *,
    default_version: str = DEFAULT_VL_VERSION,
    lenient: bool = False,
) -> str:
    if version is None or version == "":
        return default_version
    resolved = normalize_vl_version(version)
    if resolved is not None:
        return resolved
    if lenient:
        logger.warning(
            "Unknown Vega-Lite version, using default",
            extra={"requested_version": str(version), "default_version": default_version},
        )
        return default_version
    raise InvalidVersionError("Invalid Vega-Lite version provided")


def resolve_renderer(renderer: str | None) -> str:
    if renderer is None:
        return DEFAULT_RENDERER
    if renderer not in RENDERERS:
        raise InvalidRendererError("Invalid renderer provided")
    return renderer


def resolve_options(
    grammar: str,
    *,
    vl_version: str | None = None,
    renderer: str | None = None,
    bundle: bool | None = None,
    scale: float | None = None,
    ppi: float | None = None,
    quality: int | None = None,
    default_vl_version: str = DEFAULT_VL_VERSION,
    lenient_version: bool = False,
) -> ConversionOptions:
    """Resolve caller parameters into a ConversionOptions.

    Missing parameters take the defaults above. Vega operations never carry a
    Vega-Lite version. Raises InvalidRendererError or InvalidVersionError.
    """
    resolved_version = None
    if grammar == Grammar.VEGA_LITE:
        resolved_version = resolve_vl_version(
            vl_version, default_version=default_vl_version, lenient=lenient_version
        )
    return ConversionOptions(
        vl_version=resolved_version,
        renderer=resolve_renderer(renderer),
        bundle=DEFAULT_BUNDLE if bundle is None else bundle,
        scale=DEFAULT_SCALE if scale is None else scale,
        ppi=DEFAULT_PPI if ppi is None else ppi,
        quality=DEFAULT_QUALITY if quality is None else quality,
    )
