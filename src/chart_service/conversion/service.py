import asyncio
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Callable

from ..logging_config import get_logger
from .adapters import VlConvertEngine
from .dispatch import OPERATIONS, Operation, dispatch, lookup
from .errors import ConversionError
from .interfaces import ConversionOptions, ConverterGateway, Grammar, PayloadKind, TargetFormat
from .intake import parse_spec
from .options import DEFAULT_VL_VERSION, resolve_options
from .results import ConversionResult, encode_failure, encode_success

if TYPE_CHECKING:
    from ..config import Settings

logger = get_logger(__name__)


def payload_kind(grammar: str, fmt: str) -> str:
    operation = OPERATIONS.get((grammar, fmt))
    return operation.payload_kind if operation else PayloadKind.TEXT


class ConversionService:
    """Facade over the chart conversion engine.

    Every operation runs intake, option resolution, dispatch and encoding, in
    that order, and returns a tagged result. Nothing raises to the caller.

    The engine call itself is submitted to a thread pool reserved for
    conversion work. Synchronous operations block on the pool future;
    ``aconvert`` awaits it so an event loop keeps running meanwhile. A new
    engine handle is created for every call.
    """

    def __init__(
        self,
        engine_factory: Callable[[], ConverterGateway] = VlConvertEngine,
        *,
        executor: Executor | None = None,
        workers: int = 4,
        default_vl_version: str = DEFAULT_VL_VERSION,
        lenient_version: bool = False,
    ) -> None:
        self._engine_factory = engine_factory
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="chart-convert"
        )
        self._default_vl_version = default_vl_version
        self._lenient_version = lenient_version

    @classmethod
    def from_settings(cls, settings: "Settings", **kwargs: Any) -> "ConversionService":
        return cls(
            workers=settings.workers,
            default_vl_version=settings.vl_version,
            lenient_version=settings.lenient_vl_version,
            **kwargs,
        )

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "ConversionService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # Generic entry points

    def convert(
        self,
        grammar: str,
        fmt: str,
        spec: object,
        *,
        vl_version: str | None = None,
        renderer: str | None = None,
        bundle: bool | None = None,
        scale: float | None = None,
        ppi: float | None = None,
        quality: int | None = None,
    ) -> ConversionResult:
        kind = payload_kind(grammar, fmt)
        started = time.perf_counter()
        try:
            operation, future = self._submit(
                grammar, fmt, spec,
                vl_version=vl_version, renderer=renderer, bundle=bundle,
                scale=scale, ppi=ppi, quality=quality,
            )
            payload = future.result()
        except Exception as e:
            return self._failure(grammar, fmt, kind, e)
        return self._success(operation, payload, started)

    async def aconvert(
        self,
        grammar: str,
        fmt: str,
        spec: object,
        *,
        vl_version: str | None = None,
        renderer: str | None = None,
        bundle: bool | None = None,
        scale: float | None = None,
        ppi: float | None = None,
        quality: int | None = None,
    ) -> ConversionResult:
        """Async counterpart of ``convert`` for callers running an event loop."""
        kind = payload_kind(grammar, fmt)
        started = time.perf_counter()
        try:
            operation, future = self._submit(
                grammar, fmt, spec,
                vl_version=vl_version, renderer=renderer, bundle=bundle,
                scale=scale, ppi=ppi, quality=quality,
            )
            payload = await asyncio.wrap_future(future)
        except Exception as e:
            return self._failure(grammar, fmt, kind, e)
        return self._success(operation, payload, started)

    # Vega operations

    def vega_to_svg(self, spec: object) -> ConversionResult:
        return self.convert(Grammar.VEGA, TargetFormat.SVG, spec)

    def vega_to_html(self, spec: object, bundle: bool | None = None, renderer: str | None = None) -> ConversionResult:
        return self.convert(Grammar.VEGA, TargetFormat.HTML, spec, bundle=bundle, renderer=renderer)

    def vega_to_png(self, spec: object, scale: float | None = None, ppi: float | None = None) -> ConversionResult:
        return self.convert(Grammar.VEGA, TargetFormat.PNG, spec, scale=scale, ppi=ppi)

    def vega_to_jpeg(self, spec: object, scale: float | None = None, quality: int | None = None) -> ConversionResult:
        return self.convert(Grammar.VEGA, TargetFormat.JPEG, spec, scale=scale, quality=quality)

    def vega_to_pdf(self, spec: object) -> ConversionResult:
        return self.convert(Grammar.VEGA, TargetFormat.PDF, spec)

    # Vega-Lite operations (``vl_version`` kept for older callers)

    def vegalite_to_svg(self, spec: object, vl_version: str | None = None) -> ConversionResult:
        return self.convert(Grammar.VEGA_LITE, TargetFormat.SVG, spec, vl_version=vl_version)

    def vegalite_to_html(
        self,
        spec: object,
        bundle: bool | None = None,
        renderer: str | None = None,
        vl_version: str | None = None,
    ) -> ConversionResult:
        return self.convert(
            Grammar.VEGA_LITE, TargetFormat.HTML, spec,
            bundle=bundle, renderer=renderer, vl_version=vl_version,
        )

    def vegalite_to_png(
        self,
        spec: object,
        scale: float | None = None,
        ppi: float | None = None,
        vl_version: str | None = None,
    ) -> ConversionResult:
        return self.convert(
            Grammar.VEGA_LITE, TargetFormat.PNG, spec, scale=scale, ppi=ppi, vl_version=vl_version
        )

    def vegalite_to_jpeg(
        self,
        spec: object,
        scale: float | None = None,
        quality: int | None = None,
        vl_version: str | None = None,
    ) -> ConversionResult:
        return self.convert(
            Grammar.VEGA_LITE, TargetFormat.JPEG, spec, scale=scale, quality=quality, vl_version=vl_version
        )

    def vegalite_to_pdf(self, spec: object, vl_version: str | None = None) -> ConversionResult:
        return self.convert(Grammar.VEGA_LITE, TargetFormat.PDF, spec, vl_version=vl_version)

    def vegalite_to_vega(self, spec: object, vl_version: str | None = None) -> ConversionResult:
        return self.convert(Grammar.VEGA_LITE, TargetFormat.VEGA, spec, vl_version=vl_version)

    # Internals

    def _submit(self, grammar: str, fmt: str, spec_text: object, **params: Any) -> tuple[Operation, Future]:
        operation = lookup(grammar, fmt)
        spec = parse_spec(spec_text, grammar)
        options = resolve_options(
            grammar,
            default_vl_version=self._default_vl_version,
            lenient_version=self._lenient_version,
            **params,
        )
        return operation, self._executor.submit(self._run, operation, spec, options)

    def _run(self, operation: Operation, spec: Any, options: ConversionOptions) -> Any:
        engine = self._engine_factory()
        return dispatch(engine, operation, spec, options)

    def _success(self, operation: Operation, payload: Any, started: float) -> ConversionResult:
        result = encode_success(operation.payload_kind, payload)
        if result.ok:
            logger.debug(
                "Conversion succeeded",
                extra={
                    "operation": operation.name,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
                },
            )
        else:
            logger.warning("Conversion engine returned no payload", extra={"operation": operation.name})
        return result

    def _failure(self, grammar: str, fmt: str, kind: str, error: Exception) -> ConversionResult:
        if isinstance(error, ConversionError):
            logger.info(
                "Conversion failed",
                extra={
                    "grammar": grammar,
                    "format": fmt,
                    "error_type": type(error).__name__,
                    "error": error.message,
                },
            )
            return encode_failure(kind, error.message)
        logger.error(
            "Unexpected error during conversion",
            extra={"grammar": grammar, "format": fmt, "error_type": type(error).__name__},
            exc_info=True,
        )
        return encode_failure(kind, str(error) or type(error).__name__)
