from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response

from chart_service import __version__
from chart_service.config import Settings
from chart_service.conversion import ConversionService, Grammar, TargetFormat
from chart_service.conversion.dispatch import OPERATIONS
from chart_service.conversion.interfaces import PayloadKind
from chart_service.logging_config import get_logger, setup_logging

SETTINGS = Settings.from_env()

app = FastAPI(
    title="Chart Conversion Service",
    version=__version__,
    description=(
        "RESTful API for converting Vega and Vega-Lite chart specifications "
        "into SVG, HTML, PNG, JPEG, PDF, or compiled Vega."
    ),
)

logger = get_logger(__name__)

MEDIA_TYPES = {
    TargetFormat.SVG: "image/svg+xml",
    TargetFormat.HTML: "text/html",
    TargetFormat.PNG: "image/png",
    TargetFormat.JPEG: "image/jpeg",
    TargetFormat.PDF: "application/pdf",
    TargetFormat.VEGA: "application/json",
}

SERVICE: ConversionService | None = None


def build_service(settings: Settings) -> ConversionService:
    return ConversionService.from_settings(settings)


@app.on_event("startup")
async def _startup() -> None:
    setup_logging(json_output=SETTINGS.log_json, log_level=SETTINGS.log_level)
    global SERVICE
    SERVICE = build_service(SETTINGS)
    logger.info("Conversion service started", extra={"workers": SETTINGS.workers})


@app.on_event("shutdown")
async def _shutdown() -> None:
    global SERVICE
    if SERVICE is not None:
        SERVICE.close()
        SERVICE = None


@app.get("/health")
def health() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/operations")
def list_operations() -> list[dict[str, str]]:
    return [
        {"grammar": op.grammar, "format": op.fmt, "payload": op.payload_kind}
        for op in OPERATIONS.values()
    ]


@app.post("/convert/{grammar}/{fmt}")
async def convert(
    grammar: str,
    fmt: str,
    request: Request,
    scale: float | None = Query(None),
    ppi: float | None = Query(None),
    quality: int | None = Query(None),
    bundle: bool | None = Query(None),
    renderer: str | None = Query(None),
    vl_version: str | None = Query(None),
) -> Response:
    """Convert the spec sent as the raw request body.

    Text results come back as JSON ``{"status", "payload"}``. Binary results
    come back as raw bytes on success. Failures are always JSON with 422.
    """
    if (grammar, fmt) not in OPERATIONS:
        raise HTTPException(
            status_code=404,
            detail={"code": "not_found", "message": f"no conversion from {grammar} to {fmt}"},
        )

    max_bytes = SETTINGS.max_spec_kb * 1024
    too_large = HTTPException(
        status_code=413,
        detail={"code": "payload_too_large", "message": f"spec exceeds {SETTINGS.max_spec_kb} KB"},
    )
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise too_large

    # Content-Length may be absent (chunked) or wrong, so check the buffered body too
    body = await request.body()
    if len(body) > max_bytes:
        raise too_large

    global SERVICE
    assert SERVICE is not None

    params: dict[str, object] = {
        "scale": scale,
        "ppi": ppi,
        "quality": quality,
        "bundle": bundle,
        "renderer": renderer,
    }
    if grammar == Grammar.VEGA_LITE:
        params["vl_version"] = vl_version

    result = await SERVICE.aconvert(grammar, fmt, body, **params)  # type: ignore[arg-type]

    if not result.ok:
        return JSONResponse(status_code=422, content={"status": result.status, "payload": result.payload})
    if result.kind == PayloadKind.BINARY:
        return Response(
            content=result.payload,
            media_type=MEDIA_TYPES[fmt],
            headers={"X-Conversion-Status": result.status},
        )
    return JSONResponse(content={"status": result.status, "payload": result.payload})


def run() -> None:
    """Run a development ASGI server using uvicorn.

    Exposes the app at host:port (default 0.0.0.0:8080). Set PORT env var to override.
    """
    import uvicorn

    uvicorn.run("chart_service.webapi:app", host=SETTINGS.host, port=SETTINGS.port, reload=SETTINGS.reload)


if __name__ == "__main__":
    run()
