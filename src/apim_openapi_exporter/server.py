"""HTTP service exposing BuildOpenAPISpec."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from apim_openapi_exporter.config import Settings, get_settings
from apim_openapi_exporter.errors import ExporterError, MalformedGraphError
from apim_openapi_exporter.service import (
    BuildOpenAPISpecRequest,
    BuildOpenAPISpecResponse,
    build_openapi_spec,
)

logger = logging.getLogger("apim_openapi_exporter")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="APIM OpenAPI Exporter",
        description="Builds OpenAPI documents from API route graphs.",
        version="1.0.0",
    )

    @app.exception_handler(ExporterError)
    async def exporter_error_handler(request: Request, exc: ExporterError):
        status_code = 400 if isinstance(exc, MalformedGraphError) else 500
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status_code,
            content={"detail": str(exc), "error": type(exc).__name__},
        )

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.post("/v1/openapi:build", response_model=BuildOpenAPISpecResponse)
    def build_spec(body: BuildOpenAPISpecRequest):
        graph = body.api_graph
        response = build_openapi_spec(body, on_conflict=settings.on_conflict)
        logger.info(
            "built OpenAPI spec: %d segments, %d operations",
            len(graph.segments),
            len(graph.operations),
        )
        return response

    return app
