from __future__ import annotations

from typing import List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .router import api_router
from event_ocr.lib.settings import EnvSettings
from event_ocr.service.pipeline_service import PipelineService


def create_app() -> FastAPI:
    settings = EnvSettings()

    swagger_enabled = settings.get_bool("SWAGGER_ENABLED", True)
    docs_url = "/docs" if swagger_enabled else None
    redoc_url = "/redoc" if swagger_enabled else None

    app = FastAPI(
        title="Event OCR API",
        version="0.1.0",
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url="/openapi.json" if swagger_enabled else None,
    )

    # CORS
    raw_origins = settings.get("ALLOWED_CORS_ORIGINS", "*")
    origins: List[str] = [o.strip() for o in raw_origins.split(",") if o.strip()] or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(api_router)

    @app.get("/health", tags=["health"])  # simple health endpoint
    def health() -> dict:
        return {"status": "ok"}

    # One pipeline per app; services hold configuration only.
    app.state.pipeline = PipelineService(settings=settings)

    return app


app = create_app()
