from __future__ import annotations

import logging

from fastapi import FastAPI

from accident_analyzer.config import get_log_level
from accident_analyzer.schemas.accident_analysis import HealthResponse


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()

    application = FastAPI(
        title="Accident Analyzer API",
        version="1.0.0",
    )

    from accident_analyzer.api.routers import accident_analysis_router

    application.include_router(accident_analysis_router)

    @application.get("/health")
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="ok")

    logging.getLogger(__name__).info("Accident analyzer API initialised")
    return application


app = create_app()
