from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from guardpost.infrastructure.config.settings import Settings, get_settings
from guardpost.infrastructure.persistence.database import Database
from guardpost.presentation.api.dependencies import get_app_settings, get_db
from guardpost.presentation.api.errors import register_exception_handlers
from guardpost.presentation.api.v1.routes import api_router
from guardpost.presentation.middleware.correlation import CorrelationIDMiddleware
from guardpost.presentation.middleware.rate_limit import configure_rate_limiting
from guardpost.presentation.middleware.security import (
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
)
from guardpost.presentation.middleware.timeout import TimeoutMiddleware
from guardpost.shared.telemetry.logging import get_logger, setup_logging
from guardpost.shared.telemetry.telemetry import TelemetryConfig

logger = get_logger(__name__)


def _setup_telemetry(app: FastAPI, settings: Settings, database: Database) -> TelemetryConfig | None:
    if not settings.telemetry_enabled:
        logger.info("Distributed tracing disabled in configuration")
        return None

    try:
        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.environment,
            enabled=True,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_fastapi(app)
        telemetry.instrument_sqlalchemy(database.engine)
        telemetry.instrument_logging()
    except Exception as e:
        logger.warning("Telemetry initialization failed: %s. Continuing without tracing.", e)
        return None

    logger.info("Distributed tracing initialized: exporter=%s", settings.telemetry_exporter)
    return telemetry


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Build the application.

    The database handle is created here (or injected by tests) and stored on
    app.state; request dependencies read it from there.
    """
    settings = settings or get_settings()
    database = database or Database.from_settings(settings)
    setup_logging(settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan events for application initialization and cleanup"""
        if settings.auto_create_schema:
            await database.create_all()
            logger.info("Database schema created from metadata")

        yield

        telemetry = app.state.telemetry
        if telemetry:
            try:
                telemetry.shutdown()
            except Exception as e:
                logger.warning("Error during telemetry shutdown: %s", e)

        await database.dispose()
        logger.info("Database engine disposed")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    configure_rate_limiting(app, settings)
    register_exception_handlers(app)

    # Middleware runs in reverse order of registration
    app.add_middleware(RequestSizeLimitMiddleware, max_request_size=settings.max_request_size)
    app.add_middleware(TimeoutMiddleware, timeout=settings.request_timeout_seconds)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, environment=settings.environment)
    # allow_credentials=True requires specific origins, not a wildcard
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root(app_settings: Settings = Depends(get_app_settings)):
        return {
            "name": app_settings.app_name,
            "version": app_settings.app_version,
            "status": "running",
        }

    @app.get("/health")
    async def health_check(db: AsyncSession = Depends(get_db)):
        """
        Health check endpoint for load balancers and monitoring.

        Returns:
        - 200 OK if the API and database are reachable
        - 503 Service Unavailable otherwise
        """
        checks: dict[str, Any] = {"api": True, "database": False}
        try:
            await db.execute(text("SELECT 1"))
            checks["database"] = True
        except SQLAlchemyError as e:
            logger.error("Health check database probe failed: %s", e)
            return JSONResponse(status_code=503, content={"status": "unhealthy", "checks": checks})

        return {"status": "healthy", "checks": checks}

    app.state.telemetry = _setup_telemetry(app, settings, database)
    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn, reloading on change in debug mode"""
    settings = get_settings()
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    run()
