"""
Main FastAPI application for ABOGA.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aboga.api.v1 import auth, chat_sessions, lawyers
from aboga.core.config import Config, get_config, set_config
from aboga.core.database import build_session_factory, create_database_engine, create_tables, ping_database
from aboga.core.exceptions import AbogaError
from aboga.core.response_utils import ResponseTimer, error_envelope, error_from_exception, status_for
from aboga.schemas import StandardResponse
from aboga.services.genai_client import REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

API_VERSION_PREFIX = "/api/v1"


def configure_logging(config: Config) -> None:
    logging.basicConfig(
        level=logging.DEBUG if config.application.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    config = get_config()
    logger.info("Starting ABOGA application...")

    app.state.http_client = httpx.AsyncClient(timeout=REQUEST_TIMEOUT)
    app.state.engine = None

    if config.uses_sql_backend():
        engine = create_database_engine(config.backend, debug=config.application.debug)
        create_tables(engine)
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)
        logger.info("SQL data backend initialized")
    else:
        logger.info(f"Using hosted data backend at {config.backend.supabase_url}")

    logger.info(f"Assistant strategy: {config.application.assistant_strategy}")
    logger.info("Application startup completed successfully")

    yield

    # Shutdown
    logger.info("Shutting down ABOGA application...")
    await app.state.http_client.aclose()
    if app.state.engine is not None:
        app.state.engine.dispose()


def envelope_json(envelope: StandardResponse) -> JSONResponse:
    return JSONResponse(status_code=envelope.metadata.statusCode, content=envelope.model_dump(mode="json"))


def create_app(config: Optional[Config] = None) -> FastAPI:
    """
    Build the application.

    Configuration is loaded here so missing backend credentials stop the
    process before it serves anything.
    """
    if config is not None:
        set_config(config)
    config = get_config()
    configure_logging(config)

    app = FastAPI(
        title=config.application.app_name,
        description=config.application.app_description,
        version=config.application.app_version,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        start_time = time.time()
        logger.info(f"Request: {request.method} {request.url.path}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(f"Response: {response.status_code} - {process_time:.3f}s")
        return response

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """HTTP exception handler."""
        logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")

        # Details built by http_error are already an envelope
        if isinstance(exc.detail, dict) and "metadata" in exc.detail:
            return JSONResponse(status_code=exc.status_code, content=exc.detail)
        return envelope_json(error_envelope(str(exc.detail), status_code=exc.status_code))

    @app.exception_handler(AbogaError)
    async def aboga_error_handler(request: Request, exc: AbogaError):
        """Domain errors that escaped a route; the class decides the status."""
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(f"{exc.__class__.__name__}: {exc.message}")
        else:
            logger.warning(f"{exc.__class__.__name__}: {exc.message}")
        return envelope_json(error_from_exception(exc, status_code=status_code))

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return envelope_json(error_envelope("Internal server error", status_code=500, errors=[str(exc)]))

    # Health check endpoint
    @app.get("/health", response_model=StandardResponse)
    async def health_check(request: Request):
        """Application health check; pings the database on the SQL backend."""
        with ResponseTimer() as timer:
            current = get_config()
            health_data = {
                "status": "healthy",
                "timestamp": time.time(),
                "version": current.application.app_version,
                "environment": current.application.environment,
                "data_backend": current.backend.data_backend,
                "assistant_strategy": current.application.assistant_strategy,
            }

            engine = getattr(request.app.state, "engine", None)
            if engine is not None:
                database_ok = ping_database(engine)
                health_data["database"] = "connected" if database_ok else "unavailable"
                if not database_ok:
                    health_data["status"] = "degraded"
                    return timer.error("Database unavailable", 503, details=health_data)

            return timer.success(health_data)

    # Include API routers
    app.include_router(auth.router, prefix=f"{API_VERSION_PREFIX}/auth", tags=["Authentication"])
    app.include_router(chat_sessions.router, prefix=f"{API_VERSION_PREFIX}/chat", tags=["Chat Sessions"])
    app.include_router(lawyers.router, prefix=f"{API_VERSION_PREFIX}/lawyers", tags=["Lawyers"])

    return app


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(
        create_app(config),
        host=config.application.api_host,
        port=config.application.api_port,
        log_level=config.application.debug and "debug" or "info"
    )
