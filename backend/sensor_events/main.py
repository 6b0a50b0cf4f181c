"""FastAPI application factory and lifespan for the sensor events service."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, settings as default_settings
from .models.database import init_database, make_engine, make_session_factory
from .api.router import build_api_router
from .services.control import ControlState
from .services.event_store import get_variant
from .services.network import local_ip_address

# Configure logging for our app (uvicorn only configures its own loggers)
logging.basicConfig(
    level=default_settings.log_level.upper(),
    format="%(levelname)s:     %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: create the events table, announce the address."""
    cfg: Settings = app.state.settings

    logger.info("Database: %s (%s variant)", cfg.db_path, cfg.variant)
    if init_database(app.state.engine, cfg.variant, fail_fast=cfg.fail_fast_startup):
        logger.info("Database initialized")
    else:
        logger.warning("Events table unavailable; storage requests will fail")

    # Reports the configured port; run() binds exactly that port
    logger.info("Server running at http://%s:%d", local_ip_address(), cfg.port)

    yield

    logger.info("Shutting down...")
    app.state.engine.dispose()
    logger.info("Application shutdown complete")


async def _malformed_body_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400), not 422s."""
    return JSONResponse(
        status_code=400,
        content={"error": "Malformed request body", "details": jsonable_encoder(exc.errors())},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    cfg = settings or default_settings
    variant = get_variant(cfg.variant)

    app = FastAPI(
        title="Sensor Events",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = cfg
    app.state.variant = variant
    app.state.engine = make_engine(cfg.database_url)
    app.state.session_factory = make_session_factory(app.state.engine)
    if variant.has_control:
        app.state.control = ControlState()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _malformed_body_handler)

    # API routes
    app.include_router(build_api_router(variant))

    return app


def run() -> None:
    """Console entry point: serve the default app with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


# Application instance
app = create_app()

if __name__ == "__main__":
    run()
