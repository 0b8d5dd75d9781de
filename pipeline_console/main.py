"""Application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from pipeline_console import __version__
from pipeline_console.api.container import get_container
from pipeline_console.api.dependencies import limiter
from pipeline_console.api.routes.chat import router as chat_router
from pipeline_console.api.routes.settings import router as settings_router
from pipeline_console.api.routes.stages import router as stages_router
from pipeline_console.api.routes.view import router as view_router
from pipeline_console.shared.logging import setup_logging

log = structlog.get_logger()


def _apply_logging_config(container):
    """Apply logging from container config (stdout + optional file)."""
    c = container.config
    setup_logging(
        level=c.log_level,
        file_path=c.log_file or "",
        rotation_max_mb=c.log_rotation_max_mb,
        rotation_backups=c.log_rotation_backups,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: setup logging. Shutdown: close the pipeline service client."""
    container = get_container()
    _apply_logging_config(container)
    log.info("startup_complete", pipeline_url=container.config.pipeline.base_url)
    yield
    log.info("shutdown_begin")
    try:
        await get_container().gateway.close()
    except Exception:  # noqa: BLE001
        log.debug("gateway_close_error", exc_info=True)
    log.info("shutdown_complete")


app = FastAPI(
    title="rusty-docs console",
    version=__version__,
    description="Operator console for the parse/document/embed/ask repository pipeline",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS
container = get_container()
app.add_middleware(
    CORSMiddleware,
    allow_origins=container.config.security.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(settings_router)
app.include_router(stages_router)
app.include_router(chat_router)
app.include_router(view_router)


@app.get("/health")
async def health() -> dict:
    """Liveness plus the pipeline service this console talks to."""
    config = get_container().config
    return {
        "status": "ok",
        "service": "pipeline-console",
        "version": __version__,
        "pipeline_url": config.pipeline.base_url,
    }
