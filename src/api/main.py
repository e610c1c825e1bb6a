"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from iam.presentation import router as iam_router
from infrastructure.database import close_database_connections
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from notes.presentation import router as notes_router


@asynccontextmanager
async def billnotes_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)
    probe = DefaultStartupProbe()
    probe.application_started(app_name=settings.app_name, version=__version__)

    yield

    await close_database_connections()
    probe.application_stopped(app_name=settings.app_name)


app = FastAPI(
    title="Billnotes API",
    description="Billable work notes with identity-provider sign-in",
    version=__version__,
    lifespan=billnotes_lifespan,
)

# Include bounded context routes
app.include_router(iam_router)
app.include_router(notes_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
