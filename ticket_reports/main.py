"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ticket_reports.api.v1.router import router as v1_router
from ticket_reports.config import Settings, get_settings
from ticket_reports.database import SessionFactory, create_engine, create_session_factory
from ticket_reports.errors import ReportError
from ticket_reports.schemas.common import ErrorResponse

# Configure logging
logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    """Render the error envelope."""
    body = ErrorResponse(error=kind, message=message, timestamp=datetime.now(timezone.utc))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings: Settings = app.state.settings
    engine = None

    # Startup
    logger.info("Starting Ticketing Reports API...")
    if app.state.session_factory is None:
        engine = create_engine(settings)
        app.state.session_factory = create_session_factory(engine)
        logger.info("Database engine created")

    yield

    # Shutdown
    logger.info("Shutting down Ticketing Reports API...")
    if engine is not None:
        await engine.dispose()
        app.state.session_factory = None
        logger.info("Database engine disposed")


def create_app(
    settings: Settings | None = None,
    session_factory: SessionFactory | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        session_factory: Pre-built session factory. When omitted, the
            lifespan creates an engine from settings and disposes it
            on shutdown.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
## Ticketing Reports API

Read-only statistics for the ticketing platform.

### Reports
- **Admin report**: platform-wide users, events, reservations, tickets,
  revenue, users by role, event creation trend and recent activity
- **Organizer report**: totals, recent activity and per-event performance
  for the caller's events

### Authentication
Identity is taken from trusted headers set by the gateway:
`X-User-Role` (Admin, Organizer, User) and `X-User-Id`.
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(v1_router, prefix="/api")

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
        }

    @app.exception_handler(ReportError)
    async def report_exception_handler(request: Request, exc: ReportError):
        """Render report errors in the error envelope."""
        if exc.status_code >= 500:
            logger.error(f"{exc.kind} on {request.url.path}: {exc.message}")
        return error_response(
            exc.status_code,
            exc.kind,
            exc.public_message(settings.DEBUG),
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return error_response(
            500,
            "GenericFailure",
            str(exc) if settings.DEBUG else "Internal Server Error",
        )

    return app


# Create application instance
app = create_app()


def run():
    """Run the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "ticket_reports.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
