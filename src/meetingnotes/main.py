"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meetingnotes.api.errors import register_error_handlers
from meetingnotes.api.routes.router import router as api_router
from meetingnotes.api.routes.schemas import HealthResponse
from meetingnotes.config import get_settings
from meetingnotes.infrastructure.mailer import Mailer
from meetingnotes.services.summarizer import SummarizerService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    from meetingnotes.infrastructure.database import engine

    logger.info("Starting meeting notes application...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"CORS origin: {settings.cors_origin}")

    # Startup: clients live for the whole process
    app.state.summarizer = SummarizerService()
    app.state.mailer = Mailer()

    yield

    # Shutdown: release connections
    await app.state.summarizer.close()
    await engine.dispose()
    logger.info("Shutting down meeting notes application...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    docs_kwargs = {}
    if settings.is_production:
        docs_kwargs = {"docs_url": None, "redoc_url": None, "openapi_url": None}

    app = FastAPI(
        title="Meeting Notes",
        description="AI meeting transcript summaries with editing and email sharing",
        version="0.1.0",
        lifespan=lifespan,
        **docs_kwargs,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(api_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Liveness check."""
        return HealthResponse(status="OK", timestamp=datetime.now(UTC))

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("meetingnotes.main:app", host=settings.host, port=settings.port)
