"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error envelope handling, and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lingua_relay.api.routes import router as api_router
from lingua_relay.models.schemas import HealthResponse
from lingua_relay.orchestrator import OrchestrationError, get_orchestrator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Ensures the temporary upload directory exists before serving.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    upload_dir = get_orchestrator().upload_dir
    upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Uploads directory ready: {upload_dir}")
    logger.info("Starting LinguaRelay API...")
    yield
    # Shutdown
    logger.info("Shutting down LinguaRelay API...")


async def orchestration_error_handler(request: Request, exc: OrchestrationError) -> JSONResponse:
    """Render an OrchestrationError as its JSON envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.body.model_dump(mode="json", exclude_none=True),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="LinguaRelay API",
        description=(
            "Document translation and multilingual chat backed by a hosted "
            "language model. Extracts text from uploaded PDF or TXT files, "
            "truncates it, and returns the model's translation."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.add_exception_handler(OrchestrationError, orchestration_error_handler)
    application.include_router(api_router)

    @application.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Report liveness. No dependencies are checked."""
        return HealthResponse(
            services={"fileTranslation": "active", "chat": "active"},
            timestamp=datetime.now(UTC),
        )

    return application


app = create_app()
