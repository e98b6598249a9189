"""
FastAPI application entrypoint.

Registers the /api router, mounts the frontend assets, configures CORS,
initializes telemetry, and creates the retrieval client on startup.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.core.config import Settings, get_settings
from app.core.telemetry import setup_telemetry
from app.routers import chat
from app.services.retrieval import AutoRAGClient, RetrievalClient

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    retrieval_client: RetrievalClient | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment if omitted.
        retrieval_client: Search backend to use instead of the AutoRAG client.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        """
        Application lifespan handler.
        Initializes the retrieval client on startup, closes it on shutdown.
        """
        # Configure logging
        logging.basicConfig(level=settings.log_level)

        # Initialize telemetry
        setup_telemetry(settings.otel_exporter_otlp_endpoint)

        # Store in app state for dependency injection
        client = retrieval_client or AutoRAGClient(settings)
        application.state.settings = settings
        application.state.retrieval_client = client

        logger.info("Shipment Tracking Assistant started (backend: %s).", settings.autorag_name)
        try:
            yield
        finally:
            if retrieval_client is None:
                await client.aclose()
            logger.info("Shipment Tracking Assistant shutting down.")

    application = FastAPI(
        title="Shipment Tracking Assistant",
        description="Chat gateway in front of a shipment tracking RAG backend.",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routes first; everything else falls through to the frontend assets
    application.include_router(chat.router)
    application.router.routes.extend(chat.fallback_routes)
    application.mount(
        "/",
        StaticFiles(directory=settings.static_dir, html=True, check_dir=False),
        name="assets",
    )

    return application


app = create_app()
