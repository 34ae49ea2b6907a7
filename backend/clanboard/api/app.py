"""
FastAPI application factory for the clan dashboard backend.

This module:
- Builds the app with lifespan management of the document store
- Configures CORS for the dashboard frontend
- Sets up Logfire observability
- Provides health check endpoints and mounts the API routers
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clanboard import __version__
from clanboard.api.auth import JwtVerifier, TokenVerifier
from clanboard.api.errors import register_error_handlers
from clanboard.api.routes import metrics_router, seasons_router, users_router
from clanboard.config import Settings, get_settings
from clanboard.observability import initialize_logfire
from clanboard.storage import DocumentStore, connect_store, describe_store

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: DocumentStore | None = None,
    verifier: TokenVerifier | None = None,
) -> FastAPI:
    """Build the application; missing collaborators come from settings."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.
        Opens the document store on startup and closes it on shutdown.
        """
        logger.info(f"Starting Clanboard API Server ({settings.environment})")

        if app.state.store is None:
            app.state.store = connect_store(settings.store)

        info = describe_store(settings.store)
        if await _ping(app.state.store):
            logger.info(f"Document store reachable: {info}")
        else:
            logger.error(f"Document store unreachable: {info}")

        if not settings.auth.jwt_secret:
            logger.warning("JWT secret not set - authenticated endpoints will reject every request")

        logger.info("Clanboard API Server startup complete")

        yield

        logger.info("Shutting down Clanboard API Server")
        await app.state.store.close()

    app = FastAPI(
        title="Clanboard API",
        description="Reporting backend for the clan dashboard",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.verifier = verifier or JwtVerifier(settings.auth)

    initialize_logfire(settings, app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # ============================================================================
    # Health Check Endpoints
    # ============================================================================

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        """
        Health check endpoint for load balancers and monitoring.

        Returns:
            dict: Health status of the application and document store
        """
        store_connected = await _ping(app.state.store)

        return {
            "status": "healthy" if store_connected else "degraded",
            "service": "clanboard-api",
            "version": __version__,
            "store": "connected" if store_connected else "disconnected",
            "environment": settings.environment,
        }

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        """Basic API information."""
        return {
            "name": "Clanboard API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    app.include_router(users_router)
    app.include_router(seasons_router)
    app.include_router(metrics_router)

    return app


async def _ping(store: DocumentStore | None) -> bool:
    if store is None:
        return False
    try:
        return await store.ping()
    except Exception as e:
        logger.warning(f"Document store ping failed: {e}")
        return False
