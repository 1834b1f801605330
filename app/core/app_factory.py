"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build isolated instances.
"""

from __future__ import annotations

from fastapi import FastAPI

from app.api.routes import dreams_router, health_router, identity_router, regions_router
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware
from app.core.openapi import apply_openapi_customizations


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Dream Atlas API",
        description=(
            "Anonymous dream submissions, classified and placed on a world map at "
            "a fuzzed location. Provides per-country aggregates (dominant theme, "
            "mood score, trending symbols) and a rolling-window submission limit "
            "per anonymous owner id."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(dreams_router, prefix="/v1")
    app.include_router(regions_router, prefix="/v1")
    app.include_router(identity_router, prefix="/v1")
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
