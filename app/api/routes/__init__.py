from __future__ import annotations

from app.api.routes.dreams import router as dreams_router
from app.api.routes.health import router as health_router
from app.api.routes.identity import router as identity_router
from app.api.routes.regions import router as regions_router

__all__ = ["dreams_router", "health_router", "identity_router", "regions_router"]
