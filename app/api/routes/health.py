from __future__ import annotations

from fastapi import APIRouter, Depends

from app.adapters.boundaries.geojson import BoundaryRegistry
from app.adapters.storage.in_memory import InMemoryDreamRepository
from app.core.services import get_boundary_registry, get_repository

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(
    repository: InMemoryDreamRepository = Depends(get_repository),
    registry: BoundaryRegistry = Depends(get_boundary_registry),
) -> dict:
    """Liveness check with the sizes of the loaded datasets."""

    return {"status": "ok", "dreams": len(repository), "regions": len(registry)}
