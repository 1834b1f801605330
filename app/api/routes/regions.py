from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.services import get_region_service
from app.schemas.region import (
    RegionBoundary,
    RegionStats,
    RegionStatsRequest,
    RegionThemesResponse,
)
from app.services.region_service import RegionService

router = APIRouter(tags=["Regions"])


@router.get("/regions", response_model=list[str])
def list_regions(service: RegionService = Depends(get_region_service)) -> list[str]:
    return service.region_names()


@router.get("/regions/themes", response_model=RegionThemesResponse)
async def region_themes(
    service: RegionService = Depends(get_region_service),
) -> RegionThemesResponse:
    """Dominant theme per loaded region, used to color the map."""
    return RegionThemesResponse(themes=await service.themes())


@router.post("/regions/stats", response_model=RegionStats)
async def stats_for_inline_boundary(
    payload: RegionStatsRequest,
    service: RegionService = Depends(get_region_service),
) -> RegionStats:
    """Aggregate dreams inside a boundary supplied in the request body."""
    boundary = RegionBoundary(name=payload.name, geometry=payload.geometry)
    return await service.stats_for_boundary(boundary, symbol_limit=payload.symbol_limit)


@router.get("/regions/{name}/stats", response_model=RegionStats)
async def stats_for_region(
    name: str,
    service: RegionService = Depends(get_region_service),
) -> RegionStats:
    """Aggregate dreams inside a loaded country boundary."""
    return await service.stats_for(name)
