"""Region statistics service.

Binds the pure aggregation functions to the loaded boundary registry and
the current dream snapshot. Nothing is cached: every call re-reads the
store and recomputes.
"""

from __future__ import annotations

import logging

from app.adapters.boundaries.geojson import BoundaryRegistry
from app.adapters.storage.base import AbstractDreamRepository
from app.core.errors import NotFoundAppError
from app.schemas.region import DominantTheme, RegionBoundary, RegionStats
from app.services.aggregation_service import (
    DEFAULT_SYMBOL_LIMIT,
    compute_region_stats,
    compute_theme_map,
)

logger = logging.getLogger(__name__)


class RegionService:
    def __init__(
        self,
        repository: AbstractDreamRepository,
        registry: BoundaryRegistry,
        *,
        symbol_limit: int = DEFAULT_SYMBOL_LIMIT,
        honor_holes: bool = False,
    ) -> None:
        self.repository = repository
        self.registry = registry
        self.symbol_limit = symbol_limit
        self.honor_holes = honor_holes

    def region_names(self) -> list[str]:
        return self.registry.names()

    async def stats_for_boundary(
        self,
        boundary: RegionBoundary,
        *,
        symbol_limit: int | None = None,
    ) -> RegionStats:
        """Aggregate the current snapshot against an arbitrary boundary."""
        dreams = await self.repository.list_recent()
        stats = compute_region_stats(
            boundary.name,
            boundary,
            dreams,
            symbol_limit=symbol_limit or self.symbol_limit,
            honor_holes=self.honor_holes,
        )
        logger.info(
            "region.stats_computed",
            extra={
                "region": boundary.name,
                "total_dreams": stats.total_dreams,
                "snapshot_size": len(dreams),
            },
        )
        return stats

    async def stats_for(self, name: str) -> RegionStats:
        """Aggregate for a named boundary from the registry.

        Raises:
            NotFoundAppError: If no boundary with that name is loaded.
        """
        boundary = self.registry.get(name)
        if boundary is None:
            raise NotFoundAppError(
                code="region_not_found",
                message=f"Unknown region: {name}",
                details={"region": name},
            )
        return await self.stats_for_boundary(boundary)

    async def themes(self) -> dict[str, DominantTheme]:
        dreams = await self.repository.list_recent()
        return compute_theme_map(self.registry, dreams, honor_holes=self.honor_holes)
