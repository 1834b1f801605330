"""Process-wide service instances for FastAPI dependencies.

Instances are cached in-module so the in-memory store survives across
requests. Tests replace them through ``app.dependency_overrides`` or
``reset_services()``.
"""

from __future__ import annotations

import logging

from app.adapters.boundaries.geojson import BoundaryRegistry
from app.adapters.classifier.factory import create_classifier
from app.adapters.storage.in_memory import InMemoryDreamRepository
from app.core.config import settings
from app.core.rate_limit import get_rate_limit_policy
from app.services.dream_service import DreamService
from app.services.region_service import RegionService
from app.utils.simple_cache import SimpleTTLCache

logger = logging.getLogger(__name__)

_repository: InMemoryDreamRepository | None = None
_registry: BoundaryRegistry | None = None
_dream_service: DreamService | None = None
_region_service: RegionService | None = None


def get_repository() -> InMemoryDreamRepository:
    global _repository

    if _repository is None:
        if settings.app.seed_demo_dreams:
            _repository = InMemoryDreamRepository.with_seed_data()
        else:
            _repository = InMemoryDreamRepository()
        logger.info("store.initialized", extra={"size": len(_repository)})
    return _repository


def get_boundary_registry() -> BoundaryRegistry:
    global _registry

    if _registry is None:
        _registry = BoundaryRegistry.from_file(settings.app.boundaries_path)
    return _registry


def get_dream_service() -> DreamService:
    global _dream_service

    if _dream_service is None:
        _dream_service = DreamService(
            repository=get_repository(),
            classifier=create_classifier(),
            cache=SimpleTTLCache(
                ttl_seconds=settings.app.classification_cache_ttl_seconds,
                max_entries=1024,
            ),
            policy=get_rate_limit_policy(),
            rate_limit_enabled=settings.app.rate_limit_enabled,
            max_dream_chars=settings.app.max_dream_chars,
            list_limit=settings.app.dream_list_limit,
        )
    return _dream_service


def get_region_service() -> RegionService:
    global _region_service

    if _region_service is None:
        _region_service = RegionService(
            repository=get_repository(),
            registry=get_boundary_registry(),
            symbol_limit=settings.app.trending_symbols_limit,
            honor_holes=settings.app.geo_honor_holes,
        )
    return _region_service


def reset_services() -> None:
    """Drop every cached instance (full identity/data reset)."""
    global _repository, _registry, _dream_service, _region_service

    _repository = None
    _registry = None
    _dream_service = None
    _region_service = None
