"""Dream storage adapters."""

from app.adapters.storage.base import AbstractDreamRepository
from app.adapters.storage.in_memory import InMemoryDreamRepository

__all__ = ["AbstractDreamRepository", "InMemoryDreamRepository"]
