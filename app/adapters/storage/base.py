"""Dream store interface.

Services depend on this abstraction so the in-memory store can later be
replaced by a remote database without touching the API layer.
"""

from __future__ import annotations

from abc import abstractmethod

from app.adapters.rate_limit.base import AbstractSubmissionHistory
from app.schemas.dream import DreamRecord


class AbstractDreamRepository(AbstractSubmissionHistory):
    """Persistence port for dream records.

    A dream store is also the natural submission-history source for the
    limiter, so it implements ``AbstractSubmissionHistory`` as well.
    """

    @abstractmethod
    async def save(self, dream: DreamRecord) -> DreamRecord:
        """Persist a new record and return it."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, dream_id: str) -> DreamRecord | None:
        raise NotImplementedError

    @abstractmethod
    async def list_recent(self, *, limit: int | None = None) -> list[DreamRecord]:
        """Return records newest first.

        Args:
            limit: Maximum number of records (None for all).
        """
        raise NotImplementedError
