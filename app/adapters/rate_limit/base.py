"""Submission history interfaces.

The limiter depends on this abstraction rather than a concrete store, so the
same admission logic works whether history comes from a remote query or a
local filter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractSubmissionHistory(ABC):
    """Identity-scoped source of past submission timestamps."""

    @abstractmethod
    async def timestamps_for(self, owner_id: str, *, since_ms: int | None = None) -> list[int]:
        """Return submission timestamps for one owner id.

        Args:
            owner_id: Anonymous submitter id.
            since_ms: If given, only timestamps strictly greater than this
                value need to be returned. Implementations may return more;
                the limiter filters again.

        Returns:
            Epoch-millisecond timestamps, in any order.
        """
        raise NotImplementedError
