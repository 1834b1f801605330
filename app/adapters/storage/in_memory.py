"""In-memory dream store.

Notes:
- Per-process only: running multiple workers gives each its own store.
- Thread-safe: uses a lock around shared state.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from typing import Iterable

from app.adapters.storage.base import AbstractDreamRepository
from app.schemas.dream import DreamCategory, DreamRecord, Location
from app.utils.geo_fuzz import jitter

logger = logging.getLogger(__name__)

SEED_SPREAD_DEG = 0.05

# (id, text, category, summary, interpretation, age_ms, lat, lng)
_SEED_ROWS: tuple[tuple[str, str, DreamCategory, str, str, int, float, float], ...] = (
    (
        "seed-1",
        "I was flying over a neon city, but the buildings were made of glass and water.",
        DreamCategory.SURREAL,
        "Flying over a glass and water neon city.",
        "A desire for transparency and fluidity in your waking life.",
        1_000_000,
        35.6762,
        139.6503,
    ),
    (
        "seed-2",
        "Something was chasing me through a dark forest. I couldn't run fast enough.",
        DreamCategory.NIGHTMARE,
        "Being chased in a dark forest.",
        "Unresolved fears are pursuing you. Turn and face them.",
        5_000_000,
        40.7128,
        -74.0060,
    ),
    (
        "seed-3",
        "I met my soulmate in a library that had infinite floors.",
        DreamCategory.ROMANTIC,
        "Meeting a soulmate in an infinite library.",
        "You seek a connection grounded in shared knowledge and eternity.",
        8_000_000,
        51.5074,
        -0.1278,
    ),
    (
        "seed-4",
        "I saw the end of the world, but it was peaceful. The sun turned blue.",
        DreamCategory.PROPHETIC,
        "Peaceful apocalypse with a blue sun.",
        "Change is coming. It is vast, but you are ready to accept it.",
        12_000_000,
        -33.8688,
        151.2093,
    ),
    (
        "seed-5",
        "I was just doing my laundry, but the machine kept eating my socks.",
        DreamCategory.MUNDANE,
        "Washing machine eating socks.",
        "Small frustrations are eating away at your time. Seek efficiency.",
        200_000,
        48.8566,
        2.3522,
    ),
)


def build_seed_dreams(now_ms: int, rng: random.Random | None = None) -> list[DreamRecord]:
    """Demo records with timestamps relative to ``now_ms`` and jittered locations."""
    dreams = []
    for dream_id, text, category, summary, interpretation, age_ms, lat, lng in _SEED_ROWS:
        seed_lat, seed_lng = jitter(lat, lng, SEED_SPREAD_DEG, rng)
        dreams.append(
            DreamRecord(
                id=dream_id,
                text=text,
                category=category,
                summary=summary,
                interpretation=interpretation,
                timestamp=now_ms - age_ms,
                location=Location(lat=seed_lat, lng=seed_lng),
            )
        )
    return dreams


class InMemoryDreamRepository(AbstractDreamRepository):
    """Dream store kept in a process-local list.

    Records are kept newest-first, mirroring how the map consumes them.
    """

    def __init__(self, dreams: Iterable[DreamRecord] | None = None) -> None:
        self._lock = threading.RLock()
        self._dreams: list[DreamRecord] = sorted(
            dreams or [], key=lambda d: d.timestamp, reverse=True
        )
        self._by_id: dict[str, DreamRecord] = {d.id: d for d in self._dreams}

    @classmethod
    def with_seed_data(cls, *, rng: random.Random | None = None) -> "InMemoryDreamRepository":
        now_ms = int(time.time() * 1000)
        return cls(build_seed_dreams(now_ms, rng))

    def __len__(self) -> int:
        with self._lock:
            return len(self._dreams)

    async def save(self, dream: DreamRecord) -> DreamRecord:
        with self._lock:
            if dream.id in self._by_id:
                raise ValueError(f"duplicate dream id: {dream.id}")
            self._dreams.insert(0, dream)
            self._by_id[dream.id] = dream
            size = len(self._dreams)

        logger.debug("store.saved", extra={"dream_id": dream.id, "size": size})
        return dream

    async def get(self, dream_id: str) -> DreamRecord | None:
        with self._lock:
            return self._by_id.get(dream_id)

    async def list_recent(self, *, limit: int | None = None) -> list[DreamRecord]:
        with self._lock:
            ordered = sorted(self._dreams, key=lambda d: d.timestamp, reverse=True)
        return ordered if limit is None else ordered[:limit]

    async def timestamps_for(self, owner_id: str, *, since_ms: int | None = None) -> list[int]:
        with self._lock:
            return sorted(
                d.timestamp
                for d in self._dreams
                if d.owner_id == owner_id and (since_ms is None or d.timestamp > since_ms)
            )

    def clear(self) -> None:
        """Remove every record (full identity/data reset)."""
        with self._lock:
            self._dreams.clear()
            self._by_id.clear()
