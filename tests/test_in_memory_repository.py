"""Unit tests for the in-memory dream store."""

import random

import pytest

from app.adapters.storage.in_memory import InMemoryDreamRepository, build_seed_dreams
from factories import make_dream


@pytest.mark.asyncio
async def test_save_and_get() -> None:
    repo = InMemoryDreamRepository()
    dream = make_dream()

    saved = await repo.save(dream)

    assert saved == dream
    assert await repo.get(dream.id) == dream
    assert await repo.get("missing") is None
    assert len(repo) == 1


@pytest.mark.asyncio
async def test_duplicate_id_is_rejected() -> None:
    repo = InMemoryDreamRepository()
    dream = make_dream()
    await repo.save(dream)

    with pytest.raises(ValueError):
        await repo.save(dream)


@pytest.mark.asyncio
async def test_list_recent_is_newest_first() -> None:
    repo = InMemoryDreamRepository()
    old = make_dream(timestamp=1000)
    new = make_dream(timestamp=3000)
    middle = make_dream(timestamp=2000)
    for dream in (old, new, middle):
        await repo.save(dream)

    assert [d.id for d in await repo.list_recent()] == [new.id, middle.id, old.id]
    assert [d.id for d in await repo.list_recent(limit=2)] == [new.id, middle.id]


@pytest.mark.asyncio
async def test_timestamps_scoped_to_owner() -> None:
    repo = InMemoryDreamRepository(
        [
            make_dream(owner_id="alice", timestamp=3000),
            make_dream(owner_id="alice", timestamp=1000),
            make_dream(owner_id="bob", timestamp=2000),
            make_dream(owner_id=None, timestamp=2500),
        ]
    )

    assert await repo.timestamps_for("alice") == [1000, 3000]
    assert await repo.timestamps_for("bob") == [2000]
    assert await repo.timestamps_for("carol") == []


@pytest.mark.asyncio
async def test_timestamps_since_is_exclusive() -> None:
    repo = InMemoryDreamRepository(
        [make_dream(owner_id="alice", timestamp=ts) for ts in (1000, 2000, 3000)]
    )

    assert await repo.timestamps_for("alice", since_ms=2000) == [3000]


@pytest.mark.asyncio
async def test_clear_removes_everything() -> None:
    repo = InMemoryDreamRepository([make_dream(), make_dream()])

    repo.clear()

    assert len(repo) == 0
    assert await repo.list_recent() == []


def test_seed_dreams_are_relative_to_now_and_anonymous() -> None:
    now = 1_700_000_000_000

    seeds = build_seed_dreams(now, random.Random(7))

    assert len(seeds) == 5
    assert all(d.owner_id is None for d in seeds)
    assert all(d.timestamp < now for d in seeds)
    assert len({d.id for d in seeds}) == 5


def test_seed_locations_are_jittered_near_origin() -> None:
    seeds = build_seed_dreams(0, random.Random(1))
    tokyo = next(d for d in seeds if d.id == "seed-1")

    assert abs(tokyo.location.lat - 35.6762) <= 0.05
    assert abs(tokyo.location.lng - 139.6503) <= 0.05


def test_with_seed_data_populates_store() -> None:
    repo = InMemoryDreamRepository.with_seed_data(rng=random.Random(3))

    assert len(repo) == 5
