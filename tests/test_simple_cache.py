"""Unit tests for the in-memory SimpleTTLCache."""

import threading
from typing import Any

from app.schemas.dream import AnalysisResult, DreamCategory, TranslationResult
from app.utils.simple_cache import SimpleTTLCache, build_cache_key


class FakeTime:
    """Deterministic clock used to test expiration logic."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start

    def time(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


def _sample_analysis(**overrides: Any) -> AnalysisResult:
    base: dict[str, Any] = {
        "category": DreamCategory.SURREAL,
        "summary": "Melting clocks in a desert.",
        "interpretation": "Time feels fluid right now.",
    }
    base.update(overrides)
    return AnalysisResult(**base)


def _sample_translation(text: str = "Hola") -> TranslationResult:
    return TranslationResult(translated_text=text, translated_interpretation="Interpretación")


def test_build_cache_key_is_stable_and_sensitive_to_changes() -> None:
    key1 = build_cache_key("I was flying", salt="classify:keyword")
    key2 = build_cache_key("I was flying", salt="classify:keyword")
    key3 = build_cache_key("I was falling", salt="classify:keyword")
    key4 = build_cache_key("I was flying", salt="classify:openai")

    assert key1 == key2
    assert key1 != key3
    assert key1 != key4


def test_build_cache_key_separates_parts() -> None:
    assert build_cache_key("ab", "c") != build_cache_key("a", "bc")


def test_set_and_get_updates_hit_miss_counters() -> None:
    cache = SimpleTTLCache(ttl_seconds=10)

    assert cache.get("missing") is None

    analysis = _sample_analysis()
    cache.set("key", analysis)

    assert cache.get("key") == analysis

    stats = cache.stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1


def test_expired_entry_is_evicted() -> None:
    fake_time = FakeTime()
    cache = SimpleTTLCache(ttl_seconds=5, clock=fake_time.time)
    cache.set("key", _sample_analysis())

    fake_time.advance(6)

    assert cache.get("key") is None
    stats = cache.stats()
    assert stats["evictions"] == 1


def test_lru_eviction_removes_least_recently_used() -> None:
    cache = SimpleTTLCache(ttl_seconds=100, max_entries=2)
    a, b, c = _sample_translation("a"), _sample_translation("b"), _sample_translation("c")
    cache.set("a", a)
    cache.set("b", b)

    # Access "a" so that "b" becomes least recently used
    assert cache.get("a") == a

    cache.set("c", c)

    assert cache.get("a") == a
    assert cache.get("c") == c
    assert cache.get("b") is None


def test_clear_resets_state() -> None:
    cache = SimpleTTLCache(ttl_seconds=10)
    cache.set("a", _sample_analysis())
    cache.set("b", _sample_translation())
    cache.get("a")

    cache.clear()

    stats = cache.stats()
    assert stats["entries"] == 0
    assert stats["hits"] == 0
    assert stats["misses"] == 0
    assert stats["evictions"] == 0


def test_thread_safety_under_concurrent_sets() -> None:
    cache = SimpleTTLCache(ttl_seconds=30, max_entries=None)
    total_keys = 50

    def _writer(idx: int) -> None:
        cache.set(f"k-{idx}", _sample_translation(f"t-{idx}"))

    threads = [threading.Thread(target=_writer, args=(i,)) for i in range(total_keys)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert cache.stats()["entries"] == total_keys
    # Ensure a random subset is readable
    assert cache.get("k-0") == _sample_translation("t-0")
    assert cache.get("k-25") == _sample_translation("t-25")
    assert cache.get("k-49") == _sample_translation("t-49")
