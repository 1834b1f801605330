"""Regional aggregation over dream records.

Attributes fuzzed dream locations to a country boundary and summarizes the
matching subset: dominant category, mood score and trending symbols. Every
function here is pure; results are recomputed from the inputs on each call.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Iterable, Sequence

from app.schemas.dream import CATEGORY_SENTIMENT, DreamCategory, DreamRecord
from app.schemas.region import (
    NO_DOMINANT_THEME,
    DominantTheme,
    RegionBoundary,
    RegionStats,
    TrendingSymbol,
)
from app.services.geometry import is_point_in_region
from app.utils.text_normalizer import extract_symbols

logger = logging.getLogger(__name__)

DEFAULT_SYMBOL_LIMIT = 4


def _round_half_away_from_zero(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def filter_region_dreams(
    boundary: RegionBoundary,
    dreams: Iterable[DreamRecord],
    *,
    honor_holes: bool = False,
) -> list[DreamRecord]:
    return [
        dream
        for dream in dreams
        if is_point_in_region(
            dream.location.lat, dream.location.lng, boundary, honor_holes=honor_holes
        )
    ]


def dominant_theme(dreams: Sequence[DreamRecord]) -> DominantTheme:
    """Return the most frequent category, or ``"N/A"`` for no dreams.

    Ties go to the category declared first in ``DreamCategory``.
    """
    counts = Counter(dream.category for dream in dreams)
    winner: DominantTheme = NO_DOMINANT_THEME
    best = 0
    for category in DreamCategory:
        if counts[category] > best:
            best = counts[category]
            winner = category
    return winner


def mood_score(dreams: Sequence[DreamRecord]) -> int:
    """Mean category sentiment scaled to an integer in [-100, 100].

    Rounds half away from zero. An empty sequence scores 0.
    """
    if not dreams:
        return 0
    total = sum(CATEGORY_SENTIMENT.get(dream.category, 0.0) for dream in dreams)
    score = _round_half_away_from_zero(total / len(dreams) * 100)
    return max(-100, min(100, score))


def trending_symbols(
    dreams: Iterable[DreamRecord],
    limit: int = DEFAULT_SYMBOL_LIMIT,
) -> list[TrendingSymbol]:
    """Rank the most frequent non-stop-word tokens across dream texts.

    Ordering is by count descending; equal counts keep first-appearance order.

    Args:
        dreams: Records whose ``text`` is mined.
        limit: Maximum number of symbols returned.

    Returns:
        Up to ``limit`` symbols formatted as ``#token``.
    """
    if limit < 1:
        return []

    frequency: Counter[str] = Counter()
    for dream in dreams:
        frequency.update(extract_symbols(dream.text))

    # Counter keeps insertion order and sorted() is stable
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return [TrendingSymbol(word=f"#{word}", count=count) for word, count in ranked[:limit]]


def compute_region_stats(
    country_name: str,
    boundary: RegionBoundary,
    all_dreams: Iterable[DreamRecord],
    *,
    symbol_limit: int = DEFAULT_SYMBOL_LIMIT,
    honor_holes: bool = False,
) -> RegionStats:
    """Compute the statistics summary for dreams inside one boundary.

    Args:
        country_name: Name echoed back in the result.
        boundary: Region geometry to filter by.
        all_dreams: Full snapshot of dream records.
        symbol_limit: Maximum number of trending symbols.
        honor_holes: Exclude dreams located inside polygon holes.

    Returns:
        RegionStats; an empty region yields zero counts, ``"N/A"`` theme
        and no symbols.
    """
    region_dreams = filter_region_dreams(boundary, all_dreams, honor_holes=honor_holes)

    if not region_dreams:
        return RegionStats(
            country_name=country_name,
            total_dreams=0,
            dominant_theme=NO_DOMINANT_THEME,
            mood_score=0,
            trending_symbols=[],
        )

    return RegionStats(
        country_name=country_name,
        total_dreams=len(region_dreams),
        dominant_theme=dominant_theme(region_dreams),
        mood_score=mood_score(region_dreams),
        trending_symbols=trending_symbols(region_dreams, symbol_limit),
    )


def compute_theme_map(
    boundaries: Iterable[RegionBoundary],
    all_dreams: Sequence[DreamRecord],
    *,
    honor_holes: bool = False,
) -> dict[str, DominantTheme]:
    """Dominant theme for every boundary, keyed by region name.

    Used to color regions on the map. Regions without dreams map to ``"N/A"``.
    """
    themes: dict[str, DominantTheme] = {}
    for boundary in boundaries:
        region_dreams = filter_region_dreams(boundary, all_dreams, honor_holes=honor_holes)
        themes[boundary.name] = dominant_theme(region_dreams)

    logger.info(
        "region.themes_computed",
        extra={
            "regions": len(themes),
            "regions_with_dreams": sum(1 for t in themes.values() if t != NO_DOMINANT_THEME),
            "dreams": len(all_dreams),
        },
    )
    return themes
