"""Pydantic schemas for region boundaries and aggregate statistics."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.dream import DreamCategory

NO_DOMINANT_THEME = "N/A"

DominantTheme = DreamCategory | Literal["N/A"]


class BoundaryGeometry(BaseModel):
    """GeoJSON-style geometry.

    Validation is deliberately loose: an unknown ``type`` or missing
    ``coordinates`` is accepted here and evaluates as "not contained".
    """

    model_config = ConfigDict(frozen=True)

    type: str | None = None
    coordinates: Any = None


class RegionBoundary(BaseModel):
    """A named country boundary, already normalized by the boundary provider."""

    model_config = ConfigDict(frozen=True)

    name: str
    geometry: BoundaryGeometry | None = None


class TrendingSymbol(BaseModel):
    model_config = ConfigDict(frozen=True)

    word: str = Field(..., description="Hashtag-style token, e.g. '#whale'.")
    count: int = Field(..., ge=1)


class RegionStats(BaseModel):
    """Per-region aggregate, recomputed on every request."""

    model_config = ConfigDict(frozen=True)

    country_name: str
    total_dreams: int = Field(..., ge=0)
    dominant_theme: DominantTheme
    mood_score: int = Field(..., ge=-100, le=100)
    trending_symbols: list[TrendingSymbol] = Field(default_factory=list)


class RegionStatsRequest(BaseModel):
    """Inline boundary submitted for ad-hoc aggregation."""

    name: str = Field(..., min_length=1)
    geometry: BoundaryGeometry | None = None
    symbol_limit: int | None = Field(default=None, ge=1, le=50)


class RegionThemesResponse(BaseModel):
    themes: dict[str, DominantTheme]
