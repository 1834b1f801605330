"""Pydantic schemas for dream records and submission payloads."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DreamCategory(str, Enum):
    """Closed set of dream themes, in canonical declaration order."""

    NIGHTMARE = "Nightmare"
    SURREAL = "Surreal"
    ROMANTIC = "Romantic"
    PROPHETIC = "Prophetic"
    MUNDANE = "Mundane"
    LUCID = "Lucid"
    STRESS = "Stress"
    ADVENTURE = "Adventure"


CATEGORY_SENTIMENT: dict[DreamCategory, float] = {
    DreamCategory.NIGHTMARE: -0.9,
    DreamCategory.STRESS: -0.7,
    DreamCategory.MUNDANE: 0.0,
    DreamCategory.SURREAL: 0.2,
    DreamCategory.PROPHETIC: 0.4,
    DreamCategory.ADVENTURE: 0.7,
    DreamCategory.LUCID: 0.8,
    DreamCategory.ROMANTIC: 0.9,
}

CATEGORY_COLORS: dict[DreamCategory, str] = {
    DreamCategory.NIGHTMARE: "#FF4444",
    DreamCategory.SURREAL: "#D300FF",
    DreamCategory.ROMANTIC: "#FFC0CB",
    DreamCategory.PROPHETIC: "#00FFCC",
    DreamCategory.MUNDANE: "#AAAAAA",
    DreamCategory.LUCID: "#FFD700",
    DreamCategory.STRESS: "#FFA500",
    DreamCategory.ADVENTURE: "#0088FF",
}

CATEGORY_DESCRIPTIONS: dict[DreamCategory, str] = {
    DreamCategory.NIGHTMARE: "Fear, anxiety, or danger.",
    DreamCategory.SURREAL: "Bizarre, logic-defying visuals.",
    DreamCategory.ROMANTIC: "Love, connection, or longing.",
    DreamCategory.PROPHETIC: "Visions of the future or deep intuition.",
    DreamCategory.MUNDANE: "Everyday life, normal events.",
    DreamCategory.LUCID: "Awareness and control within the dream.",
    DreamCategory.STRESS: "Pressure, deadlines, or feelings of inadequacy.",
    DreamCategory.ADVENTURE: "Exploration, flying, or epic journeys.",
}


class Location(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class DreamRecord(BaseModel):
    """A stored dream. Immutable once created.

    ``location`` is always the fuzzed position; the submitter's true
    position is never part of a record.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    category: DreamCategory
    summary: str
    interpretation: str
    timestamp: int = Field(..., description="Submission time in epoch milliseconds.")
    location: Location
    owner_id: str | None = Field(
        default=None,
        description="Anonymous submitter id (absent on seed records).",
    )


class PublicDream(BaseModel):
    """Dream as returned to clients (owner id withheld)."""

    id: str
    text: str
    category: DreamCategory
    summary: str
    interpretation: str
    timestamp: int
    location: Location

    @classmethod
    def from_record(cls, record: DreamRecord) -> "PublicDream":
        return cls.model_validate(record.model_dump(exclude={"owner_id"}))


class AnalysisResult(BaseModel):
    """Output of the opaque classification capability."""

    category: DreamCategory
    summary: str
    interpretation: str


class TranslationResult(BaseModel):
    translated_text: str
    translated_interpretation: str


class DreamCreateRequest(BaseModel):
    """Payload accepted when submitting a new dream.

    ``location`` is the device position if the client has one. It is fuzzed
    before storage; when omitted a random location is used instead.
    """

    text: str = Field(..., description="Dream narrative.")
    location: Location | None = Field(
        default=None,
        description="Unfuzzed device location, if available.",
    )


class TranslateRequest(BaseModel):
    target_lang: str = Field(
        ...,
        min_length=2,
        max_length=40,
        description="Target language name or code (e.g. 'Spanish', 'pt-BR').",
    )


class CategoryInfo(BaseModel):
    name: DreamCategory
    description: str
    color: str
    sentiment: float
