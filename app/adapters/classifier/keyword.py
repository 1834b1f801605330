"""Deterministic keyword classifier.

Runs without any external service. Used when no remote provider is
configured and as the fallback when the remote provider fails.
"""

from __future__ import annotations

from app.adapters.classifier.base import AbstractDreamClassifier
from app.schemas.dream import AnalysisResult, DreamCategory, TranslationResult

SUMMARY_MAX_CHARS = 50

DEFAULT_INTERPRETATION = (
    "The void has received your transmission. "
    "The patterns suggest a reflection of your inner state."
)

# Checked in order; first rule with a matching substring wins
KEYWORD_RULES: tuple[tuple[DreamCategory, tuple[str, ...]], ...] = (
    (DreamCategory.LUCID, ("control", "knew i was dreaming", "changed", "aware")),
    (DreamCategory.STRESS, ("late", "test", "exam", "naked", "teeth", "forgot")),
    (DreamCategory.ADVENTURE, ("fly", "superpower", "explore", "quest", "travel", "space")),
    (DreamCategory.NIGHTMARE, ("blood", "chase", "monster", "scared", "die", "murder")),
    (DreamCategory.SURREAL, ("floating", "magic", "weird", "impossible", "melting")),
    (DreamCategory.ROMANTIC, ("love", "kiss", "date", "partner", "marriage")),
    (DreamCategory.PROPHETIC, ("future", "god", "voice", "light", "predict")),
)


def classify_by_keywords(text: str) -> DreamCategory:
    lower = text.lower()
    for category, keywords in KEYWORD_RULES:
        if any(keyword in lower for keyword in keywords):
            return category
    return DreamCategory.MUNDANE


def summarize(text: str) -> str:
    if len(text) > SUMMARY_MAX_CHARS:
        return text[:SUMMARY_MAX_CHARS] + "..."
    return text


class KeywordDreamClassifier(AbstractDreamClassifier):
    """Substring-matching classifier with a fixed interpretation."""

    name = "keyword"

    async def classify(self, text: str) -> AnalysisResult:
        return AnalysisResult(
            category=classify_by_keywords(text),
            summary=summarize(text),
            interpretation=DEFAULT_INTERPRETATION,
        )

    async def translate(
        self,
        text: str,
        interpretation: str,
        target_lang: str,
    ) -> TranslationResult | None:
        return None
