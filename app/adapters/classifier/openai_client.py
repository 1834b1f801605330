"""OpenAI dream classifier adapter."""

import json
from typing import Any

from openai import AsyncOpenAI
from pydantic import ValidationError

from app.adapters.classifier.base import AbstractDreamClassifier
from app.core.errors import ClassifierAppError
from app.schemas.dream import AnalysisResult, DreamCategory, TranslationResult


def build_classification_prompt(dream_text: str) -> str:
    """Build the classification prompt.

    Args:
        dream_text: Raw dream narrative.

    Returns:
        Prompt requesting a JSON object with category, summary and interpretation.
    """
    categories = ", ".join(f'"{c.value}"' for c in DreamCategory)
    return f"""
Analyze the following dream text. Classify it into one of the allowed categories.

Categories:
- Nightmare: Fear, danger, monsters.
- Stress: Anxiety, being late, failing tests, losing teeth.
- Lucid: Awareness of dreaming, controlling the dream.
- Adventure: Exploration, flying, quests, superpowers.
- Surreal: Bizarre, logic-defying visuals.
- Romantic: Love, relationships.
- Prophetic: Deep intuition, spiritual visions.
- Mundane: Normal daily life.

Provide a concise summary and a mysterious, ethereal interpretation.

REQUIRED JSON STRUCTURE:
{{
  "category": one of [{categories}],
  "summary": "A very short, 1-sentence summary of the dream.",
  "interpretation": "A short, mystical, sci-fi style interpretation of what this dream might mean for the dreamer."
}}

Dream Text: "{dream_text}"
""".strip()


def build_translation_prompt(text: str, interpretation: str, target_lang: str) -> str:
    return f"""
Translate the following dream text and interpretation into {target_lang}.
Maintain the mystical, sci-fi tone for the interpretation.

REQUIRED JSON STRUCTURE:
{{"translated_text": "...", "translated_interpretation": "..."}}

Dream Text: "{text}"
Interpretation: "{interpretation}"
""".strip()


class OpenAIDreamClassifier(AbstractDreamClassifier):
    """Classifier backed by OpenAI chat completions in JSON mode."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout_seconds: float = 20.0,
    ) -> None:
        """Initialize OpenAI async client.

        Args:
            api_key: OpenAI API key for authentication.
            model: Model name (e.g., "gpt-4o-mini").
            base_url: Optional custom base URL for OpenAI-compatible servers.
            timeout_seconds: Timeout for requests in seconds.
        """
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
        )
        self.model = model

    async def _generate_json(self, prompt: str, *, temperature: float) -> dict[str, Any]:
        """Run one JSON-mode completion and parse the result.

        Raises:
            ClassifierAppError: If the API call fails or the content is not JSON.
        """
        messages = [
            {
                "role": "system",
                "content": "Output JSON only. No extra text or markdown formatting.",
            },
            {"role": "user", "content": prompt},
        ]

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                response_format={"type": "json_object"},
            )
        except Exception as exc:
            raise ClassifierAppError(
                code="classifier_api_error",
                message=f"OpenAI API error: {exc}",
                details={"provider": self.name},
            ) from exc

        content = response.choices[0].message.content
        if not content:
            raise ClassifierAppError(
                code="classifier_empty_response",
                message="Classifier returned an empty response",
                details={"provider": self.name},
            )

        try:
            return json.loads(content.strip())
        except json.JSONDecodeError as exc:
            raise ClassifierAppError(
                code="classifier_invalid_json",
                message=f"Classifier returned invalid JSON: {exc}",
                details={"provider": self.name},
            ) from exc

    async def classify(self, text: str) -> AnalysisResult:
        raw = await self._generate_json(build_classification_prompt(text), temperature=0.7)
        try:
            return AnalysisResult.model_validate(raw)
        except ValidationError as exc:
            raise ClassifierAppError(
                code="classifier_invalid_payload",
                message="Classifier response did not match the expected schema",
                details={"provider": self.name, "context": {"errors": exc.error_count()}},
            ) from exc

    async def translate(
        self,
        text: str,
        interpretation: str,
        target_lang: str,
    ) -> TranslationResult | None:
        raw = await self._generate_json(
            build_translation_prompt(text, interpretation, target_lang),
            temperature=0.3,
        )
        try:
            return TranslationResult.model_validate(raw)
        except ValidationError:
            return None
