from abc import ABC, abstractmethod

from app.schemas.dream import AnalysisResult, TranslationResult


class AbstractDreamClassifier(ABC):
    """Interface for dream classification providers.

    Classification is opaque to the rest of the service: a narrative goes in,
    a category, one-line summary and interpretation come out.
    """

    name: str = "abstract"

    @abstractmethod
    async def classify(self, text: str) -> AnalysisResult:
        """Classify a dream narrative.

        Raises:
            ClassifierAppError: If the provider call fails or returns an invalid payload.
        """
        ...

    @abstractmethod
    async def translate(
        self,
        text: str,
        interpretation: str,
        target_lang: str,
    ) -> TranslationResult | None:
        """Translate a dream and its interpretation.

        Returns:
            TranslationResult, or None when the provider cannot translate.

        Raises:
            ClassifierAppError: If the provider call fails.
        """
        ...
