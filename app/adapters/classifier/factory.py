"""Factory for dream classifier instances."""

import logging

from app.adapters.classifier.base import AbstractDreamClassifier
from app.adapters.classifier.keyword import KeywordDreamClassifier
from app.adapters.classifier.openai_client import OpenAIDreamClassifier
from app.core.config import ClassifierSettings, settings
from app.core.errors import ValidationAppError

logger = logging.getLogger(__name__)


def create_classifier(cfg: ClassifierSettings | None = None) -> AbstractDreamClassifier:
    """Instantiate the configured classifier.

    An ``openai`` provider without an API key degrades to the keyword
    classifier instead of failing startup.

    Args:
        cfg: Classifier settings; defaults to the global settings.

    Returns:
        AbstractDreamClassifier: Configured classifier.

    Raises:
        ValidationAppError: If the provider name is unknown.
    """
    cfg = cfg or settings.classifier
    provider = cfg.provider.lower()

    if provider == "keyword":
        return KeywordDreamClassifier()

    if provider == "openai":
        if not cfg.api_key:
            logger.warning(
                "classifier.missing_api_key",
                extra={"provider": provider, "fallback": KeywordDreamClassifier.name},
            )
            return KeywordDreamClassifier()
        return OpenAIDreamClassifier(
            api_key=cfg.api_key,
            model=cfg.model,
            base_url=cfg.base_url,
            timeout_seconds=cfg.timeout_seconds,
        )

    raise ValidationAppError(
        code="classifier_unknown_provider",
        message=f"Unknown classifier provider: '{provider}'. Supported providers: keyword, openai",
    )
