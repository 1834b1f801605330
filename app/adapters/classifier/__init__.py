"""Dream classifier adapters - abstract over classification providers."""

from app.adapters.classifier.base import AbstractDreamClassifier
from app.adapters.classifier.factory import create_classifier
from app.adapters.classifier.keyword import KeywordDreamClassifier
from app.adapters.classifier.openai_client import OpenAIDreamClassifier

__all__ = [
    "AbstractDreamClassifier",
    "KeywordDreamClassifier",
    "OpenAIDreamClassifier",
    "create_classifier",
]
