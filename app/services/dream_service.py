"""Dream submission service.

Orchestrates the submission pipeline:
- Input validation
- Rolling-window admission check for the owner id
- Location fuzzing (the unfuzzed position is dropped here)
- Classification with caching and keyword fallback
- Persistence through the repository port
"""

from __future__ import annotations

import logging
import math
import random
import uuid
from typing import Callable

from app.adapters.classifier.base import AbstractDreamClassifier
from app.adapters.classifier.keyword import KeywordDreamClassifier
from app.adapters.storage.base import AbstractDreamRepository
from app.core.errors import (
    ClassifierAppError,
    NotFoundAppError,
    RateLimitedAppError,
    ValidationAppError,
)
from app.core.logging import hash_identifier
from app.schemas.dream import (
    AnalysisResult,
    DreamCategory,
    DreamCreateRequest,
    DreamRecord,
    Location,
    TranslationResult,
)
from app.services.rate_limiter import (
    DEFAULT_POLICY,
    NOT_LIMITED,
    RateLimitPolicy,
    RateLimitStatus,
    check_submission_limit,
    now_ms,
)
from app.utils.geo_fuzz import apply_fuzz, random_location
from app.utils.simple_cache import SimpleTTLCache, build_cache_key

logger = logging.getLogger(__name__)


class DreamService:
    """Submission, listing and translation of dream records.

    Attributes:
        repository: Dream store, also used as the submission-history source.
        classifier: Opaque classification/translation capability.
        cache: TTL cache for classification and translation results.
        policy: Rolling-window submission policy.
    """

    def __init__(
        self,
        repository: AbstractDreamRepository,
        classifier: AbstractDreamClassifier,
        cache: SimpleTTLCache,
        *,
        policy: RateLimitPolicy = DEFAULT_POLICY,
        rate_limit_enabled: bool = True,
        max_dream_chars: int = 2000,
        list_limit: int = 500,
        now_fn: Callable[[], int] = now_ms,
        rng: random.Random | None = None,
    ) -> None:
        self.repository = repository
        self.classifier = classifier
        self.cache = cache
        self.policy = policy
        self.rate_limit_enabled = rate_limit_enabled
        self.max_dream_chars = max_dream_chars
        self.list_limit = list_limit
        self._now_fn = now_fn
        self._rng = rng
        self._fallback = KeywordDreamClassifier()

    async def rate_limit_status(self, owner_id: str) -> RateLimitStatus:
        """Current submission status for ``owner_id``."""
        if not self.rate_limit_enabled:
            return NOT_LIMITED
        return await check_submission_limit(
            owner_id,
            self.repository,
            now_fn=self._now_fn,
            policy=self.policy,
        )

    def _validate_text(self, text: str) -> str:
        stripped = text.strip()
        if not stripped:
            raise ValidationAppError(
                code="dream_text_empty",
                message="Dream text must not be empty.",
            )
        if len(stripped) > self.max_dream_chars:
            raise ValidationAppError(
                code="dream_text_too_long",
                message=f"Dream text exceeds {self.max_dream_chars} characters.",
                details={"max_value": self.max_dream_chars, "actual_value": len(stripped)},
            )
        return stripped

    def _enforce_limit(self, owner_id: str, status: RateLimitStatus) -> None:
        if not status.is_limited or status.cooldown_until is None:
            return

        retry_after = max(0, math.ceil((status.cooldown_until - self._now_fn()) / 1000))
        logger.warning(
            "rate_limit.exceeded",
            extra={
                "owner_hash": hash_identifier(owner_id),
                "max_count": self.policy.max_count,
                "window_ms": self.policy.window_ms,
                "cooldown_until": status.cooldown_until,
                "retry_after_s": retry_after,
            },
        )
        raise RateLimitedAppError(
            code="rate_limited",
            message="Submission limit reached. Try again later.",
            details={
                "cooldown_until": status.cooldown_until,
                "retry_after": retry_after,
                "max_count": self.policy.max_count,
            },
        )

    def _fuzzed_location(self, location: Location | None) -> Location:
        if location is None:
            lat, lng = random_location(self._rng)
        else:
            lat, lng = location.lat, location.lng
        fuzzed_lat, fuzzed_lng = apply_fuzz(lat, lng, self._rng)
        return Location(lat=fuzzed_lat, lng=fuzzed_lng)

    async def _classify(self, text: str) -> AnalysisResult:
        """Classify with cache; fall back to keywords if the provider fails."""
        cache_key = build_cache_key(text, salt=f"classify:{self.classifier.name}")
        cached = self.cache.get(cache_key)
        if isinstance(cached, AnalysisResult):
            return cached

        try:
            analysis = await self.classifier.classify(text)
        except ClassifierAppError as exc:
            logger.warning(
                "classifier.fallback",
                extra={
                    "provider": self.classifier.name,
                    "error_code": exc.code,
                    "fallback": self._fallback.name,
                },
            )
            return await self._fallback.classify(text)

        self.cache.set(cache_key, analysis)
        return analysis

    async def submit(
        self,
        owner_id: str,
        payload: DreamCreateRequest,
    ) -> tuple[DreamRecord, RateLimitStatus]:
        """Validate, admit, classify and store a new dream.

        Args:
            owner_id: Anonymous submitter id.
            payload: Narrative plus optional unfuzzed location.

        Returns:
            The stored record and the owner's refreshed limit status.

        Raises:
            ValidationAppError: If the text is empty or too long.
            RateLimitedAppError: If the owner's window is full.
        """
        text = self._validate_text(payload.text)
        self._enforce_limit(owner_id, await self.rate_limit_status(owner_id))

        location = self._fuzzed_location(payload.location)
        analysis = await self._classify(text)

        dream = DreamRecord(
            id=str(uuid.uuid4()),
            text=text,
            category=analysis.category,
            summary=analysis.summary,
            interpretation=analysis.interpretation,
            timestamp=self._now_fn(),
            location=location,
            owner_id=owner_id,
        )
        await self.repository.save(dream)

        logger.info(
            "dream.submitted",
            extra={
                "dream_id": dream.id,
                "owner_hash": hash_identifier(owner_id),
                "category": dream.category.value,
                "location_source": "device" if payload.location else "random",
                "char_count": len(text),
            },
        )

        return dream, await self.rate_limit_status(owner_id)

    async def list_dreams(
        self,
        *,
        category: DreamCategory | None = None,
        limit: int | None = None,
    ) -> list[DreamRecord]:
        """Newest-first dreams, optionally restricted to one category."""
        cap = min(limit or self.list_limit, self.list_limit)
        dreams = await self.repository.list_recent(limit=None if category else cap)
        if category is not None:
            dreams = [d for d in dreams if d.category == category][:cap]
        return dreams

    async def get_dream(self, dream_id: str) -> DreamRecord:
        dream = await self.repository.get(dream_id)
        if dream is None:
            raise NotFoundAppError(
                code="dream_not_found",
                message="Dream not found.",
                details={"dream_id": dream_id},
            )
        return dream

    async def translate(self, dream_id: str, target_lang: str) -> TranslationResult:
        """Translate a stored dream's text and interpretation.

        Raises:
            NotFoundAppError: If the dream does not exist.
            ClassifierAppError: If the provider fails or cannot translate.
        """
        dream = await self.get_dream(dream_id)
        lang = target_lang.strip()

        cache_key = build_cache_key(dream.id, lang.casefold(), salt=f"translate:{self.classifier.name}")
        cached = self.cache.get(cache_key)
        if isinstance(cached, TranslationResult):
            return cached

        result = await self.classifier.translate(dream.text, dream.interpretation, lang)
        if result is None:
            raise ClassifierAppError(
                code="translation_unavailable",
                message="Translation is not available for this dream.",
                details={"provider": self.classifier.name, "dream_id": dream_id},
            )

        self.cache.set(cache_key, result)
        return result
