"""Pydantic schemas for identity and submission-limit responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.schemas.dream import PublicDream


class RateLimitStatusResponse(BaseModel):
    is_limited: bool
    cooldown_until: int | None = Field(
        default=None,
        description="Epoch ms at which submissions reopen, null when not limited.",
    )
    max_count: int
    window_ms: int


class IdentityResponse(BaseModel):
    owner_id: str = Field(..., description="Anonymous id to send back as X-Owner-Id.")


class DreamSubmissionResponse(BaseModel):
    dream: PublicDream
    rate_limit: RateLimitStatusResponse
