"""HTTP wiring for the submission limiter.

The admission decision itself lives in ``app.services.rate_limiter``; this
module builds the policy from settings and renders limiter state into
response headers and bodies.
"""

from __future__ import annotations

from app.core.config import AppSettings, settings
from app.schemas.rate_limit import RateLimitStatusResponse
from app.services.rate_limiter import RateLimitPolicy, RateLimitStatus


def get_rate_limit_policy(app_settings: AppSettings | None = None) -> RateLimitPolicy:
    cfg = app_settings or settings.app
    return RateLimitPolicy(
        max_count=cfg.rate_limit_max_count,
        window_ms=cfg.rate_limit_window_ms,
    )


def to_status_response(status: RateLimitStatus, policy: RateLimitPolicy) -> RateLimitStatusResponse:
    return RateLimitStatusResponse(
        is_limited=status.is_limited,
        cooldown_until=status.cooldown_until,
        max_count=policy.max_count,
        window_ms=policy.window_ms,
    )


def build_rate_limit_headers(
    *,
    retry_after: int,
    cooldown_until: int,
    max_count: int,
) -> dict[str, str]:
    """Headers sent with a 429 response.

    ``X-RateLimit-Reset`` is in epoch seconds, rounded up.

    Returns:
        Empty dict when headers are disabled in settings.
    """
    if not settings.app.rate_limit_include_headers:
        return {}
    return {
        "Retry-After": str(retry_after),
        "X-RateLimit-Limit": str(max_count),
        "X-RateLimit-Remaining": "0",
        "X-RateLimit-Reset": str(-(-cooldown_until // 1000)),
    }
