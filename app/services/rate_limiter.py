"""Rolling-window submission limiter.

A sliding-window counter: at most ``max_count`` submissions per owner id in
any trailing ``window_ms`` span. The decision is a pure function of the
current time and the owner's submission history; nothing is stored here.

Concurrent submissions from the same owner can briefly exceed the limit
before the next check recomputes. This is best-effort admission control,
not a transactional guarantee.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable

from app.adapters.rate_limit.base import AbstractSubmissionHistory
from app.core.logging import hash_identifier

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000


@dataclass(frozen=True)
class RateLimitPolicy:
    """Maximum submissions per rolling window.

    Attributes:
        max_count: Submissions allowed inside one window.
        window_ms: Window length in milliseconds.
    """

    max_count: int = 2
    window_ms: int = DAY_MS

    def __post_init__(self) -> None:
        if self.max_count < 1:
            raise ValueError("max_count must be >= 1")
        if self.window_ms < 1:
            raise ValueError("window_ms must be >= 1")


@dataclass(frozen=True)
class RateLimitStatus:
    """Result of a limit check.

    Attributes:
        is_limited: Whether a new submission is currently refused.
        cooldown_until: Epoch ms at which ``is_limited`` flips to False if
            nothing else is submitted; None when not limited.
    """

    is_limited: bool
    cooldown_until: int | None


DEFAULT_POLICY = RateLimitPolicy()

NOT_LIMITED = RateLimitStatus(is_limited=False, cooldown_until=None)


def now_ms() -> int:
    return int(time.time() * 1000)


def get_rate_limit_status(
    identity: str,
    now_fn: Callable[[], int],
    history: Iterable[int],
    policy: RateLimitPolicy = DEFAULT_POLICY,
) -> RateLimitStatus:
    """Decide whether ``identity`` may submit now.

    Args:
        identity: Owner id the history belongs to (used for logging only).
        now_fn: Current time source, epoch milliseconds.
        history: The owner's past submission timestamps, already scoped to
            this identity.
        policy: Window policy.

    Returns:
        RateLimitStatus. When limited, ``cooldown_until`` is the moment the
        oldest submission inside the window ages out.
    """
    cutoff = now_fn() - policy.window_ms
    recent = sorted(ts for ts in history if ts > cutoff)

    if len(recent) < policy.max_count:
        return NOT_LIMITED

    cooldown_until = recent[0] + policy.window_ms
    logger.debug(
        "rate_limit.window_full",
        extra={
            "owner_hash": hash_identifier(identity),
            "in_window": len(recent),
            "max_count": policy.max_count,
            "cooldown_until": cooldown_until,
        },
    )
    return RateLimitStatus(is_limited=True, cooldown_until=cooldown_until)


async def check_submission_limit(
    identity: str,
    history_provider: AbstractSubmissionHistory,
    *,
    now_fn: Callable[[], int] = now_ms,
    policy: RateLimitPolicy = DEFAULT_POLICY,
) -> RateLimitStatus:
    """Fetch the owner's recent history and evaluate the limit.

    Args:
        identity: Owner id to check.
        history_provider: Injected, identity-scoped history source.
        now_fn: Current time source, epoch milliseconds.
        policy: Window policy.

    Returns:
        RateLimitStatus for ``identity``.
    """
    now = now_fn()
    history = await history_provider.timestamps_for(identity, since_ms=now - policy.window_ms)
    return get_rate_limit_status(identity, lambda: now, history, policy)
