"""Anonymous identity resolution.

Submitters have no accounts. Each client holds an opaque owner id issued by
``POST /v1/identity`` and sends it back in the ``X-Owner-Id`` header. The id
only scopes the submission limit; it is never returned with dream records.
"""

from __future__ import annotations

import logging
import re
import uuid
from typing import Annotated

from fastapi import Header

from app.core.errors import ValidationAppError

logger = logging.getLogger(__name__)

OWNER_ID_HEADER = "X-Owner-Id"
MAX_OWNER_ID_LENGTH = 128

_OWNER_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def new_owner_id() -> str:
    return str(uuid.uuid4())


def parse_owner_id(raw: str | None) -> str:
    """Validate an owner id from a request header.

    Args:
        raw: Header value, possibly missing.

    Returns:
        The trimmed owner id.

    Raises:
        ValidationAppError: If missing, too long or containing unexpected characters.

    Examples:
        >>> parse_owner_id(" 3f1c-ab ")
        '3f1c-ab'
    """
    owner_id = (raw or "").strip()
    if not owner_id:
        raise ValidationAppError(
            code="owner_id_missing",
            message=f"Missing owner id. Provide the {OWNER_ID_HEADER} header.",
            details={"hint": "Request one from POST /v1/identity"},
        )
    if len(owner_id) > MAX_OWNER_ID_LENGTH or not _OWNER_ID_RE.match(owner_id):
        raise ValidationAppError(
            code="owner_id_invalid",
            message="Owner id must be 1-128 characters of letters, digits, '-' or '_'.",
            details={"max_value": MAX_OWNER_ID_LENGTH, "actual_value": len(owner_id)},
        )
    return owner_id


async def require_owner_id(
    x_owner_id: Annotated[str | None, Header(alias=OWNER_ID_HEADER)] = None,
) -> str:
    """FastAPI dependency resolving the caller's owner id.

    Usage:
        @router.post("/dreams")
        async def submit(owner_id: str = Depends(require_owner_id)): ...
    """
    return parse_owner_id(x_owner_id)
