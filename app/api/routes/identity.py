from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.core.identity import new_owner_id, require_owner_id
from app.core.rate_limit import to_status_response
from app.core.services import get_dream_service
from app.schemas.rate_limit import IdentityResponse, RateLimitStatusResponse
from app.services.dream_service import DreamService

router = APIRouter(tags=["Identity"])


@router.post("/identity", response_model=IdentityResponse, status_code=status.HTTP_201_CREATED)
def issue_identity() -> IdentityResponse:
    """Issue a fresh anonymous owner id.

    Clients store it locally and send it as ``X-Owner-Id``. Requesting a new
    one is how a client resets its identity.
    """
    return IdentityResponse(owner_id=new_owner_id())


@router.get("/rate-limit", response_model=RateLimitStatusResponse)
async def get_rate_limit(
    owner_id: str = Depends(require_owner_id),
    service: DreamService = Depends(get_dream_service),
) -> RateLimitStatusResponse:
    """Whether the caller may submit now, and when a block lifts."""
    limit_status = await service.rate_limit_status(owner_id)
    return to_status_response(limit_status, service.policy)
