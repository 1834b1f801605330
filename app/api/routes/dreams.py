from fastapi import APIRouter, Depends, Query, status

from app.core.identity import require_owner_id
from app.core.rate_limit import to_status_response
from app.core.services import get_dream_service
from app.schemas.dream import (
    CATEGORY_COLORS,
    CATEGORY_DESCRIPTIONS,
    CATEGORY_SENTIMENT,
    CategoryInfo,
    DreamCategory,
    DreamCreateRequest,
    PublicDream,
    TranslateRequest,
    TranslationResult,
)
from app.schemas.rate_limit import DreamSubmissionResponse
from app.services.dream_service import DreamService

router = APIRouter(tags=["Dreams"])


@router.post(
    "/dreams",
    response_model=DreamSubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_dream(
    payload: DreamCreateRequest,
    owner_id: str = Depends(require_owner_id),
    service: DreamService = Depends(get_dream_service),
) -> DreamSubmissionResponse:
    """Submit a dream narrative.

    The location, if sent, is fuzzed before storage. Returns 429 with
    ``Retry-After`` when the owner's rolling window is full.
    """
    dream, limit_status = await service.submit(owner_id, payload)
    return DreamSubmissionResponse(
        dream=PublicDream.from_record(dream),
        rate_limit=to_status_response(limit_status, service.policy),
    )


@router.get("/dreams", response_model=list[PublicDream])
async def list_dreams(
    category: DreamCategory | None = Query(default=None, description="Only this theme."),
    limit: int | None = Query(default=None, ge=1, le=500),
    service: DreamService = Depends(get_dream_service),
) -> list[PublicDream]:
    dreams = await service.list_dreams(category=category, limit=limit)
    return [PublicDream.from_record(d) for d in dreams]


@router.get("/dreams/{dream_id}", response_model=PublicDream)
async def get_dream(
    dream_id: str,
    service: DreamService = Depends(get_dream_service),
) -> PublicDream:
    return PublicDream.from_record(await service.get_dream(dream_id))


@router.post("/dreams/{dream_id}/translate", response_model=TranslationResult)
async def translate_dream(
    dream_id: str,
    payload: TranslateRequest,
    service: DreamService = Depends(get_dream_service),
) -> TranslationResult:
    return await service.translate(dream_id, payload.target_lang)


@router.get("/categories", response_model=list[CategoryInfo])
def list_categories() -> list[CategoryInfo]:
    """Category catalog in declaration order, for legends and filters."""
    return [
        CategoryInfo(
            name=category,
            description=CATEGORY_DESCRIPTIONS[category],
            color=CATEGORY_COLORS[category],
            sentiment=CATEGORY_SENTIMENT[category],
        )
        for category in DreamCategory
    ]
