import logging

from fastapi import APIRouter, Depends

from growth_diary.ai.quotes import get_motivational_quote, get_random_quote
from growth_diary.ai.schemas import Quote, TipsRequest, TipsResponse
from growth_diary.ai.service import TipService
from growth_diary.auth.service import get_current_user_id
from growth_diary.core.dependency import get_tip_service

router = APIRouter(prefix="/api/ai", tags=["AI"], dependencies=[Depends(get_current_user_id)])
logger = logging.getLogger(__name__)


@router.post(
    "/tips",
    response_model=TipsResponse,
    summary="Coaching tips for todos, goals or motivation",
    description="Uses the completion API when a key is configured, otherwise curated tips.",
)
def tips_route(
    req: TipsRequest,
    tip_service: TipService = Depends(get_tip_service),
) -> TipsResponse:
    context = req.context or "motivation"
    logger.info(f"Generating {context} tips with {tip_service.source} service")
    return TipsResponse(**tip_service.get_tips(context, req.items))


@router.get("/quote", response_model=Quote, summary="Quote suited to the time of day")
def quote_route() -> Quote:
    return Quote(**get_motivational_quote())


@router.get("/quote/random", response_model=Quote, summary="Any quote")
def random_quote_route() -> Quote:
    return Quote(**get_random_quote())
