import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from app.core.config import get_settings
from app.services.policy_loader import get_policy
from app.services.policy_matcher import match, normalize_query

logger = logging.getLogger(__name__)

router = APIRouter()


class ChatbotRequest(BaseModel):
    item: Optional[str] = None


@router.post("/chatbot")
def chatbot(req: ChatbotRequest):
    query = normalize_query(req.item)
    if not query:
        raise HTTPException(status_code=400, detail="No item provided")

    settings = get_settings()
    result = match(
        query,
        get_policy(),
        match_threshold=settings.match_threshold,
        suggest_threshold=settings.suggest_threshold,
    )
    logger.info("item=%r claimable=%s category=%s", query, result.is_claimable, result.matched_category)
    return result.to_response()
