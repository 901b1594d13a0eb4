from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from app.core.config import get_settings
from app.core.errors import PolicyConfigurationError
from app.services.policy_loader import get_policy, parse_policy
from app.services.policy_matcher import match, normalize_query

router = APIRouter()


class PolicyMatchRequest(BaseModel):
    item: Optional[str] = None
    policy: Optional[Dict[str, Any]] = None


@router.get("/policy")
def policy_summary():
    policy = get_policy()
    return {
        "policy_name": policy.policy_name,
        "version": policy.version,
        "currency": policy.currency,
        "scope_note": policy.scope_note,
        "categories": [
            {"key": c.key, "name": c.name, "conditions": dict(c.conditions)}
            for c in policy.allowed_categories()
        ],
        "not_allowed": [{"name": i.name, "reason": i.reason} for i in policy.not_allowed],
        "decision_flow": [s.action for s in sorted(policy.decision_flow, key=lambda s: s.order)],
        "deny_if_not_in_allowed": policy.default_deny_if_unlisted,
    }


@router.post("/policy/match")
def match_item(req: PolicyMatchRequest):
    query = normalize_query(req.item)
    if not query:
        raise HTTPException(status_code=400, detail="No item provided")

    if req.policy is not None:
        try:
            policy = parse_policy(req.policy, source="request.policy")
        except PolicyConfigurationError as e:
            raise HTTPException(status_code=422, detail=str(e))
    else:
        policy = get_policy()

    settings = get_settings()
    result = match(
        query,
        policy,
        match_threshold=settings.match_threshold,
        suggest_threshold=settings.suggest_threshold,
    )
    return result.to_response()
