import logging
from typing import Iterable, List, Optional

from app.core.config import MATCH_THRESHOLD, SUGGEST_THRESHOLD
from app.core.errors import InvalidQueryError
from app.models.policy import Category, MatchResult, PolicyDocument
from app.services.responses import (
    IN_PERSON_ONLY,
    ONLINE_TOKEN,
    UNEVALUATED_CONDITIONS,
    render,
)
from app.services.similarity import similar

logger = logging.getLogger(__name__)


def normalize_query(query: str) -> str:
    return (query or "").strip().lower()


def term_matches(query: str, term: str, threshold: float = MATCH_THRESHOLD) -> bool:
    """
    Query is a case-insensitive substring of the term, or close enough
    by edit distance.
    """
    t = (term or "").lower()
    return query in t or similar(query, t, threshold)


def _first_match(query: str, terms: Iterable[str], threshold: float) -> Optional[str]:
    for t in terms:
        if term_matches(query, t, threshold):
            return t
    return None


def _scan_categories(query: str, policy: PolicyDocument, threshold: float):
    """
    Returns (category, hit, excluded_by) for the first allowed category that
    matches, or (None, None, None). Document order decides ties.
    """
    for category in policy.categories:
        if not category.allowed:
            continue

        hit = _first_match(query, category.examples_included, threshold)
        if hit is None:
            hit = _first_match(query, policy.synonyms_for(category.key), threshold)
        if hit is None:
            continue

        # Included type, excluded instance (e.g. apparel rental at a gym)
        excluded_by = _first_match(query, category.examples_excluded, threshold)
        return category, hit, excluded_by

    return None, None, None


def _scan_not_allowed(query: str, policy: PolicyDocument, threshold: float) -> Optional[str]:
    for item in policy.not_allowed:
        if _first_match(query, item.examples, threshold) is not None:
            logger.debug("query %r hit not_allowed item %r", query, item.name)
            return item.reason
    return None


def _violates_conditions(query: str, category: Category) -> bool:
    ignored = sorted(k for k, v in category.conditions.items() if k in UNEVALUATED_CONDITIONS and v)
    if ignored:
        logger.debug("category %r carries unevaluated conditions: %s", category.key, ", ".join(ignored))
    return category.has_condition(IN_PERSON_ONLY) and ONLINE_TOKEN in query


def collect_suggestions(query: str, policy: PolicyDocument, threshold: float = SUGGEST_THRESHOLD) -> List[str]:
    """
    Near-miss candidates from every allowed category's included examples
    and synonyms, in first-encounter order, unique by value.
    """
    candidates = {}
    for category in policy.allowed_categories():
        for term in category.examples_included:
            candidates.setdefault(term, None)
        for term in policy.synonyms_for(category.key):
            candidates.setdefault(term, None)

    return [c for c in candidates if similar(query, c.lower(), threshold)]


def match(
    query: str,
    policy: PolicyDocument,
    match_threshold: float = MATCH_THRESHOLD,
    suggest_threshold: float = SUGGEST_THRESHOLD,
) -> MatchResult:
    """
    Decide whether `query` is claimable under `policy`.

    Order: allowed categories (with in-category exclusions), then the
    not_allowed list, then the in-person condition, then suggestions.
    Never raises for a non-matching query; that is a normal rejection.
    """
    q = normalize_query(query)
    if not q:
        raise InvalidQueryError("No item provided")

    responses = policy.responses
    generic = responses.REJECT_OUTSIDE_SCOPE
    message = generic
    is_claimable = False
    matched: Optional[Category] = None
    suggestions: List[str] = []

    # 1) Allowed categories
    category, hit, excluded_by = _scan_categories(q, policy, match_threshold)
    if category is not None:
        if excluded_by is not None:
            logger.debug("query %r matched %r via %r but excluded by %r", q, category.key, hit, excluded_by)
        else:
            is_claimable = True
            matched = category

    # 2) Explicitly disallowed items
    if not is_claimable:
        reason = _scan_not_allowed(q, policy, match_threshold)
        if reason is not None:
            message = reason

    # 3) Conditions
    if is_claimable and matched is not None and _violates_conditions(q, matched):
        is_claimable = False
        matched = None
        message = responses.REJECT_ONLINE_ONLY

    # 4) Did you mean
    if not is_claimable and message == generic:
        suggestions = collect_suggestions(q, policy, suggest_threshold)
        if suggestions:
            message = render(responses.SUGGEST_ALTERNATIVES, suggestions=", ".join(suggestions))

    # 5) Final message
    if is_claimable and matched is not None:
        message = render(responses.APPROVE_ROUTE, category=matched.name)

    logger.debug("query %r -> claimable=%s category=%s", q, is_claimable, matched.name if matched else None)
    return MatchResult(
        is_claimable=is_claimable,
        message=message,
        matched_category=matched.name if matched else None,
        suggestions=suggestions,
    )
