from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Category(_Frozen):
    id: Optional[int] = None
    key: str
    name: str
    allowed: bool
    # Flags like in_person_only, exclude_wearable_tech; notes may be strings.
    conditions: Dict[str, Any] = Field(default_factory=dict)
    examples_included: Tuple[str, ...] = ()
    examples_excluded: Tuple[str, ...] = ()

    @field_validator("conditions", mode="before")
    @classmethod
    def _none_conditions(cls, v):
        return {} if v is None else v

    def has_condition(self, flag: str) -> bool:
        return self.conditions.get(flag) is True


class DisallowedItem(_Frozen):
    id: Optional[int] = None
    key: Optional[str] = None
    name: str
    allowed: bool = False
    examples: Tuple[str, ...] = ()
    reason: str


class Matching(_Frozen):
    synonyms: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)

    @field_validator("synonyms")
    @classmethod
    def _dedupe_synonyms(cls, v: Dict[str, Tuple[str, ...]]) -> Dict[str, Tuple[str, ...]]:
        # Keep authoring order, drop repeats.
        return {k: tuple(dict.fromkeys(s for s in vals if s)) for k, vals in v.items()}


class PolicyResponses(_Frozen):
    model_config = ConfigDict(frozen=True, extra="allow")

    APPROVE_ROUTE: str
    REJECT_OUTSIDE_SCOPE: str
    REJECT_ONLINE_ONLY: str
    REJECT_RECEIPT_NAME: Optional[str] = None
    REJECT_YEAR: Optional[str] = None
    ESCALATE_CASE_BY_CASE: Optional[str] = None
    SUGGEST_ALTERNATIVES: str = "Did you mean: {suggestions}?"


class DefaultBehavior(_Frozen):
    deny_if_not_in_allowed: bool
    notes: str = ""


class DecisionStep(_Frozen):
    order: int
    action: str


class PolicyDocument(_Frozen):
    """
    Parsed benefits policy. Field names follow the JSON policy file so
    existing policy documents validate unchanged.
    """

    policy_name: str = ""
    version: str = ""
    generated_at: str = ""
    jurisdiction: str = ""
    currency: str = ""
    scope_note: str = ""

    categories: Tuple[Category, ...]
    not_allowed: Tuple[DisallowedItem, ...]
    matching: Matching
    responses: PolicyResponses
    default_behavior: DefaultBehavior
    decision_flow: Tuple[DecisionStep, ...] = ()

    @property
    def default_deny_if_unlisted(self) -> bool:
        return self.default_behavior.deny_if_not_in_allowed

    def synonyms_for(self, category_key: str) -> Tuple[str, ...]:
        return self.matching.synonyms.get(category_key, ())

    def allowed_categories(self) -> List[Category]:
        return [c for c in self.categories if c.allowed]


class MatchResult(_Frozen):
    is_claimable: bool
    message: str
    matched_category: Optional[str] = None
    suggestions: List[str] = Field(default_factory=list)

    def to_response(self) -> Dict[str, Any]:
        return {
            "isClaimable": self.is_claimable,
            "responseMessage": self.message,
            "matchedCategory": self.matched_category,
            "suggestions": list(self.suggestions),
        }
