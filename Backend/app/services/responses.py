# Backend/app/services/responses.py

APPROVE_ROUTE = "APPROVE_ROUTE"
REJECT_OUTSIDE_SCOPE = "REJECT_OUTSIDE_SCOPE"
REJECT_ONLINE_ONLY = "REJECT_ONLINE_ONLY"
SUGGEST_ALTERNATIVES = "SUGGEST_ALTERNATIVES"

IN_PERSON_ONLY = "in_person_only"
ONLINE_TOKEN = "online"

# Condition flags the policy format declares but the matcher does not enforce.
UNEVALUATED_CONDITIONS = {
    "include_day_passes",
    "include_corporate_partner_passes",
    "online_allowed",
    "exclude_apparel_rental",
    "exclude_wearable_tech",
    "include_security_deposit_if_nonrefundable",
}


def render(template: str, **values: str) -> str:
    """Plain {placeholder} substitution; any other braces are left as written."""
    out = template
    for k, v in values.items():
        out = out.replace("{" + k + "}", v)
    return out
