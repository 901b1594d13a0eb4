import copy
import json
from pathlib import Path

import pytest

from app.core.config import get_settings
from app.services.policy_loader import get_policy, load_policy, parse_policy

BUNDLED_POLICY = Path(__file__).resolve().parents[1] / "app" / "data" / "HR_Sports_Benefits_policy.json"

POLICY_DATA = {
    "policy_name": "Test Sports Policy",
    "version": "0.1",
    "categories": [
        {
            "id": 1,
            "key": "fitness",
            "name": "Fitness",
            "allowed": True,
            "conditions": {"exclude_apparel_rental": True},
            "examples_included": ["gym membership", "day pass", "locker rental"],
            "examples_excluded": ["apparel rental"],
        },
        {
            "id": 2,
            "key": "classes",
            "name": "Sports Classes",
            "allowed": True,
            "conditions": {"in_person_only": True},
            "examples_included": ["yoga class", "pilates class"],
            "examples_excluded": [],
        },
        {
            "id": 3,
            "key": "equipment",
            "name": "Sports Equipment",
            "allowed": True,
            "conditions": {"exclude_wearable_tech": True},
            "examples_included": ["yoga mat", "running shoes"],
            "examples_excluded": ["smartwatch"],
        },
        {
            "id": 4,
            "key": "wellness",
            "name": "Wellness",
            "allowed": False,
            "examples_included": ["massage"],
            "examples_excluded": [],
        },
    ],
    "not_allowed": [
        {
            "id": 101,
            "name": "Gambling",
            "examples": ["lottery ticket", "sports betting"],
            "reason": "Gambling-related items are not covered.",
        },
        {
            "id": 102,
            "name": "Nutrition",
            "examples": ["protein powder"],
            "reason": "Supplements are not covered.",
        },
    ],
    "matching": {
        "synonyms": {
            "fitness": ["gym", "fitness center"],
            "classes": ["online yoga class", "kayak rental"],
            "equipment": ["trainers", "gym"],
        }
    },
    "responses": {
        "APPROVE_ROUTE": "Approved — routed under {category}",
        "REJECT_OUTSIDE_SCOPE": "Outside the scope of the policy.",
        "REJECT_ONLINE_ONLY": "Online-only offerings are not covered.",
    },
    "default_behavior": {"deny_if_not_in_allowed": True, "notes": ""},
}


@pytest.fixture
def policy_data():
    return copy.deepcopy(POLICY_DATA)


@pytest.fixture
def policy(policy_data):
    return parse_policy(policy_data)


@pytest.fixture(autouse=True)
def _clear_caches():
    get_settings.cache_clear()
    get_policy.cache_clear()
    yield
    get_settings.cache_clear()
    get_policy.cache_clear()


@pytest.fixture
def policy_file(tmp_path, policy_data):
    p = tmp_path / "policy.json"
    p.write_text(json.dumps(policy_data), encoding="utf-8")
    return p


@pytest.fixture
def bundled_policy():
    return load_policy(BUNDLED_POLICY)
