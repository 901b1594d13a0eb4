import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.errors import PolicyConfigurationError
from app.models.policy import PolicyDocument

logger = logging.getLogger(__name__)


def _describe(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ()))
        parts.append(f"{loc or '<root>'}: {e.get('msg', 'invalid')}")
    return "; ".join(parts)


def parse_policy(data: Any, source: str = "") -> PolicyDocument:
    """
    Validate an already-deserialized policy mapping.
    Raises PolicyConfigurationError on missing or malformed structure.
    """
    if not isinstance(data, dict):
        raise PolicyConfigurationError("policy document must be a JSON object", source)
    try:
        return PolicyDocument.model_validate(data)
    except ValidationError as e:
        raise PolicyConfigurationError(f"invalid policy document ({_describe(e)})", source) from e


def load_policy(path: Union[str, Path]) -> PolicyDocument:
    p = Path(path)
    try:
        raw: Dict[str, Any] = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise PolicyConfigurationError(f"cannot read policy file ({e.strerror or e})", str(p)) from e
    except json.JSONDecodeError as e:
        raise PolicyConfigurationError(f"policy file is not valid JSON ({e.msg} at line {e.lineno})", str(p)) from e

    policy = parse_policy(raw, str(p))
    logger.info(
        "Loaded policy %r v%s from %s (%d categories, %d not_allowed)",
        policy.policy_name, policy.version, p, len(policy.categories), len(policy.not_allowed),
    )
    return policy


@lru_cache(maxsize=1)
def get_policy() -> PolicyDocument:
    """Configured policy, loaded once per process. Use get_policy.cache_clear() to reload."""
    return load_policy(get_settings().policy_path)
