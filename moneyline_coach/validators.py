from typing import Any, Dict, Optional

from .config import setup_logger
from .constants import BET_RESULTS
from .errors import ValidationError
from .utils import to_number

logger = setup_logger(__name__)

_MISSING = object()


def require_object(data: Any) -> Dict[str, Any]:
    """Request bodies must be JSON objects."""
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object body")
    return data


def _require_text(data: Dict[str, Any], name: str) -> str:
    value = data.get(name)
    if value is None:
        raise ValidationError(f"{name}: Required")
    if not isinstance(value, str):
        raise ValidationError(f"{name}: Expected string, received {type(value).__name__}")
    if not value.strip():
        raise ValidationError(f"{name}: Required")
    return value


def validate_units(raw: Any = _MISSING) -> float:
    """Units default to 0; numbers and numeric strings are accepted."""
    if raw is _MISSING or raw is None:
        return 0
    if isinstance(raw, bool):
        raise ValidationError("units: Expected number, received bool")
    if isinstance(raw, (int, float)):
        return to_number(raw)
    if isinstance(raw, str):
        try:
            float(raw.strip())
        except ValueError:
            logger.warning("units_invalid: %r", raw)
        else:
            return to_number(raw)
    raise ValidationError(f"units: Expected number, received {type(raw).__name__}")


def validate_bet_payload(data: Any) -> Dict[str, Any]:
    """Validate a create-bet body. Returns the normalized fields."""
    body = require_object(data)
    fields: Dict[str, Any] = {
        "event": _require_text(body, "event"),
        "market": _require_text(body, "market"),
        "odds": _require_text(body, "odds"),
        "units": validate_units(body.get("units", _MISSING)),
    }
    sport_tag = body.get("sportTag")
    if sport_tag is not None and not isinstance(sport_tag, str):
        raise ValidationError(f"sportTag: Expected string, received {type(sport_tag).__name__}")
    fields["sportTag"] = sport_tag or None
    return fields


def validate_bet_patch(data: Any) -> Dict[str, Any]:
    """Keep only result/clv from a patch body; other keys are ignored."""
    body = require_object(data)
    patch: Dict[str, Any] = {}
    if "result" in body:
        result: Optional[Any] = body["result"]
        if result is not None:
            if not isinstance(result, str) or result.lower() not in BET_RESULTS:
                raise ValidationError(f"result: Expected one of {', '.join(BET_RESULTS)}")
            result = result.lower()
        patch["result"] = result
    if "clv" in body:
        clv = body["clv"]
        if clv is not None:
            if isinstance(clv, bool) or not isinstance(clv, (int, float)):
                raise ValidationError("clv: Expected number")
        patch["clv"] = clv
    return patch
