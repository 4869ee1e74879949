from __future__ import annotations

from flask import Blueprint

from ..app_utils import STORE_EXTENSION, extension, json_body, make_error, make_ok, user_key_from_request
from ..config import setup_logger
from ..errors import APIError, ValidationError
from ..store import BetStore
from ..utils import detect_sport
from ..validators import validate_bet_patch, validate_bet_payload

bp = Blueprint("bets", __name__)
log = setup_logger(__name__)


def _store() -> BetStore:
    return extension(STORE_EXTENSION)


@bp.get("/bets")
def list_bets():
    user_key = user_key_from_request()
    rows = _store().list(user_key)
    # Newest first; equal createdAt falls back to the later insertion
    ordered = sorted(enumerate(rows), key=lambda item: (item[1].created_at, item[0]), reverse=True)
    return make_ok([row.to_dict() for _, row in ordered])


@bp.post("/bets")
def create_bet():
    user_key = user_key_from_request()
    try:
        fields = validate_bet_payload(json_body())
        fields["sportTag"] = fields.get("sportTag") or detect_sport(fields["event"])
        row = _store().create(user_key, fields)
    except ValidationError as exc:
        log.info("bet_create_invalid user=%s: %s", user_key, exc)
        return make_error(exc, 400)
    except APIError as exc:
        log.warning("bet_create_failed user=%s: %s", user_key, exc.to_dict())
        return make_error(exc, 400)
    return make_ok(row.to_dict())


@bp.patch("/bets/<bet_id>")
def update_bet(bet_id: str):
    user_key = user_key_from_request()
    try:
        patch = validate_bet_patch(json_body())
        row = _store().patch(user_key, bet_id, patch)
    except ValidationError as exc:
        return make_error(exc, 400)
    except APIError as exc:
        log.warning("bet_update_failed user=%s id=%s: %s", user_key, bet_id, exc.to_dict())
        return make_error(exc, 400)
    if row is None:
        return make_error("Not found", 404)
    return make_ok(row.to_dict())
