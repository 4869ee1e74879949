from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint

from ..app_utils import (
    DISCORD_EXTENSION,
    SPORTS_FEED_EXTENSION,
    STORE_EXTENSION,
    extension,
    json_body,
    make_error,
    make_ok,
)
from ..config import setup_logger
from ..constants import DEFAULT_USER_KEY
from ..errors import APIError
from ..utils import mask_handle, to_number

bp = Blueprint("info", __name__)
log = setup_logger(__name__)

LEADERBOARD_STREAK_CAP = 5


@bp.get("/health")
def health():
    return make_ok(
        {
            "ok": True,
            "ts": datetime.now(timezone.utc).isoformat(),
            "store": extension(STORE_EXTENSION).backend,
        }
    )


@bp.post("/share-discord")
def share_discord():
    body = json_body()
    text = body.get("text") if isinstance(body, dict) else None
    notifier = extension(DISCORD_EXTENSION)
    if not notifier.enabled:
        return make_ok({"ok": False, "message": "No webhook set"})
    try:
        notifier.send_message(text if isinstance(text, str) else None)
    except APIError as exc:
        return make_error(exc, 400, ok=False)
    return make_ok({"ok": True})


@bp.get("/leaderboard")
def leaderboard():
    """Single-entry demo board built from the anonymous collection."""
    rows = extension(STORE_EXTENSION).list(DEFAULT_USER_KEY)
    total_units = sum(to_number(row.units) for row in rows)
    return make_ok(
        {
            "leaderboard": [
                {
                    "nickname": mask_handle("user@example.com"),
                    "totalUnits": total_units,
                    "streak": min(len(rows), LEADERBOARD_STREAK_CAP),
                }
            ]
        }
    )


@bp.get("/sports")
def sports():
    try:
        data = extension(SPORTS_FEED_EXTENSION).aggregate()
    except APIError as exc:
        log.warning("sports_feed failed: %s", exc.to_dict())
        return make_error(exc, 500, success=False)
    return make_ok({"success": True, "data": data})
