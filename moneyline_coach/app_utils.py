from typing import Any, Optional

from flask import current_app, jsonify, request

from .constants import DEFAULT_USER_KEY, USER_KEY_COOKIE
from .errors import APIError

STORE_EXTENSION = "bet_store"
COMPLETION_EXTENSION = "completion_client"
DISCORD_EXTENSION = "discord_notifier"
SPORTS_FEED_EXTENSION = "sports_feed"


def make_ok(data: Optional[Any] = None, status_code: int = 200):
    """Return the payload as-is; clients consume unwrapped JSON."""
    response = jsonify(data if data is not None else {})
    return response, status_code


def make_error(error: Any, status_code: int = 400, **extra: Any):
    """Return `{"error": message}` plus any extra top-level keys."""
    if isinstance(error, APIError):
        message = error.message
    elif isinstance(error, BaseException):
        message = str(error) or type(error).__name__
    else:
        message = str(error)
    response = jsonify({**extra, "error": message})
    return response, status_code


def user_key_from_request() -> str:
    """Pseudo identity from the client cookie. Not authenticated."""
    return request.cookies.get(USER_KEY_COOKIE) or DEFAULT_USER_KEY


def json_body() -> Any:
    """Parsed JSON body, or None when the body is missing or malformed."""
    return request.get_json(silent=True)


def extension(name: str) -> Any:
    return current_app.extensions[name]
