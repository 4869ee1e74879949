"""Small helpers shared across routes and services."""
from __future__ import annotations

import math
from typing import Any, Optional
from urllib.parse import urlsplit, urlunsplit

from .constants import SPORT_KEYWORDS, SPORT_OTHER


def detect_sport(event: Optional[str]) -> str:
    """Map event text to a sport tag by fixed keyword lookup."""
    text = (event or "").lower()
    for tag, keywords in SPORT_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return tag
    return SPORT_OTHER


def american_to_probability(american_odds: Any) -> Optional[float]:
    """Implied win probability for American odds, None if not a number."""
    try:
        odds = float(american_odds)
    except (TypeError, ValueError):
        return None
    if math.isnan(odds) or math.isinf(odds):
        return None
    if odds > 0:
        return 100 / (odds + 100)
    return abs(odds) / (abs(odds) + 100)


def to_number(value: Any, default: float = 0) -> float:
    """Coerce a loose JSON value to a number, ints stay ints."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return default
        return value
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
        if math.isnan(number) or math.isinf(number):
            return default
        return int(number) if number.is_integer() else number
    return default


def mask_handle(email: Optional[str]) -> str:
    """Mask an email for public display: 'use****@example.com'."""
    if not email:
        return "anon"
    name, _, domain = email.partition("@")
    return f"{(name or 'user')[:3]}****@{domain or 'mail.com'}"


def scrub_url(url: Optional[str]) -> str:
    """Drop the querystring (API keys live there) before logging a URL."""
    if not url:
        return ""
    try:
        parts = urlsplit(url)
        return urlunsplit((parts.scheme, parts.netloc, parts.path, "", parts.fragment))
    except ValueError:
        return url or ""
