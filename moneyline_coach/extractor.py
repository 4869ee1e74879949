"""Free text -> bet fields via the completion service."""
from __future__ import annotations

import json
from typing import Any, Dict

from .config import setup_logger
from .llm_client import CompletionClient
from .utils import detect_sport, to_number

logger = setup_logger(__name__)

EXTRACTION_PROMPT = """Extract a clean JSON bet from free text.
Schema: { "event": string, "market": string, "odds": string, "units": number, "sportTag": string }.
Strict JSON only. Infer sportTag if obvious."""


def parse_bet_json(content: str) -> Dict[str, Any]:
    """Parse the model reply; anything but a JSON object becomes {}."""
    try:
        parsed = json.loads(content or "{}")
    except ValueError:
        logger.warning("Failed to parse completion reply as JSON: %.200r", content)
        return {}
    if not isinstance(parsed, dict):
        logger.warning("Completion reply was JSON but not an object: %.200r", content)
        return {}
    return parsed


def normalize_bet(parsed: Dict[str, Any]) -> Dict[str, Any]:
    if not parsed.get("sportTag") and parsed.get("event"):
        parsed["sportTag"] = detect_sport(str(parsed["event"]))
    if "units" in parsed:
        parsed["units"] = to_number(parsed["units"])
    return parsed


def extract_bet(text: str, client: CompletionClient) -> Dict[str, Any]:
    """Best-effort extraction: a malformed reply degrades to a partial dict.

    CompletionError from the client (missing key, unreachable service)
    propagates to the caller.
    """
    content = client.complete(EXTRACTION_PROMPT, text, temperature=0.2)
    return normalize_bet(parse_bet_json(content))
