"""Pull the labeled JSON blocks (receipts, suggested bet) out of a coach reply.

The coach prompt asks for blocks shaped like::

    ```json RECEIPTS
    {"pace": "fast"}
    ```

Models are inconsistent about where the label goes, so the label is also
accepted as the first line inside a plain ```json fence.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

from .config import setup_logger
from .constants import RECEIPTS_LABEL, SUGGESTED_BET_LABEL

logger = setup_logger(__name__)

FENCE = "```"

FOUND = "found"
UNPARSABLE = "unparsable"
MISSING = "missing"


@dataclass(frozen=True)
class FencedBlock:
    label: str
    status: str
    value: Any = None
    raw: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == FOUND


def _is_json_info(info: str) -> bool:
    return info[:4].lower() == "json"


def iter_fenced_blocks(text: str) -> Iterator[Tuple[str, str]]:
    """Yield (info_string, body) for each complete ```json fence, in order.

    A ``` whose info string is not json opens nothing; the scan resumes at
    the next ``` so stray inline markers cannot swallow a later block.
    """
    pos = 0
    while True:
        start = text.find(FENCE, pos)
        if start < 0:
            return
        header_end = text.find("\n", start + len(FENCE))
        if header_end < 0:
            return
        info = text[start + len(FENCE):header_end].strip()
        if not _is_json_info(info):
            pos = start + len(FENCE)
            continue
        close = text.find(FENCE, header_end + 1)
        if close < 0:
            return
        yield info, text[header_end + 1:close]
        pos = close + len(FENCE)


def _match_label(info: str, body: str, label: str) -> Optional[str]:
    """Return the JSON payload if this fence is `json` + label, else None."""
    if not _is_json_info(info):
        return None
    wanted = label.lower()
    rest = info[4:].strip()
    if rest:
        return body if rest.lower() == wanted else None
    first, _, remainder = body.lstrip().partition("\n")
    if first.strip().lower() == wanted:
        return remainder
    return None


def parse_fenced_json(text: Optional[str], label: str) -> FencedBlock:
    """Find the first ```json <label> block and parse its body."""
    for info, body in iter_fenced_blocks(text or ""):
        payload = _match_label(info, body, label)
        if payload is None:
            continue
        try:
            return FencedBlock(label, FOUND, json.loads(payload), payload)
        except ValueError:
            logger.debug("fenced_json_unparsable label=%s", label)
            return FencedBlock(label, UNPARSABLE, None, payload)
    return FencedBlock(label, MISSING)


def annotate_reply(text: Optional[str]) -> Dict[str, Any]:
    receipts = parse_fenced_json(text, RECEIPTS_LABEL)
    suggested = parse_fenced_json(text, SUGGESTED_BET_LABEL)
    return {"receipts": receipts.value, "suggestedBet": suggested.value}
