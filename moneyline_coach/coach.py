"""Prompted completions: the coach chat plus the checklist, notes and plan helpers."""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from .annotator import annotate_reply
from .config import setup_logger
from .constants import DEFAULT_CHECKLIST_TOPIC, DEFAULT_PERSONA, DEFAULT_RISK_TAG
from .llm_client import CompletionClient

logger = setup_logger(__name__)

NO_REPLY = "No reply."


def coach_system_prompt(persona: str, risk_tag: str) -> str:
    return " ".join([
        "You are Moneyline Hacks' AI Betting Coach.",
        "Speak clearly and concisely, show two angles when appropriate (1 safe, 1 higher variance).",
        "ALWAYS surface a 'Receipts' JSON with categories: epa_play, pace, injuries_inactives, "
        "trenches_ol_dl, weather, market_view.",
        "If a clean recommendation emerges, ALSO emit a 'SuggestedBet' JSON: {event, market, odds, units, sportTag}.",
        "Default stake = Kelly-lite 0.5 (but do not over-commit; include a quick bank-rails note "
        "when riskTag=aggressive).",
        f"Persona={persona}. Risk={risk_tag}.",
    ])


def coach_user_prompt(message: str) -> str:
    return "\n".join([
        "User message:",
        message,
        "",
        "Output format:",
        "1) A concise natural-language answer.",
        '2) A fenced JSON block labelled "RECEIPTS": {epa_play, pace, injuries_inactives, '
        'trenches_ol_dl, weather, market_view}. Keep values short.',
        '3) (Optional) A fenced JSON block labelled "SUGGESTED_BET": {event, market, odds, units, sportTag} '
        "if and only if confidence is reasonable.",
        "Keep everything user-friendly; no purple prose.",
    ])


def ask_coach(
    client: CompletionClient,
    message: str,
    persona: Optional[str] = None,
    risk_tag: Optional[str] = None,
) -> Dict[str, Any]:
    """Ask the coach and return {reply, receipts, suggestedBet}."""
    persona = persona or DEFAULT_PERSONA
    risk_tag = risk_tag or DEFAULT_RISK_TAG
    logger.info("coach_request persona=%s risk=%s chars=%d", persona, risk_tag, len(message))
    reply = client.complete(
        coach_system_prompt(persona, risk_tag),
        coach_user_prompt(message),
        temperature=0.4,
    ) or NO_REPLY
    return {"reply": reply, **annotate_reply(reply)}


CHECKLIST_PROMPT = (
    "Return a sharp, compact pre-bet checklist (3-7 bullets) for the given sport/market. Write for speed."
)

NOTES_PROMPT = """Summarize into three sections with bullets:
1) Summary,
2) Key Takeaways,
3) Action Items."""

STRATEGY_PROMPT = """Build a personalized betting plan with 5 sections:
1) Risk & unit sizing (Kelly-lite default),
2) Market focus (which markets to target/avoid and why),
3) Routine checklist (pre-bet),
4) Bankroll rails (stop loss, heat checks),
5) Improvement loop (post-mortems, CLV tracking).
Return concise, bullet-first output."""


def build_checklist(client: CompletionClient, sport_or_market: Optional[str]) -> str:
    return client.complete(CHECKLIST_PROMPT, sport_or_market or DEFAULT_CHECKLIST_TOPIC, temperature=0.2)


def summarize_notes(client: CompletionClient, last_messages: Any) -> str:
    return client.complete(NOTES_PROMPT, json.dumps(last_messages or []), temperature=0.2)


def build_strategy(
    client: CompletionClient,
    goal: Any = None,
    bankroll: Any = None,
    horizon_weeks: Any = None,
) -> str:
    user = f"Goal:{goal or ''} | Bankroll:{bankroll or ''} | HorizonWeeks:{horizon_weeks or ''}"
    return client.complete(STRATEGY_PROMPT, user, temperature=0.3)
