from __future__ import annotations

from flask import Blueprint

from ..app_utils import COMPLETION_EXTENSION, extension, json_body, make_error, make_ok
from ..coach import ask_coach, build_checklist, build_strategy, summarize_notes
from ..config import setup_logger
from ..errors import APIError
from ..extractor import extract_bet
from ..llm_client import CompletionClient
from ..utils import american_to_probability

bp = Blueprint("assistant", __name__)
log = setup_logger(__name__)


def _client() -> CompletionClient:
    return extension(COMPLETION_EXTENSION)


def _body() -> dict:
    body = json_body()
    return body if isinstance(body, dict) else {}


@bp.post("/nlp")
def nlp():
    text = _body().get("text")
    if not text:
        return make_error("Missing text", 400)
    try:
        parsed = extract_bet(str(text), _client())
    except APIError as exc:
        log.error("NLP error: %s", exc.to_dict())
        return make_error(exc, 500)
    payload = {"parsed": parsed}
    implied = american_to_probability(parsed.get("odds"))
    if implied is not None:
        payload["impliedProbability"] = round(implied, 4)
    return make_ok(payload)


@bp.post("/coach")
def coach():
    body = _body()
    message = body.get("message")
    if not isinstance(message, str) or not message:
        return make_error("message: Required", 400)
    persona = body.get("persona")
    risk_tag = body.get("riskTag")
    if (persona is not None and not isinstance(persona, str)) or (
        risk_tag is not None and not isinstance(risk_tag, str)
    ):
        return make_error("persona and riskTag must be strings", 400)
    try:
        payload = ask_coach(_client(), message, persona, risk_tag)
    except APIError as exc:
        log.error("Coach error: %s", exc.to_dict())
        return make_error(exc, 400)
    return make_ok(payload)


@bp.post("/checklist")
def checklist():
    try:
        text = build_checklist(_client(), _body().get("sportOrMarket"))
    except APIError as exc:
        return make_error(exc, 400)
    return make_ok({"checklist": text})


@bp.post("/notes")
def notes():
    try:
        text = summarize_notes(_client(), _body().get("lastMessages"))
    except APIError as exc:
        return make_error(exc, 400)
    return make_ok({"notes": text})


@bp.post("/strategy")
def strategy():
    body = _body()
    try:
        plan = build_strategy(
            _client(),
            goal=body.get("goal"),
            bankroll=body.get("bankroll"),
            horizon_weeks=body.get("horizonWeeks"),
        )
    except APIError as exc:
        return make_error(exc, 400)
    return make_ok({"plan": plan})
