"""Chat-completion client used by the coach, extractor and planning helpers."""
from __future__ import annotations

from typing import Optional

import openai
from openai import OpenAI

from .config import setup_logger
from .errors import CompletionError
from .settings import DEFAULT_OPENAI_MODEL, openai_api_key

logger = setup_logger(__name__)


class CompletionClient:
    """Single-turn chat completions against OpenAI.

    The API key is resolved on each call so a key added to the environment
    after startup is picked up without a restart. Calls are never retried.
    """

    def __init__(
        self,
        model: str = DEFAULT_OPENAI_MODEL,
        *,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
    ) -> None:
        self.model = model
        self.timeout = timeout
        self._api_key = api_key
        self._client: Optional[OpenAI] = None
        self._client_key: Optional[str] = None

    def _get_client(self) -> OpenAI:
        key = self._api_key or openai_api_key()
        if not key:
            logger.error("Missing OPENAI_API_KEY in environment")
            raise CompletionError("MISSING_KEY", "Server misconfiguration: missing API key")
        if self._client is None or self._client_key != key:
            self._client = OpenAI(api_key=key, timeout=self.timeout, max_retries=0)
            self._client_key = key
        return self._client

    def complete(self, system: str, user: str, *, temperature: float = 0.2) -> str:
        """Return the first choice's text, or '' when the model sent none."""
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            )
        except openai.APITimeoutError as exc:
            raise CompletionError("TIMEOUT", "Completion request timed out", str(exc)) from exc
        except openai.APIStatusError as exc:
            raise CompletionError(f"HTTP_{exc.status_code}", exc.message or "Completion request failed") from exc
        except openai.OpenAIError as exc:
            raise CompletionError("NETWORK_ERROR", str(exc) or "Completion request failed") from exc

        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None) or ""
