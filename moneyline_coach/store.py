"""Bet record storage: remote KV blob per owner, or an in-process map."""
from __future__ import annotations

import json
import threading
import time
import uuid
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests

from .config import setup_logger
from .constants import KV_KEY_PREFIX
from .errors import StoreError
from .models import BetRecord
from .settings import Settings

logger = setup_logger(__name__)

PATCHABLE_FIELDS = ("result", "clv")


def _now_ms() -> int:
    return int(time.time() * 1000)


def kv_key_for(user_key: str) -> str:
    return f"{KV_KEY_PREFIX}{user_key}"


def _merge_patch(record: BetRecord, patch: Dict[str, Any]) -> BetRecord:
    for name in PATCHABLE_FIELDS:
        value = patch.get(name)
        if value is not None:
            setattr(record, name, value)
    return record


class BetStore:
    """Per-owner bet collections. Subclasses supply load/save."""

    backend = "base"

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock = clock or _now_ms
        self._last_created_at = 0
        self._clock_lock = threading.Lock()

    def _load(self, user_key: str) -> List[BetRecord]:
        raise NotImplementedError

    def _save(self, user_key: str, records: List[BetRecord]) -> None:
        raise NotImplementedError

    def _next_timestamp(self) -> int:
        now = self._clock()
        with self._clock_lock:
            # Never step backwards even if the wall clock does
            now = max(now, self._last_created_at)
            self._last_created_at = now
        return now

    def list(self, user_key: str) -> List[BetRecord]:
        if not user_key:
            return []
        return self._load(user_key)

    def create(self, user_key: str, fields: Dict[str, Any]) -> BetRecord:
        record = BetRecord(
            id=str(uuid.uuid4()),
            user_key=user_key,
            event=fields.get("event", ""),
            market=fields.get("market", ""),
            odds=fields.get("odds", ""),
            units=fields.get("units", 0) or 0,
            sport_tag=fields.get("sportTag"),
            created_at=self._next_timestamp(),
        )
        current = self._load(user_key)
        self._save(user_key, [*current, record])
        logger.info("bet_created user=%s id=%s backend=%s", user_key, record.id, self.backend)
        return record

    def patch(self, user_key: str, bet_id: str, patch: Dict[str, Any]) -> Optional[BetRecord]:
        current = self._load(user_key)
        for idx, record in enumerate(current):
            if record.id == bet_id:
                break
        else:
            logger.info("bet_patch_not_found user=%s id=%s", user_key, bet_id)
            return None
        current[idx] = _merge_patch(record, patch)
        self._save(user_key, current)
        return current[idx]


class MemoryBetStore(BetStore):
    """Ephemeral process-local store; lost on restart, not shared across workers."""

    backend = "memory"

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        super().__init__(clock)
        self._rows: Dict[str, List[Dict[str, Any]]] = {}
        self._lock = threading.RLock()

    def _load(self, user_key: str) -> List[BetRecord]:
        with self._lock:
            return [BetRecord.from_dict(row) for row in self._rows.get(user_key, [])]

    def _save(self, user_key: str, records: List[BetRecord]) -> None:
        with self._lock:
            self._rows[user_key] = [record.to_dict() for record in records]

    def create(self, user_key: str, fields: Dict[str, Any]) -> BetRecord:
        with self._lock:
            return super().create(user_key, fields)

    def patch(self, user_key: str, bet_id: str, patch: Dict[str, Any]) -> Optional[BetRecord]:
        with self._lock:
            return super().patch(user_key, bet_id, patch)


class KVBetStore(BetStore):
    """Vercel KV / Upstash REST store holding each owner's bets as one JSON blob.

    Writes are read-modify-write on the whole blob with no version check, so two
    concurrent writes for the same owner can lose one of them (last write wins).
    """

    backend = "kv"

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        super().__init__(clock)
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        try:
            response = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.Timeout as exc:
            raise StoreError("TIMEOUT", "KV request timed out", str(exc)) from exc
        except requests.RequestException as exc:
            raise StoreError("NETWORK_ERROR", "KV request failed", str(exc)) from exc
        if not response.ok:
            raise StoreError(f"HTTP_{response.status_code}", response.text or "KV request failed")
        try:
            return response.json()
        except ValueError as exc:
            raise StoreError("BAD_RESPONSE", "KV returned non-JSON body") from exc

    def _load(self, user_key: str) -> List[BetRecord]:
        try:
            payload = self._request("GET", f"/get/{quote(kv_key_for(user_key), safe='')}")
        except StoreError as exc:
            # A missing or unreadable key reads as an empty collection
            logger.warning("kv_read_failed user=%s code=%s: %s", user_key, exc.code, exc.message)
            return []
        raw = payload.get("result") if isinstance(payload, dict) else None
        if not raw:
            return []
        try:
            rows = json.loads(raw) if isinstance(raw, str) else raw
        except ValueError:
            rows = None
        if not isinstance(rows, list) or not all(isinstance(row, dict) and "id" in row for row in rows):
            logger.warning("kv_blob_malformed user=%s: %.200r", user_key, raw)
            return []
        return [BetRecord.from_dict(row) for row in rows]

    def _save(self, user_key: str, records: List[BetRecord]) -> None:
        # The request body is stored verbatim as the value
        self._request(
            "POST",
            f"/set/{quote(kv_key_for(user_key), safe='')}",
            data=json.dumps([record.to_dict() for record in records]),
        )


def build_store(settings: Settings) -> BetStore:
    """Pick the KV store when both KV settings are present, else memory."""
    if settings.kv_enabled:
        logger.info("bet_store backend=kv url=%s", settings.kv_rest_api_url)
        return KVBetStore(
            settings.kv_rest_api_url,  # type: ignore[arg-type]
            settings.kv_rest_api_token,  # type: ignore[arg-type]
            timeout=settings.api_timeout,
        )
    logger.info("bet_store backend=memory (KV_REST_API_URL/KV_REST_API_TOKEN not set)")
    return MemoryBetStore()
