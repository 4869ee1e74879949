import json
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import unquote

import pytest

from moneyline_coach.app import create_app
from moneyline_coach.discord import DiscordNotifier
from moneyline_coach.settings import Settings
from moneyline_coach.store import MemoryBetStore


class FakeCompletionClient:
    """Stands in for CompletionClient; records prompts and replays canned replies."""

    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def complete(self, system: str, user: str, *, temperature: float = 0.2) -> str:
        self.calls.append({"system": system, "user": user, "temperature": temperature})
        if self.error is not None:
            raise self.error
        return self.reply


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or (json.dumps(payload) if payload is not None else "")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeKVSession:
    """In-memory Upstash REST double: GET /get/<key>, POST /set/<key>."""

    def __init__(self):
        self.data: Dict[str, str] = {}
        self.requests: List[Tuple[str, str, Dict[str, Any]]] = []
        self.fail_writes = False

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append((method, url, kwargs))
        op, _, key = url.split("/", 3)[-1].partition("/")
        key = unquote(key)
        if op == "get":
            return FakeResponse(200, {"result": self.data.get(key)})
        if op == "set":
            if self.fail_writes:
                return FakeResponse(500, text="kv down")
            self.data[key] = kwargs["data"]
            return FakeResponse(200, {"result": "OK"})
        return FakeResponse(404, text="unknown command")


class TickingClock:
    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        self.now += self.step
        return self.now


@pytest.fixture
def settings():
    return Settings(odds_api_key="odds-key", sportsdataio_base_url="https://sdio.test/v3",
                    sportsdataio_api_key="sdio-key")


@pytest.fixture
def store():
    return MemoryBetStore(clock=TickingClock())


@pytest.fixture
def completion():
    return FakeCompletionClient()


@pytest.fixture
def app(settings, store, completion):
    app = create_app(
        settings,
        store=store,
        completion_client=completion,
        discord_notifier=DiscordNotifier(None),
    )
    app.testing = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
