import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load .env from repo root (dotenv auto-walks up from CWD)
load_dotenv()


def _read_secret_file(path: str | None) -> str | None:
    if not path:
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return None


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_ODDS_API_BASE_URL = "https://api.the-odds-api.com/v4"


@dataclass(frozen=True)
class Settings:
    openai_model: str = DEFAULT_OPENAI_MODEL
    kv_rest_api_url: Optional[str] = None
    kv_rest_api_token: Optional[str] = None
    discord_webhook_url: Optional[str] = None
    sportsdataio_base_url: Optional[str] = None
    sportsdataio_api_key: Optional[str] = None
    odds_api_base_url: str = DEFAULT_ODDS_API_BASE_URL
    odds_api_key: Optional[str] = None
    api_timeout: float = 10.0
    completion_timeout: float = 30.0
    port: int = 5000

    @property
    def kv_enabled(self) -> bool:
        return bool(self.kv_rest_api_url and self.kv_rest_api_token)


def load_settings() -> Settings:
    """Read settings from the environment (and .env)."""
    return Settings(
        openai_model=_env("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
        kv_rest_api_url=(_env("KV_REST_API_URL") or "").rstrip("/") or None,
        kv_rest_api_token=_env("KV_REST_API_TOKEN"),
        discord_webhook_url=_env("DISCORD_WEBHOOK_URL"),
        sportsdataio_base_url=(_env("SPORTSDATAIO_BASE_URL") or "").rstrip("/") or None,
        sportsdataio_api_key=_env("SPORTSDATAIO_API_KEY"),
        odds_api_base_url=(_env("ODDS_API_BASE_URL") or DEFAULT_ODDS_API_BASE_URL).rstrip("/"),
        odds_api_key=_env("ODDS_API_KEY"),
        api_timeout=float(os.getenv("API_TIMEOUT", "10")),
        completion_timeout=float(os.getenv("OPENAI_TIMEOUT", "30")),
        port=int(os.getenv("PORT", "5000")),
    )


def openai_api_key() -> Optional[str]:
    """Return the completion API key, read at call time rather than import."""
    return _env("OPENAI_API_KEY") or _read_secret_file(os.getenv("OPENAI_API_KEY_FILE"))
