from __future__ import annotations

from typing import Any, Optional

from flask import Flask
from werkzeug.exceptions import HTTPException

from .app_utils import (
    COMPLETION_EXTENSION,
    DISCORD_EXTENSION,
    SPORTS_FEED_EXTENSION,
    STORE_EXTENSION,
    make_error,
)
from .config import setup_logger
from .discord import DiscordNotifier
from .llm_client import CompletionClient
from .routes.assistant import bp as assistant_bp
from .routes.bets import bp as bets_bp
from .routes.info import bp as info_bp
from .settings import Settings, load_settings
from .sports_feed import SportsFeed
from .store import BetStore, build_store

logger = setup_logger(__name__)

_BLUEPRINTS = (bets_bp, assistant_bp, info_bp)


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[BetStore] = None,
    completion_client: Optional[Any] = None,
    discord_notifier: Optional[DiscordNotifier] = None,
    sports_feed: Optional[SportsFeed] = None,
) -> Flask:
    """Build the app. The store and clients are created once here and shared by all requests."""
    settings = settings or load_settings()

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.extensions[STORE_EXTENSION] = store or build_store(settings)
    app.extensions[COMPLETION_EXTENSION] = completion_client or CompletionClient(
        settings.openai_model, timeout=settings.completion_timeout
    )
    app.extensions[DISCORD_EXTENSION] = discord_notifier or DiscordNotifier(
        settings.discord_webhook_url, timeout=settings.api_timeout
    )
    app.extensions[SPORTS_FEED_EXTENSION] = sports_feed or SportsFeed(settings)

    # Served at the root and under /api; the web client calls the /api paths
    for bp in _BLUEPRINTS:
        app.register_blueprint(bp)
        app.register_blueprint(bp, url_prefix="/api", name=f"api_{bp.name}")

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return make_error(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def _unhandled(exc: Exception):
        logger.exception("unhandled_error: %s", exc)
        return make_error("Internal server error", 500)

    logger.info(
        "app_ready store=%s model=%s discord=%s",
        app.extensions[STORE_EXTENSION].backend,
        settings.openai_model,
        bool(settings.discord_webhook_url),
    )
    return app


def main() -> None:
    settings = load_settings()
    create_app(settings).run(host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
