"""Discord webhook sharing for bet cards and coach replies."""

from typing import Optional

import requests

from .config import DISCORD_MAX_CHARS, setup_logger
from .errors import APIError

logger = setup_logger(__name__)


class DiscordNotifier:
    """Discord webhook notification handler."""

    def __init__(self, webhook_url: Optional[str] = None, timeout: float = 10.0):
        """Initialize Discord notifier.

        Args:
            webhook_url: Discord webhook URL. Sharing is disabled when empty.
            timeout: Request timeout in seconds.
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

        if not self.webhook_url:
            logger.warning("Discord webhook URL not configured")

    @property
    def enabled(self) -> bool:
        """Check if Discord sharing is enabled."""
        return bool(self.webhook_url)

    def send_message(self, text: Optional[str]) -> bool:
        """Post plain text to the webhook, truncated to fit a Discord message.

        Returns:
            False when no webhook is configured, True once Discord accepts it.

        Raises:
            APIError: the webhook call failed or Discord rejected the payload.
        """
        if not self.enabled:
            logger.debug("Discord sharing disabled, skipping")
            return False

        content = (text or "")[:DISCORD_MAX_CHARS] or "..."
        try:
            response = requests.post(
                self.webhook_url,
                json={"content": content},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error("Failed to send Discord message: %s", e)
            raise APIError("Discord", "NETWORK_ERROR", str(e)) from e

        if not response.ok:
            logger.error("Discord webhook rejected message: %s", response.status_code)
            raise APIError("Discord", f"HTTP_{response.status_code}", response.text or "Discord error")

        logger.info("Discord message sent successfully")
        return True
