from typing import Optional


class APIError(Exception):
    """Unified error class for all external API clients."""

    def __init__(self, source: str, code: str, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.source = source
        self.code = code
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "code": self.code,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }


class CompletionError(APIError):
    """Completion service is missing its key or could not be reached."""

    def __init__(self, code: str, message: str, details: Optional[str] = None):
        super().__init__("OpenAI", code, message, details)


class StoreError(APIError):
    """Remote key-value store rejected a request or was unreachable."""

    def __init__(self, code: str, message: str, details: Optional[str] = None):
        super().__init__("KV", code, message, details)


class FeedError(APIError):
    """A sports or odds feed call failed."""


class ValidationError(ValueError):
    """Request body is missing required fields or has the wrong types."""
