"""Error taxonomy shared by the history store, the gateway and the HTTP layer."""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    """Base error carrying an HTTP status and a stable, client-safe message."""

    status_code: int = 500
    default_message: str = "Internal server error."

    def __init__(self, message: Optional[str] = None, *, detail: Optional[str] = None) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message if detail is None else f"{self.message} ({detail})")


class ValidationError(ServiceError):
    """Inbound payload rejected before any side effect."""

    status_code = 400
    default_message = "Text is required for summarization."


class GatewayError(ServiceError):
    """The summarization collaborator failed or was unreachable."""

    status_code = 500
    default_message = "Gemini API call failed."


class StoreReadError(ServiceError):
    status_code = 500
    default_message = "Failed to load history."


class StoreWriteError(ServiceError):
    status_code = 500
    default_message = "Failed to save history."


__all__ = [
    "ServiceError",
    "ValidationError",
    "GatewayError",
    "StoreReadError",
    "StoreWriteError",
]
