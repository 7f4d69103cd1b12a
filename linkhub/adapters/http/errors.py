"""
Backend API errors.

Every failed call surfaces as one of these:
- TransportError: no response received
- AuthorizationError: 401 that the refresh policy could not recover
- RequestRejectedError: other 4xx, message is the backend's own text
- ServerError: 5xx, generic message
"""

from __future__ import annotations

from typing import Any

import httpx

GENERIC_MESSAGE = "Something went wrong. Please try again."
SERVER_MESSAGE = "The server failed to handle the request. Please try again later."
NETWORK_MESSAGE = "Could not reach the server. Check your connection and try again."


class ApiError(Exception):
    """Base class for backend API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class TransportError(ApiError):
    """Raised when the request never produced a response."""

    def __init__(self, message: str = NETWORK_MESSAGE) -> None:
        super().__init__(message, status_code=None)


class AuthorizationError(ApiError):
    """Raised on 401 once refresh-and-retry is exhausted."""


class RequestRejectedError(ApiError):
    """Raised on 4xx other than 401; message shown to the user verbatim."""


class ServerError(ApiError):
    """Raised on 5xx."""


def extract_detail(response: httpx.Response) -> str | None:
    """
    Pull a human readable message out of an error body.

    Understands FastAPI's {"detail": "..."} and the validation form
    {"detail": [{"msg": "..."}, ...]}, plus a bare {"message": "..."}.
    """
    try:
        body: Any = response.json()
    except ValueError:
        text = response.text.strip()
        return text or None

    if not isinstance(body, dict):
        return None

    detail = body.get("detail", body.get("message"))
    if isinstance(detail, str):
        return detail.strip() or None
    if isinstance(detail, list):
        msgs = [str(d.get("msg")) for d in detail if isinstance(d, dict) and d.get("msg")]
        return "; ".join(msgs) or None
    return None


def error_for_response(response: httpx.Response) -> ApiError:
    """Map a non-2xx response onto the error taxonomy."""
    status = response.status_code
    if status >= 500:
        return ServerError(SERVER_MESSAGE, status_code=status)

    message = extract_detail(response) or GENERIC_MESSAGE
    if status == 401:
        return AuthorizationError(message, status_code=status)
    return RequestRejectedError(message, status_code=status)


def user_message(err: Exception, fallback: str = GENERIC_MESSAGE) -> str:
    """Text suitable for an error banner."""
    if isinstance(err, ApiError) and err.message:
        return err.message
    return fallback
