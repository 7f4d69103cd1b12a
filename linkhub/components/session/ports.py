"""
Session component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol

from linkhub.domain.entities import User


class AuthApiPort(Protocol):
    """Backend auth endpoints. Failures raise ApiError subclasses."""

    def me(self, *, allow_refresh: bool = True) -> User:
        """Fetch the user the current session cookies belong to."""
        ...

    def sign_up(self, name: str, username: str, email: str, password: str) -> None:
        """Register; the backend sets session cookies on success."""
        ...

    def sign_in(self, email: str, password: str) -> None:
        """Authenticate; the backend sets session cookies on success."""
        ...

    def sign_out(self) -> None:
        """Ask the backend to invalidate the session cookies."""
        ...

    def refresh(self) -> None:
        """Rotate session cookies using the refresh-token cookie."""
        ...
