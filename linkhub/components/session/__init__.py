"""
Session component - Authentication state for the client.

Handles initial session check, sign-in/up/out and token refresh.
"""

from .component import (
    SESSION_UNCONFIRMED,
    SIGN_IN_FAILED,
    SIGN_UP_FAILED,
    SessionListener,
    SessionStore,
)
from .models import AuthOutput, SignInInput, SignUpInput
from .ports import AuthApiPort

__all__ = [
    # Store
    "SessionStore",
    "SessionListener",
    # Models
    "AuthOutput",
    "SignInInput",
    "SignUpInput",
    # Ports
    "AuthApiPort",
    # Messages
    "SIGN_IN_FAILED",
    "SIGN_UP_FAILED",
    "SESSION_UNCONFIRMED",
]
