"""
Session component - client-side authentication state.

The backend is the only authority on whether the session cookies are
valid, so the store is a cache of that answer: every claim of being
authenticated comes from a fresh GET /auth/me, never from a sign-in
response body or from local state.

States: unknown -> checking -> authenticated | unauthenticated.
authenticated -> unauthenticated on sign-out or failed refresh.
unauthenticated -> checking -> authenticated on sign-in/up.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from threading import Lock

from linkhub.adapters.http.errors import ApiError, user_message
from linkhub.domain.entities import Session, SessionStatus, User

from .models import AuthOutput, SignInInput, SignUpInput
from .ports import AuthApiPort

logger = logging.getLogger(__name__)

SessionListener = Callable[[Session], None]
SessionEndedListener = Callable[[], None]

SIGN_IN_FAILED = "Sign in failed. Please check your details and try again."
SIGN_UP_FAILED = "Sign up failed. Please try again."
SESSION_UNCONFIRMED = "Signed in, but the session could not be confirmed. Please try again."


class SessionStore:
    """
    Single writer of the Session snapshot.

    Each write replaces the whole snapshot under a lock, so overlapping
    user fetches resolve to whichever finished last.
    """

    def __init__(
        self,
        auth_api: AuthApiPort,
        after_sign_in: str = "/pages",
        sign_in_route: str = "/sign-in",
    ) -> None:
        self._auth_api = auth_api
        self.after_sign_in = after_sign_in
        self.sign_in_route = sign_in_route
        self._session = Session()
        self._lock = Lock()
        self._listeners: list[SessionListener] = []
        self._ended_listeners: list[SessionEndedListener] = []

    # --- Snapshot ---

    @property
    def session(self) -> Session:
        with self._lock:
            return self._session

    @property
    def status(self) -> SessionStatus:
        return self.session.status

    @property
    def user(self) -> User | None:
        return self.session.user

    @property
    def is_authenticated(self) -> bool:
        return self.status == "authenticated"

    @property
    def is_resolved(self) -> bool:
        return self.status in ("authenticated", "unauthenticated")

    # --- Subscriptions ---

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Call listener on every change. Returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def on_session_ended(self, listener: SessionEndedListener) -> Callable[[], None]:
        """Call listener when a refresh fails and the session is forcibly ended."""
        with self._lock:
            self._ended_listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._ended_listeners:
                    self._ended_listeners.remove(listener)

        return unsubscribe

    # --- Operations ---

    def check_auth_status(self) -> Session:
        """Resolve the initial session. Never leaves the store in checking."""
        self._set("checking")
        try:
            self._fetch_user()
        except Exception:
            logger.exception("Unexpected failure while checking the session")
        if self.status == "checking":
            self._set("unauthenticated")
        return self.session

    def sign_in(self, inp: SignInInput) -> AuthOutput:
        try:
            self._auth_api.sign_in(inp.email, inp.password)
        except ApiError as err:
            logger.info(f"Sign in rejected ({err.status_code}): {err.message}")
            self._set("unauthenticated")
            return AuthOutput(success=False, error=user_message(err, SIGN_IN_FAILED))
        return self._confirm_session()

    def sign_up(self, inp: SignUpInput) -> AuthOutput:
        try:
            self._auth_api.sign_up(inp.name, inp.username, inp.email, inp.password)
        except ApiError as err:
            logger.info(f"Sign up rejected ({err.status_code}): {err.message}")
            self._set("unauthenticated")
            return AuthOutput(success=False, error=user_message(err, SIGN_UP_FAILED))
        return self._confirm_session()

    def sign_out(self) -> AuthOutput:
        """
        Best-effort backend sign-out.

        Local state is cleared whatever the backend says; success only
        reports whether the backend acknowledged.
        """
        error: str | None = None
        try:
            self._auth_api.sign_out()
        except ApiError as err:
            logger.warning(f"Backend sign out failed, clearing local session anyway: {err}")
            error = user_message(err)
        finally:
            self._set("unauthenticated")

        return AuthOutput(success=error is None, error=error, redirect_to=self.sign_in_route)

    def refresh_token(self) -> bool:
        """
        Recover an expired access token. Installed as the HTTP client's
        refresh handler.

        Returns True when the session was confirmed again. On failure the
        session is ended and session-ended listeners fire.
        """
        try:
            self._auth_api.refresh()
        except ApiError as err:
            logger.warning(f"Session refresh failed: {err}")
            self._end_session()
            return False

        if self.status != "authenticated":
            self._set("checking")

        # The confirming fetch must not itself trigger another refresh
        if self._fetch_user(allow_refresh=False) is None:
            self._end_session()
            return False
        logger.info("Session refreshed")
        return True

    # --- Internals ---

    def _confirm_session(self) -> AuthOutput:
        self._set("checking")
        user = self._fetch_user(allow_refresh=False)
        if user is None:
            return AuthOutput(success=False, error=SESSION_UNCONFIRMED)
        return AuthOutput(user=user, success=True, redirect_to=self.after_sign_in)

    def _fetch_user(self, *, allow_refresh: bool = True) -> User | None:
        try:
            user = self._auth_api.me(allow_refresh=allow_refresh)
        except ApiError as err:
            logger.info(f"No valid session: {err}")
            self._set("unauthenticated")
            return None
        self._set("authenticated", user)
        return user

    def _end_session(self) -> None:
        self._set("unauthenticated")
        with self._lock:
            listeners = list(self._ended_listeners)
        for listener in listeners:
            listener()

    def _set(self, status: SessionStatus, user: User | None = None) -> None:
        new = Session(user=user, status=status)
        with self._lock:
            old = self._session
            self._session = new
            listeners = list(self._listeners)

        if old == new:
            return
        if old.status != new.status:
            logger.info(f"Session {old.status} -> {new.status}")
        for listener in listeners:
            listener(new)
