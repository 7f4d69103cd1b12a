"""
RouteGuard - decide whether a protected view may render.

- unknown/checking: "loading", never a redirect (no flash of the sign-in
  page before the first check completes)
- unauthenticated: navigate to sign-in once, then "blank"
- authenticated: "render"
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from threading import Lock
from typing import Literal

from linkhub.components.session import SessionStore
from linkhub.domain.entities import Session

logger = logging.getLogger(__name__)

GuardDecision = Literal["loading", "blank", "render"]


class RouteGuard:
    def __init__(
        self,
        store: SessionStore,
        navigate: Callable[[str], None],
        sign_in_route: str = "/sign-in",
    ) -> None:
        self.store = store
        self.navigate = navigate
        self.sign_in_route = sign_in_route
        self._redirected = False
        self._lock = Lock()

    def evaluate(self) -> GuardDecision:
        return self._decide(self.store.session)

    def attach(self, on_decision: Callable[[GuardDecision], None]) -> Callable[[], None]:
        """
        Re-evaluate on every session change and hand the result to
        on_decision. Returns a detach callable.
        """

        def listener(session: Session) -> None:
            on_decision(self._decide(session))

        return self.store.subscribe(listener)

    def _decide(self, session: Session) -> GuardDecision:
        if session.status == "authenticated":
            with self._lock:
                self._redirected = False
            return "render"

        if session.status == "unauthenticated":
            with self._lock:
                should_redirect = not self._redirected
                self._redirected = True
            if should_redirect:
                logger.info(f"Access denied. Redirecting to {self.sign_in_route}.")
                self.navigate(self.sign_in_route)
            return "blank"

        return "loading"
