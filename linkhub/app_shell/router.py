import logging
import re
from collections.abc import Callable
from typing import Any, NamedTuple

import flet as ft

from linkhub.app_shell.guard import GuardDecision, RouteGuard
from linkhub.components.session import SessionStore
from linkhub.domain.entities import Session

logger = logging.getLogger(__name__)

class RouteConfig(NamedTuple):
    # builder accepts page and **kwargs
    builder: Callable[..., ft.View]
    protected: bool

class Router:
    def __init__(self, page: ft.Page, store: SessionStore, sign_in_route: str = "/sign-in"):
        self.page = page
        self.store = store
        self.sign_in_route = sign_in_route
        self.routes: dict[str, RouteConfig] = {}
        # Simple dynamic routes: regex -> config
        self.dynamic_routes: dict[str, RouteConfig] = {}

        # Guard of the protected route currently on screen, if any
        self._guard: RouteGuard | None = None
        self._guarded_route: str | None = None
        self._detach: Callable[[], None] | None = None
        self._current_route: str | None = None

        # Status before the latest change, to tell an ended session from
        # an anonymous visitor
        self._last_status = store.status
        self._status_before = store.status
        store.subscribe(self._on_session_change)
        store.on_session_ended(self._on_session_ended)

    def register(
        self,
        route: str,
        builder: Callable[..., ft.View],
        protected: bool = True
    ) -> None:
        self.routes[route] = RouteConfig(builder, protected)

    def register_dynamic(
        self,
        pattern: str,
        builder: Callable[..., ft.View],
        protected: bool = True
    ) -> None:
        """Register a regex pattern route.
        Example: '^/pages/(?P<page_id>.+)$'
        The builder will receive regex group dict as kwargs.
        """
        self.dynamic_routes[pattern] = RouteConfig(builder, protected)

    def handle_route_change(self, e: ft.RouteChangeEvent) -> None:
        route = e.route or "/"  # Default empty route to "/"
        logger.info(f"Navigate to: {route}")
        self.show(route)

    def show(self, route: str) -> None:
        self._current_route = route

        # 1. Exact Match
        config = self.routes.get(route)
        kwargs: dict[str, Any] = {}

        # 2. Dynamic Match
        if not config:
            for pattern, dyn_config in self.dynamic_routes.items():
                match = re.match(pattern, route)
                if match:
                    config = dyn_config
                    kwargs = match.groupdict()
                    break

        if not config:
            # 404 - no matching route found
            logger.warning(f"No route found for: {route}")
            self._unguard()
            self._replace(
                ft.View(
                    "/404",
                    [ft.AppBar(title=ft.Text("404")), ft.Text(f"Page not found: {route}")]
                )
            )
            return

        # Auth Guard
        if config.protected:
            guard = self._guard_for(route)
            decision = guard.evaluate()
            if decision == "loading":
                self._replace(loading_view(route))
                return
            if decision == "blank":
                # guard has already navigated to sign-in
                return
        else:
            self._unguard()

        # Build View
        try:
            view = config.builder(self.page, **kwargs)
        except TypeError as err:
            logger.error(f"Error building view for {route}: {err}")
            view = ft.View("/error", [ft.Text(f"Error: {err}")])
        self._replace(view)

    def view_pop(self, view: ft.View) -> None:
        self.page.views.pop()
        top_route = self.page.views[-1].route if self.page.views else "/"
        self.page.go(top_route)

    # --- Guarding ---

    def _guard_for(self, route: str) -> RouteGuard:
        if self._guard is None or self._guarded_route != route:
            self._unguard()
            self._guard = RouteGuard(self.store, self.page.go, self.sign_in_route)
            self._guarded_route = route
            self._detach = self._guard.attach(self._on_guard_decision)
        return self._guard

    def _unguard(self) -> None:
        if self._detach is not None:
            self._detach()
        self._guard = None
        self._guarded_route = None
        self._detach = None

    def _on_guard_decision(self, decision: GuardDecision) -> None:
        # "blank" means the guard already sent us to sign-in
        route = self._guarded_route
        if decision != "blank" and route is not None:
            self.show(route)

    def _on_session_change(self, session: Session) -> None:
        self._status_before = self._last_status
        self._last_status = session.status

        # Guarded routes rerender through their guard; public views are
        # rebuilt once the session resolves so they show the new state
        resolved = session.status in ("authenticated", "unauthenticated")
        if (
            resolved
            and session.status != self._status_before
            and self._guard is None
            and self._current_route is not None
        ):
            self.show(self._current_route)

    def _on_session_ended(self) -> None:
        # The guard handles the redirect
        if self._status_before == "authenticated":
            self.page.open(ft.SnackBar(ft.Text("Your session has ended. Please sign in again.")))

    def _replace(self, view: ft.View) -> None:
        self.page.views.clear()
        self.page.views.append(view)
        self.page.update()


def loading_view(route: str) -> ft.View:
    return ft.View(
        route,
        [ft.Container(content=ft.ProgressRing(), alignment=ft.alignment.center, expand=True)],
    )
