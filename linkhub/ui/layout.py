from collections.abc import Callable
from typing import Any

import flet as ft

from linkhub.components.session import SessionStore
from linkhub.settings.models import RouteSettings


class MainLayout(ft.Row):  # type: ignore
    """
    The main layout structure.
    - NavigationRail (Left) + AppBar and Content (Right)
    - Rail entries depend on whether the session is authenticated
    """
    def __init__(
        self,
        page: ft.Page,
        store: SessionStore,
        routes: RouteSettings,
        content: ft.Control,  # The dynamic view
        on_sign_out: Callable[[], None],
        on_nav: Callable[[str], None],
        current_route: str = "/",
    ):
        super().__init__(expand=True, spacing=0)
        self.page = page
        self.store = store
        self.on_sign_out = on_sign_out
        self.on_nav = on_nav

        signed_in = store.is_authenticated

        # index -> route, in rail order
        self.nav_routes = (
            [routes.home, routes.after_sign_in]
            if signed_in
            else [routes.home, routes.sign_in, routes.sign_up]
        )

        idx = None
        for i, target in enumerate(self.nav_routes):
            if current_route == target or (i > 0 and current_route.startswith(target + "/")):
                idx = i

        self.rail = ft.NavigationRail(
            selected_index=idx,
            label_type=ft.NavigationRailLabelType.ALL,
            min_width=100,
            min_extended_width=200,
            leading=ft.Container(
                content=ft.Icon(ft.Icons.LINK, size=32, color="primary"),
                padding=20,
            ),
            group_alignment=-0.9,
            destinations=[
                ft.NavigationRailDestination(
                    icon=ft.Icons.HOME_OUTLINED,
                    selected_icon=ft.Icons.HOME,
                    label="Home",
                ),
                ft.NavigationRailDestination(
                    icon=ft.Icons.DASHBOARD_OUTLINED,
                    selected_icon=ft.Icons.DASHBOARD,
                    label="My Pages",
                ),
            ] if signed_in else [
                ft.NavigationRailDestination(
                    icon=ft.Icons.HOME_OUTLINED,
                    selected_icon=ft.Icons.HOME,
                    label="Home",
                ),
                ft.NavigationRailDestination(icon=ft.Icons.LOGIN, label="Sign in"),
                ft.NavigationRailDestination(icon=ft.Icons.PERSON_ADD, label="Sign up"),
            ],
            on_change=self._rail_change,
            bgcolor="surface",
        )

        self.content_area = ft.Container(
            content=content,
            expand=True,
            padding=20,
            alignment=ft.alignment.top_left,
        )

        user = store.user
        self.app_bar = ft.Container(
            content=ft.Row(
                [
                    ft.Text("LinkHub", size=20, weight=ft.FontWeight.BOLD, color="primary"),
                    ft.Container(expand=True),
                    ft.PopupMenuButton(
                        icon=ft.Icons.PERSON,
                        items=[
                            ft.PopupMenuItem(text=user.username if user else "Account"),
                            ft.PopupMenuItem(text="Sign out", on_click=lambda _: self.on_sign_out()),
                        ]
                    ) if signed_in else ft.FilledButton(
                        "Sign in",
                        icon=ft.Icons.LOGIN,
                        on_click=lambda _: self.on_nav(routes.sign_in),
                    ),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN
            ),
            padding=ft.padding.symmetric(horizontal=20, vertical=10),
            bgcolor="surfaceVariant",
        )

        right_panel = ft.Column(
            [
                self.app_bar,
                self.content_area
            ],
            expand=True,
            spacing=0
        )

        self.controls = [
            self.rail,
            ft.VerticalDivider(width=1, color="outlineVariant"),
            right_panel
        ]

    def _rail_change(self, e: Any) -> None:
        idx = e.control.selected_index
        if idx is not None and 0 <= idx < len(self.nav_routes):
            self.on_nav(self.nav_routes[idx])
