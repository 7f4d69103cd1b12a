from typing import Any

import flet as ft


class LinkCard(ft.Container):  # type: ignore
    """
    A rounded, full-width button for one public link, tinted with the
    platform colour. Lifts slightly on hover.
    """
    def __init__(
        self,
        label: str,
        color: str,
        on_click: Any | None = None,
        icon: str = ft.Icons.LINK,
        width: float | None = 420,
    ):
        super().__init__(
            content=ft.Row(
                [
                    ft.Icon(icon, color="white"),
                    ft.Text(label, color="white", weight=ft.FontWeight.BOLD, expand=True),
                ],
                spacing=12,
            ),
            width=width,
            padding=ft.padding.symmetric(horizontal=20, vertical=14),
            border_radius=ft.border_radius.all(24),
            bgcolor=color,
            animate=ft.animation.Animation(200, ft.AnimationCurve.EASE_OUT),
            on_hover=self._on_hover,
            on_click=on_click,
            shadow=ft.BoxShadow(
                spread_radius=0,
                blur_radius=8,
                color="#1A000000",
                offset=ft.Offset(0, 3),
            ),
        )
        self.scale = 1.0

    def _on_hover(self, e: ft.HoverEvent) -> None:
        if e.data == "true":
            self.scale = 1.02
            self.shadow.blur_radius = 16
        else:
            self.scale = 1.0
            self.shadow.blur_radius = 8
        self.update()
