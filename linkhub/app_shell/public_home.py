import flet as ft

from linkhub.ui.context import ServiceContext


def PublicHomeContent(page: ft.Page, ctx: ServiceContext) -> ft.Control:
    routes = ctx.settings.routes
    store = ctx.session_store

    if store.is_authenticated:
        user = store.user
        greeting = f"Welcome back, {user.name}!" if user else "Welcome back!"
        actions: list[ft.Control] = [
            ft.Text(greeting, size=18),
            ft.FilledButton(
                "My Pages",
                icon=ft.Icons.DASHBOARD,
                on_click=lambda _: page.go(routes.after_sign_in),
            ),
        ]
    else:
        actions = [
            ft.FilledButton(
                "Sign in",
                icon=ft.Icons.LOGIN,
                on_click=lambda _: page.go(routes.sign_in),
            ),
            ft.OutlinedButton(
                "Create an account",
                icon=ft.Icons.PERSON_ADD,
                on_click=lambda _: page.go(routes.sign_up),
            ),
        ]

    return ft.Container(
        content=ft.Column(
            [
                ft.Text("LinkHub", size=40, weight=ft.FontWeight.BOLD, color="primary"),
                ft.Text("One page for all your links.", size=16, color="onSurfaceVariant"),
                *actions,
            ],
            spacing=16,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        alignment=ft.alignment.center,
        expand=True,
    )
