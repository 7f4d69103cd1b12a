import logging
from typing import Any

import flet as ft

from linkhub.app_shell.editor_view import PageEditorContent
from linkhub.app_shell.public_home import PublicHomeContent
from linkhub.app_shell.public_page import PublicLinkPageContent
from linkhub.app_shell.router import Router
from linkhub.settings.loader import settings_from_env
from linkhub.ui.context import ServiceContext
from linkhub.ui.layout import MainLayout
from linkhub.ui.views.sign_in import SignInView
from linkhub.ui.views.sign_up import SignUpView

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main(page: ft.Page) -> None:
    page.title = "LinkHub"
    page.theme_mode = ft.ThemeMode.LIGHT

    # 1. Load Settings
    try:
        settings = settings_from_env()
    except (FileNotFoundError, ValueError) as err:
        logger.error(f"Invalid settings: {err}")
        page.add(ft.Text(f"Error: {err}", color="red", size=20))
        return

    logger.info(f"Backend: {settings.api.base_url}")

    # 2. Create Context
    ctx = ServiceContext.create(settings)
    store = ctx.session_store
    routes = settings.routes

    # 3. Routing Setup
    router = Router(page, store, sign_in_route=routes.sign_in)

    # --- Layout Wrapper ---
    def make_view(route: str, content: ft.Control) -> ft.View:
        def handle_sign_out() -> None:
            result = store.sign_out()
            if not result.success:
                logger.warning(f"Sign out: {result.error}")
            page.go(result.redirect_to or routes.sign_in)

        layout = MainLayout(
            page=page,
            store=store,
            routes=routes,
            content=content,
            on_sign_out=handle_sign_out,
            on_nav=page.go,
            current_route=route,
        )
        return ft.View(route, [layout], padding=0)

    def already_signed_in() -> ft.Control:
        return ft.Column(
            [
                ft.Text("You are already signed in."),
                ft.FilledButton("My Pages", on_click=lambda _: page.go(routes.after_sign_in)),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        )

    # --- Builders ---

    def home_builder(_: ft.Page) -> ft.View:
        return make_view(routes.home, PublicHomeContent(page, ctx))

    def sign_in_builder(_: ft.Page) -> ft.View:
        content = already_signed_in() if store.is_authenticated else SignInView(page, ctx)
        return make_view(routes.sign_in, content)

    def sign_up_builder(_: ft.Page) -> ft.View:
        content = already_signed_in() if store.is_authenticated else SignUpView(page, ctx)
        return make_view(routes.sign_up, content)

    def pages_builder(_: ft.Page) -> ft.View:
        return make_view(routes.after_sign_in, PageEditorContent(page, ctx))

    def page_edit_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        page_id = kwargs.get("page_id")
        content = PageEditorContent(page, ctx, page_id=page_id)
        return make_view(f"{routes.after_sign_in}/{page_id}", content)

    def public_page_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        slug = kwargs.get("slug")
        content = PublicLinkPageContent(page, ctx, slug=slug)
        return make_view(f"{routes.public_prefix}/{slug}", content)

    # --- Register Routes ---

    # Public
    router.register(routes.home, home_builder, protected=False)
    router.register(routes.sign_in, sign_in_builder, protected=False)
    router.register(routes.sign_up, sign_up_builder, protected=False)
    router.register_dynamic(
        rf"^{routes.public_prefix}/(?P<slug>[^/]+)$",
        public_page_builder,
        protected=False,
    )

    # Protected
    router.register(routes.after_sign_in, pages_builder, protected=True)
    router.register_dynamic(
        rf"^{routes.after_sign_in}/(?P<page_id>[^/]+)$",
        page_edit_builder,
        protected=True,
    )

    # Wire up events
    page.on_route_change = router.handle_route_change
    page.on_view_pop = router.view_pop
    page.on_close = lambda _: ctx.close()

    # Go to initial route; protected routes show a loading view until the
    # first check resolves
    page.go(page.route or routes.home)
    store.check_auth_status()


def run() -> None:
    ft.app(target=main)


if __name__ == "__main__":
    run()
