import flet as ft

from linkhub.components.public import LOAD_FAILED, NOT_FOUND
from linkhub.domain.entities import PublicPage
from linkhub.domain.platforms import platform_color
from linkhub.ui.components.link_card import LinkCard
from linkhub.ui.context import ServiceContext

_PLATFORM_ICONS = {
    "facebook": ft.Icons.FACEBOOK,
    "whatsapp": ft.Icons.CHAT,
    "telegram": ft.Icons.TELEGRAM,
    "youtube": ft.Icons.PLAY_CIRCLE,
    "github": ft.Icons.CODE,
    "tiktok": ft.Icons.MUSIC_NOTE,
    "instagram": ft.Icons.CAMERA_ALT,
}


def page_header(public: PublicPage) -> list[ft.Control]:
    """The page name as heading, then its title and description."""
    controls: list[ft.Control] = [
        ft.Text(public.name or public.title, size=30, weight=ft.FontWeight.BOLD, color="primary"),
    ]
    if public.name and public.title:
        controls.append(ft.Text(public.title, size=18))
    if public.description:
        controls.append(
            ft.Text(public.description, text_align=ft.TextAlign.CENTER, color="onSurfaceVariant")
        )
    return controls


def PublicLinkPageContent(page: ft.Page, ctx: ServiceContext, slug: str | None = None) -> ft.Control:
    """Render a published link page. Visitors need no session."""
    result = ctx.public_reader.get(slug or "")

    if result.not_found:
        return ft.Column(
            [
                ft.Text(NOT_FOUND, size=20),
                ft.TextButton("← Back to Home", on_click=lambda _: page.go("/")),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        )
    if not result.success or result.page is None:
        return ft.Text(result.error or LOAD_FAILED, color="red")

    controls = page_header(result.page)
    controls.append(ft.Divider())

    if not result.links:
        controls.append(ft.Text("No links yet.", italic=True))

    for view in result.links:
        controls.append(
            LinkCard(
                label=view.label,
                color=platform_color(view.platform),
                icon=_PLATFORM_ICONS.get(view.platform, ft.Icons.LINK),
                on_click=lambda _, url=view.link.url: page.launch_url(url),
            )
        )

    return ft.Container(
        content=ft.Column(
            controls,
            spacing=12,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            scroll=ft.ScrollMode.AUTO,
        ),
        alignment=ft.alignment.top_center,
        expand=True,
    )
