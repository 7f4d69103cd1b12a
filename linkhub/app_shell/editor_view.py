import logging
from collections.abc import Callable

import flet as ft

from linkhub.components.editor import LOAD_FAILED
from linkhub.domain.entities import LinkDraft, PageDraft
from linkhub.domain.platforms import PLATFORM_OPTIONS
from linkhub.ui.context import ServiceContext

logger = logging.getLogger(__name__)


def PageEditorContent(
    page: ft.Page,
    ctx: ServiceContext,
    page_id: str | None = None,
) -> ft.Control:
    editor = ctx.editor
    routes = ctx.settings.routes
    root = ft.Container(padding=20, expand=True)

    status_text = ft.Text(visible=False)

    def show_status(message: str, ok: bool) -> None:
        # Results can land after the user navigated away
        if root.page is None:
            return
        status_text.value = message
        status_text.color = "green" if ok else "red"
        status_text.visible = True
        page.update()

    if page_id is None:
        root.content = _create_page_panel(page, ctx, status_text, show_status)
        return root

    loaded = editor.load(page_id)
    if not loaded.success or loaded.draft is None:
        return ft.Text(loaded.error or LOAD_FAILED, color="red")
    draft = loaded.draft

    # Form Controls
    title_field = ft.TextField(label="Page Title", value=draft.title)
    description_field = ft.TextField(
        label="Description",
        value=draft.description,
        multiline=True,
        min_lines=3,
    )

    links_col = ft.Column(spacing=10)
    working: list[LinkDraft] = list(draft.links)

    def render_links() -> None:
        links_col.controls.clear()
        for i, link in enumerate(working):

            def on_platform(e: ft.ControlEvent, idx: int = i) -> None:
                working[idx] = working[idx].model_copy(update={"platform": e.control.value or ""})

            def on_url(e: ft.ControlEvent, idx: int = i) -> None:
                working[idx] = working[idx].model_copy(update={"url": e.control.value or ""})

            links_col.controls.append(
                ft.Card(content=ft.Container(
                    content=ft.Row([
                        ft.Dropdown(
                            value=link.platform,
                            options=[
                                ft.dropdown.Option(key=opt.value, text=opt.label)
                                for opt in PLATFORM_OPTIONS
                            ],
                            on_change=on_platform,
                            width=160,
                        ),
                        ft.TextField(
                            value=link.url,
                            hint_text="https://example.com",
                            on_change=on_url,
                            expand=True,
                        ),
                        ft.IconButton(
                            ft.Icons.DELETE,
                            on_click=lambda _, idx=i: remove_link(idx),
                            icon_color="red",
                        ),
                    ]),
                    padding=10,
                ))
            )
        page.update()

    def remove_link(idx: int) -> None:
        working.pop(idx)
        render_links()

    def add_link(_: ft.ControlEvent) -> None:
        working.append(LinkDraft(platform="facebook", url=""))
        render_links()

    render_links()

    save_button = ft.ElevatedButton("Save Page", icon=ft.Icons.SAVE)

    def save(_: ft.ControlEvent) -> None:
        if editor.saving:
            return
        save_button.disabled = True
        save_button.text = "Saving..."
        page.update()

        try:
            result = editor.save(
                page_id,
                PageDraft(
                    title=title_field.value or "",
                    description=description_field.value or "",
                    links=working,
                ),
            )
        finally:
            save_button.disabled = False
            save_button.text = "Save Page"

        if result.success:
            show_status("Page saved successfully!", ok=True)
            return

        message = result.error or "Failed to save page"
        logger.warning(f"Save of page {page_id} failed: {message}")
        if result.errors:
            message += ": " + "; ".join(err.message for err in result.errors)
        if result.page_saved:
            message += " Title and description were saved; please save again to finish."
        show_status(message, ok=False)

    save_button.on_click = save

    def do_delete(_: ft.ControlEvent) -> None:
        page.close(confirm_dialog)
        result = editor.delete_page(page_id)
        if result.success:
            page.open(ft.SnackBar(ft.Text("Page deleted successfully!")))
            page.go(routes.after_sign_in)
        else:
            show_status(result.error or "Failed to delete page", ok=False)

    confirm_dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text("Delete page?"),
        content=ft.Text("Are you sure you want to delete this page? This cannot be undone."),
        actions=[
            ft.TextButton("Cancel", on_click=lambda _: page.close(confirm_dialog)),
            ft.TextButton("Delete", on_click=do_delete),
        ],
    )

    root.content = ft.Column([
        ft.Row([
            ft.Text("Edit Page", size=24, weight=ft.FontWeight.BOLD, color="primary"),
            ft.Row([
                ft.TextButton(
                    "View public page",
                    icon=ft.Icons.OPEN_IN_NEW,
                    on_click=lambda _: page.go(f"{routes.public_prefix}/{page_id}"),
                ),
                ft.ElevatedButton(
                    "Delete Page",
                    icon=ft.Icons.DELETE,
                    on_click=lambda _: page.open(confirm_dialog),
                    color="red",
                ),
                save_button,
            ]),
        ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
        status_text,
        ft.Divider(),
        title_field,
        description_field,
        ft.Row([
            ft.Text("Links", size=18, weight=ft.FontWeight.BOLD),
            ft.ElevatedButton("Add Link", icon=ft.Icons.ADD, on_click=add_link),
        ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
        links_col,
    ], scroll=ft.ScrollMode.AUTO)
    return root


def _create_page_panel(
    page: ft.Page,
    ctx: ServiceContext,
    status_text: ft.Text,
    show_status: Callable[[str, bool], None],
) -> ft.Control:
    base = ctx.settings.routes.after_sign_in
    name_field = ft.TextField(label="Page name", width=300)
    open_field = ft.TextField(label="Page ID", width=300)

    def create(_: ft.ControlEvent) -> None:
        result = ctx.editor.create_page(name_field.value or "")
        if result.success and result.page is not None:
            page.open(ft.SnackBar(ft.Text("Page created successfully!")))
            page.go(f"{base}/{result.page.id}")
        else:
            show_status(result.error or "Failed to create page", False)

    def open_existing(_: ft.ControlEvent) -> None:
        target = (open_field.value or "").strip()
        if target:
            page.go(f"{base}/{target}")

    return ft.Column([
        ft.Text("Create New Page", size=24, weight=ft.FontWeight.BOLD, color="primary"),
        status_text,
        ft.Row([name_field, ft.ElevatedButton("Create Page", icon=ft.Icons.ADD, on_click=create)]),
        ft.Divider(),
        ft.Text("Or edit an existing page"),
        ft.Row([open_field, ft.OutlinedButton("Edit", icon=ft.Icons.EDIT, on_click=open_existing)]),
    ])

