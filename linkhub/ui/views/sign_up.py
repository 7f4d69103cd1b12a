import flet as ft

from linkhub.components.session import SignUpInput
from linkhub.ui.context import ServiceContext


class SignUpView(ft.Column): # type: ignore
    def __init__(self, page: ft.Page, ctx: ServiceContext) -> None:
        super().__init__()
        self.page = page
        self.ctx = ctx

        self.name_field = ft.TextField(label="Name", width=300)
        self.username_field = ft.TextField(label="Username", width=300)
        self.email_field = ft.TextField(label="Email", width=300)
        self.password_field = ft.TextField(
            label="Password", width=300, password=True, can_reveal_password=True
        )
        self.error_text = ft.Text(color="red", visible=False)
        self.submit = ft.ElevatedButton("Create account", on_click=self.sign_up_click)

        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.controls = [
            ft.Text("Sign Up", style="headlineMedium"),
            self.name_field,
            self.username_field,
            self.email_field,
            self.password_field,
            self.error_text,
            self.submit,
            ft.TextButton(
                "Already have an account? Sign in",
                on_click=lambda _: page.go(ctx.settings.routes.sign_in),
            ),
        ]

    def sign_up_click(self, e: ft.ControlEvent) -> None:
        fields = {
            "name": (self.name_field.value or "").strip(),
            "username": (self.username_field.value or "").strip(),
            "email": (self.email_field.value or "").strip(),
            "password": self.password_field.value or "",
        }
        missing = [name for name, value in fields.items() if not value]
        if missing:
            self.show_error(f"Please fill in: {', '.join(missing)}.")
            return

        self.submit.disabled = True
        self.update()

        result = self.ctx.session_store.sign_up(SignUpInput(**fields))

        self.submit.disabled = False
        if result.success and result.redirect_to:
            self.page.go(result.redirect_to)
        else:
            self.show_error(result.error or "Sign Up Failed")

    def show_error(self, message: str) -> None:
        self.error_text.value = message
        self.error_text.visible = True
        self.update()
