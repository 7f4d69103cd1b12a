import flet as ft

from linkhub.components.session import SignInInput
from linkhub.ui.context import ServiceContext


class SignInView(ft.Column): # type: ignore
    def __init__(self, page: ft.Page, ctx: ServiceContext) -> None:
        super().__init__()
        self.page = page
        self.ctx = ctx

        self.email = ft.TextField(label="Email", width=300)
        self.password = ft.TextField(
            label="Password", width=300, password=True, can_reveal_password=True
        )
        self.error_text = ft.Text(color="red", visible=False)
        self.submit = ft.ElevatedButton("Login", on_click=self.sign_in_click)

        # Setup Column properties
        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.controls = [
            ft.Text("Sign In", style="headlineMedium"),
            self.email,
            self.password,
            self.error_text,
            self.submit,
            ft.TextButton(
                "No account? Sign up",
                on_click=lambda _: page.go(ctx.settings.routes.sign_up),
            ),
        ]

    def sign_in_click(self, e: ft.ControlEvent) -> None:
        email = (self.email.value or "").strip()
        pwd = self.password.value or ""

        if not email or not pwd:
            self.show_error("Please enter email and password.")
            return

        self.submit.disabled = True
        self.submit.text = "Signing in..."
        self.update()

        result = self.ctx.session_store.sign_in(SignInInput(email=email, password=pwd))

        self.submit.disabled = False
        self.submit.text = "Login"
        if result.success and result.redirect_to:
            self.page.go(result.redirect_to)
        else:
            self.show_error(result.error or "Sign In Failed")

    def show_error(self, message: str) -> None:
        self.error_text.value = message
        self.error_text.visible = True
        self.update()
