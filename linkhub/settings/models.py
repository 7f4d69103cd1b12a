from pydantic import BaseModel, Field


class EndpointSettings(BaseModel):
    me: str = "/auth/me"
    sign_up: str = "/auth/signup"
    sign_in: str = "/auth/signin"
    sign_out: str = "/auth/signout"
    refresh: str = "/auth/refresh"
    pages: str = "/pages/"
    page: str = "/pages/{page_id}"
    links: str = "/links/"
    page_links: str = "/links/{page_id}"
    link: str = "/links/{link_id}"
    public_page: str = "/pages/{slug}"

class ApiSettings(BaseModel):
    base_url: str = "http://localhost:8000"
    timeout_seconds: float = Field(default=10.0, gt=0)
    endpoints: EndpointSettings = Field(default_factory=EndpointSettings)

class RouteSettings(BaseModel):
    home: str = "/"
    sign_in: str = "/sign-in"
    sign_up: str = "/sign-up"
    after_sign_in: str = "/pages"
    public_prefix: str = "/l"

class EditorRules(BaseModel):
    title_max: int = Field(default=100, gt=0)
    description_max: int = Field(default=500, ge=0)
    allowed_url_schemes: list[str] = Field(default_factory=lambda: ["http", "https"])

class Settings(BaseModel):
    api: ApiSettings = Field(default_factory=ApiSettings)
    routes: RouteSettings = Field(default_factory=RouteSettings)
    editor: EditorRules = Field(default_factory=EditorRules)
