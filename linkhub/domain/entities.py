from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
SessionStatus = Literal["unknown", "checking", "authenticated", "unauthenticated"]

# --- User & Session ---

class User(BaseModel):
    # Snapshot of GET /auth/me; the backend may send more than we display.
    model_config = ConfigDict(extra="ignore")

    id: int | str
    name: str = ""
    username: str = ""
    email: str = ""

class Session(BaseModel):
    user: User | None = None
    status: SessionStatus = "unknown"

# --- Pages ---

class Page(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | str
    name: str | None = None
    title: str = ""
    description: str = ""

# --- Links ---

class Link(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    platform: str
    url: str
    title: str | None = None
    page_id: int | str | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.platform, self.url)

# --- Editor working set ---

class LinkDraft(BaseModel):
    platform: str = "facebook"
    url: str = ""
    title: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.platform, self.url)

class PageDraft(BaseModel):
    title: str = ""
    description: str = ""
    links: list[LinkDraft] = Field(default_factory=list)

# --- Public read ---

class PublicLink(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    url: str
    title: str | None = None

class PublicPage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    title: str = ""
    description: str = ""
    links: list[PublicLink] = Field(default_factory=list)
