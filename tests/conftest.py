"""
Shared fixtures.

FakeBackend is an in-memory FastAPI app honouring the LinkHub HTTP
contract: cookie-held access/refresh tokens, pages and links owned by
users, and a public page read. Tests drive the real httpx adapters
against it through TestClient.
"""

import itertools
import secrets
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient
from pydantic import BaseModel

from linkhub.settings.models import ApiSettings, Settings
from linkhub.ui.context import ServiceContext


class SignUpBody(BaseModel):
    name: str
    username: str
    email: str
    password: str


class SignInBody(BaseModel):
    email: str
    password: str


class PageCreateBody(BaseModel):
    name: str


class PageUpdateBody(BaseModel):
    title: str
    description: str = ""


class LinkBody(BaseModel):
    platform: str
    url: str
    title: str | None = None
    page_id: int | None = None


class FakeBackend:
    def __init__(self) -> None:
        self.users: dict[int, dict[str, Any]] = {}
        self.pages: dict[int, dict[str, Any]] = {}
        self.links: dict[int, dict[str, Any]] = {}
        self.access_tokens: dict[str, int] = {}
        self.refresh_tokens: dict[str, int] = {}
        # (method, path) of every request received, in order
        self.calls: list[tuple[str, str]] = []
        # (method, path) -> status code to answer with instead
        self.fail_on: dict[tuple[str, str], int] = {}
        self._ids = itertools.count(1)
        self.app = self._build_app()

    # --- Test helpers ---

    def add_user(self, email: str, password: str, name: str = "Test", username: str = "test") -> int:
        uid = next(self._ids)
        self.users[uid] = {
            "id": uid,
            "name": name,
            "username": username,
            "email": email,
            "password": password,
        }
        return uid

    def add_page(self, owner_id: int, name: str, title: str = "", description: str = "") -> int:
        pid = next(self._ids)
        self.pages[pid] = {
            "id": pid,
            "name": name,
            "title": title,
            "description": description,
            "owner_id": owner_id,
        }
        return pid

    def add_link(self, page_id: int, platform: str, url: str, title: str | None = None) -> int:
        lid = next(self._ids)
        self.links[lid] = {
            "id": lid,
            "platform": platform,
            "url": url,
            "title": title,
            "page_id": page_id,
        }
        return lid

    def links_of(self, page_id: int) -> list[dict[str, Any]]:
        return [link for link in self.links.values() if link["page_id"] == page_id]

    def expire_access_tokens(self) -> None:
        self.access_tokens.clear()

    def revoke_all(self) -> None:
        self.access_tokens.clear()
        self.refresh_tokens.clear()

    def calls_to(self, method: str, path_prefix: str) -> list[tuple[str, str]]:
        return [c for c in self.calls if c[0] == method and c[1].startswith(path_prefix)]

    # --- App ---

    def _issue(self, response: Response, uid: int) -> None:
        access = secrets.token_urlsafe(16)
        refresh = secrets.token_urlsafe(16)
        self.access_tokens[access] = uid
        self.refresh_tokens[refresh] = uid
        response.set_cookie(key="access_token", value=access, httponly=True, samesite="lax")
        response.set_cookie(key="refresh_token", value=refresh, httponly=True, samesite="lax")

    def _build_app(self) -> FastAPI:
        app = FastAPI()
        backend = self

        @app.middleware("http")
        async def record(request: Request, call_next: Any) -> Any:
            key = (request.method, request.url.path)
            backend.calls.append(key)
            if key in backend.fail_on:
                return JSONResponse(
                    status_code=backend.fail_on[key], content={"detail": "Injected failure"}
                )
            return await call_next(request)

        def current_user(request: Request) -> dict[str, Any]:
            token = request.cookies.get("access_token")
            uid = backend.access_tokens.get(token or "")
            if uid is None:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
                )
            return backend.users[uid]

        def owned_page(page_id: int, user: dict[str, Any]) -> dict[str, Any]:
            page = backend.pages.get(page_id)
            if page is None:
                raise HTTPException(status_code=404, detail="Page not found")
            if page["owner_id"] != user["id"]:
                raise HTTPException(status_code=403, detail="You do not own this page")
            return page

        def public_user(user: dict[str, Any]) -> dict[str, Any]:
            return {k: v for k, v in user.items() if k != "password"}

        # --- Auth ---

        @app.post("/auth/signup")
        def sign_up(body: SignUpBody, response: Response) -> dict[str, str]:
            if any(u["email"] == body.email for u in backend.users.values()):
                raise HTTPException(status_code=400, detail="Email already registered")
            uid = backend.add_user(body.email, body.password, body.name, body.username)
            backend._issue(response, uid)
            return {"message": "Signed up"}

        @app.post("/auth/signin")
        def sign_in(body: SignInBody, response: Response) -> dict[str, str]:
            for user in backend.users.values():
                if user["email"] == body.email and user["password"] == body.password:
                    backend._issue(response, user["id"])
                    return {"message": "Signed in"}
            raise HTTPException(status_code=401, detail="Invalid email or password")

        @app.post("/auth/signout")
        def sign_out(request: Request, response: Response) -> dict[str, str]:
            backend.access_tokens.pop(request.cookies.get("access_token", ""), None)
            backend.refresh_tokens.pop(request.cookies.get("refresh_token", ""), None)
            response.delete_cookie("access_token")
            response.delete_cookie("refresh_token")
            return {"message": "Signed out"}

        @app.post("/auth/refresh")
        def refresh(request: Request, response: Response) -> dict[str, str]:
            uid = backend.refresh_tokens.pop(request.cookies.get("refresh_token", ""), None)
            if uid is None:
                raise HTTPException(status_code=401, detail="Refresh token invalid")
            backend._issue(response, uid)
            return {"message": "Refreshed"}

        @app.get("/auth/me")
        def me(user: dict[str, Any] = Depends(current_user)) -> dict[str, Any]:
            return public_user(user)

        # --- Pages ---

        @app.post("/pages/")
        def create_page(
            body: PageCreateBody, user: dict[str, Any] = Depends(current_user)
        ) -> dict[str, Any]:
            pid = backend.add_page(user["id"], body.name, title=body.name)
            page = backend.pages[pid]
            return {k: v for k, v in page.items() if k != "owner_id"}

        @app.get("/pages/{page_id}")
        def get_page(page_id: int) -> dict[str, Any]:
            # Public: the same read serves the editor and visitors
            page = backend.pages.get(page_id)
            if page is None:
                raise HTTPException(status_code=404, detail="Page not found")
            return {
                "id": page["id"],
                "name": page["name"],
                "title": page["title"],
                "description": page["description"],
                "links": [
                    {"id": ln["id"], "url": ln["url"], "title": ln["title"]}
                    for ln in backend.links_of(page_id)
                ],
            }

        @app.put("/pages/{page_id}")
        def update_page(
            page_id: int, body: PageUpdateBody, user: dict[str, Any] = Depends(current_user)
        ) -> dict[str, str]:
            page = owned_page(page_id, user)
            page["title"] = body.title
            page["description"] = body.description
            return {"message": "Page updated"}

        @app.delete("/pages/{page_id}")
        def delete_page(page_id: int, user: dict[str, Any] = Depends(current_user)) -> dict[str, str]:
            owned_page(page_id, user)
            del backend.pages[page_id]
            for lid in [ln["id"] for ln in backend.links_of(page_id)]:
                del backend.links[lid]
            return {"message": "Page deleted"}

        # --- Links ---

        @app.get("/links/{page_id}")
        def list_links(
            page_id: int, user: dict[str, Any] = Depends(current_user)
        ) -> list[dict[str, Any]]:
            owned_page(page_id, user)
            return backend.links_of(page_id)

        @app.post("/links/")
        def create_link(body: LinkBody, user: dict[str, Any] = Depends(current_user)) -> dict[str, Any]:
            if body.page_id is None:
                raise HTTPException(status_code=422, detail="page_id is required")
            owned_page(body.page_id, user)
            lid = backend.add_link(body.page_id, body.platform, body.url, body.title)
            return backend.links[lid]

        @app.put("/links/{link_id}")
        def update_link(
            link_id: int, body: LinkBody, user: dict[str, Any] = Depends(current_user)
        ) -> dict[str, str]:
            link = backend.links.get(link_id)
            if link is None:
                raise HTTPException(status_code=404, detail="Link not found")
            owned_page(link["page_id"], user)
            link.update(platform=body.platform, url=body.url, title=body.title)
            return {"message": "Link updated"}

        @app.delete("/links/{link_id}")
        def delete_link(link_id: int, user: dict[str, Any] = Depends(current_user)) -> dict[str, str]:
            link = backend.links.get(link_id)
            if link is None:
                raise HTTPException(status_code=404, detail="Link not found")
            owned_page(link["page_id"], user)
            del backend.links[link_id]
            return {"message": "Link deleted"}

        return app


# --- Fixtures ---


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def http(backend: FakeBackend) -> Iterator[TestClient]:
    with TestClient(backend.app) as client:
        yield client


@pytest.fixture
def settings() -> Settings:
    return Settings(api=ApiSettings(base_url="http://testserver"))


@pytest.fixture
def ctx(settings: Settings, http: TestClient) -> ServiceContext:
    """Full ServiceContext wired to the fake backend."""
    return ServiceContext.create(settings, http=http)
