"""HTTP adapters implementing the API ports over ApiClient."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from linkhub.domain.entities import Link, Page, PublicPage, User

from .client import ApiClient
from .errors import ServerError

logger = logging.getLogger(__name__)


def _parse(model: Any, response: httpx.Response) -> Any:
    """Validate a JSON body into a model; malformed bodies count as server faults."""
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as err:
        logger.error(f"Unexpected response body from {response.request.url}: {err}")
        raise ServerError(
            "The server sent an unexpected response.", status_code=response.status_code
        ) from err


def _seg(value: int | str) -> str:
    return quote(str(value), safe="")


class HttpAuthApi:
    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.endpoints = client.settings.endpoints

    def me(self, *, allow_refresh: bool = True) -> User:
        response = self.client.get(self.endpoints.me, allow_refresh=allow_refresh)
        return _parse(User, response)

    # Credential endpoints answer 401 for bad credentials; that is not an
    # expired session, so they never go through refresh.

    def sign_up(self, name: str, username: str, email: str, password: str) -> None:
        self.client.post(
            self.endpoints.sign_up,
            json={"name": name, "username": username, "email": email, "password": password},
            allow_refresh=False,
        )

    def sign_in(self, email: str, password: str) -> None:
        self.client.post(
            self.endpoints.sign_in,
            json={"email": email, "password": password},
            allow_refresh=False,
        )

    def sign_out(self) -> None:
        self.client.post(self.endpoints.sign_out, allow_refresh=False)

    def refresh(self) -> None:
        self.client.post(self.endpoints.refresh, json={}, allow_refresh=False)


class HttpPageApi:
    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.endpoints = client.settings.endpoints

    def get(self, page_id: int | str) -> Page:
        response = self.client.get(self.endpoints.page.format(page_id=_seg(page_id)))
        return _parse(Page, response)

    def create(self, name: str) -> Page:
        response = self.client.post(self.endpoints.pages, json={"name": name})
        return _parse(Page, response)

    def update(self, page_id: int | str, title: str, description: str) -> None:
        self.client.put(
            self.endpoints.page.format(page_id=_seg(page_id)),
            json={"title": title, "description": description},
        )

    def delete(self, page_id: int | str) -> None:
        self.client.delete(self.endpoints.page.format(page_id=_seg(page_id)))


class HttpLinkApi:
    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.endpoints = client.settings.endpoints

    def list_for_page(self, page_id: int | str) -> list[Link]:
        response = self.client.get(self.endpoints.page_links.format(page_id=_seg(page_id)))
        try:
            raw = response.json()
        except ValueError as err:
            raise ServerError(
                "The server sent an unexpected response.", status_code=response.status_code
            ) from err
        if not isinstance(raw, list):
            raise ServerError(
                "The server sent an unexpected response.", status_code=response.status_code
            )
        try:
            return [Link.model_validate(item) for item in raw]
        except ValidationError as err:
            raise ServerError(
                "The server sent an unexpected response.", status_code=response.status_code
            ) from err

    def create(self, payload: dict[str, Any]) -> Link | None:
        response = self.client.post(self.endpoints.links, json=payload)
        # Some backends answer 201 with an empty body
        if not response.content:
            return None
        return _parse(Link, response)

    def update(self, link_id: int | str, payload: dict[str, Any]) -> None:
        self.client.put(self.endpoints.link.format(link_id=_seg(link_id)), json=payload)

    def delete(self, link_id: int | str) -> None:
        self.client.delete(self.endpoints.link.format(link_id=_seg(link_id)))


class HttpPublicPageApi:
    """Unauthenticated reads; a 401 here is not a session problem."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.endpoints = client.settings.endpoints

    def get(self, slug: str) -> PublicPage:
        response = self.client.get(
            self.endpoints.public_page.format(slug=_seg(slug)), allow_refresh=False
        )
        return _parse(PublicPage, response)
