"""
ApiClient - credentialed HTTP access to the LinkHub backend.

Wraps an httpx.Client whose cookie jar holds the session cookies set by
the backend. The client never inspects token values.

On a 401 for a request that has not been retried yet, the refresh handler
runs once; if it recovers the session the identical request is reissued
exactly once with retried=True. A retried request never triggers another
refresh, which bounds the loop even when the refresh endpoint itself 401s.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any

import httpx

from linkhub.settings.models import ApiSettings

from .errors import ApiError, TransportError, error_for_response

logger = logging.getLogger(__name__)

RefreshHandler = Callable[[], bool]


@dataclass(frozen=True)
class ApiRequest:
    """One logical request; reissued verbatim after a refresh."""

    method: str
    path: str
    json: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    retried: bool = False


class ApiClient:
    def __init__(
        self,
        settings: ApiSettings,
        http: httpx.Client | None = None,
        refresh_handler: RefreshHandler | None = None,
    ) -> None:
        self.settings = settings
        self._http = http or httpx.Client(
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
        )
        self._refresh_handler = refresh_handler

    # --- Wiring ---

    def set_refresh_handler(self, handler: RefreshHandler | None) -> None:
        """Install the callable run on 401 (the session store's refresh)."""
        self._refresh_handler = handler

    def close(self) -> None:
        self._http.close()

    # --- Requests ---

    def request(self, req: ApiRequest) -> httpx.Response:
        """
        Send a request, applying the one-shot refresh policy.

        Returns the 2xx response. Raises an ApiError subclass otherwise.
        """
        response = self._send(req)

        if response.status_code == 401 and not req.retried:
            logger.info(f"401 on {req.method} {req.path}; attempting session refresh")
            if self._refresh():
                response = self._send(replace(req, retried=True))
            else:
                logger.warning(f"Session refresh failed; giving up on {req.method} {req.path}")

        if response.is_success:
            return response
        raise error_for_response(response)

    def get(self, path: str, *, allow_refresh: bool = True) -> httpx.Response:
        return self.request(ApiRequest("GET", path, retried=not allow_refresh))

    def post(self, path: str, json: Any = None, *, allow_refresh: bool = True) -> httpx.Response:
        return self.request(ApiRequest("POST", path, json=json, retried=not allow_refresh))

    def put(self, path: str, json: Any = None, *, allow_refresh: bool = True) -> httpx.Response:
        return self.request(ApiRequest("PUT", path, json=json, retried=not allow_refresh))

    def delete(self, path: str, *, allow_refresh: bool = True) -> httpx.Response:
        return self.request(ApiRequest("DELETE", path, retried=not allow_refresh))

    def refresh_session(self) -> bool:
        """POST the refresh endpoint; the refresh call itself is never refreshed."""
        try:
            self.post(self.settings.endpoints.refresh, json={}, allow_refresh=False)
            return True
        except ApiError as err:
            logger.info(f"Refresh endpoint rejected the session: {err}")
            return False

    # --- Internals ---

    def _refresh(self) -> bool:
        handler = self._refresh_handler or self.refresh_session
        return handler()

    def _send(self, req: ApiRequest) -> httpx.Response:
        try:
            return self._http.request(
                req.method,
                req.path,
                json=req.json,
                headers=req.headers or None,
            )
        except httpx.RequestError as err:
            logger.error(f"Transport failure on {req.method} {req.path}: {err}")
            raise TransportError() from err
