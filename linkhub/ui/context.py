from __future__ import annotations

from dataclasses import dataclass

import httpx

from linkhub.adapters.http.backend import (
    HttpAuthApi,
    HttpLinkApi,
    HttpPageApi,
    HttpPublicPageApi,
)
from linkhub.adapters.http.client import ApiClient
from linkhub.components.editor import PageEditor
from linkhub.components.public import PublicPageReader
from linkhub.components.session import SessionStore
from linkhub.settings.models import Settings


@dataclass
class ServiceContext:
    settings: Settings
    api_client: ApiClient
    session_store: SessionStore
    editor: PageEditor
    public_reader: PublicPageReader

    @classmethod
    def create(cls, settings: Settings, http: httpx.Client | None = None) -> ServiceContext:
        # One client (one cookie jar) shared by every adapter
        client = ApiClient(settings.api, http=http)

        session_store = SessionStore(
            HttpAuthApi(client),
            after_sign_in=settings.routes.after_sign_in,
            sign_in_route=settings.routes.sign_in,
        )
        # 401 anywhere -> the store refreshes and confirms the session
        client.set_refresh_handler(session_store.refresh_token)

        editor = PageEditor(HttpPageApi(client), HttpLinkApi(client), settings.editor)
        public_reader = PublicPageReader(HttpPublicPageApi(client))

        return cls(
            settings=settings,
            api_client=client,
            session_store=session_store,
            editor=editor,
            public_reader=public_reader,
        )

    def close(self) -> None:
        self.api_client.close()
