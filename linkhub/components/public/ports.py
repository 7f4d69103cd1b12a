from typing import Protocol

from linkhub.domain.entities import PublicPage


class PublicPageApiPort(Protocol):
    def get(self, slug: str) -> PublicPage: ...
