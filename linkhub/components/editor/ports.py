from typing import Protocol

from linkhub.components.links.ports import LinkApiPort
from linkhub.domain.entities import Page


class PageApiPort(Protocol):
    def get(self, page_id: int | str) -> Page: ...
    def create(self, name: str) -> Page: ...
    def update(self, page_id: int | str, title: str, description: str) -> None: ...
    def delete(self, page_id: int | str) -> None: ...


__all__ = ["LinkApiPort", "PageApiPort"]
