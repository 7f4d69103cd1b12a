"""
Links component - Port interfaces.
"""

from __future__ import annotations

from typing import Any, Protocol

from linkhub.domain.entities import Link


class LinkApiPort(Protocol):
    """Remote link collection of a page."""

    def list_for_page(self, page_id: int | str) -> list[Link]:
        """Persisted links of a page."""
        ...

    def create(self, payload: dict[str, Any]) -> Link | None:
        """Create a link; payload carries page_id."""
        ...

    def update(self, link_id: int | str, payload: dict[str, Any]) -> None:
        """Overwrite a persisted link's fields."""
        ...

    def delete(self, link_id: int | str) -> None:
        """Delete link."""
        ...
