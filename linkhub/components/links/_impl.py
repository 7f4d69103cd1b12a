"""
Link validation and reconciliation planning.

Functional Core - pure business logic, no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any
from urllib.parse import urlparse

from linkhub.domain.entities import Link, LinkDraft

from .models import DuplicateLinkError, LinkUpdate, LinkValidationError, ReconcilePlan

DEFAULT_SCHEMES = ("http", "https")

# --- Validation Functions ---


def is_absolute_url(url: str, schemes: Iterable[str] = DEFAULT_SCHEMES) -> bool:
    if not url or url != url.strip() or any(ch.isspace() for ch in url):
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme.lower() in set(schemes) and bool(parsed.netloc)


def validate_link_data(
    platform: str | None = None,
    url: str | None = None,
    schemes: Iterable[str] = DEFAULT_SCHEMES,
    field_prefix: str = "",
) -> list[LinkValidationError]:
    """Validate link data."""
    errors: list[LinkValidationError] = []

    if platform is not None and not platform.strip():
        errors.append(
            LinkValidationError(
                code="platform_required",
                message="Platform is required",
                field=f"{field_prefix}platform",
            )
        )

    if url is not None:
        if not url.strip():
            errors.append(
                LinkValidationError(
                    code="url_required",
                    message="URL is required",
                    field=f"{field_prefix}url",
                )
            )
        elif not is_absolute_url(url.strip(), schemes):
            errors.append(
                LinkValidationError(
                    code="url_invalid",
                    message="Please enter a valid URL",
                    field=f"{field_prefix}url",
                )
            )

    return errors


def find_duplicate_keys(links: Sequence[LinkDraft]) -> list[tuple[str, str]]:
    """Keys appearing more than once, in first-seen order."""
    seen: set[tuple[str, str]] = set()
    dupes: list[tuple[str, str]] = []
    for link in links:
        if link.key in seen and link.key not in dupes:
            dupes.append(link.key)
        seen.add(link.key)
    return dupes


# --- Reconciliation ---


def needs_update(persisted: Link, draft: LinkDraft) -> bool:
    """Key fields match by construction; only the rest can differ."""
    return (persisted.title or None) != (draft.title or None)


def plan_reconciliation(persisted: Sequence[Link], desired: Sequence[LinkDraft]) -> ReconcilePlan:
    """
    Diff the persisted links of a page against the working set.

    Links are matched on (platform, url); order is not compared. A
    persisted link whose key is gone is deleted. A desired link with a
    persisted match is updated only if its other fields changed; one
    without a match is created. When the backend already holds the same
    key more than once, the first copy is kept and the rest are deleted.
    A persisted link without an id cannot be addressed: it is never
    deleted or updated, and a desired link with its key is left alone.

    Raises DuplicateLinkError if the working set repeats a key.
    """
    dupes = find_duplicate_keys(desired)
    if dupes:
        raise DuplicateLinkError(dupes)

    wanted = {link.key for link in desired}
    by_key: dict[tuple[str, str], Link] = {}
    unaddressable: dict[tuple[str, str], Link] = {}
    deletes: list[Link] = []

    for link in persisted:
        if link.id is None:
            unaddressable.setdefault(link.key, link)
            continue
        if link.key not in wanted or link.key in by_key:
            deletes.append(link)
        else:
            by_key[link.key] = link

    updates: list[LinkUpdate] = []
    creates: list[LinkDraft] = []
    unchanged: list[Link] = []

    for draft in desired:
        match = by_key.get(draft.key)
        if match is None and draft.key in unaddressable:
            # already on the backend, just not addressable
            unchanged.append(unaddressable[draft.key])
        elif match is None:
            creates.append(draft)
        elif needs_update(match, draft):
            updates.append(LinkUpdate(link_id=match.id, draft=draft))
        else:
            unchanged.append(match)

    return ReconcilePlan(
        deletes=tuple(deletes),
        updates=tuple(updates),
        creates=tuple(creates),
        unchanged=tuple(unchanged),
    )


def link_payload(draft: LinkDraft, page_id: int | str | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"platform": draft.platform, "url": draft.url}
    if draft.title is not None:
        payload["title"] = draft.title
    if page_id is not None:
        payload["page_id"] = page_id
    return payload
