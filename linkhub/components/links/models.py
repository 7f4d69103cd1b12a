"""
Links component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from linkhub.domain.entities import Link, LinkDraft

OperationKind = Literal["delete", "update", "create"]

# --- Validation Errors ---


@dataclass(frozen=True)
class LinkValidationError:
    """Link validation error."""

    code: str
    message: str
    field: str | None = None


class DuplicateLinkError(ValueError):
    """Raised when the working set holds the same (platform, url) twice."""

    def __init__(self, keys: list[tuple[str, str]]) -> None:
        self.keys = keys
        shown = ", ".join(f"{platform} {url}" for platform, url in keys)
        super().__init__(f"Duplicate links in working set: {shown}")


# --- Plan ---


@dataclass(frozen=True)
class LinkUpdate:
    """Overwrite persisted link `link_id` with the draft's fields."""

    link_id: int | str
    draft: LinkDraft


@dataclass(frozen=True)
class ReconcilePlan:
    """Writes needed to make the persisted collection match the working set."""

    deletes: tuple[Link, ...] = ()
    updates: tuple[LinkUpdate, ...] = ()
    creates: tuple[LinkDraft, ...] = ()
    unchanged: tuple[Link, ...] = ()

    @property
    def operation_count(self) -> int:
        return len(self.deletes) + len(self.updates) + len(self.creates)

    @property
    def is_empty(self) -> bool:
        return self.operation_count == 0


# --- Output Models ---


@dataclass(frozen=True)
class AppliedOperation:
    kind: OperationKind
    key: tuple[str, str]
    link_id: int | str | None = None


@dataclass
class ReconcileOutput:
    """Output from applying a plan."""

    plan: ReconcilePlan
    applied: list[AppliedOperation] = field(default_factory=list)
    success: bool = False
    error: str | None = None
