from __future__ import annotations

from dataclasses import dataclass, field

from linkhub.components.links.models import LinkValidationError, ReconcileOutput
from linkhub.domain.entities import Page, PageDraft


@dataclass
class EditorOutput:
    page: Page | None = None
    draft: PageDraft | None = None
    success: bool = False
    error: str | None = None


@dataclass
class SaveOutput:
    success: bool = False
    error: str | None = None
    errors: list[LinkValidationError] = field(default_factory=list)
    # True once PUT /pages/{id} went through, even if links then failed
    page_saved: bool = False
    links: ReconcileOutput | None = None
