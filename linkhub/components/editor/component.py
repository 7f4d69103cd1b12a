"""
Editor component - load, create, save and delete a page.

Saving writes the page's title and description first, then reconciles
its links. There is no rollback: a save that fails half way is reported
as failed and can simply be retried, because the link diff is recomputed
from the backend's state each time.
"""

from __future__ import annotations

import logging
from threading import Lock

from linkhub.adapters.http.errors import ApiError, user_message
from linkhub.components.links import (
    LinkValidationError,
    find_duplicate_keys,
    run_reconcile,
    validate_link_data,
)
from linkhub.domain.entities import LinkDraft, PageDraft
from linkhub.settings.models import EditorRules

from .models import EditorOutput, SaveOutput
from .ports import LinkApiPort, PageApiPort

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load page data"
CREATE_FAILED = "Failed to create page"
SAVE_FAILED = "Failed to save page"
DELETE_FAILED = "Failed to delete page"
SAVE_IN_PROGRESS = "A save is already in progress"
INVALID_DRAFT = "Please fix the highlighted fields"


def normalize_draft(draft: PageDraft) -> PageDraft:
    return PageDraft(
        title=draft.title.strip(),
        description=draft.description.strip(),
        links=[
            LinkDraft(
                platform=link.platform.strip(),
                url=link.url.strip(),
                title=(link.title or "").strip() or None,
            )
            for link in draft.links
        ],
    )


def validate_page_draft(draft: PageDraft, rules: EditorRules) -> list[LinkValidationError]:
    """Field limits for the page plus per-link checks and key uniqueness."""
    errors: list[LinkValidationError] = []

    if not draft.title.strip():
        errors.append(
            LinkValidationError(code="title_required", message="Page title is required", field="title")
        )
    elif len(draft.title) > rules.title_max:
        errors.append(
            LinkValidationError(code="title_too_long", message="Title too long", field="title")
        )

    if len(draft.description) > rules.description_max:
        errors.append(
            LinkValidationError(
                code="description_too_long", message="Description too long", field="description"
            )
        )

    for i, link in enumerate(draft.links):
        errors.extend(
            validate_link_data(
                platform=link.platform,
                url=link.url,
                schemes=rules.allowed_url_schemes,
                field_prefix=f"links[{i}].",
            )
        )

    for platform, url in find_duplicate_keys(draft.links):
        errors.append(
            LinkValidationError(
                code="link_duplicate",
                message=f"The {platform} link {url} is listed more than once",
                field="links",
            )
        )

    return errors


class PageEditor:
    """
    Page editing against the backend.

    One save at a time per editor; a second save while the first is in
    flight is rejected rather than queued.
    """

    def __init__(
        self,
        pages: PageApiPort,
        links: LinkApiPort,
        rules: EditorRules | None = None,
    ) -> None:
        self.pages = pages
        self.links = links
        self.rules = rules or EditorRules()
        self._save_lock = Lock()

    @property
    def saving(self) -> bool:
        return self._save_lock.locked()

    def load(self, page_id: int | str) -> EditorOutput:
        try:
            page = self.pages.get(page_id)
            links = self.links.list_for_page(page_id)
        except ApiError as err:
            return EditorOutput(error=user_message(err, LOAD_FAILED))

        draft = PageDraft(
            title=page.title,
            description=page.description,
            links=[LinkDraft(platform=ln.platform, url=ln.url, title=ln.title) for ln in links],
        )
        return EditorOutput(page=page, draft=draft, success=True)

    def create_page(self, name: str) -> EditorOutput:
        if not name or not name.strip():
            return EditorOutput(error="Page name is required")
        try:
            page = self.pages.create(name.strip())
        except ApiError as err:
            return EditorOutput(error=user_message(err, CREATE_FAILED))

        logger.info(f"Created page {page.id}")
        return EditorOutput(page=page, draft=PageDraft(), success=True)

    def save(self, page_id: int | str, draft: PageDraft) -> SaveOutput:
        draft = normalize_draft(draft)
        errors = validate_page_draft(draft, self.rules)
        if errors:
            return SaveOutput(error=INVALID_DRAFT, errors=errors)

        if not self._save_lock.acquire(blocking=False):
            return SaveOutput(error=SAVE_IN_PROGRESS)

        try:
            try:
                self.pages.update(page_id, draft.title, draft.description)
            except ApiError as err:
                return SaveOutput(error=user_message(err, SAVE_FAILED))

            result = run_reconcile(page_id, draft.links, self.links)
            if not result.success:
                # Title/description stay written; a retry converges the links
                return SaveOutput(
                    error=result.error or SAVE_FAILED, page_saved=True, links=result
                )
            return SaveOutput(success=True, page_saved=True, links=result)
        finally:
            self._save_lock.release()

    def delete_page(self, page_id: int | str) -> EditorOutput:
        """
        Irreversibly delete a page.

        Only call after the user has explicitly confirmed.
        """
        try:
            self.pages.delete(page_id)
        except ApiError as err:
            return EditorOutput(error=user_message(err, DELETE_FAILED))

        logger.info(f"Deleted page {page_id}")
        return EditorOutput(success=True)
