"""
Links component - reconcile a page's remote links with the working set.

Shell Layer - performs the writes a plan calls for and converts errors.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from linkhub.adapters.http.errors import ApiError, user_message
from linkhub.domain.entities import LinkDraft

from ._impl import link_payload, plan_reconciliation
from .models import AppliedOperation, ReconcileOutput, ReconcilePlan
from .ports import LinkApiPort

logger = logging.getLogger(__name__)

SAVE_LINKS_FAILED = "Failed to save links"


def apply_plan(plan: ReconcilePlan, page_id: int | str, api: LinkApiPort) -> ReconcileOutput:
    """
    Issue the plan's writes: every delete first, then updates and creates.

    Stops at the first failing write. Writes already made stay made;
    replanning from the new remote state and applying again is safe.
    """
    output = ReconcileOutput(plan=plan)

    try:
        for link in plan.deletes:
            api.delete(link.id)
            output.applied.append(AppliedOperation("delete", link.key, link.id))

        for upd in plan.updates:
            api.update(upd.link_id, link_payload(upd.draft))
            output.applied.append(AppliedOperation("update", upd.draft.key, upd.link_id))

        for draft in plan.creates:
            created = api.create(link_payload(draft, page_id=page_id))
            output.applied.append(
                AppliedOperation("create", draft.key, created.id if created else None)
            )
    except ApiError as err:
        logger.warning(
            f"Link sync for page {page_id} stopped after "
            f"{len(output.applied)}/{plan.operation_count} writes: {err}"
        )
        output.error = user_message(err, SAVE_LINKS_FAILED)
        return output

    output.success = True
    return output


def run_reconcile(
    page_id: int | str,
    desired: Sequence[LinkDraft],
    api: LinkApiPort,
) -> ReconcileOutput:
    """Fetch the persisted links, plan against the working set and apply."""
    try:
        persisted = api.list_for_page(page_id)
    except ApiError as err:
        return ReconcileOutput(plan=ReconcilePlan(), error=user_message(err, SAVE_LINKS_FAILED))

    unaddressable = [link for link in persisted if link.id is None]
    if unaddressable:
        logger.warning(
            f"Page {page_id}: backend returned {len(unaddressable)} link(s) without an id; "
            "they are left as they are"
        )

    plan = plan_reconciliation(persisted, desired)
    logger.info(
        f"Page {page_id} links: {len(plan.deletes)} delete, {len(plan.updates)} update, "
        f"{len(plan.creates)} create, {len(plan.unchanged)} unchanged"
    )
    return apply_plan(plan, page_id, api)
