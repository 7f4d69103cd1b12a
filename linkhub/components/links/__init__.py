"""
Links component - Page link collection sync.

Validates the working set and converges the backend's links with it.
"""

from ._impl import (
    find_duplicate_keys,
    is_absolute_url,
    link_payload,
    needs_update,
    plan_reconciliation,
    validate_link_data,
)
from .component import SAVE_LINKS_FAILED, apply_plan, run_reconcile
from .models import (
    AppliedOperation,
    DuplicateLinkError,
    LinkUpdate,
    LinkValidationError,
    ReconcileOutput,
    ReconcilePlan,
)
from .ports import LinkApiPort

__all__ = [
    # Entry points
    "run_reconcile",
    "apply_plan",
    # Functional core
    "plan_reconciliation",
    "validate_link_data",
    "find_duplicate_keys",
    "is_absolute_url",
    "needs_update",
    "link_payload",
    # Models
    "AppliedOperation",
    "DuplicateLinkError",
    "LinkUpdate",
    "LinkValidationError",
    "ReconcileOutput",
    "ReconcilePlan",
    "SAVE_LINKS_FAILED",
    # Ports
    "LinkApiPort",
]
