"""
Editor component - Page editing and saving.
"""

from .component import (
    CREATE_FAILED,
    DELETE_FAILED,
    INVALID_DRAFT,
    LOAD_FAILED,
    SAVE_FAILED,
    SAVE_IN_PROGRESS,
    PageEditor,
    normalize_draft,
    validate_page_draft,
)
from .models import EditorOutput, SaveOutput
from .ports import PageApiPort

__all__ = [
    "PageEditor",
    "normalize_draft",
    "validate_page_draft",
    "EditorOutput",
    "SaveOutput",
    "PageApiPort",
    "CREATE_FAILED",
    "DELETE_FAILED",
    "INVALID_DRAFT",
    "LOAD_FAILED",
    "SAVE_FAILED",
    "SAVE_IN_PROGRESS",
]
