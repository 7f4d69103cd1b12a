"""
Public component - Anonymous read of a published link page.
"""

from .component import LOAD_FAILED, NOT_FOUND, PublicPageReader, build_link_views
from .models import PublicLinkView, PublicPageOutput
from .ports import PublicPageApiPort

__all__ = [
    "PublicPageReader",
    "build_link_views",
    "PublicLinkView",
    "PublicPageOutput",
    "PublicPageApiPort",
    "NOT_FOUND",
    "LOAD_FAILED",
]
