"""
Public component - read a page by its public slug.

No session is needed; visitors are anonymous.
"""

from __future__ import annotations

import logging

from linkhub.adapters.http.errors import ApiError, RequestRejectedError, user_message
from linkhub.domain.entities import PublicPage
from linkhub.domain.platforms import detect_platform, platform_label

from .models import PublicLinkView, PublicPageOutput
from .ports import PublicPageApiPort

logger = logging.getLogger(__name__)

NOT_FOUND = "Page not found."
LOAD_FAILED = "Failed to load page"


def build_link_views(page: PublicPage) -> list[PublicLinkView]:
    views = []
    for link in page.links:
        platform = detect_platform(link.url)
        views.append(
            PublicLinkView(
                link=link,
                platform=platform,
                label=link.title or platform_label(platform),
            )
        )
    return views


class PublicPageReader:
    def __init__(self, api: PublicPageApiPort) -> None:
        self.api = api

    def get(self, slug: str) -> PublicPageOutput:
        if not slug or not slug.strip():
            return PublicPageOutput(not_found=True, error=NOT_FOUND)

        try:
            page = self.api.get(slug.strip())
        except RequestRejectedError as err:
            if err.status_code == 404:
                return PublicPageOutput(not_found=True, error=NOT_FOUND)
            return PublicPageOutput(error=user_message(err, LOAD_FAILED))
        except ApiError as err:
            logger.error(f"Error fetching public page {slug}: {err}")
            return PublicPageOutput(error=user_message(err, LOAD_FAILED))

        return PublicPageOutput(page=page, links=build_link_views(page), success=True)
