from dataclasses import dataclass, field

from linkhub.domain.entities import PublicLink, PublicPage


@dataclass(frozen=True)
class PublicLinkView:
    link: PublicLink
    platform: str
    label: str


@dataclass
class PublicPageOutput:
    page: PublicPage | None = None
    links: list[PublicLinkView] = field(default_factory=list)
    success: bool = False
    not_found: bool = False
    error: str | None = None
