"""
Known link platforms.

Labels for the editor's platform picker and host-based detection used to
pick an icon when rendering a public page (public links carry no platform).
"""

from __future__ import annotations

from typing import NamedTuple
from urllib.parse import urlparse


class PlatformOption(NamedTuple):
    value: str
    label: str
    color: str


PLATFORM_OPTIONS: tuple[PlatformOption, ...] = (
    PlatformOption("facebook", "Facebook", "#1877F2"),
    PlatformOption("instagram", "Instagram", "#E1306C"),
    PlatformOption("twitter", "Twitter", "#1DA1F2"),
    PlatformOption("github", "GitHub", "#181717"),
    PlatformOption("linkedin", "LinkedIn", "#0A66C2"),
    PlatformOption("youtube", "YouTube", "#FF0000"),
    PlatformOption("tiktok", "TikTok", "#000000"),
    PlatformOption("whatsapp", "WhatsApp", "#25D366"),
    PlatformOption("telegram", "Telegram", "#26A5E4"),
    PlatformOption("custom", "Custom", "#6B7280"),
)

CUSTOM = "custom"

_BY_VALUE = {opt.value: opt for opt in PLATFORM_OPTIONS}

# host fragment -> platform; checked in order
_HOST_HINTS: tuple[tuple[str, str], ...] = (
    ("facebook.", "facebook"),
    ("fb.com", "facebook"),
    ("instagram.", "instagram"),
    ("snapchat.", "snapchat"),
    ("pinterest.", "pinterest"),
    ("linkedin.", "linkedin"),
    ("youtube.", "youtube"),
    ("youtu.be", "youtube"),
    ("reddit.", "reddit"),
    ("twitter.", "twitter"),
    ("x.com", "twitter"),
    ("github.", "github"),
    ("tiktok.", "tiktok"),
    ("wa.me", "whatsapp"),
    ("whatsapp.", "whatsapp"),
    ("t.me", "telegram"),
    ("telegram.", "telegram"),
)


def platform_label(value: str | None) -> str:
    """Display label; anything unrecognised shows as Custom."""
    opt = _BY_VALUE.get(value or "")
    return opt.label if opt else _BY_VALUE[CUSTOM].label


def platform_color(value: str | None) -> str:
    opt = _BY_VALUE.get(value or "")
    return opt.color if opt else _BY_VALUE[CUSTOM].color


def detect_platform(url: str) -> str:
    """
    Guess the platform a URL points at from its host.

    Returns a platform name (which may be outside PLATFORM_OPTIONS, e.g.
    "reddit") or "custom" when nothing matches.
    """
    try:
        host = (urlparse(url.strip()).hostname or "").lower()
    except ValueError:
        return CUSTOM

    if not host:
        return CUSTOM

    dotted = "." + host
    for hint, platform in _HOST_HINTS:
        # "facebook." matches any label, "x.com" only as a domain suffix
        if hint.endswith("."):
            if "." + hint in dotted:
                return platform
        elif dotted.endswith("." + hint):
            return platform
    return CUSTOM
