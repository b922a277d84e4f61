"""Platform handle extraction from free-form profile links."""

from __future__ import annotations

from app.logging_config import get_logger

logger = get_logger(__name__)


def extract_handle(value: str | None, platform: str) -> str | None:
    """Extract a platform handle from a profile URL or bare handle.

    ``https://leetcode.com/u/alice/`` -> ``alice``,
    ``github.com/bob`` -> ``bob``, ``carol`` -> ``carol``.

    Returns None for empty input. Never raises: if the link cannot be
    sliced, the trimmed input is returned unchanged.
    """
    if not value:
        return None
    link = value.strip().rstrip("/")
    if not link:
        return None
    if "/" not in link and "." not in link:
        return link

    try:
        parts = link.split("/")
        if platform == "leetcode" and "u" in parts:
            return parts[parts.index("u") + 1]
        if platform == "github":
            return parts[-1] or parts[-2]
        return parts[-1]
    except (IndexError, ValueError):
        logger.debug("handle_extraction_fallback", platform=platform)
        return link
