"""URL extraction from message bodies."""

from __future__ import annotations

import re

URL_PATTERN = re.compile(
    r"\b(?:https?|ftp|file)://[-a-zA-Z0-9+&@#/%?=~_|!:,.;]*[-a-zA-Z0-9+&@#/%=~_|]",
    re.IGNORECASE,
)


def extract_urls(text: str) -> list[str]:
    """Extract http(s)/ftp/file URLs from text in order of appearance.

    Repeated URLs are kept so that every occurrence is scored.
    """

    return [match.group(0) for match in URL_PATTERN.finditer(text or "")]
