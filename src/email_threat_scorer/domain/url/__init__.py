"""URL extraction helpers."""

from email_threat_scorer.domain.url.extract import URL_PATTERN, extract_urls

__all__ = [
    "URL_PATTERN",
    "extract_urls",
]
