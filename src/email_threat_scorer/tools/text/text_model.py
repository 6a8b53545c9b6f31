"""Text helpers shared by detectors and ingestion."""

from __future__ import annotations


def normalize_text(value: str) -> str:
    return " ".join((value or "").split()).strip()


def count_occurrences(text: str, term: str) -> int:
    """Count occurrences of ``term`` in ``text``, overlapping matches included."""

    if not text or not term:
        return 0
    count = 0
    index = text.find(term)
    while index != -1:
        count += 1
        index = text.find(term, index + 1)
    return count


def count_special_chars(text: str) -> int:
    return sum(1 for ch in text or "" if not ch.isalnum() and not ch.isspace())


def merge_phrases(base: tuple[str, ...], extra: list[str] | tuple[str, ...] | None) -> tuple[str, ...]:
    """Append ``extra`` phrases to ``base``, dropping blanks and case-insensitive duplicates."""

    merged: dict[str, str] = {}
    for phrase in (*base, *(extra or ())):
        clean = normalize_text(str(phrase))
        if clean and clean.lower() not in merged:
            merged[clean.lower()] = clean
    return tuple(merged.values())
