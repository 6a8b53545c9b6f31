"""Threat taxonomy and the aggregate analysis report."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_VERDICT_THRESHOLD = 50.0


class ThreatCategory(str, Enum):
    PHISHING = "phishing"
    SPAM = "spam"
    # Reserved; no detector produces it.
    MALWARE = "malware"
    SUSPICIOUS_LINK = "suspicious_link"
    SENDER_SPOOFING = "sender_spoofing"
    SOCIAL_ENGINEERING = "social_engineering"
    OTHER = "other"


def _bounded_confidence(raw: Any) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return max(0.0, min(100.0, value))


class ThreatReport(BaseModel):
    """Result of one analysis run.

    The orchestrator owns the report while an analysis is running. Callers
    should treat it as read-only once ``analyze`` returns.
    """

    category_confidence: dict[ThreatCategory, float] = Field(default_factory=dict)
    overall_score: float = Field(default=0.0, ge=0.0, le=100.0)
    is_malicious: bool = False
    suspicious_links: list[str] = Field(default_factory=list)
    suspicious_keywords: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    verdict_threshold: float = DEFAULT_VERDICT_THRESHOLD
    trace: list[dict[str, Any]] = Field(default_factory=list)

    def add_threat(self, category: ThreatCategory, confidence: float) -> None:
        """Upsert ``category`` at ``confidence`` and recompute the verdict.

        A category that is already present keeps its original position but its
        confidence is replaced, never combined with the previous value. The
        overall score is the plain mean over categories, so repeated additions
        must not inflate the category count.
        """

        self.category_confidence[ThreatCategory(category)] = _bounded_confidence(confidence)
        self._recompute()

    def add_suspicious_link(self, url: str) -> None:
        self.suspicious_links.append(url)

    def add_suspicious_keyword(self, keyword: str) -> None:
        self.suspicious_keywords.append(keyword)

    def add_recommendation(self, recommendation: str) -> None:
        self.recommendations.append(recommendation)

    def triggered_categories(self) -> list[ThreatCategory]:
        return list(self.category_confidence)

    def _recompute(self) -> None:
        if not self.category_confidence:
            self.overall_score = 0.0
            self.is_malicious = False
            return
        values = list(self.category_confidence.values())
        self.overall_score = sum(values) / len(values)
        self.is_malicious = self.overall_score > self.verdict_threshold

    def to_payload(self) -> dict[str, Any]:
        return {
            "is_malicious": self.is_malicious,
            "overall_score": round(self.overall_score, 2),
            "threats": {category.value: round(score, 2) for category, score in self.category_confidence.items()},
            "suspicious_links": list(self.suspicious_links),
            "suspicious_keywords": list(self.suspicious_keywords),
            "recommendations": list(self.recommendations),
            "trace": list(self.trace),
        }
