"""Keyword and pattern heuristics over subject and body text."""

from __future__ import annotations

from dataclasses import dataclass, field
import re

from email_threat_scorer.domain.email.models import Email
from email_threat_scorer.tools.text.text_model import merge_phrases

PHISHING_PHRASES = (
    "verify your account",
    "confirm your account",
    "update your information",
    "suspicious activity",
    "security alert",
    "login attempt",
    "click here to verify",
    "your account will be suspended",
    "verify your identity",
    "urgent action required",
    "validate your account",
    "account verification",
    "security notification",
    "unusual sign-in activity",
    "update your payment information",
    "confirm your identity",
)
SPAM_PHRASES = (
    "free",
    "win",
    "winner",
    "congratulations",
    "exclusive offer",
    "limited time",
    "act now",
    "special promotion",
    "cash prize",
    "discount",
    "free gift",
    "best price",
    "great deal",
    "buy now",
    "order now",
    "click below",
    "cheap",
    "save money",
    "bonus",
    "incredible deal",
    "satisfaction guaranteed",
    "risk free",
)
SOCIAL_ENGINEERING_PHRASES = (
    "urgent",
    "immediate action",
    "warning",
    "important",
    "alert",
    "attention",
    "critical",
    "mandatory",
    "required step",
    "failure to comply",
    "legal action",
    "penalty",
    "fine",
    "breach",
    "violation",
    "restricted",
    "limited offer",
    "only for you",
    "selected customer",
    "confidential",
)
CREDENTIAL_TERMS = (
    "password",
    "username",
    "login",
    "sign in",
    "credit card",
    "ssn",
    "social security",
)

_LATIN = "a-z"
_CYRILLIC_GREEK = r"\u0370-\u03ff\u0400-\u04ff"

STRUCTURAL_PATTERNS = (
    # Call to action with no link on the rest of the line.
    re.compile(r"\b(?:click\s+here|go\s+to|visit)\b(?!.*\bhttp)", re.IGNORECASE),
    re.compile(r"[^\w\s]{5,}"),
    re.compile(
        r"\b(?:amaz0n|g00gle|g0ogle|go0gle|g[o0]{2}g1e|faceb00k|faceb0ok|facebo0k"
        r"|micros0ft|paypa1|paypa[l1]l)\b",
        re.IGNORECASE,
    ),
    re.compile(
        rf"(?<!\S)(?=\S*[{_LATIN}])(?=\S*[{_CYRILLIC_GREEK}])\S+",
        re.IGNORECASE,
    ),
)
ALL_CAPS_PATTERN = re.compile(r"\b[A-Z]{5,}\b")
URGENCY_PATTERN = re.compile(
    r"\b(?:today only|hours left|expires today|act now|expires in|limited time|deadline|running out|hurry)\b",
    re.IGNORECASE,
)
FEAR_PATTERN = re.compile(
    r"\b(?:risk|threat|danger|warning|alert|security breach|compromise|lose access|account closed)\b",
    re.IGNORECASE,
)

PHISHING_MULTIPLIER = 15.0
SPAM_MULTIPLIER = 10.0
SOCIAL_ENGINEERING_MULTIPLIER = 12.0


@dataclass
class DetectionResult:
    score: float = 0.0
    evidence: list[str] = field(default_factory=list)


@dataclass
class TextFindings:
    phishing: DetectionResult
    spam: DetectionResult
    social_engineering: DetectionResult

    def evidence(self) -> list[str]:
        return [*self.phishing.evidence, *self.spam.evidence, *self.social_engineering.evidence]


def _capped(match_count: int | float, multiplier: float) -> float:
    return min(match_count * multiplier, 100.0)


class _Matches:
    """Accumulates a weighted match count alongside its evidence strings."""

    def __init__(self) -> None:
        self.count = 0
        self.evidence: list[str] = []

    def hit(self, weight: int, note: str) -> None:
        self.count += weight
        self.evidence.append(note)

    def pattern(self, pattern: re.Pattern[str], subject: str, body: str, label: str, subject_weight: int) -> None:
        # Subject counts once; every body occurrence counts.
        first = pattern.search(subject)
        if first:
            self.hit(subject_weight, f"{label} in subject: {first.group(0)}")
        for match in pattern.finditer(body):
            self.hit(1, f"{label} in body: {match.group(0)}")

    def phrases(self, phrases: tuple[str, ...], subject: str, body: str, label: str) -> None:
        for phrase in phrases:
            needle = phrase.lower()
            if needle in subject:
                self.hit(2, f"{label} in subject: {phrase}")
            if needle in body:
                self.hit(1, f"{label} in body: {phrase}")


class TextContentDetector:
    """Scores phishing, spam and social-engineering language.

    Each ``detect_*`` method is independent and returns its own evidence, so
    the call order does not matter.
    """

    def __init__(
        self,
        *,
        extra_phishing_keywords: list[str] | None = None,
        extra_spam_keywords: list[str] | None = None,
    ) -> None:
        self.phishing_phrases = merge_phrases(PHISHING_PHRASES, extra_phishing_keywords)
        self.spam_phrases = merge_phrases(SPAM_PHRASES, extra_spam_keywords)
        self.social_engineering_phrases = SOCIAL_ENGINEERING_PHRASES

    def detect_phishing(self, email: Email) -> DetectionResult:
        subject = email.subject.lower()
        body = email.body.lower()
        matches = _Matches()

        for phrase in self.phishing_phrases:
            needle = phrase.lower()
            if needle in subject or needle in body:
                matches.hit(1, f"Phishing: {phrase}")

        for pattern in STRUCTURAL_PATTERNS:
            matches.pattern(pattern, subject, body, "Suspicious pattern", subject_weight=1)

        if any(term in body for term in CREDENTIAL_TERMS):
            matches.hit(2, "Credential request")

        return DetectionResult(score=_capped(matches.count, PHISHING_MULTIPLIER), evidence=matches.evidence)

    def detect_spam(self, email: Email) -> DetectionResult:
        matches = _Matches()
        matches.phrases(self.spam_phrases, email.subject.lower(), email.body.lower(), "Spam keyword")

        for word in ALL_CAPS_PATTERN.findall(email.subject):
            matches.hit(2, f"All caps in subject: {word}")
        for word in ALL_CAPS_PATTERN.findall(email.body):
            matches.hit(1, f"All caps in body: {word}")

        exclamations = email.subject.count("!") + email.body.count("!")
        if exclamations > 3:
            matches.hit(min(exclamations // 2, 5), f"Excessive exclamation marks: {exclamations}")

        return DetectionResult(score=_capped(matches.count, SPAM_MULTIPLIER), evidence=matches.evidence)

    def detect_social_engineering(self, email: Email) -> DetectionResult:
        subject = email.subject.lower()
        body = email.body.lower()
        matches = _Matches()
        matches.phrases(self.social_engineering_phrases, subject, body, "Social engineering")
        matches.pattern(URGENCY_PATTERN, subject, body, "Urgency", subject_weight=2)
        matches.pattern(FEAR_PATTERN, subject, body, "Fear-based message", subject_weight=2)
        return DetectionResult(
            score=_capped(matches.count, SOCIAL_ENGINEERING_MULTIPLIER),
            evidence=matches.evidence,
        )

    def analyze(self, email: Email) -> TextFindings:
        return TextFindings(
            phishing=self.detect_phishing(email),
            spam=self.detect_spam(email),
            social_engineering=self.detect_social_engineering(email),
        )
