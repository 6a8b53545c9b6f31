"""Sender-level spoofing signals (address shape, domain lists, headers)."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re

from email_threat_scorer.domain.email.models import Email

logger = logging.getLogger(__name__)

_VALID_SENDER_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,6}$")
TRUST_SIGNAL_TOKENS = (
    "admin",
    "support",
    "service",
    "security",
    "help",
    "notify",
    "no-reply",
    "paypal",
    "amazon",
    "facebook",
    "microsoft",
    "apple",
    "google",
)
AUTH_PASS_MARKERS = ("spf=pass", "dkim=pass", "dmarc=pass")


@dataclass
class SenderWeights:
    missing_sender: float = 100.0
    invalid_format: float = 60.0
    spam_domain: float = 80.0
    return_path_mismatch: float = 40.0
    reply_to_mismatch: float = 30.0
    display_name: float = 25.0
    unauthenticated_trusted: float = 75.0


def _clean_list(values: list[str] | None) -> tuple[str, ...]:
    return tuple(dict.fromkeys(item.strip().lower() for item in (values or []) if item and item.strip()))


def has_valid_authentication(email: Email) -> bool:
    results = email.header("Authentication-Results")
    if results is None:
        return False
    return any(marker in results for marker in AUTH_PASS_MARKERS)


class SenderIdentityDetector:
    """Scores how likely the sender identity is forged, from 0 to 100."""

    def __init__(
        self,
        *,
        trusted_domains: list[str] | None = None,
        spam_domains: list[str] | None = None,
        weights: SenderWeights | None = None,
    ) -> None:
        self.trusted_domains = _clean_list(trusted_domains)
        self.spam_domains = _clean_list(spam_domains)
        self.weights = weights or SenderWeights()

    def detect_spoofing(self, email: Email) -> float:
        sender = email.sender
        if not sender:
            return self.weights.missing_sender

        w = self.weights
        domain = (email.sender_domain or "").lower()
        indicators: list[str] = []
        score = 0.0

        if not _VALID_SENDER_PATTERN.fullmatch(sender):
            score += w.invalid_format
            indicators.append("invalid_sender_format")

        if domain and domain in self.spam_domains:
            score += w.spam_domain
            indicators.append("spam_domain")

        header_score = self._header_inconsistency(email)
        if header_score:
            score += header_score
            indicators.append("header_mismatch")

        lowered_sender = sender.lower()
        if any(token in lowered_sender for token in TRUST_SIGNAL_TOKENS):
            score += w.display_name
            indicators.append("trust_signal_name")

        if domain and domain in self.trusted_domains and not has_valid_authentication(email):
            score += w.unauthenticated_trusted
            indicators.append("unauthenticated_trusted_domain")

        final = min(score, 100.0)
        logger.debug("sender scored sender=%s score=%.1f indicators=%s", sender, final, indicators)
        return final

    def _header_inconsistency(self, email: Email) -> float:
        headers = email.headers
        if not headers:
            return 0.0
        sender = email.sender.lower()
        domain = (email.sender_domain or "").lower()
        score = 0.0

        return_path = email.header("Return-Path")
        if return_path is not None:
            clean = re.sub(r"[<>]", "", return_path).strip().lower()
            # An absent sender domain never counts as a match.
            domain_matches = bool(domain) and clean.endswith(domain)
            if not sender.endswith(clean) and not domain_matches:
                score += self.weights.return_path_mismatch

        reply_to = email.header("Reply-To")
        if reply_to is not None and not (domain and domain in reply_to.lower()):
            score += self.weights.reply_to_mismatch

        return score
