"""Deterministic stand-in classifier over hand-picked text features.

This is not a trained model. It turns term densities, URL count and
punctuation density into a coarse malicious probability, plus a small bounded
perturbation drawn from an injected random source. Pass a seeded
``random.Random`` (or any object with a ``random()`` method) to make results
reproducible; a source that always returns 0.5 removes the perturbation.
"""

from __future__ import annotations

import logging
import random
from typing import Protocol

from email_threat_scorer.domain.email.models import Email
from email_threat_scorer.tools.text.text_model import count_occurrences, count_special_chars

logger = logging.getLogger(__name__)

# Order matters: only the first ``WEIGHTED_TERMS`` entries carry weight.
FEATURE_VOCABULARY = (
    "urgent", "verify", "account", "password", "credit card", "click", "confirm",
    "update", "bank", "payment", "free", "win", "congratulations", "lottery", "offer",
    # account and access
    "limited", "alert", "security", "login", "access", "suspend", "recover",
    "validate", "expire",
    # money
    "money", "cash", "prize", "gift", "information", "important",
    "transaction", "balance", "refund", "transfer", "billing", "invoice", "bonus", "jackpot",
    "exclusive", "reward", "promo", "voucher", "deal", "discount", "loan", "wire transfer",
    # threats and pressure
    "guaranteed", "secure", "protection", "breach", "unauthorized", "threat", "problem", "final notice",
    "last chance", "act now", "limited time", "encryption", "encrypted", "multi-factor", "otp", "authentication",
    "reset", "blocked", "unlock", "activation", "phishing", "scam", "fake", "spyware",
    "malware", "adware", "ransomware", "virus", "trojan", "hacker", "compromised", "identity theft",
    "blacklisted", "lawsuit", "legal action", "penalty", "police", "federal", "investigation", "violation",
    "criminal", "payment required", "overdue", "due payment", "urgent payment", "false", "fraudulent", "impersonation",
    # brands
    "amazon", "google", "paypal", "apple", "netflix", "microsoft", "facebook", "instagram",
    "whatsapp", "linkedin", "ebay", "walmart",
    # personal and financial data
    "account update", "account verification", "password reset", "security alert",
    "access denied", "personal information", "social security number", "bank details", "credit score", "investment",
    "bitcoin", "crypto", "withdrawal", "deposit", "interest", "trade", "quick money", "fast cash", "easy money",
    "millionaire", "lotto", "free trial", "risk-free", "special offer", "no cost", "hidden fee",
    "renew subscription", "auto-renewal", "unsubscribe", "unsubscribe now", "unsubscribe link",
    "fake invoice", "fake refund", "overpayment", "bounced payment", "late fee",
    "hidden charge", "automatic charge", "chargeback", "legal notice", "terms violation", "confidential", "anonymous",
    "secret", "spy", "surveillance", "backdoor", "unauthorized access", "data leak", "data breach", "credit report",
    "bad credit", "insurance claim", "policy update", "coverage expired", "government notice", "irs", "tax refund",
    "audit", "settlement",
    # account takeover
    "account closure", "password change", "login attempt", "wrong password", "access attempt", "login location",
    "device login", "email login", "email hacked", "email compromised", "security token", "security check",
    # technical pretexts
    "browser update", "plugin update", "software update", "security patch",
    "domain expired", "hosting issue", "ssl certificate", "server down", "dns issue", "connection error",
    "network error", "firewall", "proxy", "ip address", "vpn", "vpn access", "anonymous connection",
    "external connection", "remote access", "remote login", "malicious code", "suspicious file",
    "insecure connection", "https", "http", "login credentials", "username",
    "account takeover", "unauthorized charge", "security settings", "fraud prevention", "flagged activity",
    "blacklist", "white list", "bypass", "refund processed", "return processed", "unauthorized refund",
    "overdue invoice",
    # support and attachments
    "customer support", "support ticket", "help desk", "support center",
    "download", "install", "attachment", "open attachment", "file attachment", "compressed file", "zip file",
    "executable", "software installation", "browser extension", "plugin installation", "script execution",
    "run file", "execute file", "system update", "patch update",
)
WEIGHTED_TERMS = 15
TERM_WEIGHT = 0.05
URL_COUNT_WEIGHT = 0.1
SPECIAL_CHAR_WEIGHT = 0.1
NOISE_AMPLITUDE = 0.05


class NoiseSource(Protocol):
    def random(self) -> float: ...


class HeuristicClassifier:
    def __init__(
        self,
        *,
        rng: NoiseSource | None = None,
        seed: int | None = None,
        model_path: str = "",
        vocabulary: tuple[str, ...] = FEATURE_VOCABULARY,
    ) -> None:
        self.rng: NoiseSource = rng if rng is not None else random.Random(seed)
        self.model_path = model_path
        self.vocabulary = tuple(term.lower() for term in vocabulary)
        if model_path:
            logger.info("classifier model reference %s (heuristic scoring, file not loaded)", model_path)
        else:
            logger.info("no classifier model configured, using heuristic scoring")

    def extract_features(self, email: Email) -> list[float]:
        subject = email.subject.lower()
        body = email.body.lower()
        total_length = len(subject) + len(body)

        features: list[float] = []
        for term in self.vocabulary:
            count = 2 * count_occurrences(subject, term) + count_occurrences(body, term)
            features.append(count / (total_length / 100.0) if total_length > 0 else 0.0)

        features.append(float(len(email.extracted_urls)))
        features.append(count_special_chars(subject + body) / 100.0)
        features.append(total_length / 1000.0)
        return features

    def score_features(self, features: list[float]) -> float:
        size = len(self.vocabulary)
        score = sum(value * TERM_WEIGHT for value in features[: min(WEIGHTED_TERMS, size)])
        if len(features) > size:
            score += features[size] * URL_COUNT_WEIGHT
        if len(features) > size + 1:
            score += features[size + 1] * SPECIAL_CHAR_WEIGHT
        score += self.rng.random() * (2 * NOISE_AMPLITUDE) - NOISE_AMPLITUDE
        return max(0.0, min(1.0, score))

    def classify(self, email: Email) -> tuple[float, float]:
        malicious = self.score_features(self.extract_features(email))
        return malicious, 1.0 - malicious
