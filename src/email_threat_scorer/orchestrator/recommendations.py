"""Fixed advice derived from a finished report."""

from __future__ import annotations

from email_threat_scorer.domain.report import ThreatCategory, ThreatReport

NO_THREAT_ADVICE = "No immediate threats detected, but always remain cautious"
DO_NOT_REPLY = "Do not reply to this email"
GENERIC_ADVICE = ("Exercise caution with this email",)

CATEGORY_ADVICE: dict[ThreatCategory, tuple[str, ...]] = {
    ThreatCategory.PHISHING: (
        "Do not click on any links or buttons in this email",
        "Do not provide any personal information",
    ),
    ThreatCategory.SUSPICIOUS_LINK: (
        "Do not click on any links in this email",
        "If you need to visit the website, type the address directly in your browser",
    ),
    ThreatCategory.SENDER_SPOOFING: ("Verify the sender by contacting them through a known, trusted channel",),
    ThreatCategory.SPAM: ("Mark the email as spam in your email client",),
    ThreatCategory.SOCIAL_ENGINEERING: ("Be cautious of emails creating urgency or strong emotions",),
}


def derive_recommendations(report: ThreatReport) -> list[str]:
    if not report.is_malicious:
        return [NO_THREAT_ADVICE]
    advice = [DO_NOT_REPLY]
    for category in report.triggered_categories():
        advice.extend(CATEGORY_ADVICE.get(category, GENERIC_ADVICE))
    return advice
