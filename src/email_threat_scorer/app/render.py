"""Human-readable report rendering."""

from __future__ import annotations

import json

from email_threat_scorer.domain.email.models import Email
from email_threat_scorer.domain.report import ThreatReport

BANNER = "========== EMAIL THREAT ANALYSIS REPORT =========="
RULE = "=" * len(BANNER)


def render_text(report: ThreatReport, email: Email) -> str:
    lines = ["", BANNER, "", "Email details:", f"- Sender: {email.sender}", f"- Subject: {email.subject}", ""]
    lines += [
        "Overall assessment:",
        f"- Malicious: {'YES' if report.is_malicious else 'NO'}",
        f"- Threat score: {report.overall_score:.1f}%",
        "",
    ]

    sections = (
        (
            "Detected threats:",
            [
                f"{category.name} (confidence: {score:.1f}%)"
                for category, score in report.category_confidence.items()
            ],
        ),
        ("Suspicious links:", report.suspicious_links),
        ("Suspicious keywords/phrases:", report.suspicious_keywords),
        ("Recommendations:", report.recommendations),
    )
    for title, items in sections:
        if not items:
            continue
        lines.append(title)
        lines.extend(f"- {item}" for item in items)
        lines.append("")

    lines.append(RULE)
    return "\n".join(lines)


def render_json(report: ThreatReport, email: Email) -> str:
    payload = {
        "email": {
            "sender": email.sender,
            "subject": email.subject,
            "url_count": len(email.extracted_urls),
        },
        **report.to_payload(),
    }
    return json.dumps(payload, ensure_ascii=True)


def render(report: ThreatReport, email: Email, output_format: str = "json") -> str:
    if output_format == "text":
        return render_text(report, email)
    return render_json(report, email)
