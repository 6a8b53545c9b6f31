import pytest

from email_threat_scorer.domain.report import ThreatCategory, ThreatReport


def test_empty_report():
    report = ThreatReport()
    assert report.overall_score == 0.0
    assert report.is_malicious is False
    assert report.triggered_categories() == []


def test_mean_and_verdict():
    report = ThreatReport()
    report.add_threat(ThreatCategory.PHISHING, 80)
    report.add_threat(ThreatCategory.SPAM, 30)
    assert report.overall_score == pytest.approx(55.0)
    assert report.is_malicious is True


def test_upsert_replaces_confidence_and_keeps_order():
    report = ThreatReport()
    report.add_threat(ThreatCategory.PHISHING, 80)
    report.add_threat(ThreatCategory.SPAM, 30)
    report.add_threat(ThreatCategory.PHISHING, 20)
    assert report.triggered_categories() == [ThreatCategory.PHISHING, ThreatCategory.SPAM]
    assert report.category_confidence[ThreatCategory.PHISHING] == 20
    assert report.overall_score == pytest.approx(25.0)
    assert report.is_malicious is False


def test_exactly_fifty_is_not_malicious():
    report = ThreatReport()
    report.add_threat(ThreatCategory.SPAM, 50)
    assert report.is_malicious is False


def test_custom_threshold():
    report = ThreatReport(verdict_threshold=20)
    report.add_threat(ThreatCategory.SPAM, 30)
    assert report.is_malicious is True


def test_confidence_is_clamped():
    report = ThreatReport()
    report.add_threat(ThreatCategory.SPAM, 150)
    report.add_threat(ThreatCategory.PHISHING, -5)
    assert report.category_confidence[ThreatCategory.SPAM] == 100
    assert report.category_confidence[ThreatCategory.PHISHING] == 0
    assert report.overall_score == pytest.approx(50.0)


def test_payload_shape():
    report = ThreatReport()
    report.add_threat(ThreatCategory.SUSPICIOUS_LINK, 85)
    report.add_suspicious_link("http://192.168.1.1/login")
    report.add_suspicious_keyword("Credential request")
    report.add_recommendation("Do not reply to this email")
    payload = report.to_payload()
    assert payload["threats"] == {"suspicious_link": 85.0}
    assert payload["overall_score"] == 85.0
    assert payload["is_malicious"] is True
    assert payload["suspicious_links"] == ["http://192.168.1.1/login"]
    assert payload["suspicious_keywords"] == ["Credential request"]
    assert payload["recommendations"] == ["Do not reply to this email"]
