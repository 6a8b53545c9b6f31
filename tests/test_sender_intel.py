from email_threat_scorer.domain.email.parse import email_from_fields
from email_threat_scorer.tools.intel.sender_intel import SenderIdentityDetector, has_valid_authentication


def _score(sender, headers=None, **kwargs):
    return SenderIdentityDetector(**kwargs).detect_spoofing(email_from_fields(sender, "", "", headers))


def test_empty_sender_is_maximal():
    assert _score("") == 100
    assert _score("", headers={"Authentication-Results": "spf=pass"}, trusted_domains=["example.com"]) == 100


def test_clean_sender_scores_zero():
    assert _score("alice@example.com") == 0


def test_invalid_format():
    assert _score("not-an-email") == 60


def test_spam_domain_is_case_insensitive():
    assert _score("promo@Spam-Sender.com", spam_domains=["spam-sender.com"]) == 80


def test_trust_signal_tokens_count_once():
    assert _score("security@paypal-alerts.com") == 25


def test_trusted_domain_requires_authentication():
    assert _score("alice@example.org", trusted_domains=["example.org"]) == 75
    authenticated = {"Authentication-Results": "mx.example.org; spf=pass smtp.mailfrom=example.org"}
    assert _score("alice@example.org", headers=authenticated, trusted_domains=["example.org"]) == 0


def test_authentication_markers_are_case_sensitive():
    email = email_from_fields("a@example.org", "", "", {"Authentication-Results": "mx; dkim=pass"})
    assert has_valid_authentication(email) is True
    assert has_valid_authentication(email_from_fields("a@example.org", "", "", {})) is False
    shouting = email_from_fields("a@example.org", "", "", {"Authentication-Results": "SPF=PASS"})
    assert has_valid_authentication(shouting) is False


def test_uppercase_auth_result_still_penalizes_trusted_domain():
    headers = {"Authentication-Results": "mx.example.org; SPF=PASS"}
    assert _score("alice@example.org", headers=headers, trusted_domains=["example.org"]) == 75


def test_auth_header_name_must_match_exactly():
    headers = {"authentication-results": "spf=pass"}
    assert _score("alice@example.org", headers=headers, trusted_domains=["example.org"]) == 75


def test_return_path_mismatch():
    assert _score("alice@example.org", headers={"Return-Path": "<bounce@other.net>"}) == 40
    assert _score("alice@example.org", headers={"Return-Path": "<alice@example.org>"}) == 0
    assert _score("alice@example.org", headers={"Return-Path": "<bounce@mail.example.org>"}) == 0


def test_reply_to_mismatch():
    assert _score("alice@example.org", headers={"Reply-To": "x@evil.net"}) == 30
    assert _score("alice@example.org", headers={"reply-to": "x@evil.net"}) == 0
    assert _score("alice@example.org", headers={"Reply-To": "team@example.org"}) == 0


def test_reply_to_without_sender_domain():
    assert _score("bob", headers={"Reply-To": "x@y.com"}) == 90


def test_score_is_clamped():
    headers = {"Return-Path": "<x@other.net>", "Reply-To": "x@other.net"}
    score = _score(
        "support@spam-sender.com",
        headers=headers,
        spam_domains=["spam-sender.com"],
        trusted_domains=["spam-sender.com"],
    )
    assert score == 100


def test_sender_format_must_match_whole_string():
    assert _score("a@b.com\n") == 60
    assert _score("a@b.com") == 0
