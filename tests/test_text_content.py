from email_threat_scorer.domain.email.parse import email_from_fields
from email_threat_scorer.tools.text.content import PHISHING_PHRASES, TextContentDetector


def _email(subject: str = "", body: str = ""):
    return email_from_fields("alice@example.com", subject, body)


def test_urgent_email_scores(urgent_email):
    findings = TextContentDetector().analyze(urgent_email)
    assert findings.phishing.score == 30
    assert findings.phishing.evidence == ["Phishing: verify your account", "Suspicious pattern in body: click here"]
    assert findings.spam.score == 40
    assert findings.spam.evidence == ["All caps in subject: URGENT", "Excessive exclamation marks: 4"]
    assert findings.social_engineering.score == 24
    assert findings.social_engineering.evidence == ["Social engineering in subject: urgent"]
    assert findings.evidence() == [
        *findings.phishing.evidence,
        *findings.spam.evidence,
        *findings.social_engineering.evidence,
    ]


def test_credential_request():
    result = TextContentDetector().detect_phishing(_email(body="Enter your password below"))
    assert result.score == 30
    assert result.evidence == ["Credential request"]


def test_brand_lookalike_and_credentials():
    result = TextContentDetector().detect_phishing(_email(body="Sign in to your paypa1 account"))
    assert result.score == 45
    assert "Suspicious pattern in body: paypa1" in result.evidence


def test_real_brand_is_not_a_lookalike():
    assert TextContentDetector().detect_phishing(_email(body="Your amazon order shipped")).score == 0


def test_mixed_script_token():
    result = TextContentDetector().detect_phishing(_email(body="Log in to y\u043eur bank"))
    assert result.score == 15


def test_punctuation_run():
    assert TextContentDetector().detect_phishing(_email(body="Act now $$$$$")).score == 15


def test_click_here_followed_by_link_is_not_flagged():
    result = TextContentDetector().detect_phishing(_email(body="click here: https://example.com/a"))
    assert not any("click here" in item for item in result.evidence)


def test_extra_phishing_keywords_are_appended_once():
    detector = TextContentDetector(extra_phishing_keywords=["Gift card code", "VERIFY YOUR ACCOUNT", " "])
    assert detector.phishing_phrases[: len(PHISHING_PHRASES)] == PHISHING_PHRASES
    assert detector.phishing_phrases[-1] == "Gift card code"
    assert len(detector.phishing_phrases) == len(PHISHING_PHRASES) + 1
    result = detector.detect_phishing(_email(body="send the gift card code"))
    assert result.evidence == ["Phishing: Gift card code"]


def test_spam_subject_weighting():
    result = TextContentDetector().detect_spam(_email(subject="Free offer"))
    assert result.score == 20
    assert result.evidence == ["Spam keyword in subject: free"]


def test_exclamation_bonus_is_capped():
    result = TextContentDetector().detect_spam(_email(body="Hi!!!!!!!!!!!!"))
    assert result.score == 50
    assert result.evidence == ["Excessive exclamation marks: 12"]


def test_social_engineering_patterns():
    result = TextContentDetector().detect_social_engineering(_email(body="Your account is at risk. Hurry, hurry!"))
    assert result.score == 36
    assert result.evidence == [
        "Urgency in body: hurry",
        "Urgency in body: hurry",
        "Fear-based message in body: risk",
    ]


def test_scores_stay_in_range():
    body = " ".join(["WINNER FREE cash prize act now!!!"] * 30)
    findings = TextContentDetector().analyze(_email(subject="FREE WINNER", body=body))
    for result in (findings.phishing, findings.spam, findings.social_engineering):
        assert 0 <= result.score <= 100
    assert findings.spam.score == 100


def test_empty_email_scores_zero():
    findings = TextContentDetector().analyze(_email())
    assert findings.phishing.score == findings.spam.score == findings.social_engineering.score == 0
    assert findings.evidence() == []
