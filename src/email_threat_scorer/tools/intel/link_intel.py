"""URL-level threat heuristics."""

from __future__ import annotations

from dataclasses import dataclass, field
import ipaddress
import logging
import re
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

SPOOFED_BRANDS = (
    "google",
    "microsoft",
    "apple",
    "amazon",
    "paypal",
    "facebook",
    "dropbox",
    "linkedin",
    "instagram",
    "twitter",
    "bank",
    "chase",
    "wellsfargo",
    "citibank",
)
SUSPICIOUS_TLDS = frozenset(
    {
        "tk",
        "ml",
        "ga",
        "cf",
        "gq",
        "xyz",
        "top",
        "info",
        "live",
        "online",
        "site",
        "stream",
        "club",
        "icu",
        "work",
        "link",
    }
)
URL_SHORTENERS = frozenset(
    {
        "bit.ly",
        "tinyurl.com",
        "goo.gl",
        "t.co",
        "ow.ly",
        "is.gd",
        "buff.ly",
        "rebrand.ly",
        "cutt.ly",
        "tiny.cc",
        "shorte.st",
        "adf.ly",
        "bc.vc",
    }
)
PATH_RISK_TOKENS = ("login", "account", "secure", "verify")
STANDARD_PORTS = (80, 443)

SYNTAX_ERROR_SCORE = 85.0
INVALID_URL_SCORE = 90.0
MALICIOUS_DOMAIN_SCORE = 100.0

_IP_URL_PATTERN = re.compile(
    r"https?://(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)",
    re.IGNORECASE,
)
_DOMAIN_PATTERN = re.compile(r"^(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z]{2,}$")
_BRAND_HOST_TEMPLATE = r"^(?:www\.)?{brand}\.[a-z]{{2,}}(?:\.[a-z]{{2,}})?$"


@dataclass
class LinkWeights:
    ip_host: float = 70.0
    long_host: float = 40.0
    suspicious_tld: float = 30.0
    shortener: float = 25.0
    typosquat: float = 60.0
    nonstandard_port: float = 25.0
    excessive_subdomains: float = 20.0
    risky_path: float = 15.0
    long_host_length: int = 40
    max_subdomains: int = 3


@dataclass
class LinkAssessment:
    url: str
    score: float = 0.0
    host: str = ""
    indicators: list[str] = field(default_factory=list)


def levenshtein(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        curr = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            curr.append(min(curr[j - 1] + 1, prev[j] + 1, prev[j - 1] + cost))
        prev = curr
    return prev[-1]


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def _is_valid_host(host: str) -> bool:
    return _is_ip_literal(host) or bool(_DOMAIN_PATTERN.fullmatch(host))


def is_typosquat(host: str, brands: tuple[str, ...] = SPOOFED_BRANDS) -> bool:
    """Return True when ``host`` imitates one of ``brands``.

    The edit distance is taken over the full host, not the registrable domain.
    """

    lowered = host.lower()
    for brand in brands:
        if lowered in {f"{brand}.com", f"{brand}.org", f"{brand}.net"}:
            continue
        if levenshtein(lowered, brand) <= 2:
            return True
        if brand in lowered and not re.fullmatch(_BRAND_HOST_TEMPLATE.format(brand=re.escape(brand)), lowered):
            return True
    return False


class LinkSafetyDetector:
    """Scores a single URL from 0 (benign) to 100 (known malicious)."""

    def __init__(
        self,
        malicious_domains: list[str] | None = None,
        *,
        weights: LinkWeights | None = None,
    ) -> None:
        self.malicious_domains = tuple(
            dict.fromkeys(item.strip().lower() for item in (malicious_domains or []) if item and item.strip())
        )
        self.weights = weights or LinkWeights()

    def score(self, url: str | None) -> float:
        return self.inspect(url).score

    def inspect(self, url: str | None) -> LinkAssessment:
        raw = (url or "").strip()
        assessment = LinkAssessment(url=raw)
        if not raw:
            return assessment

        try:
            parsed = urlparse(raw)
            host = (parsed.hostname or "").lower()
            port = parsed.port
        except ValueError as exc:
            logger.debug("url syntax error url=%s error=%s", raw, exc)
            assessment.score = SYNTAX_ERROR_SCORE
            assessment.indicators.append("url_syntax_error")
            return assessment

        assessment.host = host
        if parsed.scheme.lower() not in {"http", "https"} or any(ch.isspace() for ch in raw) or not _is_valid_host(host):
            assessment.score = INVALID_URL_SCORE
            assessment.indicators.append("invalid_url")
            return assessment

        for domain in self.malicious_domains:
            if domain in host:
                assessment.score = MALICIOUS_DOMAIN_SCORE
                assessment.indicators.append("known_malicious_domain")
                return assessment

        w = self.weights
        risk = 0.0
        if _IP_URL_PATTERN.search(raw) or _is_ip_literal(host):
            risk += w.ip_host
            assessment.indicators.append("ip_host")
        if len(host) > w.long_host_length:
            risk += w.long_host
            assessment.indicators.append("long_host")
        if host.rsplit(".", 1)[-1] in SUSPICIOUS_TLDS:
            risk += w.suspicious_tld
            assessment.indicators.append("suspicious_tld")
        if host in URL_SHORTENERS:
            risk += w.shortener
            assessment.indicators.append("url_shortener")
        if is_typosquat(host):
            risk += w.typosquat
            assessment.indicators.append("brand_typosquat")
        if port is not None and port not in STANDARD_PORTS:
            risk += w.nonstandard_port
            assessment.indicators.append("nonstandard_port")
        if len(host.split(".")) - 1 > w.max_subdomains:
            risk += w.excessive_subdomains
            assessment.indicators.append("excessive_subdomains")
        path = parsed.path.lower()
        if any(token in path for token in PATH_RISK_TOKENS):
            risk += w.risky_path
            assessment.indicators.append("risky_path")

        assessment.score = min(risk, 100.0)
        logger.debug("link scored url=%s score=%.1f indicators=%s", raw, assessment.score, assessment.indicators)
        return assessment
