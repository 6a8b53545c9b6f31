"""Input normalization and EML parsing utilities."""

from __future__ import annotations

from email import policy
from email.message import Message
from email.parser import BytesParser
from email.utils import parseaddr
import json
import logging
from pathlib import Path
from typing import Any

from email_threat_scorer.core.errors import EmailParseError
from email_threat_scorer.domain.email.models import Email
from email_threat_scorer.tools.text.text_model import normalize_text

logger = logging.getLogger(__name__)


def _looks_like_eml(raw: str) -> bool:
    text = raw.replace("\r\n", "\n").lstrip()
    if not text or "\n\n" not in text:
        return False
    headers = text.split("\n\n", maxsplit=1)[0].lower()
    return "subject:" in headers and ("from:" in headers or "to:" in headers)


def _decode_part(part: Message) -> str:
    payload = part.get_payload(decode=True)
    if payload is None:
        raw = part.get_payload()
        return raw if isinstance(raw, str) else ""
    charset = part.get_content_charset() or "utf-8"
    for name in (charset, "utf-8", "latin-1"):
        try:
            return payload.decode(name, errors="replace")
        except LookupError:
            continue
    return ""


def _extract_body(message: Message) -> str:
    body_text: list[str] = []
    body_html: list[str] = []
    parts = message.walk() if message.is_multipart() else [message]
    for part in parts:
        if part.get_content_maintype() == "multipart":
            continue
        if "attachment" in (part.get("Content-Disposition") or "").lower():
            continue
        content_type = (part.get_content_type() or "").lower()
        content = _decode_part(part)
        if not content:
            continue
        if content_type == "text/plain":
            body_text.append(content)
        elif content_type == "text/html":
            body_html.append(content)
    return "\n".join(body_text) if body_text else "\n".join(body_html)


def email_from_fields(
    sender: str | None,
    subject: str | None,
    body: str | None,
    headers: dict[str, str] | None = None,
) -> Email:
    return Email(sender=sender, subject=subject, body=body, headers=headers or {})


def parse_eml_content(raw_eml: str) -> Email:
    try:
        message = BytesParser(policy=policy.compat32).parsebytes(raw_eml.encode("utf-8", errors="ignore"))
    except (TypeError, ValueError) as exc:
        raise EmailParseError(f"cannot parse email content: {exc}") from exc

    headers: dict[str, str] = {}
    for key, value in message.items():
        # Keep the first occurrence of repeated headers such as Received.
        headers.setdefault(str(key), normalize_text(str(value)))

    _, sender = parseaddr(str(message.get("From") or ""))
    subject = normalize_text(str(message.get("Subject") or ""))
    email = Email(sender=sender, subject=subject, body=_extract_body(message), headers=headers)
    logger.debug("parsed eml sender=%s urls=%d headers=%d", email.sender, len(email.extracted_urls), len(headers))
    return email


def parse_eml_file(path: str | Path) -> Email:
    p = Path(path)
    if not p.is_file():
        raise EmailParseError(f"file does not exist or is not a regular file: {p}")
    try:
        content = p.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise EmailParseError(f"cannot read {p}: {exc}") from exc
    return parse_eml_content(content)


def _coerce_headers(raw: Any) -> dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {str(key): str(value) for key, value in raw.items() if value is not None}


def _parse_json_payload(payload: dict[str, Any]) -> Email:
    eml_raw = payload.get("eml") or payload.get("eml_raw")
    eml_path = payload.get("eml_path")
    if isinstance(eml_raw, str) and eml_raw.strip():
        base = parse_eml_content(eml_raw)
    elif isinstance(eml_path, str) and eml_path.strip():
        base = parse_eml_file(eml_path.strip())
    else:
        base = Email()

    headers = {**base.headers, **_coerce_headers(payload.get("headers"))}
    fields: dict[str, Any] = {"sender": base.sender, "subject": base.subject, "body": base.body}
    for key in ("sender", "subject", "body"):
        value = payload.get(key)
        if isinstance(value, str):
            fields[key] = value
    return Email(**fields, headers=headers)


def parse_input_payload(raw: str) -> Email:
    """Normalize a JSON object, RFC 822 text or bare text into an ``Email``."""

    original = raw or ""
    stripped = original.strip()
    if not stripped:
        return Email()

    if stripped.startswith("{") and stripped.endswith("}"):
        try:
            payload = json.loads(stripped)
        except json.JSONDecodeError as exc:
            raise EmailParseError(f"invalid JSON payload: {exc}") from exc
        if not isinstance(payload, dict):
            raise EmailParseError("JSON payload must be an object")
        return _parse_json_payload(payload)

    if _looks_like_eml(original):
        return parse_eml_content(original)

    return Email(body=original)
