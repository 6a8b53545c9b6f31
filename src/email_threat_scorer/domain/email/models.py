"""Email domain models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from email_threat_scorer.domain.url.extract import extract_urls


class Email(BaseModel):
    """Normalized email record consumed by every detector.

    ``sender_domain`` and ``extracted_urls`` are always derived from ``sender``
    and ``body``; values passed for them are ignored.
    """

    model_config = ConfigDict(frozen=True)

    sender: str = ""
    sender_domain: str | None = None
    subject: str = ""
    body: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    extracted_urls: tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _derive_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        payload = dict(data)
        for key in ("sender", "subject", "body"):
            if payload.get(key) is None:
                payload[key] = ""
        raw_headers = payload.get("headers") or {}
        payload["headers"] = {str(key): str(value) for key, value in dict(raw_headers).items()}

        sender = str(payload["sender"])
        payload["sender_domain"] = sender.split("@", 1)[1] if "@" in sender else None
        payload["extracted_urls"] = tuple(extract_urls(str(payload["body"])))
        return payload

    def header(self, name: str) -> str | None:
        """Return the header stored under exactly ``name``; keys are case-sensitive."""

        return self.headers.get(name)
