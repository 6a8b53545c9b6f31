"""Email domain models and parsing."""

from email_threat_scorer.domain.email.models import Email
from email_threat_scorer.domain.email.parse import (
    email_from_fields,
    parse_eml_content,
    parse_eml_file,
    parse_input_payload,
)

__all__ = [
    "Email",
    "email_from_fields",
    "parse_eml_content",
    "parse_eml_file",
    "parse_input_payload",
]
