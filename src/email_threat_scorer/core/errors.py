"""Custom exceptions for email-threat-scorer."""


class EmailThreatScorerError(Exception):
    """Base exception for application-level errors."""


class ConfigError(EmailThreatScorerError):
    """Raised when configuration cannot be loaded or validated."""


class EmailParseError(EmailThreatScorerError):
    """Raised when an email source cannot be read or parsed."""
