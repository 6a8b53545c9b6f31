"""Text analysis tools."""

from email_threat_scorer.tools.text.content import DetectionResult, TextContentDetector, TextFindings
from email_threat_scorer.tools.text.text_model import normalize_text

__all__ = ["DetectionResult", "TextContentDetector", "TextFindings", "normalize_text"]
