"""Rule-based email threat scoring."""

__version__ = "0.1.0"
