from __future__ import annotations

import logging
import os

import pytest

from email_threat_scorer.domain.email.parse import email_from_fields


class FixedNoise:
    """Random source stub; 0.5 cancels the classifier perturbation."""

    def __init__(self, value: float = 0.5) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("EMAIL_THREAT_SCORER_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def no_noise() -> FixedNoise:
    return FixedNoise(0.5)


@pytest.fixture
def make_noise():
    return FixedNoise


@pytest.fixture
def urgent_email():
    return email_from_fields(
        "alice@example.com",
        "URGENT: Verify your account now!!!!",
        "Please click here to continue.",
    )
