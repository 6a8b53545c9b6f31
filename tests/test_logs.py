import logging

from email_threat_scorer.core.logs import setup_logging


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "scorer.log"
    setup_logging("debug", log_file=log_file)
    assert logging.getLogger().level == logging.DEBUG
    logging.getLogger("email_threat_scorer.test").debug("stage done")
    assert "stage done" in log_file.read_text(encoding="utf-8")


def test_unknown_level_falls_back_to_warning():
    setup_logging("loud")
    assert logging.getLogger().level == logging.WARNING
