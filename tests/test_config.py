import logging

import pytest

from email_threat_scorer.config.settings import DEFAULT_CONFIG_PATH, load_config, write_default_config
from email_threat_scorer.core.errors import ConfigError


def test_load_config_defaults():
    config, raw = load_config()
    assert config.config_path == str(DEFAULT_CONFIG_PATH)
    assert "google.com" in config.trusted_domains
    assert config.malicious_domains == ["malicious-domain.com", "phishing-site.net", "fake-bank.com"]
    assert config.thresholds.malicious_verdict_threshold == 50.0
    assert config.thresholds.link_flag_threshold == 50.0
    assert config.thresholds.classifier_catch_all_threshold == 0.7
    assert config.classifier_seed is None
    assert config.log_level == "WARNING"
    assert isinstance(raw, dict)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("EMAIL_THREAT_SCORER_LINK_FLAG_THRESHOLD", "60")
    monkeypatch.setenv("EMAIL_THREAT_SCORER_CLASSIFIER_SEED", "7")
    monkeypatch.setenv("EMAIL_THREAT_SCORER_LOG_LEVEL", "debug")
    monkeypatch.setenv("EMAIL_THREAT_SCORER_CLASSIFIER_MODEL_PATH", "models/other.model")
    config, _ = load_config()
    assert config.thresholds.link_flag_threshold == 60.0
    assert config.classifier_seed == 7
    assert config.log_level == "DEBUG"
    assert config.classifier_model_path == "models/other.model"


def test_config_path_from_env(monkeypatch, tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("spam_domains: [bulk.example]\n", encoding="utf-8")
    monkeypatch.setenv("EMAIL_THREAT_SCORER_CONFIG_PATH", str(path))
    config, _ = load_config()
    assert config.spam_domains == ["bulk.example"]
    assert config.trusted_domains == []


def test_out_of_range_threshold(monkeypatch):
    monkeypatch.setenv("EMAIL_THREAT_SCORER_MALICIOUS_VERDICT_THRESHOLD", "150")
    with pytest.raises(ConfigError):
        load_config()


def test_unparseable_env_value_falls_back(monkeypatch):
    monkeypatch.setenv("EMAIL_THREAT_SCORER_CLASSIFIER_CATCH_ALL_THRESHOLD", "high")
    config, _ = load_config()
    assert config.thresholds.classifier_catch_all_threshold == 0.7


def test_lists_dir_extends_yaml_lists(tmp_path):
    lists = tmp_path / "lists"
    lists.mkdir()
    (lists / "trusted_domains.txt").write_text("# trusted\nexample.org\n\ncorp.example\n", encoding="utf-8")
    path = tmp_path / "config.yaml"
    path.write_text("lists_dir: lists\ntrusted_domains:\n  - corp.example\n", encoding="utf-8")
    config, _ = load_config(path)
    assert config.trusted_domains == ["corp.example", "example.org"]
    assert config.lists_dir == "lists"


def test_missing_file_gets_packaged_defaults(tmp_path, caplog):
    path = tmp_path / "conf" / "absent.yaml"
    with caplog.at_level(logging.WARNING, logger="email_threat_scorer.config.settings"):
        config, raw = load_config(path)
    assert path.exists()
    assert raw["malicious_domains"] == ["malicious-domain.com", "phishing-site.net", "fake-bank.com"]
    assert config.trusted_domains == ["google.com", "microsoft.com", "apple.com", "amazon.com"]
    assert config.spam_domains == ["spam-sender.com", "known-spammer.net"]
    assert config.config_path == str(path)
    assert "not found" in caplog.text


def test_missing_env_config_path_gets_packaged_defaults(monkeypatch, tmp_path):
    path = tmp_path / "from-env.yaml"
    monkeypatch.setenv("EMAIL_THREAT_SCORER_CONFIG_PATH", str(path))
    config, _ = load_config()
    assert path.exists()
    assert "fake-bank.com" in config.malicious_domains


def test_unwritable_config_path_falls_back_to_packaged_defaults(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    config, _ = load_config(blocker / "scorer.yaml")
    assert config.config_path == str(DEFAULT_CONFIG_PATH)
    assert "fake-bank.com" in config.malicious_domains


@pytest.mark.parametrize("content", ["a: [", "- just\n- a list\n"])
def test_bad_yaml(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_write_default_config(tmp_path):
    target = write_default_config(tmp_path / "conf" / "scorer.yaml")
    config, _ = load_config(target)
    assert config.spam_domains == ["spam-sender.com", "known-spammer.net"]

    target.write_text("log_level: DEBUG\n", encoding="utf-8")
    write_default_config(target)
    assert target.read_text(encoding="utf-8") == "log_level: DEBUG\n"
    write_default_config(target, overwrite=True)
    assert "spam-sender.com" in target.read_text(encoding="utf-8")
