"""Config loader from env + yaml."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import shutil
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from email_threat_scorer.core.errors import ConfigError

logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config" / "defaults.yaml"
ENV_PREFIX = "EMAIL_THREAT_SCORER_"
LIST_NAMES = (
    "phishing_keywords",
    "spam_keywords",
    "malicious_domains",
    "trusted_domains",
    "spam_domains",
)


class AnalysisThresholds(BaseModel):
    malicious_verdict_threshold: float = Field(default=50.0, ge=0.0, le=100.0)
    link_flag_threshold: float = Field(default=50.0, ge=0.0, le=100.0)
    classifier_catch_all_threshold: float = Field(default=0.7, ge=0.0, le=1.0)


class AppConfig(BaseModel):

    phishing_keywords: list[str] = Field(default_factory=list)
    spam_keywords: list[str] = Field(default_factory=list)
    malicious_domains: list[str] = Field(default_factory=list)
    trusted_domains: list[str] = Field(default_factory=list)
    spam_domains: list[str] = Field(default_factory=list)
    classifier_model_path: str = Field(default="")
    classifier_seed: int | None = Field(default=None)
    thresholds: AnalysisThresholds = Field(default_factory=AnalysisThresholds)
    log_level: str = Field(default="WARNING")
    lists_dir: str | None = Field(default=None)
    config_path: str = Field(default=str(DEFAULT_CONFIG_PATH))


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        payload = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {p}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"cannot read {p}: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError(f"{p} must contain a mapping at the top level")
    return payload


def load_list_file(path: str | Path) -> list[str]:
    """Read one entry per line, skipping blank lines and ``#`` comments."""

    p = Path(path)
    if not p.exists():
        return []
    try:
        lines = p.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        logger.warning("could not read list file %s: %s", p, exc)
        return []
    values = [line.strip() for line in lines if line.strip() and not line.strip().startswith("#")]
    logger.debug("loaded %d entries from %s", len(values), p)
    return values


def _pick_env(name: str, fallback: Any) -> Any:
    value = os.getenv(ENV_PREFIX + name)
    return value if value not in (None, "") else fallback


def _parse_list(raw: Any) -> list[str]:
    if isinstance(raw, str):
        return list(dict.fromkeys(item.strip() for item in raw.split(",") if item.strip()))
    if isinstance(raw, list):
        return list(dict.fromkeys(str(item).strip() for item in raw if item is not None and str(item).strip()))
    return []


def _parse_float(raw: Any, fallback: float) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return fallback


def _parse_optional_int(raw: Any, fallback: int | None) -> int | None:
    if raw is None:
        return fallback
    try:
        return int(raw)
    except (TypeError, ValueError):
        return fallback


def _parse_str(raw: Any, fallback: str) -> str:
    value = str(raw if raw is not None else "").strip()
    return value or fallback


def _resolve_config_path(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path)
    env_path = os.getenv(ENV_PREFIX + "CONFIG_PATH")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(path: str | Path | None = None) -> tuple[AppConfig, dict[str, Any]]:
    config_path = _resolve_config_path(path)
    if not config_path.exists():
        logger.warning("config file %s not found, writing packaged defaults there", config_path)
        try:
            write_default_config(config_path)
        except ConfigError as exc:
            logger.warning("%s; using packaged defaults from %s", exc, DEFAULT_CONFIG_PATH)
            config_path = DEFAULT_CONFIG_PATH
    merged = load_yaml(config_path)

    raw_thresholds = merged.get("thresholds")
    thresholds = raw_thresholds if isinstance(raw_thresholds, dict) else {}
    defaults = AnalysisThresholds()

    lists = {name: _parse_list(merged.get(name, [])) for name in LIST_NAMES}
    lists_dir = merged.get("lists_dir")
    if isinstance(lists_dir, str) and lists_dir.strip():
        base = Path(lists_dir.strip())
        if not base.is_absolute():
            base = config_path.parent / base
        for name in LIST_NAMES:
            lists[name] = list(dict.fromkeys(lists[name] + load_list_file(base / f"{name}.txt")))

    payload = {
        **lists,
        "classifier_model_path": _parse_str(
            _pick_env("CLASSIFIER_MODEL_PATH", merged.get("classifier_model_path", "")),
            "",
        ),
        "classifier_seed": _parse_optional_int(
            _pick_env("CLASSIFIER_SEED", merged.get("classifier_seed")),
            None,
        ),
        "thresholds": {
            "malicious_verdict_threshold": _parse_float(
                _pick_env(
                    "MALICIOUS_VERDICT_THRESHOLD",
                    thresholds.get("malicious_verdict_threshold", defaults.malicious_verdict_threshold),
                ),
                defaults.malicious_verdict_threshold,
            ),
            "link_flag_threshold": _parse_float(
                _pick_env(
                    "LINK_FLAG_THRESHOLD",
                    thresholds.get("link_flag_threshold", defaults.link_flag_threshold),
                ),
                defaults.link_flag_threshold,
            ),
            "classifier_catch_all_threshold": _parse_float(
                _pick_env(
                    "CLASSIFIER_CATCH_ALL_THRESHOLD",
                    thresholds.get("classifier_catch_all_threshold", defaults.classifier_catch_all_threshold),
                ),
                defaults.classifier_catch_all_threshold,
            ),
        },
        "log_level": _parse_str(_pick_env("LOG_LEVEL", merged.get("log_level", "WARNING")), "WARNING").upper(),
        "lists_dir": lists_dir if isinstance(lists_dir, str) and lists_dir.strip() else None,
        "config_path": str(config_path),
    }

    try:
        cfg = AppConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration in {config_path}: {exc}") from exc
    return cfg, merged


def write_default_config(path: str | Path, *, overwrite: bool = False) -> Path:
    """Copy the packaged defaults to ``path`` unless a file already exists there."""

    target = Path(path)
    if target.exists() and not overwrite:
        logger.info("config already present at %s", target)
        return target
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(DEFAULT_CONFIG_PATH, target)
    except OSError as exc:
        raise ConfigError(f"cannot write default config to {target}: {exc}") from exc
    logger.info("created default config at %s", target)
    return target
