"""Configuration loading for styleguard runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .errors import ConfigError
from .severity import Severity
from .utils import read_yaml_file

logger = logging.getLogger("styleguard.config")

DEFAULT_EXTENSIONS = (".swift",)
DEFAULT_WORKERS = 4
KNOWN_KEYS = frozenset({"strict", "workers", "timeout", "extensions", "exclude", "rules", "custom_rules"})


@dataclass(frozen=True)
class RuleOverride:
    enabled: bool = True
    severity: Optional[Severity] = None


@dataclass(frozen=True)
class LintConfig:
    """Settings for one run. Built once and never mutated."""

    overrides: Mapping[str, RuleOverride] = field(default_factory=dict)
    custom_rules: Tuple[Mapping[str, Any], ...] = ()
    strict: bool = False
    workers: int = DEFAULT_WORKERS
    timeout: Optional[float] = None
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    exclude: Tuple[str, ...] = ()
    source: Optional[str] = None


def load_config(path: str | Path | None) -> LintConfig:
    """Load a YAML config file. ``None`` yields the defaults."""

    if path is None:
        return LintConfig()
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")
    try:
        raw = read_yaml_file(config_path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file {config_path} is not valid YAML: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc
    logger.debug("Loaded config from %s", config_path)
    return parse_config({} if raw is None else raw, source=str(config_path))


def parse_config(raw: Any, source: Optional[str] = None) -> LintConfig:
    """Validate an already-decoded config mapping."""

    if not isinstance(raw, Mapping):
        raise ConfigError("Config must be a mapping")
    unknown = sorted(set(raw) - KNOWN_KEYS)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(map(str, unknown)))

    custom_rules = raw.get("custom_rules") or []
    if not isinstance(custom_rules, list):
        raise ConfigError("'custom_rules' must be a list")

    return LintConfig(
        overrides=_parse_overrides(raw.get("rules") or {}),
        custom_rules=tuple(custom_rules),
        strict=_ensure_bool(raw.get("strict", False), "strict"),
        workers=_ensure_workers(raw.get("workers", DEFAULT_WORKERS)),
        timeout=_ensure_timeout(raw.get("timeout")),
        extensions=tuple(_ensure_string_list(raw.get("extensions", list(DEFAULT_EXTENSIONS)), "extensions")),
        exclude=tuple(_ensure_string_list(raw.get("exclude", []), "exclude")),
        source=source,
    )


def _parse_overrides(raw: Any) -> Dict[str, RuleOverride]:
    if not isinstance(raw, Mapping):
        raise ConfigError("'rules' must be a mapping of rule id to settings")
    overrides: Dict[str, RuleOverride] = {}
    for rule_id, settings in raw.items():
        if settings is None:
            settings = {}
        if isinstance(settings, bool):
            settings = {"enabled": settings}
        if not isinstance(settings, Mapping):
            raise ConfigError(f"Settings for rule {rule_id!r} must be a mapping")
        severity = settings.get("severity")
        try:
            parsed = Severity.parse(severity) if severity is not None else None
        except ValueError as exc:
            raise ConfigError(f"Rule {rule_id!r}: {exc}") from exc
        overrides[str(rule_id)] = RuleOverride(
            enabled=_ensure_bool(settings.get("enabled", True), f"rules.{rule_id}.enabled"),
            severity=parsed,
        )
    return overrides


def _ensure_bool(value: object, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false")
    return value


def _ensure_workers(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError("'workers' must be a positive integer")
    return value


def _ensure_timeout(value: object) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError("'timeout' must be a positive number of seconds")
    return float(value)


def _ensure_string_list(value: object, key: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list of strings")
    return [str(item) for item in value]
