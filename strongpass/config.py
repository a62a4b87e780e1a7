# strongpass/config.py
"""
Password policy configuration for StrongPass.

PasswordConfig holds the length bounds, the passphrase policy and the optional
rule threshold. Settings can be persisted as JSON in
%APPDATA%/StrongPass/config.json (Windows) or ~/.strongpass/config.json (fallback).
"""

import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .exc import ConfigError

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "allow_passphrases": True,
    "max_length": 128,
    "min_length": 10,
    "min_phrase_length": 20,
    "min_optional_tests_to_pass": 4,
}

# camelCase spelling used by JSON clients
_CAMEL_KEYS = {
    "allowPassphrases": "allow_passphrases",
    "maxLength": "max_length",
    "minLength": "min_length",
    "minPhraseLength": "min_phrase_length",
    "minOptionalTestsToPass": "min_optional_tests_to_pass",
}


def _check_int(name: str, value: Any, minimum: int) -> None:
    # bool is an int subclass, but True is never a sensible length
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {type(value).__name__}")
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")


@dataclass(frozen=True)
class PasswordConfig:
    allow_passphrases: bool = True
    max_length: int = 128
    min_length: int = 10
    min_phrase_length: int = 20
    min_optional_tests_to_pass: int = 4

    def __post_init__(self):
        if not isinstance(self.allow_passphrases, bool):
            raise ConfigError("allow_passphrases must be a boolean")
        _check_int("max_length", self.max_length, 1)
        _check_int("min_length", self.min_length, 1)
        _check_int("min_phrase_length", self.min_phrase_length, 0)
        _check_int("min_optional_tests_to_pass", self.min_optional_tests_to_pass, 0)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PasswordConfig":
        """
        Build a config from a mapping. Missing keys take their default value;
        camelCase keys (maxLength, ...) are accepted as well.
        """
        if data is not None and not isinstance(data, dict):
            raise ConfigError("configuration must be a mapping")
        values = DEFAULTS.copy()
        for key, value in (data or {}).items():
            field = _CAMEL_KEYS.get(key, key)
            if field not in DEFAULTS:
                raise ConfigError(f"unknown configuration key: {key!r}")
            values[field] = value
        return cls(**values)

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    def replace(self, **changes: Any) -> "PasswordConfig":
        """Return a copy with the given fields overridden (validated again)."""
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = PasswordConfig()


def check_consistency(config: PasswordConfig, optional_rule_count: int) -> List[str]:
    """
    Return warnings for settings that are valid one by one but contradict
    each other. These are reported, not rejected: the evaluator still runs
    and simply produces the verdict the settings imply.
    """
    warnings = []
    if config.min_length > config.max_length:
        warnings.append(
            f"min_length ({config.min_length}) is greater than max_length "
            f"({config.max_length}); no password can be strong"
        )
    if config.min_optional_tests_to_pass > optional_rule_count:
        warnings.append(
            f"min_optional_tests_to_pass ({config.min_optional_tests_to_pass}) exceeds "
            f"the number of optional rules ({optional_rule_count}); only passphrases can be strong"
        )
    return warnings


def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, "StrongPass")
    return os.path.join(os.path.expanduser("~"), ".strongpass")


def config_path() -> str:
    override = os.getenv("STRONGPASS_CONFIG")
    if override:
        return override
    return os.path.join(_appdata_dir(), "config.json")


def load_config_with_source(path: Optional[str] = None) -> Tuple[PasswordConfig, str]:
    """
    Like load_config, but also say where the values came from: the file path,
    "built-in defaults", or "built-in defaults (file unreadable)".
    """
    p = path or config_path()
    if not os.path.exists(p):
        return PasswordConfig(), "built-in defaults"
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("could not read settings from %s (%s); using defaults", p, e)
        return PasswordConfig(), "built-in defaults (file unreadable)"
    if not isinstance(data, dict):
        raise ConfigError(f"settings file {p} must contain a JSON object")
    return PasswordConfig.from_dict(data), p


def load_config(path: Optional[str] = None) -> PasswordConfig:
    """
    Read settings from `path` (default: config_path()) merged over DEFAULTS.
    A missing or unreadable file yields the defaults; invalid values raise ConfigError.
    """
    return load_config_with_source(path)[0]


def save_config(cfg: PasswordConfig, path: Optional[str] = None) -> str:
    p = path or config_path()
    d = os.path.dirname(p)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(cfg.as_dict(), f, ensure_ascii=False, indent=2)
    logger.debug("saved settings to %s", p)
    return p
