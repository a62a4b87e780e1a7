"""StrongPass: rule-based password strength policy."""

from .config import DEFAULT_CONFIG, PasswordConfig, check_consistency, load_config, load_config_with_source, save_config
from .evaluator import Report, evaluate_password, finalize, is_passphrase, run_tests
from .exc import ConfigError
from .rules import (
    DEFAULT_RULES,
    Rule,
    RuleSet,
    at_least_one_of,
    character_class,
    default_optional_rules,
    default_required_rules,
    maximum_length,
    minimum_length,
    prevent_repeating,
)

__version__ = "0.1.0"
