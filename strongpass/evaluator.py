"""
strongpass.evaluator

Password strength evaluation:
- run_tests(config, required, optional, password): run every rule, required
  tier first, and collect the per-rule outcomes into a fresh Report
- is_passphrase(config, password): passphrase exemption check
- finalize(report, config, password): fold the exemption and the optional
  threshold into the final verdict
- evaluate_password(password, config=None, rules=None): all of the above

The password is only read during the call; it is never stored in the Report
and never logged.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .config import DEFAULT_CONFIG, PasswordConfig
from .rules import DEFAULT_RULES, Rule, RuleSet

logger = logging.getLogger(__name__)


@dataclass
class Report:
    errors: List[str] = field(default_factory=list)
    failed_tests: List[int] = field(default_factory=list)
    passed_tests: List[int] = field(default_factory=list)
    required_test_errors: List[str] = field(default_factory=list)
    optional_test_errors: List[str] = field(default_factory=list)
    is_passphrase: bool = False
    strong: bool = True
    optional_tests_passed: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "errors": list(self.errors),
            "failedTests": list(self.failed_tests),
            "passedTests": list(self.passed_tests),
            "requiredTestErrors": list(self.required_test_errors),
            "optionalTestErrors": list(self.optional_test_errors),
            "isPassphrase": self.is_passphrase,
            "strong": self.strong,
            "optionalTestsPassed": self.optional_tests_passed,
        }

    def to_json(self) -> str:
        return json.dumps(self.as_dict())


def _run_rule(rule: Rule, index: int, config: PasswordConfig, password: str) -> Optional[str]:
    try:
        return rule.run(config, password)
    except Exception as e:
        # a broken rule counts as a failed rule; evaluation always completes
        logger.warning("rule %r (index %d) raised %s", rule.name, index, type(e).__name__)
        return str(e) or type(e).__name__


def run_tests(
    config: PasswordConfig,
    required: Sequence[Rule],
    optional: Sequence[Rule],
    password: str,
) -> Report:
    """
    Run every required rule, then every optional rule, in order. Nothing
    short-circuits so the report lists all failures. Optional indices are
    offset by len(required).
    """
    report = Report()

    for k, rule in enumerate(required):
        err = _run_rule(rule, k, config, password)
        if err is not None:
            report.strong = False
            report.errors.append(err)
            report.required_test_errors.append(err)
            report.failed_tests.append(k)
        else:
            report.passed_tests.append(k)

    # optional failures alone don't decide strength; see finalize()
    offset = len(required)
    for k, rule in enumerate(optional):
        err = _run_rule(rule, offset + k, config, password)
        if err is not None:
            report.errors.append(err)
            report.optional_test_errors.append(err)
            report.failed_tests.append(offset + k)
        else:
            report.optional_tests_passed += 1
            report.passed_tests.append(offset + k)

    return report


def is_passphrase(config: PasswordConfig, password: str) -> bool:
    return config.allow_passphrases and len(password) >= config.min_phrase_length


def finalize(report: Report, config: PasswordConfig, password: str) -> Report:
    """
    Apply the passphrase exemption, then require min_optional_tests_to_pass
    optional passes from anything that is not a passphrase. A required failure
    has already cleared `strong` and is never exempted.
    """
    report.is_passphrase = is_passphrase(config, password)
    if not report.is_passphrase and report.optional_tests_passed < config.min_optional_tests_to_pass:
        report.strong = False
    return report


def evaluate_password(
    password: str,
    config: Optional[PasswordConfig] = None,
    rules: Optional[RuleSet] = None,
) -> Report:
    """
    Evaluate `password` and return a new Report. Defaults are DEFAULT_CONFIG
    and the default rule set (3 required, 4 optional rules).
    """
    if config is None:
        config = DEFAULT_CONFIG
    if rules is None:
        rules = DEFAULT_RULES
    if not isinstance(config, PasswordConfig):
        raise TypeError(f"config must be a PasswordConfig, got {type(config).__name__}")
    if not isinstance(password, str):
        raise TypeError(f"password must be a str, got {type(password).__name__}")

    report = run_tests(config, rules.required, rules.optional, password)
    finalize(report, config, password)
    logger.debug(
        "evaluated password of length %d: strong=%s passphrase=%s optional_passed=%d/%d failed=%s",
        len(password),
        report.strong,
        report.is_passphrase,
        report.optional_tests_passed,
        len(rules.optional),
        report.failed_tests,
    )
    return report
