"""
strongpass.rules

Rules are plain callables `method(config, password, params) -> Optional[str]`:
None means the password passed, a string is the failure message.

- minimum_length / maximum_length: bounds taken from the PasswordConfig
- prevent_repeating: no run of three or more identical characters
- at_least_one_of(pattern, label): generic character-class check, reused for
  every optional rule with a different (pattern, label) pair
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Tuple

from .config import PasswordConfig

RuleMethod = Callable[[PasswordConfig, str, Sequence], Optional[str]]

MAX_REPEAT = 2


def minimum_length(config: PasswordConfig, password: str, params: Sequence = ()) -> Optional[str]:
    if len(password) < config.min_length:
        return f"the password must be at least {config.min_length} characters long"
    return None


def maximum_length(config: PasswordConfig, password: str, params: Sequence = ()) -> Optional[str]:
    if len(password) > config.max_length:
        return f"the password must be fewer than {config.max_length} characters"
    return None


def prevent_repeating(config: PasswordConfig, password: str, params: Sequence = ()) -> Optional[str]:
    longest, run = 1, 1
    for prev, cur in zip(password, password[1:]):
        if cur == prev:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    longest = max(longest, run)
    if longest > MAX_REPEAT:
        return "the password may not contain sequences of three or more repeated characters"
    return None


def at_least_one_of(config: PasswordConfig, password: str, params: Sequence) -> Optional[str]:
    """params: (regex pattern, human-readable label used in the message)."""
    if len(params) < 2:
        return f"at_least_one_of needs (pattern, label) parameters, got {len(params)}"
    pattern, label = params[0], params[1]
    try:
        regex = re.compile(str(pattern))
    except re.error as e:
        # a broken pattern is reported like any other failed rule
        return str(e)
    if regex.search(password) is None:
        return f"the password must contain at least one {label}"
    return None


@dataclass(frozen=True)
class Rule:
    method: RuleMethod
    params: Tuple = ()
    name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "params", tuple(self.params))
        if not self.name:
            object.__setattr__(self, "name", getattr(self.method, "__name__", "rule"))

    def run(self, config: PasswordConfig, password: str) -> Optional[str]:
        return self.method(config, password, self.params)


def character_class(pattern: str, label: str) -> Rule:
    """An optional rule requiring at least one character matching `pattern`."""
    return Rule(at_least_one_of, (pattern, label), name=label)


# A password *must* pass these in order to be considered strong.
def default_required_rules() -> Tuple[Rule, ...]:
    return (
        Rule(minimum_length),
        Rule(maximum_length),
        Rule(prevent_repeating),
    )


# Passphrases are exempt from these (when allowed); other passwords need only
# pass min_optional_tests_to_pass of them.
def default_optional_rules() -> Tuple[Rule, ...]:
    return (
        character_class("[a-z]", "lowercase letter"),
        character_class("[A-Z]", "uppercase letter"),
        character_class("[0-9]", "number"),
        character_class("[^A-Za-z0-9]", "special character"),
    )


@dataclass(frozen=True)
class RuleSet:
    required: Tuple[Rule, ...] = field(default_factory=default_required_rules)
    optional: Tuple[Rule, ...] = field(default_factory=default_optional_rules)

    def __post_init__(self):
        object.__setattr__(self, "required", tuple(self.required))
        object.__setattr__(self, "optional", tuple(self.optional))

    def __len__(self) -> int:
        return len(self.required) + len(self.optional)


DEFAULT_RULES = RuleSet()
