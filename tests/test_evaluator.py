import pytest

from strongpass.config import PasswordConfig
from strongpass.evaluator import Report, evaluate_password, finalize, is_passphrase, run_tests
from strongpass.rules import DEFAULT_RULES, Rule, RuleSet, character_class, minimum_length

SAMPLES = [
    "",
    "Ab1!",
    "aaa1234567",
    "Tr0ub4dor&3",
    "Abcdefgh1234",
    "correcthorsebatterys",
    "Ab1!" * 40,
]


def test_end_to_end_strong_password():
    report = evaluate_password("Tr0ub4dor&3")
    assert report.strong
    assert not report.is_passphrase
    assert report.optional_tests_passed == 4
    assert report.passed_tests == [0, 1, 2, 3, 4, 5, 6]
    assert report.failed_tests == []
    assert report.errors == []


def test_short_password_fails_minimum_length_only():
    report = evaluate_password("Ab1!xyz")
    assert not report.strong
    assert report.required_test_errors == ["the password must be at least 10 characters long"]
    assert 0 in report.failed_tests


def test_long_password_fails_maximum_length():
    report = evaluate_password("Ab1!" * 40)
    assert not report.strong
    assert 1 in report.failed_tests
    assert "the password must be fewer than 128 characters" in report.required_test_errors


def test_required_rules_do_not_short_circuit():
    # too short and repeating: both required failures are reported
    report = evaluate_password("aaab")
    assert report.failed_tests[:2] == [0, 2]
    assert len(report.required_test_errors) == 2


def test_passphrase_exempts_optional_rules():
    report = evaluate_password("correcthorsebatterys")
    assert len("correcthorsebatterys") == 20
    assert report.is_passphrase
    assert report.strong
    assert report.optional_tests_passed == 1
    assert report.failed_tests == [4, 5, 6]
    assert len(report.optional_test_errors) == 3


def test_passphrase_never_exempts_required_rules():
    report = evaluate_password("correcthorsebatteeeery")
    assert report.is_passphrase
    assert not report.strong
    assert report.failed_tests[0] == 2


def test_passphrases_can_be_disabled():
    cfg = PasswordConfig(allow_passphrases=False)
    report = evaluate_password("correcthorsebatterys", cfg)
    assert not report.is_passphrase
    assert not report.strong


def test_optional_threshold():
    report = evaluate_password("Abcdefgh1234")
    assert report.optional_tests_passed == 3
    assert not report.is_passphrase
    assert not report.strong
    assert report.errors == ["the password must contain at least one special character"]

    relaxed = PasswordConfig().replace(min_optional_tests_to_pass=3)
    assert evaluate_password("Abcdefgh1234", relaxed).strong


def test_errors_are_ordered_required_first():
    report = evaluate_password("abc")
    assert report.errors == report.required_test_errors + report.optional_test_errors
    assert report.errors[0].startswith("the password must be at least")


def test_index_stability():
    n_req, n_opt = len(DEFAULT_RULES.required), len(DEFAULT_RULES.optional)
    for pw in SAMPLES:
        report = evaluate_password(pw)
        all_idx = report.failed_tests + report.passed_tests
        assert sorted(all_idx) == list(range(n_req + n_opt))
        opt_passed = [i for i in report.passed_tests if i >= n_req]
        assert len(opt_passed) == report.optional_tests_passed


def test_evaluation_is_idempotent():
    for pw in SAMPLES:
        assert evaluate_password(pw).as_dict() == evaluate_password(pw).as_dict()


def test_report_serialization_uses_wire_keys_and_omits_password():
    report = evaluate_password("Tr0ub4dor&3")
    d = report.as_dict()
    assert set(d) == {
        "errors", "failedTests", "passedTests", "requiredTestErrors",
        "optionalTestErrors", "isPassphrase", "strong", "optionalTestsPassed",
    }
    assert "Tr0ub4dor&3" not in report.to_json()


def test_broken_and_raising_rules_become_failures():
    def explode(config, password, params):
        raise RuntimeError("boom")

    rules = RuleSet(
        required=[Rule(minimum_length), Rule(explode)],
        optional=[character_class("[a-", "broken"), character_class("[0-9]", "number")],
    )
    report = evaluate_password("abcdefghij1", rules=rules)
    assert report.required_test_errors == ["boom"]
    assert report.failed_tests == [1, 2]
    assert report.passed_tests == [0, 3]
    assert report.optional_tests_passed == 1
    assert not report.strong


def test_inconsistent_config_still_produces_a_report():
    cfg = PasswordConfig(min_length=20, max_length=10)
    report = evaluate_password("Tr0ub4dor&3xyzw!Q9", cfg)
    assert not report.strong
    assert report.failed_tests[0] == 0


def test_run_tests_and_finalize_separately():
    cfg = PasswordConfig()
    report = run_tests(cfg, DEFAULT_RULES.required, DEFAULT_RULES.optional, "correcthorsebatterys")
    # optional shortfall is not decided until finalize
    assert report.strong
    assert not report.is_passphrase
    finalize(report, cfg, "correcthorsebatterys")
    assert report.strong and report.is_passphrase


def test_is_passphrase_boundary():
    cfg = PasswordConfig()
    assert is_passphrase(cfg, "x" * 20)
    assert not is_passphrase(cfg, "x" * 19)


def test_fresh_report_per_call():
    a = evaluate_password("abc")
    b = evaluate_password("Tr0ub4dor&3")
    assert a is not b
    assert b.errors == []
    assert Report().strong


def test_rejects_bad_config_type():
    with pytest.raises(TypeError):
        evaluate_password("Tr0ub4dor&3", config={"min_length": 3})
