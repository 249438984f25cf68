import pytest

from styleguard import rules
from styleguard.config import LintConfig, RuleOverride
from styleguard.errors import ConfigError
from styleguard.result import CONFIG_PATH, FindingKind
from styleguard.rules import BUILTIN_RULES, Pattern, Rule, RuleSet, TokenSpec
from styleguard.severity import Severity
from styleguard.source import TokenKind, parse


def test_load_returns_builtins_in_catalog_order():
    ruleset = rules.load()

    assert [rule.id for rule in ruleset] == [rule.id for rule in BUILTIN_RULES]
    assert ruleset.config_findings == ()


def test_load_is_idempotent():
    config = LintConfig(overrides={"no-semicolons": RuleOverride(severity=Severity.ERROR)})

    first = rules.load(config)
    second = rules.load(config)

    assert first.rules() == second.rules()
    assert first.get("no-semicolons").severity is Severity.ERROR


def test_overrides_disable_rules_and_report_unknown_ids():
    config = LintConfig(
        overrides={
            "prefer-let": RuleOverride(enabled=False),
            "does-not-exist": RuleOverride(severity=Severity.ERROR),
        }
    )

    ruleset = rules.load(config)

    assert ruleset.get("prefer-let") is None
    assert len(ruleset) == len(BUILTIN_RULES) - 1
    [warning] = ruleset.config_findings
    assert warning.kind is FindingKind.CONFIG
    assert warning.severity is Severity.WARNING
    assert warning.path == CONFIG_PATH
    assert warning.rule_id == "does-not-exist"


def test_duplicate_rule_ids_are_rejected():
    rule = BUILTIN_RULES[0]
    with pytest.raises(ConfigError, match="Duplicate rule id"):
        RuleSet([rule, rule])


def test_custom_rule_colliding_with_builtin_fails_even_if_disabled():
    config = LintConfig(
        overrides={"no-semicolons": RuleOverride(enabled=False)},
        custom_rules=(
            {"id": "no-semicolons", "description": "dup", "detect": {"sequence": ["punctuation:;"]}},
        ),
    )
    with pytest.raises(ConfigError):
        rules.load(config)


def test_custom_rule_from_config():
    rule = Rule.from_config(
        {
            "id": "no-print",
            "description": "Use a logger instead of print",
            "severity": "ERROR",
            "detect": {"sequence": ["identifier:print", "^punctuation:("]},
        }
    )

    assert rule.severity is Severity.ERROR
    assert rule.pattern.predicate is None
    assert rule.pattern.sequence[1] == TokenSpec(TokenKind.PUNCTUATION, text="(", attached=True)


@pytest.mark.parametrize(
    "detect",
    [
        {},
        {"sequence": []},
        {"sequence": "keyword:var"},
        {"sequence": ["keyword:var"], "predicate": "prefer-let"},
        {"predicate": "no-such-predicate"},
        {"sequence": ["widget:x"]},
        {"sequence": ["keyword:"]},
        {"sequence": ["identifier~("]},
        {"sequence": ["comment"]},
    ],
)
def test_malformed_patterns_raise_config_error(detect):
    with pytest.raises(ConfigError):
        Rule.from_config({"id": "bad", "description": "bad", "detect": detect})


def test_custom_rule_requires_keys_and_valid_severity():
    with pytest.raises(ConfigError, match="missing keys"):
        Rule.from_config({"id": "x"})
    with pytest.raises(ConfigError, match="Unknown severity"):
        Rule.from_config(
            {"id": "x", "description": "x", "severity": "fatal", "detect": {"sequence": ["keyword:var"]}}
        )


def test_token_spec_regex_and_attachment():
    spec = TokenSpec.parse("^identifier~[A-Z]+")
    model = parse("x.ABC y ABC Abc")
    toks = model.significant

    assert spec.regex is not None and spec.attached
    assert spec.matches(toks[2])
    assert not spec.matches(toks[4])  # spaced
    assert not TokenSpec.parse("identifier~[A-Z]+").matches(toks[5])


def test_pattern_helpers():
    assert Pattern.of_predicate("prefer-let").predicate == "prefer-let"
    assert Pattern.of_sequence("keyword:try", "^operator:!").sequence[0].text == "try"
