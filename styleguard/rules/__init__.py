"""Rule registry: the configured, ordered set of rules for a run."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Tuple

from styleguard.config import LintConfig
from styleguard.errors import ConfigError
from styleguard.result import CONFIG_PATH, Finding, FindingKind
from styleguard.severity import Severity

from .base import Pattern, Rule, TokenSpec
from .catalog import BUILTIN_RULES
from .predicates import PREDICATES

logger = logging.getLogger("styleguard.rules")

__all__ = ["Pattern", "Rule", "RuleSet", "TokenSpec", "PREDICATES", "BUILTIN_RULES", "load"]


class RuleSet:
    """Ordered, read-only collection of rules with unique ids.

    ``config_findings`` carries warnings raised while applying the config
    (unknown rule ids) so they can be reported with the run.
    """

    def __init__(self, rules: Iterable[Rule], config_findings: Iterable[Finding] = ()) -> None:
        ordered: list[Rule] = []
        seen: set[str] = set()
        for rule in rules:
            if rule.id in seen:
                raise ConfigError(f"Duplicate rule id: {rule.id!r}")
            seen.add(rule.id)
            ordered.append(rule)
        self._rules: Tuple[Rule, ...] = tuple(ordered)
        self.config_findings: Tuple[Finding, ...] = tuple(config_findings)

    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def get(self, rule_id: str) -> Optional[Rule]:
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        return None

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({[rule.id for rule in self._rules]!r})"


def load(config: Optional[LintConfig] = None) -> RuleSet:
    """Build the RuleSet: built-ins in catalog order, then custom rules, with overrides applied."""

    config = config or LintConfig()
    candidates = list(BUILTIN_RULES)
    candidates.extend(Rule.from_config(raw) for raw in config.custom_rules)
    # validate uniqueness before any filtering so a disabled duplicate still fails
    RuleSet(candidates)

    known = {rule.id for rule in candidates}
    warnings = []
    for rule_id in config.overrides:
        if rule_id not in known:
            logger.warning("Config names unknown rule %r", rule_id)
            warnings.append(
                Finding(
                    rule_id=rule_id,
                    path=CONFIG_PATH,
                    line=0,
                    column=0,
                    message=f"Unknown rule id '{rule_id}' in configuration",
                    severity=Severity.WARNING,
                    kind=FindingKind.CONFIG,
                )
            )

    active = []
    for rule in candidates:
        override = config.overrides.get(rule.id)
        if override is None:
            active.append(rule)
        elif override.enabled:
            active.append(rule.with_severity(override.severity))
    logger.debug("Loaded %d active rules", len(active))
    return RuleSet(active, config_findings=warnings)
