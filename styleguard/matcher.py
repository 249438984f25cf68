"""Generic dispatcher that evaluates one rule's pattern against one source model."""

from __future__ import annotations

import logging
from typing import Iterator, List, Sequence

from .result import Finding, FindingKind
from .rules import PREDICATES, Rule, TokenSpec
from .rules.predicates import Hit
from .severity import Severity
from .source import SourceModel

logger = logging.getLogger("styleguard.matcher")


def match_sequence(specs: Sequence[TokenSpec], model: SourceModel, message: str) -> Iterator[Hit]:
    """Yield the first token of every place where ``specs`` match consecutive significant tokens."""

    toks = model.significant
    width = len(specs)
    for start in range(len(toks) - width + 1):
        if all(spec.matches(toks[start + offset]) for offset, spec in enumerate(specs)):
            yield toks[start], message


def apply(rule: Rule, model: SourceModel) -> List[Finding]:
    """Run ``rule`` over ``model``.

    Never raises: a failing matcher produces one ``matcher-fault`` finding so
    the other rules still report.
    """

    try:
        if rule.pattern.predicate is not None:
            hits = list(PREDICATES[rule.pattern.predicate](model))
        else:
            hits = list(match_sequence(rule.pattern.sequence, model, rule.description))
    except Exception as exc:
        logger.warning("Rule %s failed on %s: %s", rule.id, model.path, exc, exc_info=True)
        return [
            Finding(
                rule_id=rule.id,
                path=model.path,
                line=0,
                column=0,
                message=f"Internal error while checking rule '{rule.id}': {exc.__class__.__name__}: {exc}",
                severity=Severity.ERROR,
                kind=FindingKind.MATCHER_FAULT,
            )
        ]

    return [
        Finding(
            rule_id=rule.id,
            path=model.path,
            line=token.line,
            column=token.column,
            message=message,
            severity=rule.severity,
        )
        for token, message in hits
    ]
