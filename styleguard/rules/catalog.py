"""Built-in rules derived from the Swift style guide."""

from __future__ import annotations

from typing import Tuple

from styleguard.severity import Severity

from .base import Pattern, Rule

BUILTIN_RULES: Tuple[Rule, ...] = (
    Rule(
        id="prefer-let",
        description="Declare values that are never mutated with 'let' instead of 'var'",
        severity=Severity.WARNING,
        pattern=Pattern.of_predicate("prefer-let"),
    ),
    Rule(
        id="no-force-unwrap",
        description="Avoid force unwrapping optionals",
        severity=Severity.ERROR,
        pattern=Pattern.of_predicate("force-unwrap"),
    ),
    Rule(
        id="no-force-try",
        description="Avoid 'try!'; handle or propagate the error",
        severity=Severity.ERROR,
        pattern=Pattern.of_sequence("keyword:try", "^operator:!"),
    ),
    Rule(
        id="no-force-cast",
        description="Avoid 'as!'; use 'as?' with optional binding",
        severity=Severity.WARNING,
        pattern=Pattern.of_sequence("keyword:as", "^operator:!"),
    ),
    Rule(
        id="no-implicitly-unwrapped-optional",
        description="Prefer regular optionals over implicitly unwrapped optionals",
        severity=Severity.WARNING,
        pattern=Pattern.of_predicate("implicitly-unwrapped-optional"),
    ),
    Rule(
        id="opening-brace-same-line",
        description="Opening braces go on the same line as their statement",
        severity=Severity.WARNING,
        pattern=Pattern.of_predicate("opening-brace-same-line"),
    ),
    Rule(
        id="redundant-self",
        description="Only use explicit 'self' where the compiler requires it",
        severity=Severity.WARNING,
        pattern=Pattern.of_predicate("redundant-self"),
    ),
    Rule(
        id="explicit-getter",
        description="Read-only computed properties omit the 'get' block",
        severity=Severity.WARNING,
        pattern=Pattern.of_predicate("explicit-getter"),
    ),
    Rule(
        id="no-semicolons",
        description="Do not use semicolons to terminate or join statements",
        severity=Severity.WARNING,
        pattern=Pattern.of_sequence("punctuation:;"),
    ),
    Rule(
        id="type-name-case",
        description="Type names are UpperCamelCase",
        severity=Severity.ERROR,
        pattern=Pattern.of_predicate("type-name-case"),
    ),
    Rule(
        id="member-name-case",
        description="Functions, properties, variables and enum cases are lowerCamelCase",
        severity=Severity.WARNING,
        pattern=Pattern.of_predicate("member-name-case"),
    ),
    Rule(
        id="colon-spacing",
        description="Colons have no space before and one space after",
        severity=Severity.WARNING,
        pattern=Pattern.of_predicate("colon-spacing"),
    ),
    Rule(
        id="invalid-character",
        description="Unexpected character in source",
        severity=Severity.ERROR,
        pattern=Pattern.of_sequence("error"),
    ),
)
