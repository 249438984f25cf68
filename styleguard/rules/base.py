"""Rule and detection pattern definitions."""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple

from styleguard.errors import ConfigError
from styleguard.severity import Severity
from styleguard.source import Token, TokenKind

from .predicates import PREDICATES


@dataclass(frozen=True)
class TokenSpec:
    """Match one token by kind and, optionally, exact text or a full regex.

    Written as ``[^]kind[:text | ~regex]``. The ``^`` prefix requires the token
    to touch the previous one (no whitespace or line break between them).
    """

    kind: TokenKind
    text: Optional[str] = None
    regex: Optional[re.Pattern] = None
    attached: bool = False

    @classmethod
    def parse(cls, spec: str) -> "TokenSpec":
        if not isinstance(spec, str) or not spec.strip():
            raise ConfigError(f"Token spec must be a non-empty string, got {spec!r}")
        body = spec.strip()
        attached = body.startswith("^")
        if attached:
            body = body[1:]

        text: Optional[str] = None
        regex: Optional[re.Pattern] = None
        kind_name = body
        split_at = min((body.find(sep) for sep in ":~" if sep in body), default=-1)
        if split_at >= 0 and body[split_at] == ":":
            kind_name, text = body[:split_at], body[split_at + 1:]
            if not text:
                raise ConfigError(f"Token spec {spec!r} has an empty text constraint")
        elif split_at >= 0:
            kind_name, raw_regex = body[:split_at], body[split_at + 1:]
            if not raw_regex:
                raise ConfigError(f"Token spec {spec!r} has an empty regex")
            try:
                regex = re.compile(raw_regex)
            except re.error as exc:
                raise ConfigError(f"Token spec {spec!r} has an invalid regex: {exc}") from exc

        try:
            kind = TokenKind(kind_name.strip().lower())
        except ValueError:
            known = ", ".join(item.value for item in TokenKind)
            raise ConfigError(f"Token spec {spec!r} names unknown kind {kind_name!r} (known: {known})") from None
        if kind in (TokenKind.COMMENT, TokenKind.NEWLINE):
            raise ConfigError(f"Token spec {spec!r}: sequences only see significant tokens")
        return cls(kind=kind, text=text, regex=regex, attached=attached)

    def matches(self, token: Token) -> bool:
        if token.kind is not self.kind:
            return False
        if self.attached and token.spaced:
            return False
        if self.text is not None and token.text != self.text:
            return False
        if self.regex is not None and not self.regex.fullmatch(token.text):
            return False
        return True


@dataclass(frozen=True)
class Pattern:
    """Detection pattern: a token sequence or a named structural predicate."""

    sequence: Tuple[TokenSpec, ...] = ()
    predicate: Optional[str] = None

    @classmethod
    def of_sequence(cls, *specs: str) -> "Pattern":
        return cls.from_config({"sequence": list(specs)})

    @classmethod
    def of_predicate(cls, name: str) -> "Pattern":
        return cls.from_config({"predicate": name})

    @classmethod
    def from_config(cls, raw: Any) -> "Pattern":
        if not isinstance(raw, Mapping):
            raise ConfigError("'detect' must be a mapping with 'sequence' or 'predicate'")
        has_sequence = "sequence" in raw
        has_predicate = "predicate" in raw
        if has_sequence == has_predicate:
            raise ConfigError("'detect' needs exactly one of 'sequence' or 'predicate'")

        if has_predicate:
            name = str(raw["predicate"])
            if name not in PREDICATES:
                raise ConfigError(f"Unknown predicate {name!r}")
            return cls(predicate=name)

        specs = raw["sequence"]
        if isinstance(specs, str) or not isinstance(specs, Sequence) or not specs:
            raise ConfigError("'sequence' must be a non-empty list of token specs")
        return cls(sequence=tuple(TokenSpec.parse(spec) for spec in specs))


@dataclass(frozen=True)
class Rule:
    """One named, checkable convention."""

    id: str
    description: str
    severity: Severity
    pattern: Pattern

    def with_severity(self, severity: Optional[Severity]) -> "Rule":
        if severity is None or severity is self.severity:
            return self
        return dataclasses.replace(self, severity=severity)

    @classmethod
    def from_config(cls, raw: Any) -> "Rule":
        if not isinstance(raw, Mapping):
            raise ConfigError("Each custom rule entry must be a mapping")
        missing = [key for key in ("id", "description", "detect") if key not in raw]
        if missing:
            raise ConfigError(f"Custom rule is missing keys: {', '.join(missing)}")
        rule_id = str(raw["id"]).strip()
        if not rule_id:
            raise ConfigError("Custom rule id must not be empty")
        try:
            severity = Severity.parse(raw.get("severity", Severity.WARNING.value))
        except ValueError as exc:
            raise ConfigError(f"Rule {rule_id!r}: {exc}") from exc
        try:
            pattern = Pattern.from_config(raw["detect"])
        except ConfigError as exc:
            raise ConfigError(f"Rule {rule_id!r}: {exc}") from exc
        return cls(
            id=rule_id,
            description=str(raw["description"]),
            severity=severity,
            pattern=pattern,
        )
