"""Exception types raised by the lint engine."""

from __future__ import annotations


class StyleguardError(Exception):
    """Base class for all styleguard errors."""


class ConfigError(StyleguardError, ValueError):
    """Configuration is missing, unreadable or invalid. Aborts the run."""


class NoInputError(StyleguardError):
    """No input files were resolved from the given paths."""


class ParseError(StyleguardError):
    """Unrecoverable lexical error in one source file."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"{message} at {line}:{column}")
        self.message = message
        self.line = line
        self.column = column
