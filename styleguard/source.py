"""Tokenizer and queryable token model for Swift source files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Dict, List, Optional, Tuple

from .errors import ParseError


class TokenKind(str, Enum):
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    NUMBER = "number"
    STRING = "string"
    OPERATOR = "operator"
    PUNCTUATION = "punctuation"
    ATTRIBUTE = "attribute"
    DIRECTIVE = "directive"
    COMMENT = "comment"
    NEWLINE = "newline"
    ERROR = "error"


KEYWORDS = frozenset(
    {
        # declarations
        "associatedtype", "class", "deinit", "enum", "extension", "fileprivate", "func",
        "import", "init", "inout", "internal", "let", "open", "operator", "private",
        "precedencegroup", "protocol", "public", "rethrows", "static", "struct",
        "subscript", "typealias", "var", "actor",
        # statements
        "break", "case", "catch", "continue", "default", "defer", "do", "else",
        "fallthrough", "for", "guard", "if", "in", "repeat", "return", "throw",
        "switch", "where", "while",
        # expressions and types
        "Any", "as", "await", "false", "is", "nil", "self", "Self", "super", "throws",
        "true", "try",
        # contextual keywords the rules care about
        "get", "set", "willSet", "didSet", "lazy", "weak", "unowned", "mutating",
        "nonmutating", "override", "final", "required", "convenience", "dynamic",
        "indirect", "async",
    }
)

OPERATOR_CHARS = frozenset("/=-+!*%<>&|^~?.")
PUNCTUATION_CHARS = frozenset("()[]{},:;")
OPENERS = {"(": ")", "[": "]", "{": "}"}

NUMBER_PATTERN = re.compile(
    r"0x[0-9a-fA-F][0-9a-fA-F_]*(?:\.[0-9a-fA-F][0-9a-fA-F_]*)?(?:[pP][+-]?[0-9][0-9_]*)?"
    r"|0o[0-7][0-7_]*"
    r"|0b[01][01_]*"
    r"|[0-9][0-9_]*(?:\.[0-9][0-9_]*)?(?:[eE][+-]?[0-9][0-9_]*)?"
)
IDENTIFIER_PATTERN = re.compile(r"[^\W\d]\w*")
DOLLAR_IDENTIFIER_PATTERN = re.compile(r"\$\w+")
BACKTICK_IDENTIFIER_PATTERN = re.compile(r"`[^`\n]+`")


@dataclass(frozen=True)
class Token:
    """One lexeme with its 1-based position.

    ``spaced`` is true when whitespace, a line break or a comment separates the
    token from the one before it.
    """

    kind: TokenKind
    text: str
    line: int
    column: int
    spaced: bool = True

    def is_(self, kind: TokenKind, text: Optional[str] = None) -> bool:
        return self.kind is kind and (text is None or self.text == text)

    def is_punct(self, text: str) -> bool:
        return self.kind is TokenKind.PUNCTUATION and self.text == text

    def is_keyword(self, *texts: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.text in texts


@dataclass(frozen=True)
class SourceModel:
    """Immutable token stream for one file plus derived lookups."""

    path: str
    tokens: Tuple[Token, ...]

    @cached_property
    def significant(self) -> Tuple[Token, ...]:
        """Tokens with comments and line breaks removed."""

        return tuple(
            token for token in self.tokens if token.kind not in (TokenKind.COMMENT, TokenKind.NEWLINE)
        )

    @cached_property
    def comments(self) -> Tuple[Token, ...]:
        return tuple(token for token in self.tokens if token.kind is TokenKind.COMMENT)

    @cached_property
    def pairs(self) -> Dict[int, int]:
        """Map bracket indices in :attr:`significant` to their partner, both ways.

        Unbalanced brackets are left out.
        """

        pairs: Dict[int, int] = {}
        stack: List[int] = []
        for index, token in enumerate(self.significant):
            if token.kind is not TokenKind.PUNCTUATION:
                continue
            if token.text in OPENERS:
                stack.append(index)
            elif token.text in (")", "]", "}"):
                while stack:
                    opener = stack.pop()
                    if OPENERS[self.significant[opener].text] == token.text:
                        pairs[opener] = index
                        pairs[index] = opener
                        break
        return pairs

    @cached_property
    def enclosing_brace(self) -> Tuple[int, ...]:
        """For each significant token, the index of the innermost ``{`` around it, or -1."""

        parents: List[int] = []
        stack: List[int] = []
        pairs = self.pairs
        for index, token in enumerate(self.significant):
            if token.is_punct("}") and stack and pairs.get(index) == stack[-1]:
                stack.pop()
            parents.append(stack[-1] if stack else -1)
            if token.is_punct("{") and index in pairs:
                stack.append(index)
        return tuple(parents)


class _Lexer:
    def __init__(self, text: str) -> None:
        self.text = text
        self.length = len(text)
        self.pos = 0
        self.line = 1
        self.column = 1
        self.spaced = True
        self.tokens: List[Token] = []

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------
    def _position(self, index: int) -> Tuple[int, int]:
        segment = self.text[self.pos:index]
        breaks = segment.count("\n")
        if not breaks:
            return self.line, self.column + len(segment)
        return self.line + breaks, len(segment) - segment.rfind("\n")

    def _advance(self, end: int) -> str:
        lexeme = self.text[self.pos:end]
        self.line, self.column = self._position(end)
        self.pos = end
        return lexeme

    def _emit(self, kind: TokenKind, end: int) -> None:
        line, column = self.line, self.column
        lexeme = self._advance(end)
        self.tokens.append(Token(kind, lexeme, line, column, self.spaced))
        self.spaced = kind is TokenKind.COMMENT or kind is TokenKind.NEWLINE

    def _fail(self, message: str, index: int) -> ParseError:
        line, column = self._position(index)
        return ParseError(message, line, column)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self) -> List[Token]:
        text = self.text
        while self.pos < self.length:
            start = self.pos
            char = text[start]

            if char == "\n":
                self._emit(TokenKind.NEWLINE, start + 1)
            elif char in " \t\r\f\v\ufeff":
                self._advance(start + 1)
                self.spaced = True
            elif text.startswith("//", start):
                end = text.find("\n", start)
                self._emit(TokenKind.COMMENT, self.length if end == -1 else end)
            elif text.startswith("/*", start):
                self._emit(TokenKind.COMMENT, self._block_comment_end(start))
            elif self._is_string_start(start):
                self._emit(TokenKind.STRING, self._string_end(start))
            elif char == "#":
                self._lex_prefixed(start, TokenKind.DIRECTIVE)
            elif char == "@":
                self._lex_prefixed(start, TokenKind.ATTRIBUTE)
            elif char.isdigit():
                match = NUMBER_PATTERN.match(text, start)
                self._emit(TokenKind.NUMBER, match.end() if match else start + 1)
            elif char == "`":
                self._lex_pattern(start, BACKTICK_IDENTIFIER_PATTERN)
            elif char == "$":
                self._lex_pattern(start, DOLLAR_IDENTIFIER_PATTERN)
            elif char in PUNCTUATION_CHARS:
                self._emit(TokenKind.PUNCTUATION, start + 1)
            elif char == "\\":
                # key path root, as in \.name
                self._emit(TokenKind.OPERATOR, start + 1)
            elif char in OPERATOR_CHARS:
                end = self._operator_end(start)
                kind = TokenKind.PUNCTUATION if end - start == 1 and char == "." else TokenKind.OPERATOR
                self._emit(kind, end)
            else:
                self._lex_word(start)
        return self.tokens

    # ------------------------------------------------------------------
    # Lexeme scanners
    # ------------------------------------------------------------------
    def _lex_word(self, start: int) -> None:
        match = IDENTIFIER_PATTERN.match(self.text, start)
        if match is None:
            self._emit(TokenKind.ERROR, start + 1)
            return
        kind = TokenKind.KEYWORD if match.group() in KEYWORDS else TokenKind.IDENTIFIER
        self._emit(kind, match.end())

    def _lex_pattern(self, start: int, pattern: re.Pattern) -> None:
        match = pattern.match(self.text, start)
        if match:
            self._emit(TokenKind.IDENTIFIER, match.end())
        else:
            self._emit(TokenKind.ERROR, start + 1)

    def _lex_prefixed(self, start: int, kind: TokenKind) -> None:
        match = IDENTIFIER_PATTERN.match(self.text, start + 1)
        if match:
            self._emit(kind, match.end())
        else:
            self._emit(TokenKind.ERROR, start + 1)

    def _left_bound(self) -> bool:
        """True when the next lexeme touches the end of an operand."""

        if self.spaced or not self.tokens:
            return False
        last = self.tokens[-1]
        if last.kind in (TokenKind.IDENTIFIER, TokenKind.KEYWORD, TokenKind.NUMBER, TokenKind.STRING):
            return True
        if last.kind is TokenKind.PUNCTUATION:
            return last.text in (")", "]", "}")
        # postfix ! and ? chain, and > closes a generic argument list
        return last.kind is TokenKind.OPERATOR and (last.text in ("!", "?") or set(last.text) == {">"})

    def _operator_end(self, start: int) -> int:
        text = self.text
        postfix = self._left_bound()
        if postfix and text[start] in "!?" and not text.startswith(("!=", "??"), start):
            return start + 1
        allow_dot = text[start] == "."
        end = start + 1
        while end < self.length:
            char = text[end]
            if char not in OPERATOR_CHARS or (char == "." and not allow_dot):
                break
            if text.startswith("//", end) or text.startswith("/*", end):
                break
            if postfix and char in "!?" and set(text[start:end]) == {">"}:
                break
            end += 1
        return end

    def _block_comment_end(self, start: int) -> int:
        depth = 0
        index = start
        while index < self.length:
            if self.text.startswith("/*", index):
                depth += 1
                index += 2
            elif self.text.startswith("*/", index):
                depth -= 1
                index += 2
                if depth == 0:
                    return index
            else:
                index += 1
        raise self._fail("unterminated block comment", start)

    def _is_string_start(self, index: int) -> bool:
        while index < self.length and self.text[index] == "#":
            index += 1
        return index < self.length and self.text[index] == '"'

    def _string_end(self, start: int) -> int:
        text = self.text
        index = start
        hashes = 0
        while text[index] == "#":
            hashes += 1
            index += 1
        multiline = text.startswith('"""', index)
        quote = '"""' if multiline else '"'
        closing = quote + "#" * hashes
        escape = "\\" + "#" * hashes
        index += len(quote)

        while True:
            if index >= self.length:
                raise self._fail("unterminated string literal", start)
            if text.startswith(closing, index):
                return index + len(closing)
            char = text[index]
            if char == "\n" and not multiline:
                raise self._fail("unterminated string literal", start)
            if text.startswith(escape, index):
                index += len(escape)
                if index < self.length and text[index] == "(":
                    index = self._interpolation_end(index + 1, start)
                else:
                    index += 1
                continue
            index += 1

    def _interpolation_end(self, index: int, string_start: int) -> int:
        depth = 1
        while index < self.length:
            char = self.text[index]
            if self._is_string_start(index):
                index = self._string_end(index)
                continue
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0:
                    return index + 1
            index += 1
        raise self._fail("unterminated string interpolation", string_start)


def parse(text: str, path: str = "<string>") -> SourceModel:
    """Tokenize ``text`` into a :class:`SourceModel`.

    Unexpected characters become ``error`` tokens. Unterminated string
    literals, interpolations and block comments raise :class:`ParseError`.
    """

    return SourceModel(path=path, tokens=tuple(_Lexer(text).run()))
