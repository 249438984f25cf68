"""Structural predicates behind the built-in style rules.

Each predicate takes a :class:`~styleguard.source.SourceModel` and yields
``(token, message)`` hits. Predicates only look at significant tokens (no
comments or line breaks) and use bracket pairing from the model.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, Optional, Set, Tuple

from styleguard.source import SourceModel, Token, TokenKind

Hit = Tuple[Token, str]
Predicate = Callable[[SourceModel], Iterator[Hit]]

PREDICATES: Dict[str, Predicate] = {}

MODIFIERS = frozenset(
    {
        "private", "fileprivate", "internal", "public", "open", "static", "class", "final",
        "lazy", "weak", "unowned", "override", "mutating", "nonmutating", "required",
        "convenience", "dynamic", "indirect",
    }
)
ASSIGNMENT_OPERATORS = frozenset(
    {"=", "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "<<=", ">>=", "&+=", "&-=", "&*="}
)
MUTATING_METHODS = frozenset(
    {
        "append", "insert", "remove", "removeAll", "removeFirst", "removeLast", "removeSubrange",
        "removeValue", "popFirst", "popLast", "sort", "reverse", "shuffle", "swapAt", "merge",
        "updateValue", "formUnion", "formIntersection", "formSymmetricDifference", "subtract",
        "replaceSubrange", "toggle", "negate", "reserveCapacity",
    }
)
ACCESSOR_KEYWORDS = frozenset({"get", "set", "willSet", "didSet"})
FUNCTION_HEADS = frozenset({"func", "init", "deinit", "subscript"})
TYPE_HEADS = frozenset({"class", "struct", "enum", "extension", "protocol", "actor"})
CONTROL_HEADS = frozenset({"if", "guard", "while", "for", "switch", "catch", "do", "repeat", "defer", "else"})
PROPERTY_HEADS = frozenset({"var", "let"})
HEAD_KEYWORDS = FUNCTION_HEADS | TYPE_HEADS | CONTROL_HEADS | PROPERTY_HEADS | ACCESSOR_KEYWORDS
BLOCK_KEYWORDS = frozenset({"else", "do", "repeat", "defer", "catch"})
EXPRESSION_KEYWORDS = frozenset({"return", "in", "throw", "try", "await"})
TYPE_DECLARATIONS = frozenset({"class", "struct", "enum", "protocol", "typealias", "actor", "associatedtype"})
SELECTOR_DIRECTIVES = frozenset({"#selector", "#keyPath"})
MEMBER_KINDS = (TokenKind.IDENTIFIER, TokenKind.NUMBER)

UPPER_CAMEL_CASE = re.compile(r"_?[A-Z][A-Za-z0-9]*")
LOWER_CAMEL_CASE = re.compile(r"_*[a-z][A-Za-z0-9]*")


def predicate(name: str) -> Callable[[Predicate], Predicate]:
    """Register a predicate under ``name`` for use in detection patterns."""

    def register(func: Predicate) -> Predicate:
        PREDICATES[name] = func
        return func

    return register


class BraceKind(str, Enum):
    CLOSURE = "closure"
    FUNCTION = "function"
    ACCESSORS = "accessors"
    TYPE = "type"
    CONTROL = "control"


@dataclass(frozen=True)
class BraceInfo:
    kind: BraceKind
    head: Optional[str]
    head_start: int


def _bare(name: str) -> str:
    return name.strip("`")


def _continues(earlier: Token, later: Token) -> bool:
    """Return True when a line break between two tokens does not end a statement."""

    if later.kind is TokenKind.OPERATOR:
        return True
    if later.kind is TokenKind.PUNCTUATION and later.text in (".", ":", "{"):
        return True
    if earlier.kind is TokenKind.OPERATOR:
        return True
    return earlier.kind is TokenKind.PUNCTUATION and earlier.text in ("(", "[", ",", ":")


def statement_start(model: SourceModel, index: int) -> int:
    """Index of the first token of the statement that ``index`` belongs to."""

    toks = model.significant
    pairs = model.pairs
    start = index
    j = index - 1
    while j >= 0:
        tok = toks[j]
        # matched closers are skipped whole, so any opener reached here encloses ``index``
        if tok.kind is TokenKind.PUNCTUATION and tok.text in ("{", "}", ";", "(", "["):
            break
        if tok.line < toks[start].line and not _continues(tok, toks[start]):
            break
        if tok.kind is TokenKind.PUNCTUATION and tok.text in (")", "]") and j in pairs:
            j = pairs[j]
        start = j
        j -= 1
    return start


def _head_keyword(model: SourceModel, start: int, end: int) -> Tuple[Optional[str], bool]:
    """First head keyword in ``[start, end)`` and whether an ``=`` follows it."""

    toks = model.significant
    head: Optional[str] = None
    assigned = False
    for j in range(start, end):
        tok = toks[j]
        if head is None and tok.kind is TokenKind.KEYWORD and tok.text in HEAD_KEYWORDS:
            if tok.text == "class" and j + 1 < end and toks[j + 1].kind is not TokenKind.IDENTIFIER:
                continue
            head = tok.text
        elif head is not None and tok.is_(TokenKind.OPERATOR, "="):
            assigned = True
    return head, assigned


def classify_brace(model: SourceModel, index: int) -> BraceInfo:
    """Decide whether the ``{`` at ``index`` opens a closure or a declaration/control body."""

    toks = model.significant
    prev = toks[index - 1] if index > 0 else None
    nxt = toks[index + 1] if index + 1 < len(toks) else None

    if nxt is not None and nxt.kind is TokenKind.KEYWORD and nxt.text in ACCESSOR_KEYWORDS:
        return BraceInfo(BraceKind.ACCESSORS, None, index)
    if prev is None:
        return BraceInfo(BraceKind.CONTROL, None, index)
    if prev.kind is TokenKind.KEYWORD:
        if prev.text in ACCESSOR_KEYWORDS or prev.text == "deinit":
            return BraceInfo(BraceKind.FUNCTION, prev.text, index - 1)
        if prev.text in BLOCK_KEYWORDS:
            return BraceInfo(BraceKind.CONTROL, prev.text, index - 1)
        if prev.text in EXPRESSION_KEYWORDS:
            return BraceInfo(BraceKind.CLOSURE, None, index)
    elif prev.kind is TokenKind.PUNCTUATION and prev.text not in (")", "]"):
        return BraceInfo(BraceKind.CLOSURE, None, index)
    elif prev.kind is TokenKind.OPERATOR and not (_closes_generic(prev) or prev.text in ("?", "!")):
        return BraceInfo(BraceKind.CLOSURE, None, index)

    start = statement_start(model, index)
    head, assigned = _head_keyword(model, start, index)
    if head in FUNCTION_HEADS or head in ACCESSOR_KEYWORDS:
        return BraceInfo(BraceKind.FUNCTION, head, start)
    if head in TYPE_HEADS:
        return BraceInfo(BraceKind.TYPE, head, start)
    if head in CONTROL_HEADS:
        return BraceInfo(BraceKind.CONTROL, head, start)
    if head == "var" and not assigned:
        # computed property body
        return BraceInfo(BraceKind.FUNCTION, head, start)
    return BraceInfo(BraceKind.CLOSURE, head, start)


def classify_braces(model: SourceModel) -> Dict[int, BraceInfo]:
    return {
        index: classify_brace(model, index)
        for index, token in enumerate(model.significant)
        if token.is_punct("{")
    }


def _function_scope(model: SourceModel, index: int, braces: Dict[int, BraceInfo]) -> Optional[int]:
    """Innermost function-like brace around ``index`` with no closure in between."""

    parents = model.enclosing_brace
    brace = parents[index]
    while brace != -1:
        info = braces.get(brace)
        if info is None or info.kind in (BraceKind.CLOSURE, BraceKind.TYPE):
            return None
        if info.kind is BraceKind.FUNCTION:
            return brace
        brace = parents[brace]
    return None


def _bound_names(model: SourceModel, index: int) -> Set[str]:
    toks = model.significant
    if index >= len(toks):
        return set()
    tok = toks[index]
    if tok.kind is TokenKind.IDENTIFIER:
        return {_bare(tok.text)}
    if tok.is_punct("(") and index in model.pairs:
        return {
            _bare(inner.text)
            for inner in toks[index + 1:model.pairs[index]]
            if inner.kind is TokenKind.IDENTIFIER
        }
    return set()


def _scope_names(model: SourceModel, brace: int, info: BraceInfo) -> Set[str]:
    """Parameter and local names visible in the function body opened at ``brace``."""

    toks = model.significant
    pairs = model.pairs
    names = {"newValue", "oldValue"}

    j = info.head_start
    while j < brace:
        if toks[j].is_punct("(") and j in pairs:
            names.update(
                _bare(tok.text) for tok in toks[j + 1:pairs[j]] if tok.kind is TokenKind.IDENTIFIER
            )
            j = pairs[j]
        j += 1

    end = pairs.get(brace, len(toks))
    for j in range(brace + 1, end):
        if toks[j].is_keyword("let", "var", "for"):
            names.update(_bound_names(model, j + 1))
    return names


def _declaration_modifiers(model: SourceModel, index: int) -> Tuple[Set[str], bool]:
    """Modifiers before the declaration keyword at ``index`` and whether it is attributed."""

    toks = model.significant
    modifiers: Set[str] = set()
    attributed = False
    j = index - 1
    while j >= 0:
        tok = toks[j]
        if tok.kind is TokenKind.KEYWORD and tok.text in MODIFIERS:
            modifiers.add(tok.text)
        elif tok.kind is TokenKind.ATTRIBUTE:
            attributed = True
        elif tok.is_punct(")") and j in model.pairs and model.pairs[j] > 0 and (
            toks[model.pairs[j] - 1].kind is TokenKind.ATTRIBUTE
            or toks[model.pairs[j] - 1].is_keyword(*MODIFIERS)
        ):
            # @Attribute(args) or private(set)
            j = model.pairs[j]
        else:
            break
        j -= 1
    return modifiers, attributed


def _has_accessor_block(model: SourceModel, start: int, line: int) -> bool:
    toks = model.significant
    pairs = model.pairs
    assigned = False
    j = start
    while j < len(toks) and toks[j].line == line:
        tok = toks[j]
        if tok.is_punct("{"):
            nxt = toks[j + 1] if j + 1 < len(toks) else None
            if not assigned or (nxt is not None and nxt.is_keyword("willSet", "didSet")):
                return True
            if j not in pairs:
                return False
            j = pairs[j] + 1
            continue
        if tok.is_(TokenKind.OPERATOR, "="):
            assigned = True
        elif tok.is_punct(";") or tok.is_punct("}"):
            break
        j += 1
    return False


def _is_mutated(model: SourceModel, name: str, start: int) -> bool:
    toks = model.significant
    pairs = model.pairs
    count = len(toks)
    for j in range(start, count):
        tok = toks[j]
        if tok.kind is not TokenKind.IDENTIFIER or _bare(tok.text) != name:
            continue
        prev = toks[j - 1] if j > 0 else None
        if prev is not None and prev.is_keyword("let", "var"):
            continue
        if prev is not None and prev.is_(TokenKind.OPERATOR, "&") and not tok.spaced:
            return True
        if prev is not None and prev.is_punct(".") and not (j > 1 and toks[j - 2].is_keyword("self")):
            continue

        k = j + 1
        while k < count:
            current = toks[k]
            if current.is_punct("[") and not current.spaced and k in pairs:
                k = pairs[k] + 1
            elif current.is_(TokenKind.OPERATOR) and current.text in ("?", "!") and not current.spaced:
                k += 1
            elif current.is_punct(".") and k + 1 < count and toks[k + 1].kind in MEMBER_KINDS:
                member = toks[k + 1].text
                if member in MUTATING_METHODS and k + 2 < count and toks[k + 2].is_punct("("):
                    return True
                k += 2
            else:
                break
        if k < count and toks[k].kind is TokenKind.OPERATOR and toks[k].text in ASSIGNMENT_OPERATORS:
            return True
    return False


@predicate("prefer-let")
def prefer_let(model: SourceModel) -> Iterator[Hit]:
    toks = model.significant
    for index, tok in enumerate(toks):
        if not tok.is_keyword("var") or index + 1 >= len(toks):
            continue
        name_token = toks[index + 1]
        if name_token.kind is not TokenKind.IDENTIFIER:
            continue
        modifiers, attributed = _declaration_modifiers(model, index)
        if attributed or modifiers & {"lazy", "weak"}:
            continue
        if _has_accessor_block(model, index + 2, tok.line):
            continue
        name = _bare(name_token.text)
        if not _is_mutated(model, name, index + 2):
            yield tok, f"Variable '{name}' is never mutated; declare it with 'let'"


def _closes_generic(tok: Token) -> bool:
    return tok.kind is TokenKind.OPERATOR and set(tok.text) == {">"}


def _generic_start(model: SourceModel, index: int) -> Optional[int]:
    """Index of the ``<`` that opens the generic argument list closed at ``index``."""

    toks = model.significant
    depth = 0
    j = index
    while j >= 0:
        tok = toks[j]
        if _closes_generic(tok):
            depth += len(tok.text)
        elif tok.is_(TokenKind.OPERATOR, "<"):
            depth -= 1
            if depth == 0:
                return j
        elif tok.kind is TokenKind.PUNCTUATION and tok.text in (")", "]") and j in model.pairs:
            j = model.pairs[j]
        elif tok.kind is TokenKind.PUNCTUATION and tok.text in ("(", "[", "{", "}", ";"):
            return None
        j -= 1
    return None


def _type_start(model: SourceModel, index: int) -> Optional[int]:
    """First index of the type ending at ``index``, or None when it cannot be a type."""

    toks = model.significant
    tok = toks[index]
    if tok.kind is TokenKind.PUNCTUATION and tok.text in (")", "]"):
        return model.pairs.get(index)
    if _closes_generic(tok):
        opener = _generic_start(model, index)
        if opener is None or opener == 0:
            return None
        index = opener - 1
        tok = toks[index]
    if tok.kind is not TokenKind.IDENTIFIER or not _bare(tok.text)[:1].isupper():
        return None
    while index > 1 and toks[index - 1].is_punct(".") and toks[index - 2].kind is TokenKind.IDENTIFIER:
        index -= 2
    return index


def _enclosing_paren(model: SourceModel, index: int) -> Optional[int]:
    toks = model.significant
    j = index - 1
    while j >= 0:
        tok = toks[j]
        if tok.kind is TokenKind.PUNCTUATION:
            if tok.text in (")", "]") and j in model.pairs:
                j = model.pairs[j] - 1
                continue
            if tok.text == "(":
                return j
            if tok.text in ("[", "{", "}", ";"):
                return None
        j -= 1
    return None


def _is_declaration_colon(model: SourceModel, index: int) -> bool:
    """True for the ``:`` of ``let``/``var`` declarations and declared parameters."""

    toks = model.significant
    if index < 1 or toks[index - 1].kind is not TokenKind.IDENTIFIER:
        return False
    if index >= 2 and toks[index - 2].is_keyword("let", "var"):
        return True
    opener = _enclosing_paren(model, index)
    if opener is None or opener == 0:
        return False
    head = opener - 1
    if toks[head].kind is TokenKind.OPERATOR and toks[head].text in ("?", "!") and head > 0:
        head -= 1  # init? and init!
    if _closes_generic(toks[head]):
        generic = _generic_start(model, head)
        if generic is None or generic == 0:
            return False
        head = generic - 1
    if toks[head].is_keyword("init", "subscript") or toks[head].is_punct("{"):
        return True
    return (
        toks[head].kind is TokenKind.IDENTIFIER
        and head > 0
        and toks[head - 1].is_keyword("func", "case")
    )


def _is_type_annotation(model: SourceModel, index: int) -> bool:
    """True when the tokens ending at ``index`` form a declared type after ``:`` or ``->``."""

    start = _type_start(model, index)
    if start is None or start == 0:
        return False
    anchor = model.significant[start - 1]
    if anchor.is_(TokenKind.OPERATOR, "->"):
        return True
    return anchor.is_punct(":") and _is_declaration_colon(model, start - 1)


def _postfix_bangs(model: SourceModel) -> Iterator[Tuple[int, bool]]:
    """Yield ``(index, is_type)`` for every postfix ``!`` operator."""

    toks = model.significant
    for index, tok in enumerate(toks):
        if index == 0 or not tok.is_(TokenKind.OPERATOR, "!") or tok.spaced:
            continue
        prev = toks[index - 1]
        operand = (
            prev.kind is TokenKind.IDENTIFIER
            or prev.is_punct(")")
            or prev.is_punct("]")
            or (not prev.spaced and _closes_generic(prev))
            or (not prev.spaced and prev.kind is TokenKind.OPERATOR and prev.text in ("!", "?"))
        )
        if operand:
            yield index, _is_type_annotation(model, index - 1)


@predicate("force-unwrap")
def force_unwrap(model: SourceModel) -> Iterator[Hit]:
    toks = model.significant
    for index, is_type in _postfix_bangs(model):
        if is_type:
            continue
        operand = toks[index - 1].text
        subject = f"'{operand}!'" if toks[index - 1].kind is TokenKind.IDENTIFIER else "this expression"
        yield toks[index], f"Force unwrapping {subject}; use optional binding, optional chaining or '??'"


@predicate("implicitly-unwrapped-optional")
def implicitly_unwrapped_optional(model: SourceModel) -> Iterator[Hit]:
    toks = model.significant
    for index, is_type in _postfix_bangs(model):
        if is_type:
            start = _type_start(model, index - 1)
            spelled = "".join(token.text for token in toks[start:index])
            yield toks[index], f"Implicitly unwrapped optional '{spelled}!'; use a regular optional"


def _declares(model: SourceModel, brace: int) -> bool:
    start = statement_start(model, brace)
    head, _ = _head_keyword(model, start, brace)
    return head is not None


@predicate("opening-brace-same-line")
def opening_brace_same_line(model: SourceModel) -> Iterator[Hit]:
    toks = model.significant
    for index, tok in enumerate(toks):
        if index == 0 or not tok.is_punct("{"):
            continue
        prev = toks[index - 1]
        if prev.line >= tok.line:
            continue
        owned = (
            prev.kind is TokenKind.IDENTIFIER
            or prev.is_punct(")")
            or _closes_generic(prev)
            or (prev.kind is TokenKind.KEYWORD and prev.text not in EXPRESSION_KEYWORDS)
        )
        suffix = prev.is_punct("]") or (prev.kind is TokenKind.OPERATOR and prev.text in ("?", "!"))
        if not owned and suffix:
            # [Int], Int? and Int! end a declaration only after a head keyword
            owned = _declares(model, index)
        if owned:
            yield tok, "Opening brace should be on the same line as the statement it belongs to"


def _is_label_list(toks: Tuple[Token, ...]) -> bool:
    """True for the inside of ``(label:label:)`` compound names."""

    if not toks or len(toks) % 2:
        return False
    return all(
        tok.kind is TokenKind.IDENTIFIER if position % 2 == 0 else tok.is_punct(":")
        for position, tok in enumerate(toks)
    )


def _exempt_colons(model: SourceModel) -> Set[int]:
    """Indices inside selectors, attribute arguments and compound names, where colons are unspaced."""

    toks = model.significant
    inside: Set[int] = set()
    for opener, tok in enumerate(toks):
        if not tok.is_punct("(") or opener not in model.pairs or opener == 0:
            continue
        closer = model.pairs[opener]
        prev = toks[opener - 1]
        selector = prev.kind is TokenKind.DIRECTIVE and prev.text in SELECTOR_DIRECTIVES
        attribute = prev.kind is TokenKind.ATTRIBUTE and not tok.spaced
        if selector or attribute or _is_label_list(toks[opener + 1:closer]):
            inside.update(range(opener, closer))
    return inside


def _is_ternary_colon(model: SourceModel, index: int) -> bool:
    toks = model.significant
    pairs = model.pairs
    pending = 0
    later = index
    j = index - 1
    while j >= 0:
        tok = toks[j]
        if tok.line < toks[later].line and not _continues(tok, toks[later]):
            return False
        if tok.kind is TokenKind.PUNCTUATION:
            if tok.text in (")", "]", "}"):
                if j not in pairs:
                    return False
                later = pairs[j]
                j = pairs[j] - 1
                continue
            if tok.text in ("(", "[", "{", ";"):
                return False
            if tok.text == ":":
                pending += 1
        elif tok.is_(TokenKind.OPERATOR, "?") and tok.spaced:
            if pending == 0:
                return True
            pending -= 1
        later = j
        j -= 1
    return False


@predicate("colon-spacing")
def colon_spacing(model: SourceModel) -> Iterator[Hit]:
    toks = model.significant
    exempt = _exempt_colons(model)
    for index, tok in enumerate(toks):
        if not tok.is_punct(":") or index == 0 or index in exempt:
            continue
        if _is_ternary_colon(model, index):
            continue
        if tok.spaced and toks[index - 1].line == tok.line:
            yield tok, "Colon should have no space before it"
            continue
        nxt = toks[index + 1] if index + 1 < len(toks) else None
        if nxt is not None and not nxt.spaced and not (nxt.is_punct("]") or nxt.is_punct(")")):
            yield tok, "Colon should be followed by a single space"


@predicate("redundant-self")
def redundant_self(model: SourceModel) -> Iterator[Hit]:
    toks = model.significant
    braces = classify_braces(model)
    scope_names: Dict[int, Set[str]] = {}
    for index, tok in enumerate(toks):
        if not tok.is_keyword("self") or index + 2 >= len(toks):
            continue
        if index > 0 and (toks[index - 1].is_punct(".") or toks[index - 1].is_(TokenKind.OPERATOR, "\\")):
            continue
        dot, member = toks[index + 1], toks[index + 2]
        if not dot.is_punct(".") or member.kind is not TokenKind.IDENTIFIER:
            continue
        scope = _function_scope(model, index, braces)
        if scope is None:
            continue
        if scope not in scope_names:
            scope_names[scope] = _scope_names(model, scope, braces[scope])
        if _bare(member.text) in scope_names[scope]:
            continue
        yield tok, f"Explicit 'self.' is not needed to access '{member.text}'"


@predicate("explicit-getter")
def explicit_getter(model: SourceModel) -> Iterator[Hit]:
    toks = model.significant
    pairs = model.pairs
    for index, tok in enumerate(toks):
        if not tok.is_keyword("get") or index == 0 or index + 1 >= len(toks):
            continue
        outer = index - 1
        if not toks[outer].is_punct("{") or not toks[index + 1].is_punct("{") or outer not in pairs:
            continue
        has_setter = False
        j = outer + 1
        while j < pairs[outer]:
            current = toks[j]
            if current.is_keyword("set") or current.is_(TokenKind.IDENTIFIER, "_modify"):
                has_setter = True
                break
            j = pairs[j] + 1 if current.is_punct("{") and j in pairs else j + 1
        if not has_setter:
            yield tok, "Read-only computed property should omit the 'get' block"


@predicate("type-name-case")
def type_name_case(model: SourceModel) -> Iterator[Hit]:
    toks = model.significant
    for index, tok in enumerate(toks[:-1]):
        if tok.kind is not TokenKind.KEYWORD or tok.text not in TYPE_DECLARATIONS:
            continue
        name = toks[index + 1]
        if name.kind is not TokenKind.IDENTIFIER:
            continue
        if not UPPER_CAMEL_CASE.fullmatch(_bare(name.text)):
            yield name, f"Type name '{_bare(name.text)}' should be UpperCamelCase"


def _enum_case_names(model: SourceModel, index: int) -> Iterator[Token]:
    """Case names declared by the ``case`` keyword at ``index``."""

    toks = model.significant
    pairs = model.pairs
    count = len(toks)
    j = index + 1
    while j < count and toks[j].kind is TokenKind.IDENTIFIER:
        yield toks[j]
        line = toks[j].line
        j += 1
        # skip associated values and the raw value up to the next comma
        while j < count and toks[j].line == line and not toks[j].is_punct(","):
            tok = toks[j]
            if tok.kind is TokenKind.PUNCTUATION and tok.text in (";", "{", "}"):
                return
            if tok.kind is TokenKind.PUNCTUATION and tok.text in ("(", "[") and j in pairs:
                j = pairs[j]
                line = toks[j].line
            j += 1
        if j >= count or not toks[j].is_punct(","):
            return
        j += 1


@predicate("member-name-case")
def member_name_case(model: SourceModel) -> Iterator[Hit]:
    toks = model.significant
    braces: Optional[Dict[int, BraceInfo]] = None
    for index, tok in enumerate(toks[:-1]):
        if tok.is_keyword("func", "let", "var"):
            names = [toks[index + 1]] if toks[index + 1].kind is TokenKind.IDENTIFIER else []
        elif tok.is_keyword("case"):
            if braces is None:
                braces = classify_braces(model)
            parent = model.enclosing_brace[index]
            if parent == -1 or braces[parent].head != "enum":
                continue
            names = list(_enum_case_names(model, index))
        else:
            continue
        for name in names:
            bare = _bare(name.text)
            if bare == "_" or LOWER_CAMEL_CASE.fullmatch(bare):
                continue
            yield name, f"Name '{bare}' should be lowerCamelCase"
