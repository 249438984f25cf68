import pytest

from styleguard.errors import ParseError
from styleguard.source import TokenKind, parse


def kinds_and_texts(model):
    return [(token.kind, token.text) for token in model.significant]


def test_parse_assigns_kinds_and_positions():
    model = parse("let x = 5\n", path="Sample.swift")

    assert model.path == "Sample.swift"
    assert kinds_and_texts(model) == [
        (TokenKind.KEYWORD, "let"),
        (TokenKind.IDENTIFIER, "x"),
        (TokenKind.OPERATOR, "="),
        (TokenKind.NUMBER, "5"),
    ]
    assert [(token.line, token.column) for token in model.significant] == [(1, 1), (1, 5), (1, 7), (1, 9)]
    assert model.tokens[-1].kind is TokenKind.NEWLINE


def test_nested_block_comments_are_a_single_comment():
    model = parse("/* outer /* inner */ still comment */ let x = 1")

    assert len(model.comments) == 1
    assert model.significant[0].is_keyword("let")


def test_string_literal_with_interpolation_is_one_token():
    model = parse('let s = "a \\(b + "c") d"')

    strings = [token for token in model.significant if token.kind is TokenKind.STRING]
    assert [token.text for token in strings] == ['"a \\(b + "c") d"']


def test_raw_and_multiline_strings():
    raw = parse('let r = #"say "hi" now"#')
    assert raw.significant[-1].kind is TokenKind.STRING
    assert raw.significant[-1].text == '#"say "hi" now"#'

    multiline = parse('let m = """\nfirst\nsecond\n"""\nlet y = 2\n')
    assert multiline.significant[3].kind is TokenKind.STRING
    assert multiline.significant[4].is_keyword("let")
    assert multiline.significant[4].line == 5


def test_operators_and_member_access():
    model = parse("a?.b\nfoo!.bar\nfor i in 0..<n {}\nx != y")

    texts = [token.text for token in model.significant]
    assert texts[:3] == ["a", "?", "."]
    assert model.significant[2].kind is TokenKind.PUNCTUATION
    assert "!" in texts and "..<" in texts and "!=" in texts
    bang = texts.index("!")
    assert model.significant[bang].spaced is False


def test_attributes_directives_and_key_paths():
    model = parse("@objc func f() { _ = #selector(g) }\nlet p = \\.name")

    kinds = {token.text: token.kind for token in model.significant}
    assert kinds["@objc"] is TokenKind.ATTRIBUTE
    assert kinds["#selector"] is TokenKind.DIRECTIVE
    assert kinds["\\"] is TokenKind.OPERATOR
    assert TokenKind.ERROR not in kinds.values()


def test_unexpected_character_becomes_error_token():
    model = parse("let a = 1 §")

    errors = [token for token in model.tokens if token.kind is TokenKind.ERROR]
    assert [(token.text, token.column) for token in errors] == [("§", 11)]


def test_unterminated_string_raises_parse_error():
    with pytest.raises(ParseError) as excinfo:
        parse('let s = "abc\nlet t = 1\n')

    assert excinfo.value.line == 1
    assert excinfo.value.column == 9
    assert "unterminated string literal" in str(excinfo.value)


def test_unterminated_block_comment_raises_parse_error():
    with pytest.raises(ParseError):
        parse("let a = 1\n/* never closed /* nested */\n")


def test_bracket_pairs_and_enclosing_braces():
    model = parse("func f(a: [Int]) {\n  g { x in x }\n}")
    toks = model.significant
    open_paren = [i for i, t in enumerate(toks) if t.is_punct("(")][0]
    close_paren = [i for i, t in enumerate(toks) if t.is_punct(")")][0]
    braces = [i for i, t in enumerate(toks) if t.is_punct("{")]

    assert model.pairs[open_paren] == close_paren
    assert model.pairs[close_paren] == open_paren
    x_index = [i for i, t in enumerate(toks) if t.text == "x"][0]
    assert model.enclosing_brace[x_index] == braces[1]
    assert model.enclosing_brace[braces[1]] == braces[0]
    assert model.enclosing_brace[0] == -1


def test_postfix_bang_and_question_mark_are_single_tokens():
    model = parse("let v = nested!!\nvar d: Dictionary<String, Int>!\nlet e = a?!.b\nif a!=b {}\n")

    lines = {}
    for token in model.significant:
        lines.setdefault(token.line, []).append(token.text)
    assert lines[1][-2:] == ["!", "!"]
    assert lines[2][-2:] == [">", "!"]
    assert lines[3][-4:] == ["?", "!", ".", "b"]
    assert "!=" in lines[4]
