import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from monkey.monkey_constants import keywords
from monkey.monkey_lexer import CharacterStream, Lexer, Token, tokenize


def kinds(source: str) -> list[str]:
    return [tok.kind for tok in tokenize(source)]


def test_single_char_tokens() -> None:
    code = "= + - * / < > ! , ; : . ( ) { } [ ]"
    expected = [
        "ASSIGN",
        "PLUS",
        "MINUS",
        "ASTERISK",
        "SLASH",
        "LT",
        "GT",
        "BANG",
        "COMMA",
        "SEMICOLON",
        "COLON",
        "DOT",
        "LPAREN",
        "RPAREN",
        "LBRACE",
        "RBRACE",
        "LBRACKET",
        "RBRACKET",
        "EOF",
    ]
    assert kinds(code) == expected


def test_two_char_operators_use_longest_match() -> None:
    assert kinds("a == b != c = !d") == [
        "IDENT",
        "EQ",
        "IDENT",
        "NOT_EQ",
        "IDENT",
        "ASSIGN",
        "BANG",
        "IDENT",
        "EOF",
    ]


def test_let_statement_tokens() -> None:
    tokens = tokenize("let five = 5;")
    assert [(t.kind, t.literal) for t in tokens] == [
        ("LET", "let"),
        ("IDENT", "five"),
        ("ASSIGN", "="),
        ("INT", "5"),
        ("SEMICOLON", ";"),
        ("EOF", ""),
    ]


@pytest.mark.parametrize("word,kind", sorted(keywords.items()))  # type: ignore[misc]
def test_keywords(word: str, kind: str) -> None:
    tok = Lexer(CharacterStream(word)).next_token()
    assert tok.kind == kind
    assert tok.literal == word


def test_keyword_prefix_is_identifier() -> None:
    tok = Lexer(CharacterStream("letter")).next_token()
    assert tok == Token("IDENT", "letter", 1, 1)


def test_string_token() -> None:
    tok = Lexer(CharacterStream('"hello world"')).next_token()
    assert tok.kind == "STRING"
    assert tok.literal == "hello world"


def test_string_keeps_escape_sequences_raw() -> None:
    tok = Lexer(CharacterStream(r'"a\"b"')).next_token()
    assert tok.literal == r"a\"b"


def test_unterminated_string_raises() -> None:
    with pytest.raises(SyntaxError, match="Unterminated string"):
        tokenize('"oops')


def test_integer_token() -> None:
    tok = Lexer(CharacterStream("838383")).next_token()
    assert tok.kind == "INT"
    assert tok.literal == "838383"


def test_unknown_character_is_illegal() -> None:
    assert kinds("a % b") == ["IDENT", "ILLEGAL", "IDENT", "EOF"]


def test_comments_and_whitespace_skipped() -> None:
    source = "# leading comment\nlet x = 1; # trailing\n\t x"
    assert kinds(source) == ["LET", "IDENT", "ASSIGN", "INT", "SEMICOLON", "IDENT", "EOF"]


def test_token_positions() -> None:
    tokens = tokenize("let x\n  = 10")
    assert [(t.line, t.col) for t in tokens[:4]] == [(1, 1), (1, 5), (2, 3), (2, 5)]


def test_eof_repeats_after_end() -> None:
    lexer = Lexer(CharacterStream("x"))
    assert lexer.next_token().kind == "IDENT"
    assert lexer.next_token().kind == "EOF"
    assert lexer.next_token().kind == "EOF"


def test_token_is_immutable() -> None:
    tok = Token("INT", "5")
    with pytest.raises(dataclasses.FrozenInstanceError):
        tok.literal = "6"  # type: ignore[misc]


def test_token_repr() -> None:
    assert repr(Token("LET", "let")) == "Token(LET, let)"


def test_character_stream_past_end_raises() -> None:
    cs = CharacterStream("")
    with pytest.raises(EOFError):
        cs.next()


def test_sample_program_tokenizes_without_illegal_tokens() -> None:
    source = """
    let person = { "name": "Tom Bombadil", "clothes": { "shoes": "yellow boots" } };
    let shoes = person.dig("clothes", "shoes");
    for(let x = 0; x < 10; x = x + 1) { puts(x) };
    """
    assert "ILLEGAL" not in kinds(source)


@given(st.from_regex(r"[a-zA-Z_][a-zA-Z0-9_]{0,10}", fullmatch=True))  # type: ignore[misc]
def test_identifier_or_keyword(word: str) -> None:
    tok = Lexer(CharacterStream(word)).next_token()
    assert tok.literal == word
    assert tok.kind == keywords.get(word, "IDENT")


@given(st.integers(min_value=0, max_value=10**30))  # type: ignore[misc]
def test_integers_lex_as_single_token(n: int) -> None:
    tokens = tokenize(str(n))
    assert [(t.kind, t.literal) for t in tokens] == [("INT", str(n)), ("EOF", "")]
