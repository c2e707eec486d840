import pytest
from hypothesis import given
from hypothesis import strategies as st

from tiny.tiny_lexer import (
    CharacterStream,
    Lexer,
    LexError,
    Token,
    TokenKind,
    line_col,
    tokenize,
)


def kinds(source: str) -> list[TokenKind]:
    return [tok.kind for tok in tokenize(source)]


def test_single_char_tokens() -> None:
    assert kinds("+ - * / ( ) ;") == [
        TokenKind.PLUS,
        TokenKind.MINUS,
        TokenKind.STAR,
        TokenKind.SLASH,
        TokenKind.LEFT_PAREN,
        TokenKind.RIGHT_PAREN,
        TokenKind.SEMICOLON,
        TokenKind.EOF,
    ]


def test_assign_token() -> None:
    tok = Lexer(CharacterStream(":=")).next()
    assert tok.kind is TokenKind.ASSIGN
    assert tok.lexeme == ":="


def test_number_token() -> None:
    tok = Lexer(CharacterStream("12345")).next()
    assert tok.kind is TokenKind.NUMBER
    assert tok.lexeme == "12345"


def test_identifier_token() -> None:
    tok = Lexer(CharacterStream("counter2")).next()
    assert tok.kind is TokenKind.IDENTIFIER
    assert tok.lexeme == "counter2"


@pytest.mark.parametrize(
    "source,kind",
    [
        ("if", TokenKind.IF),
        ("then", TokenKind.THEN),
        ("while", TokenKind.WHILE),
        ("do", TokenKind.DO),
        ("print", TokenKind.PRINT),
        ("end", TokenKind.END),
    ],
)  # type: ignore[misc]
def test_keywords(source: str, kind: TokenKind) -> None:
    tok = Lexer(CharacterStream(source)).next()
    assert tok.kind is kind
    assert tok.lexeme == source


@pytest.mark.parametrize("source", ["IF", "While", "PrInT", "END"])  # type: ignore[misc]
def test_keywords_are_case_insensitive_and_keep_lexeme(source: str) -> None:
    tok = Lexer(CharacterStream(source)).next()
    assert tok.kind is TokenKind[source.upper()]
    assert tok.lexeme == source


@pytest.mark.parametrize("source", ["iff", "ending", "do2", "printer", "Then1"])  # type: ignore[misc]
def test_keyword_prefix_is_identifier(source: str) -> None:
    tok = Lexer(CharacterStream(source)).next()
    assert tok.kind is TokenKind.IDENTIFIER
    assert tok.lexeme == source


def test_mixed_case_identifier_is_preserved() -> None:
    tok = Lexer(CharacterStream("MyVar")).next()
    assert tok == Token(TokenKind.IDENTIFIER, "MyVar", 0)


def test_number_then_identifier_splits() -> None:
    tokens = tokenize("12ab")
    assert tokens[:2] == [
        Token(TokenKind.NUMBER, "12", 0),
        Token(TokenKind.IDENTIFIER, "ab", 2),
    ]


def test_assignment_statement_tokens() -> None:
    assert tokenize("x := 1 + 2 * 3;") == [
        Token(TokenKind.IDENTIFIER, "x", 0),
        Token(TokenKind.ASSIGN, ":=", 2),
        Token(TokenKind.NUMBER, "1", 5),
        Token(TokenKind.PLUS, "+", 7),
        Token(TokenKind.NUMBER, "2", 9),
        Token(TokenKind.STAR, "*", 11),
        Token(TokenKind.NUMBER, "3", 13),
        Token(TokenKind.SEMICOLON, ";", 14),
        Token(TokenKind.EOF, "", 15),
    ]


def test_no_whitespace_needed_between_tokens() -> None:
    assert kinds("x:=y*(z-1);") == [
        TokenKind.IDENTIFIER,
        TokenKind.ASSIGN,
        TokenKind.IDENTIFIER,
        TokenKind.STAR,
        TokenKind.LEFT_PAREN,
        TokenKind.IDENTIFIER,
        TokenKind.MINUS,
        TokenKind.NUMBER,
        TokenKind.RIGHT_PAREN,
        TokenKind.SEMICOLON,
        TokenKind.EOF,
    ]


def test_skip_whitespace() -> None:
    tokens = tokenize(" \t\r\n  print\n\n  x ;  ")
    assert [t.kind for t in tokens] == [
        TokenKind.PRINT,
        TokenKind.IDENTIFIER,
        TokenKind.SEMICOLON,
        TokenKind.EOF,
    ]
    assert tokens[0].offset == 6


def test_line_and_column_tracking() -> None:
    tokens = tokenize("x := 1;\n  print x;")
    print_tok = tokens[4]
    assert print_tok.kind is TokenKind.PRINT
    assert (print_tok.line, print_tok.col) == (2, 3)
    assert print_tok.offset == 10


def test_line_col_helper() -> None:
    source = "ab\ncd\n\nef"
    assert line_col(source, 0) == (1, 1)
    assert line_col(source, 4) == (2, 2)
    assert line_col(source, 7) == (4, 1)


def test_token_eof_on_empty_input() -> None:
    tok = Lexer(CharacterStream("")).next()
    assert tok.kind is TokenKind.EOF
    assert tok.lexeme == ""


def test_eof_is_repeated() -> None:
    lexer = Lexer(CharacterStream("x"))
    assert lexer.next().kind is TokenKind.IDENTIFIER
    for _ in range(5):
        assert lexer.next().kind is TokenKind.EOF


def test_iteration_stops_before_eof() -> None:
    lexer = Lexer(CharacterStream("print 1;"))
    assert [t.kind for t in lexer] == [
        TokenKind.PRINT,
        TokenKind.NUMBER,
        TokenKind.SEMICOLON,
    ]


def test_at_sign_raises_lex_error_with_offset() -> None:
    source = "x := 1;\nprint @x;"
    lexer = Lexer(CharacterStream(source))
    with pytest.raises(LexError) as excinfo:
        while lexer.next().kind is not TokenKind.EOF:
            pass
    assert excinfo.value.character == "@"
    assert excinfo.value.offset == source.index("@")
    assert (excinfo.value.line, excinfo.value.col) == (2, 7)


@pytest.mark.parametrize("source", ["x = 1;", "x == 1;", "x < 1", "x > 1", "{", "1.5"])  # type: ignore[misc]
def test_characters_outside_grammar_raise(source: str) -> None:
    with pytest.raises(LexError):
        tokenize(source)


@pytest.mark.parametrize("source", ["x : 1", "x :", ":"])  # type: ignore[misc]
def test_colon_without_equals_raises(source: str) -> None:
    with pytest.raises(LexError, match="Expected ':='") as excinfo:
        tokenize(source)
    assert excinfo.value.character == ":"
    assert excinfo.value.offset == source.index(":")


def test_lex_error_is_syntax_error() -> None:
    with pytest.raises(SyntaxError, match="offset 0"):
        tokenize("$")


def test_unicode_digits_are_not_numbers() -> None:
    with pytest.raises(LexError) as excinfo:
        tokenize("x := ²;")
    assert excinfo.value.character == "²"


def test_token_repr_and_equality() -> None:
    tok = Token(TokenKind.NUMBER, "7", 3, 1, 4)
    assert repr(tok) == "Token(NUMBER, '7')"
    assert tok == Token(TokenKind.NUMBER, "7", 3)
    assert tok != Token(TokenKind.NUMBER, "7", 4)
    assert hash(tok) == hash(Token(TokenKind.NUMBER, "7", 3))


def test_character_stream_peek_and_next() -> None:
    cs = CharacterStream("ab")
    assert cs.peek() == "a"
    assert cs.peek(1) == "b"
    assert cs.peek(2) == ""
    assert cs.next() == "a"
    assert cs.next() == "b"
    assert cs.end_of_file()
    with pytest.raises(IndexError):
        cs.next()


@given(st.text(alphabet=" \t\r\nabcXYZ0123456789+-*/();:=", max_size=40))  # type: ignore[misc]
def test_lexer_ends_with_repeated_eof(source: str) -> None:
    lexer = Lexer(CharacterStream(source))
    try:
        while lexer.next().kind is not TokenKind.EOF:
            pass
    except LexError:
        return
    for _ in range(3):
        assert lexer.next().kind is TokenKind.EOF


@given(
    st.lists(
        st.sampled_from(["x", "if", "42", "+", ":=", "(", ";", "end", "Do"]),
        max_size=20,
    )
)  # type: ignore[misc]
def test_lexemes_round_trip_through_whitespace(words: list[str]) -> None:
    tokens = tokenize(" ".join(words))
    assert [t.lexeme for t in tokens[:-1]] == words
    assert tokens[-1].kind is TokenKind.EOF


@pytest.mark.parametrize("name", ["café", "変数", "Ωmega2", "naïve"])  # type: ignore[misc]
def test_non_ascii_letters_form_identifiers(name: str) -> None:
    toks = tokenize(f"{name} := 1;")
    assert toks[0] == Token(TokenKind.IDENTIFIER, name, 0)
    assert toks[1] == Token(TokenKind.ASSIGN, ":=", len(name) + 1)
    assert toks[1].col == len(name) + 2


def test_non_ascii_identifier_ends_at_non_letter() -> None:
    assert [tok.lexeme for tok in tokenize("print été+1;")] == [
        "print",
        "été",
        "+",
        "1",
        ";",
        "",
    ]
