"""
Lexical analyzer for the TINY programming language.

This module converts raw source text into a stream of typed tokens that the
parser pulls one at a time:

Classes:
    CharacterStream: Stream abstraction for reading characters with offset, line and column tracking.
    TokenKind: The closed set of token kinds.
    Token: A single token with kind, lexeme and source position.
    LexError: Raised when a character does not begin any valid token.
    Lexer: Converts a CharacterStream into tokens on demand.

Features:
    - Skips spaces, tabs, carriage returns and newlines between tokens
    - Maximal munch for identifiers and numbers
    - Case-insensitive keywords (`if`, `then`, `while`, `do`, `print`, `end`);
      the original spelling is kept as the lexeme
    - Single-character symbols `+ - * / ( ) ;` and the assignment operator `:=`
    - Returns `EOF` forever once the source is exhausted

Raises:
    LexError: On any character that starts no token, including a `:` not
    followed by `=`.

Example:
    >>> lexer = Lexer(CharacterStream("print 42;"))
    >>> lexer.next()
    Token(PRINT, 'print')

Exports:
    - CharacterStream
    - Lexer
    - LexError
    - Token
    - TokenKind
    - line_col
    - tokenize
"""

from collections.abc import Iterator
from enum import Enum
from typing import Any

from tiny.tiny_constants import (
    ASSIGN_LEXEME,
    DIGITS,
    WHITESPACE,
    keyword_hashmap,
    symbol_hashmap,
)


def line_col(source: str, offset: int) -> tuple[int, int]:
    """Derives the 1-based line and column of `offset` within `source`."""
    line = source.count("\n", 0, offset) + 1
    col = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, col


class CharacterStream:
    """
    Reads characters from a source string while tracking position.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source (0-based offset).
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise IndexError(
                f"Attempted to read past end of source at offset {self.position}"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character `offset` places ahead, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class TokenKind(Enum):
    """The closed set of token kinds; values are used in error messages."""

    IDENTIFIER = "identifier"
    NUMBER = "number"
    ASSIGN = "':='"
    PLUS = "'+'"
    MINUS = "'-'"
    STAR = "'*'"
    SLASH = "'/'"
    LEFT_PAREN = "'('"
    RIGHT_PAREN = "')'"
    SEMICOLON = "';'"
    IF = "'if'"
    THEN = "'then'"
    WHILE = "'while'"
    DO = "'do'"
    PRINT = "'print'"
    END = "'end'"
    EOF = "end of input"


class Token:
    """Represents a single lexical token.

    Attributes:
        kind (TokenKind): The token's kind.
        lexeme (str): The exact source text the token was scanned from ("" for EOF).
        offset (int): 0-based offset of the first character of the lexeme.
        line (int): 1-based line of the lexeme, or 0 when unknown.
        col (int): 1-based column of the lexeme, or 0 when unknown.
    """

    def __init__(
        self, kind: TokenKind, lexeme: str, offset: int = 0, line: int = 0, col: int = 0
    ):
        self.kind = kind
        self.lexeme = lexeme
        self.offset = offset
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.lexeme!r})"

    def __eq__(self, other: Any) -> bool:
        # line/col are derived from offset, so they take no part in equality
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.lexeme == other.lexeme
            and self.offset == other.offset
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.lexeme, self.offset))

    def describe(self) -> str:
        """Returns a short human-readable description used in error messages."""
        if self.kind is TokenKind.EOF:
            return TokenKind.EOF.value
        return f"{self.kind.name} {self.lexeme!r}"


class LexError(SyntaxError):
    """Raised when the input contains a character that begins no valid token.

    Attributes:
        character (str): The offending character ("" at end of input).
        offset (int): 0-based offset of the offending character.
        line (int): 1-based line of the offending character.
        col (int): 1-based column of the offending character.
    """

    def __init__(
        self,
        character: str,
        offset: int,
        line: int = 0,
        col: int = 0,
        reason: str | None = None,
    ):
        message = reason or f"Unexpected character {character!r}"
        super().__init__(f"{message} at offset {offset} (line {line}, col {col})")
        self.character = character
        self.offset = offset
        self.line = line
        self.col = col


class Lexer:
    """Lexical analyzer for the TINY language.

    Tokens are produced lazily by `next()`; the lexer keeps no token buffer,
    only the scan position held by its `CharacterStream`.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens up to, but not including, `EOF`."""
        while True:
            tok = self.next()
            if tok.kind is TokenKind.EOF:
                return
            yield tok

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in WHITESPACE:
            self.advance()

    def read_word(self) -> str:
        """Consumes a maximal run of letters and digits."""
        word = ""
        while not self.stream.end_of_file() and (
            self.peek().isalpha() or self.peek() in DIGITS
        ):
            word += self.advance()
        return word

    def read_number(self) -> str:
        """Consumes a maximal run of ASCII digits."""
        digits = ""
        while not self.stream.end_of_file() and self.peek() in DIGITS:
            digits += self.advance()
        return digits

    def next(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token; `EOF` on every call once input is exhausted.

        Raises:
            LexError: If the current character begins no valid token.
        """
        self.skip_whitespace()

        offset = self.stream.position
        line, col = self.stream.line, self.stream.column

        if self.stream.end_of_file():
            return Token(TokenKind.EOF, "", offset, line, col)

        ch = self.peek()

        # 1. Identifier or keyword
        if ch.isalpha():
            word = self.read_word()
            kind_name = keyword_hashmap.get(word.lower())
            if kind_name is not None:
                return Token(TokenKind[kind_name], word, offset, line, col)
            return Token(TokenKind.IDENTIFIER, word, offset, line, col)

        # 2. Number
        if ch in DIGITS:
            return Token(TokenKind.NUMBER, self.read_number(), offset, line, col)

        # 3. Assignment operator
        if ch == ASSIGN_LEXEME[0]:
            self.advance()
            if self.peek() != ASSIGN_LEXEME[1]:
                raise LexError(
                    ch, offset, line, col, reason=f"Expected {ASSIGN_LEXEME!r}"
                )
            self.advance()
            return Token(TokenKind.ASSIGN, ASSIGN_LEXEME, offset, line, col)

        # 4. Single-character symbol
        if ch in symbol_hashmap:
            self.advance()
            return Token(TokenKind[symbol_hashmap[ch]], ch, offset, line, col)

        # 5. Anything else
        raise LexError(ch, offset, line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes the whole of `source`, returning its tokens followed by one `EOF`."""
    lexer = Lexer(CharacterStream(source))
    tokens = list(lexer)
    tokens.append(lexer.next())
    return tokens


__all__ = [
    "CharacterStream",
    "LexError",
    "Lexer",
    "Token",
    "TokenKind",
    "line_col",
    "tokenize",
]
