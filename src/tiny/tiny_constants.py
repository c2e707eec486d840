"""
Language tables shared by the TINY lexer, parser and emitter.

All values are process-lifetime constants: nothing here is mutated at runtime.

Exports:
    - keyword_hashmap: lower-case keyword lexeme -> token kind name
    - symbol_hashmap: single-character symbol -> token kind name
    - ASSIGN_LEXEME: the two-character assignment operator
    - WHITESPACE: characters skipped between tokens
    - DIGITS: characters that make up a number literal
    - INDENT_UNIT: indentation emitted per nesting level by the text emitter
    - MAX_NESTING_DEPTH: deepest combined nesting of groupings and blocks the parser accepts
"""

from types import MappingProxyType

keyword_hashmap = MappingProxyType(
    {
        "if": "IF",
        "then": "THEN",
        "while": "WHILE",
        "do": "DO",
        "print": "PRINT",
        "end": "END",
    }
)

symbol_hashmap = MappingProxyType(
    {
        "+": "PLUS",
        "-": "MINUS",
        "*": "STAR",
        "/": "SLASH",
        "(": "LEFT_PAREN",
        ")": "RIGHT_PAREN",
        ";": "SEMICOLON",
    }
)

ASSIGN_LEXEME = ":="

WHITESPACE = frozenset(" \t\r\n")

DIGITS = frozenset("0123456789")

INDENT_UNIT = "  "

# Parentheses and if/while blocks together; deeper input is a ParseError
MAX_NESTING_DEPTH = 100

__all__ = [
    "ASSIGN_LEXEME",
    "DIGITS",
    "INDENT_UNIT",
    "MAX_NESTING_DEPTH",
    "WHITESPACE",
    "keyword_hashmap",
    "symbol_hashmap",
]
