"""
TINY Language Parser

Parses TINY source into a `Program` tree by recursive descent.

The parser pulls tokens from a `Lexer` on demand and keeps exactly one token
of lookahead (`current`). Every production is selected by the kind of that
token alone, so no further lookahead or backtracking is needed.

Grammar
-------
    Program     := Statement* EOF
    Statement   := Assign | If | While | Print
    Assign      := IDENTIFIER ":=" Expression ";"
    If          := "if" Expression "then" Statement* "end"
    While       := "while" Expression "do" Statement* "end"
    Print       := "print" Expression ";"
    Expression  := Term (("+" | "-") Term)*
    Term        := Factor (("*" | "/") Factor)*
    Factor      := NUMBER | IDENTIFIER | "(" Expression ")"

Parser Behavior
---------------
- Binary operators are left-associative; `*` and `/` bind tighter than `+`
  and `-`. Parentheses produce explicit `Grouping` nodes.
- `;` terminates assignments and prints. No separator is expected before the
  `end` that closes a block; the `end` belongs to the enclosing `if`/`while`.
- Fail-fast: the first unexpected token raises `ParseError` and no partial
  tree is returned.
- Parentheses and `if`/`while` blocks may together nest at most
  `MAX_NESTING_DEPTH` levels; the token that opens one more level raises
  `ParseError`. Operator chains are folded in loops and have no length limit.

Entry Points
------------
- `Parser.parse_program()`: Parse a whole program from the parser's lexer.
- `parse()`: Lex and parse a source string in one call.

Raises
------
ParseError
    When the current token is not acceptable at the current grammar position.
LexError
    Propagated unchanged from the lexer.
"""

from __future__ import annotations

import logging

from tiny.tiny_ast import (
    ArithOp,
    Assign,
    Binary,
    Expression,
    Grouping,
    If,
    Literal,
    Print,
    Program,
    Statement,
    Variable,
    While,
)
from tiny.tiny_constants import MAX_NESTING_DEPTH
from tiny.tiny_lexer import CharacterStream, Lexer, Token, TokenKind

logger = logging.getLogger(__name__)

STATEMENT_START: tuple[TokenKind, ...] = (
    TokenKind.IDENTIFIER,
    TokenKind.IF,
    TokenKind.WHILE,
    TokenKind.PRINT,
)

FACTOR_START: tuple[TokenKind, ...] = (
    TokenKind.NUMBER,
    TokenKind.IDENTIFIER,
    TokenKind.LEFT_PAREN,
)

additive_ops: dict[TokenKind, ArithOp] = {
    TokenKind.PLUS: ArithOp.PLUS,
    TokenKind.MINUS: ArithOp.MINUS,
}

multiplicative_ops: dict[TokenKind, ArithOp] = {
    TokenKind.STAR: ArithOp.STAR,
    TokenKind.SLASH: ArithOp.SLASH,
}


class ParseError(SyntaxError):
    """Raised when a token cannot be accepted at the current grammar position.

    Attributes:
        expected (tuple[TokenKind, ...]): The token kinds that would have been accepted.
        found (Token): The token actually encountered.
    """

    def __init__(
        self, expected: tuple[TokenKind, ...], found: Token, reason: str | None = None
    ):
        wanted = " or ".join(kind.value for kind in expected)
        message = reason or f"Expected {wanted}, got {found.describe()}"
        super().__init__(
            f"{message} at offset {found.offset} (line {found.line}, col {found.col})"
        )
        self.expected = expected
        self.found = found

    @property
    def expected_kind(self) -> TokenKind:
        return self.expected[0]


class Parser:
    """
    TINY Parser Class

    Attributes
    ----------
    lexer : Lexer
        The token source; tokens are requested one at a time.
    current : Token
        The single token of lookahead.
    depth : int
        Open groupings and blocks; bounded by `MAX_NESTING_DEPTH`.

    Methods
    -------
    parse_program() -> Program
        Parse a complete program up to end of input.
    parse_statement() -> Statement
        Parse one assignment, `if`, `while` or `print` statement.
    parse_expression() -> Expression
        Parse an additive expression.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.current: Token = lexer.next()
        self.depth = 0

    def advance(self) -> Token:
        """Consumes the current token, pulls the next one and returns the consumed token."""
        tok = self.current
        self.current = self.lexer.next()
        return tok

    def check(self, *kinds: TokenKind) -> bool:
        return self.current.kind in kinds

    def expect(self, kind: TokenKind) -> Token:
        if self.current.kind is kind:
            return self.advance()
        raise ParseError((kind,), self.current)

    def enter_nested(self, tok: Token, closer: TokenKind, what: str) -> None:
        """Opens one grouping or block level, refusing input nested past the bound."""
        if self.depth >= MAX_NESTING_DEPTH:
            raise ParseError(
                (closer,),
                tok,
                reason=f"{what} nested too deeply (limit {MAX_NESTING_DEPTH})",
            )
        self.depth += 1

    def leave_nested(self) -> None:
        self.depth -= 1

    def parse_program(self) -> Program:
        """Parse a full TINY program and return its root node."""
        statements = self.parse_statement_list(TokenKind.EOF)
        self.expect(TokenKind.EOF)
        logger.debug("parsed program with %d top-level statements", len(statements))
        return Program(statements)

    def parse_statement_list(self, terminator: TokenKind) -> tuple[Statement, ...]:
        """
        Parse statements until a token that cannot start one.

        The terminator itself is left for the caller to consume. Anything other
        than the terminator at that point is an error naming both the
        terminator and the statement-starting tokens.
        """
        stmts: list[Statement] = []
        while self.check(*STATEMENT_START):
            stmts.append(self.parse_statement())
        if not self.check(terminator):
            if self.check(TokenKind.EOF):
                raise ParseError((terminator,), self.current)
            raise ParseError((terminator, *STATEMENT_START), self.current)
        return tuple(stmts)

    def parse_statement(self) -> Statement:
        """Parse a single statement, dispatching on the current token."""
        kind = self.current.kind
        if kind is TokenKind.IDENTIFIER:
            return self.parse_assignment()
        if kind is TokenKind.IF:
            return self.parse_if()
        if kind is TokenKind.WHILE:
            return self.parse_while()
        if kind is TokenKind.PRINT:
            return self.parse_print()
        raise ParseError(STATEMENT_START, self.current)

    def parse_assignment(self) -> Assign:
        name_tok = self.expect(TokenKind.IDENTIFIER)
        self.expect(TokenKind.ASSIGN)
        value = self.parse_expression()
        self.expect(TokenKind.SEMICOLON)
        return Assign(name_tok.lexeme, value, offset=name_tok.offset)

    def parse_if(self) -> If:
        if_tok = self.expect(TokenKind.IF)
        self.enter_nested(if_tok, TokenKind.END, "Block")
        condition = self.parse_expression()
        self.expect(TokenKind.THEN)
        body = self.parse_statement_list(TokenKind.END)
        self.expect(TokenKind.END)
        self.leave_nested()
        return If(condition, body, offset=if_tok.offset)

    def parse_while(self) -> While:
        while_tok = self.expect(TokenKind.WHILE)
        self.enter_nested(while_tok, TokenKind.END, "Block")
        condition = self.parse_expression()
        self.expect(TokenKind.DO)
        body = self.parse_statement_list(TokenKind.END)
        self.expect(TokenKind.END)
        self.leave_nested()
        return While(condition, body, offset=while_tok.offset)

    def parse_print(self) -> Print:
        print_tok = self.expect(TokenKind.PRINT)
        value = self.parse_expression()
        self.expect(TokenKind.SEMICOLON)
        return Print(value, offset=print_tok.offset)

    def parse_expression(self) -> Expression:
        """Parse `Term (("+" | "-") Term)*`, folding to the left."""
        left = self.parse_term()
        while self.current.kind in additive_ops:
            op = additive_ops[self.advance().kind]
            right = self.parse_term()
            left = Binary(op, left, right, offset=left.offset)
        return left

    def parse_term(self) -> Expression:
        """Parse `Factor (("*" | "/") Factor)*`, folding to the left."""
        left = self.parse_factor()
        while self.current.kind in multiplicative_ops:
            op = multiplicative_ops[self.advance().kind]
            right = self.parse_factor()
            left = Binary(op, left, right, offset=left.offset)
        return left

    def parse_factor(self) -> Expression:
        tok = self.current
        if tok.kind is TokenKind.NUMBER:
            self.advance()
            try:
                value = int(tok.lexeme)
            except ValueError as e:
                # int() refuses digit strings beyond sys.get_int_max_str_digits()
                raise ParseError(
                    (TokenKind.NUMBER,), tok, reason="Integer literal too long"
                ) from e
            return Literal(value, offset=tok.offset)
        if tok.kind is TokenKind.IDENTIFIER:
            self.advance()
            return Variable(tok.lexeme, offset=tok.offset)
        if tok.kind is TokenKind.LEFT_PAREN:
            self.advance()
            self.enter_nested(tok, TokenKind.RIGHT_PAREN, "Expression")
            inner = self.parse_expression()
            self.expect(TokenKind.RIGHT_PAREN)
            self.leave_nested()
            return Grouping(inner, offset=tok.offset)
        raise ParseError(FACTOR_START, tok)


def parse(source: str) -> Program:
    """Lex and parse `source` with a fresh lexer and parser."""
    return Parser(Lexer(CharacterStream(source))).parse_program()


__all__ = ["ParseError", "Parser", "parse"]
