"""
Renders TINY AST nodes back to canonical TINY source text.

This module defines the `TextEmitter` class and the `render` function. The
emitter is a direct structural mirror of the tree: it never infers or
re-inserts parentheses from operator precedence, only `Grouping` nodes
produce them.

Layout:
    - One statement per line, two spaces of indentation per nesting level.
    - `if`/`while` print their condition and opening keyword on one line,
      the body one level deeper, then `end` at the statement's own level.
    - Binary operators are written infix with a single space on each side.

Round trip:
    Whitespace from the original source is not preserved, but lexing and
    parsing the rendered text yields a tree equal to the one rendered.

Raises:
    - `TypeError`: If something other than an AST node reaches the emitter.
"""

from tiny.tiny_ast import (
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
from tiny.tiny_constants import ASSIGN_LEXEME, INDENT_UNIT


class TextEmitter:
    """Emits TINY source text from AST nodes.

    Attributes:
        lines (list[str]): Accumulated lines of emitted source.
        indent (int): Current nesting level.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return INDENT_UNIT * self.indent

    def get_output(self) -> str:
        """Returns the emitted source as one string, lines joined by newlines."""
        return "\n".join(self.lines)

    def emit_line(self, text: str) -> None:
        self.lines.append(f"{self.indent_str()}{text}")

    def emit_program(self, program: Program) -> None:
        if not isinstance(program, Program):
            raise TypeError(f"Expected Program, got {type(program).__name__}")
        self.emit_block(program.statements)

    def emit_block(self, statements: tuple[Statement, ...]) -> None:
        for stmt in statements:
            self.emit_statement(stmt)

    def emit_statement(self, node: Statement) -> None:
        """Appends the line(s) for one statement at the current indentation."""
        match node:
            case Assign(name=name, value=value):
                self.emit_line(f"{name} {ASSIGN_LEXEME} {self.emit_expr(value)};")
            case Print(value=value):
                self.emit_line(f"print {self.emit_expr(value)};")
            case If(condition=condition, then_body=body):
                self.emit_line(f"if {self.emit_expr(condition)} then")
                self.emit_nested(body)
                self.emit_line("end")
            case While(condition=condition, body=body):
                self.emit_line(f"while {self.emit_expr(condition)} do")
                self.emit_nested(body)
                self.emit_line("end")
            case _:
                raise TypeError(f"Not a statement node: {node!r}")

    def emit_nested(self, statements: tuple[Statement, ...]) -> None:
        self.indent += 1
        try:
            self.emit_block(statements)
        finally:
            self.indent -= 1

    def emit_expr(self, node: Expression) -> str:
        """Returns the source text for an expression.

        Walks the tree with an explicit stack so long operator chains do not
        hit the interpreter's recursion limit. The stack holds nodes still to
        emit and literal text fragments, popped in output order.
        """
        if isinstance(node, str):
            raise TypeError(f"Not an expression node: {node!r}")
        parts: list[str] = []
        stack: list[Expression | str] = [node]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
                continue
            match item:
                case Literal(value=value):
                    parts.append(str(value))
                case Variable(name=name):
                    parts.append(name)
                case Binary(op=op, left=left, right=right):
                    stack.extend((right, f" {op.value} ", left))
                case Grouping(inner=inner):
                    stack.extend((")", inner, "("))
                case _:
                    raise TypeError(f"Not an expression node: {item!r}")
        return "".join(parts)


def render(program: Program) -> str:
    """Renders a whole program to canonical source text.

    Pure and deterministic: equal trees always render to the same text.
    """
    emitter = TextEmitter()
    emitter.emit_program(program)
    return emitter.get_output()


__all__ = ["TextEmitter", "render"]
