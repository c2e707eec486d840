"""
Defines the abstract syntax tree (AST) for the TINY programming language.

The tree is built from two closed families of immutable node variants:

Statements:
    Assign   `name := value;`
    If       `if condition then ... end`
    While    `while condition do ... end`
    Print    `print value;`

Expressions:
    Literal   an integer literal
    Variable  a reference to an identifier
    Binary    a two-operand arithmetic operation (`+ - * /`)
    Grouping  a parenthesized expression

A `Program` holds the ordered top-level statements. Consumers match on the
variants exhaustively; nodes carry no behaviour of their own.

Every node records the source offset of its first token. Offsets are kept for
error reporting only and take no part in equality, so two trees compare equal
exactly when they have the same shape and the same leaf values.

Usage:
    This module is the parser's output format and the text emitter's input.

Example:
    Assign("x", Binary(ArithOp.PLUS, Literal(1), Literal(2)))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class ArithOp(Enum):
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"


@dataclass(frozen=True)
class Literal:
    value: int
    offset: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class Variable:
    name: str
    offset: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class Binary:
    op: ArithOp
    left: Expression
    right: Expression
    offset: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class Grouping:
    inner: Expression
    offset: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class Assign:
    name: str
    value: Expression
    offset: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class If:
    condition: Expression
    then_body: tuple[Statement, ...] = ()
    offset: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class While:
    condition: Expression
    body: tuple[Statement, ...] = ()
    offset: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class Print:
    value: Expression
    offset: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class Program:
    """The root of the tree: top-level statements in source order."""

    statements: tuple[Statement, ...] = ()


Expression = Union[Literal, Variable, Binary, Grouping]
Statement = Union[Assign, If, While, Print]
Node = Union[Program, Statement, Expression]


def _children(node: Node) -> tuple[Node, ...]:
    match node:
        case Program(statements=statements):
            return statements
        case Assign(value=value) | Print(value=value):
            return (value,)
        case If(condition=condition, then_body=body) | While(
            condition=condition, body=body
        ):
            return (condition, *body)
        case Literal() | Variable():
            return ()
        case Binary(left=left, right=right):
            return (left, right)
        case Grouping(inner=inner):
            return (inner,)
    raise TypeError(f"Not an AST node: {node!r}")


def _node_dict(node: Node, children: list[dict[str, Any]]) -> dict[str, Any]:
    match node:
        case Program():
            return {"kind": "program", "statements": children}
        case Assign(name=name):
            return {"kind": "assign", "name": name, "value": children[0]}
        case If():
            return {"kind": "if", "condition": children[0], "then_body": children[1:]}
        case While():
            return {"kind": "while", "condition": children[0], "body": children[1:]}
        case Print():
            return {"kind": "print", "value": children[0]}
        case Literal(value=value):
            return {"kind": "literal", "value": value}
        case Variable(name=name):
            return {"kind": "variable", "name": name}
        case Binary(op=op):
            return {
                "kind": "binary",
                "op": op.value,
                "left": children[0],
                "right": children[1],
            }
        case Grouping():
            return {"kind": "grouping", "inner": children[0]}
    raise TypeError(f"Not an AST node: {node!r}")


def to_dict(node: Node) -> dict[str, Any]:
    """
    Converts a node and all of its descendants into plain dictionaries.

    Each dictionary has a `kind` key naming the variant (e.g. "assign",
    "binary") plus one key per field; statement bodies become lists and
    operators their symbol. The result is suitable for JSON output.

    The tree is walked post-order with an explicit stack, so arbitrarily
    long operator chains convert without recursion.

    Raises:
        TypeError: If `node` is not an AST node.
    """
    results: list[dict[str, Any]] = []
    stack: list[tuple[Node, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        children = _children(current)
        if not expanded:
            stack.append((current, True))
            stack.extend((child, False) for child in reversed(children))
            continue
        start = len(results) - len(children)
        converted = results[start:]
        del results[start:]
        results.append(_node_dict(current, converted))
    return results[0]


__all__ = [
    "ArithOp",
    "Assign",
    "Binary",
    "Expression",
    "Grouping",
    "If",
    "Literal",
    "Node",
    "Print",
    "Program",
    "Statement",
    "Variable",
    "While",
    "to_dict",
]
