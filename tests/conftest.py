import pytest

from tiny.tiny_ast import (
    ArithOp,
    Assign,
    Binary,
    Grouping,
    If,
    Literal,
    Print,
    Program,
    Variable,
    While,
)

SAMPLE_SOURCE = """\
n := 10;
total := 0;
while n do
  total := total + n * (n - 1) / 2;
  if total then
    print total;
  end
  n := n - 1;
end
print total;
"""


@pytest.fixture  # type: ignore[misc]
def sample_source() -> str:
    return SAMPLE_SOURCE


@pytest.fixture  # type: ignore[misc]
def sample_program() -> Program:
    n = Variable("n")
    total = Variable("total")
    return Program(
        (
            Assign("n", Literal(10)),
            Assign("total", Literal(0)),
            While(
                n,
                (
                    Assign(
                        "total",
                        Binary(
                            ArithOp.PLUS,
                            total,
                            Binary(
                                ArithOp.SLASH,
                                Binary(
                                    ArithOp.STAR,
                                    n,
                                    Grouping(Binary(ArithOp.MINUS, n, Literal(1))),
                                ),
                                Literal(2),
                            ),
                        ),
                    ),
                    If(total, (Print(total),)),
                    Assign("n", Binary(ArithOp.MINUS, n, Literal(1))),
                ),
            ),
            Print(total),
        )
    )
