"""
Defines the abstract syntax tree (AST) node variants for the Monkey programming language.

Classes:
    Node:
        Base of every node. Holds the defining token and provides `token_literal()`,
        `render()` and `to_dict()`.

    Statement / Expression:
        Marker bases separating the two node families.

    Program:
        Root of the tree, an ordered list of statements.

Each node renders to a canonical string. Prefix, infix, index and assignment
expressions render fully parenthesized so that precedence and associativity
decisions are visible in the output, e.g. `-a * b` renders as `((-a) * b)`.
Rendering an expression and parsing the result again yields the same rendering.

Usage:
    This module is the parser's output contract. Tests compare `render()` output
    and the CLI serializes trees through `to_dict()`.

Example:
    stmt = ExpressionStatement(tok, InfixExpression(plus_tok, "+", left, right))
    stmt.render()  # "(a + b)"
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from monkey.monkey_lexer import Token


@dataclass
class Node:
    """
    Base class for all AST nodes.

    Args:
        token (Token): The token that defines the node (`let`, `+`, the identifier itself, ...).

    Methods:
        token_literal(): The literal text of the defining token.
        render(): Canonical string rendering of the node and its children.
        to_dict(): Nested dictionary form, suitable for JSON output.
    """

    token: Token

    def token_literal(self) -> str:
        return self.token.literal

    def render(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} does not implement render()")

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"kind": type(self).__name__, "literal": self.token_literal()}
        for f in fields(self):
            if f.name == "token":
                continue
            out[f.name] = _serialize(getattr(self, f.name))
        return out


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


class Statement(Node):
    """Base for nodes that appear in statement position."""


class Expression(Node):
    """Base for nodes that produce a value."""


class Program:
    """
    Root node of a parsed Monkey program.

    Attributes:
        statements (list[Statement]): Top-level statements in source order.
    """

    def __init__(self, statements: list[Statement] | None = None) -> None:
        self.statements: list[Statement] = statements or []

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def render(self) -> str:
        return "".join(s.render() for s in self.statements)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        preview = ", ".join(repr(s) for s in self.statements[:3])
        if len(self.statements) > 3:
            preview += ", ..."
        return f"Program([{preview}])"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Program) and self.statements == other.statements

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "Program", "statements": [s.to_dict() for s in self.statements]}


# Statements


@dataclass
class LetStatement(Statement):
    """`let <name> = <value>;`"""

    name: Identifier
    value: Expression

    def render(self) -> str:
        return f"{self.token_literal()} {self.name.render()} = {self.value.render()};"


@dataclass
class ReturnStatement(Statement):
    value: Expression

    def render(self) -> str:
        return f"{self.token_literal()} {self.value.render()};"


@dataclass
class ExpressionStatement(Statement):
    """A statement consisting of a single expression, e.g. `x + 10;`.

    The defining token is the first token of the expression.
    """

    value: Expression

    def render(self) -> str:
        return self.value.render()


@dataclass
class BlockStatement(Statement):
    """A `{ ... }` delimited list of statements, used by `if`, `fn` and `for` bodies."""

    statements: list[Statement]

    def render(self) -> str:
        if not self.statements:
            return "{ }"
        # Every statement is terminated so adjacent ones cannot merge on reparse
        body = " ".join(s.render().rstrip(";") + ";" for s in self.statements)
        return "{ " + body + " }"


# Expressions


@dataclass
class Identifier(Expression):
    """A name, either bound by `let`/`fn` or referenced inside an expression."""

    name: str

    def render(self) -> str:
        return self.name


@dataclass
class IntegerLiteral(Expression):
    value: int

    def render(self) -> str:
        return self.token_literal()


@dataclass
class BooleanLiteral(Expression):
    value: bool

    def render(self) -> str:
        return self.token_literal()


@dataclass
class StringLiteral(Expression):
    value: str

    def render(self) -> str:
        return f'"{self.value}"'


@dataclass
class PrefixExpression(Expression):
    """`<operator><right>`, e.g. `!ok` or `-5`."""

    operator: str
    right: Expression

    def render(self) -> str:
        return f"({self.operator}{self.right.render()})"


@dataclass
class InfixExpression(Expression):
    """`<left> <operator> <right>`, e.g. `a * b`."""

    operator: str
    left: Expression
    right: Expression

    def render(self) -> str:
        return f"({self.left.render()} {self.operator} {self.right.render()})"


@dataclass
class AssignExpression(Expression):
    """Rebinding of an existing name, element, or field: `x = x + 1`."""

    target: Expression
    value: Expression

    def render(self) -> str:
        return f"({self.target.render()} = {self.value.render()})"


@dataclass
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def render(self) -> str:
        out = f"if ({self.condition.render()}) {self.consequence.render()}"
        if self.alternative is not None:
            out += f" else {self.alternative.render()}"
        return out


@dataclass
class ForExpression(Expression):
    """`for (<init>; <condition>; <update>) { <body> }`"""

    init: Statement
    condition: Expression
    update: Expression
    body: BlockStatement

    def render(self) -> str:
        init = self.init.render().rstrip(";")
        return (
            f"{self.token_literal()} ({init}; {self.condition.render()}; "
            f"{self.update.render()}) {self.body.render()}"
        )


@dataclass
class FunctionLiteral(Expression):
    parameters: list[Identifier]
    body: BlockStatement

    def render(self) -> str:
        params = ", ".join(p.render() for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body.render()}"


@dataclass
class CallExpression(Expression):
    """`<function>(<arguments>)`. The defining token is the opening parenthesis."""

    function: Expression
    arguments: list[Expression]

    def render(self) -> str:
        args = ", ".join(a.render() for a in self.arguments)
        return f"{self.function.render()}({args})"


@dataclass
class ArrayLiteral(Expression):
    elements: list[Expression]

    def render(self) -> str:
        return "[" + ", ".join(e.render() for e in self.elements) + "]"


@dataclass
class IndexExpression(Expression):
    left: Expression
    index: Expression

    def render(self) -> str:
        return f"({self.left.render()}[{self.index.render()}])"


@dataclass
class HashLiteral(Expression):
    """`{<key>: <value>, ...}`. Pairs keep their source order."""

    pairs: list[tuple[Expression, Expression]]

    def render(self) -> str:
        body = ", ".join(f"{k.render()}: {v.render()}" for k, v in self.pairs)
        return "{" + body + "}"


@dataclass
class MemberExpression(Expression):
    """Field lookup `<object>.<property>`; chains nest left-deep (`a.b.c`)."""

    object: Expression
    property: Identifier

    def render(self) -> str:
        return f"{self.object.render()}.{self.property.render()}"
