"""
Runtime value representation for the Monkey programming language.

Every value the evaluator produces is an `Object`. Each variant reports a type tag
(`type()`) and a user-facing display string (`inspect()`); nothing else belongs to
this layer. Arithmetic, truthiness and equality are the evaluator's business.

Values are immutable once built. Composite values (`Array`, `Hash`) hold tuples, so
"changing" one means building a new value.

Classes:
    ObjectType: Enumeration of type tags.
    Object: Base class of all values.
    Integer, Boolean, String, Null, Array, Hash, Function, ReturnValue, Error:
        The value variants.

Constants:
    TRUE, FALSE, NULL: Shared instances for the values that never vary.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from monkey.monkey_ast import BlockStatement, Identifier


class ObjectType(str, Enum):
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    STRING = "STRING"
    NULL = "NULL"
    ARRAY = "ARRAY"
    HASH = "HASH"
    FUNCTION = "FUNCTION"
    RETURN_VALUE = "RETURN_VALUE"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


class Object:
    """Base class of every runtime value."""

    def type(self) -> ObjectType:
        raise NotImplementedError

    def inspect(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Integer(Object):
    """A signed 64-bit integer.

    Raises:
        ValueError: If `value` does not fit in 64 bits.
    """

    value: int

    def __post_init__(self) -> None:
        if not -(2**63) <= self.value <= 2**63 - 1:
            raise ValueError(f"integer out of 64-bit range: {self.value}")

    def type(self) -> ObjectType:
        return ObjectType.INTEGER

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Boolean(Object):
    value: bool

    def type(self) -> ObjectType:
        return ObjectType.BOOLEAN

    def inspect(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class String(Object):
    value: str

    def type(self) -> ObjectType:
        return ObjectType.STRING

    def inspect(self) -> str:
        return self.value


@dataclass(frozen=True)
class Null(Object):
    def type(self) -> ObjectType:
        return ObjectType.NULL

    def inspect(self) -> str:
        return "null"


@dataclass(frozen=True)
class Array(Object):
    elements: tuple[Object, ...] = ()

    def type(self) -> ObjectType:
        return ObjectType.ARRAY

    def inspect(self) -> str:
        return "[" + ", ".join(e.inspect() for e in self.elements) + "]"


@dataclass(frozen=True)
class Hash(Object):
    """Key/value pairs in insertion order."""

    pairs: tuple[tuple[Object, Object], ...] = ()

    def type(self) -> ObjectType:
        return ObjectType.HASH

    def inspect(self) -> str:
        return "{" + ", ".join(f"{k.inspect()}: {v.inspect()}" for k, v in self.pairs) + "}"


@dataclass(frozen=True)
class Function(Object):
    """A closure: parameters and body from a `fn` literal plus the bindings it captured.

    `env` is opaque at this layer; it is neither compared nor displayed.
    """

    parameters: tuple[Identifier, ...] = field(hash=False)
    body: BlockStatement = field(hash=False)
    env: Mapping[str, Object] = field(default_factory=dict, compare=False, repr=False)

    def type(self) -> ObjectType:
        return ObjectType.FUNCTION

    def inspect(self) -> str:
        params = ", ".join(p.render() for p in self.parameters)
        body = " ".join(s.render().rstrip(";") + ";" for s in self.body.statements)
        return f"fn({params}) {{\n{body}\n}}"


@dataclass(frozen=True)
class ReturnValue(Object):
    """Wraps the value of a `return` while it unwinds out of nested blocks."""

    value: Object

    def type(self) -> ObjectType:
        return ObjectType.RETURN_VALUE

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(frozen=True)
class Error(Object):
    message: str

    def type(self) -> ObjectType:
        return ObjectType.ERROR

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


__all__ = [
    "FALSE",
    "NULL",
    "TRUE",
    "Array",
    "Boolean",
    "Error",
    "Function",
    "Hash",
    "Integer",
    "Null",
    "Object",
    "ObjectType",
    "ReturnValue",
    "String",
]
