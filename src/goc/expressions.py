"""
Expression and type nodes lowered from the Go syntax tree.

Only the shapes the C backend can translate get their own class: names,
basic literals and signed literals. Everything else is kept as an
OpaqueExpr that records the grammar node kind and its source text, so the
backend can still reject it with a precise, line-attributed dump.

ARCHITECTURAL RULE:
    These objects carry structure only.
    They know nothing about C.
    Rendering and validation belong in the backend.
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class Pos:
    """
    A source position.

    Properties:
        offset: 0-based byte offset into the UTF-8 unit text
        line: 1-based line number
        column: 1-based byte column, as Go reports it
    """

    offset: int
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class Expression(ABC):
    """
    Base class for all expression and type nodes.

    Structure only; see module docstring.
    """
    pass


class LiteralKind(Enum):
    """Kinds of Go basic literals."""

    INT = "INT"
    FLOAT = "FLOAT"
    IMAG = "IMAG"
    CHAR = "CHAR"
    STRING = "STRING"


@dataclass(frozen=True)
class Ident(Expression):
    """A name: a variable, a function or a plain type name like `int`."""

    pos: Pos
    name: str


@dataclass(frozen=True)
class BasicLit(Expression):
    """
    A literal exactly as written.

    Examples:
        INT     42, 0x1F, 1_000
        STRING  "hi", `raw`
    """

    pos: Pos
    kind: LiteralKind
    value: str


@dataclass(frozen=True)
class UnaryExpr(Expression):
    """`-1`, `!ok`; op is the operator spelling."""

    pos: Pos
    op: str
    x: Expression


@dataclass(frozen=True)
class OpaqueExpr(Expression):
    """
    Any other expression or type, e.g. a call or `[]int`.

    Properties:
        kind: grammar node kind such as `call_expression` or `slice_type`
        text: source text of the node
    """

    pos: Pos
    kind: str
    text: str


@dataclass(frozen=True)
class Field:
    """
    One entry of a parameter, result or type-parameter list.

    `(a, b int)` is one Field with two names; `(int, error)` is two
    Fields without names.
    """

    pos: Pos
    names: List[Ident]
    type: Expression


@dataclass(frozen=True)
class FieldList:
    """
    A parenthesized or bracketed list of fields.

    opening/closing are None for a single unparenthesized result type.
    """

    opening: Optional[Pos]
    fields: List[Field] = field(default_factory=list)
    closing: Optional[Pos] = None
