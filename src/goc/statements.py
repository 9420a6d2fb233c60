"""
Statement nodes lowered from function bodies.

Statements form a closed union (see `Statement`). The C backend supports a
single shape, `ShortVarDecl`; every other statement is an `OpaqueStmt`
tagged with its `StmtKind`, so the backend can name exactly what it
refuses to translate.

Each statement records where it starts (`pos`) and where its last token
ends (`end`). The span between them is the statement's source text.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union, get_args

from goc.expressions import Expression, Pos


class StmtKind(Enum):
    """Statement kinds, valued by their grammar node names."""

    EXPR = "expression_statement"
    SEND = "send_statement"
    INC = "inc_statement"
    DEC = "dec_statement"
    ASSIGN = "assignment_statement"
    LABELED = "labeled_statement"
    EMPTY_LABELED = "empty_labeled_statement"
    RETURN = "return_statement"
    GO = "go_statement"
    DEFER = "defer_statement"
    IF = "if_statement"
    FOR = "for_statement"
    SWITCH = "expression_switch_statement"
    TYPE_SWITCH = "type_switch_statement"
    SELECT = "select_statement"
    BREAK = "break_statement"
    CONTINUE = "continue_statement"
    GOTO = "goto_statement"
    FALLTHROUGH = "fallthrough_statement"
    BLOCK = "block"
    CONST = "const_declaration"
    VAR = "var_declaration"
    TYPE = "type_declaration"


@dataclass
class ShortVarDecl:
    """
    `a := 0` or `a, b := 1, "x"`.

    The only statement the C backend translates.
    """

    pos: Pos
    lhs: List[Expression]
    rhs: List[Expression]
    end: Optional[Pos] = None


@dataclass
class OpaqueStmt:
    """Any other statement; only its kind and span are kept."""

    pos: Pos
    kind: StmtKind
    end: Optional[Pos] = None


@dataclass
class BlockStmt:
    """
    A function body.

    Properties:
        rbrace: position of the closing brace; comments before it belong
            to the block
    """

    pos: Pos
    stmts: List["Statement"] = field(default_factory=list)
    rbrace: Optional[Pos] = None
    end: Optional[Pos] = None


Statement = Union[ShortVarDecl, OpaqueStmt]

STATEMENT_TYPES = get_args(Statement)
