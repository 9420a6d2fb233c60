"""
Declaration-level model of a Go compilation unit.

Defines the structures the parser produces and the C backend consumes:
    - Comments and comment groups
    - Specs (one import, one value line, one type definition)
    - Declarations (import, const, var, type, func)
    - SourceFile (root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about C
        - Are owned by a single translation call
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from goc.expressions import BasicLit, Expression, FieldList, Ident, Pos
from goc.statements import BlockStmt


@dataclass(frozen=True)
class Comment:
    """
    A single `//` or `/* */` comment.

    Properties:
        pos: position of the opening `//` or `/*`
        text: comment text exactly as written, delimiters included
    """

    pos: Pos
    text: str

    @property
    def end_line(self) -> int:
        return self.pos.line + self.text.count("\n")


@dataclass(frozen=True)
class CommentGroup:
    """
    A run of comments with no blank line and no token between them.

    Example:
        // Hi
        // there

    is one group of two comments.
    """

    comments: List[Comment]

    @property
    def pos(self) -> Pos:
        return self.comments[0].pos

    @property
    def end_line(self) -> int:
        return self.comments[-1].end_line

    @property
    def text(self) -> str:
        return "\n".join(c.text for c in self.comments)


# =========================================================================
# SPECS
# =========================================================================


@dataclass(frozen=True)
class ImportSpec:
    """
    One imported package.

    Properties:
        name: local name, `.` or `_` when given
        path: import path string literal
    """

    pos: Pos
    name: Optional[Ident]
    path: BasicLit
    doc: Optional[CommentGroup] = None


@dataclass(frozen=True)
class ValueSpec:
    """
    One line of a const or var declaration.

    Each name is a separate binding. Examples:
        a = 1           names=[a], type=None, values=[1]
        a, b int        names=[a, b], type=int, values=[]
        a string = "x"  names=[a], type=string, values=["x"]

    INVARIANT (checked by the backend, not here):
        A binding needs a declared type, a value, or both.
    """

    pos: Pos
    names: List[Ident]
    type: Optional[Expression] = None
    values: List[Expression] = field(default_factory=list)
    doc: Optional[CommentGroup] = None


@dataclass(frozen=True)
class TypeSpec:
    """`Name T`, or `Name = T` when alias is True."""

    pos: Pos
    name: Ident
    type: Expression
    alias: bool = False
    doc: Optional[CommentGroup] = None


# =========================================================================
# DECLARATIONS
# =========================================================================


@dataclass(frozen=True)
class ImportDecl:
    pos: Pos
    specs: List[ImportSpec]
    grouped: bool = False
    doc: Optional[CommentGroup] = None


@dataclass(frozen=True)
class ConstDecl:
    pos: Pos
    specs: List[ValueSpec]
    grouped: bool = False
    doc: Optional[CommentGroup] = None


@dataclass(frozen=True)
class VarDecl:
    pos: Pos
    specs: List[ValueSpec]
    grouped: bool = False
    doc: Optional[CommentGroup] = None


@dataclass(frozen=True)
class TypeDecl:
    pos: Pos
    specs: List[TypeSpec]
    grouped: bool = False
    doc: Optional[CommentGroup] = None


@dataclass(frozen=True)
class FuncDecl:
    """
    A function or method declaration.

    Properties:
        pos: position of the `func` keyword
        recv: receiver list for methods, None for plain functions
        type_params: `[T any]` list of a generic function, if any
        results: None when the signature declares no result
        body: None for a body-less declaration such as `func a()`
    """

    pos: Pos
    name: Ident
    params: FieldList
    results: Optional[FieldList] = None
    recv: Optional[FieldList] = None
    type_params: Optional[FieldList] = None
    body: Optional[BlockStmt] = None
    doc: Optional[CommentGroup] = None


Declaration = Union[ImportDecl, ConstDecl, VarDecl, TypeDecl, FuncDecl]


@dataclass
class SourceFile:
    """
    Root container for one parsed unit.

    Properties:
        pos: position of the `package` keyword
        package: unit name from the package clause
        doc: comment group directly above the package clause (no blank line)
        decls: top-level declarations in source order
        comments: every comment group in the unit, in source order
        source: UTF-8 unit text the byte offsets refer to
        filename: virtual file name used in diagnostics
    """

    pos: Pos
    package: Ident
    doc: Optional[CommentGroup] = None
    decls: List[Declaration] = field(default_factory=list)
    comments: List[CommentGroup] = field(default_factory=list)
    source: bytes = field(default=b"", repr=False)
    filename: str = "src.go"

    def get_decl(self, name: str) -> Optional[Declaration]:
        """
        Retrieve the first function, binding or type declaring `name`.

        Args:
            name: declared identifier

        Returns:
            Declaration or None if not found
        """
        for decl in self.decls:
            if isinstance(decl, FuncDecl):
                if decl.name.name == name:
                    return decl
            elif isinstance(decl, (ConstDecl, VarDecl)):
                for spec in decl.specs:
                    if any(ident.name == name for ident in spec.names):
                        return decl
            elif isinstance(decl, TypeDecl):
                if any(spec.name.name == name for spec in decl.specs):
                    return decl
        return None
