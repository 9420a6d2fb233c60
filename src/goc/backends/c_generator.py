"""
C generator: walks a parsed unit and emits C declarations.

Declarations are translated strictly in source order:
    - import      only its leading comments
    - const/var   one C line per binding
    - func        `void name() { ... }` for parameterless functions
                  without results
    - type        rejected

Comment placement:
    Each comment group is copied verbatim right before the first
    declaration, binding line or body statement that starts after it.
    Blank lines are not reproduced, so detached groups above the package
    clause merge with the file doc comment. This is a known limitation.

Supports two statement policies:
    - FAIL: any body statement other than `name := literal` is an error
    - COMMENT: such statements are copied into the body as `//` lines
"""

import logging
from enum import Enum
from typing import Optional

from goc.backends.c_types import map_binding
from goc.backends.c_writer import CWriter
from goc.errors import (
    UnsupportedBinding,
    UnsupportedDeclaration,
    UnsupportedParameters,
    UnsupportedReceiver,
    UnsupportedReturnType,
    UnsupportedStatement,
)
from goc.expressions import Ident, Pos
from goc.model import ConstDecl, FuncDecl, ImportDecl, SourceFile, TypeDecl, ValueSpec, VarDecl
from goc.statements import STATEMENT_TYPES, ShortVarDecl

logger = logging.getLogger(__name__)

VOID = "void"


class StatementPolicy(Enum):
    """What to do with a function-body statement that has no C translation."""
    FAIL = "fail"        # raise UnsupportedStatement
    COMMENT = "comment"  # keep its source text as // comment lines


class CGenerator:
    """Single-use walker over one SourceFile."""

    def __init__(
        self,
        source_file: SourceFile,
        policy: StatementPolicy = StatementPolicy.FAIL,
        log: Optional[logging.Logger] = None,
    ):
        self.file = source_file
        self.policy = policy
        self.log = log or logger
        self.writer = CWriter()
        self._comment_index = 0

    def generate(self) -> str:
        for decl in self.file.decls:
            self._emit_decl(decl)
        self._flush_comments()
        return self.writer.getvalue()

    # =====================================================================
    # COMMENTS
    # =====================================================================

    def _flush_comments(self, before: Optional[Pos] = None) -> None:
        """Emit every pending comment group that starts before `before`."""
        groups = self.file.comments
        while self._comment_index < len(groups):
            group = groups[self._comment_index]
            if before is not None and group.pos.offset >= before.offset:
                return
            for comment in group.comments:
                self.writer.comment(comment.text)
            self._comment_index += 1

    def _skip_comments(self, before: Pos) -> None:
        groups = self.file.comments
        while self._comment_index < len(groups) and groups[self._comment_index].pos.offset < before.offset:
            self._comment_index += 1

    # =====================================================================
    # DECLARATIONS
    # =====================================================================

    def _emit_decl(self, decl) -> None:
        if isinstance(decl, ImportDecl):
            self._flush_comments(decl.pos)
            self.log.debug("line %d: skipping import", decl.pos.line)
        elif isinstance(decl, (ConstDecl, VarDecl)):
            constant = isinstance(decl, ConstDecl)
            self._flush_comments(decl.pos)
            for spec in decl.specs:
                self._flush_comments(spec.pos)
                self._emit_value_spec(spec, constant)
        elif isinstance(decl, FuncDecl):
            self._flush_comments(decl.pos)
            self._emit_func(decl)
        elif isinstance(decl, TypeDecl):
            raise UnsupportedDeclaration(decl.pos.line, decl)
        else:
            raise TypeError(f"Unsupported declaration type: {type(decl)}")

    def _emit_value_spec(self, spec: ValueSpec, constant: bool) -> None:
        if spec.values and len(spec.values) != len(spec.names):
            raise UnsupportedBinding(spec.pos.line, spec)
        self.log.debug("line %d: %d binding(s)", spec.pos.line, len(spec.names))
        for i, name in enumerate(spec.names):
            value = spec.values[i] if spec.values else None
            binding = map_binding(name, spec.type, value, constant=constant)
            self.writer.statement(binding.render())

    def _emit_func(self, decl: FuncDecl) -> None:
        line = decl.pos.line
        results = decl.results
        if results is not None and results.fields:
            raise UnsupportedReturnType(line, results)
        if decl.recv is not None:
            raise UnsupportedReceiver(line, decl.recv)
        if decl.params.fields:
            raise UnsupportedParameters(line, decl.params)
        if decl.type_params is not None:
            raise UnsupportedParameters(line, decl.type_params)

        name = decl.name.name
        self.log.debug("line %d: function %s", line, name)
        if decl.body is None:
            self.writer.prototype(VOID, name)
            return

        self.writer.open_function(VOID, name)
        for stmt in decl.body.stmts:
            self._flush_comments(stmt.pos)
            self._emit_stmt(stmt)
        self._flush_comments(decl.body.rbrace)
        self.writer.close_function()

    # =====================================================================
    # FUNCTION BODIES
    # =====================================================================

    def _emit_stmt(self, stmt) -> None:
        if not isinstance(stmt, STATEMENT_TYPES):
            raise TypeError(f"Unsupported statement type: {type(stmt)}")
        if isinstance(stmt, ShortVarDecl):
            self._emit_short_var_decl(stmt)
        elif self.policy is StatementPolicy.COMMENT:
            self._emit_verbatim(stmt)
        else:
            raise UnsupportedStatement(stmt.pos.line, stmt)

    def _emit_short_var_decl(self, stmt: ShortVarDecl) -> None:
        if len(stmt.lhs) != len(stmt.rhs) or not all(isinstance(x, Ident) for x in stmt.lhs):
            raise UnsupportedStatement(stmt.pos.line, stmt)
        for name, value in zip(stmt.lhs, stmt.rhs):
            binding = map_binding(name, None, value)
            self.writer.statement(binding.render())

    def _emit_verbatim(self, stmt) -> None:
        text = self.file.source[stmt.pos.offset:stmt.end.offset].decode("utf-8")
        self.log.warning(
            "line %d: unsupported %s kept as a comment", stmt.pos.line, stmt.kind.value
        )
        for line in text.split("\n"):
            self.writer.comment(("// " + line.strip()).rstrip())
        # comments inside the span are already part of the copied text
        self._skip_comments(stmt.end)


def generate_c(
    source_file: SourceFile,
    policy: StatementPolicy = StatementPolicy.FAIL,
    log: Optional[logging.Logger] = None,
) -> str:
    """
    Generate C text for a parsed unit.

    Args:
        source_file: SourceFile from the parser
        policy: handling of unsupported body statements
        log: logger to use instead of this module's logger

    Returns:
        C source text; empty for a unit with no declarations or comments

    Raises:
        UnsupportedError: at the first construct with no C translation
    """
    return CGenerator(source_file, policy=policy, log=log).generate()


__all__ = ["StatementPolicy", "CGenerator", "generate_c"]
