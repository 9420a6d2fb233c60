"""
Go Parser (Layer 1: Unit Text → Declaration Model).

The Go grammar itself comes from tree-sitter (`tree_sitter_language_pack`).
This module only lowers the concrete syntax tree into the small tagged
model the C backend consumes:

    source_file            → SourceFile
    import_declaration     → ImportDecl
    const_declaration      → ConstDecl
    var_declaration        → VarDecl
    type_declaration       → TypeDecl
    function_declaration   → FuncDecl
    method_declaration     → FuncDecl with a receiver
    short_var_declaration  → ShortVarDecl
    any other statement    → OpaqueStmt
    comment                → Comment, grouped into CommentGroups

Parse failures are reported at the first ERROR or MISSING node:
    src.go:1:1: expected 'package', found 'EOF'
    src.go:2:9: syntax error: unexpected '@'

Comment handling:
    - Comments on adjacent lines with no token between them form one group
    - A group starting on the line of the previous token is a trailing
      comment; it only groups with comments on that same line
    - A non-trailing group ending on the line just above a declaration
      is its `doc`
    - Every group is recorded on SourceFile.comments in source order
"""

from typing import Dict, Iterator, List, Optional, Union

import tree_sitter_language_pack

from goc.errors import ParseError
from goc.expressions import (
    BasicLit,
    Expression,
    Field,
    FieldList,
    Ident,
    LiteralKind,
    OpaqueExpr,
    Pos,
    UnaryExpr,
)
from goc.model import (
    Comment,
    CommentGroup,
    ConstDecl,
    FuncDecl,
    ImportDecl,
    ImportSpec,
    SourceFile,
    TypeDecl,
    TypeSpec,
    ValueSpec,
    VarDecl,
)
from goc.statements import BlockStmt, OpaqueStmt, ShortVarDecl, StmtKind

DEFAULT_FILENAME = "src.go"

LANGUAGE = "go"

_BOM = b"\xef\xbb\xbf"

_LITERAL_KINDS = {
    "int_literal": LiteralKind.INT,
    "float_literal": LiteralKind.FLOAT,
    "imaginary_literal": LiteralKind.IMAG,
    "rune_literal": LiteralKind.CHAR,
    "interpreted_string_literal": LiteralKind.STRING,
    "raw_string_literal": LiteralKind.STRING,
}

_STMT_KINDS = {kind.value: kind for kind in StmtKind}


def _encode(source: Union[str, bytes], filename: str) -> bytes:
    """UTF-8 bytes of the unit, without a leading byte order mark."""
    if isinstance(source, str):
        try:
            data = source.encode("utf-8")
        except UnicodeEncodeError as e:
            line = source.count("\n", 0, e.start) + 1
            line_start = source.rfind("\n", 0, e.start) + 1
            column = len(source[line_start:e.start].encode("utf-8", "replace")) + 1
            raise ParseError(filename, line, column, "illegal UTF-8 encoding") from e
    else:
        data = bytes(source)
        try:
            data.decode("utf-8")
        except UnicodeDecodeError as e:
            line = data.count(b"\n", 0, e.start) + 1
            column = e.start - (data.rfind(b"\n", 0, e.start) + 1) + 1
            raise ParseError(filename, line, column, "illegal UTF-8 encoding") from e
    if data.startswith(_BOM):
        data = data[len(_BOM):]
    return data


def _pos(point, offset: int) -> Pos:
    return Pos(offset, point[0] + 1, point[1] + 1)


def _start(node) -> Pos:
    return _pos(node.start_point, node.start_byte)


def _end(node) -> Pos:
    return _pos(node.end_point, node.end_byte)


def _named(node) -> list:
    """Named children, comments excluded."""
    return [c for c in node.named_children if c.type != "comment"]


def _leaves(node) -> Iterator:
    if node.child_count == 0:
        yield node
        return
    for child in node.children:
        yield from _leaves(child)


def _first_error(node):
    """The first ERROR or MISSING node in document order, or None."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


class _Lowerer:
    """Single-use adapter from one tree-sitter tree to a SourceFile."""

    def __init__(self, source: bytes, filename: str, tree):
        self.source = source
        self.filename = filename
        self.root = tree.root_node
        self.comments: List[CommentGroup] = []
        self._trailing: Dict[int, bool] = {}
        self._group_comments()
        # non-trailing groups by the line they end on
        self._docs = {
            group.end_line: group for group in self.comments if not self._trailing[id(group)]
        }

    def _text(self, node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8")

    def _error(self, pos: Pos, message: str) -> None:
        raise ParseError(self.filename, pos.line, pos.column, message)

    def _found(self, node) -> str:
        """Describe a token the way Go's parser does in error messages."""
        text = self._text(node)
        if node.is_named and node.type != "ERROR":
            return text
        if text.strip() == "":
            return "newline" if "\n" in text else "'EOF'"
        return f"'{text}'"

    # =====================================================================
    # COMMENTS
    # =====================================================================

    def _group_comments(self) -> None:
        prev_line = 0
        current: List[Comment] = []
        trailing = False

        def close():
            if current:
                group = CommentGroup(list(current))
                self.comments.append(group)
                self._trailing[id(group)] = trailing
                current.clear()

        for leaf in _leaves(self.root):
            if leaf.type == "comment":
                comment = Comment(_start(leaf), self._text(leaf))
                spread = 0 if trailing else 1
                if current and comment.pos.line <= current[-1].end_line + spread:
                    current.append(comment)
                    continue
                close()
                trailing = prev_line > 0 and comment.pos.line == prev_line
                current.append(comment)
            elif self._text(leaf).strip():
                close()
                prev_line = leaf.end_point[0] + 1
        close()

    def _doc(self, node) -> Optional[CommentGroup]:
        group = self._docs.get(node.start_point[0])
        if group is not None and group.comments[-1].pos.offset < node.start_byte:
            return group
        return None

    # =====================================================================
    # UNIT AND DECLARATIONS
    # =====================================================================

    def lower_file(self) -> SourceFile:
        children = _named(self.root)
        if not children:
            self._error(_end(self.root), "expected 'package', found 'EOF'")
        if children[0].type not in ("package_clause", "ERROR"):
            leaf = next(n for n in _leaves(children[0]) if n.type != "comment")
            self._error(_start(leaf), f"expected 'package', found {self._found(leaf)}")

        error = _first_error(self.root)
        if error is not None:
            self._report(error)

        clause = children[0]
        name = next(c for c in _named(clause) if c.type == "package_identifier")
        decls = []
        for child in children[1:]:
            decls.append(self._lower_decl(child))

        return SourceFile(
            pos=_start(clause),
            package=Ident(_start(name), self._text(name)),
            doc=self._doc(clause),
            decls=decls,
            comments=self.comments,
            source=self.source,
            filename=self.filename,
        )

    def _report(self, node) -> None:
        pos = _start(node)
        if node.is_missing:
            expected = node.type.replace("_", " ") if node.is_named else f"'{node.type}'"
            self._error(pos, f"expected {expected}")
        leaf = next((n for n in _leaves(node) if n.type != "comment"), node)
        self._error(_start(leaf), f"syntax error: unexpected {self._found(leaf)}")

    def _lower_decl(self, node):
        kind = node.type
        if kind == "import_declaration":
            return ImportDecl(
                pos=_start(node),
                specs=[self._lower_import_spec(s) for s in self._specs(node)],
                grouped=self._grouped(node),
                doc=self._doc(node),
            )
        if kind in ("const_declaration", "var_declaration"):
            decl_class = ConstDecl if kind == "const_declaration" else VarDecl
            return decl_class(
                pos=_start(node),
                specs=[self._lower_value_spec(s) for s in self._specs(node)],
                grouped=self._grouped(node),
                doc=self._doc(node),
            )
        if kind == "type_declaration":
            return TypeDecl(
                pos=_start(node),
                specs=[self._lower_type_spec(s) for s in self._specs(node)],
                grouped=self._grouped(node),
                doc=self._doc(node),
            )
        if kind in ("function_declaration", "method_declaration"):
            return self._lower_func(node)
        first = next(n for n in _leaves(node) if n.type != "comment")
        self._error(_start(node), f"expected declaration, found {self._found(first)}")

    def _specs(self, node) -> list:
        """Spec children, looking through `*_spec_list` wrappers."""
        specs = []
        for child in _named(node):
            if child.type.endswith("_spec_list"):
                specs.extend(_named(child))
            else:
                specs.append(child)
        return specs

    def _grouped(self, node) -> bool:
        return any(c.type == "(" or c.type.endswith("_spec_list") for c in node.children)

    def _lower_import_spec(self, node) -> ImportSpec:
        name = node.child_by_field_name("name")
        path = node.child_by_field_name("path")
        return ImportSpec(
            pos=_start(node),
            name=Ident(_start(name), self._text(name)) if name is not None else None,
            path=BasicLit(_start(path), LiteralKind.STRING, self._text(path)),
            doc=self._doc(node),
        )

    def _lower_value_spec(self, node) -> ValueSpec:
        typ = node.child_by_field_name("type")
        value = node.child_by_field_name("value")
        return ValueSpec(
            pos=_start(node),
            names=[self._lower_ident(n) for n in node.children_by_field_name("name")],
            type=self._lower_type(typ) if typ is not None else None,
            values=[self._lower_expr(v) for v in _named(value)] if value is not None else [],
            doc=self._doc(node),
        )

    def _lower_type_spec(self, node) -> TypeSpec:
        return TypeSpec(
            pos=_start(node),
            name=self._lower_ident(node.child_by_field_name("name")),
            type=self._lower_type(node.child_by_field_name("type")),
            alias=node.type == "type_alias",
            doc=self._doc(node),
        )

    def _lower_func(self, node) -> FuncDecl:
        result = node.child_by_field_name("result")
        if result is None:
            results = None
        elif result.type == "parameter_list":
            results = self._lower_fields(result)
        else:
            results = FieldList(None, [Field(_start(result), [], self._lower_type(result))], None)
        recv = node.child_by_field_name("receiver")
        type_params = node.child_by_field_name("type_parameters")
        body = node.child_by_field_name("body")
        return FuncDecl(
            pos=_start(node),
            name=self._lower_ident(node.child_by_field_name("name")),
            params=self._lower_fields(node.child_by_field_name("parameters")),
            results=results,
            recv=self._lower_fields(recv) if recv is not None else None,
            type_params=self._lower_fields(type_params) if type_params is not None else None,
            body=self._lower_block(body) if body is not None else None,
            doc=self._doc(node),
        )

    def _lower_fields(self, node) -> FieldList:
        """`(a, b int, c string)`, `(int, error)` or `[T any]`."""
        fields = []
        for child in _named(node):
            typ = child.child_by_field_name("type")
            fields.append(Field(
                pos=_start(child),
                names=[self._lower_ident(n) for n in child.children_by_field_name("name")],
                type=self._lower_type(typ) if typ is not None else self._opaque(child),
            ))
        closing = node.children[-1] if node.child_count else node
        return FieldList(_start(node), fields, _start(closing))

    # =====================================================================
    # STATEMENTS
    # =====================================================================

    def _lower_block(self, node) -> BlockStmt:
        stmts = []
        for child in _named(node):
            if child.type == "statement_list":
                stmts.extend(self._lower_stmt(s) for s in _named(child))
            else:
                stmts.append(self._lower_stmt(child))
        return BlockStmt(
            pos=_start(node),
            stmts=[s for s in stmts if s is not None],
            rbrace=_start(node.children[-1]),
            end=_end(node),
        )

    def _lower_stmt(self, node):
        if node.type == "empty_statement":
            return None
        if node.type == "short_var_declaration":
            return ShortVarDecl(
                pos=_start(node),
                lhs=[self._lower_expr(x) for x in _named(node.child_by_field_name("left"))],
                rhs=[self._lower_expr(x) for x in _named(node.child_by_field_name("right"))],
                end=_end(node),
            )
        kind = _STMT_KINDS.get(node.type)
        if kind is None:
            raise TypeError(f"Unsupported statement node: {node.type}")
        return OpaqueStmt(_start(node), kind, end=_end(node))

    # =====================================================================
    # EXPRESSIONS AND TYPES
    # =====================================================================

    def _lower_ident(self, node) -> Ident:
        return Ident(_start(node), self._text(node))

    def _lower_type(self, node) -> Expression:
        if node.type == "type_identifier":
            return self._lower_ident(node)
        return self._opaque(node)

    def _lower_expr(self, node) -> Expression:
        if node.type == "identifier":
            return self._lower_ident(node)
        if node.type in _LITERAL_KINDS:
            return BasicLit(_start(node), _LITERAL_KINDS[node.type], self._text(node))
        if node.type == "unary_expression":
            return UnaryExpr(
                _start(node),
                self._text(node.child_by_field_name("operator")),
                self._lower_expr(node.child_by_field_name("operand")),
            )
        return self._opaque(node)

    def _opaque(self, node) -> OpaqueExpr:
        return OpaqueExpr(_start(node), node.type, self._text(node))


def parse_source(source: Union[str, bytes], filename: str = DEFAULT_FILENAME) -> SourceFile:
    """
    Parse unit text into a SourceFile.

    Args:
        source: Go unit text, as str or UTF-8 bytes
        filename: virtual file name used in error messages

    Returns:
        SourceFile with declarations and comment groups

    Raises:
        ParseError: invalid UTF-8, a syntax error, or no package clause
    """
    data = _encode(source, filename)
    tree = tree_sitter_language_pack.get_parser(LANGUAGE).parse(data)
    return _Lowerer(data, filename, tree).lower_file()


def parse_file(filepath: str) -> SourceFile:
    """
    Parse a Go file from disk.

    Raises:
        FileNotFoundError: If file doesn't exist
        ParseError: If parsing fails
    """
    with open(filepath, "rb") as f:
        content = f.read()
    return parse_source(content, filename=filepath)


__all__ = [
    "DEFAULT_FILENAME",
    "parse_source",
    "parse_file",
]
