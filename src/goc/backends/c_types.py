"""
Type & literal mapping from Go bindings to C declarations.

Pure functions, total over the supported type set:

    Go type   C type          const C type           zero default
    int       int             const int              0
    string    const char *    const char * const     ""

A const string keeps both the pointee and the pointer immutable, which is
why its const form is not simply `const ` + the C type.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from goc.errors import UnsupportedBinding, UnsupportedExpression, UnsupportedType
from goc.expressions import BasicLit, Expression, Ident, LiteralKind, UnaryExpr


@dataclass(frozen=True)
class CType:
    """C rendering of one Go type."""

    go_name: str
    c_name: str
    c_const_name: str
    zero: str


TYPE_MAP: Dict[str, CType] = {
    "int": CType("int", "int", "const int", "0"),
    "string": CType("string", "const char *", "const char * const", '""'),
}

# Type inferred for an untyped literal.
LITERAL_TYPES: Dict[LiteralKind, str] = {
    LiteralKind.INT: "int",
    LiteralKind.STRING: "string",
}


@dataclass(frozen=True)
class CBinding:
    """One mapped binding, rendered as `<c_type> <name> = <value>`."""

    c_type: str
    name: str
    value: str

    def render(self) -> str:
        return f"{self.c_type} {self.name} = {self.value}"


def _quote_raw_string(lit: str) -> str:
    """Turn a Go raw string `...` into an equivalent C string literal."""
    body = lit[1:-1].replace("\r", "")
    body = body.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{body}"'


def _c_int_literal(text: str) -> str:
    """
    Spell a Go integer literal so a C compiler reads the same value.

    Decimal, hex and legacy octal literals are valid C as written. Digit
    separators and the 0o/0b prefixes are not, so those are rewritten in
    decimal:
        1_000 → 1000    0o17 → 15    0b101 → 5    0_17 → 15
    """
    if "_" not in text and text[:2].lower() not in ("0o", "0b"):
        return text
    digits = text.replace("_", "")
    if len(digits) > 1 and digits[0] == "0" and digits[1].isdigit():
        return str(int(digits, 8))
    return str(int(digits, 0))


def map_literal(expr: Expression, line: int) -> Tuple[str, str]:
    """
    Map a literal initializer to (Go type name, C literal text).

    Interpreted string literals are carried through unchanged, raw strings
    are re-quoted and integer literals are respelled in a C-compatible form.
    A sign applied to an integer literal is kept as part of the literal.

    Raises:
        UnsupportedExpression: for any other expression, including
            float, imaginary and rune literals
    """
    if isinstance(expr, BasicLit) and expr.kind in LITERAL_TYPES:
        text = expr.value
        if expr.kind is LiteralKind.STRING and text.startswith("`"):
            text = _quote_raw_string(text)
        elif expr.kind is LiteralKind.INT:
            text = _c_int_literal(text)
        return LITERAL_TYPES[expr.kind], text
    if (
        isinstance(expr, UnaryExpr)
        and expr.op in ("-", "+")
        and isinstance(expr.x, BasicLit)
        and expr.x.kind is LiteralKind.INT
    ):
        return "int", expr.op + _c_int_literal(expr.x.value)
    raise UnsupportedExpression(line, expr)


def lookup_type(typ: Expression, line: int) -> CType:
    """
    Resolve a declared type expression.

    Raises:
        UnsupportedType: carrying the type name for unknown names, or the
            type node for anything that is not a plain name
    """
    if not isinstance(typ, Ident):
        raise UnsupportedType(line, typ)
    ctype = TYPE_MAP.get(typ.name)
    if ctype is None:
        raise UnsupportedType(line, typ.name)
    return ctype


def map_binding(
    name: Ident,
    declared_type: Optional[Expression] = None,
    value: Optional[Expression] = None,
    constant: bool = False,
) -> CBinding:
    """
    Map one binding to its C declaration.

    Args:
        name: bound identifier; its line is used for error attribution
        declared_type: explicit type, if any
        value: literal initializer, if any
        constant: True inside a const declaration

    Returns:
        CBinding with the C type and either the literal or the zero default

    Raises:
        UnsupportedBinding: neither a type nor a value is present
        UnsupportedType: the declared type has no mapping
        UnsupportedExpression: the initializer is not a supported literal,
            or its type differs from the declared type
    """
    line = name.pos.line
    if declared_type is None and value is None:
        raise UnsupportedBinding(line, name)

    literal = None
    go_type = None
    if value is not None:
        go_type, literal = map_literal(value, line)
    if declared_type is None:
        ctype = TYPE_MAP[go_type]
    else:
        ctype = lookup_type(declared_type, line)
        if go_type is not None and go_type != ctype.go_name:
            raise UnsupportedExpression(line, value)

    return CBinding(
        c_type=ctype.c_const_name if constant else ctype.c_name,
        name=name.name,
        value=literal if literal is not None else ctype.zero,
    )


__all__ = [
    "CType",
    "CBinding",
    "TYPE_MAP",
    "LITERAL_TYPES",
    "map_literal",
    "lookup_type",
    "map_binding",
]
