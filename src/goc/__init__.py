"""
goc: mechanical Go-to-C declaration translator.

Translates a restricted subset of Go into literal C source text that
mirrors the input declaration by declaration.

ARCHITECTURAL GUARANTEE:
------------------------
The pipeline only moves forward:
    tree-sitter -> model adapter -> C backend -> writer

There is no symbol table and no multi-pass analysis.
A unit is translated completely or not at all.
"""

from goc.backends import StatementPolicy, generate_c
from goc.errors import (
    TranspileError,
    ParseError,
    UnsupportedError,
    UnsupportedReturnType,
    UnsupportedType,
    UnsupportedStatement,
)
from goc.parser import parse_source, parse_file
from goc.transpiler import transpile, transpile_string, transpile_file

__version__ = "0.1.0"

__all__ = [
    "StatementPolicy",
    "generate_c",
    "TranspileError",
    "ParseError",
    "UnsupportedError",
    "UnsupportedReturnType",
    "UnsupportedType",
    "UnsupportedStatement",
    "parse_source",
    "parse_file",
    "transpile",
    "transpile_string",
    "transpile_file",
]
