"""Backends for goc output generation (C)."""

from .c_generator import CGenerator, StatementPolicy, generate_c
from .c_types import CBinding, CType, TYPE_MAP, map_binding
from .c_writer import CWriter

__all__ = [
    "CGenerator",
    "StatementPolicy",
    "generate_c",
    "CBinding",
    "CType",
    "TYPE_MAP",
    "map_binding",
    "CWriter",
]
