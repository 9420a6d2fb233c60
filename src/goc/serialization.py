"""
Serialization helpers for syntax-tree nodes.

Provides a stable dict representation of any node, JSON/YAML dumps of a
parsed unit, and `describe_node`, the structural dump used in
"unsupported" error messages.
"""
from __future__ import annotations

import json
import textwrap
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Dict

import yaml

from goc.expressions import Pos

# Fields that would repeat the whole unit text in every dump.
_SKIPPED_FIELDS = {"source"}


def node_to_dict(node: Any) -> Any:
    if node is None or isinstance(node, (str, int, bool)):
        return node
    if isinstance(node, Pos):
        return str(node)
    if isinstance(node, Enum):
        return node.value
    if isinstance(node, (list, tuple)):
        return [node_to_dict(item) for item in node]
    if is_dataclass(node):
        d: Dict[str, Any] = {"node": type(node).__name__}
        for f in fields(node):
            if f.name in _SKIPPED_FIELDS:
                continue
            d[f.name] = node_to_dict(getattr(node, f.name))
        return d
    raise TypeError(f"Unsupported node type: {type(node)}")


def describe_node(node: Any) -> str:
    """
    Render a node as a deterministic, multi-line structural dump.

    The first line is the node class name; the fields follow as YAML,
    indented two spaces. Plain strings (e.g. a type name) are returned as is.

    Example:
        FieldList
          opening: '4:10'
          fields:
          - node: Field
            ...
    """
    if isinstance(node, str):
        return node
    d = node_to_dict(node)
    if not isinstance(d, dict):
        return str(d)
    kind = d.pop("node")
    body = yaml.safe_dump(d, sort_keys=False, default_flow_style=False).rstrip("\n")
    return kind + "\n" + textwrap.indent(body, "  ")


def file_to_dict(source_file) -> Dict[str, Any]:
    return node_to_dict(source_file)


def file_to_json(source_file) -> str:
    return json.dumps(file_to_dict(source_file), sort_keys=True)


def file_to_yaml(source_file) -> str:
    return yaml.safe_dump(file_to_dict(source_file), sort_keys=False)


__all__ = [
    "node_to_dict",
    "describe_node",
    "file_to_dict",
    "file_to_json",
    "file_to_yaml",
]
