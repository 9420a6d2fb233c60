"""
Error taxonomy for translation failures.

Every failure aborts the whole call; nothing is retried or downgraded.

    TranspileError
        ParseError              malformed input, file:line:column
        UnsupportedError        valid input the C backend will not translate
            UnsupportedReturnType
            UnsupportedType
            UnsupportedStatement
            UnsupportedExpression
            UnsupportedBinding
            UnsupportedParameters
            UnsupportedReceiver
            UnsupportedDeclaration
"""

from typing import Any

from goc.serialization import describe_node


class TranspileError(Exception):
    """Base class for every failure raised while translating a unit."""


class ParseError(TranspileError):
    """
    Raised by the parser at invalid UTF-8 or the first syntax error.

    Message format:
        failed to parse: <filename>:<line>:<column>: <message>
    """

    def __init__(self, filename: str, line: int, column: int, message: str):
        self.filename = filename
        self.line = line
        self.column = column
        self.message = message
        super().__init__(f"failed to parse: {filename}:{line}:{column}: {message}")


class UnsupportedError(TranspileError):
    """
    Raised when a well-formed construct has no C translation.

    Message format:
        line <N>: unsupported <construct>: <structural dump>

    The dump starts with the node class name; the remaining lines are an
    indented YAML rendering of the node's fields.
    """

    construct = "construct"

    def __init__(self, line: int, node: Any):
        self.line = line
        self.node = node
        super().__init__(f"line {line}: unsupported {self.construct}: {describe_node(node)}")


class UnsupportedReturnType(UnsupportedError):
    construct = "return type"


class UnsupportedType(UnsupportedError):
    construct = "type"


class UnsupportedStatement(UnsupportedError):
    construct = "statement"


class UnsupportedExpression(UnsupportedError):
    construct = "expression"


class UnsupportedBinding(UnsupportedError):
    construct = "binding"


class UnsupportedParameters(UnsupportedError):
    construct = "parameters"


class UnsupportedReceiver(UnsupportedError):
    construct = "receiver"


class UnsupportedDeclaration(UnsupportedError):
    construct = "declaration"
