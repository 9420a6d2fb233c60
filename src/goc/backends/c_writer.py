"""
Line buffer for generated C text.

Every emitted logical line ends with exactly one newline. Function bodies
are wrapped as:

    <return type> <name>() {
      <statement>;
    }
"""

import io
from typing import IO, List

INDENT = "  "


class CWriter:
    """Accumulates C lines; nothing reaches a sink until `write_to`."""

    def __init__(self):
        self._lines: List[str] = []
        self._depth = 0

    def _indent(self) -> str:
        return INDENT * self._depth

    def comment(self, text: str) -> None:
        """Emit comment text verbatim at the current indentation."""
        self._lines.append(self._indent() + text)

    def statement(self, text: str) -> None:
        self._lines.append(self._indent() + text + ";")

    def prototype(self, return_type: str, name: str) -> None:
        self.statement(f"{return_type} {name}()")

    def open_function(self, return_type: str, name: str) -> None:
        self._lines.append(f"{self._indent()}{return_type} {name}() {{")
        self._depth += 1

    def close_function(self) -> None:
        self._depth -= 1
        self._lines.append(self._indent() + "}")

    def getvalue(self) -> str:
        return "".join(line + "\n" for line in self._lines)

    def write_to(self, out: IO) -> int:
        """
        Write the buffer to a text or binary sink.

        Returns:
            characters written for text sinks, bytes for binary sinks
        """
        text = self.getvalue()
        if isinstance(out, (io.RawIOBase, io.BufferedIOBase)):
            data = text.encode("utf-8")
            out.write(data)
            return len(data)
        out.write(text)
        return len(text)


__all__ = ["INDENT", "CWriter"]
