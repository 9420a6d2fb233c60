"""
Transpile entry points: unit text in, C text out.

All-or-nothing: the sink is written once, after the whole unit has been
parsed and translated. On any error nothing is written.
"""

import io
import logging
import os
from typing import IO, Optional, Union

from goc.backends import CGenerator, StatementPolicy
from goc.parser import DEFAULT_FILENAME, parse_source

logger = logging.getLogger(__name__)

Source = Union[str, bytes, IO]


def _read_source(src: Source) -> Union[str, bytes]:
    """Unit text as read; UTF-8 validation happens in the parser."""
    if hasattr(src, "read"):
        src = src.read()
    if isinstance(src, (str, bytes)):
        return src
    raise TypeError(f"Unsupported source type: {type(src)}")


def transpile(
    out: IO,
    src: Source,
    filename: str = DEFAULT_FILENAME,
    policy: StatementPolicy = StatementPolicy.FAIL,
    logger: Optional[logging.Logger] = None,
) -> int:
    """
    Translate one Go unit into C and write it to `out`.

    Args:
        out: text or binary sink
        src: unit text as str, bytes, or a readable stream
        filename: virtual file name used in parse errors
        policy: handling of unsupported function-body statements
        logger: logger to use instead of the package loggers

    Returns:
        number of characters (text sink) or bytes (binary sink) written

    Raises:
        ParseError: malformed input, including invalid UTF-8
        UnsupportedError: a construct with no C translation
    """
    log = logger or logging.getLogger(__name__)
    source_file = parse_source(_read_source(src), filename=filename)
    log.debug("%s: parsed %d declaration(s)", filename, len(source_file.decls))
    generator = CGenerator(source_file, policy=policy, log=logger)
    generator.generate()
    return generator.writer.write_to(out)


def transpile_string(src: Source, **options) -> str:
    """Translate a unit and return the C text."""
    out = io.StringIO()
    transpile(out, src, **options)
    return out.getvalue()


def transpile_file(src_path: str, dst_path: Optional[str] = None, **options) -> int:
    """
    Translate a Go file into a C file.

    The destination defaults to the source path with a `.c` suffix. It is
    created only after translation succeeds.

    Returns:
        number of characters written
    """
    if dst_path is None:
        dst_path = os.path.splitext(src_path)[0] + ".c"
    options.setdefault("filename", src_path)
    with open(src_path, "rb") as f:
        content = f.read()
    c_text = transpile_string(content, **options)
    with open(dst_path, "w", encoding="utf-8") as f:
        f.write(c_text)
    logger.info("wrote %s", dst_path)
    return len(c_text)


__all__ = ["transpile", "transpile_string", "transpile_file"]
