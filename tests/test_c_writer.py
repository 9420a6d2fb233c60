"""
Tests for the C line buffer.
"""

import io

from goc.backends.c_writer import CWriter


class TestCWriter:

    def test_empty(self):
        assert CWriter().getvalue() == ""

    def test_top_level_lines(self):
        w = CWriter()
        w.comment("// doc")
        w.statement("int a = 1")
        w.prototype("void", "f")
        assert w.getvalue() == "// doc\nint a = 1;\nvoid f();\n"

    def test_function_body_is_indented(self):
        w = CWriter()
        w.open_function("void", "f")
        w.comment("// inside")
        w.statement("int a = 0")
        w.close_function()
        w.statement("int b = 1")
        assert w.getvalue() == "void f() {\n  // inside\n  int a = 0;\n}\nint b = 1;\n"

    def test_write_to_text_sink(self):
        w = CWriter()
        w.statement("int a = 1")
        out = io.StringIO()
        assert w.write_to(out) == 11
        assert out.getvalue() == "int a = 1;\n"

    def test_write_to_binary_sink(self):
        w = CWriter()
        w.comment("// é")
        out = io.BytesIO()
        assert w.write_to(out) == 6
        assert out.getvalue() == "// é\n".encode("utf-8")
