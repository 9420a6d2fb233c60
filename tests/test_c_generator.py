"""
Tests for the C generator (syntax tree → C text).

Checks declaration order, comment placement, the statement policies
and every "unsupported" failure the backend raises.
"""

import logging

import pytest

from goc.backends import CGenerator, StatementPolicy, generate_c
from goc.errors import (
    UnsupportedBinding,
    UnsupportedDeclaration,
    UnsupportedExpression,
    UnsupportedParameters,
    UnsupportedReceiver,
    UnsupportedReturnType,
    UnsupportedStatement,
    UnsupportedType,
)
from goc.parser import parse_source


def generate(body, **options):
    return generate_c(parse_source("package a\n" + body), **options)


class TestDeclarations:

    def test_source_order(self):
        c = generate('var b = 2\nconst a = "x"\nfunc f() {}\nvar c int')
        assert c == 'int b = 2;\nconst char * const a = "x";\nvoid f() {\n}\nint c = 0;\n'

    def test_import_emits_nothing(self):
        assert generate('import (\n\t"os"\n\t"fmt"\n)') == ""

    def test_prototype(self):
        assert generate("func a()") == "void a();\n"

    def test_empty_result_list(self):
        assert generate("func a() () {}") == "void a() {\n}\n"

    def test_multiple_short_decls(self):
        c = generate('func f() {\n\ta, b := 1, "x"\n}')
        assert c == 'void f() {\n  int a = 1;\n  const char * b = "x";\n}\n'

    def test_local_may_shadow_function(self):
        assert generate("func a() {\n\ta := 0\n}") == "void a() {\n  int a = 0;\n}\n"

    def test_negative_constant(self):
        assert generate("const a = -5") == "const int a = -5;\n"

    def test_raw_string(self):
        assert generate("var p = `C:\\tmp`") == 'const char * p = "C:\\\\tmp";\n'

    def test_integer_literals_respelled(self):
        c = generate("const (\n\ta = 1_000\n\tb = 0o17\n\tc = 0b1\n)")
        assert c == "const int a = 1000;\nconst int b = 15;\nconst int c = 1;\n"

    def test_generate_returns_buffer(self):
        gen = CGenerator(parse_source("package a\nvar a = 1"))
        assert gen.generate() == "int a = 1;\n"
        assert gen.writer.getvalue() == "int a = 1;\n"


class TestComments:

    def test_grouped_specs_and_trailing_comment(self):
        c = generate("var (\n\t// doc a\n\ta = 1\n\tb = 2 // trailing b\n)\nvar c = 3")
        assert c == "// doc a\nint a = 1;\nint b = 2;\n// trailing b\nint c = 3;\n"

    def test_comments_in_body(self):
        c = generate("func a() {\n\t// first\n\tx := 1\n\t// last\n}")
        assert c == "void a() {\n  // first\n  int x = 1;\n  // last\n}\n"

    def test_trailing_file_comment(self):
        assert generate("var a = 1\n// end") == "int a = 1;\n// end\n"

    def test_comment_between_functions(self):
        c = generate("func a() {}\n\n/* b\n   c */\nfunc b() {}")
        assert c == "void a() {\n}\n/* b\n   c */\nvoid b() {\n}\n"

    def test_comment_only_unit(self):
        assert generate("// just this") == "// just this\n"


class TestStatementPolicies:

    SRC = "func a() {\n\tx := 1\n\tx++\n\tif x > 0 {\n\t\tx = 2 // two\n\t}\n\t// after\n}"

    def test_fail_policy(self):
        with pytest.raises(UnsupportedStatement) as exc_info:
            generate(self.SRC)
        lines = str(exc_info.value).splitlines()
        assert lines[0] == "line 4: unsupported statement: OpaqueStmt"
        assert "  kind: inc_statement" in lines

    def test_comment_policy(self):
        c = generate(self.SRC, policy=StatementPolicy.COMMENT)
        assert c == (
            "void a() {\n"
            "  int x = 1;\n"
            "  // x++\n"
            "  // if x > 0 {\n"
            "  // x = 2 // two\n"
            "  // }\n"
            "  // after\n"
            "}\n"
        )

    def test_comment_policy_logs_warnings(self, caplog):
        with caplog.at_level(logging.WARNING, logger="goc.backends.c_generator"):
            generate(self.SRC, policy=StatementPolicy.COMMENT)
        messages = [r.getMessage() for r in caplog.records]
        assert messages == [
            "line 4: unsupported inc_statement kept as a comment",
            "line 5: unsupported if_statement kept as a comment",
        ]

    def test_debug_logging(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="goc.backends.c_generator"):
            generate('import "os"\nvar a, b int\nfunc f() {}')
        messages = [r.getMessage() for r in caplog.records]
        assert "line 2: skipping import" in messages
        assert "line 3: 2 binding(s)" in messages
        assert "line 4: function f" in messages

    def test_unsupported_short_var_decl_target(self):
        with pytest.raises(UnsupportedStatement):
            generate("func a() {\n\tx.y := 1\n}")


class TestUnsupported:

    def test_return_type(self):
        with pytest.raises(UnsupportedReturnType):
            generate("func a() int {}")

    def test_return_type_checked_before_parameters(self):
        with pytest.raises(UnsupportedReturnType):
            generate("func a(x int) (int, error) {}")

    def test_parameters(self):
        with pytest.raises(UnsupportedParameters) as exc_info:
            generate("func a(x int) {}")
        assert str(exc_info.value).splitlines()[0] == "line 2: unsupported parameters: FieldList"

    def test_receiver(self):
        with pytest.raises(UnsupportedReceiver) as exc_info:
            generate("func (t T) a() {}")
        assert str(exc_info.value).splitlines()[0] == "line 2: unsupported receiver: FieldList"

    def test_type_parameters(self):
        with pytest.raises(UnsupportedParameters) as exc_info:
            generate("func a[T any]() {}")
        assert exc_info.value.line == 2
        assert "T" in str(exc_info.value)

    def test_literal_of_another_type(self):
        with pytest.raises(UnsupportedExpression) as exc_info:
            generate('var a int = "s"')
        assert str(exc_info.value).splitlines()[0] == "line 2: unsupported expression: BasicLit"

    def test_type_declaration(self):
        with pytest.raises(UnsupportedDeclaration) as exc_info:
            generate("type T int")
        assert str(exc_info.value).splitlines()[0] == "line 2: unsupported declaration: TypeDecl"

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedType) as exc_info:
            generate("var x float64")
        assert str(exc_info.value) == "line 2: unsupported type: float64"

    def test_non_literal_value(self):
        with pytest.raises(UnsupportedExpression) as exc_info:
            generate("var a = b")
        assert str(exc_info.value).splitlines()[0] == "line 2: unsupported expression: Ident"

    def test_value_count_mismatch(self):
        with pytest.raises(UnsupportedBinding):
            generate("var a, b = 1")

    def test_implicit_const_repetition(self):
        with pytest.raises(UnsupportedBinding) as exc_info:
            generate("const (\n\ta = 1\n\tb\n)")
        assert exc_info.value.line == 4

    def test_error_dump_lists_fields(self):
        with pytest.raises(UnsupportedReturnType) as exc_info:
            generate("func a() (int, error) {}")
        lines = str(exc_info.value).splitlines()
        assert lines[1].startswith("  opening:")
        assert "  - node: Field" in lines
