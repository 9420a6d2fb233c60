"""
Tests for the declaration-level model.
"""

from goc.expressions import Ident, Pos
from goc.model import Comment, CommentGroup, ConstDecl, SourceFile, ValueSpec


class TestComments:

    def test_line_comment(self):
        c = Comment(Pos(0, 3, 1), "// x")
        assert c.end_line == 3

    def test_block_comment_end_line(self):
        c = Comment(Pos(0, 3, 1), "/* a\n b\n */")
        assert c.end_line == 5

    def test_group_properties(self):
        group = CommentGroup([Comment(Pos(0, 1, 1), "// a"), Comment(Pos(5, 2, 1), "// b")])
        assert group.pos == Pos(0, 1, 1)
        assert group.end_line == 2
        assert group.text == "// a\n// b"


class TestSourceFile:

    def test_defaults(self):
        unit = SourceFile(pos=Pos(0, 1, 1), package=Ident(Pos(8, 1, 9), "a"))
        assert unit.decls == []
        assert unit.comments == []
        assert unit.filename == "src.go"
        assert "source" not in repr(unit)

    def test_get_decl_in_group(self):
        p = Pos(0, 1, 1)
        decl = ConstDecl(p, [ValueSpec(p, [Ident(p, "a")]), ValueSpec(p, [Ident(p, "b")])], grouped=True)
        unit = SourceFile(pos=p, package=Ident(p, "a"), decls=[decl])
        assert unit.get_decl("b") is decl


class TestPos:

    def test_str(self):
        assert str(Pos(12, 4, 10)) == "4:10"
