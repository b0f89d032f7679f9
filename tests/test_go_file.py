from protoc_gen_go_copy.generator.go_file import GoFile, Method
from protoc_gen_go_copy.models import GoIdent


class TestQualified:
    def test_local_ident_is_unqualified(self):
        go_file = GoFile("example.com/a", "a")

        assert go_file.qualified(GoIdent("Msg", "example.com/a")) == "Msg"
        assert go_file.import_specs() == []

    def test_alias_conflicts_are_numbered(self):
        go_file = GoFile("example.com/a", "a")

        assert go_file.qualified(GoIdent("X", "example.com/one/types")) == "types.X"
        assert go_file.qualified(GoIdent("Y", "example.com/two/types")) == "types1.Y"
        assert go_file.qualified(GoIdent("Z", "example.com/one/types")) == "types.Z"
        assert go_file.qualified(GoIdent("W", "example.com/other/a")) == "a1.W"

    def test_imports_sorted_by_path(self):
        go_file = GoFile("example.com/a", "a")
        go_file.qualified(GoIdent("X", "example.com/z"))
        go_file.qualified(GoIdent("Y", "example.com/b"))

        assert go_file.import_specs() == ['b "example.com/b"', 'z "example.com/z"']


class TestRender:
    def test_header_and_package_only(self):
        go_file = GoFile("example.com/a", "apb")
        go_file.file_comment = "Code generated by test. DO NOT EDIT.\nsource: a.proto"

        assert go_file.render() == (
            "// Code generated by test. DO NOT EDIT.\n"
            "// source: a.proto\n"
            "\n"
            "package apb\n"
        )

    def test_methods_separated_by_blank_lines(self):
        go_file = GoFile("example.com/a", "apb")
        go_file.add_method(Method(receiver="x *A", name="One", comment=["One does one."], body=["\treturn"]))
        go_file.add_method(Method(receiver="x *A", name="Two", results="(n int)", body=["\treturn"]))

        assert go_file.render() == (
            "\n"
            "package apb\n"
            "\n"
            "// One does one.\n"
            "func (x *A) One() {\n"
            "\treturn\n"
            "}\n"
            "\n"
            "func (x *A) Two() (n int) {\n"
            "\treturn\n"
            "}\n"
        )
