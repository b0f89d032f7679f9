from protoc_gen_go_copy.config import Config
from protoc_gen_go_copy.descriptors import load_file
from protoc_gen_go_copy.fields import DefaultTest
from protoc_gen_go_copy.models import GoIdent, GoKind
from protoc_gen_go_copy.resolver import Resolver

from proto_builders import FDP, address_file, make_field, make_file, make_map_entry, make_message


def _fields(fdesc, index=0):
    resolver = Resolver()
    proto_file = load_file(fdesc, Config(), generate=True)
    resolver.add_file(proto_file)
    return resolver.message_fields(proto_file.messages[index])


def _render(go_type):
    return go_type.render(lambda ident: ident.go_name)


class TestPlainFields:
    def test_scalar_getters(self):
        msg = make_message("M", fields=[
            make_field("a", 1, FDP.TYPE_SINT32),
            make_field("b", 2, FDP.TYPE_FIXED64),
            make_field("c", 3, FDP.TYPE_FLOAT),
            make_field("d", 4, FDP.TYPE_DOUBLE),
            make_field("e", 5, FDP.TYPE_BYTES),
        ])
        fields = _fields(make_file("a.proto", "pkg", [msg], go_package="x/a"))

        assert [(f.getter.name, _render(f.getter.result)) for f in fields] == [
            ("GetA", "int32"),
            ("GetB", "uint64"),
            ("GetC", "float32"),
            ("GetD", "float64"),
            ("GetE", "[]byte"),
        ]
        assert all(f.oneof is None and not f.variants for f in fields)

    def test_message_enum_and_repeated(self):
        msg = make_message(
            "M",
            fields=[
                make_field("child", 1, FDP.TYPE_MESSAGE, type_name=".pkg.M.Child"),
                make_field("kind", 2, FDP.TYPE_ENUM, type_name=".pkg.M.Kind"),
                make_field("children", 3, FDP.TYPE_MESSAGE, FDP.LABEL_REPEATED, ".pkg.M.Child"),
                make_field("names", 4, FDP.TYPE_STRING, FDP.LABEL_REPEATED),
            ],
            nested=[make_message("Child")],
            enums=["Kind"],
        )
        fields = _fields(make_file("a.proto", "pkg", [msg], go_package="x/a"))

        assert [_render(f.getter.result) for f in fields] == [
            "*M_Child",
            "M_Kind",
            "[]*M_Child",
            "[]string",
        ]

    def test_map_field(self):
        msg = make_message(
            "Bag",
            fields=[make_field("counts", 1, FDP.TYPE_MESSAGE, FDP.LABEL_REPEATED, ".pkg.Bag.CountsEntry")],
            nested=[make_map_entry("CountsEntry", FDP.TYPE_STRING, FDP.TYPE_INT64)],
        )
        (field,) = _fields(make_file("a.proto", "pkg", [msg], go_package="x/a"))

        assert field.getter.result.kind == GoKind.MAP
        assert _render(field.getter.result) == "map[string]int64"

    def test_pointer_scalars(self):
        msg = make_message(
            "M",
            fields=[
                make_field("zip", 1, FDP.TYPE_INT32, oneof_index=0, proto3_optional=True),
                make_field("data", 2, FDP.TYPE_BYTES, oneof_index=1, proto3_optional=True),
                make_field("plain", 3, FDP.TYPE_INT32),
            ],
            oneofs=["_zip", "_data"],
        )
        fields = _fields(make_file("a.proto", "pkg", [msg], go_package="x/a"))

        assert [f.name for f in fields] == ["Zip", "Data", "Plain"]
        assert [f.pointer_scalar for f in fields] == [True, False, False]
        assert all(f.oneof is None for f in fields)


class TestOneofHolder:
    def test_holder_replaces_members(self):
        fields = _fields(address_file())

        assert [f.name for f in fields] == ["City", "Country"]
        holder = fields[1]
        assert holder.getter.name == "GetCountry"
        assert holder.getter.result.ident == GoIdent("isAddress_Country", "example.com/address")

    def test_variants_in_declaration_order(self):
        holder = _fields(address_file())[1]

        assert [v.getter.name for v in holder.variants] == ["GetDomestic", "GetForeign"]
        assert [v.wrapper.go_name for v in holder.variants] == ["Address_Domestic", "Address_Foreign"]
        assert [v.field_name for v in holder.variants] == ["Domestic", "Foreign"]

    def test_holder_at_first_member_position(self):
        msg = make_message(
            "M",
            fields=[
                make_field("a", 1, FDP.TYPE_STRING),
                make_field("x", 2, FDP.TYPE_STRING, oneof_index=0),
                make_field("b", 3, FDP.TYPE_STRING),
                make_field("y", 4, FDP.TYPE_STRING, oneof_index=0),
            ],
            oneofs=["choice"],
        )
        fields = _fields(make_file("a.proto", "pkg", [msg], go_package="x/a"))

        assert [f.name for f in fields] == ["A", "Choice", "B"]
        assert [v.field_name for v in fields[1].variants] == ["X", "Y"]

    def test_default_tests_by_kind(self):
        msg = make_message(
            "M",
            fields=[
                make_field("text", 1, FDP.TYPE_STRING, oneof_index=0),
                make_field("blob", 2, FDP.TYPE_BYTES, oneof_index=0),
                make_field("child", 3, FDP.TYPE_MESSAGE, type_name=".pkg.M", oneof_index=0),
                make_field("kind", 4, FDP.TYPE_ENUM, type_name=".pkg.Kind", oneof_index=0),
            ],
            oneofs=["value"],
        )
        fdesc = make_file("a.proto", "pkg", [msg], go_package="x/a", enums=["Kind"])
        holder = _fields(fdesc)[0]

        assert [v.default_test for v in holder.variants] == [
            DefaultTest.ZERO_VALUE,
            DefaultTest.NIL_CHECK,
            DefaultTest.ZERO_VALUE,
            DefaultTest.ZERO_VALUE,
        ]
