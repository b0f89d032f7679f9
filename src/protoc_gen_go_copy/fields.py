from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

from protoc_gen_go_copy.models import GoIdent, GoKind, GoType, ProtoField, ProtoMessage, ProtoOneof, scalar

if TYPE_CHECKING:
    from protoc_gen_go_copy.resolver import Resolver

# Proto scalar type -> Go type, as protoc-gen-go maps them.
SCALAR_GO_TYPES: Dict[str, str] = {
    "bool": "bool",
    "int32": "int32",
    "sint32": "int32",
    "sfixed32": "int32",
    "uint32": "uint32",
    "fixed32": "uint32",
    "int64": "int64",
    "sint64": "int64",
    "sfixed64": "int64",
    "uint64": "uint64",
    "fixed64": "uint64",
    "float": "float32",
    "double": "float64",
    "string": "string",
}


class DefaultTest(str, Enum):
    """How a oneof variant's getter result is tested for the default value."""

    ZERO_VALUE = "zero_value"
    # Slices are not comparable with ==.
    NIL_CHECK = "nil_check"


@dataclass(frozen=True)
class Getter:
    name: str
    result: GoType


@dataclass
class OneofVariant:
    getter: Getter
    wrapper: GoIdent
    field_name: str
    default_test: DefaultTest


@dataclass
class Field:
    """A field as seen by the emitters: a plain field or the holder of a oneof."""

    name: str
    getter: Getter
    oneof: Optional[ProtoOneof] = None
    variants: List[OneofVariant] = field(default_factory=list)
    # Explicit-presence scalar: stored as *T, getter returns T.
    pointer_scalar: bool = False


def field_go_type(proto_field: ProtoField, resolver: Resolver) -> GoType:
    """The Go type returned by the getter of proto_field."""
    if proto_field.is_repeated and proto_field.type == "message":
        entry = resolver.message(proto_field.type_name)
        if entry.is_map_entry:
            key, value = entry.fields[0], entry.fields[1]
            return GoType(
                GoKind.MAP,
                key=_element_go_type(key, resolver),
                elem=_element_go_type(value, resolver),
            )
    elem = _element_go_type(proto_field, resolver)
    if proto_field.is_repeated:
        return GoType(GoKind.SLICE, elem=elem)
    return elem


def _element_go_type(proto_field: ProtoField, resolver: Resolver) -> GoType:
    if proto_field.type in SCALAR_GO_TYPES:
        return scalar(SCALAR_GO_TYPES[proto_field.type])
    if proto_field.type == "bytes":
        return GoType(GoKind.BYTES)
    if proto_field.type == "enum":
        return GoType(GoKind.ENUM, ident=resolver.enum_type(proto_field.type_name))
    # message and group
    return GoType(GoKind.MESSAGE, ident=resolver.message_type(proto_field.type_name))


def default_test_for(go_type: GoType) -> DefaultTest:
    if go_type.is_slice:
        return DefaultTest.NIL_CHECK
    return DefaultTest.ZERO_VALUE


def _is_pointer_scalar(proto_field: ProtoField) -> bool:
    return (
        proto_field.has_presence
        and not proto_field.is_repeated
        and not proto_field.in_real_oneof
        and proto_field.type not in ("message", "group", "bytes")
    )


def build_fields(msg: ProtoMessage, resolver: Resolver) -> List[Field]:
    """Build the ordered field list of msg.

    Plain fields map one-to-one; each real oneof appears once, as a holder
    field at the position of its first member, carrying every member as a
    variant in declaration order.
    """
    fields: List[Field] = []
    for proto_field in msg.fields:
        if proto_field.in_real_oneof:
            oneof = proto_field.oneof
            if oneof.fields[0] is not proto_field:
                continue
            fields.append(_holder_field(oneof, resolver))
            continue
        fields.append(Field(
            name=proto_field.go_name,
            getter=Getter("Get" + proto_field.go_name, field_go_type(proto_field, resolver)),
            pointer_scalar=_is_pointer_scalar(proto_field),
        ))
    return fields


def _holder_field(oneof: ProtoOneof, resolver: Resolver) -> Field:
    variants = []
    for member in oneof.fields:
        result = field_go_type(member, resolver)
        variants.append(OneofVariant(
            getter=Getter("Get" + member.go_name, result),
            wrapper=member.go_ident,
            field_name=member.go_name,
            default_test=default_test_for(result),
        ))
    return Field(
        name=oneof.go_name,
        getter=Getter("Get" + oneof.go_name, GoType(GoKind.ONEOF, ident=oneof.interface_ident)),
        oneof=oneof,
        variants=variants,
    )
