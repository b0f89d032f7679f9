from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional


@dataclass(frozen=True)
class GoIdent:
    """A Go identifier qualified by the import path of its package."""

    go_name: str
    go_import_path: str


class GoKind(str, Enum):
    SCALAR = "scalar"
    BYTES = "bytes"
    ENUM = "enum"
    MESSAGE = "message"
    ONEOF = "oneof"
    SLICE = "slice"
    MAP = "map"


@dataclass(frozen=True)
class GoType:
    """The Go type of a getter result.

    SCALAR carries a builtin name, ENUM/MESSAGE/ONEOF a GoIdent,
    SLICE an element type and MAP a key and element type.
    """

    kind: GoKind
    name: str = ""
    ident: Optional[GoIdent] = None
    elem: Optional[GoType] = None
    key: Optional[GoType] = None

    @property
    def is_slice(self) -> bool:
        return self.kind in (GoKind.BYTES, GoKind.SLICE)

    def render(self, qualify: Callable[[GoIdent], str]) -> str:
        if self.kind == GoKind.SCALAR:
            return self.name
        if self.kind == GoKind.BYTES:
            return "[]byte"
        if self.kind in (GoKind.ENUM, GoKind.ONEOF):
            return qualify(self.ident)
        if self.kind == GoKind.MESSAGE:
            return "*" + qualify(self.ident)
        if self.kind == GoKind.SLICE:
            return "[]" + self.elem.render(qualify)
        return f"map[{self.key.render(qualify)}]{self.elem.render(qualify)}"


def scalar(name: str) -> GoType:
    return GoType(GoKind.SCALAR, name=name)


@dataclass
class ProtoEnum:
    full_name: str
    go_ident: GoIdent


@dataclass
class ProtoOneof:
    name: str
    go_name: str
    go_ident: GoIdent
    fields: List[ProtoField] = field(default_factory=list)
    is_synthetic: bool = False

    @property
    def interface_ident(self) -> GoIdent:
        """The unexported interface type implemented by every wrapper of this oneof."""
        return GoIdent("is" + self.go_ident.go_name, self.go_ident.go_import_path)


@dataclass
class ProtoField:
    """A field as declared in a message descriptor, with its Go naming resolved.

    For oneof members go_ident names the wrapper struct; otherwise it is
    informational.
    """

    name: str
    type: str
    go_name: str
    go_ident: GoIdent
    type_name: str = ""
    is_repeated: bool = False
    has_presence: bool = False
    oneof: Optional[ProtoOneof] = None

    @property
    def in_real_oneof(self) -> bool:
        return self.oneof is not None and not self.oneof.is_synthetic


@dataclass
class ProtoMessage:
    full_name: str
    go_ident: GoIdent
    fields: List[ProtoField] = field(default_factory=list)
    oneofs: List[ProtoOneof] = field(default_factory=list)
    messages: List[ProtoMessage] = field(default_factory=list)
    enums: List[ProtoEnum] = field(default_factory=list)
    is_map_entry: bool = False


@dataclass
class ProtoFile:
    path: str
    go_import_path: str
    go_package_name: str
    generated_filename_prefix: str
    generate: bool = False
    messages: List[ProtoMessage] = field(default_factory=list)
    enums: List[ProtoEnum] = field(default_factory=list)
