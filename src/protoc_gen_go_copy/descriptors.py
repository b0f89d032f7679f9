from __future__ import annotations

import logging
import posixpath
from typing import Dict, List

from google.protobuf import descriptor_pb2 as d2
from google.protobuf.compiler import plugin_pb2

from protoc_gen_go_copy.config import PATHS_IMPORT, Config
from protoc_gen_go_copy.errors import DescriptorError
from protoc_gen_go_copy.models import (
    GoIdent,
    ProtoEnum,
    ProtoField,
    ProtoFile,
    ProtoMessage,
    ProtoOneof,
)
from protoc_gen_go_copy.naming import (
    clean_package_name,
    go_camel_case,
    package_name_for_import_path,
    split_go_package,
    trim_proto_ext,
)


FDP = d2.FieldDescriptorProto

TYPE_NAMES: Dict[int, str] = {
    FDP.TYPE_DOUBLE: "double",
    FDP.TYPE_FLOAT: "float",
    FDP.TYPE_INT64: "int64",
    FDP.TYPE_UINT64: "uint64",
    FDP.TYPE_INT32: "int32",
    FDP.TYPE_FIXED64: "fixed64",
    FDP.TYPE_FIXED32: "fixed32",
    FDP.TYPE_BOOL: "bool",
    FDP.TYPE_STRING: "string",
    FDP.TYPE_GROUP: "group",
    FDP.TYPE_MESSAGE: "message",
    FDP.TYPE_BYTES: "bytes",
    FDP.TYPE_UINT32: "uint32",
    FDP.TYPE_ENUM: "enum",
    FDP.TYPE_SFIXED32: "sfixed32",
    FDP.TYPE_SFIXED64: "sfixed64",
    FDP.TYPE_SINT32: "sint32",
    FDP.TYPE_SINT64: "sint64",
}

# Methods protoc-gen-go generates on every message; field names must not collide.
RESERVED_METHOD_NAMES = (
    "Reset",
    "String",
    "ProtoMessage",
    "Marshal",
    "Unmarshal",
    "ExtensionRangeArray",
    "ExtensionMap",
    "Descriptor",
)


def load_request(request: plugin_pb2.CodeGeneratorRequest, config: Config) -> List[ProtoFile]:
    """Build the Go-named file model for every file in the request, in request order."""
    to_generate = set(request.file_to_generate)
    return [
        load_file(fdesc, config, generate=fdesc.name in to_generate)
        for fdesc in request.proto_file
    ]


def load_file(fdesc: d2.FileDescriptorProto, config: Config, generate: bool = False) -> ProtoFile:
    import_path, package_name = _go_package(fdesc, config, generate)

    prefix = trim_proto_ext(fdesc.name)
    if config.paths == PATHS_IMPORT:
        prefix = posixpath.join(import_path, posixpath.basename(prefix))

    proto_file = ProtoFile(
        path=fdesc.name,
        go_import_path=import_path,
        go_package_name=package_name,
        generated_filename_prefix=prefix,
        generate=generate,
    )

    loader = _MessageLoader(fdesc, import_path)
    proto_file.enums = [loader.enum(e, fdesc.package) for e in fdesc.enum_type]
    proto_file.messages = [loader.message(m, fdesc.package) for m in fdesc.message_type]
    logging.debug("Loaded %r (import path %r, package %r)", fdesc.name, import_path, package_name)
    return proto_file


def _go_package(fdesc: d2.FileDescriptorProto, config: Config, generate: bool):
    import_path, package_name = "", ""
    if fdesc.options.go_package:
        import_path, package_name = split_go_package(fdesc.options.go_package)
    if fdesc.name in config.import_paths:
        import_path, override_name = split_go_package(config.import_paths[fdesc.name])
        package_name = override_name or package_name

    if not import_path:
        if generate:
            raise DescriptorError(
                f"unable to determine Go import path for {fdesc.name!r}; "
                f"add a go_package option or pass M{fdesc.name}=<import path>"
            )
        # Only referenced, never generated: any stable path works for qualification.
        import_path = posixpath.dirname(fdesc.name) or fdesc.package.replace(".", "/")

    if package_name:
        package_name = clean_package_name(package_name)
    else:
        package_name = package_name_for_import_path(import_path)
    return import_path, package_name


def _relative_name(full_name: str, package: str) -> str:
    if package:
        return full_name[len(package) + 1:]
    return full_name


class _MessageLoader:
    """Maps descriptor protos of one file to the model, applying protoc-gen-go naming."""

    def __init__(self, fdesc: d2.FileDescriptorProto, import_path: str):
        self.fdesc = fdesc
        self.import_path = import_path
        self.syntax = fdesc.syntax or "proto2"

    def _ident(self, full_name: str) -> GoIdent:
        return GoIdent(go_camel_case(_relative_name(full_name, self.fdesc.package)), self.import_path)

    def enum(self, desc: d2.EnumDescriptorProto, scope: str) -> ProtoEnum:
        full_name = f"{scope}.{desc.name}" if scope else desc.name
        return ProtoEnum(full_name=full_name, go_ident=self._ident(full_name))

    def message(self, desc: d2.DescriptorProto, scope: str) -> ProtoMessage:
        full_name = f"{scope}.{desc.name}" if scope else desc.name
        msg = ProtoMessage(
            full_name=full_name,
            go_ident=self._ident(full_name),
            is_map_entry=desc.options.map_entry,
        )
        msg.enums = [self.enum(e, full_name) for e in desc.enum_type]
        msg.messages = [self.message(m, full_name) for m in desc.nested_type]

        for index, odesc in enumerate(desc.oneof_decl):
            members = [f for f in desc.field if f.HasField("oneof_index") and f.oneof_index == index]
            msg.oneofs.append(ProtoOneof(
                name=odesc.name,
                go_name=go_camel_case(odesc.name),
                go_ident=msg.go_ident,
                is_synthetic=bool(members) and all(f.proto3_optional for f in members),
            ))

        for fd in desc.field:
            oneof = msg.oneofs[fd.oneof_index] if fd.HasField("oneof_index") else None
            proto_field = ProtoField(
                name=fd.name,
                type=TYPE_NAMES[fd.type],
                go_name=go_camel_case(fd.name),
                go_ident=msg.go_ident,
                type_name=fd.type_name.lstrip("."),
                is_repeated=fd.label == FDP.LABEL_REPEATED,
                has_presence=self._has_presence(fd, oneof),
                oneof=oneof,
            )
            msg.fields.append(proto_field)
            if oneof is not None:
                oneof.fields.append(proto_field)

        self._resolve_names(msg)
        return msg

    def _has_presence(self, fd: d2.FieldDescriptorProto, oneof) -> bool:
        if fd.label == FDP.LABEL_REPEATED:
            return False
        if oneof is not None or fd.type in (FDP.TYPE_MESSAGE, FDP.TYPE_GROUP):
            return True
        if self.syntax == "proto3":
            return False
        return True

    @staticmethod
    def _resolve_names(msg: ProtoMessage) -> None:
        """Make field and oneof Go names unique and name the oneof wrapper types."""
        used: Dict[str, bool] = {name: True for name in RESERVED_METHOD_NAMES}

        def make_unique(name: str, has_getter: bool) -> str:
            while used.get(name) or (has_getter and used.get("Get" + name)):
                name += "_"
            used[name] = True
            used["Get" + name] = has_getter
            return name

        for f in msg.fields:
            f.go_name = make_unique(f.go_name, True)
            f.go_ident = GoIdent(f"{msg.go_ident.go_name}_{f.go_name}", msg.go_ident.go_import_path)
            if f.oneof is not None and f.oneof.fields[0] is f:
                f.oneof.go_name = make_unique(f.oneof.go_name, False)
                f.oneof.go_ident = GoIdent(
                    f"{msg.go_ident.go_name}_{f.oneof.go_name}", msg.go_ident.go_import_path
                )

        nested = {m.go_ident for m in msg.messages} | {e.go_ident for e in msg.enums}
        for f in msg.fields:
            if f.oneof is None:
                continue
            while f.go_ident in nested:
                f.go_ident = GoIdent(f.go_ident.go_name + "_", f.go_ident.go_import_path)
