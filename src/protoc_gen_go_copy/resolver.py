from __future__ import annotations

import logging
from typing import Dict, List

from protoc_gen_go_copy.errors import RegistrationError
from protoc_gen_go_copy.fields import Field, build_fields
from protoc_gen_go_copy.models import GoIdent, ProtoEnum, ProtoFile, ProtoMessage


class Resolver:
    """Per-run cache of the types declared by registered files.

    Files are registered incrementally, in request order, so that types
    referenced across files resolve even when the declaring file is not
    itself generated. Nothing is ever evicted.
    """

    def __init__(self) -> None:
        self._messages: Dict[str, ProtoMessage] = {}
        self._enums: Dict[str, ProtoEnum] = {}
        self._fields: Dict[str, List[Field]] = {}

    def add_file(self, proto_file: ProtoFile) -> None:
        for enum in proto_file.enums:
            self._enums[enum.full_name] = enum
        for msg in proto_file.messages:
            self._add_message(msg)
        logging.debug("Registered %r", proto_file.path)

    def _add_message(self, msg: ProtoMessage) -> None:
        self._messages[msg.full_name] = msg
        for enum in msg.enums:
            self._enums[enum.full_name] = enum
        for nested in msg.messages:
            self._add_message(nested)

    def message(self, full_name: str) -> ProtoMessage:
        msg = self._messages.get(full_name)
        if msg is None:
            raise RegistrationError(f"message {full_name!r} was referenced before its file was registered")
        return msg

    def message_type(self, full_name: str) -> GoIdent:
        return self.message(full_name).go_ident

    def enum_type(self, full_name: str) -> GoIdent:
        enum = self._enums.get(full_name)
        if enum is None:
            raise RegistrationError(f"enum {full_name!r} was referenced before its file was registered")
        return enum.go_ident

    def message_fields(self, msg: ProtoMessage) -> List[Field]:
        """Return the copyable fields of msg, building them on first access."""
        fields = self._fields.get(msg.full_name)
        if fields is None:
            fields = build_fields(msg, self)
            self._fields[msg.full_name] = fields
        return fields
