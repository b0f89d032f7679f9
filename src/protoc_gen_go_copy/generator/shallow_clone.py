from __future__ import annotations

from typing import List

from protoc_gen_go_copy.fields import Field
from protoc_gen_go_copy.generator.go_file import GoFile, Method
from protoc_gen_go_copy.models import ProtoMessage


def generate_shallow_clone(
    go_file: GoFile,
    message: ProtoMessage,
    fields: List[Field],
    method_name: str,
) -> Method:
    """Emit a nil-safe clone copying every field, oneof holders included, by assignment."""
    type_name = go_file.qualified(message.go_ident)
    method = Method(
        receiver=f"x *{type_name}",
        name=method_name,
        results=f"(c *{type_name})",
        comment=[f"{method_name} returns a shallow copy of the receiver or nil if it's nil."],
    )
    body = method.body
    body.append("\tif x != nil {")
    body.append(f"\t\tc = new({type_name})")
    for field in fields:
        body.append(f"\t\tc.{field.name} = x.{field.name}")
    body.append("\t}")
    body.append("\treturn")
    return method
