"""Emits the getter-based shallow copy method.

For a message Address { string city; oneof country { bool domestic; string foreign; } }
the emitted method reads:

    func (x *Address) Proto_ShallowCopy(v interface{}) {
        switch v := v.(type) {
        case *Address:
            x.City = v.GetCity()
            x.Country = v.GetCountry()
        default:
            if g, ok := v.(interface{ GetCity() string }); ok {
                x.City = g.GetCity()
            }
            if g, ok := v.(interface{ GetCountry() isAddress_Country }); ok {
                x.Country = g.GetCountry()
            } else {
                func() {
                    if g, ok := v.(interface{ GetDomestic() bool }); ok {
                        var defaultValue bool
                        if val := g.GetDomestic(); val != defaultValue {
                            x.Country = &Address_Domestic{Domestic: val}
                            return
                        }
                    }
                    ...
                }()
            }
        }
    }

The exact type case and the getter matching default case are separate
switch branches. Every field is matched on its own, so a missing getter
only leaves that field untouched, and the first non-default oneof variant
in declaration order wins.

Getter assertions bind g, never v: names declared in an if statement are
still in scope in its else branch, where the variants must assert against
the switch value.
"""

from __future__ import annotations

from typing import List

from protoc_gen_go_copy.fields import DefaultTest, Field, Getter, OneofVariant
from protoc_gen_go_copy.generator.go_file import GoFile, Method
from protoc_gen_go_copy.models import ProtoMessage


def _comment(method_name: str) -> List[str]:
    return [
        f"{method_name} copies fields, from v to the receiver, using field getters.",
        "Note that v is of an arbitrary type, which may implement any number of the",
        "field getters, which are defined as any methods of the same signature as those",
        "generated for the receiver type, with a name starting with Get.",
    ]


def _interface(go_file: GoFile, getter: Getter) -> str:
    return f"interface{{ {getter.name}() {getter.result.render(go_file.qualified)} }}"


def _exact_assign(field: Field, indent: str) -> List[str]:
    if not field.pointer_scalar:
        return [f"{indent}x.{field.name} = v.{field.getter.name}()"]
    # The getter would drop presence; v may be a nil *T.
    return [
        f"{indent}if v != nil {{",
        f"{indent}\tx.{field.name} = v.{field.name}",
        f"{indent}}} else {{",
        f"{indent}\tx.{field.name} = nil",
        f"{indent}}}",
    ]


def _getter_assign(field: Field, indent: str) -> List[str]:
    if not field.pointer_scalar:
        return [f"{indent}x.{field.name} = g.{field.getter.name}()"]
    return [
        f"{indent}val := g.{field.getter.name}()",
        f"{indent}x.{field.name} = &val",
    ]


def _variant_lines(go_file: GoFile, field: Field, variant: OneofVariant, indent: str) -> List[str]:
    getter = variant.getter
    lines = [f"{indent}if g, ok := v.({_interface(go_file, getter)}); ok {{"]
    if variant.default_test == DefaultTest.NIL_CHECK:
        lines.append(f"{indent}\tif val := g.{getter.name}(); val != nil {{")
    else:
        lines.append(f"{indent}\tvar defaultValue {getter.result.render(go_file.qualified)}")
        lines.append(f"{indent}\tif val := g.{getter.name}(); val != defaultValue {{")
    wrapper = go_file.qualified(variant.wrapper)
    lines.append(f"{indent}\t\tx.{field.name} = &{wrapper}{{{variant.field_name}: val}}")
    lines.append(f"{indent}\t\treturn")
    lines.append(f"{indent}\t}}")
    lines.append(f"{indent}}}")
    return lines


def generate_shallow_copy(
    go_file: GoFile,
    message: ProtoMessage,
    fields: List[Field],
    method_name: str,
) -> Method:
    type_name = go_file.qualified(message.go_ident)
    method = Method(
        receiver=f"x *{type_name}",
        name=method_name,
        params="v interface{}",
        comment=_comment(method_name),
    )
    if not fields:
        return method

    body = method.body
    body.append("\tswitch v := v.(type) {")
    body.append(f"\tcase *{type_name}:")
    for field in fields:
        body.extend(_exact_assign(field, "\t\t"))

    body.append("\tdefault:")
    for field in fields:
        body.append(f"\t\tif g, ok := v.({_interface(go_file, field.getter)}); ok {{")
        body.extend(_getter_assign(field, "\t\t\t"))
        if field.oneof is not None:
            body.append("\t\t} else {")
            body.append("\t\t\tfunc() {")
            for variant in field.variants:
                body.extend(_variant_lines(go_file, field, variant, "\t\t\t\t"))
            body.append("\t\t\t}()")
        body.append("\t\t}")
    body.append("\t}")
    return method
