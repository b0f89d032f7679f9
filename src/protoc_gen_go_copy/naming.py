"""Go naming rules, matching the identifiers protoc-gen-go generates."""

from __future__ import annotations

import posixpath

GO_KEYWORDS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer",
    "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
    "interface", "map", "package", "range", "return", "select", "struct",
    "switch", "type", "var",
})


def _is_lower(c: str) -> bool:
    return "a" <= c <= "z"


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def go_camel_case(s: str) -> str:
    """Convert a proto name to the CamelCase form used for Go identifiers.

    "foo_bar" -> "FooBar", "Outer.Inner" -> "Outer_Inner",
    "_foo" -> "XFoo", "foo.bar" -> "FooBar".
    """
    out = []
    i = 0
    n = len(s)
    while i < n:
        c = s[i]
        if c == "." and i + 1 < n and _is_lower(s[i + 1]):
            pass
        elif c == ".":
            out.append("_")
        elif c == "_" and (i == 0 or s[i - 1] == "."):
            out.append("X")
        elif c == "_" and i + 1 < n and _is_lower(s[i + 1]):
            pass
        elif _is_digit(c):
            out.append(c)
        else:
            out.append(c.upper() if _is_lower(c) else c)
            while i + 1 < n and _is_lower(s[i + 1]):
                i += 1
                out.append(s[i])
        i += 1
    return "".join(out)


def go_sanitized(s: str) -> str:
    """Sanitize a string into a valid Go identifier."""
    s = "".join(c if (c.isalpha() or c.isdecimal()) else "_" for c in s)
    if not s or s in GO_KEYWORDS or not s[0].isalpha():
        return "_" + s
    return s


def clean_package_name(name: str) -> str:
    return go_sanitized(name)


def package_name_for_import_path(import_path: str) -> str:
    """Default Go package name for an import path: its sanitized last element."""
    return clean_package_name(posixpath.basename(import_path))


def trim_proto_ext(path: str) -> str:
    if path.endswith(".protodevel"):
        return path[: -len(".protodevel")]
    if path.endswith(".proto"):
        return path[: -len(".proto")]
    return path


def split_go_package(option: str):
    """Split a go_package option into (import path, explicit package name).

    "example.com/foo;foopb" -> ("example.com/foo", "foopb")
    "example.com/foo"       -> ("example.com/foo", "")
    """
    if ";" in option:
        import_path, package_name = option.split(";", 1)
        return import_path, package_name
    return option, ""
