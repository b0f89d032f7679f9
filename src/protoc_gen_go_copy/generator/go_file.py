from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader

from protoc_gen_go_copy.models import GoIdent
from protoc_gen_go_copy.naming import package_name_for_import_path


@dataclass
class Method:
    """A method declaration; body lines are already indented with tabs."""

    receiver: str
    name: str
    params: str = ""
    results: str = ""
    comment: List[str] = field(default_factory=list)
    body: List[str] = field(default_factory=list)


def _get_template_env() -> Environment:
    template_dir = Path(__file__).parent.parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


class GoFile:
    """An in-memory Go source file: package clause, imports and methods.

    Identifiers from other packages are qualified through qualified(),
    which records the import and picks a unique alias for it.
    """

    def __init__(self, import_path: str, package_name: str):
        self.import_path = import_path
        self.package_name = package_name
        self.file_comment = ""
        self.methods: List[Method] = []
        self._aliases: Dict[str, str] = {}
        self._used_names = {package_name}

    def qualified(self, ident: GoIdent) -> str:
        if ident.go_import_path == self.import_path:
            return ident.go_name
        alias = self._aliases.get(ident.go_import_path)
        if alias is None:
            base = package_name_for_import_path(ident.go_import_path)
            alias = base
            i = 1
            while alias in self._used_names:
                alias = f"{base}{i}"
                i += 1
            self._used_names.add(alias)
            self._aliases[ident.go_import_path] = alias
        return f"{alias}.{ident.go_name}"

    def add_method(self, method: Method) -> None:
        self.methods.append(method)

    def import_specs(self) -> List[str]:
        return [f'{self._aliases[path]} "{path}"' for path in sorted(self._aliases)]

    def render(self) -> str:
        template = _get_template_env().get_template("copy.go.j2")
        return template.render(
            header=self.file_comment.split("\n") if self.file_comment else [],
            package_name=self.package_name,
            imports=self.import_specs(),
            methods=self.methods,
        )
