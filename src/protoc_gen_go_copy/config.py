from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from protoc_gen_go_copy.errors import ParameterError

PATHS_IMPORT = "import"
PATHS_SOURCE_RELATIVE = "source_relative"

METHOD_NAME_HELP = "method name generated for all message types unless set to an empty string"


@dataclass
class Config:
    generated_filename_suffix: str = "_copy.pb.go"
    shallow_copy_method: str = "Proto_ShallowCopy"
    shallow_clone_method: str = "Proto_ShallowClone"
    paths: str = PATHS_IMPORT
    module: str = ""
    gofmt: str = "gofmt"
    # proto file path -> Go import path, from M<file>=<path> parameters
    import_paths: Dict[str, str] = field(default_factory=dict)


class _ParameterParser(argparse.ArgumentParser):
    def error(self, message):
        raise ParameterError(message)


def _build_parser(config: Config) -> argparse.ArgumentParser:
    parser = _ParameterParser(
        prog="protoc-gen-go-copy",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--generated_filename_suffix",
        default=config.generated_filename_suffix,
        help="suffix appended to the generated filename prefix of each file",
    )
    parser.add_argument(
        "--shallow_copy_method",
        default=config.shallow_copy_method,
        help=METHOD_NAME_HELP,
    )
    parser.add_argument(
        "--shallow_clone_method",
        default=config.shallow_clone_method,
        help=METHOD_NAME_HELP,
    )
    parser.add_argument(
        "--paths",
        default=config.paths,
        choices=[PATHS_IMPORT, PATHS_SOURCE_RELATIVE],
        help="output file layout",
    )
    parser.add_argument(
        "--module",
        default=config.module,
        help="import path prefix stripped from generated filenames",
    )
    parser.add_argument(
        "--gofmt",
        default=config.gofmt,
        help="formatter executable, empty to skip formatting",
    )
    return parser


def parse_parameter(parameter: str, config: Optional[Config] = None) -> Config:
    """Parse the comma separated plugin parameter passed by protoc.

    Each element is name=value; M<proto file>=<import path> overrides the Go
    import path of a file. Everything else must be a known option.
    """
    if config is None:
        config = Config()

    import_paths = dict(config.import_paths)
    argv: List[str] = []
    for param in parameter.split(","):
        if not param:
            continue
        name, _, value = param.partition("=")
        if name.startswith("M"):
            import_paths[name[1:]] = value
            continue
        argv.append(f"--{name}={value}")

    args = _build_parser(config).parse_args(argv)

    if args.module and args.paths != PATHS_IMPORT:
        raise ParameterError("cannot use module= with paths=source_relative")

    return Config(
        generated_filename_suffix=args.generated_filename_suffix,
        shallow_copy_method=args.shallow_copy_method,
        shallow_clone_method=args.shallow_clone_method,
        paths=args.paths,
        module=args.module,
        gofmt=args.gofmt,
        import_paths=import_paths,
    )
