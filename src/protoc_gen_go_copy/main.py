from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from google.protobuf.compiler import plugin_pb2

from protoc_gen_go_copy.config import Config, parse_parameter
from protoc_gen_go_copy.descriptors import load_request
from protoc_gen_go_copy.errors import DescriptorError, FormatError, GenerationError, ParameterError, RegistrationError
from protoc_gen_go_copy.formatter import format_source
from protoc_gen_go_copy.generator.go_file import GoFile
from protoc_gen_go_copy.generator.shallow_clone import generate_shallow_clone
from protoc_gen_go_copy.generator.shallow_copy import generate_shallow_copy
from protoc_gen_go_copy.models import ProtoFile, ProtoMessage
from protoc_gen_go_copy.resolver import Resolver

VERSION = "0.1.0"
PLUGIN_NAME = "protoc-gen-go-copy"


def output_filename(proto_file: ProtoFile, config: Config) -> str:
    filename = proto_file.generated_filename_prefix + config.generated_filename_suffix
    if config.module:
        trim = config.module + "/"
        if not filename.startswith(trim):
            raise DescriptorError(
                f"{proto_file.path}: generated file {filename!r} does not match prefix {config.module!r}"
            )
        filename = filename[len(trim):]
    return filename


def build_go_file(proto_file: ProtoFile, resolver: Resolver, config: Config) -> GoFile:
    """Emit the methods of every message in proto_file, depth first in declaration order."""
    go_file = GoFile(proto_file.go_import_path, proto_file.go_package_name)
    go_file.file_comment = f"Code generated by {PLUGIN_NAME}. DO NOT EDIT.\nsource: {proto_file.path}"

    def gen_message(msg: ProtoMessage) -> None:
        if msg.is_map_entry:
            return
        fields = resolver.message_fields(msg)
        if config.shallow_copy_method:
            go_file.add_method(generate_shallow_copy(go_file, msg, fields, config.shallow_copy_method))
        if config.shallow_clone_method:
            go_file.add_method(generate_shallow_clone(go_file, msg, fields, config.shallow_clone_method))
        for nested in msg.messages:
            gen_message(nested)

    for msg in proto_file.messages:
        gen_message(msg)
    return go_file


def generate(files: List[ProtoFile], config: Config, resolver: Optional[Resolver] = None) -> List[Tuple[str, str]]:
    """Generate one (filename, content) pair per file flagged for generation.

    Every file is registered with the resolver, in order, whether it is
    generated or not. The first error aborts the whole run.
    """
    if resolver is None:
        resolver = Resolver()

    generated: List[Tuple[str, str]] = []
    for proto_file in files:
        resolver.add_file(proto_file)
        if not proto_file.generate:
            continue

        try:
            go_file = build_go_file(proto_file, resolver, config)
        except RegistrationError as e:
            raise RegistrationError(f"{proto_file.path}: {e}") from e

        source = go_file.render()
        try:
            content = format_source(source, config.gofmt)
        except FormatError as e:
            raise GenerationError(
                f"{proto_file.path}: error in generated Go code: {e}:\n{e.unformatted}"
            ) from e
        except GenerationError as e:
            raise GenerationError(f"{proto_file.path}: {e}") from e
        filename = output_filename(proto_file, config)
        logging.debug("Generated %r from %r", filename, proto_file.path)
        generated.append((filename, content))
    return generated


def run(request: plugin_pb2.CodeGeneratorRequest) -> plugin_pb2.CodeGeneratorResponse:
    """Handle one plugin request.

    Generation errors are reported through the response, which protoc
    prints before failing. Invalid parameters and unregistered types raise.
    """
    config = parse_parameter(request.parameter)
    features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    try:
        files = load_request(request, config)
        generated = generate(files, config)
    except RegistrationError:
        raise
    except (DescriptorError, GenerationError) as e:
        return plugin_pb2.CodeGeneratorResponse(error=str(e), supported_features=features)

    response = plugin_pb2.CodeGeneratorResponse(supported_features=features)
    for filename, content in generated:
        response.file.add(name=filename, content=content)
    return response


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog=PLUGIN_NAME,
        description="protoc plugin generating reflection-free shallow copy and clone methods for Go messages",
        epilog="Run through protoc: protoc --go-copy_out=. --go-copy_opt=shallow_copy_method=Copy foo.proto",
    )
    parser.add_argument("--version", action="version", version=f"{PLUGIN_NAME} {VERSION}")
    parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.WARNING,
        format=f"{PLUGIN_NAME}: %(levelname)s: %(message)s",
    )

    request = plugin_pb2.CodeGeneratorRequest.FromString(sys.stdin.buffer.read())
    try:
        response = run(request)
    except (ParameterError, RegistrationError) as e:
        print(f"{PLUGIN_NAME}: FATAL: {e}", file=sys.stderr)
        sys.exit(1)

    sys.stdout.buffer.write(response.SerializeToString())
    sys.stdout.buffer.flush()


if __name__ == "__main__":
    main()
