import pytest

from protoc_gen_go_copy.config import Config, parse_parameter
from protoc_gen_go_copy.errors import ParameterError


class TestDefaults:
    def test_empty_parameter(self):
        config = parse_parameter("")

        assert config == Config()
        assert config.generated_filename_suffix == "_copy.pb.go"
        assert config.shallow_copy_method == "Proto_ShallowCopy"
        assert config.shallow_clone_method == "Proto_ShallowClone"
        assert config.paths == "import"


class TestParameters:
    def test_method_names_and_suffix(self):
        config = parse_parameter(
            "shallow_copy_method=CopyFrom,shallow_clone_method=Clone,generated_filename_suffix=.copy.go"
        )

        assert config.shallow_copy_method == "CopyFrom"
        assert config.shallow_clone_method == "Clone"
        assert config.generated_filename_suffix == ".copy.go"

    def test_empty_value_disables_method(self):
        config = parse_parameter("shallow_copy_method=")

        assert config.shallow_copy_method == ""
        assert config.shallow_clone_method == "Proto_ShallowClone"

    def test_import_path_overrides(self):
        config = parse_parameter("Mfoo/a.proto=example.com/a,Mb.proto=example.com/b;bpb,paths=source_relative")

        assert config.import_paths == {
            "foo/a.proto": "example.com/a",
            "b.proto": "example.com/b;bpb",
        }
        assert config.paths == "source_relative"

    def test_trailing_comma_is_ignored(self):
        assert parse_parameter("module=example.com,").module == "example.com"

    def test_builds_on_given_config(self):
        config = parse_parameter("gofmt=", Config(shallow_clone_method=""))

        assert config.gofmt == ""
        assert config.shallow_clone_method == ""


class TestInvalidParameters:
    def test_unknown_option(self):
        with pytest.raises(ParameterError, match="unrecognized"):
            parse_parameter("no_such_option=1")

    def test_abbreviations_are_rejected(self):
        with pytest.raises(ParameterError):
            parse_parameter("shallow_copy=Copy")

    def test_invalid_paths(self):
        with pytest.raises(ParameterError, match="invalid choice"):
            parse_parameter("paths=absolute")

    def test_module_with_source_relative(self):
        with pytest.raises(ParameterError, match="module="):
            parse_parameter("module=example.com,paths=source_relative")
