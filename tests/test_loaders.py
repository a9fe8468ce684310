"""Tests for scrub.loaders module."""

import json

import pytest

from scrub.loaders import (
    load_spec,
    load_spec_from_file,
    load_value_from_file,
    validate_spec_structure,
)

YAML_SPEC = """
name:
  type: string
  required: true
limit:
  type: number
  default: 10
"""


class TestLoadSpec:
    """Test loading specs from strings."""

    def test_yaml(self):
        spec = load_spec(YAML_SPEC)
        assert spec == {
            "name": {"type": "string", "required": True},
            "limit": {"type": "number", "default": 10},
        }

    def test_json(self):
        spec = load_spec('{"name": {"type": "string"}}', format="json")
        assert spec == {"name": {"type": "string"}}

    def test_unsupported_format(self):
        with pytest.raises(ValueError, match="Unsupported format: toml"):
            load_spec("", format="toml")

    def test_invalid_yaml(self):
        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_spec("name: [string")

    def test_invalid_json(self):
        with pytest.raises(ValueError, match="Failed to parse JSON"):
            load_spec("{name}", format="json")


class TestLoadFromFile:
    """Test loading specs and values from files."""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "spec.yml"
        path.write_text(YAML_SPEC)
        assert load_spec_from_file(path)["limit"]["default"] == 10

    def test_json_file(self, tmp_path):
        path = tmp_path / "spec.json"
        path.write_text(json.dumps({"name": {"type": "string"}}))
        assert load_spec_from_file(str(path)) == {"name": {"type": "string"}}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Spec file not found"):
            load_spec_from_file(tmp_path / "nope.yml")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "spec.txt"
        path.write_text(YAML_SPEC)
        with pytest.raises(ValueError, match="Unsupported file extension: .txt"):
            load_spec_from_file(path)

    def test_value_file(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_text("- 1\n- two\n")
        assert load_value_from_file(path) == [1, "two"]

    def test_missing_value_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Value file not found"):
            load_value_from_file(tmp_path / "data.json")


class TestValidateSpecStructure:
    """Test spec structure validation."""

    def test_well_formed(self):
        validate_spec_structure(
            {
                "s1": {"type": "string", "required": True},
                "o1": {"type": "object", "value": {"n1": {"type": "number", "default": 0}}},
                "a1": {"type": "array", "value": {"type": "string"}},
                "e1": {"value": "a|b|c"},
                "v1": {"validate": len},
            }
        )

    def test_field_named_type(self):
        validate_spec_structure({"type": {"type": "string"}})

    def test_bad_type(self):
        with pytest.raises(ValueError, match="Spec validation error at 's1.type'"):
            validate_spec_structure({"s1": {"type": 1}})

    def test_bad_required(self):
        with pytest.raises(ValueError, match="at 's1.required': Invalid Type: number"):
            validate_spec_structure({"s1": {"type": "string", "required": 5}})

    def test_nested(self):
        spec = {"o1": {"type": "object", "value": {"n1": {"validate": "not a function"}}}}
        with pytest.raises(ValueError, match="at 'o1.value.n1.validate'"):
            validate_spec_structure(spec)

    def test_element_spec(self):
        spec = {"a1": {"type": "array", "value": {"type": "string", "finish": 1}}}
        with pytest.raises(ValueError, match="at 'a1.value.finish'"):
            validate_spec_structure(spec)

    def test_root_node(self):
        with pytest.raises(ValueError, match="at 'type'"):
            validate_spec_structure({"type": 3})

    def test_non_mapping(self):
        validate_spec_structure(None)
