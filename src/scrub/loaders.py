"""Spec loading utilities for scrub."""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

import yaml

from .core import Scrubber
from .errors import ScrubError

# Spec describing a spec node. Nested field maps and element specs are walked
# separately by validate_spec_structure.
SPEC_SPEC: dict[str, Any] = {
    "init": {"type": "function"},
    "default": {},
    "required": {"type": "boolean"},
    "type": {"type": "string|object"},
    "value": {},
    "validate": {"type": "function"},
    "finish": {"type": "function"},
}

_RULE_KEYS = frozenset(SPEC_SPEC)


def load_spec(content: str, format: str = "yaml") -> dict[str, Any]:
    """Load a spec from string content.

    Args:
        content: Spec content as string
        format: Format of the content ('yaml' or 'json')

    Returns:
        Spec dictionary

    Raises:
        ValueError: If format is not supported or parsing fails
    """
    if format == "yaml":
        try:
            return cast(dict[str, Any], yaml.safe_load(content))
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML: {e}") from e
    elif format == "json":
        try:
            return cast(dict[str, Any], json.loads(content))
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse JSON: {e}") from e
    else:
        raise ValueError(f"Unsupported format: {format}. Use 'yaml' or 'json'")


def load_spec_from_file(path: str | Path) -> dict[str, Any]:
    """Load a spec from a YAML or JSON file.

    Args:
        path: Path to the spec file

    Returns:
        Spec dictionary

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is not supported or parsing fails
    """
    return cast(dict[str, Any], _load_file(path, "Spec"))


def load_value_from_file(path: str | Path) -> Any:
    """Load a value to check from a YAML or JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is not supported or parsing fails
    """
    return _load_file(path, "Value")


def _load_file(path: str | Path, kind: str) -> Any:
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {path}")

    if path.suffix.lower() in [".yaml", ".yml"]:
        format = "yaml"
    elif path.suffix.lower() == ".json":
        format = "json"
    else:
        raise ValueError(f"Unsupported file extension: {path.suffix}. Use .yaml, .yml, or .json")

    content = path.read_text(encoding="utf-8")
    return load_spec(content, format=format)


def validate_spec_structure(spec: Any) -> None:
    """Check that every node of a spec tree is well formed.

    A node is checked against ``SPEC_SPEC`` when it carries at least one rule
    key; otherwise it is treated as a field map and each field is checked.

    Raises:
        ValueError: Naming the path of the first malformed node
    """
    _check_node(spec, [], Scrubber(SPEC_SPEC, {"ignoreDefaults": True}))


def _check_node(node: Any, path: list[str], scrubber: Scrubber) -> None:
    if not isinstance(node, Mapping):
        return

    if not _RULE_KEYS.intersection(node):
        for name, field_spec in node.items():
            _check_node(field_spec, path + [str(name)], scrubber)
        return

    error = scrubber.scrub(dict(node))
    if isinstance(error, ScrubError):
        where = ".".join(path + [str(error.key)] if error.key is not None else path)
        raise ValueError(f"Spec validation error at '{where or '<root>'}': {error.message}")

    nested = node.get("value")
    if isinstance(nested, Mapping):
        _check_node(nested, path + ["value"], scrubber)
