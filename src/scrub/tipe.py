"""Type classification for scrub.

``TypeClassifier`` maps any Python value to one canonical type tag. The set
of tags is fixed, but callers can register extra tags for their own classes::

    >>> classifier = TypeClassifier()
    >>> classifier.classify([1, 2])
    'array'
    >>> classifier.register("Decimal", "decimal")
    >>> classifier.is_decimal(Decimal("1.5"))
    True

The registry belongs to the instance. Register tags once, before the
classifier is handed to a validation run.
"""

import numbers
import re
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

from ._types import MISSING

TAGS = frozenset(
    {
        "undefined",
        "null",
        "boolean",
        "number",
        "string",
        "function",
        "array",
        "object",
        "date",
        "error",
        "regexp",
    }
)

# Class names that may never be remapped
RESERVED_NAMES = frozenset({"object", "Object", "null", "NoneType"})

_BUILTIN_NAMES = {
    "bool": "boolean",
    "int": "number",
    "float": "number",
    "str": "string",
    "list": "array",
    "tuple": "array",
    "dict": "object",
    "datetime": "date",
    "date": "date",
    "Pattern": "regexp",
}

# Checked in order when the class name is not in the registry
_FALLBACKS: tuple[tuple[Any, str], ...] = (
    (bool, "boolean"),
    (numbers.Number, "number"),
    (str, "string"),
    (BaseException, "error"),
    (date, "date"),
    (re.Pattern, "regexp"),
    (Mapping, "object"),
    ((list, tuple), "array"),
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class TypeClassifier:
    """Classify values into canonical type tags."""

    def __init__(self, registry: Mapping[str, str] | None = None):
        """Initialize the classifier.

        Args:
            registry: Optional extra ``class name -> tag`` mappings, applied
                through ``register`` so reserved and known names are skipped.
        """
        self._names: dict[str, str] = dict(_BUILTIN_NAMES)
        self._extra_tags: set[str] = set()
        for class_name, tag in (registry or {}).items():
            self.register(class_name, tag)

    @property
    def tags(self) -> frozenset[str]:
        """All tags this classifier can produce."""
        return TAGS | self._extra_tags

    def classify(self, value: Any) -> str:
        """Return the type tag of ``value``."""
        if value is MISSING:
            return "undefined"
        if value is None:
            return "null"

        tag = self._names.get(type(value).__name__)
        if tag:
            return tag

        for kind, tag in _FALLBACKS:
            if isinstance(value, kind):
                return tag

        if callable(value):
            return "function"
        return "object"

    def register(self, class_name: str, tag: str) -> None:
        """Map instances of the class named ``class_name`` to ``tag``.

        Reserved names and names that are already mapped are ignored.
        """
        if class_name in RESERVED_NAMES or class_name in self._names:
            return
        self._names[class_name] = tag
        if tag not in TAGS:
            self._extra_tags.add(tag)

    def __getattr__(self, name: str) -> Callable[[Any], bool]:
        # is_<tag> predicates for registered tags
        if name.startswith("is_"):
            tag = name[3:]
            if tag in self._extra_tags:
                return lambda value: self.classify(value) == tag
        raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}")

    def is_undefined(self, value: Any) -> bool:
        return value is MISSING

    def is_defined(self, value: Any) -> bool:
        return value is not MISSING

    def is_null(self, value: Any) -> bool:
        return value is None

    def is_boolean(self, value: Any) -> bool:
        return isinstance(value, bool)

    def is_number(self, value: Any) -> bool:
        return self.classify(value) == "number"

    def is_string(self, value: Any) -> bool:
        return self.classify(value) == "string"

    def is_function(self, value: Any) -> bool:
        return self.classify(value) == "function"

    def is_array(self, value: Any) -> bool:
        return self.classify(value) == "array"

    def is_object(self, value: Any) -> bool:
        return self.classify(value) == "object"

    def is_date(self, value: Any) -> bool:
        return self.classify(value) == "date"

    def is_error(self, value: Any) -> bool:
        return isinstance(value, BaseException)

    def is_regexp(self, value: Any) -> bool:
        return self.classify(value) == "regexp"

    def is_scalar(self, value: Any) -> bool:
        """True for values passed by value rather than by reference."""
        return (
            value is MISSING
            or value is None
            or isinstance(value, (str, bytes, bool, numbers.Number))
        )

    def is_truthy(self, value: Any) -> bool:
        """Truthiness for values that arrive as strings, e.g. query parameters.

        Positive numbers, the strings ``"true"`` and ``"yes"`` (any case), and
        strings starting with a positive integer are true. Negative numbers are
        false. Anything else falls back to Python truthiness.
        """
        if isinstance(value, numbers.Number) and not isinstance(value, bool):
            return value > 0  # type: ignore[operator]
        if not isinstance(value, str):
            return bool(value)
        lowered = value.lower()
        if lowered in ("true", "yes"):
            return True
        match = _LEADING_INT.match(lowered)
        return bool(match and int(match.group(1)) > 0)
