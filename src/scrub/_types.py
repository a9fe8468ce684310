"""Type definitions for scrub.

This module holds the shared type aliases and the ``MISSING`` sentinel used to
tell an absent value apart from ``None``.
"""

from enum import Enum
from typing import Any, Literal

# Canonical tags produced by the type classifier
TypeTag = Literal[
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
]

ErrorCode = Literal["missingParam", "badParam", "badType", "badValue", "badSpec"]

# A spec node is a plain mapping of rule names to rules
Spec = dict[str, Any]

Key = str | int


class _MissingType(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _MissingType.MISSING
"""Marks a value that is absent, as opposed to present and ``None``."""

__all__ = ["TypeTag", "ErrorCode", "Spec", "Key", "MISSING"]
