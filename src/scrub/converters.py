"""Type coercion and default cloning for scrub."""

import json
import logging
import re
from typing import Any

from .errors import ScrubError
from .models import ScrubOptions
from .tipe import TypeClassifier

logger = logging.getLogger(__name__)

_LEADING_FLOAT = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_float(text: str) -> float | None:
    """Parse the leading float of ``text``, None if there is none."""
    match = _LEADING_FLOAT.match(text)
    return float(match.group(1)) if match else None


def parse_int(text: str) -> int | None:
    """Parse the leading integer of ``text``, None if there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


class TypeCoercer:
    """Best-effort conversion of string input to the declared scalar type.

    Values that arrive as strings, such as query string parameters, are
    converted when the spec asks for a ``number`` or a ``boolean``. Strings
    that cannot be converted are left alone and fail the type check that
    follows.
    """

    def __init__(self, classifier: TypeClassifier):
        self.classifier = classifier

    def coerce(self, value: Any, type_: str, options: ScrubOptions) -> Any:
        if options.do_not_coerce or not isinstance(value, str):
            return value
        if type_ == "number":
            return self.to_number(value)
        if type_ == "boolean":
            return self.classifier.is_truthy(value)
        return value

    @staticmethod
    def to_number(value: str) -> Any:
        """Convert ``value`` to an int or float, or return it unchanged.

        The float parse wins when it carries more magnitude than the integer
        parse, which keeps decimals: ``"0.52"`` becomes ``0.52`` and ``"100"``
        becomes ``100``. Only ``"0"`` itself converts to zero, and a string with
        no leading integer never converts: ``"0.0"``, ``"00"`` and ``".5"`` stay
        strings.
        """
        as_float = parse_float(value)
        as_int = parse_int(value)
        if as_float is not None and as_int is not None and abs(as_float) > abs(as_int):
            return as_float
        if as_int:
            return as_int
        if value == "0":
            return 0
        return value

    def clone(self, value: Any) -> Any:
        """Deep copy a default through a JSON round trip.

        Returns a ``badSpec`` error for values JSON cannot serialize, such as
        functions or circular structures.
        """
        if self.classifier.is_scalar(value):
            return value
        try:
            return json.loads(json.dumps(value))
        except (TypeError, ValueError) as e:
            logger.debug("Default value could not be cloned: %s", e)
            error = ScrubError(f"Default value could not be cloned: {e}", code="badSpec")
            error.__cause__ = e
            return error
