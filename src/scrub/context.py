"""Context passed to spec callables.

Every ``init``, ``default``, ``value``, ``validate`` and ``finish`` callable
receives a ``ScrubContext`` as its second argument, when its signature accepts
one. The context replaces any need for global state inside those callables.

Example:
    >>> def must_match_first(value, context):
    ...     if value != context.root_value["first"]:
    ...         return "must equal first"
    >>>
    >>> spec = {"first": {"type": "number"}, "second": {"validate": must_match_first}}
"""

from dataclasses import dataclass, field
from typing import Any

from ._types import Key
from .models import ScrubOptions


@dataclass
class ScrubContext:
    """Per-node runtime context for spec callables.

    ``root_value`` and ``root_spec`` are the arguments of the top-level call.
    ``options`` are the effective options of the node and ``path`` lists the
    keys from the root down to it.

    Callables on the same node share one context, so an ``init`` hook can leave
    a note for the ``finish`` hook:

        >>> context.set("wrapped", True)
        >>> context.get("wrapped", default=False)
        True
    """

    root_value: Any
    root_spec: Any
    options: ScrubOptions
    path: tuple[Key, ...] = ()

    # Scratch storage shared by the callables of one node
    _data: dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> Key | None:
        """Field name or array index of the node, None at the root."""
        return self.options.key

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
