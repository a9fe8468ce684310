"""Pydantic models for scrub.

This module contains the options record threaded through a validation run,
together with the merge rules that let callers and spec nodes override it.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ._types import Key
from .tipe import TypeClassifier


class ScrubBaseModel(BaseModel):
    """Base model for all scrub Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable, so every recursion level works
      on its own copy
    - populate_by_name=True: Fields accept both their name and their alias
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class ScrubOptions(ScrubBaseModel):
    """Effective options for one node of a validation run.

    Attributes:
        return_value: Return the transformed value instead of None on success.
        ignore_defaults: Skip all default filling.
        ignore_required: Skip all required checks.
        do_not_coerce: Disable string to number/boolean coercion.
        strict: Reject object keys that the spec does not declare.
        log: Log a dump of value, spec and options at every node visited.
        key: Field name or array index of the node being checked.

    Example:
        >>> options = ScrubOptions.from_root({"strict": True})
        >>> options.override({"strict": False}, TypeClassifier()).strict
        False
    """

    return_value: bool = Field(default=False, alias="returnValue")
    ignore_defaults: bool = Field(default=False, alias="ignoreDefaults")
    ignore_required: bool = Field(default=False, alias="ignoreRequired")
    do_not_coerce: bool = Field(default=False, alias="doNotCoerce")
    strict: bool = False
    log: bool = False

    key: Key | None = None

    @classmethod
    def from_root(
        cls,
        options: "ScrubOptions | Mapping[str, Any] | None" = None,
        classifier: TypeClassifier | None = None,
    ) -> "ScrubOptions":
        """Build the root options from caller input.

        Unknown keys are dropped, and so are values whose type differs from
        the built-in default's.
        """
        if isinstance(options, ScrubOptions):
            return options.model_copy(update={"key": None})
        return cls().override(options, classifier or TypeClassifier())

    def override(self, overrides: Any, classifier: TypeClassifier) -> "ScrubOptions":
        """Return a copy with the recognized entries of ``overrides`` applied.

        An entry only replaces the current value when both classify to the same
        type tag; a mismatched entry is silently ignored. ``key`` is never taken
        from ``overrides``.
        """
        if not isinstance(overrides, Mapping):
            return self

        update: dict[str, Any] = {}
        for name, field in type(self).model_fields.items():
            if name == "key":
                continue
            for candidate in (name, field.alias):
                if candidate is None or candidate not in overrides:
                    continue
                new_value = overrides[candidate]
                if classifier.classify(new_value) == classifier.classify(getattr(self, name)):
                    update[name] = new_value

        return self.model_copy(update=update) if update else self

    def with_key(self, key: Key) -> "ScrubOptions":
        """Return a copy pointing at the child ``key``."""
        return self.model_copy(update={"key": key})

    def pruned(self) -> dict[str, Any]:
        """Snapshot of the options with falsy entries removed."""
        return {name: value for name, value in self.model_dump().items() if value}
