"""Scrub decorators.

``scrubbed`` checks the arguments of a function, and optionally its return
value, before handing them on.

Example:
    >>> @scrubbed(
    ...     {"limit": {"type": "number", "default": 10}, "q": {"type": "string", "required": True}},
    ...     returns={"type": "array"},
    ... )
    ... def search(q, limit=None):
    ...     return [q] * limit
    >>>
    >>> search(q="x", limit="2")
    ['x', 'x']
"""

import inspect
from collections.abc import Callable, Mapping
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

from .core import Scrubber
from .loaders import load_spec_from_file
from .models import ScrubOptions
from .tipe import TypeClassifier

T = TypeVar("T", bound=Callable[..., Any])


class scrubbed:
    """Decorator that scrubs a function's arguments against a spec.

    The bound arguments are collected into a dict keyed by parameter name and
    scrubbed as one object, so defaults, coercion and setters in the spec
    change what the function receives. A failure raises ``ScrubError``.
    """

    def __init__(
        self,
        spec: Mapping[str, Any],
        options: ScrubOptions | Mapping[str, Any] | None = None,
        *,
        returns: Mapping[str, Any] | None = None,
        classifier: TypeClassifier | None = None,
    ):
        """Initialize the decorator.

        Args:
            spec: Spec for the arguments, usually a field map keyed by
                parameter name
            options: Root options for both checks
            returns: Optional spec for the return value
            classifier: Type classifier with any registered type tags
        """
        classifier = classifier or TypeClassifier()
        root = ScrubOptions.from_root(options, classifier)
        self.input_scrubber = Scrubber(spec, root, classifier=classifier)
        self.output_scrubber = (
            Scrubber(returns, root, classifier=classifier) if returns is not None else None
        )

    @classmethod
    def from_file(cls, path: str | Path, **kwargs: Any) -> "scrubbed":
        """Create the decorator from a YAML or JSON spec file.

        The file holds either a plain spec for the arguments, or a mapping with
        ``input`` and ``output`` specs.
        """
        loaded = load_spec_from_file(path)
        if isinstance(loaded, Mapping) and "input" in loaded:
            kwargs.setdefault("returns", loaded.get("output"))
            return cls(loaded["input"], **kwargs)
        return cls(loaded, **kwargs)

    def __call__(self, func: T) -> T:
        sig = inspect.signature(func)

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                bound = self._scrub_arguments(sig, args, kwargs)
                result = await func(*bound.args, **bound.kwargs)
                return self._scrub_result(result)

            return async_wrapper  # type: ignore[return-value]

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            bound = self._scrub_arguments(sig, args, kwargs)
            result = func(*bound.args, **bound.kwargs)
            return self._scrub_result(result)

        return sync_wrapper  # type: ignore[return-value]

    def _scrub_arguments(
        self, sig: inspect.Signature, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> inspect.BoundArguments:
        bound = sig.bind(*args, **kwargs)

        # Parameters left to their Python default count as absent, so the
        # spec's own defaults can apply
        params = dict(bound.arguments)
        params.pop("self", None)
        params.pop("cls", None)

        scrubbed_params = self.input_scrubber.check(params)
        for name, value in scrubbed_params.items():
            if name in sig.parameters:
                bound.arguments[name] = value
        return bound

    def _scrub_result(self, result: Any) -> Any:
        if self.output_scrubber is None:
            return result
        return self.output_scrubber.check(result)
