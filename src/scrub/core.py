"""Core evaluation engine for scrub.

``scrub(value, spec, options)`` walks ``value`` against ``spec`` and returns
None on success or a ``ScrubError`` describing the first failure. It never
raises for bad input, bad specs, or spec callables that raise.

For every node the engine runs, in order: option merge, ``init``, default
fill, required check, type coercion and check, ``value`` setter, structural
check (object, array or scalar), ``validate`` and ``finish``.
"""

import inspect
import logging
from collections.abc import Callable, Mapping, MutableMapping, MutableSequence
from pprint import pformat
from typing import Any

from ._types import MISSING, Key
from .context import ScrubContext
from .converters import TypeCoercer
from .errors import ErrorComposer, ScrubError, as_scrub_error
from .models import ScrubOptions
from .tipe import TypeClassifier

logger = logging.getLogger(__name__)

SCALAR_TAGS = frozenset({"undefined", "null", "boolean", "number", "string"})


def match(value: Any, alternatives: Any) -> bool:
    """True if ``value`` equals one member of a pipe-delimited string.

    >>> match("bar", "foo|bar|baz")
    True
    """
    if not isinstance(alternatives, str) or not isinstance(value, str):
        return False
    return value in alternatives.split("|")


def _is_absent(value: Any) -> bool:
    return value is MISSING or value is None


def _is_required(spec: Mapping[str, Any]) -> bool:
    # A mapping under "required" is a field named required, not the rule
    required = spec.get("required")
    return bool(required) and not isinstance(required, Mapping)


def _fit_args(fn: Callable[..., Any], args: tuple[Any, ...], fallback: int) -> tuple[Any, ...]:
    """Trim ``args`` to the positional arguments ``fn`` accepts.

    Classes and callables without an inspectable signature get the first
    ``fallback`` arguments.
    """
    if isinstance(fn, type):
        return args[:fallback]
    try:
        parameters = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return args[:fallback]
    count = 0
    for parameter in parameters:
        if parameter.kind == inspect.Parameter.VAR_POSITIONAL:
            return args
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return args[:count]


class NodeEvaluator:
    """Recursive evaluator for one top-level call.

    Holds the root value and root spec of the call so that spec callables and
    composed errors can refer to them.
    """

    def __init__(self, root_value: Any, root_spec: Any, classifier: TypeClassifier):
        self.root_value = root_value
        self.root_spec = root_spec
        self.classifier = classifier
        self.coercer = TypeCoercer(classifier)
        self.errors = ErrorComposer(root_spec)
        self._dispatch: dict[str, Callable[..., Any]] = {
            "object": self.check_object,
            "array": self.check_array,
        }
        for tag in SCALAR_TAGS:
            self._dispatch[tag] = self.check_scalar

    def evaluate(
        self, value: Any, spec: Any, options: ScrubOptions, path: tuple[Key, ...] = ()
    ) -> Any:
        """Check one value against one spec node.

        Returns the possibly transformed value, or a ``ScrubError``.
        """
        if not isinstance(spec, Mapping):
            return value

        options = options.override(spec, self.classifier)
        if options.log:
            self._log(value, spec, options)

        context = self._context(options, path)

        init = spec.get("init")
        if self.classifier.is_function(init):
            result = self._call_setter(init, value, context)
            if isinstance(result, BaseException):
                return self.errors.wrap(result, value, spec, options, path)
            value = result

        if value is MISSING and "default" in spec and not options.ignore_defaults:
            result = self.default_for(spec, context)
            if isinstance(result, BaseException):
                return self.errors.wrap(result, value, spec, options, path, "badSpec")
            value = result

        if (
            _is_required(spec)
            and not options.ignore_required
            and _is_absent(value)
        ):
            name = options.key if options.key is not None else "value"
            return self.errors.fail("missingParam", name, value, spec, options, path)

        # A mapping under "type" is a field named type, not a type constraint
        declared = spec.get("type", MISSING)
        if value is not MISSING and declared is not MISSING and not isinstance(declared, Mapping):
            if not isinstance(declared, str):
                return self.errors.fail(
                    "badSpec", "spec.type must be a string", value, spec, options, path
                )
            value = self.coercer.coerce(value, declared, options)
            tag = self.classifier.classify(value)
            if not match(tag, declared):
                return self.errors.fail("badType", tag, value, spec, options, path)

        setter = spec.get("value")
        if self.classifier.is_function(setter):
            result = self._call_setter(setter, value, context)
            if isinstance(result, BaseException):
                return self.errors.wrap(result, value, spec, options, path)
            value = result

        check = self._dispatch.get(self.classifier.classify(value))
        if check is not None:
            result = check(value, spec, options, path)
            if isinstance(result, ScrubError):
                return result
            value = result

        validator = spec.get("validate")
        if self.classifier.is_function(validator):
            error = self._call_validator(validator, value, context)
            if error is not None:
                return self.errors.wrap(error, value, spec, options, path)

        finish = spec.get("finish")
        if self.classifier.is_function(finish):
            result = self._call_setter(finish, value, context)
            if isinstance(result, BaseException):
                return self.errors.wrap(result, value, spec, options, path)
            value = result

        return value

    def check_object(
        self, value: Any, spec: Mapping[str, Any], options: ScrubOptions, path: tuple[Key, ...]
    ) -> Any:
        """Check the fields of a mapping, or of a plain object's attributes."""
        # Field specs may be nested under "value"
        fields: Mapping[str, Any] = spec
        if match("object", spec.get("type")) and isinstance(spec.get("value"), Mapping):
            fields = spec["value"]

        if isinstance(value, MutableMapping):
            target = value
        elif isinstance(value, Mapping):
            target = dict(value)
            value = target
        else:
            target = getattr(value, "__dict__", None)
            if target is None:
                return value

        if options.strict:
            for key in target:
                if key not in fields:
                    return self.errors.fail(
                        "badParam", key, value, spec, options.with_key(key), path + (key,)
                    )

        if not options.ignore_defaults:
            for key, field_spec in fields.items():
                if (
                    isinstance(field_spec, Mapping)
                    and "default" in field_spec
                    and target.get(key, MISSING) is MISSING
                ):
                    child_options = options.with_key(key)
                    result = self.default_for(
                        field_spec, self._context(child_options, path + (key,))
                    )
                    if isinstance(result, BaseException):
                        return self.errors.wrap(result, value, spec, options, path, "badSpec")
                    target[key] = result

        if not options.ignore_required:
            for key, field_spec in fields.items():
                if (
                    isinstance(field_spec, Mapping)
                    and _is_required(field_spec)
                    and _is_absent(target.get(key))
                ):
                    return self.errors.fail(
                        "missingParam", key, value, spec, options.with_key(key), path + (key,)
                    )

        for key in list(target):
            field_spec = fields.get(key)
            if not isinstance(field_spec, Mapping):
                continue
            result = self.evaluate(target[key], field_spec, options.with_key(key), path + (key,))
            if isinstance(result, ScrubError):
                return self.errors.wrap(result, value, spec, options, path)
            target[key] = result

        return value

    def check_array(
        self, value: Any, spec: Mapping[str, Any], options: ScrubOptions, path: tuple[Key, ...]
    ) -> Any:
        """Check every element of a sequence against the element spec."""
        element_spec = spec.get("value")
        if not isinstance(element_spec, Mapping):
            return value

        items = value if isinstance(value, MutableSequence) else list(value)
        for index, item in enumerate(items):
            result = self.evaluate(item, element_spec, options.with_key(index), path + (index,))
            if isinstance(result, ScrubError):
                return self.errors.wrap(result, value, spec, options, path)
            items[index] = result

        return items if items is value else tuple(items)

    def check_scalar(
        self, value: Any, spec: Mapping[str, Any], options: ScrubOptions, path: tuple[Key, ...]
    ) -> Any:
        """Check a scalar against a literal, an enumeration, or nothing."""
        if _is_absent(value):
            return value

        constraint = spec.get("value", MISSING)
        tag = self.classifier.classify(constraint)

        if tag in ("undefined", "function"):
            return value
        if tag == "string":
            success = match(value, constraint)
        elif tag in ("number", "boolean"):
            success = self.classifier.classify(value) == tag and value == constraint
        else:
            return self.errors.fail("badSpec", constraint, value, spec, options, path)

        if success:
            return value
        return self.errors.fail(
            "badValue", f"{options.key}: {constraint}", value, spec, options, path
        )

    def default_for(self, spec: Mapping[str, Any], context: ScrubContext) -> Any:
        """Compute the default declared by ``spec``.

        Generators are called with no arguments, or with the context when they
        accept one. Literals are cloned.
        """
        default = spec["default"]
        if not self.classifier.is_function(default):
            return self.coercer.clone(default)

        result = self._call_client_function(default, (context,), fallback=0)
        if isinstance(result, BaseException):
            error = as_scrub_error(result, "badSpec")
            error.code = "badSpec"
            return error
        return result

    def _call_setter(self, fn: Callable[..., Any], value: Any, context: ScrubContext) -> Any:
        # Setters return the new value or an error
        return self._call_client_function(fn, (value, context))

    def _call_validator(
        self, fn: Callable[..., Any], value: Any, context: ScrubContext
    ) -> BaseException | str | None:
        # Validators return a falsy result on success
        result = self._call_client_function(fn, (value, context))
        if not result:
            return None
        if isinstance(result, BaseException):
            return result
        return str(result)

    def _call_client_function(
        self, fn: Callable[..., Any], args: tuple[Any, ...], fallback: int = 1
    ) -> Any:
        call_args = _fit_args(fn, args, fallback)
        try:
            return fn(*call_args)
        except Exception as e:
            logger.debug("Spec function %r raised", fn, exc_info=True)
            error = ScrubError(f"Spec function threw exception: {e}", code="badSpec")
            error.__cause__ = e
            return error

    def _context(self, options: ScrubOptions, path: tuple[Key, ...]) -> ScrubContext:
        return ScrubContext(
            root_value=self.root_value,
            root_spec=self.root_spec,
            options=options,
            path=path,
        )

    def _log(self, value: Any, spec: Mapping[str, Any], options: ScrubOptions) -> None:
        dump = {"value": value, "spec": spec, "options": options.pruned()}
        logger.info("scrub arguments:\n%s", pformat(dump, depth=10))


class Scrubber:
    """Reusable entry point bound to one spec, options and classifier.

    Example:
        >>> scrubber = Scrubber({"limit": {"type": "number", "default": 10}})
        >>> params = {"limit": "25"}
        >>> scrubber.scrub(params) is None
        True
        >>> params
        {'limit': 25}
    """

    def __init__(
        self,
        spec: Any = None,
        options: ScrubOptions | Mapping[str, Any] | None = None,
        *,
        classifier: TypeClassifier | None = None,
    ):
        """Initialize the scrubber.

        Args:
            spec: The spec tree. Never modified.
            options: Root options, as a ``ScrubOptions`` or a mapping. Unknown
                keys and mistyped values are ignored.
            classifier: Type classifier holding any registered type tags. A
                fresh default classifier is used when omitted.
        """
        self.spec = spec
        self.classifier = classifier or TypeClassifier()
        self.options = ScrubOptions.from_root(options, self.classifier)

    def scrub(self, value: Any = MISSING) -> Any:
        """Check ``value``.

        Returns:
            A ``ScrubError`` on failure. On success None, or the transformed
            value when ``return_value`` is set.
        """
        result = self._evaluate(value)
        if isinstance(result, ScrubError):
            return result
        return result if self.options.return_value else None

    def check(self, value: Any = MISSING) -> Any:
        """Check ``value`` and return the transformed value.

        Raises:
            ScrubError: If validation fails
        """
        result = self._evaluate(value)
        if isinstance(result, ScrubError):
            raise result
        return result

    def _evaluate(self, value: Any) -> Any:
        evaluator = NodeEvaluator(value, self.spec, self.classifier)
        result = evaluator.evaluate(value, self.spec, self.options)
        if isinstance(result, ScrubError):
            logger.debug("Scrub failed with %s: %s", result.code, result.message)
        return result


def scrub(
    value: Any = MISSING,
    spec: Any = None,
    options: ScrubOptions | Mapping[str, Any] | None = None,
    *,
    classifier: TypeClassifier | None = None,
) -> Any:
    """Check ``value`` against ``spec``.

    ``value`` may be modified in place by defaults, coercion and setters.
    ``spec`` is never modified.

    Args:
        value: The value to check. Defaults to ``MISSING`` (absent).
        spec: The spec tree.
        options: Root options, see ``ScrubOptions``.
        classifier: Type classifier with any registered type tags.

    Returns:
        None on success, or the transformed value when ``return_value`` is
        set. A ``ScrubError`` on failure.

    Example:
        >>> err = scrub({"n": "5"}, {"n": {"type": "number", "required": True}})
        >>> err is None
        True
    """
    return Scrubber(spec, options, classifier=classifier).scrub(value)
