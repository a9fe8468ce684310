"""Error records for scrub."""

from typing import Any

from ._types import ErrorCode, Key
from .models import ScrubOptions

CODE_MESSAGES: dict[str, str] = {
    "missingParam": "Missing Required Parameter",
    "badParam": "Unrecognized Parameter",
    "badType": "Invalid Type",
    "badValue": "Invalid Value",
    "badSpec": "Invalid Spec",
}


class ScrubError(ValueError):
    """Validation failure.

    Returned, not raised, by ``scrub()``. Callers may raise it themselves.

    Attributes:
        code: One of the codes in ``CODE_MESSAGES``, or a code supplied by a
            spec callable.
        message: Human readable message.
        details: Context of the failing node: ``value``, ``spec``, ``key``
            (when set), ``path``, ``options`` and ``root_spec``.
    """

    def __init__(
        self, message: str, code: str | None = None, details: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details: dict[str, Any] = details if details is not None else {}

    @property
    def key(self) -> Key | None:
        return self.details.get("key")

    @property
    def path(self) -> list[Key]:
        return self.details.get("path", [])

    def to_dict(self) -> dict[str, Any]:
        """Serializable summary, without the value and spec trees."""
        result: dict[str, Any] = {"code": self.code, "message": self.message}
        if "key" in self.details:
            result["key"] = self.details["key"]
        result["path"] = list(self.path)
        result["options"] = self.details.get("options", {})
        return result

    def __repr__(self) -> str:
        return f"ScrubError(code={self.code!r}, message={self.message!r})"


def as_scrub_error(error: BaseException | str, default_code: str) -> ScrubError:
    """Normalize an exception or message returned by a spec callable.

    An exception's own ``code`` attribute wins over ``default_code``.
    """
    if isinstance(error, ScrubError):
        if error.code is None:
            error.code = default_code
        return error
    if isinstance(error, BaseException):
        converted = ScrubError(str(error), code=getattr(error, "code", None) or default_code)
        converted.__cause__ = error
        return converted
    return ScrubError(str(error), code=default_code)


class ErrorComposer:
    """Compose failures with the context of the node that produced them."""

    def __init__(self, root_spec: Any):
        self.root_spec = root_spec

    def fail(
        self,
        code: ErrorCode,
        message: Any,
        value: Any,
        spec: Any,
        options: ScrubOptions,
        path: tuple[Key, ...] = (),
    ) -> ScrubError:
        """Create a new error from a code and a detail message."""
        error = ScrubError(f"{CODE_MESSAGES[code]}: {message}", code=code)
        return self._attach(error, value, spec, options, path)

    def wrap(
        self,
        error: BaseException | str,
        value: Any,
        spec: Any,
        options: ScrubOptions,
        path: tuple[Key, ...] = (),
        default_code: str = "badValue",
    ) -> ScrubError:
        """Compose an error returned by a spec callable or a child node.

        Errors already composed by a deeper node are re-wrapped with the value,
        spec and options of this node. They keep the key and path of the node
        that failed.
        """
        error = as_scrub_error(error, default_code)
        if "root_spec" in error.details:
            error.details.update(
                value=value, spec=spec, options=self._options_snapshot(options)
            )
            return error
        return self._attach(error, value, spec, options, path)

    def _attach(
        self,
        error: ScrubError,
        value: Any,
        spec: Any,
        options: ScrubOptions,
        path: tuple[Key, ...],
    ) -> ScrubError:
        details: dict[str, Any] = {"value": value, "spec": spec}
        if options.key is not None:
            details["key"] = options.key
        details["path"] = list(path)
        details["options"] = self._options_snapshot(options)
        details["root_spec"] = self.root_spec
        error.details = details
        return error

    @staticmethod
    def _options_snapshot(options: ScrubOptions) -> dict[str, Any]:
        snapshot = options.pruned()
        snapshot.pop("key", None)
        return snapshot
