"""scrub - synchronous value validation and transformation.

Given a value tree and a declarative spec tree, scrub checks structure,
required fields, types and value constraints, applies defaults and string
coercion, and returns None on success or a ``ScrubError`` on failure. It does
not raise.

## Key Components

### Entry points
- `scrub()`: Check a value against a spec
- `Scrubber`: Reusable checker bound to a spec, options and classifier
- `ScrubError`: The error record returned on failure

### Supporting types
- `ScrubOptions`: Options record (`return_value`, `ignore_defaults`,
  `ignore_required`, `do_not_coerce`, `strict`, `log`)
- `ScrubContext`: Context passed to spec callables
- `TypeClassifier`: Maps values to type tags, with user-registered tags
- `MISSING`: Sentinel for an absent value

## Spec fields

- `type`: A type tag or a pipe-delimited alternation, e.g. `"string|null"`
- `required`: The value may not be absent or None
- `default`: A literal (deep copied) or a generator callable
- `value`: An enumeration like `"a|b|c"`, a literal number or boolean, a setter
  callable, or the nested field map / element spec of an object / array
- `validate`: Callable returning a falsy result, or an error message
- `init`, `finish`: Setter callables run before and after the other checks

## Quick Examples

```python
from scrub import scrub

spec = {
    "name": {"type": "string", "required": True},
    "limit": {"type": "number", "default": 10},
    "order": {"type": "string", "value": "asc|desc"},
    "tags": {"type": "array", "value": {"type": "string"}},
}

params = {"name": "widgets", "limit": "25"}
err = scrub(params, spec, {"strict": True})
# err is None, params == {"name": "widgets", "limit": 25}

err = scrub({"order": "sideways"}, spec)
# err.code == "missingParam", err.key == "name"
```
"""

from ._types import MISSING, ErrorCode, Key, Spec, TypeTag
from .context import ScrubContext
from .converters import TypeCoercer
from .core import NodeEvaluator, Scrubber, scrub
from .errors import CODE_MESSAGES, ScrubError
from .models import ScrubOptions
from .tipe import TypeClassifier

__all__ = [
    # Entry points
    "scrub",
    "Scrubber",
    "ScrubError",
    # Engine
    "NodeEvaluator",
    "TypeCoercer",
    "TypeClassifier",
    # Types
    "ScrubOptions",
    "ScrubContext",
    "CODE_MESSAGES",
    "MISSING",
    "ErrorCode",
    "Key",
    "Spec",
    "TypeTag",
]
