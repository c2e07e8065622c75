"""Canonical string conversion for URL argument values.

Every path and query value passes through ``to_url_string`` before it is
encoded. Types opt in explicitly: either they are one of the built-in
scalar types below, they implement ``__url_str__``, or they define their
own ``__str__``. Anything else (plain objects, lists, dicts, bytes) is rejected
rather than leaking a ``repr()`` into a URL.
"""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Protocol, runtime_checkable
from uuid import UUID

from backroute.config import RouterConfig
from backroute.errors import UnstringableValueError

# Types whose str() is already the canonical URL form
SCALAR_TYPES: tuple[type, ...] = (str, int, float, Decimal, UUID)

# Binary types: str() gives a repr, and the encoding is unknown
BINARY_TYPES: tuple[type, ...] = (bytes, bytearray, memoryview)


@runtime_checkable
class Stringable(Protocol):
    """Protocol for objects with an explicit URL representation.

    Usage::

        class Slug:
            def __init__(self, text: str) -> None:
                self.text = text

            def __url_str__(self) -> str:
                return self.text.lower().replace(" ", "-")

        router.url_for("post.show", slug=Slug("Hello World"))
        # -> "/posts/hello-world"
    """

    def __url_str__(self) -> str: ...


def to_url_string(
    value: object,
    name: str | None = None,
    config: RouterConfig | None = None,
) -> str:
    """Convert *value* to its canonical URL string.

    Raises ``UnstringableValueError`` if the value's type has no
    canonical conversion.
    """
    if isinstance(value, Stringable):
        return value.__url_str__()
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        cfg = config or _DEFAULT_CONFIG
        return cfg.true_string if value else cfg.false_string
    if isinstance(value, Enum):
        return to_url_string(value.value, name, config)
    if isinstance(value, SCALAR_TYPES):
        return str(value)
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()
    if isinstance(value, BINARY_TYPES):
        raise UnstringableValueError(name, value)
    if type(value).__str__ is not object.__str__:
        return str(value)
    raise UnstringableValueError(name, value)


_DEFAULT_CONFIG = RouterConfig()
