"""Backroute exception hierarchy.

Shared across the template compiler, registry, resolver, and context
accessors so every module raises and catches the same types.

Configuration errors are raised at startup and should abort it.
Resolution errors surface to the caller of ``url_for()``; none of them
are transient, so nothing here is retried.
"""

from collections.abc import Sequence
from typing import Any


class BackrouteError(Exception):
    """Base for all backroute-specific errors."""


# -- Startup --


class ConfigurationError(BackrouteError):
    """Raised when the endpoint table is invalid.

    Typically raised while registering endpoints at startup.
    """


class MalformedPatternError(ConfigurationError):
    """A URI pattern has an unterminated or invalid ``{placeholder}``."""

    def __init__(self, pattern: str, position: int, reason: str) -> None:
        self.pattern = pattern
        self.position = position
        self.reason = reason
        super().__init__(f"Malformed pattern {pattern!r} at position {position}: {reason}")


class MalformedEndpointError(ConfigurationError):
    """An endpoint identifier is not of the form ``"<scope>.<action>"``."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(
            f"Invalid endpoint {identifier!r}: expected '<scope>.<action>' "
            "with exactly one '.' and non-empty parts"
        )


class DuplicateEndpointError(ConfigurationError):
    """Two registrations share the same endpoint identifier."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Endpoint {identifier!r} is already registered")


# -- Resolution --


class ResolutionError(BackrouteError):
    """Base for errors raised while building a URL."""


class UnknownEndpointError(ResolutionError):
    """No endpoint is registered under the requested identifier."""

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint
        super().__init__(f"Not found {endpoint}")


class UnresolvableArgumentsError(ResolutionError):
    """No pattern of the endpoint can be satisfied by the given arguments.

    Carries the endpoint, the (normalized) arguments, and every candidate
    pattern so the failure can be diagnosed from the message alone.
    """

    def __init__(
        self,
        endpoint: str,
        arguments: Sequence[tuple[str, Any]],
        patterns: Sequence[str],
    ) -> None:
        self.endpoint = endpoint
        self.arguments = tuple(arguments)
        self.patterns = tuple(patterns)
        args_repr = ", ".join(f"{name}={value!r}" for name, value in self.arguments)
        super().__init__(
            f"Can not compile {endpoint} with ({args_repr}) for {', '.join(self.patterns)}"
        )


class UnstringableValueError(ResolutionError, TypeError):
    """An argument value has no canonical string conversion."""

    def __init__(self, name: str | None, value: object) -> None:
        self.name = name
        self.value = value
        where = f" for argument {name!r}" if name else ""
        super().__init__(
            f"Value of type {type(value).__name__}{where} has no canonical URL "
            "string. Pass a str, a number, or an object implementing __url_str__()."
        )


# -- Request context --


class NoActiveRequestContextError(BackrouteError, LookupError):
    """The current endpoint context was read outside a request's extent.

    Also a ``LookupError`` so callers used to ``ContextVar.get()`` semantics
    can catch it the same way.
    """

    def __init__(self, detail: str = "") -> None:
        msg = "No endpoint context is bound for the current request."
        if detail:
            msg = f"{msg} {detail}"
        super().__init__(msg)
