"""Request-scoped endpoint context via ContextVar.

Provides:
- ``endpoint_var``: The ``EndpointContext`` for this task/thread.
- ``bind()`` / ``reset()`` / ``bound()``: set by the request lifecycle
  (see ``backroute.asgi``) before the handler runs, reset after.
- Read accessors used by relative resolution and ``current_url_for()``.

Accessing the context outside a binding raises
``NoActiveRequestContextError`` (a ``LookupError``).

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading (3.14t). No locks needed, and no binding is ever
    visible to another request.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from backroute.errors import NoActiveRequestContextError


@dataclass(frozen=True, slots=True)
class EndpointContext:
    """What the current request is serving.

    Created when dispatch picks a handler, discarded at request end.
    """

    identifier: str
    path_variables: Mapping[str, Any] = field(default_factory=dict)
    request_url: str = ""
    external_base_prefix: str = ""

    @property
    def scope(self) -> str:
        """The part of the identifier before its first ``.``."""
        return self.identifier.split(".", 1)[0]


endpoint_var: ContextVar[EndpointContext] = ContextVar("backroute_endpoint")
"""The endpoint being served. Set by the request lifecycle before dispatch."""


def bind(
    identifier: str,
    path_variables: Mapping[str, Any] | None = None,
    request_url: str = "",
    external_base_prefix: str = "",
) -> Token[EndpointContext]:
    """Bind the endpoint context for the current request.

    Returns the token to pass to ``reset()`` when the request ends.
    """
    context = EndpointContext(
        identifier=identifier,
        path_variables=MappingProxyType(dict(path_variables or {})),
        request_url=request_url,
        external_base_prefix=external_base_prefix.rstrip("/"),
    )
    return endpoint_var.set(context)


def reset(token: Token[EndpointContext]) -> None:
    """Restore whatever was bound before the matching ``bind()``."""
    endpoint_var.reset(token)


@contextmanager
def bound(
    identifier: str,
    path_variables: Mapping[str, Any] | None = None,
    request_url: str = "",
    external_base_prefix: str = "",
) -> Iterator[EndpointContext]:
    """Bind an endpoint context for the duration of a ``with`` block.

    Usage::

        with bound("user.show", {"id": "12"}, "/user/12", "https://example.com"):
            router.url_for(".edit", id=12)  # -> "/user/12/edit"
    """
    token = bind(identifier, path_variables, request_url, external_base_prefix)
    try:
        yield endpoint_var.get()
    finally:
        reset(token)


# -- Accessors --


def current_context() -> EndpointContext:
    """Return the bound context.

    Raises ``NoActiveRequestContextError`` outside a request.
    """
    try:
        return endpoint_var.get()
    except LookupError:
        raise NoActiveRequestContextError(
            "Is the request lifecycle middleware installed?"
        ) from None


def has_context() -> bool:
    return endpoint_var.get(None) is not None


def current_identifier() -> str:
    return current_context().identifier


def current_path_variables() -> Mapping[str, Any]:
    return current_context().path_variables


def current_request_url() -> str:
    return current_context().request_url


def current_external_base_prefix() -> str:
    return current_context().external_base_prefix
