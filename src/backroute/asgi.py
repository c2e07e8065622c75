"""ASGI request-lifecycle glue.

Binds the endpoint context for each request so handlers can use relative
endpoints (``".edit"``), ``current_url_for()``, and ``_external=True``.

The middleware does not match requests itself: the host application
tells it which endpoint a scope dispatches to::

    def endpoint_of(scope):
        match = my_router.match(scope["method"], scope["path"])
        return match.endpoint, match.path_params

    app = EndpointContextMiddleware(app, endpoint_of)
"""

from collections.abc import Awaitable, Callable, Iterator, Mapping, MutableMapping
from contextlib import contextmanager
from typing import Any, TypeAlias

from backroute.context import EndpointContext, bound

# ASGI 3 callable types
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]
ASGIApp: TypeAlias = Callable[[Scope, Receive, Send], Awaitable[None]]

EndpointResolver: TypeAlias = Callable[[Scope], tuple[str, Mapping[str, Any]] | None]

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443}


def _header(scope: Scope, name: bytes) -> str | None:
    for key, value in scope.get("headers", ()):
        if key.lower() == name:
            return value.decode("latin-1")
    return None


def request_url(scope: Scope) -> str:
    """Path plus query string of the request, as received."""
    path = scope.get("path", "/")
    query = scope.get("query_string", b"")
    if query:
        return f"{path}?{query.decode('latin-1')}"
    return path


def external_base_prefix(scope: Scope) -> str:
    """``scheme://host[:port]`` plus the mount root path.

    The host comes from the ``Host`` header, falling back to the
    ``server`` entry of the scope. Default ports are omitted.
    """
    scheme = scope.get("scheme", "http")
    root_path = scope.get("root_path", "").rstrip("/")

    host = _header(scope, b"host")
    if host is None:
        server = scope.get("server")
        if server:
            server_host, port = server[0], server[1]
            if ":" in server_host:
                server_host = f"[{server_host}]"
            if port is None or _DEFAULT_PORTS.get(scheme) == port:
                host = server_host
            else:
                host = f"{server_host}:{port}"
        else:
            host = "localhost"
    return f"{scheme}://{host}{root_path}"


@contextmanager
def bind_scope(
    scope: Scope,
    identifier: str,
    path_variables: Mapping[str, Any] | None = None,
) -> Iterator[EndpointContext]:
    """Bind the endpoint context for an ASGI scope within a ``with`` block."""
    with bound(
        identifier,
        path_variables,
        request_url(scope),
        external_base_prefix(scope),
    ) as context:
        yield context


class EndpointContextMiddleware:
    """ASGI middleware that binds the endpoint context per request.

    For ``http`` and ``websocket`` scopes, calls *endpoint_of(scope)*. When
    it returns ``(identifier, path_variables)`` the context is bound for
    the downstream call and reset afterwards, also when it raises. A
    ``None`` result and other scope types pass straight through.
    """

    __slots__ = ("app", "endpoint_of")

    def __init__(self, app: ASGIApp, endpoint_of: EndpointResolver) -> None:
        self.app = app
        self.endpoint_of = endpoint_of

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        found = self.endpoint_of(scope)
        if found is None:
            await self.app(scope, receive, send)
            return

        identifier, path_variables = found
        with bind_scope(scope, identifier, path_variables):
            await self.app(scope, receive, send)
