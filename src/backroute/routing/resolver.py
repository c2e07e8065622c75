"""Reverse router — endpoint identifier + arguments to URL.

Endpoints are registered during setup. The registry freezes on the first
resolution, after which the router is safe to share between any number
of concurrent requests.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any
from urllib.parse import quote, urlencode

from backroute.config import RouterConfig
from backroute.context import current_context, endpoint_var
from backroute.errors import NoActiveRequestContextError, UnresolvableArgumentsError
from backroute.redirects import Redirect
from backroute.routing.discovery import RouteRecord, discover
from backroute.routing.registry import EndpointRegistry
from backroute.routing.template import UriTemplate
from backroute.routing.values import to_url_string

logger = logging.getLogger("backroute.resolver")

type Arguments = Mapping[str, Any] | Iterable[tuple[str, Any]]


def _as_pairs(args: Arguments) -> list[tuple[str, Any]]:
    if isinstance(args, Mapping):
        return list(args.items())
    return list(args)


def compose_query(
    path: str,
    query_args: list[tuple[str, Any]],
    config: RouterConfig | None = None,
) -> str:
    """Append *query_args* to *path* as an encoded query string.

    Uses ``&`` when the path already carries a ``?`` (a pattern may
    contain a literal query part), ``?`` otherwise.
    """
    if not query_args:
        return path
    encoded = urlencode(
        [(name, to_url_string(value, name, config)) for name, value in query_args],
        quote_via=quote,
    )
    sep = "&" if "?" in path else "?"
    return f"{path}{sep}{encoded}"


class ReverseRouter:
    """Builds URLs for registered endpoints.

    Usage::

        router = ReverseRouter()
        router.register("user.show", ["/user/{id}"])
        router.register("user.edit", ["/user/{id}/edit", "/user/new/edit"])

        router.url_for("user.show", id=12)      # "/user/12"
        router.url_for("user.edit")             # "/user/new/edit"
        router.url_for("user.show", id=1, q=2)  # "/user/1?q=2"

    Patterns of one endpoint are tried in registration order and the
    first one whose variables are all supplied wins, even when a later
    pattern would use more of the arguments.

    Thread safety:
        Registration is single-threaded setup. The freeze transition uses
        a Lock + double-check, same as the app freeze, so exactly one
        thread freezes the registry on first use.
    """

    __slots__ = ("_freeze_lock", "_frozen", "config", "registry")

    def __init__(
        self,
        config: RouterConfig | None = None,
        registry: EndpointRegistry | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self.registry: EndpointRegistry = registry or EndpointRegistry()
        self._frozen: bool = self.registry.frozen
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Registration --

    def register(self, identifier: str, patterns: Iterable[str]) -> tuple[UriTemplate, ...]:
        """Register *patterns* (in order) under *identifier*."""
        return self.registry.register(identifier, patterns)

    def register_routes(self, records: Iterable[RouteRecord]) -> None:
        """Register every discovered ``RouteRecord``."""
        for record in records:
            self.registry.register(record.identifier, record.patterns)

    def discover(self, *targets: Any) -> list[RouteRecord]:
        """Discover ``@mapping`` handlers on *targets* and register them."""
        records = discover(*targets, suffixes=self.config.handler_suffixes)
        self.register_routes(records)
        return records

    def freeze(self) -> None:
        """Freeze the registry now instead of on first resolution."""
        self._ensure_frozen()

    def endpoints(self) -> list[str]:
        return self.registry.endpoints()

    # -- Resolution --

    def resolve_url(self, identifier: str, args: Arguments = ()) -> str:
        """Build the URL for *identifier* from named arguments.

        *args* is a mapping or a sequence of ``(name, value)`` pairs.
        ``None`` values are dropped. A non-None ``_external`` argument
        asks for an absolute URL. Arguments that fill no variable of the
        chosen pattern become query parameters, in the order given.

        An identifier starting with ``.`` is relative to the scope of the
        endpoint currently being served (``".edit"`` inside ``user.show``
        means ``"user.edit"``).

        Raises ``UnknownEndpointError``, ``UnresolvableArgumentsError``,
        ``UnstringableValueError``, or ``NoActiveRequestContextError``.
        """
        self._ensure_frozen()

        endpoint = identifier
        if endpoint.startswith("."):
            endpoint = f"{current_context().scope}{endpoint}"

        external_arg = self.config.external_arg
        is_external = False
        params: list[tuple[str, Any]] = []
        for name, value in _as_pairs(args):
            if value is None:
                continue
            if name == external_arg:
                is_external = True
                continue
            params.append((name, value))

        templates = self.registry.lookup(endpoint)
        names = {name for name, _ in params}
        template = next((t for t in templates if t.can_satisfy(names)), None)
        if template is None:
            raise UnresolvableArgumentsError(endpoint, params, [t.pattern for t in templates])

        variables = set(template.variables)
        path_args: dict[str, Any] = {}
        query_args: list[tuple[str, Any]] = []
        for name, value in params:
            if name in variables:
                path_args[name] = value
            else:
                query_args.append((name, value))

        url = compose_query(template.expand(path_args, self.config), query_args, self.config)
        if is_external:
            url = f"{self._external_prefix()}{url}"

        logger.debug("Resolved %s via %s -> %s", endpoint, template.pattern, url)
        return url

    def url_for(self, endpoint: str, /, **args: Any) -> str:
        """Keyword form of ``resolve_url``: ``url_for("user.show", id=12)``."""
        return self.resolve_url(endpoint, args)

    def current_url_for(self, **args: Any) -> str:
        """URL of the endpoint being served, built from *args* only.

        Path variables of the current request are not reused; pass them
        again to keep them.
        """
        return self.resolve_url(current_context().identifier, args)

    def redirect_for(self, endpoint: str, /, **args: Any) -> Redirect:
        """A ``Redirect`` to ``url_for(endpoint, **args)``."""
        return Redirect(self.resolve_url(endpoint, args))

    def builder_for(self, endpoint: str) -> UrlBuilder:
        return UrlBuilder(self, endpoint)

    @property
    def builder(self) -> UrlBuilder:
        """Builder for the endpoint currently being served."""
        return self.builder_for(current_context().identifier)

    # -- Internal --

    def _external_prefix(self) -> str:
        context = endpoint_var.get(None)
        if context is not None:
            return context.external_base_prefix
        if self.config.external_base is not None:
            return self.config.external_base.rstrip("/")
        raise NoActiveRequestContextError(
            "External URLs need a bound request or RouterConfig(external_base=...)."
        )

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self.registry.freeze()
            self._frozen = True

    def __repr__(self) -> str:
        return f"<ReverseRouter {len(self.registry)} endpoints>"


@dataclass(frozen=True, slots=True)
class UrlBuilder:
    """Immutable, chainable URL builder for one endpoint.

    Each ``with_*()`` call returns a new builder::

        url = router.builder_for("user.list").with_arg("page", 2).external().build()
    """

    router: ReverseRouter
    endpoint: str
    args: tuple[tuple[str, Any], ...] = ()

    def with_arg(self, name: str, value: Any) -> UrlBuilder:
        return replace(self, args=(*self.args, (name, value)))

    def with_args(self, **args: Any) -> UrlBuilder:
        return replace(self, args=(*self.args, *args.items()))

    def external(self) -> UrlBuilder:
        """Request an absolute URL."""
        return self.with_arg(self.router.config.external_arg, True)

    def build(self) -> str:
        return self.router.resolve_url(self.endpoint, self.args)

    def __str__(self) -> str:
        return self.build()
