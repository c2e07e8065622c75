"""Endpoint registry — identifier to ordered compiled templates.

Endpoints are registered during setup and the table is frozen into a
read-only mapping before the first URL is resolved.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from backroute.errors import (
    ConfigurationError,
    DuplicateEndpointError,
    MalformedEndpointError,
    UnknownEndpointError,
)
from backroute.routing.template import UriTemplate, compile_template

logger = logging.getLogger("backroute.registry")


def validate_identifier(identifier: str) -> None:
    """Check that *identifier* has the form ``"<scope>.<action>"``.

    Raises ``MalformedEndpointError`` otherwise.
    """
    scope, sep, action = identifier.partition(".")
    if not sep or not scope or not action or "." in action:
        raise MalformedEndpointError(identifier)


class EndpointRegistry:
    """Append-once mapping of endpoint identifier to compiled templates.

    Usage::

        registry = EndpointRegistry()
        registry.register("user.edit", ["/user/{id}/edit", "/user/new/edit"])
        registry.freeze()
        templates = registry.lookup("user.edit")

    Thread safety:
        ``register`` is for the single-threaded setup phase. After
        ``freeze()`` the table is a ``MappingProxyType`` over tuples, so
        concurrent ``lookup`` calls need no locks.
    """

    __slots__ = ("_entries", "_frozen", "_table")

    def __init__(self) -> None:
        # Mutable only through register(); readers go through _table
        self._entries: dict[str, tuple[UriTemplate, ...]] = {}
        self._table: Mapping[str, tuple[UriTemplate, ...]] = MappingProxyType(self._entries)
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, identifier: str, patterns: Iterable[str]) -> tuple[UriTemplate, ...]:
        """Compile *patterns* and store them under *identifier*.

        Order is preserved: it decides which pattern wins when several
        can be satisfied. Nothing is stored if any pattern is malformed.

        Raises ``MalformedEndpointError``, ``DuplicateEndpointError``,
        ``MalformedPatternError``, or ``ConfigurationError`` (frozen
        registry, empty pattern list, a bare string instead of a list).
        """
        if self._frozen:
            msg = f"Cannot register {identifier!r}: the endpoint registry is frozen."
            raise ConfigurationError(msg)

        if isinstance(patterns, str):
            msg = f"Endpoint {identifier!r}: patterns must be a list of strings, not a str."
            raise ConfigurationError(msg)

        validate_identifier(identifier)
        if identifier in self._entries:
            raise DuplicateEndpointError(identifier)

        templates = tuple(compile_template(pattern) for pattern in patterns)
        if not templates:
            msg = f"Endpoint {identifier!r} has no URL patterns."
            raise ConfigurationError(msg)

        self._entries[identifier] = templates
        logger.debug(
            "Registered %s -> %s", identifier, ", ".join(t.pattern for t in templates)
        )
        return templates

    def freeze(self) -> None:
        """Make the registry read-only. Safe to call more than once."""
        if self._frozen:
            return
        self._frozen = True
        logger.debug("Endpoint registry frozen with %d endpoints", len(self._table))

    def lookup(self, identifier: str) -> tuple[UriTemplate, ...]:
        """Return the templates registered for *identifier*, in order.

        Raises ``UnknownEndpointError`` if nothing is registered.
        """
        try:
            return self._table[identifier]
        except KeyError:
            raise UnknownEndpointError(identifier) from None

    # -- Introspection --

    def endpoints(self) -> list[str]:
        """Registered identifiers in registration order."""
        return list(self._table)

    def items(self) -> Iterator[tuple[str, tuple[UriTemplate, ...]]]:
        return iter(self._table.items())

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<EndpointRegistry {len(self._table)} endpoints ({state})>"
