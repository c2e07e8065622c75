"""Route discovery — turn decorated handlers into endpoint records.

Handlers declare their URL patterns with ``@mapping``. Controller classes
may carry a class-level ``@mapping`` whose patterns prefix every method::

    @mapping("/user")
    class UserController:
        @mapping("/")
        def list(self): ...

        @mapping("/{id}/edit", "/new/edit")
        def edit(self): ...

    discover(UserController)
    # -> [RouteRecord("user.list", ("/user/",)),
    #     RouteRecord("user.edit", ("/user/{id}/edit", "/user/new/edit"))]

The endpoint identifier is ``"<scope>.<action>"``: the class name without
its ``Controller`` suffix and with a lowercase first letter, then the
method name. Module-level functions use the last component of their
module name as the scope. An explicit ``name=`` always wins.
"""

import inspect
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from types import ModuleType
from typing import Any, TypeVar

logger = logging.getLogger("backroute.discovery")

MAPPING_ATTR = "__backroute_mapping__"

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RouteMapping:
    """Patterns attached to a class or handler by ``@mapping``."""

    patterns: tuple[str, ...]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteRecord:
    """One endpoint as handed to ``EndpointRegistry.register``."""

    identifier: str
    patterns: tuple[str, ...]


def mapping(*patterns: str, name: str | None = None) -> Callable[[T], T]:
    """Attach URL patterns to a controller class or handler.

    Args:
        patterns: URL patterns. Use ``{param}`` for path variables. On a
            class they are prefixes; on a handler with none given the
            handler maps to the class prefix (or ``/``).
        name: On a handler, the full endpoint identifier to use. On a
            class, the scope to use instead of the derived one.
    """

    def decorator(target: T) -> T:
        setattr(target, MAPPING_ATTR, RouteMapping(tuple(patterns), name))
        return target

    return decorator


def get_mapping(target: Any) -> RouteMapping | None:
    found = getattr(target, MAPPING_ATTR, None)
    if found is None:
        # staticmethod/classmethod wrappers in a class __dict__
        inner = getattr(target, "__func__", None)
        if inner is not None:
            found = getattr(inner, MAPPING_ATTR, None)
    return found if isinstance(found, RouteMapping) else None


def scope_name(cls: type, suffixes: Iterable[str] = ("Controller",)) -> str:
    """Derive an endpoint scope from a controller class name.

    ``UserController`` -> ``user``, ``UserProfileController`` -> ``userProfile``.
    """
    name = cls.__name__
    for suffix in suffixes:
        if suffix and name.endswith(suffix) and name != suffix:
            name = name[: -len(suffix)]
            break
    return name[:1].lower() + name[1:]


def combine_patterns(prefix: str, pattern: str) -> str:
    """Join a class prefix and a handler pattern with exactly one ``/``."""
    if not prefix:
        return pattern or "/"
    if not pattern:
        return prefix
    if prefix.endswith("/") and pattern.startswith("/"):
        return prefix + pattern[1:]
    if not prefix.endswith("/") and not pattern.startswith("/"):
        return f"{prefix}/{pattern}"
    return prefix + pattern


def _handler_patterns(prefixes: tuple[str, ...], handler: RouteMapping) -> tuple[str, ...]:
    own = handler.patterns or ("",)
    combined = (combine_patterns(prefix, pattern) for prefix in prefixes for pattern in own)
    return tuple(dict.fromkeys(combined))


def _class_members(cls: type) -> Iterator[tuple[str, Any]]:
    """Yield (name, attribute) in definition order, base classes first."""
    members: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for attr_name, attr in vars(klass).items():
            members[attr_name] = attr
    yield from members.items()


def discover_class(cls: type, suffixes: Iterable[str] = ("Controller",)) -> list[RouteRecord]:
    """Collect the mapped handlers of one controller class."""
    class_mapping = vars(cls).get(MAPPING_ATTR)
    prefixes: tuple[str, ...] = ("",)
    scope = scope_name(cls, suffixes)
    if isinstance(class_mapping, RouteMapping):
        prefixes = class_mapping.patterns or ("",)
        scope = class_mapping.name or scope

    records: list[RouteRecord] = []
    for attr_name, attr in _class_members(cls):
        if attr_name == MAPPING_ATTR or inspect.isclass(attr):
            continue
        handler = get_mapping(attr)
        if handler is None:
            continue
        identifier = handler.name or f"{scope}.{attr_name}"
        records.append(RouteRecord(identifier, _handler_patterns(prefixes, handler)))
    return records


def discover_function(func: Callable[..., Any]) -> RouteRecord | None:
    handler = get_mapping(func)
    if handler is None:
        return None
    scope = func.__module__.rpartition(".")[2]
    identifier = handler.name or f"{scope}.{func.__name__}"
    return RouteRecord(identifier, _handler_patterns(("",), handler))


def _discover_module(module: ModuleType, suffixes: Iterable[str]) -> list[RouteRecord]:
    records: list[RouteRecord] = []
    for obj in vars(module).values():
        if getattr(obj, "__module__", None) != module.__name__:
            continue
        if inspect.isclass(obj):
            records.extend(discover_class(obj, suffixes))
        elif inspect.isfunction(obj):
            record = discover_function(obj)
            if record is not None:
                records.append(record)
    return records


def discover(*targets: Any, suffixes: Iterable[str] = ("Controller",)) -> list[RouteRecord]:
    """Collect route records from controller classes, functions, or modules.

    Records come back in discovery order. Duplicate identifiers are not
    merged here; registering them fails with ``DuplicateEndpointError``.

    Raises ``TypeError`` for a target that is none of the above.
    """
    suffixes = tuple(suffixes)
    records: list[RouteRecord] = []
    for target in targets:
        if inspect.ismodule(target):
            records.extend(_discover_module(target, suffixes))
        elif inspect.isclass(target):
            records.extend(discover_class(target, suffixes))
        elif callable(target):
            record = discover_function(target)
            if record is None:
                msg = f"{target!r} has no @mapping patterns"
                raise TypeError(msg)
            records.append(record)
        else:
            msg = f"Cannot discover routes on {type(target).__name__}"
            raise TypeError(msg)

    for record in records:
        logger.debug("Discovered %s -> %s", record.identifier, ", ".join(record.patterns))
    return records
