"""Router import resolution — resolves ``"module:attribute"`` strings to routers.

Shared utility used by ``backroute routes`` and ``backroute resolve`` to
locate a ReverseRouter from a user-supplied import string.
"""

import importlib

from backroute.routing.resolver import ReverseRouter


def load_router(import_string: str) -> ReverseRouter:
    """Resolve an import string to a ReverseRouter instance.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"router"`` (e.g. ``"myapp.urls"`` resolves
    to ``myapp.urls.router``).

    Supports factory functions: if the resolved object is callable and
    not a ReverseRouter, it is called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a ReverseRouter.

    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "router"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, ReverseRouter):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, ReverseRouter):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a backroute.ReverseRouter"
        raise TypeError(msg)

    return obj
