"""Backroute — reverse routing for Python web applications.

Build URLs from endpoint names instead of hard-coding paths, so routes
can move without breaking every caller and template.

Basic usage::

    from backroute import ReverseRouter

    router = ReverseRouter()
    router.register("user.show", ["/user/{id}"])
    router.register("user.edit", ["/user/{id}/edit", "/user/new/edit"])

    router.url_for("user.show", id=12)   # "/user/12"
    router.url_for("user.edit")          # "/user/new/edit"
    router.url_for("user.show", id=12, tab="posts")  # "/user/12?tab=posts"

Controller discovery::

    from backroute import mapping

    @mapping("/user")
    class UserController:
        @mapping("/{id}")
        def show(self): ...

    router.discover(UserController)   # registers "user.show"

Request context (relative endpoints, ``_external=True``)::

    from backroute.asgi import EndpointContextMiddleware
    app = EndpointContextMiddleware(app, endpoint_of)
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0"

# Public name -> defining module, resolved on first attribute access
_LAZY_IMPORTS: dict[str, str] = {
    # Resolution
    "ReverseRouter": "backroute.routing.resolver",
    "UrlBuilder": "backroute.routing.resolver",
    "EndpointRegistry": "backroute.routing.registry",
    "UriTemplate": "backroute.routing.template",
    "compile_template": "backroute.routing.template",
    "Stringable": "backroute.routing.values",
    "RouterConfig": "backroute.config",
    # Discovery
    "RouteRecord": "backroute.routing.discovery",
    "discover": "backroute.routing.discovery",
    "mapping": "backroute.routing.discovery",
    # Redirects
    "Redirect": "backroute.redirects",
    "redirect": "backroute.redirects",
    # Request context
    "EndpointContext": "backroute.context",
    "bind": "backroute.context",
    "bound": "backroute.context",
    "reset": "backroute.context",
    "current_identifier": "backroute.context",
    "current_path_variables": "backroute.context",
    "current_request_url": "backroute.context",
    "current_external_base_prefix": "backroute.context",
    # Errors
    "BackrouteError": "backroute.errors",
    "ConfigurationError": "backroute.errors",
    "MalformedPatternError": "backroute.errors",
    "MalformedEndpointError": "backroute.errors",
    "DuplicateEndpointError": "backroute.errors",
    "ResolutionError": "backroute.errors",
    "UnknownEndpointError": "backroute.errors",
    "UnresolvableArgumentsError": "backroute.errors",
    "UnstringableValueError": "backroute.errors",
    "NoActiveRequestContextError": "backroute.errors",
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import backroute`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
