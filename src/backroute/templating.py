"""Kida template globals for URL building.

Registers ``url_for`` and ``current_url_for`` on a kida Environment so
templates never hard-code paths::

    env = Environment(autoescape=True)
    install_globals(env, router)

    {# in a template #}
    <a href="{{ url_for('user.show', id=user.id) }}">{{ user.name }}</a>
    <a href="{{ current_url_for(page=page + 1) }}">Next</a>
"""

from kida import Environment

from backroute.routing.resolver import ReverseRouter


def template_globals(router: ReverseRouter) -> dict[str, object]:
    """The URL-building globals for *router*, keyed by template name."""
    return {
        "url_for": router.url_for,
        "current_url_for": router.current_url_for,
    }


def install_globals(env: Environment, router: ReverseRouter) -> Environment:
    """Add the URL-building globals to *env* and return it."""
    for name, value in template_globals(router).items():
        env.add_global(name, value)
    return env
