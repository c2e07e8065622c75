"""Redirect values built from endpoint names.

A ``Redirect`` is a plain immutable value; turning it into a framework
response is left to the caller. ``view_name`` gives the
``"redirect:<url>"`` spelling used by view-name based frameworks.

Usage::

    return redirect(router.url_for("user.list"))
    return router.redirect_for("user.show", id=user.id)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Redirect:
    """A redirect to *url*."""

    url: str
    status: int = 302
    headers: tuple[tuple[str, str], ...] = ()

    @property
    def view_name(self) -> str:
        return f"redirect:{self.url}"

    @property
    def location(self) -> tuple[str, str]:
        """The ``Location`` header pair."""
        return ("Location", self.url)

    def with_status(self, status: int) -> Redirect:
        """Return a new Redirect with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Redirect:
        """Return a new Redirect with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Redirect:
        """Return a new Redirect with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))


def redirect(url: str, status: int = 302) -> Redirect:
    return Redirect(url, status=status)
