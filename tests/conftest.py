"""Shared fixtures: a small controller-based endpoint table."""

import pytest

from backroute.routing.discovery import mapping
from backroute.routing.resolver import ReverseRouter


class MainController:
    @mapping("/")
    def index(self) -> None: ...


@mapping("/user")
class UserController:
    @mapping("/")
    def list(self) -> None: ...

    @mapping("/{id}")
    def show(self) -> None: ...

    @mapping("/{id}/edit", "/new/edit")
    def edit(self) -> None: ...


@pytest.fixture
def router() -> ReverseRouter:
    """Router with main.index, user.list, user.show, and user.edit."""
    r = ReverseRouter()
    r.discover(MainController, UserController)
    return r


@pytest.fixture
def controllers() -> tuple[type, type]:
    """The (MainController, UserController) pair behind ``router``."""
    return MainController, UserController
