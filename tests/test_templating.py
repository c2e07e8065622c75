"""Tests for backroute.templating — url_for in kida templates."""

from kida import Environment

from backroute.context import bound
from backroute.routing.resolver import ReverseRouter
from backroute.templating import install_globals, template_globals


def _render(env: Environment, source: str, **ctx: object) -> str:
    tpl = env.from_string(source)
    return tpl.render(ctx).strip()


class TestTemplateGlobals:
    def test_names(self, router: ReverseRouter) -> None:
        assert set(template_globals(router)) == {"url_for", "current_url_for"}

    def test_install_returns_env(self, router: ReverseRouter) -> None:
        env = Environment(autoescape=True)
        assert install_globals(env, router) is env


class TestRendering:
    def test_url_for_in_template(self, router: ReverseRouter) -> None:
        env = install_globals(Environment(autoescape=True), router)
        html = _render(env, '<a href="{{ url_for("user.show", id=user_id) }}">me</a>', user_id=12)
        assert html == '<a href="/user/12">me</a>'

    def test_url_for_without_arguments(self, router: ReverseRouter) -> None:
        env = install_globals(Environment(autoescape=True), router)
        assert _render(env, '{{ url_for("user.edit") }}') == "/user/new/edit"

    def test_current_url_for_in_template(self, router: ReverseRouter) -> None:
        env = install_globals(Environment(autoescape=True), router)
        with bound("user.list", {}, "/user/", ""):
            assert _render(env, "{{ current_url_for(page=2) }}") == "/user/?page=2"
