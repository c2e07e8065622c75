"""Tests for backroute.routing.template — pattern parsing and expansion."""

import pytest

from backroute.config import RouterConfig
from backroute.errors import ConfigurationError, MalformedPatternError
from backroute.routing.template import TemplatePart, compile_template, parse_pattern


class TestParsePattern:
    def test_root(self) -> None:
        assert parse_pattern("/") == [TemplatePart("/")]

    def test_static(self) -> None:
        assert parse_pattern("/user/new/edit") == [TemplatePart("/user/new/edit")]

    def test_variable(self) -> None:
        parts = parse_pattern("/user/{id}/edit")
        assert parts == [
            TemplatePart("/user/"),
            TemplatePart("id", is_variable=True),
            TemplatePart("/edit"),
        ]

    def test_leading_variable(self) -> None:
        parts = parse_pattern("{lang}/docs")
        assert parts[0] == TemplatePart("lang", is_variable=True)
        assert parts[1] == TemplatePart("/docs")

    def test_adjacent_variables(self) -> None:
        parts = parse_pattern("/{a}{b}")
        assert [p.value for p in parts] == ["/", "a", "b"]

    def test_colon_is_part_of_name(self) -> None:
        parts = parse_pattern("/x/{a:b}")
        assert parts[1] == TemplatePart("a:b", is_variable=True)

    def test_colon_only_name_is_not_empty(self) -> None:
        assert parse_pattern("/user/{:}")[1] == TemplatePart(":", is_variable=True)

    def test_empty_pattern(self) -> None:
        assert parse_pattern("") == []


class TestMalformedPatterns:
    def test_unterminated_brace(self) -> None:
        with pytest.raises(MalformedPatternError) as exc_info:
            parse_pattern("/user/{id")
        assert exc_info.value.pattern == "/user/{id"
        assert exc_info.value.position == 6
        assert "unterminated" in str(exc_info.value)

    def test_slash_inside_placeholder(self) -> None:
        with pytest.raises(MalformedPatternError, match="unexpected '/'"):
            parse_pattern("/user/{id/edit}")

    def test_nested_brace(self) -> None:
        with pytest.raises(MalformedPatternError, match="unexpected '\\{'"):
            parse_pattern("/user/{a{b}}")

    def test_empty_placeholder(self) -> None:
        with pytest.raises(MalformedPatternError, match="empty placeholder"):
            parse_pattern("/user/{}")

    def test_stray_closing_brace(self) -> None:
        with pytest.raises(MalformedPatternError, match="unmatched"):
            parse_pattern("/user/id}")

    def test_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_template("/{")


class TestCompileTemplate:
    def test_variables_in_order(self) -> None:
        t = compile_template("/org/{org}/repo/{repo}")
        assert t.variables == ("org", "repo")
        assert t.pattern == "/org/{org}/repo/{repo}"

    def test_duplicate_variables_listed_once(self) -> None:
        t = compile_template("/{id}/copy/{id}")
        assert t.variables == ("id",)

    def test_no_variables(self) -> None:
        assert compile_template("/user/").variables == ()

    def test_str_is_pattern(self) -> None:
        assert str(compile_template("/user/{id}")) == "/user/{id}"

    def test_frozen(self) -> None:
        t = compile_template("/")
        with pytest.raises(AttributeError):
            t.pattern = "/other"  # type: ignore[misc]


class TestCanSatisfy:
    def test_all_present(self) -> None:
        t = compile_template("/user/{id}/edit")
        assert t.can_satisfy({"id"}) is True

    def test_missing(self) -> None:
        t = compile_template("/org/{org}/repo/{repo}")
        assert t.can_satisfy({"org"}) is False

    def test_extra_names_allowed(self) -> None:
        t = compile_template("/user/{id}")
        assert t.can_satisfy(["id", "page", "sort"]) is True

    def test_no_variables_always_satisfiable(self) -> None:
        t = compile_template("/user/new/edit")
        assert t.can_satisfy([]) is True
        assert t.can_satisfy(["id"]) is True


class TestExpand:
    def test_substitutes_at_placeholder_positions(self) -> None:
        t = compile_template("/org/{org}/repo/{repo}/issues")
        assert t.expand({"org": "acme", "repo": "rocket"}) == "/org/acme/repo/rocket/issues"

    def test_int_value(self) -> None:
        assert compile_template("/user/{id}/edit").expand({"id": 12}) == "/user/12/edit"

    def test_duplicate_variable_substituted_twice(self) -> None:
        assert compile_template("/{id}/copy/{id}").expand({"id": 3}) == "/3/copy/3"

    def test_percent_encodes_values(self) -> None:
        t = compile_template("/search/{q}")
        assert t.expand({"q": "a b/c?d#e"}) == "/search/a%20b%2Fc%3Fd%23e"

    def test_keeps_segment_safe_characters(self) -> None:
        t = compile_template("/tag/{name}")
        assert t.expand({"name": "c++:v1@x"}) == "/tag/c++:v1@x"

    def test_encodes_non_ascii_as_utf8(self) -> None:
        t = compile_template("/city/{name}")
        assert t.expand({"name": "Zürich"}) == "/city/Z%C3%BCrich"

    def test_literal_text_untouched(self) -> None:
        t = compile_template("/a b/{x}")
        assert t.expand({"x": "1"}) == "/a b/1"

    def test_custom_safe_characters(self) -> None:
        t = compile_template("/files/{path}")
        cfg = RouterConfig(path_safe="/")
        assert t.expand({"path": "docs/readme.md"}, cfg) == "/files/docs/readme.md"

    def test_missing_value_raises_key_error(self) -> None:
        with pytest.raises(KeyError):
            compile_template("/user/{id}").expand({})
