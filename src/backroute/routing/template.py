"""URI template compilation.

A pattern such as ``/user/{id}/edit`` is parsed once into alternating
literal and variable parts. The compiled ``UriTemplate`` is immutable and
answers two questions at resolution time: can it be satisfied by a set of
argument names, and what literal path does a set of values expand to.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from urllib.parse import quote

from backroute.config import RouterConfig
from backroute.errors import MalformedPatternError
from backroute.routing.values import to_url_string


@dataclass(frozen=True, slots=True)
class TemplatePart:
    """A parsed piece of a URI pattern.

    Literal:  ``/user/``   (is_variable=False)
    Variable: ``{id}``     (is_variable=True, value="id")

    The variable name is the whole brace content, so ``{a:b}`` names ``a:b``.
    """

    value: str
    is_variable: bool = False


@dataclass(frozen=True, slots=True)
class UriTemplate:
    """A compiled URI pattern.

    Created once per pattern at registration time and never mutated.
    """

    pattern: str
    variables: tuple[str, ...]
    parts: tuple[TemplatePart, ...]

    def can_satisfy(self, names: Iterable[str]) -> bool:
        """True if every variable of this template is among *names*.

        Extra names are fine (they become query parameters). A template
        without variables is always satisfiable.
        """
        provided = set(names)
        return all(variable in provided for variable in self.variables)

    def expand(
        self,
        path_args: Mapping[str, object],
        config: RouterConfig | None = None,
    ) -> str:
        """Substitute *path_args* into the pattern.

        Values are converted with ``to_url_string`` and percent-encoded as
        path segments. Literal text is copied untouched.

        Raises ``KeyError`` if a variable has no value.
        """
        safe = config.path_safe if config is not None else _DEFAULT_SAFE
        pieces: list[str] = []
        for part in self.parts:
            if part.is_variable:
                raw = to_url_string(path_args[part.value], part.value, config)
                pieces.append(quote(raw, safe=safe))
            else:
                pieces.append(part.value)
        return "".join(pieces)

    def __str__(self) -> str:
        return self.pattern


_DEFAULT_SAFE = RouterConfig().path_safe


def parse_pattern(pattern: str) -> list[TemplatePart]:
    """Split a pattern string into literal and variable parts.

    Examples::

        "/"               -> [TemplatePart("/")]
        "/user/{id}"      -> [TemplatePart("/user/"), TemplatePart("id", is_variable=True)]
        "/x/{a:b}"       -> [TemplatePart("/x/"), TemplatePart("a:b", is_variable=True)]

    Raises ``MalformedPatternError`` for an unterminated ``{``, an empty
    placeholder, a ``/`` or ``{`` inside a placeholder, or a stray ``}``.
    """
    parts: list[TemplatePart] = []
    literal_start = 0
    i = 0
    n = len(pattern)

    while i < n:
        char = pattern[i]
        if char == "}":
            raise MalformedPatternError(pattern, i, "unmatched '}'")
        if char != "{":
            i += 1
            continue

        end = i + 1
        while end < n and pattern[end] not in "{}/":
            end += 1
        if end == n:
            raise MalformedPatternError(pattern, i, "unterminated '{'")
        if pattern[end] != "}":
            raise MalformedPatternError(
                pattern, end, f"unexpected {pattern[end]!r} inside placeholder"
            )

        name = pattern[i + 1 : end]
        if not name:
            raise MalformedPatternError(pattern, i, "empty placeholder name")

        if i > literal_start:
            parts.append(TemplatePart(pattern[literal_start:i]))
        parts.append(TemplatePart(name, is_variable=True))
        i = end + 1
        literal_start = i

    if literal_start < n:
        parts.append(TemplatePart(pattern[literal_start:]))
    return parts


def compile_template(pattern: str) -> UriTemplate:
    """Compile *pattern* into an immutable ``UriTemplate``.

    Variable names are collected in order of first appearance; a name
    used twice is listed once but substituted at both positions.
    """
    parts = parse_pattern(pattern)
    variables = tuple(dict.fromkeys(p.value for p in parts if p.is_variable))
    return UriTemplate(pattern=pattern, variables=variables, parts=tuple(parts))
