"""Router configuration.

RouterConfig is a frozen dataclass. Derive variants with ``dataclasses.replace``.
"""

from dataclasses import dataclass

# RFC 3986 pchar minus unreserved (quote() never encodes those)
PATH_SEGMENT_SAFE = "!$&'()*+,;=:@"


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Reverse router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(external_base="https://example.com")
    """

    # Reserved argument name that requests an absolute URL
    external_arg: str = "_external"

    # Absolute prefix used for external URLs when no request is bound
    # (e.g. inside a background job). None = require an active request.
    external_base: str | None = None

    # Class-name suffixes stripped when deriving an endpoint scope
    handler_suffixes: tuple[str, ...] = ("Controller",)

    # Characters left unencoded inside substituted path values
    path_safe: str = PATH_SEGMENT_SAFE

    # Canonical spelling of booleans in URLs
    true_string: str = "true"
    false_string: str = "false"
