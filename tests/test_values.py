"""Tests for backroute.routing.values — canonical URL strings."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum, IntEnum
from uuid import UUID

import pytest

from backroute.config import RouterConfig
from backroute.errors import UnstringableValueError
from backroute.routing.values import Stringable, to_url_string


class Color(Enum):
    RED = "red"


class Level(IntEnum):
    HIGH = 3


class Slug:
    def __init__(self, text: str) -> None:
        self.text = text

    def __url_str__(self) -> str:
        return self.text.lower().replace(" ", "-")


class Named:
    def __str__(self) -> str:
        return "named"


class Opaque:
    pass


class TestScalars:
    def test_str_passthrough(self) -> None:
        assert to_url_string("abc") == "abc"

    def test_int(self) -> None:
        assert to_url_string(12) == "12"

    def test_float(self) -> None:
        assert to_url_string(1.5) == "1.5"

    def test_decimal(self) -> None:
        assert to_url_string(Decimal("9.99")) == "9.99"

    def test_uuid(self) -> None:
        value = UUID("12345678-1234-5678-1234-567812345678")
        assert to_url_string(value) == "12345678-1234-5678-1234-567812345678"

    def test_date(self) -> None:
        assert to_url_string(date(2024, 2, 29)) == "2024-02-29"

    def test_datetime(self) -> None:
        assert to_url_string(datetime(2024, 2, 29, 8, 30)) == "2024-02-29T08:30:00"


class TestBooleans:
    def test_lowercase_by_default(self) -> None:
        assert to_url_string(True) == "true"
        assert to_url_string(False) == "false"

    def test_configurable(self) -> None:
        cfg = RouterConfig(true_string="1", false_string="0")
        assert to_url_string(True, config=cfg) == "1"
        assert to_url_string(False, config=cfg) == "0"


class TestEnums:
    def test_enum_uses_value(self) -> None:
        assert to_url_string(Color.RED) == "red"

    def test_int_enum_uses_value(self) -> None:
        assert to_url_string(Level.HIGH) == "3"


class TestStringable:
    def test_protocol_is_runtime_checkable(self) -> None:
        assert isinstance(Slug("x"), Stringable)
        assert not isinstance("x", Stringable)

    def test_url_str_wins(self) -> None:
        assert to_url_string(Slug("Hello World")) == "hello-world"

    def test_own_str_accepted(self) -> None:
        assert to_url_string(Named()) == "named"


class TestRejected:
    def test_plain_object(self) -> None:
        with pytest.raises(UnstringableValueError) as exc_info:
            to_url_string(Opaque(), "thing")
        assert exc_info.value.name == "thing"
        assert "Opaque" in str(exc_info.value)
        assert "'thing'" in str(exc_info.value)

    def test_list(self) -> None:
        with pytest.raises(UnstringableValueError):
            to_url_string([1, 2])

    def test_dict(self) -> None:
        with pytest.raises(UnstringableValueError):
            to_url_string({"a": 1})

    def test_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            to_url_string(object())

    @pytest.mark.parametrize("value", [b"abc", bytearray(b"abc"), memoryview(b"abc")])
    def test_binary_values(self, value: object) -> None:
        with pytest.raises(UnstringableValueError):
            to_url_string(value, "a")
