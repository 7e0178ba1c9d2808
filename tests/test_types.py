from pathlib import Path

import pytest

from argot import BadParameterValueError, ConversionError
from argot._convert import ConversionFailure, convert_token
from argot.types import Bool, Choice, Int


@pytest.mark.parametrize("raw", ["yes", "Y", "1", "true", "TRUE", "t"])
def test_bool_true(raw):
    assert Bool()(raw) is True


@pytest.mark.parametrize("raw", ["no", "N", "0", "false", "False", "f"])
def test_bool_false(raw):
    assert Bool()(raw) is False


def test_bool_invalid():
    with pytest.raises(ConversionError) as e:
        Bool()("maybe")
    assert str(e.value) == "maybe is not a valid boolean"


def test_choice(parser):
    color = parser.option("--color", converter=Choice("red", "green", "blue"))

    assert parser.parse("--color green")[color] == "green"

    with pytest.raises(BadParameterValueError) as e:
        parser.parse("--color GREEN")
    assert str(e.value) == 'Invalid value for "--color": invalid choice: GREEN. (choose from red, green, blue)'


def test_choice_case_insensitive_returns_canonical():
    assert Choice(["red", "green"], case_sensitive=False)("GREEN") == "green"


def test_convert_token_outcomes():
    assert convert_token(Int(), "3") == 3
    assert convert_token(Int(), "x") == ConversionFailure("x", "x is not a valid integer")


def test_plain_callable_converter(parser):
    n = parser.option("-n", converter=int)
    path = parser.argument("path", Path)

    result = parser.parse("-n 16 out.txt")
    assert result[n] == 16
    assert result[path] == Path("out.txt")

    with pytest.raises(BadParameterValueError) as e:
        parser.parse("-n x out.txt")
    assert str(e.value) == 'Invalid value for "-n": x is not a valid int'


def test_custom_converter_conversion_error(parser):
    def even(raw: str) -> int:
        value = int(raw)
        if value % 2:
            raise ConversionError(raw, f"{raw} is not an even number")
        return value

    parser.option("--even", converter=even)

    with pytest.raises(BadParameterValueError) as e:
        parser.parse("--even 3")
    assert str(e.value) == 'Invalid value for "--even": 3 is not an even number'


def test_custom_converter_named_object(parser):
    class Port:
        name = "port number"

        def __call__(self, raw):
            value = int(raw)
            if not 0 < value < 65536:
                raise ValueError
            return value

    parser.option("--port", converter=Port())

    with pytest.raises(BadParameterValueError) as e:
        parser.parse("--port 70000")
    assert str(e.value) == 'Invalid value for "--port": 70000 is not a valid port number'


def test_default_is_not_converted(parser):
    count = parser.option("--count", converter=Int(), default="not-a-number")
    assert parser.parse("")[count] == "not-a-number"
