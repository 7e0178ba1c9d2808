"""Built-in converters.

A converter is any callable that takes the raw text of one token and returns the
converted value, raising :exc:`ValueError` (usually :exc:`~argot.ConversionError`)
when the text is not acceptable. Converters only ever see their own token.
"""

import re
from collections.abc import Iterable
from typing import ClassVar

from attrs import field

from argot.exceptions import ConversionError
from argot.utils import frozen, to_tuple_converter

__all__ = [
    "Bool",
    "Choice",
    "Float",
    "Int",
]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _check_range(raw: str, value, lower, upper):
    if (lower is not None and value < lower) or (upper is not None and value > upper):
        if lower is None:
            bounds = f"at most {upper}"
        elif upper is None:
            bounds = f"at least {lower}"
        else:
            bounds = f"in the range {lower} to {upper}"
        raise ConversionError(raw, f"{raw} is not {bounds}")


@frozen
class Int:
    """Base-10 integer, optionally bounded (inclusive)."""

    min: int | None = None
    max: int | None = None

    name: ClassVar[str] = "integer"

    def __call__(self, raw: str) -> int:
        if not _INT_RE.fullmatch(raw):
            raise ConversionError(raw, f"{raw} is not a valid {self.name}")
        value = int(raw)
        _check_range(raw, value, self.min, self.max)
        return value


@frozen
class Float:
    """Decimal (``5.5``) or exponential (``1e-3``) floating point literal, optionally bounded (inclusive)."""

    min: float | None = None
    max: float | None = None

    name: ClassVar[str] = "floating point value"

    def __call__(self, raw: str) -> float:
        if not _FLOAT_RE.fullmatch(raw):
            raise ConversionError(raw, f"{raw} is not a valid {self.name}")
        value = float(raw)
        _check_range(raw, value, self.min, self.max)
        return value


@frozen
class Bool:
    name: ClassVar[str] = "boolean"

    def __call__(self, raw: str) -> bool:
        s = raw.lower()
        if s in {"no", "n", "0", "false", "f"}:
            return False
        elif s in {"yes", "y", "1", "true", "t"}:
            return True
        else:
            # Argot is a little bit conservative when coercing strings into boolean.
            raise ConversionError(raw, f"{raw} is not a valid {self.name}")


@frozen(init=False)
class Choice:
    """One of a fixed set of strings.

    .. code-block:: python

        parser.option("--color", converter=Choice("red", "green", "blue"))
    """

    choices: tuple[str, ...] = field(converter=to_tuple_converter)
    case_sensitive: bool = field(default=True, kw_only=True)

    name: ClassVar[str] = "choice"

    def __init__(self, *choices: str | Iterable[str], case_sensitive: bool = True):
        if len(choices) == 1 and not isinstance(choices[0], str):
            choices = tuple(choices[0])
        self.__attrs_init__(choices, case_sensitive=case_sensitive)  # pyright: ignore[reportAttributeAccessIssue]

    def __call__(self, raw: str) -> str:
        for choice in self.choices:
            if raw == choice or (not self.case_sensitive and raw.lower() == choice.lower()):
                return choice
        raise ConversionError(raw, f"invalid choice: {raw}. (choose from {', '.join(self.choices)})")
