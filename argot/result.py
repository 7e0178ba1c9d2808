from collections.abc import Iterator, Mapping
from typing import Any

from attrs import define, field

from argot.parameter import Argument, Option
from argot.token import Token

Parameter = Option | Argument


@define(eq=False)
class ParseResult(Mapping):
    """Resolved values of a successful parse, keyed by parameter handle.

    .. code-block:: python

        count = parser.option("--count", converter=Int(), default=1)
        result = parser.parse("--count 3")
        result[count]  # 3
        result["count"]  # 3

    Every declared parameter is present exactly once.
    """

    _values: dict[Parameter, Any] = field(alias="values")
    _tokens: dict[Parameter, tuple[Token, ...]] = field(factory=dict, alias="tokens")

    def _lookup(self, key: Parameter | str) -> Parameter:
        if isinstance(key, str):
            for parameter in self._values:
                if parameter.name == key:
                    return parameter
            raise KeyError(key)
        return key

    def __getitem__(self, key: Parameter | str) -> Any:
        return self._values[self._lookup(key)]

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.as_dict()!r})"

    def tokens(self, key: Parameter | str) -> tuple[Token, ...]:
        """Tokens consumed by a parameter; empty if its value is a default."""
        return self._tokens.get(self._lookup(key), ())

    def is_default(self, key: Parameter | str) -> bool:
        return not self.tokens(key)

    def as_dict(self) -> dict[str, Any]:
        """Values keyed by parameter :attr:`~argot.Option.name`."""
        return {parameter.name: value for parameter, value in self._values.items()}
