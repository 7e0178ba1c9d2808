import re
from collections.abc import Callable
from typing import Any, ClassVar, Literal

from attrs import Factory, define, field

from argot.exceptions import DeclarationError
from argot.types import Bool
from argot.utils import UNSET, to_tuple_converter

__all__ = [
    "Argument",
    "Nargs",
    "Option",
]

Nargs = Literal[1, "?", "*", "+"]

_SHORT_NAME_RE = re.compile(r"-[^-\s=]")
_LONG_NAME_RE = re.compile(r"--[^-\s=][^\s=]*")


def _validate_names(instance, attribute, names: tuple[str, ...]):
    if not names:
        raise DeclarationError("An option requires at least one name.")
    for name in names:
        if not (_SHORT_NAME_RE.fullmatch(name) or _LONG_NAME_RE.fullmatch(name)):
            raise DeclarationError(
                f'Invalid option name "{name}". Expected a short ("-x") or long ("--name") option name.'
            )


def _transform(name: str) -> str:
    return name.lstrip("-").replace("-", "_")


@define(kw_only=True, frozen=True, eq=False)
class Option:
    """A named parameter introduced by ``-x``/``--name`` tokens.

    Instances are created by :meth:`argot.Parser.option` and serve as the handle
    for reading the resolved value back out of a :class:`~argot.ParseResult`.
    """

    names: tuple[str, ...] = field(converter=to_tuple_converter, validator=_validate_names)
    """All aliases, e.g. ``("-x", "--xx")``."""

    flag: bool = False
    """If :obj:`True`, the option takes no value; its presence means :obj:`True`."""

    converter: Callable[[str], Any] = field(
        default=Factory(lambda self: Bool() if self.flag else str, takes_self=True),
    )

    default: Any = UNSET
    """Used verbatim (without conversion) when no token was supplied."""

    required: bool = False

    multiple: bool = False
    """Collect every occurrence into a list instead of keeping the last one."""

    env_var: tuple[str, ...] = field(default=(), converter=to_tuple_converter)
    """Environment variables consulted, in order, when no command-line token was supplied."""

    kind: ClassVar[str] = "option"

    def __attrs_post_init__(self):
        if self.required and self.default is not UNSET:
            raise DeclarationError(f'Option "{self.display_name}" cannot be both required and have a default.')

    @property
    def display_name(self) -> str:
        """The longest alias; used when no specific keyword is known."""
        return max(self.names, key=len)

    @property
    def name(self) -> str:
        """Python-friendly name, e.g. ``"dry_run"`` for ``--dry-run``."""
        return _transform(self.display_name)

    @property
    def multi_valued(self) -> bool:
        return self.multiple

    def empty_value(self) -> Any:
        if self.multiple:
            return []
        if self.flag:
            return False
        return None


@define(kw_only=True, frozen=True, eq=False)
class Argument:
    """A positional parameter, filled in declaration order.

    Instances are created by :meth:`argot.Parser.argument` and serve as the handle
    for reading the resolved value back out of a :class:`~argot.ParseResult`.
    """

    name: str

    nargs: Nargs = field(default=1)
    """
    * ``1``: exactly one token.
    * ``"?"``: zero or one token.
    * ``"*"``: all remaining tokens, possibly none.
    * ``"+"``: all remaining tokens, at least one.
    """

    converter: Callable[[str], Any] = str

    default: Any = UNSET
    """Used verbatim (without conversion) when no token was supplied; makes the argument optional."""

    metavar: str | None = None
    """Display name in error messages. Defaults to the upper-cased ``name``."""

    kind: ClassVar[str] = "argument"

    @nargs.validator
    def _validate_nargs(self, attribute, value):
        if value not in (1, "?", "*", "+"):
            raise DeclarationError(f'Invalid nargs {value!r} for argument "{self.name}". Expected one of 1, "?", "*", "+".')

    @property
    def display_name(self) -> str:
        return self.metavar or self.name.upper()

    @property
    def variadic(self) -> bool:
        return self.nargs in ("*", "+")

    @property
    def required(self) -> bool:
        return self.nargs in (1, "+") and self.default is UNSET

    @property
    def multi_valued(self) -> bool:
        return self.variadic

    def empty_value(self) -> Any:
        return [] if self.variadic else None
