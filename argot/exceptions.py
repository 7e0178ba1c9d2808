from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

from attrs import define, field

from argot.token import Token

if TYPE_CHECKING:
    from rich.console import Console

    from argot.parameter import Argument, Option


__all__ = [
    "ArgFileError",
    "ArgFileRecursionError",
    "ArgotError",
    "BadParameterValueError",
    "ConversionError",
    "DeclarationError",
    "MissingOptionValueError",
    "MissingParameterError",
    "UnclosedQuoteError",
    "UnknownOptionError",
    "UnusedTokensError",
    "UsageError",
]


class DeclarationError(Exception):
    """A parameter was declared in a way that can never parse correctly.

    Raised while building a :class:`~argot.Parser`, e.g. on a duplicate option name
    or a positional argument declared after a variadic one.
    """

    # This doesn't derive from ArgotError since this is a developer error
    # rather than a runtime error.


class ConversionError(ValueError):
    """Raised by a converter when a raw token cannot be converted.

    The message should read naturally after ``Invalid value for "<name>": ``.
    """

    def __init__(self, raw: str, reason: str):
        super().__init__(reason)
        self.raw = raw
        self.reason = reason

    def __str__(self):
        return self.reason


@define
class ArgotError(Exception):
    """Root exception for runtime errors.

    As ArgotErrors bubble up the Argot call-stack, more information is added to it.
    """

    msg: str | None = None
    """
    If set, override automatic message generation.
    """

    verbose: bool = False
    """
    More verbose error messages; aimed towards developers debugging their Argot parser.
    """

    root_input_tokens: list[str] | None = None
    """
    The CLI tokens that were initially fed into the :class:`~argot.Parser`.
    """

    unused_tokens: list[str] | None = None
    """
    Leftover tokens after parsing is complete.
    """

    console: Optional["Console"] = field(default=None, kw_only=True)
    """:class:`~rich.console.Console` to display runtime errors."""

    def __str__(self):
        if self.msg is not None:
            return self.msg

        strings = []
        if self.verbose:
            strings.append(type(self).__name__)
            if self.root_input_tokens is not None:
                strings.append(f"Root Input Tokens: {self.root_input_tokens}")

        if strings:
            return "\n".join(strings) + "\n"
        else:
            return ""


@define(kw_only=True)
class UsageError(ArgotError):
    """Malformed command-line input; always fatal to the current parse and always user-facing."""

    token: Token | None = None
    """The offending token, if the error can be pinned to one."""


def _from(token: Token | None) -> str:
    if token is None or token.from_cli:
        return ""
    return f' from "{token.location}"'


@define(kw_only=True)
class BadParameterValueError(UsageError):
    """A raw value could not be converted for exactly one parameter."""

    name: str
    """Display name of the parameter; the option keyword used, or the argument's metavar."""

    message: str
    """Reason reported by the converter."""

    parameter: Optional["Option | Argument"] = None

    @property
    def raw(self) -> str | None:
        return None if self.token is None else self.token.value

    def __str__(self):
        return super().__str__() + f'Invalid value for "{self.name}": {self.message}'


@define(kw_only=True)
class UnknownOptionError(UsageError):
    """Unknown/unregistered option provided by the cli.

    A nearest-neighbor option suggestion may be printed.
    """

    token: Token

    candidates: Sequence[str] = ()
    """Names of all declared options."""

    def __str__(self):
        value = self.token.keyword or self.token.value
        response = f'Unknown option: "{value}"{_from(self.token)}.'

        if self.candidates:
            import difflib

            close_matches = difflib.get_close_matches(value, list(self.candidates), n=1, cutoff=0.6)
            if close_matches:
                response += f' Did you mean "{close_matches[0]}"?'

        return super().__str__() + response


@define(kw_only=True)
class MissingParameterError(UsageError):
    """A required option or positional argument received no value."""

    parameter: "Option | Argument"

    def __str__(self):
        return super().__str__() + f'Missing {self.parameter.kind} "{self.parameter.display_name}".'


@define(kw_only=True)
class MissingOptionValueError(UsageError):
    """A value-taking option was not followed by a value."""

    parameter: "Option"

    keyword: str
    """The option name as typed by the user."""

    def __str__(self):
        return super().__str__() + f'Option "{self.keyword}"{_from(self.token)} requires a value.'


@define(kw_only=True)
class UnusedTokensError(UsageError):
    """Positional tokens were left over after every argument was filled."""

    def __str__(self):
        assert self.unused_tokens is not None
        plural = "s" if len(self.unused_tokens) > 1 else ""
        values = ", ".join(f'"{x}"' for x in self.unused_tokens)
        return super().__str__() + f"Unexpected extra argument{plural}: {values}."


@define(kw_only=True)
class ArgFileError(UsageError):
    """An @-file could not be read."""

    path: str

    reason: str = ""

    def __str__(self):
        response = f'Unable to read @-file "{self.path}"'
        if self.reason:
            response += f": {self.reason}"
        return super().__str__() + response + "."


@define(kw_only=True)
class ArgFileRecursionError(ArgFileError):
    """An @-file references itself, directly or through other @-files, or nests too deeply."""

    chain: tuple[str, ...] = ()
    """The @-files being expanded when the error occurred, outermost first."""

    max_depth: int | None = None

    def __str__(self):
        if self.max_depth is not None and len(self.chain) >= self.max_depth:
            response = f'@-file "{self.path}" exceeds the maximum nesting depth of {self.max_depth}.'
        else:
            response = f'@-file "{self.path}" references itself: {" -> ".join((*self.chain, self.path))}.'
        return ArgotError.__str__(self) + response


@define(kw_only=True)
class UnclosedQuoteError(UsageError):
    """A quoted region in an @-file was not closed before the end of its line."""

    path: str | None = None

    line: int = 0

    def __str__(self):
        return super().__str__() + "unclosed quote in @-file"
