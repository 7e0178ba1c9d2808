import sys
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Optional, TypeVar

from attrs import define, field

from argot._argfile import DEFAULT_MAX_DEPTH, expand_argfiles
from argot._resolve import resolve_tokens
from argot.exceptions import ArgotError, DeclarationError, UsageError
from argot.panel import ArgotPanel
from argot.parameter import Argument, Nargs, Option
from argot.result import ParseResult
from argot.token import Token
from argot.utils import UNSET, create_error_console_from_console, normalize_tokens

if TYPE_CHECKING:
    from rich.console import Console

T = TypeVar("T", bound=Callable[..., Any])


@define
class Parser:
    """Declares options and positional arguments, and resolves command-line tokens against them.

    .. code-block:: python

        from argot import Parser
        from argot.types import Float

        parser = Parser()
        x = parser.option("-x", "--xx", converter=Float(), default=-1.0)
        paths = parser.argument("paths", nargs="*")

        result = parser.parse("-x5.5 a.txt b.txt")
        result[x]  # 5.5
        result[paths]  # ["a.txt", "b.txt"]
    """

    argfile_prefix: str | None = field(default="@", kw_only=True)
    """Tokens starting with this prefix are replaced by the contents of the named file. :obj:`None` disables."""

    max_argfile_depth: int | None = field(default=DEFAULT_MAX_DEPTH, kw_only=True)
    """Maximum nesting of @-files referencing other @-files. :obj:`None` for unlimited."""

    end_of_options_delimiter: str = field(default="--", kw_only=True)
    """All tokens after this delimiter are positional, even if they look like options."""

    _console: Optional["Console"] = field(default=None, kw_only=True, alias="console")

    _error_console: Optional["Console"] = field(default=None, kw_only=True, alias="error_console")

    print_error: bool = field(default=True, kw_only=True)
    """Print a rich-formatted panel to :attr:`error_console` when parsing fails."""

    exit_on_error: bool = field(default=True, kw_only=True)
    """Call ``sys.exit(1)`` when parsing fails."""

    verbose: bool = field(default=False, kw_only=True)
    """Prefix error messages with developer-oriented debugging information."""

    _options: list[Option] = field(factory=list, init=False)
    _arguments: list[Argument] = field(factory=list, init=False)
    _default_command: Callable[[ParseResult], Any] | None = field(default=None, init=False)

    ###########
    # Methods #
    ###########
    @property
    def options(self) -> tuple[Option, ...]:
        return tuple(self._options)

    @property
    def arguments(self) -> tuple[Argument, ...]:
        return tuple(self._arguments)

    @property
    def console(self) -> "Console":
        if self._console is None:
            from rich.console import Console

            self._console = Console()
        return self._console

    @console.setter
    def console(self, console: Optional["Console"]):
        self._console = console

    @property
    def error_console(self) -> "Console":
        if self._error_console is None:
            self._error_console = create_error_console_from_console(self.console)
        return self._error_console

    @error_console.setter
    def error_console(self, console: Optional["Console"]):
        self._error_console = console

    def option(
        self,
        *names: str,
        converter: Callable[[str], Any] | None = None,
        default: Any = UNSET,
        required: bool = False,
        multiple: bool = False,
        flag: bool = False,
        env_var: None | str | Iterable[str] = None,
    ) -> Option:
        """Declare an option.

        Parameters
        ----------
        *names: str
            Aliases, e.g. ``"-x", "--xx"``.
        converter: Callable[[str], Any] | None
            Converts each raw value. Defaults to :class:`str`, or :class:`~argot.types.Bool` for flags.
        default: Any
            Value used verbatim when the option is not supplied.
        required: bool
            Fail with :exc:`~argot.MissingParameterError` when the option is not supplied.
        multiple: bool
            Allow the option to be repeated, collecting every value into a list.
        flag: bool
            The option takes no value; supplying it means :obj:`True`.
        env_var: None | str | Iterable[str]
            Environment variable(s) to fall back on when the option is not supplied.

        Returns
        -------
        Option
            Handle for reading the value from a :class:`~argot.ParseResult`.
        """
        kwargs = {} if converter is None else {"converter": converter}
        option = Option(
            names=names,
            flag=flag,
            default=default,
            required=required,
            multiple=multiple,
            env_var=env_var,
            **kwargs,
        )
        for existing in self._options:
            if collisions := set(existing.names) & set(option.names):
                raise DeclarationError(f'Option name "{sorted(collisions)[0]}" is already registered.')
        self._options.append(option)
        return option

    def argument(
        self,
        name: str,
        converter: Callable[[str], Any] = str,
        *,
        nargs: Nargs = 1,
        default: Any = UNSET,
        metavar: str | None = None,
    ) -> Argument:
        """Declare a positional argument.

        Arguments are filled in declaration order. Only the last argument may be
        variadic (``nargs="*"`` or ``nargs="+"``).

        Returns
        -------
        Argument
            Handle for reading the value from a :class:`~argot.ParseResult`.
        """
        argument = Argument(name=name, converter=converter, nargs=nargs, default=default, metavar=metavar)
        if any(x.name == name for x in self._arguments):
            raise DeclarationError(f'Argument "{name}" is already registered.')
        if self._arguments and self._arguments[-1].variadic:
            raise DeclarationError(
                f'Argument "{name}" cannot be declared after variadic argument "{self._arguments[-1].name}".'
            )
        self._arguments.append(argument)
        return argument

    def default(self, obj: T) -> T:
        """Decorator to register the function called with the :class:`~argot.ParseResult` of a successful parse."""
        if self._default_command is not None:
            raise DeclarationError(f"The default command is already registered to {self._default_command!r}.")
        self._default_command = obj
        return obj

    def parse(self, tokens: None | str | Iterable[str] = None) -> ParseResult:
        """Resolve ``tokens`` into a :class:`~argot.ParseResult`.

        Parameters
        ----------
        tokens: None | str | Iterable[str]
            Either a string, or a list of strings to parse.
            If a string, it will be split via ``shlex.split``.
            If :obj:`None`, defaults to ``sys.argv[1:]``.

        Raises
        ------
        UsageError
            On the first malformed input encountered.
        """
        tokens = normalize_tokens(tokens)
        try:
            expanded = expand_argfiles(
                [Token(value=x) for x in tokens],
                prefix=self.argfile_prefix,
                max_depth=self.max_argfile_depth,
                end_of_options_delimiter=self.end_of_options_delimiter,
            )
            return resolve_tokens(
                self._options,
                self._arguments,
                expanded,
                end_of_options_delimiter=self.end_of_options_delimiter,
            )
        except ArgotError as e:
            e.verbose = self.verbose
            e.root_input_tokens = tokens
            raise

    def resolve(self, tokens: None | str | Iterable[str] = None) -> ParseResult | UsageError:
        """Like :meth:`parse`, but returns the :exc:`~argot.UsageError` instead of raising it."""
        try:
            return self.parse(tokens)
        except UsageError as e:
            return e

    def __call__(
        self,
        tokens: None | str | Iterable[str] = None,
        *,
        error_console: Optional["Console"] = None,
        print_error: bool | None = None,
        exit_on_error: bool | None = None,
        verbose: bool | None = None,
    ):
        """Parse ``tokens`` and invoke the :meth:`default` function with the result.

        Parameters
        ----------
        tokens: None | str | Iterable[str]
            Either a string, or a list of strings to parse.
            If :obj:`None`, defaults to ``sys.argv[1:]``.
        error_console: ~rich.console.Console
            Console to print error messages to.
            If not provided, defaults to :attr:`Parser.error_console`.
        print_error: bool | None
            Print a rich-formatted error on error.
            If :obj:`None`, inherits from :attr:`Parser.print_error`.
        exit_on_error: bool | None
            If there is an error parsing the CLI tokens invoke ``sys.exit(1)``.
            Otherwise, continue to raise the exception.
            If :obj:`None`, inherits from :attr:`Parser.exit_on_error`.
        verbose: bool | None
            If :obj:`None`, inherits from :attr:`Parser.verbose`.

        Returns
        -------
        return_value: Any
            The value the default function returns, or the :class:`~argot.ParseResult`
            if no default function is registered.
        """
        try:
            result = self.parse(tokens)
        except UsageError as e:
            if verbose is not None:
                e.verbose = verbose
            e.console = error_console or self.error_console
            if print_error if print_error is not None else self.print_error:
                e.console.print(ArgotPanel(e))
            if exit_on_error if exit_on_error is not None else self.exit_on_error:
                sys.exit(1)
            raise

        if self._default_command is None:
            return result
        return self._default_command(result)
