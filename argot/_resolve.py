import os
from collections.abc import Mapping, Sequence

from argot._convert import convert
from argot.exceptions import (
    MissingOptionValueError,
    MissingParameterError,
    UnknownOptionError,
    UnusedTokensError,
)
from argot.parameter import Argument, Option
from argot.result import Parameter, ParseResult
from argot.token import Token
from argot.utils import UNSET, is_option_like


class _Scanner:
    """Single forward pass over the expanded token stream.

    Option tokens are bound as they are met; everything else is queued for the
    positional arguments. A token is never revisited once consumed.
    """

    def __init__(self, options: Sequence[Option], tokens: Sequence[Token], end_of_options_delimiter: str):
        self.lookup: dict[str, Option] = {name: option for option in options for name in option.names}
        self.tokens = tokens
        self.end_of_options_delimiter = end_of_options_delimiter
        self.index = 0
        self.bound: dict[Option, list[Token]] = {option: [] for option in options}
        self.positional: list[Token] = []

    def _match(self, keyword: str, token: Token) -> Option:
        try:
            return self.lookup[keyword]
        except KeyError:
            unknown = token if keyword == token.value else token.evolve(keyword=keyword)
            raise UnknownOptionError(token=unknown, candidates=tuple(self.lookup)) from None

    def _next_value(self, option: Option, keyword: str, token: Token) -> Token:
        """Consume the token following an option as that option's value, whatever it looks like."""
        try:
            value_token = self.tokens[self.index]
        except IndexError:
            raise MissingOptionValueError(parameter=option, keyword=keyword, token=token) from None
        self.index += 1
        return value_token.evolve(keyword=keyword)

    def _bind(self, option: Option, keyword: str, token: Token, attached: str | None):
        if attached is not None:
            # --name=value, -xVALUE, or --flag=false
            self.bound[option].append(token.evolve(value=attached, keyword=keyword))
        elif option.flag:
            self.bound[option].append(token.evolve(value="", keyword=keyword, implicit_value=True))
        else:
            self.bound[option].append(self._next_value(option, keyword, token))

    def _long(self, token: Token):
        keyword, sep, attached = token.value.partition("=")
        option = self._match(keyword, token)
        self._bind(option, keyword, token, attached if sep else None)

    def _short(self, token: Token):
        # GNU-style combined short options: process left-to-right.
        # Once we hit an option that takes a value, the rest is the value.
        chars = token.value[1:]
        for position, char in enumerate(chars):
            keyword = f"-{char}"
            option = self._match(keyword, token)
            remainder = chars[position + 1 :]
            if option.flag and position == 0 and remainder.startswith("="):
                # -v=false
                self._bind(option, keyword, token, remainder[1:])
                return
            if option.flag:
                self._bind(option, keyword, token, None)
                continue
            self._bind(option, keyword, token, remainder or None)
            return

    def scan(self):
        while self.index < len(self.tokens):
            token = self.tokens[self.index]
            self.index += 1

            if self.end_of_options_delimiter and token.value == self.end_of_options_delimiter:
                self.positional.extend(self.tokens[self.index :])
                break

            if not is_option_like(token.value):
                self.positional.append(token)
            elif token.value.startswith("--"):
                self._long(token)
            else:
                self._short(token)


def _parse_env(options: Sequence[Option], bound: dict[Option, list[Token]], environ: Mapping[str, str]):
    for option in options:
        if bound[option]:
            # Don't check environment variables for options that already have values from CLI.
            continue
        for env_var_name in option.env_var:
            try:
                env_var_value = environ[env_var_name]
            except KeyError:
                pass
            else:
                values = env_var_value.split() if option.multiple else [env_var_value]
                bound[option].extend(Token(keyword=env_var_name, value=value, source="env") for value in values)
                break


def _parse_pos(arguments: Sequence[Argument], positional: list[Token]) -> dict[Argument, list[Token]]:
    bound: dict[Argument, list[Token]] = {}
    remaining = positional
    for argument in arguments:
        if argument.variadic:
            bound[argument], remaining = remaining, []
        elif remaining:
            bound[argument], remaining = remaining[:1], remaining[1:]
        else:
            bound[argument] = []

    if remaining:
        raise UnusedTokensError(unused_tokens=[x.value for x in remaining], token=remaining[0])

    return bound


def resolve_tokens(
    options: Sequence[Option],
    arguments: Sequence[Argument],
    tokens: Sequence[Token],
    *,
    end_of_options_delimiter: str = "--",
    environ: Mapping[str, str] | None = None,
) -> ParseResult:
    """Match tokens to parameters, then convert every parameter's tokens.

    Parameters
    ----------
    options: Sequence[Option]
    arguments: Sequence[Argument]
        Positional arguments in declaration order.
    tokens: Sequence[Token]
        Token stream, with @-files already expanded.
    end_of_options_delimiter: str
        Everything after this special token is forced to be positional.
    environ: Mapping[str, str] | None
        Source of environment variable fallbacks. Defaults to :data:`os.environ`.

    Raises
    ------
    UsageError
        On the first problem found; no partial result is returned.

    Returns
    -------
    ParseResult
    """
    scanner = _Scanner(options, tokens, end_of_options_delimiter)
    scanner.scan()
    _parse_env(options, scanner.bound, os.environ if environ is None else environ)

    bound: dict[Parameter, list[Token]] = {**scanner.bound, **_parse_pos(arguments, scanner.positional)}

    values = {}
    for parameter, parameter_tokens in bound.items():
        if not parameter_tokens:
            if parameter.default is not UNSET:
                values[parameter] = parameter.default
            elif parameter.required:
                raise MissingParameterError(parameter=parameter)
            else:
                values[parameter] = parameter.empty_value()
            continue

        converted = convert(parameter, parameter_tokens)
        # Repeated single-valued options: the last occurrence wins.
        values[parameter] = converted if parameter.multi_valued else converted[-1]

    return ParseResult(values=values, tokens={k: tuple(v) for k, v in bound.items()})
