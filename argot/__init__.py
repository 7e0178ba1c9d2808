__version__ = "0.1.0"

__all__ = [
    "ArgFileError",
    "ArgFileRecursionError",
    "Argument",
    "ArgotError",
    "ArgotPanel",
    "BadParameterValueError",
    "ConversionError",
    "DeclarationError",
    "MissingOptionValueError",
    "MissingParameterError",
    "Option",
    "ParseResult",
    "Parser",
    "Token",
    "UNSET",
    "UnclosedQuoteError",
    "UnknownOptionError",
    "UnusedTokensError",
    "UsageError",
    "split_line",
    "types",
]

from argot import types
from argot._lexer import split_line
from argot.core import Parser
from argot.exceptions import (
    ArgFileError,
    ArgFileRecursionError,
    ArgotError,
    BadParameterValueError,
    ConversionError,
    DeclarationError,
    MissingOptionValueError,
    MissingParameterError,
    UnclosedQuoteError,
    UnknownOptionError,
    UnusedTokensError,
    UsageError,
)
from argot.panel import ArgotPanel
from argot.parameter import Argument, Option
from argot.result import ParseResult
from argot.token import Token
from argot.utils import UNSET
