"""Expansion of ``@path`` tokens into the contents of the referenced file."""

import logging
from collections.abc import Iterable
from pathlib import Path

from argot._lexer import split_line
from argot.exceptions import ArgFileError, ArgFileRecursionError, UnclosedQuoteError
from argot.token import Token

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


def is_argfile_reference(value: str, prefix: str | None) -> bool:
    """A bare prefix (e.g. a lone ``"@"``) is an ordinary token."""
    return bool(prefix) and len(value) > len(prefix) and value.startswith(prefix)  # pyright: ignore[reportArgumentType]


def _read_text(path: str, token: Token) -> str:
    try:
        with Path(path).open(encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise ArgFileError(path=path, reason="not a UTF-8 text file", token=token) from e
    except OSError as e:
        raise ArgFileError(path=path, reason=e.strerror or str(e), token=token) from e


def _expand(
    token: Token,
    *,
    prefix: str,
    max_depth: int | None,
    chain: tuple[tuple[str, Path], ...],
) -> list[Token]:
    path = token.value[len(prefix) :]
    resolved = Path(path).absolute().resolve()
    names = tuple(name for name, _ in chain)

    if any(resolved == seen for _, seen in chain):
        raise ArgFileRecursionError(path=path, chain=names, token=token)
    if max_depth is not None and len(chain) >= max_depth:
        raise ArgFileRecursionError(path=path, chain=names, max_depth=max_depth, token=token)

    text = _read_text(path, token)
    logger.debug("Expanding @-file %r (depth %d) referenced from %s.", path, len(chain), token.location)

    chain = (*chain, (path, resolved))
    expanded = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        try:
            values = split_line(line)
        except UnclosedQuoteError as e:
            e.path, e.line, e.token = path, lineno, token
            raise

        for value in values:
            child = Token(value=value, source=path, line=lineno)
            if is_argfile_reference(value, prefix):
                expanded.extend(_expand(child, prefix=prefix, max_depth=max_depth, chain=chain))
            else:
                expanded.append(child)

    return expanded


def expand_argfiles(
    tokens: Iterable[Token],
    *,
    prefix: str | None = "@",
    max_depth: int | None = DEFAULT_MAX_DEPTH,
    end_of_options_delimiter: str = "--",
) -> list[Token]:
    """Replace every ``@path`` token with the tokens lexed from ``path``.

    Each referenced file is read completely and split line-by-line with
    :func:`~argot._lexer.split_line`. The resulting tokens are spliced into the
    stream where the reference was; references produced by a file are expanded
    recursively before anything that follows them.

    Parameters
    ----------
    tokens: Iterable[Token]
        Command-line tokens.
    prefix: str | None
        Marker that introduces a file reference. :obj:`None` or ``""`` disables expansion.
    max_depth: int | None
        Maximum nesting of @-files. :obj:`None` for no limit; self-references are
        always rejected.
    end_of_options_delimiter: str
        Tokens following this delimiter on the command line are never expanded.

    Raises
    ------
    ArgFileError
        A referenced file could not be read.
    ArgFileRecursionError
        A file references itself, or nesting exceeds ``max_depth``.
    UnclosedQuoteError
        A line of a referenced file has an unterminated quote.

    Returns
    -------
    list[Token]
        The expanded token stream.
    """
    tokens = list(tokens)
    if not prefix:
        return tokens

    out = []
    for i, token in enumerate(tokens):
        if end_of_options_delimiter and token.value == end_of_options_delimiter:
            out.extend(tokens[i:])
            break
        if is_argfile_reference(token.value, prefix):
            out.extend(_expand(token, prefix=prefix, max_depth=max_depth, chain=()))
        else:
            out.append(token)
    return out
