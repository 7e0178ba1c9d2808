"""Tokenizer for a single line of an @-file."""

from argot.exceptions import UnclosedQuoteError

QUOTES = frozenset("'\"")
COMMENT = "#"
ESCAPE = "\\"


def split_line(line: str) -> list[str]:
    """Split one line of @-file text into raw tokens.

    * Whitespace separates tokens.
    * An unquoted, unescaped ``#`` starts a comment that runs to the end of the line.
    * Outside of quotes, a backslash escapes whichever character follows it.
    * Inside ``'...'`` or ``"..."`` everything is literal, except a backslash
      followed by the enclosing quote character, which yields that quote character.
    * Fragments that are not separated by whitespace are joined into one token,
      so ``--bar='a b'`` is the single token ``--bar=a b``.

    Parameters
    ----------
    line: str
        A single line of text, without its line terminator.

    Raises
    ------
    UnclosedQuoteError
        A quoted region was still open at the end of the line.

    Returns
    -------
    list[str]
        Raw tokens, in order. An empty quoted region produces an empty-string token.
    """
    tokens: list[str] = []
    chars: list[str] = []
    # Distinguishes an empty token (``""``) from no token at all.
    in_token = False
    quote: str | None = None

    i, n = 0, len(line)
    while i < n:
        c = line[i]
        if quote is not None:
            if c == ESCAPE and i + 1 < n and line[i + 1] == quote:
                chars.append(quote)
                i += 2
                continue
            if c == quote:
                quote = None
            else:
                chars.append(c)
        elif c.isspace():
            if in_token:
                tokens.append("".join(chars))
                chars.clear()
                in_token = False
        elif c == COMMENT:
            break
        elif c == ESCAPE:
            in_token = True
            if i + 1 < n:
                chars.append(line[i + 1])
                i += 2
                continue
            # Trailing backslash; nothing left to escape.
            chars.append(c)
        elif c in QUOTES:
            in_token = True
            quote = c
        else:
            in_token = True
            chars.append(c)
        i += 1

    if quote is not None:
        raise UnclosedQuoteError()

    if in_token:
        tokens.append("".join(chars))

    return tokens
