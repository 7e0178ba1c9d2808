from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, TypeAlias

from argot.exceptions import BadParameterValueError, ConversionError
from argot.token import Token
from argot.utils import UNSET, callable_name, frozen

if TYPE_CHECKING:
    from argot.parameter import Argument, Option


@frozen
class ConversionFailure:
    """A raw token that a converter rejected."""

    raw: str
    reason: str


ConversionOutcome: TypeAlias = "Any | ConversionFailure"


def convert_token(converter: Callable[[str], Any], raw: str) -> ConversionOutcome:
    """Apply ``converter`` to a single raw string.

    Returns the converted value, or a :class:`ConversionFailure` if the converter
    raised :exc:`ValueError`/:exc:`TypeError`. A :exc:`~argot.ConversionError`
    keeps its own reason; anything else gets the generic
    ``"<raw> is not a valid <converter name>"``.
    """
    try:
        return converter(raw)
    except ConversionError as e:
        return ConversionFailure(raw, e.reason)
    except (ValueError, TypeError):
        return ConversionFailure(raw, f"{raw} is not a valid {callable_name(converter)}")


def convert(parameter: "Option | Argument", tokens: Sequence[Token]) -> list[Any]:
    """Convert every token bound to ``parameter``, in order.

    Raises
    ------
    BadParameterValueError
        On the first token that fails conversion. No partial list is returned.
    """
    values = []
    for token in tokens:
        if token.implicit_value is not UNSET:
            values.append(token.implicit_value)
            continue

        outcome = convert_token(parameter.converter, token.value)
        if isinstance(outcome, ConversionFailure):
            raise BadParameterValueError(
                name=token.keyword or parameter.display_name,
                message=outcome.reason,
                token=token,
                parameter=parameter,
            )
        values.append(outcome)
    return values
