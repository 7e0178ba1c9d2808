"""Rich rendering of parse errors."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rich.panel import Panel


def ArgotPanel(message: Any, title: str = "Error", style: str = "red") -> "Panel":  # noqa: N802
    """Create a :class:`~rich.panel.Panel` for displaying an error to the user.

    .. code-block:: text

        ╭─ Error ───────────────────────────────────────────────╮
        │ Invalid value for "--count": x is not a valid integer │
        ╰─ args.txt:2 ──────────────────────────────────────────╯

    If ``message`` is a :exc:`~argot.UsageError` whose token came from an @-file
    or an environment variable, the token's location is shown in the bottom border.

    Parameters
    ----------
    message: Any
        The body of the panel will be filled with the stringified version of the message.
    title: str
        Title of the panel that appears in the top-left corner.
    style: str
        Rich `style <https://rich.readthedocs.io/en/stable/style.html>`_ for the panel border.
    """
    from rich import box
    from rich.panel import Panel
    from rich.text import Text

    from argot.exceptions import UsageError

    subtitle = None
    if isinstance(message, UsageError) and message.token is not None and not message.token.from_cli:
        subtitle = message.token.location

    return Panel(
        Text(str(message), "default"),
        title=title,
        subtitle=subtitle,
        subtitle_align="left",
        style=style,
        box=box.ROUNDED,
        expand=True,
        title_align="left",
    )
