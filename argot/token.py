from typing import Any

from attrs import evolve, field

from argot.utils import UNSET, frozen


@frozen(kw_only=True)
class Token:
    """Tracks how a user supplied a value to the application."""

    value: str = ""
    """The raw, unconverted text."""

    source: str = "cli"
    """Where the token came from: ``"cli"``, ``"env"``, or the path of an @-file."""

    line: int = field(default=0)
    """1-based line number inside the @-file ``source``; ``0`` for other sources."""

    keyword: str | None = field(default=None)
    """Option name (or environment variable) the value was bound through, if any."""

    implicit_value: Any = field(default=UNSET)
    """Value of a bare flag (e.g. ``--verbose``); bypasses conversion."""

    @property
    def location(self) -> str:
        """Human-readable origin of the token, for error messages."""
        if self.line:
            return f"{self.source}:{self.line}"
        return self.source

    @property
    def from_cli(self) -> bool:
        return self.source == "cli"

    def evolve(self, **kwargs) -> "Token":
        return evolve(self, **kwargs)
