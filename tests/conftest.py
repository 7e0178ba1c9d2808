import pytest
from rich.console import Console

import argot


@pytest.fixture
def parser():
    return argot.Parser()


@pytest.fixture
def console():
    return Console(width=70, force_terminal=True, highlight=False, color_system=None, legacy_windows=False)


@pytest.fixture
def argfile(tmp_path):
    """Write an @-file and return its path.

    Each call creates a new file in ``tmp_path``.
    """
    n_files = 0

    def inner(text: str, name: str | None = None):
        nonlocal n_files
        n_files += 1
        path = tmp_path / (name or f"args{n_files}.txt")
        path.write_text(text)
        return path

    return inner
