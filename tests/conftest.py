"""
Shared pytest fixtures.
"""
from io import StringIO

import pytest
from rich.console import Console

from compfix.ui.theme import COMPFIX_THEME


@pytest.fixture
def captured_console():
    """A themed Console writing plain text into a StringIO; returns (console, buffer)."""
    buf = StringIO()
    con = Console(file=buf, theme=COMPFIX_THEME, highlight=False, no_color=True, width=200)
    return con, buf
