"""
Interactive confirmation before anything is changed.

Wraps another ProblemSource: shows what compaudit reported and asks once,
with an arrow-key menu, whether to fix all of it. Declining returns an
empty list and marks the source cancelled, so nothing is changed.
"""

from __future__ import annotations

from typing import Callable

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from simple_term_menu import TerminalMenu

from compfix.checks.base import ProblemPath, ProblemSource
from compfix.ui.theme import COLOR_BRAND, ICON_LOCK


_CHOICES = ["No, quit", "Yes, fix them"]
_YES = 1


def _default_menu(choices: list[str]) -> TerminalMenu:
    return TerminalMenu(
        choices,
        menu_cursor="› ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan", "bold"),
        cursor_index=0,
    )


class ConfirmingSource(ProblemSource):
    """
    Ask before handing problems on.

    Args:
        inner:        The real problem source.
        console:      Where the list and prompt are shown.
        menu_factory: Builds an object with .show() -> int | None from the
                      choice labels. TerminalMenu by default.
    """

    def __init__(
        self,
        inner: ProblemSource,
        console: Console,
        menu_factory: Callable[[list[str]], object] = _default_menu,
    ):
        self.inner = inner
        self.console = console
        self.menu_factory = menu_factory

    def list_problems(self) -> list[ProblemPath]:
        self.cancelled = False
        problems = self.inner.list_problems()
        if not problems:
            return []

        _print_problem_panel(problems, self.console)

        self.console.print("  [bold]Fix these paths?[/bold]")
        choice = self.menu_factory(list(_CHOICES)).show()
        if choice != _YES:
            self.console.print("  [dim]Cancelled — nothing was changed.[/dim]\n")
            self.cancelled = True
            return []
        return problems


def _print_problem_panel(problems: list[ProblemPath], console: Console) -> None:
    n = len(problems)
    body = Text()
    body.append(f"\n  {n} path{'s' if n != 1 else ''} to fix:\n\n")
    for path in problems:
        body.append(f"    {path}\n")
    body.append(
        f"\n  Each will be reowned to you ({ICON_LOCK} may ask for your password) "
        "and have group/other write removed.\n",
        style="dim",
    )

    console.print()
    console.print(
        Panel(body, title="[brand]Paths to fix[/brand]",
              title_align="left", border_style=COLOR_BRAND)
    )
    console.print()
