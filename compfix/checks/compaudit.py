"""
compaudit problem source.

Runs zsh's completion audit and turns its output into problem paths:

    zsh -c 'autoload -U compaudit && compaudit'

compaudit prints one insecure directory or file per line on stdout and its
own explanation on stderr. It exits 1 when it finds anything, so a non-zero
exit code is expected and is not a failure. Only a missing shell, a
signal-terminated audit, or undecodable output stop the run.
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Iterable

from rich.console import Console

from compfix.checks.base import ProblemPath, ProblemSource
from compfix.errors import ExecutionFailure, ListingFailure
from compfix.fixer.executor import CommandRunner, SubprocessRunner
from compfix.ui.theme import make_console


COMPAUDIT_SCRIPT = "autoload -U compaudit && compaudit"


class CompauditSource(ProblemSource):
    """
    List insecure completion paths reported by compaudit.

    Args:
        shell:       Shell binary providing compaudit (default "zsh").
        runner:      Command runner; SubprocessRunner by default.
        err_console: Where compaudit's stderr is relayed; stderr by default.
        ignore:      Paths never to report, even if compaudit flags them.
    """

    def __init__(
        self,
        shell: str = "zsh",
        runner: CommandRunner | None = None,
        err_console: Console | None = None,
        ignore: Iterable[str | Path] = (),
    ):
        self.shell = shell
        self.runner = runner or SubprocessRunner()
        self.err_console = err_console or make_console(stderr=True)
        self.ignore = {_normalise(p) for p in ignore}

    @property
    def argv(self) -> list[str]:
        return [self.shell, "-c", COMPAUDIT_SCRIPT]

    def list_problems(self) -> list[ProblemPath]:
        command = shlex.join(self.argv)
        try:
            result = self.runner.run(self.argv, capture=True)
        except ExecutionFailure as e:
            raise ListingFailure(f"Couldn't run compaudit: {e}") from e

        try:
            diagnostics = result.stderr.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ListingFailure(f"compaudit error output is not valid UTF-8: {e}") from e

        if diagnostics:
            self.err_console.print(
                diagnostics,
                end="",
                markup=False,
                highlight=False,
                emoji=False,
                soft_wrap=True,
            )

        if result.signalled:
            raise ListingFailure(
                "Command failed, terminated without exit code "
                f"(probably via signal {-result.returncode}): {command}"
            )

        try:
            output = result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ListingFailure(f"compaudit output is not valid UTF-8: {e}") from e

        return [p for p in parse_compaudit_output(output) if _normalise(p) not in self.ignore]


def parse_compaudit_output(output: str) -> list[ProblemPath]:
    """One path per line, trimmed; blank lines are skipped."""
    paths = []
    for line in output.splitlines():
        stripped = line.strip()
        if stripped:
            paths.append(Path(stripped))
    return paths


def _normalise(path: str | Path) -> str:
    return os.path.normpath(os.path.expanduser(str(path)))
