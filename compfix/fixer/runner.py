"""
Remediation loop.

For every problem path, in the order listed, strictly one after another:

  1. chown -R -- <me> <path>   — escalated, group left unchanged
  2. chmod -R -- g-w <path>
  3. chmod -R -- o-w <path>

The chmod steps run unprivileged, so they rely on step 1 having succeeded.
The first step that fails to start or exits non-zero aborts the whole run.
Paths already fixed stay fixed; there is no rollback.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from compfix.checks.base import ProblemSource
from compfix.errors import ExecutionFailure
from compfix.fixer.executor import (
    CommandRunner,
    DryRunRunner,
    PrivilegeEscalation,
    SubprocessRunner,
    SudoEscalation,
)
from compfix.identity import current_username
from compfix.ui.theme import ICON_PASS, make_console


# ── Remediator ────────────────────────────────────────────────────────────────

class Remediator:
    """
    Reown problem paths to the current user and strip group/other write.

    Args:
        runner:     Runs each step; SubprocessRunner by default, or
                    DryRunRunner when dry_run is set.
        escalation: Wraps the chown step; SudoEscalation by default.
        console:    Progress output.
        dry_run:    Word progress and summary as "would fix".
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        escalation: PrivilegeEscalation | None = None,
        console: Console | None = None,
        dry_run: bool = False,
    ):
        self.dry_run = dry_run
        self.runner = runner or (DryRunRunner() if dry_run else SubprocessRunner())
        self.escalation = escalation or SudoEscalation()
        self.console = console or make_console()

    def remediate(self, source: ProblemSource) -> None:
        """
        List problems, resolve the current user, then fix each path.

        Identity is resolved once, after listing and before the loop, even
        when there is nothing to fix.

        Raises:
            ListingFailure:   from source, before anything is touched.
            IdentityFailure:  current user unavailable, before anything is touched.
            ExecutionFailure: a step for some path failed; later paths untouched.
        """
        problems = source.list_problems()
        user = current_username()

        if not problems:
            # A declined prompt already said so
            if not source.cancelled:
                self.console.print(
                    "[pass]✨  Nothing to fix — no insecure completion paths.[/pass]"
                )
            return

        for problem in problems:
            self.fix_path(problem, user)

        n = len(problems)
        s = "s" if n != 1 else ""
        if self.dry_run:
            self.console.print(f"[warning]Would fix {n} path{s}.[/warning]")
        else:
            self.console.print(f"[pass]{ICON_PASS}  Fixed {n} path{s}.[/pass]")

    def fix_path(self, path: Path, user: str) -> None:
        """Run the three remediation steps for one path."""
        verb = "Would fix" if self.dry_run else "Fixing"
        self.console.print(f"{verb}: [path]{escape(str(path))}[/path]")
        for argv in self.steps(path, user):
            self._run_step(argv, path)

    def steps(self, path: Path, user: str) -> list[list[str]]:
        """
        The commands fix_path runs for ``path``, in order.

        ``--`` ends option parsing so a path starting with "-" stays a path.
        It sits before the first operand (owner / mode) because BSD getopt
        stops at the first non-option.
        """
        target = str(path)
        return [
            self.escalation.wrap(["chown", "-R", "--", user, target]),
            ["chmod", "-R", "--", "g-w", target],
            ["chmod", "-R", "--", "o-w", target],
        ]

    # ── Internal ──────────────────────────────────────────────────────────────

    def _run_step(self, argv: list[str], path: Path) -> None:
        command = shlex.join(argv)
        self.console.print(f"  [dim]$[/dim]  [command]{escape(command)}[/command]")

        try:
            result = self.runner.run(argv)
        except ExecutionFailure as e:
            raise ExecutionFailure(str(e), argv=argv, path=path) from e

        if result.signalled:
            raise ExecutionFailure(
                f"Command terminated by signal {-result.returncode} "
                f"while fixing {path}: {command}",
                argv=argv,
                returncode=result.returncode,
                path=path,
            )
        if not result.ok:
            raise ExecutionFailure(
                f"Command failed with exit code {result.returncode} "
                f"while fixing {path}: {command}",
                argv=argv,
                returncode=result.returncode,
                path=path,
            )


# ── Convenience ───────────────────────────────────────────────────────────────

def remediate(
    source: ProblemSource,
    runner: CommandRunner | None = None,
    escalation: PrivilegeEscalation | None = None,
    console: Console | None = None,
    dry_run: bool = False,
) -> None:
    """Run one remediation pass with a default Remediator."""
    Remediator(
        runner=runner, escalation=escalation, console=console, dry_run=dry_run,
    ).remediate(source)
