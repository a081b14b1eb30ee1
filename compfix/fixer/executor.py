"""
Command execution seam for compfix.

Everything that spawns a process goes through a CommandRunner, so the
remediation loop and the compaudit lister can be exercised without
touching the real filesystem or prompting for a password.

Runners:
  SubprocessRunner — real subprocess.run, blocking, no timeout
  DryRunRunner     — records argv, reports success, runs nothing

Privilege escalation (wraps the chown step only):
  SudoEscalation      — terminal sudo prompt / cached credentials
  OsascriptEscalation — native macOS administrator password dialog
  NoEscalation        — run as-is (already root, or tests)
"""

from __future__ import annotations

import os
import shlex
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from compfix.errors import ConfigError, ExecutionFailure


# ── Result ────────────────────────────────────────────────────────────────────

@dataclass
class CommandResult:
    argv: list[str]
    returncode: int             # negative → terminated by signal -N
    stdout: bytes = b""         # only populated when captured
    stderr: bytes = b""

    @property
    def signalled(self) -> bool:
        return self.returncode < 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# ── Runners ───────────────────────────────────────────────────────────────────

class CommandRunner(ABC):
    """Run a program with arguments and report how it exited."""

    @abstractmethod
    def run(self, argv: Sequence[str], capture: bool = False) -> CommandResult:
        """
        Run argv to completion.

        Args:
            argv:    Program followed by its arguments. Never passed to a shell.
            capture: If True, collect stdout/stderr into the result.
                     If False, the child inherits this process's streams
                     (needed so sudo can prompt on the terminal).

        Raises:
            ExecutionFailure: the program could not be started.
        """


class SubprocessRunner(CommandRunner):
    """Blocking subprocess.run with no timeout."""

    def run(self, argv: Sequence[str], capture: bool = False) -> CommandResult:
        cmd = [str(a) for a in argv]
        try:
            proc = subprocess.run(cmd, capture_output=capture, check=False)
        except OSError as e:
            raise ExecutionFailure(
                f"Could not run {shlex.join(cmd)}: {e.strerror or e}",
                argv=cmd,
            ) from e
        return CommandResult(
            argv=cmd,
            returncode=proc.returncode,
            stdout=proc.stdout or b"",
            stderr=proc.stderr or b"",
        )


@dataclass
class DryRunRunner(CommandRunner):
    """Record every command instead of running it."""

    calls: list[list[str]] = field(default_factory=list)

    def run(self, argv: Sequence[str], capture: bool = False) -> CommandResult:
        cmd = [str(a) for a in argv]
        self.calls.append(cmd)
        return CommandResult(argv=cmd, returncode=0)


# ── Privilege escalation ──────────────────────────────────────────────────────

class PrivilegeEscalation(ABC):
    name: str = "base"

    @abstractmethod
    def wrap(self, argv: Sequence[str]) -> list[str]:
        """Return the argv that runs ``argv`` with elevated privileges."""


class NoEscalation(PrivilegeEscalation):
    name = "none"

    def wrap(self, argv: Sequence[str]) -> list[str]:
        return [str(a) for a in argv]


class SudoEscalation(PrivilegeEscalation):
    name = "sudo"

    def __init__(self, program: str = "sudo"):
        self.program = program

    def wrap(self, argv: Sequence[str]) -> list[str]:
        return [self.program, *(str(a) for a in argv)]


class OsascriptEscalation(PrivilegeEscalation):
    """
    Run through ``do shell script … with administrator privileges``.

    macOS shows its own authentication dialog instead of a terminal prompt.
    """

    name = "osascript"

    def wrap(self, argv: Sequence[str]) -> list[str]:
        command = shlex.join(str(a) for a in argv)
        # Escape for embedding in an AppleScript string literal
        escaped = command.replace("\\", "\\\\").replace('"', '\\"')
        return [
            "osascript",
            "-e",
            f'do shell script "{escaped}" with administrator privileges',
        ]


ESCALATION_NAMES = ("auto", "sudo", "osascript", "none")


def escalation_for(name: str) -> PrivilegeEscalation:
    """
    Map a config / CLI escalation name to an adapter.

    ``auto`` skips escalation when already running as root.
    """
    key = name.strip().lower()
    if key == "auto":
        return NoEscalation() if os.geteuid() == 0 else SudoEscalation()
    if key == "sudo":
        return SudoEscalation()
    if key == "osascript":
        return OsascriptEscalation()
    if key == "none":
        return NoEscalation()
    raise ConfigError(
        f"Unknown escalation {name!r} (expected one of: {', '.join(ESCALATION_NAMES)})"
    )
