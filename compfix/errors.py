"""
Error taxonomy for compfix.

Every failure is terminal for the current run. The CLI catches
CompfixError, prints the message and exits with ``exit_code``.

    CompfixError        (exit 1)
    ├── ListingFailure    — the problem set could not be determined
    ├── IdentityFailure   — the remediation target user could not be determined
    ├── ExecutionFailure  — an external step failed to launch or exited abnormally
    └── ConfigError       — an invalid configuration value was used
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

EXIT_FAILURE = 1


class CompfixError(Exception):
    """Base class for all compfix errors."""

    exit_code: int = EXIT_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ListingFailure(CompfixError):
    """Raised when the audit facility cannot be queried or its output parsed."""


class IdentityFailure(CompfixError):
    """Raised when the current user cannot be resolved to a printable name."""


class ConfigError(CompfixError):
    """Raised when a configuration value is unusable."""


class ExecutionFailure(CompfixError):
    """
    Raised when a remediation command cannot start or does not exit cleanly.

    Attributes:
        argv:       The full command that was run.
        returncode: Exit code, negative for signal termination,
                    None if the process never started.
        path:       The problem path being remediated, if any.
    """

    def __init__(
        self,
        message: str,
        argv: Sequence[str],
        returncode: int | None = None,
        path: Path | None = None,
    ):
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode
        self.path = path
