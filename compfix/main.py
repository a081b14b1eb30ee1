"""
compfix — entry point.

CLI flags, source selection, one remediation pass, exit code.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape

from compfix import __version__
from compfix.checks.base import ProblemSource, StaticSource
from compfix.checks.compaudit import CompauditSource
from compfix.config import load_config
from compfix.errors import CompfixError
from compfix.fixer.executor import ESCALATION_NAMES, escalation_for
from compfix.fixer.runner import remediate
from compfix.ui.confirm import ConfirmingSource
from compfix.ui.theme import make_console


# ── Consoles (shared across the tool) ────────────────────────────────────────

console = make_console()
err_console = make_console(stderr=True)


def _reject_empty_paths(ctx, param, value):
    """An empty --path would become "." and reown the working directory."""
    if any(not p.strip() for p in value):
        raise click.BadParameter("path must not be empty")
    return value


# ── CLI ───────────────────────────────────────────────────────────────────────

@click.command(name="compfix", context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", prog_name="compfix")
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show the commands that would run without changing anything.",
)
@click.option("--yes", "-y", is_flag=True, default=False,
              help="Skip the confirmation prompt.")
@click.option(
    "--path",
    "paths",
    multiple=True,
    type=click.Path(),
    callback=_reject_empty_paths,
    help="Fix this path instead of asking compaudit (repeatable).",
)
@click.option(
    "--escalation",
    type=click.Choice(ESCALATION_NAMES, case_sensitive=False),
    default=None,
    help="How to gain the privileges chown needs (default: from config, else auto).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read settings from this TOML file instead of ~/.config/compfix/config.toml.",
)
def cli(
    dry_run: bool,
    yes: bool,
    paths: tuple,
    escalation: Optional[str],
    config_path: Optional[Path],
) -> None:
    """Fix insecure directories reported by zsh compaudit.

    Every path compaudit flags is reowned to you (via sudo) and has
    group and other write permission removed, recursively.
    """
    config = load_config(config_path)

    try:
        escalator = escalation_for(escalation or config["escalation"])

        source: ProblemSource
        if paths:
            source = StaticSource(paths)
        else:
            source = CompauditSource(
                shell=config["shell"],
                err_console=err_console,
                ignore=config["ignore"],
            )

        if dry_run:
            console.print("[warning]\\[DRY RUN] No changes will be made.[/warning]")
        elif not yes and sys.stdin.isatty():
            source = ConfirmingSource(source, console)

        remediate(
            source,
            dry_run=dry_run,
            escalation=escalator,
            console=console,
        )
    except CompfixError as e:
        err_console.print(f"[critical]Error:[/critical] {escape(str(e))}")
        raise SystemExit(e.exit_code)


# ── Entry ─────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    cli()
