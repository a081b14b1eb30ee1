"""
compfix visual design system.

All colors, styles, and icons as named constants.
Import from here — never hardcode markup strings in other modules.

Named ANSI colors rather than hex so the terminal's own palette decides
contrast on both light and dark backgrounds.
"""

from rich.console import Console
from rich.theme import Theme


# ── Color palette ─────────────────────────────────────────────────────────────

COLOR_CRITICAL = "bright_red"
COLOR_WARNING  = "yellow"
COLOR_PASS     = "bright_green"
COLOR_BRAND    = "magenta"
COLOR_DIM      = "bright_black"
COLOR_COMMAND  = "cyan"
COLOR_PATH     = "bold"


# ── Icons ─────────────────────────────────────────────────────────────────────

ICON_PASS = "✅"
ICON_LOCK = "🔐"


# ── Rich Theme ────────────────────────────────────────────────────────────────

COMPFIX_THEME = Theme(
    {
        "critical": f"{COLOR_CRITICAL} bold",
        "warning":  f"{COLOR_WARNING} bold",
        "pass":     f"{COLOR_PASS} bold",
        "brand":    f"{COLOR_BRAND} bold",
        "dim":      COLOR_DIM,
        "command":  COLOR_COMMAND,
        "path":     COLOR_PATH,
    }
)


def make_console(stderr: bool = False) -> Console:
    """Console with the compfix theme; stderr=True for diagnostics."""
    return Console(theme=COMPFIX_THEME, stderr=stderr)
