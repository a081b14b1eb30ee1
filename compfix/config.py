"""
Config file loading for compfix.

Reads ~/.config/compfix/config.toml and returns structured config.
Never raises — always returns a valid dict with sensible defaults.

    escalation = "auto"          # auto | sudo | osascript | none
    shell      = "zsh"           # shell that provides compaudit
    ignore     = ["/usr/local/share/zsh/site-functions"]
"""

from pathlib import Path

_CONFIG_PATH = Path.home() / ".config" / "compfix" / "config.toml"


def _defaults() -> dict:
    return {"escalation": "auto", "shell": "zsh", "ignore": set()}


def load_config(path: Path | None = None) -> dict:
    """
    Load and return compfix config from TOML file.

    Returns {"escalation": str, "shell": str, "ignore": set[str]}.
    Missing file or parse errors return defaults; a key with the wrong
    shape falls back to its own default without discarding the others.
    """
    config_path = path or _CONFIG_PATH
    config = _defaults()

    if not config_path.is_file():
        return config

    try:
        raw = config_path.read_bytes()
    except OSError:
        return config

    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError):
        return config

    escalation = data.get("escalation")
    if isinstance(escalation, str) and escalation.strip():
        config["escalation"] = escalation.strip().lower()

    shell = data.get("shell")
    if isinstance(shell, str) and shell.strip():
        config["shell"] = shell.strip()

    ignore = data.get("ignore")
    if isinstance(ignore, list):
        config["ignore"] = {str(item) for item in ignore}

    return config
