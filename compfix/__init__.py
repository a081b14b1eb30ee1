"""compfix — fix insecure directories reported by zsh compaudit"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("compfix")
except PackageNotFoundError:
    __version__ = "dev"

__author__ = "compfix"
