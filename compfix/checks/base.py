"""
Problem source contract.

A ProblemSource produces the ordered list of paths to remediate, or raises
ListingFailure. An empty list means there is nothing to fix.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

ProblemPath = Path


class ProblemSource(ABC):
    """Single-method strategy: list the paths that need fixing."""

    # True when an empty list means the operator declined, not that
    # nothing was found
    cancelled: bool = False

    @abstractmethod
    def list_problems(self) -> list[ProblemPath]:
        """
        Return problem paths in the order they should be processed.

        Raises:
            ListingFailure: the problem set could not be determined.
        """


class StaticSource(ProblemSource):
    """A fixed list of paths, e.g. from --path on the command line."""

    def __init__(self, paths: Iterable[str | Path]):
        self.paths = [Path(p) for p in paths]

    def list_problems(self) -> list[ProblemPath]:
        return list(self.paths)
