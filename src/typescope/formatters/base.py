"""Base formatter interface for typescope output rendering."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..analysis.models import ProjectOverview


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format(self, overview: ProjectOverview, root: Optional[Path] = None) -> str:
        """Return formatted string representation of the overview."""

    def render(
        self,
        overview: ProjectOverview,
        root: Optional[Path] = None,
        console: Optional[Console] = None,
    ) -> None:
        """Write the formatted overview to stdout (or ``console``)."""
        text = self.format(overview, root)
        if console is None:
            print(text)
        else:
            console.print(text, markup=False, highlight=False, soft_wrap=True)
