"""JSON formatter for typescope."""

import json
from pathlib import Path
from typing import Optional

from ..analysis.models import ProjectOverview
from .base import BaseFormatter
from .report import to_report


class JsonFormatter(BaseFormatter):
    """Render the structured report as JSON."""

    def format(self, overview: ProjectOverview, root: Optional[Path] = None) -> str:
        return json.dumps(to_report(overview, root), indent=2)
