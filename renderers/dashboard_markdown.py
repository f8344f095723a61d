"""Dashboard Markdown renderer."""

from __future__ import annotations

from typing import Any, Dict, List

from file_utils import write_text

from .base import BaseRenderer
from .templates import render_markdown


class DashboardMarkdownRenderer(BaseRenderer):
    """Render the dashboard as a Markdown brief."""

    name = "dashboard_markdown"
    filename = "dashboard.md"

    def render(self, context: Dict[str, Any], output_dir: str) -> List[str]:
        markdown = render_markdown(context)
        output_path = self.output_path(output_dir)
        write_text(output_path, markdown.strip() + "\n")
        return [str(output_path)]
