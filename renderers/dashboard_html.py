"""Standalone HTML dashboard with Chart.js charts."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from file_utils import write_text

from .base import BaseRenderer
from .templates import render_html

logger = logging.getLogger(__name__)


class DashboardHTMLRenderer(BaseRenderer):
    name = "dashboard_html"
    filename = "dashboard.html"

    def render(self, context: Dict[str, Any], output_dir: str) -> List[str]:
        html = render_html(context)
        output_path = self.output_path(output_dir)
        write_text(output_path, html)
        logger.info("HTML dashboard written to %s", output_path)
        return [str(output_path)]
