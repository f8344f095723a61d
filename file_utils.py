"""
File utilities for the dashboard workflow.

Handles run directory creation, atomic text/JSON writes and dispatch to the
configured renderers.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Dict, List, Optional

from config import IntelConfig
from models import IntelligenceState
from renderers import get_renderer
from renderers.context import build_dashboard_context

logger = logging.getLogger(__name__)


def _atomic_write_text(path: Path, data: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with NamedTemporaryFile("w", delete=False, encoding="utf-8", dir=str(path.parent)) as tmp:
        tmp.write(data)
        tmp_name = tmp.name
    os.replace(tmp_name, path)


def write_text(path: Path, content: str) -> None:
    _atomic_write_text(Path(path), content)


def write_json(path: Path, payload: Any) -> None:
    serialized = json.dumps(payload, indent=2, ensure_ascii=False)
    _atomic_write_text(Path(path), serialized + "\n")


def query_slug(query: str, limit: int = 24) -> str:
    return "".join(c.lower() if c.isalnum() else "_" for c in query)[:limit]


class DashboardFileManager:
    def __init__(self, base_output_dir: Optional[str] = None):
        self.base_output_dir = base_output_dir or IntelConfig.OUTPUT_DIR
        Path(self.base_output_dir).mkdir(parents=True, exist_ok=True)

    def create_dashboard_directory(self, query: str) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = Path(self.base_output_dir) / f"dashboard_{timestamp}_{query_slug(query)}"
        path.mkdir(parents=True, exist_ok=True)
        return str(path)

    def save_dashboard(
        self,
        state: IntelligenceState,
        active_filter: str = "all",
        output_dir: Optional[str] = None,
        renderers: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """Render ``state`` with every configured renderer and write run metadata."""
        output_dir = output_dir or self.create_dashboard_directory(state.query)
        context = build_dashboard_context(state, active_filter=active_filter)

        written: List[str] = []
        failures: Dict[str, str] = {}
        for renderer_name in renderers or IntelConfig.DASHBOARD_RENDERERS:
            try:
                renderer = get_renderer(renderer_name)
                written.extend(renderer.render(context, output_dir))
            except Exception as exc:
                logger.error("Renderer %s failed: %s", renderer_name, exc, exc_info=True)
                failures[renderer_name] = str(exc)

        metadata = {
            "generated_at": datetime.now().isoformat(),
            "query": state.query,
            "active_filter": active_filter,
            "used_fallback": state.used_fallback,
            "files": [Path(path).name for path in written],
            "statistics": {
                "result_count": len(state.results),
                "summary_count": len(state.summaries),
                "insight_count": len(state.insights),
            },
        }
        if failures:
            metadata["renderer_failures"] = failures
        write_json(Path(output_dir) / "metadata.json", metadata)
        logger.info("Dashboard saved to %s (%d files)", output_dir, len(written))
        return {"output_dir": output_dir, "files": written, "failures": failures}
