"""Machine-readable dump of the dashboard data."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from file_utils import write_json

from .base import BaseRenderer


def _overview_text(overview: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not overview:
        return None
    return {
        "key_findings": [block["text"] for block in overview["key_findings"]],
        "trends": [block["text"] for block in overview["trends"]],
        "strategic_implications": overview["strategic_implications"]["text"],
    }


class DashboardJSONRenderer(BaseRenderer):
    name = "dashboard_json"
    filename = "dashboard.json"

    def render(self, context: Dict[str, Any], output_dir: str) -> List[str]:
        payload = {
            "query": context.get("query"),
            "generated_at": context.get("generated_at"),
            "active_filter": context.get("active_filter"),
            "used_fallback": context.get("used_fallback"),
            "summaries": [block["text"] for block in context.get("summaries", [])],
            "insights": context.get("insights", []),
            "overview": _overview_text(context.get("overview")),
            "cards": [dict(card, abstract=card["abstract"]["text"]) for card in context.get("cards", [])],
            "sidebar": context.get("sidebar", []),
            "charts": context.get("charts", {}),
        }
        output_path = self.output_path(output_dir)
        write_json(output_path, payload)
        return [str(output_path)]
