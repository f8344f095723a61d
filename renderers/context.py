"""Build the template context shared by every dashboard renderer."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from charts import chart_titles, dashboard_charts
from config import IntelConfig
from intelligence_engine import filter_results
from markdown_utils import (
    format_markdown,
    fragments_to_html,
    fragments_to_markdown,
    fragments_to_text,
)
from mock_series import source_counts
from models import IntelligenceState, SourceKind

logger = logging.getLogger(__name__)

CONTROL_CHAR_RE = re.compile(r"[\x00-\x09\x0B-\x1F\x7F]")

SOURCE_LABELS = {
    SourceKind.PATENT: "Patent",
    SourceKind.PAPER: "Research Paper",
    SourceKind.STARTUP: "Defense Startup",
}


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    text = CONTROL_CHAR_RE.sub(" ", str(value))
    return re.sub(r"[ \t]+", " ", text).strip()


def format_block(text: str) -> Dict[str, Any]:
    """Format one block of generated text for every output flavor."""

    lines = format_markdown(_clean_text(text))
    return {
        "lines": [
            {
                "blank": line.is_blank,
                "html": fragments_to_html(line),
                "text": fragments_to_text(line),
                "markdown": fragments_to_markdown(line),
            }
            for line in lines
        ],
        "markdown": "\n".join(fragments_to_markdown(line) for line in lines),
        "text": "\n".join(fragments_to_text(line) for line in lines),
    }


def _overview_context(state: IntelligenceState) -> Optional[Dict[str, Any]]:
    if state.overview is None:
        return None
    return {
        "key_findings": [format_block(item) for item in state.overview.key_findings],
        "trends": [format_block(item) for item in state.overview.trends],
        "strategic_implications": format_block(state.overview.strategic_implications),
    }


def _sidebar(state: IntelligenceState, active_filter: str) -> List[Dict[str, Any]]:
    counts = source_counts(state.results)
    values = {
        "all": counts.total,
        "patents": counts.patents,
        "papers": counts.papers,
        "startups": counts.startups,
    }
    return [
        {"id": key, "label": label, "count": values[key], "active": key == active_filter}
        for key, label in IntelConfig.SOURCE_FILTERS.items()
    ]


def build_dashboard_context(
    state: IntelligenceState,
    active_filter: str = "all",
    generated_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    generated = generated_at or datetime.now()
    visible = filter_results(state.results, active_filter)
    charts = dashboard_charts(state.insights)

    cards = [
        {
            "title": _clean_text(result.title),
            "abstract": format_block(result.abstract),
            "source": result.source.value,
            "source_label": SOURCE_LABELS.get(result.source, result.source.value.title()),
            "relevance": round(result.relevance),
            "date": result.date,
            "url": result.url or "#",
        }
        for result in visible
    ]
    logger.debug("Dashboard context: %d cards, filter=%s", len(cards), active_filter)

    return {
        "title": IntelConfig.DASHBOARD_TITLE,
        "tagline": IntelConfig.DASHBOARD_TAGLINE,
        "query": state.query,
        "generated_at": generated.strftime("%Y-%m-%d %H:%M"),
        "active_filter": active_filter,
        "used_fallback": state.used_fallback,
        "summaries": [format_block(summary) for summary in state.summaries],
        "overview": _overview_context(state),
        "insights": [insight.model_dump() for insight in state.insights],
        "cards": cards,
        "sidebar": _sidebar(state, active_filter),
        "charts": charts,
        "chart_titles": chart_titles(),
        "charts_json": json.dumps(charts, ensure_ascii=False).replace("</", "<\\/"),
        "chart_color": IntelConfig.CHART_COLOR,
    }
