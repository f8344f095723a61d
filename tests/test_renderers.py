import json
from datetime import datetime

import pytest

from fallbacks import default_overview, fallback_summaries, mock_results
from mock_series import generate_series
from models import IntelligenceState, SearchResult
from renderers import available_renderers, get_renderer
from renderers.context import build_dashboard_context, format_block


def _state(extra_results=()):
    results = mock_results("Radar") + list(extra_results)
    return IntelligenceState(
        query="Radar",
        results=results,
        summaries=fallback_summaries(results),
        overview=default_overview(),
        insights=generate_series(results),
        used_fallback=True,
    )


def _context(state=None, active_filter="all"):
    return build_dashboard_context(
        state or _state(), active_filter=active_filter, generated_at=datetime(2024, 5, 1, 9, 30)
    )


def test_format_block_renders_every_flavor():
    block = format_block("- Radar mesh\n\n2. **second**")
    assert [line["blank"] for line in block["lines"]] == [False, True, False]
    assert block["lines"][0]["html"].startswith('<span class="list-marker">')
    assert block["markdown"] == "- Radar mesh\n\n2. **second**"
    assert block["text"] == "• Radar mesh\n\n2. second"


def test_format_block_strips_control_characters():
    assert format_block("Radar\x00 mesh\tnet")["text"] == "Radar mesh net"


def test_context_sidebar_and_cards():
    context = _context(active_filter="papers")
    assert context["generated_at"] == "2024-05-01 09:30"
    assert [card["source"] for card in context["cards"]] == ["paper", "paper"]
    sidebar = {entry["id"]: entry for entry in context["sidebar"]}
    assert sidebar["papers"]["active"] is True
    assert sidebar["all"]["count"] == (
        sidebar["patents"]["count"] + sidebar["papers"]["count"] + sidebar["startups"]["count"]
    )
    assert context["cards"][0]["source_label"] == "Research Paper"


def test_context_rejects_unknown_filter():
    with pytest.raises(ValueError):
        _context(active_filter="blogs")


def test_get_renderer_aliases():
    assert get_renderer("md").filename == "dashboard.md"
    assert get_renderer(" HTML ").filename == "dashboard.html"
    assert get_renderer("dashboard_json").filename == "dashboard.json"
    assert available_renderers() == ["dashboard_markdown", "dashboard_html", "dashboard_json"]
    with pytest.raises(ValueError):
        get_renderer("pdf")


def test_markdown_renderer(tmp_path):
    paths = get_renderer("markdown").render(_context(active_filter="startups"), str(tmp_path))
    content = (tmp_path / "dashboard.md").read_text(encoding="utf-8")

    assert paths == [str(tmp_path / "dashboard.md")]
    assert content.startswith("# Defense Intelligence Dashboard")
    assert "## AI Analysis Summary" in content
    assert "**AI-Powered technology**" in content
    assert "### Radar Defense Solutions" in content
    assert "### AI-Powered Radar Defense System" not in content
    assert "- Defense Startups: " in content
    assert "Template data" in content


def test_html_renderer_escapes_generated_text(tmp_path):
    hostile = SearchResult(
        id="6", title="<script>alert(1)</script> Radar", abstract="**x** & y", source="paper"
    )
    get_renderer("html").render(_context(_state([hostile])), str(tmp_path))
    content = (tmp_path / "dashboard.html").read_text(encoding="utf-8")

    assert "<script>alert(1)</script>" not in content
    assert "&lt;script&gt;alert(1)&lt;/script&gt; Radar" in content
    assert '<strong class="font-semibold">x</strong> &amp; y' in content
    assert '<strong class="font-semibold">AI-Powered technology</strong>' in content
    assert "new Chart(canvas, config)" in content
    assert 'id="chart-radar"' in content


def test_json_renderer_uses_plain_text(tmp_path):
    get_renderer("json").render(_context(), str(tmp_path))
    payload = json.loads((tmp_path / "dashboard.json").read_text(encoding="utf-8"))

    assert payload["query"] == "Radar"
    assert payload["summaries"][0].startswith("AI-Powered technology is rapidly advancing")
    assert len(payload["cards"]) == 5
    assert isinstance(payload["cards"][0]["abstract"], str)
    assert payload["overview"]["key_findings"][0].startswith("AI-driven threat detection")
    assert set(payload["charts"]) == {"trl", "hype", "radar"}
