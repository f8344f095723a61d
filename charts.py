"""Chart.js payloads for the three dashboard charts."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from config import IntelConfig
from mock_series import hype_values, trl_distribution
from models import TechInsight

GRID_COLOR = "hsl(0, 0%, 90%)"
TICK_COLOR = "hsl(0, 0%, 45.1%)"

TOOLTIP = {
    "backgroundColor": "hsl(0, 0%, 100%)",
    "titleColor": "hsl(0, 0%, 3.9%)",
    "bodyColor": "hsl(0, 0%, 3.9%)",
    "borderColor": "hsl(0, 0%, 89.8%)",
    "borderWidth": 1,
}


def _axis(font_size: int = 11, **extra: Any) -> Dict[str, Any]:
    axis = {
        "grid": {"color": GRID_COLOR},
        "ticks": {"color": TICK_COLOR, "font": {"size": font_size}},
    }
    axis.update(extra)
    return axis


def trl_chart(insights: Sequence[TechInsight]) -> Dict[str, Any]:
    """Bar chart: technology count per readiness level."""

    return {
        "type": "bar",
        "data": {
            "labels": [f"TRL {level}" for level in range(1, IntelConfig.TRL_LEVELS + 1)],
            "datasets": [
                {
                    "label": "Number of Technologies",
                    "data": trl_distribution(insights),
                    "backgroundColor": list(IntelConfig.TRL_BAR_COLORS),
                    "borderColor": IntelConfig.CHART_COLOR,
                    "borderWidth": 1,
                }
            ],
        },
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "plugins": {"legend": {"display": False}, "tooltip": TOOLTIP},
            "scales": {"x": _axis(), "y": _axis(beginAtZero=True)},
        },
    }


def radar_chart(insights: Sequence[TechInsight]) -> Dict[str, Any]:
    """Radar chart: relevance (0-100) per technology."""

    return {
        "type": "radar",
        "data": {
            "labels": [insight.title for insight in insights],
            "datasets": [
                {
                    "label": "Technology Relevance",
                    "data": [insight.relevance for insight in insights],
                    "backgroundColor": "hsl(214, 100%, 27%, 0.2)",
                    "borderColor": IntelConfig.CHART_COLOR,
                    "borderWidth": 2,
                    "pointBackgroundColor": IntelConfig.CHART_COLOR,
                    "pointBorderColor": "#fff",
                }
            ],
        },
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "plugins": {"legend": {"position": "top"}, "tooltip": TOOLTIP},
            "scales": {
                "r": {
                    "angleLines": {"color": GRID_COLOR},
                    "grid": {"color": GRID_COLOR},
                    "pointLabels": {"color": TICK_COLOR, "font": {"size": 11}},
                    "ticks": {"color": TICK_COLOR, "backdropColor": "transparent"},
                    "min": 0,
                    "max": 100,
                }
            },
        },
    }


def hype_chart(insights: Sequence[TechInsight]) -> Dict[str, Any]:
    """Line chart: expectation level across the five hype phases."""

    return {
        "type": "line",
        "data": {
            "labels": list(IntelConfig.HYPE_PHASES),
            "datasets": [
                {
                    "label": "Hype Level",
                    "data": [round(value, 2) for value in hype_values(insights)],
                    "borderColor": IntelConfig.CHART_COLOR,
                    "backgroundColor": "hsl(214, 100%, 27%, 0.1)",
                    "borderWidth": 3,
                    "fill": True,
                    "tension": 0.4,
                    "pointRadius": 6,
                }
            ],
        },
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "plugins": {"legend": {"display": False}, "tooltip": TOOLTIP},
            "scales": {
                "x": _axis(font_size=10),
                "y": _axis(
                    min=0,
                    max=100,
                    title={"display": True, "text": "Expectations", "color": TICK_COLOR},
                ),
            },
        },
    }


def dashboard_charts(insights: Sequence[TechInsight]) -> Dict[str, Dict[str, Any]]:
    return {
        "trl": trl_chart(insights),
        "hype": hype_chart(insights),
        "radar": radar_chart(insights),
    }


def chart_titles() -> List[Dict[str, str]]:
    return [
        {
            "key": "trl",
            "title": "Technology Readiness Levels",
            "description": "Distribution of defense technologies by maturity level",
        },
        {
            "key": "hype",
            "title": "Gartner Hype Curve",
            "description": "Technology adoption lifecycle analysis",
        },
        {
            "key": "radar",
            "title": "Defense Technology Radar",
            "description": "Strategic positioning of emerging defense technologies",
        },
    ]
