"""Renderer registry."""

from __future__ import annotations

from typing import List

from .base import BaseRenderer


def _normalized(name: str) -> str:
    return (name or "").strip().lower()


def get_renderer(name: str) -> BaseRenderer:
    normalized = _normalized(name)
    if normalized in {"dashboard_markdown", "markdown", "md"}:
        from .dashboard_markdown import DashboardMarkdownRenderer

        return DashboardMarkdownRenderer()
    if normalized in {"dashboard_html", "html"}:
        from .dashboard_html import DashboardHTMLRenderer

        return DashboardHTMLRenderer()
    if normalized in {"dashboard_json", "json"}:
        from .dashboard_json import DashboardJSONRenderer

        return DashboardJSONRenderer()
    raise ValueError(f"Unknown renderer '{name}'")


def available_renderers() -> List[str]:
    return ["dashboard_markdown", "dashboard_html", "dashboard_json"]
