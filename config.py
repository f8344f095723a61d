"""
Dashboard Configuration

Single configuration surface for the defense intelligence dashboard.
Values come from the environment (optionally a .env file) so the CLI,
the engine and the renderers share one set of knobs.
"""

import os
from typing import Dict, List, Tuple

from dotenv import load_dotenv

load_dotenv()


class IntelConfig:
    """Runtime configuration shared across the dashboard."""

    DASHBOARD_TITLE = "Defense Intelligence Dashboard"
    DASHBOARD_TAGLINE = "Emerging defense technology at a glance"

    # Generative text API
    GEMINI_API_URL = os.getenv(
        "INTEL_GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    GEMINI_MODEL = os.getenv("INTEL_GEMINI_MODEL", "gemini-2.0-flash")
    GEMINI_TEST_MODEL = os.getenv("INTEL_GEMINI_TEST_MODEL", "gemini-2.0-flash-exp")
    GEMINI_API_KEY_ENV = "GEMINI_API_KEY"
    HTTP_TIMEOUT_SECONDS = int(os.getenv("INTEL_HTTP_TIMEOUT", "30"))
    CREDENTIAL_STORE_PATH = os.getenv(
        "INTEL_CREDENTIAL_STORE",
        os.path.join(os.path.expanduser("~"), ".config", "defense-intel", "credentials.json"),
    )

    # Prompt sizing
    RESULT_COUNT = int(os.getenv("INTEL_RESULT_COUNT", "12"))
    SUMMARY_COUNT = 3
    SUGGESTION_COUNT = 6
    MIN_SUMMARY_LINE_LENGTH = 20
    MIN_SUGGESTION_LENGTH = 10
    MIN_SUGGESTION_QUERY = 2
    DEFAULT_RELEVANCE = 85

    # Chart inputs
    HYPE_PHASES: List[str] = [
        "Innovation Trigger",
        "Peak of Inflated Expectations",
        "Trough of Disillusionment",
        "Slope of Enlightenment",
        "Plateau of Productivity",
    ]
    DEFAULT_HYPE_VALUES: List[float] = [20, 85, 25, 60, 80]
    TRL_LEVELS = 9
    TRL_RANGE: Tuple[int, int] = (3, 9)
    RELEVANCE_RANGE: Tuple[int, int] = (60, 98)
    INSIGHT_CATEGORIES: List[str] = ["Emerging", "Maturing", "Established"]
    CHART_COLOR = "hsl(214, 100%, 27%)"
    TRL_BAR_COLORS: List[str] = [f"hsl(214, 100%, {75 - 5 * i}%)" for i in range(9)]

    # Sidebar filters
    SOURCE_FILTERS: Dict[str, str] = {
        "all": "All Sources",
        "patents": "Patents",
        "papers": "Research Papers",
        "startups": "Defense Startups",
    }

    # Output
    OUTPUT_DIR = os.getenv("INTEL_OUTPUT_DIR", "dashboards")
    DASHBOARD_RENDERERS = [
        renderer.strip()
        for renderer in os.getenv(
            "INTEL_DASHBOARD_RENDERERS", "dashboard_markdown,dashboard_html,dashboard_json"
        ).split(",")
        if renderer.strip()
    ]

    @classmethod
    def filter_keys(cls) -> List[str]:
        return list(cls.SOURCE_FILTERS.keys())

