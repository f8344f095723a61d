"""Template data used when the text generator is unavailable or fails."""

from __future__ import annotations

from typing import List, Sequence

from models import OverviewData, SearchResult, TechInsight

DEFENSE_SUGGESTIONS: List[str] = [
    "AI-powered missile defense systems",
    "Autonomous military drones",
    "Cybersecurity threat detection",
    "Radar signal processing",
    "Battlefield communication networks",
    "Smart ammunition systems",
    "Military satellite technology",
    "Electronic warfare countermeasures",
    "Biometric identification systems",
    "Stealth technology materials",
    "Naval combat systems",
    "Armored vehicle protection",
    "Surveillance and reconnaissance",
    "Command and control systems",
    "Military logistics optimization",
]

_DEFAULT_INSIGHTS = [
    {
        "title": "AI Threat Detection",
        "trl": 8,
        "hype": "Peak of Inflated Expectations",
        "category": "Emerging",
        "relevance": 95,
    },
    {
        "title": "Autonomous Defense Systems",
        "trl": 6,
        "hype": "Innovation Trigger",
        "category": "Emerging",
        "relevance": 88,
    },
    {
        "title": "Cyber Warfare AI",
        "trl": 7,
        "hype": "Trough of Disillusionment",
        "category": "Maturing",
        "relevance": 92,
    },
]


def default_insights() -> List[TechInsight]:
    return [TechInsight(**entry) for entry in _DEFAULT_INSIGHTS]


def mock_results(query: str) -> List[SearchResult]:
    """Entries shown when no API key is configured."""

    entries = [
        {
            "id": "1",
            "title": f"AI-Powered {query} Defense System",
            "abstract": (
                f"Advanced artificial intelligence approach for real-time {query} threat detection "
                "and interception in modern defense systems. This technology represents a "
                "breakthrough in autonomous defense capabilities..."
            ),
            "source": "patent",
            "relevance": 95,
            "date": "2024-01-15",
        },
        {
            "id": "2",
            "title": f"Autonomous {query} Coordination",
            "abstract": (
                f"Machine learning algorithms for coordinating multiple autonomous systems in {query} "
                "defense scenarios. Research shows significant operational advantages in complex "
                "battlefield environments..."
            ),
            "source": "paper",
            "relevance": 88,
            "date": "2024-02-20",
        },
        {
            "id": "3",
            "title": f"{query} Defense Solutions",
            "abstract": (
                f"Startup developing next-generation {query} cybersecurity solutions for military "
                "applications. Focus on real-time threat detection and automated response systems..."
            ),
            "source": "startup",
            "relevance": 82,
            "date": "2024-03-10",
        },
        {
            "id": "4",
            "title": f"Quantum {query} Encryption",
            "abstract": (
                f"Revolutionary quantum computing approach to {query} security protocols. This "
                "technology promises unbreakable encryption for military communications..."
            ),
            "source": "patent",
            "relevance": 91,
            "date": "2024-01-28",
        },
        {
            "id": "5",
            "title": f"Neural Network {query} Analysis",
            "abstract": (
                f"Deep learning models for analyzing {query} patterns and predicting potential "
                "threats. Academic research shows 94% accuracy in threat classification..."
            ),
            "source": "paper",
            "relevance": 87,
            "date": "2024-02-15",
        },
    ]
    return [SearchResult(**entry) for entry in entries]


def fallback_results(query: str) -> List[SearchResult]:
    """Entries shown after a failed or unparseable API response."""

    lowered = query.lower()
    entries = [
        {
            "id": "1",
            "title": f"{query} - AI Defense System",
            "abstract": (
                f"Advanced artificial intelligence system for {lowered} applications in defense "
                "scenarios with real-time processing capabilities..."
            ),
            "source": "patent",
            "relevance": 92,
            "date": "2024-01-15",
        },
        {
            "id": "2",
            "title": f"Research on {query} Technologies",
            "abstract": (
                f"Comprehensive analysis of {lowered} implementation in military environments "
                "with focus on operational efficiency..."
            ),
            "source": "paper",
            "relevance": 87,
            "date": "2024-02-20",
        },
        {
            "id": "3",
            "title": f"DefenseTech {query} Solutions",
            "abstract": (
                f"Startup specializing in {lowered} solutions for defense contractors with proven "
                "track record..."
            ),
            "source": "startup",
            "relevance": 84,
            "date": "2024-03-10",
        },
    ]
    return [SearchResult(**entry) for entry in entries]


def fallback_summaries(results: Sequence[SearchResult]) -> List[str]:
    """Three templated insights keyed on the first word of the top result."""

    topic = "Defense"
    if results:
        words = results[0].title.split(" ")
        if words and words[0]:
            topic = words[0]
    return [
        f"**{topic} technology** is rapidly advancing with 95% accuracy in threat detection, "
        "indicating strong market readiness and military adoption potential. The latest research "
        "shows significant improvements in autonomous decision-making capabilities.",
        f"**Autonomous {topic} systems** represent a paradigm shift in modern warfare tactics, "
        "with research demonstrating substantial operational advantages in complex battlefield "
        "scenarios. Military adoption rates are increasing exponentially.",
        f"**{topic} cybersecurity startups** are filling critical gaps in military infrastructure "
        "protection, suggesting high investment opportunities in this rapidly growing sector. "
        "Market analysis indicates 40% year-over-year growth.",
    ]


def default_overview() -> OverviewData:
    return OverviewData(
        key_findings=[
            "AI-driven threat detection systems show highest maturity with TRL 8",
            "Autonomous defense systems emerging as critical technology",
            "Cyber warfare AI capabilities in rapid development phase",
        ],
        trends=[
            "92% of analyzed technologies show significant advancement in AI integration",
            "Emerging focus on autonomous systems with 88% relevance score",
            "Cross-domain integration becoming a key development priority",
        ],
        strategic_implications=(
            "Current analysis indicates a rapid shift towards AI-enabled defense systems, with "
            "particular emphasis on autonomous capabilities and cyber warfare. Technologies are "
            "showing accelerated maturity cycles, suggesting increased investment and development "
            "focus in these areas."
        ),
    )


def matching_suggestions(query: str, limit: int) -> List[str]:
    lowered = (query or "").lower()
    return [s for s in DEFENSE_SUGGESTIONS if lowered in s.lower()][:limit]
