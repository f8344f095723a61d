from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import IntelConfig


class SourceKind(str, Enum):
    PATENT = "patent"
    PAPER = "paper"
    STARTUP = "startup"


class SearchResult(BaseModel):
    """One technology entry shown as a result card."""

    id: str
    title: str
    abstract: str = ""
    source: SourceKind = SourceKind.PAPER
    relevance: float = Field(default=IntelConfig.DEFAULT_RELEVANCE, ge=0.0, le=100.0)
    date: str = ""
    url: Optional[str] = "#"

    @field_validator("id", "date", mode="before")
    def coerce_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("source", mode="before")
    def normalize_source(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("relevance", mode="before")
    def coerce_relevance(cls, v: Any) -> float:
        """Generated entries sometimes carry relevance as text or omit it."""
        try:
            value = float(v)
        except (TypeError, ValueError):
            return float(IntelConfig.DEFAULT_RELEVANCE)
        if value != value or value == 0:
            return float(IntelConfig.DEFAULT_RELEVANCE)
        return max(0.0, min(100.0, value))


class OverviewData(BaseModel):
    """Structured overview: findings, trends and implications."""

    model_config = ConfigDict(populate_by_name=True)

    key_findings: List[str] = Field(default_factory=list, alias="keyFindings")
    trends: List[str] = Field(default_factory=list)
    strategic_implications: str = Field(default="", alias="strategicImplications")


class TechInsight(BaseModel):
    """Per-technology attributes that feed the three charts."""

    title: str
    trl: int = Field(ge=1, le=IntelConfig.TRL_LEVELS)
    hype: str
    category: str
    relevance: float = Field(ge=0.0, le=100.0)

    @field_validator("hype")
    def validate_hype(cls, v: str) -> str:
        if v not in IntelConfig.HYPE_PHASES:
            raise ValueError(f"Unknown hype phase: {v}")
        return v


class SourceCounts(BaseModel):
    patents: int = 0
    papers: int = 0
    startups: int = 0

    @property
    def total(self) -> int:
        return self.patents + self.papers + self.startups


class IntelligenceState(BaseModel):
    """Everything one search produces for the dashboard."""

    query: str
    results: List[SearchResult] = Field(default_factory=list)
    summaries: List[str] = Field(default_factory=list)
    overview: Optional[OverviewData] = None
    insights: List[TechInsight] = Field(default_factory=list)
    used_fallback: bool = False
