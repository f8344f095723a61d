"""Deterministic pseudo-random chart data.

Mock chart attributes have to stay put between re-renders, so nothing here
touches ``random`` or the clock. Every value is derived from a seed built
out of the item titles and drawn with the trigonometric trick
``frac(sin(seed + offset) * 10000)``. This is a display device only and
must never be used where unpredictability matters.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Tuple, TypeVar

from config import IntelConfig
from fallbacks import default_insights
from models import SearchResult, SourceCounts, SourceKind, TechInsight

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Attribute(Enum):
    """Offset added to the item index for each drawn attribute.

    ``HYPE`` is indexed by hype phase rather than by item and draws at
    ``seed + phase index``, so it shares offset 0 with ``TRL``.
    """

    TRL = 0
    PHASE = 100
    RELEVANCE = 200
    SOURCE_COUNT = 300
    HYPE = 0


@dataclass(frozen=True)
class SeededSeries:
    seed: int
    offset: int
    values: Tuple[float, ...]
    lo: float
    hi: float

    def __len__(self) -> int:
        return len(self.values)


def _title_of(item: Any) -> str:
    if isinstance(item, dict):
        title = item.get("title")
    else:
        title = getattr(item, "title", None)
    return title if isinstance(title, str) else ""


def derive_seed(items: Sequence[Any]) -> int:
    """Item count plus the summed title lengths."""
    return len(items) + sum(len(_title_of(item)) for item in items)


def value_at(seed: int, offset: int = 0) -> float:
    x = math.sin(seed + offset) * 10000
    return x - math.floor(x)


def draw(seed: int, index: int, attribute: Attribute) -> float:
    return value_at(seed, index + attribute.value)


def map_to_range(value: float, lo: int, hi: int) -> int:
    """Scale a [0, 1) draw onto the inclusive integer range [lo, hi]."""
    mapped = lo + math.floor(value * (hi - lo + 1))
    return max(lo, min(hi, mapped))


def bucket(value: float, categories: Sequence[T]) -> T:
    if not categories:
        raise ValueError("bucket() needs at least one category")
    index = min(math.floor(value * len(categories)), len(categories) - 1)
    return categories[max(0, index)]


def series(seed: int, count: int, lo: float = 0.0, hi: float = 1.0, offset: int = 0) -> SeededSeries:
    values = []
    for index in range(max(0, count)):
        value = lo + value_at(seed, offset + index) * (hi - lo)
        values.append(max(lo, min(hi, value)))
    return SeededSeries(seed=seed, offset=offset, values=tuple(values), lo=lo, hi=hi)


def _relevance_of(item: Any) -> Optional[float]:
    if isinstance(item, dict):
        value = item.get("relevance")
    else:
        value = getattr(item, "relevance", None)
    if value is None:
        return None
    try:
        return max(0.0, min(100.0, float(value)))
    except (TypeError, ValueError):
        return None


def generate_series(items: Sequence[Any]) -> List[TechInsight]:
    """Chart attributes for each item, or the default insights for no items."""

    if not items:
        return default_insights()

    seed = derive_seed(items)
    trl_lo, trl_hi = IntelConfig.TRL_RANGE
    rel_lo, rel_hi = IntelConfig.RELEVANCE_RANGE
    insights: List[TechInsight] = []
    for index, item in enumerate(items):
        phase_draw = draw(seed, index, Attribute.PHASE)
        relevance = _relevance_of(item)
        if relevance is None:
            relevance = float(map_to_range(draw(seed, index, Attribute.RELEVANCE), rel_lo, rel_hi))
        insights.append(
            TechInsight(
                title=_title_of(item) or f"Technology {index + 1}",
                trl=map_to_range(draw(seed, index, Attribute.TRL), trl_lo, trl_hi),
                hype=bucket(phase_draw, IntelConfig.HYPE_PHASES),
                category=bucket(phase_draw, IntelConfig.INSIGHT_CATEGORIES),
                relevance=relevance,
            )
        )
    logger.debug("Generated %d insights from seed %d", len(insights), seed)
    return insights


def hype_values(insights: Sequence[TechInsight]) -> List[float]:
    """One expectation level (5-95) per hype phase."""

    if not insights:
        return list(IntelConfig.DEFAULT_HYPE_VALUES)

    phases = IntelConfig.HYPE_PHASES
    draws = series(derive_seed(insights), len(phases), offset=Attribute.HYPE.value)
    values: List[float] = []
    for phase, phase_draw in zip(phases, draws.values):
        count = sum(1 for insight in insights if insight.hype == phase)
        base = min(90, count * 25 + 20) if count > 0 else 15
        variation = phase_draw * 20 - 10
        values.append(max(5.0, min(95.0, base + variation)))
    return values


def trl_distribution(insights: Iterable[TechInsight]) -> List[int]:
    counts = [0] * IntelConfig.TRL_LEVELS
    for insight in insights:
        if 1 <= insight.trl <= IntelConfig.TRL_LEVELS:
            counts[insight.trl - 1] += 1
    return counts


def count_by_source(results: Iterable[SearchResult]) -> SourceCounts:
    counts = SourceCounts()
    for result in results:
        if result.source == SourceKind.PATENT:
            counts.patents += 1
        elif result.source == SourceKind.PAPER:
            counts.papers += 1
        elif result.source == SourceKind.STARTUP:
            counts.startups += 1
    return counts


def source_counts(results: Sequence[SearchResult]) -> SourceCounts:
    """Sidebar totals, scaled up from the real per-source counts.

    Each count lands in ``[max(1, base // 2), base * 3 + 10]``.
    """

    base = count_by_source(results)
    draws = series(derive_seed(results), 3, offset=Attribute.SOURCE_COUNT.value)

    def _scaled(index: int, value: int) -> int:
        lo = max(1, math.floor(value * 0.5))
        hi = math.floor(value * 3) + 10
        return map_to_range(draws.values[index], lo, hi)

    return SourceCounts(
        patents=_scaled(0, base.patents),
        papers=_scaled(1, base.papers),
        startups=_scaled(2, base.startups),
    )


__all__ = [
    "Attribute",
    "SeededSeries",
    "derive_seed",
    "value_at",
    "draw",
    "map_to_range",
    "bucket",
    "series",
    "generate_series",
    "hype_values",
    "trl_distribution",
    "count_by_source",
    "source_counts",
]
