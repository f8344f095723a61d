"""
Intelligence engine: turns a search topic into dashboard data.

Each step asks the generative API first and falls back to template data
when no key is configured or the call fails, so a search always produces
something to render.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from config import IntelConfig
from credentials import CredentialError, CredentialProvider, default_provider
from fallbacks import (
    default_overview,
    fallback_results,
    fallback_summaries,
    matching_suggestions,
    mock_results,
)
from gemini_client import GeminiClient, GeminiError, extract_json_array, extract_json_object
from mock_series import count_by_source, generate_series
from models import IntelligenceState, OverviewData, SearchResult, SourceCounts

logger = logging.getLogger(__name__)

RESULTS_PROMPT = (
    'Generate {count} realistic defense technology entries related to "{query}". '
    "Return as JSON array with fields: id, title, abstract (100-150 words), "
    "source (patent/paper/startup), relevance (60-98), date (2023-2024), url. "
    "Mix sources equally. Focus on AI, cybersecurity, autonomous systems, radar, "
    "missile defense, and military communication technologies."
)

SUMMARY_PROMPT = (
    "Analyze these defense technology abstracts and provide {count} key strategic insights "
    "about emerging trends, threats, and opportunities. Keep each insight to 2-3 sentences "
    "and use **bold** formatting for key terms:\n\n{abstracts}"
)

OVERVIEW_PROMPT = """Analyze these defense technology abstracts and generate a comprehensive overview with the following structure:
1. Key Findings (3 bullet points highlighting the most significant discoveries)
2. Technology Trends (3 bullet points with quantitative insights)
3. Strategic Implications (2-3 sentences on broader impact)

Format as JSON with structure:
{{
  "keyFindings": ["point1", "point2", "point3"],
  "trends": ["trend1", "trend2", "trend3"],
  "strategicImplications": "text"
}}

Abstracts to analyze:
{abstracts}"""

SUGGESTION_PROMPT = (
    'Generate {count} specific defense technology search suggestions related to "{query}". '
    "Focus on military applications, AI defense systems, cybersecurity, autonomous weapons, "
    "radar technology, and battlefield systems. Return only the suggestions, one per line."
)


def _abstracts(results: Sequence[SearchResult]) -> str:
    return "\n\n".join(result.abstract for result in results)


def filter_results(results: Sequence[SearchResult], active_filter: str = "all") -> List[SearchResult]:
    """Apply a sidebar filter (``all``, ``patents``, ``papers``, ``startups``)."""

    if active_filter not in IntelConfig.SOURCE_FILTERS:
        raise ValueError(f"Unknown source filter '{active_filter}'")
    if active_filter == "all":
        return list(results)
    # patents -> patent, papers -> paper, startups -> startup
    kind = active_filter[:-1]
    return [result for result in results if result.source.value == kind]


def result_counts(results: Sequence[SearchResult]) -> SourceCounts:
    return count_by_source(results)


class IntelligenceEngine:
    """Search orchestration behind the dashboard."""

    def __init__(
        self,
        credentials: Optional[CredentialProvider] = None,
        client_factory: Callable[[str], Any] = GeminiClient,
    ) -> None:
        self.credentials = credentials or default_provider()
        self.client_factory = client_factory

    def _client(self) -> Optional[Any]:
        try:
            key = self.credentials.get()
        except CredentialError as exc:
            logger.warning("Credential store unavailable, continuing without an API key: %s", exc)
            return None
        if not key:
            return None
        return self.client_factory(key)

    @contextmanager
    def _open_client(self) -> Iterator[Optional[Any]]:
        """One client (and HTTP session) per operation, closed when it ends."""
        client = self._client()
        try:
            yield client
        finally:
            if client is not None:
                client.close()

    # --- results -----------------------------------------------------------------

    def _fetch_results(self, query: str, client: Optional[Any]) -> Tuple[List[SearchResult], bool]:
        if client is None:
            logger.info("No API key configured; using mock results for '%s'", query)
            return mock_results(query), True

        try:
            content = client.generate_content(
                RESULTS_PROMPT.format(count=IntelConfig.RESULT_COUNT, query=query)
            )
        except GeminiError as exc:
            logger.error(f"Gemini API error: {exc}")
            return fallback_results(query), True

        items = extract_json_array(content)
        if items:
            results = self._parse_results(items)
            if results:
                logger.info(f"Found {len(results)} relevant defense technologies")
                return results, False

        logger.warning("Gemini results could not be parsed; using fallback results")
        return fallback_results(query), True

    @staticmethod
    def _parse_results(items: List[Any]) -> List[SearchResult]:
        results: List[SearchResult] = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                continue
            payload = dict(item)
            payload["id"] = payload.get("id") or str(index + 1)
            payload.setdefault("title", f"Result {index + 1}")
            try:
                results.append(SearchResult.model_validate(payload))
            except ValidationError as exc:
                logger.warning("Skipping malformed result %d: %s", index + 1, exc.errors()[:1])
        return results

    def generate_defense_data(self, query: str) -> List[SearchResult]:
        with self._open_client() as client:
            results, _ = self._fetch_results(query, client)
        return results

    # --- summaries ---------------------------------------------------------------

    def _summarize(self, results: Sequence[SearchResult], client: Optional[Any]) -> Tuple[List[str], bool]:
        if client is None:
            return fallback_summaries(results), True
        if not results:
            return [], False

        try:
            summary = client.generate_content(
                SUMMARY_PROMPT.format(count=IntelConfig.SUMMARY_COUNT, abstracts=_abstracts(results))
            )
        except GeminiError as exc:
            logger.error(f"Gemini summary error: {exc}")
            return fallback_summaries(results), True

        insights = [
            line.strip()
            for line in summary.split("\n")
            if len(line.strip()) > IntelConfig.MIN_SUMMARY_LINE_LENGTH
        ]
        if not insights:
            return fallback_summaries(results), True
        logger.info("AI insights generated successfully")
        return insights[: IntelConfig.SUMMARY_COUNT], False

    def generate_summary(self, results: Sequence[SearchResult]) -> List[str]:
        with self._open_client() as client:
            summaries, _ = self._summarize(results, client)
        return summaries

    # --- overview ----------------------------------------------------------------

    def _overview(self, results: Sequence[SearchResult], client: Optional[Any]) -> Tuple[OverviewData, bool]:
        if client is None or not results:
            return default_overview(), True

        try:
            content = client.generate_content(OVERVIEW_PROMPT.format(abstracts=_abstracts(results)))
        except GeminiError as exc:
            logger.error(f"Gemini overview generation error: {exc}")
            return default_overview(), True

        payload = extract_json_object(content)
        if payload is None:
            return default_overview(), True
        try:
            return OverviewData.model_validate(payload), False
        except ValidationError as exc:
            logger.warning("Overview payload rejected: %s", exc.errors()[:1])
            return default_overview(), True

    def generate_overview(self, results: Sequence[SearchResult]) -> OverviewData:
        with self._open_client() as client:
            overview, _ = self._overview(results, client)
        return overview

    # --- search ------------------------------------------------------------------

    def search_intelligence(self, query: str) -> Optional[IntelligenceState]:
        """Run a full search: results first, then summary and overview together."""

        query = (query or "").strip()
        if not query:
            return None

        with self._open_client() as client:
            results, results_fallback = self._fetch_results(query, client)
            with ThreadPoolExecutor(max_workers=2) as pool:
                summary_future = pool.submit(self._summarize, results, client)
                overview_future = pool.submit(self._overview, results, client)
                summaries, summary_fallback = summary_future.result()
                overview, overview_fallback = overview_future.result()

        state = IntelligenceState(
            query=query,
            results=results,
            summaries=summaries,
            overview=overview,
            insights=generate_series(results),
            used_fallback=results_fallback or summary_fallback or overview_fallback,
        )
        logger.info(f"Search complete: {len(results)} results, {len(summaries)} insights")
        return state

    # --- suggestions -------------------------------------------------------------

    def suggest(self, query: str) -> List[str]:
        limit = IntelConfig.SUGGESTION_COUNT
        query = query or ""
        if len(query) < IntelConfig.MIN_SUGGESTION_QUERY:
            return matching_suggestions(query, limit)

        with self._open_client() as client:
            if client is None:
                return matching_suggestions(query, limit)
            try:
                content = client.generate_content(SUGGESTION_PROMPT.format(count=limit, query=query))
            except GeminiError as exc:
                logger.error(f"AI suggestions error: {exc}")
                return matching_suggestions(query, limit)

        suggestions = [
            line.strip()
            for line in content.split("\n")
            if len(line.strip()) > IntelConfig.MIN_SUGGESTION_LENGTH
        ][:limit]
        return suggestions or matching_suggestions(query, limit)
