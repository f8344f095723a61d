import json

import pytest

from credentials import FileCredentialStore, StaticCredentialProvider
from fallbacks import default_overview, fallback_results, fallback_summaries, mock_results
from gemini_client import GeminiError
from intelligence_engine import IntelligenceEngine, filter_results, result_counts


class FakeGeminiClient:
    """Answers each prompt kind with a canned response (or raises)."""

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.prompts = []
        self.closed = 0

    def close(self):
        self.closed += 1

    def generate_content(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        for marker, response in self.responses.items():
            if marker in prompt:
                return response
        raise GeminiError("unexpected prompt")


def _engine(client=None, key="test-key"):
    return IntelligenceEngine(
        StaticCredentialProvider(key),
        client_factory=lambda api_key: client,
    )


GENERATED_RESULTS = json.dumps(
    [
        {"title": "Passive radar fusion", "abstract": "Fuses signals.", "source": "paper", "relevance": "77"},
        {"id": "9", "title": "Drone swarm C2", "abstract": "Swarm control.", "source": "startup", "relevance": 93},
        "not an entry",
        {"title": "Bad source", "source": "blog"},
    ]
)

SUMMARY_TEXT = "\n".join(
    [
        "Insights:",
        "1. **Passive radar** is maturing quickly across allied programs.",
        "",
        "2. **Swarm control** startups are attracting significant investment now.",
        "3. **Sensor fusion** is the common thread in every analyzed abstract.",
        "4. **Extra insight** that should be trimmed from the summary list.",
    ]
)

OVERVIEW_TEXT = (
    "```json\n"
    + json.dumps(
        {
            "keyFindings": ["Radar leads"],
            "trends": ["Swarms up 40%"],
            "strategicImplications": "Invest in **fusion**.",
        }
    )
    + "\n```"
)


def _happy_client():
    return FakeGeminiClient(
        {
            "Return as JSON array": f"Sure! {GENERATED_RESULTS}",
            "key strategic insights": SUMMARY_TEXT,
            "comprehensive overview": OVERVIEW_TEXT,
            "search suggestions": "Passive radar arrays\nshort\nCounter-drone lasers\n",
        }
    )


def test_blank_query_does_nothing():
    assert _engine(key=None).search_intelligence("   ") is None


def test_search_without_key_uses_templates():
    state = _engine(key=None).search_intelligence("Radar")
    assert [r.title for r in state.results] == [r.title for r in mock_results("Radar")]
    assert state.summaries == fallback_summaries(state.results)
    assert state.summaries[0].startswith("**AI-Powered technology**")
    assert state.overview == default_overview()
    assert len(state.insights) == 5
    assert state.used_fallback is True


def test_search_with_generated_content():
    client = _happy_client()
    state = _engine(client).search_intelligence(" Radar ")

    assert state.query == "Radar"
    assert [r.title for r in state.results] == ["Passive radar fusion", "Drone swarm C2"]
    assert [r.id for r in state.results] == ["1", "9"]
    assert state.results[0].relevance == 77
    assert len(state.summaries) == 3
    assert state.summaries[0].startswith("1. **Passive radar**")
    assert state.overview.key_findings == ["Radar leads"]
    assert state.overview.strategic_implications == "Invest in **fusion**."
    assert [i.title for i in state.insights] == ["Passive radar fusion", "Drone swarm C2"]
    assert state.used_fallback is False
    assert 'related to "Radar"' in client.prompts[0]


def test_search_falls_back_when_api_fails():
    state = _engine(FakeGeminiClient(error=GeminiError("boom"))).search_intelligence("Sonar")
    assert [r.title for r in state.results] == [r.title for r in fallback_results("Sonar")]
    assert state.summaries == fallback_summaries(state.results)
    assert state.overview == default_overview()
    assert state.used_fallback is True


def test_unparseable_results_fall_back():
    client = FakeGeminiClient({"Return as JSON array": "I cannot help with that."})
    results = _engine(client).generate_defense_data("Lidar")
    assert [r.title for r in results] == [r.title for r in fallback_results("Lidar")]


def test_summary_with_key_and_no_results_is_empty():
    assert _engine(_happy_client()).generate_summary([]) == []


def test_overview_without_json_uses_default():
    client = FakeGeminiClient({"comprehensive overview": "No structure here."})
    assert _engine(client).generate_overview(mock_results("X")) == default_overview()


def test_overview_without_results_uses_default():
    assert _engine(_happy_client()).generate_overview([]) == default_overview()


def test_suggestions_from_generator_are_filtered():
    assert _engine(_happy_client()).suggest("radar") == ["Passive radar arrays", "Counter-drone lasers"]


def test_suggestions_fall_back_to_fixed_list():
    assert _engine(key=None).suggest("radar") == ["Radar signal processing"]
    assert len(_engine(key=None).suggest("")) == 6


def test_short_query_skips_generator():
    client = _happy_client()
    suggestions = _engine(client).suggest("s")
    assert client.prompts == []
    assert len(suggestions) == 6


def test_filter_and_counts():
    results = mock_results("Radar")
    assert len(filter_results(results, "all")) == 5
    assert {r.source.value for r in filter_results(results, "patents")} == {"patent"}
    assert len(filter_results(results, "startups")) == 1
    with pytest.raises(ValueError):
        filter_results(results, "blogs")

    counts = result_counts(results)
    assert (counts.patents, counts.papers, counts.startups) == (2, 2, 1)


def test_search_shares_one_client_and_closes_it():
    client = _happy_client()
    keys = []

    def factory(api_key):
        keys.append(api_key)
        return client

    engine = IntelligenceEngine(StaticCredentialProvider("test-key"), client_factory=factory)
    engine.search_intelligence("Radar")

    assert keys == ["test-key"]
    assert len(client.prompts) == 3
    assert client.closed == 1


def test_client_is_closed_after_api_failure():
    client = FakeGeminiClient(error=GeminiError("boom"))
    _engine(client).generate_defense_data("Sonar")
    assert client.closed == 1


def test_corrupt_credential_store_means_no_key(tmp_path):
    path = tmp_path / "creds.json"
    path.write_text("{broken", encoding="utf-8")
    factory_calls = []
    engine = IntelligenceEngine(FileCredentialStore(str(path)), client_factory=factory_calls.append)

    state = engine.search_intelligence("Radar")

    assert factory_calls == []
    assert [r.title for r in state.results] == [r.title for r in mock_results("Radar")]
    assert state.used_fallback is True
    assert engine.suggest("radar") == ["Radar signal processing"]
