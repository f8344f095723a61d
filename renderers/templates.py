"""Templating utilities for dashboard renderers."""

from __future__ import annotations

from typing import Any, Dict

from jinja2 import BaseLoader, Environment

MARKDOWN_ENV = Environment(
    loader=BaseLoader(),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    variable_start_string="[[",
    variable_end_string="]]",
)

HTML_ENV = Environment(loader=BaseLoader(), autoescape=True, trim_blocks=True, lstrip_blocks=True)

MARKDOWN_TEMPLATE = MARKDOWN_ENV.from_string(
    """# [[ title ]]

_Query: [[ query ]] · Filter [[ active_filter ]] · Generated [[ generated_at ]]{% if used_fallback %} · Template data{% endif %}_

{% if summaries -%}
## AI Analysis Summary

{% for summary in summaries -%}
[[ summary.markdown ]]

{% endfor %}
{% endif -%}
## Key Insights

| Technology | TRL | Hype phase | Status | Relevance |
| --- | --- | --- | --- | --- |
{% for insight in insights -%}
| [[ insight.title ]] | [[ insight.trl ]] | [[ insight.hype ]] | [[ insight.category ]] | [[ insight.relevance | round | int ]]% |
{% endfor %}

{% if overview -%}
## Overview

**Key findings**

{% for item in overview.key_findings -%}
- [[ item.markdown ]]
{% endfor %}

**Technology trends**

{% for item in overview.trends -%}
- [[ item.markdown ]]
{% endfor %}

**Strategic implications**

[[ overview.strategic_implications.markdown ]]

{% endif -%}
## Intelligence Sources

{% for entry in sidebar -%}
- [[ entry.label ]]: [[ entry.count ]]{% if entry.active %} (active){% endif %}

{% endfor %}

## Results

{% for card in cards -%}
### [[ card.title ]]

_[[ card.source_label ]] · [[ card.date ]] · Relevance [[ card.relevance ]]%_

[[ card.abstract.markdown ]]

{% endfor %}
## Charts

{% for chart in chart_titles -%}
**[[ chart.title ]]**: [[ chart.description ]]

{% if chart.key == 'trl' -%}
{% for count in charts.trl.data.datasets[0].data -%}
- TRL [[ loop.index ]]: [[ count ]]
{% endfor %}
{% elif chart.key == 'hype' -%}
{% for label in charts.hype.data.labels -%}
- [[ label ]]: [[ charts.hype.data.datasets[0].data[loop.index0] ]]
{% endfor %}
{% else -%}
{% for label in charts.radar.data.labels -%}
- [[ label ]]: [[ charts.radar.data.datasets[0].data[loop.index0] ]]
{% endfor %}
{% endif %}

{% endfor %}
"""
)

HTML_TEMPLATE = HTML_ENV.from_string(
    """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }} · {{ query }}</title>
  <script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
  <style>
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; margin: 0; color: #0a0a0a; }
    header { padding: 1.5rem 2rem; border-bottom: 1px solid #e5e5e5; }
    .layout { display: flex; }
    aside { width: 18rem; padding: 1.5rem; border-right: 1px solid #e5e5e5; }
    main { flex: 1; padding: 1.5rem; }
    .card { border: 1px solid #e5e5e5; border-radius: 0.5rem; padding: 1rem; margin-bottom: 1rem; }
    .active { border-color: {{ chart_color }}; }
    .line { margin-bottom: 0.5rem; }
    .list-marker { display: inline-block; width: 1rem; }
    .ordinal { font-weight: 500; }
    .chart { height: 300px; }
    .muted { color: #737373; font-size: 0.8rem; }
  </style>
</head>
<body>
<header>
  <h1>{{ title }}</h1>
  <p class="muted">{{ tagline }} · Query: {{ query }} · Generated {{ generated_at }}{% if used_fallback %} · Template data{% endif %}</p>
</header>
<div class="layout">
<aside>
  <h2>Intelligence Sources</h2>
  {% for entry in sidebar %}
  <div class="card{% if entry.active %} active{% endif %}">{{ entry.label }} <strong>{{ entry.count }}</strong></div>
  {% endfor %}
</aside>
<main>
  {% if summaries %}
  <section class="card">
    <h2>AI Analysis Summary</h2>
    {% for summary in summaries %}
    <div class="card">
      {% for line in summary.lines %}
      {% if line.blank %}<br>{% else %}<div class="line">{{ line.html | safe }}</div>{% endif %}
      {% endfor %}
    </div>
    {% endfor %}
  </section>
  {% endif %}

  <section>
    {% for insight in insights %}
    <div class="card">
      <strong>{{ insight.title }}</strong> <span class="muted">TRL {{ insight.trl }}</span>
      <div class="muted">Relevance: {{ insight.relevance | round | int }}% · Status: {{ insight.category }}</div>
    </div>
    {% endfor %}
  </section>

  {% if overview %}
  <section class="card">
    <h2>Overview</h2>
    <h3>Key findings</h3>
    <ul>{% for item in overview.key_findings %}<li>{{ item.lines[0].html | safe }}</li>{% endfor %}</ul>
    <h3>Technology trends</h3>
    <ul>{% for item in overview.trends %}<li>{{ item.lines[0].html | safe }}</li>{% endfor %}</ul>
    <h3>Strategic implications</h3>
    {% for line in overview.strategic_implications.lines %}
    {% if not line.blank %}<p>{{ line.html | safe }}</p>{% endif %}
    {% endfor %}
  </section>
  {% endif %}

  {% for chart in chart_titles %}
  <section class="card">
    <h2>{{ chart.title }}</h2>
    <p class="muted">{{ chart.description }}</p>
    <div class="chart"><canvas id="chart-{{ chart.key }}"></canvas></div>
  </section>
  {% endfor %}

  <section>
    <h2>Results</h2>
    {% for card in cards %}
    <article class="card">
      <h3><a href="{{ card.url }}">{{ card.title }}</a></h3>
      <p class="muted">{{ card.source_label }} · {{ card.date }} · Relevance {{ card.relevance }}%</p>
      {% for line in card.abstract.lines %}
      {% if not line.blank %}<div class="line">{{ line.html | safe }}</div>{% endif %}
      {% endfor %}
    </article>
    {% endfor %}
  </section>
</main>
</div>
<script>
  const charts = {{ charts_json | safe }};
  for (const [key, config] of Object.entries(charts)) {
    const canvas = document.getElementById('chart-' + key);
    if (canvas) { new Chart(canvas, config); }
  }
</script>
</body>
</html>
"""
)


def render_markdown(context: Dict[str, Any]) -> str:
    return MARKDOWN_TEMPLATE.render(**context)


def render_html(context: Dict[str, Any]) -> str:
    return HTML_TEMPLATE.render(**context)
