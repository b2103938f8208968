"""
Markdown cost report generator.
"""
from datetime import datetime, timezone

from jinja2 import Environment

from tfscan import __version__
from tfscan.models.estimate import CostEstimate

_TEMPLATE = """\
# Infrastructure Cost Estimate

**Generated:** {{ generated }}
**Source:** {{ source }}
**Tool:** tfscan v{{ version }}

---

## Summary

Priced **{{ supported }} of {{ detected }} resources**:

- **Monthly:** ${{ "%.2f"|format(estimate.total_monthly_cost) }}
- **Hourly:** ${{ "%.4f"|format(estimate.total_hourly_cost) }}
- **Annual:** ${{ "%.2f"|format(estimate.total_annual_cost) }}

---

## Cost by Resource Type

| Type | Count | Monthly (USD) |
|------|-------|---------------|
{% for rtype, items in by_type %}| `{{ rtype }}` | {{ items|length }} | {{ "%.2f"|format(items|sum(attribute="quote.monthly_cost")) }} |
{% endfor %}

---

## Line Items

| # | Resource | Provider | Description | Monthly (USD) |
|---|----------|----------|-------------|---------------|
{% for li in estimate.line_items %}| {{ loop.index }} | `{{ li.resource.qualified_name }}` | {{ li.resource.provider.value }} | {{ li.quote.description }}{% if li.overridden %} *(override)*{% endif %} | {{ "%.2f"|format(li.quote.monthly_cost) }} |
{% endfor %}
{% if estimate.unsupported %}
---

## Unpriced Resources

The following resource types are not in the pricing tables and were left out of the totals:
{% for rtype, count in estimate.unsupported|dictsort %}
- `{{ rtype }}` ({{ count }}){% endfor %}
{% endif %}
"""


def build_report(estimate: CostEstimate, source_path: str) -> str:
    env = Environment(autoescape=False)
    template = env.from_string(_TEMPLATE)

    by_type = sorted(
        estimate.by_type().items(),
        key=lambda kv: -sum(li.quote.monthly_cost for li in kv[1]),
    )

    return template.render(
        generated=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
        source=source_path,
        version=__version__,
        estimate=estimate,
        supported=len(estimate.line_items),
        detected=estimate.resource_count,
        by_type=by_type,
    )
