"""
Standalone HTML cost report generator.
"""
from datetime import datetime, timezone

from jinja2 import Environment

from tfscan import __version__
from tfscan.models.estimate import CostEstimate
from tfscan.models.resource import Provider

_HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Cost Estimate - tfscan</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; line-height: 1.6; color: #333; max-width: 1200px; margin: 0 auto; padding: 2rem; background: #f9f9f9; }
        header { border-bottom: 2px solid #ddd; margin-bottom: 2rem; padding-bottom: 1rem; }
        h1 { color: #1565c0; margin-bottom: 0; }
        .meta { color: #666; font-size: 0.9rem; margin-bottom: 2rem; }
        .summary-cards { display: grid; grid-template-columns: repeat(auto-fit, minmax(150px, 1fr)); gap: 1rem; margin-bottom: 2rem; }
        .card { background: white; padding: 1rem; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); text-align: center; border-left: 5px solid #ddd; }
        .card.aws { border-left-color: #ff9900; }
        .card.gcp { border-left-color: #4285f4; }
        .card.azure { border-left-color: #0078d4; }
        .card-num { font-size: 2rem; font-weight: bold; margin-bottom: 0.2rem; }
        .card-label { color: #666; font-size: 0.8rem; text-transform: uppercase; }
        .cost-table { width: 100%; border-collapse: collapse; background: white; border-radius: 8px; overflow: hidden; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        .cost-table th, .cost-table td { padding: 1rem; text-align: left; border-bottom: 1px solid #eee; }
        .cost-table th { background: #f5f5f5; font-weight: 600; }
        .cost-table td.num { text-align: right; font-family: monospace; }
        .override { font-size: 0.8rem; color: #999; }
        footer { margin-top: 4rem; text-align: center; color: #999; font-size: 0.8rem; }
    </style>
</head>
<body>
    <header>
        <h1>Infrastructure Cost Estimate</h1>
        <div class="meta">Generated: {{ generated }} | Source: {{ source }} | tfscan v{{ version }}</div>
    </header>

    <div class="summary-cards">
        <div class="card"><div class="card-num">${{ "%.2f"|format(estimate.total_monthly_cost) }}</div><div class="card-label">Monthly</div></div>
        <div class="card"><div class="card-num">${{ "%.2f"|format(estimate.total_annual_cost) }}</div><div class="card-label">Annual</div></div>
        {% for provider, total in provider_totals %}
        <div class="card {{ provider }}"><div class="card-num">${{ "%.2f"|format(total) }}</div><div class="card-label">{{ provider }}</div></div>
        {% endfor %}
    </div>

    <h2>Line Items</h2>
    <table class="cost-table">
        <thead>
            <tr>
                <th>Resource</th>
                <th>Provider</th>
                <th>Description</th>
                <th>Monthly (USD)</th>
            </tr>
        </thead>
        <tbody>
            {% for li in estimate.line_items %}
            <tr>
                <td><strong>{{ li.resource.qualified_name }}</strong></td>
                <td>{{ li.resource.provider.value }}</td>
                <td>{{ li.quote.description }}{% if li.overridden %} <span class="override">(override)</span>{% endif %}</td>
                <td class="num">{{ "%.2f"|format(li.quote.monthly_cost) }}</td>
            </tr>
            {% endfor %}
        </tbody>
    </table>

    {% if estimate.unsupported %}
    <h2>Unpriced Resources</h2>
    <ul>
        {% for rtype, count in estimate.unsupported|dictsort %}
        <li><code>{{ rtype }}</code> ({{ count }})</li>
        {% endfor %}
    </ul>
    {% endif %}

    <footer>
        tfscan — Terraform resource extractor and cost estimator
    </footer>
</body>
</html>
"""


def build_report(estimate: CostEstimate, source_path: str) -> str:
    totals = {}
    for li in estimate.line_items:
        if li.resource.provider == Provider.UNKNOWN:
            continue
        key = li.resource.provider.value
        totals[key] = totals.get(key, 0.0) + li.quote.monthly_cost

    env = Environment(autoescape=True)
    template = env.from_string(_HTML_TEMPLATE)

    return template.render(
        generated=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
        source=source_path,
        version=__version__,
        estimate=estimate,
        provider_totals=sorted(totals.items()),
    )
