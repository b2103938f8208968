import os
from collections import Counter
from typing import Callable, Dict, List, Optional

import yaml
from rich.console import Console

from tfscan.models.estimate import CostEstimate, LineItem, Quote
from tfscan.models.resource import Provider, Resource
from tfscan.pricing import aws, azure, gcp

console = Console(stderr=True)

DEFAULT_PRICING_FILE = "tfscan_pricing.yaml"

PRICERS: Dict[Provider, Callable[[Resource], Optional[Quote]]] = {
    Provider.AWS: aws.quote,
    Provider.GCP: gcp.quote,
    Provider.AZURE: azure.quote,
}


def load_overrides(path: Optional[str] = None) -> Dict[str, float]:
    """
    Load per-type monthly price overrides from a YAML file.

    The file looks like:

        overrides:
          aws_instance: 12.50
          google_storage_bucket: 0

    Without an explicit path, 'tfscan_pricing.yaml' in the working directory
    is used when present.
    """
    pricing_file = path or DEFAULT_PRICING_FILE
    if not os.path.exists(pricing_file):
        if path:
            console.print(f"[yellow]Warning:[/yellow] pricing file {path} not found, using built-in prices.")
        return {}

    try:
        with open(pricing_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
        raw = config.get("overrides", {}) or {}
        return {str(k): float(v) for k, v in raw.items()}
    except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError) as exc:
        console.print(f"[yellow]Warning:[/yellow] ignoring pricing file {pricing_file}: {exc}")
        return {}


def price(resource: Resource, overrides: Optional[Dict[str, float]] = None) -> Optional[LineItem]:
    """Line item for one resource, or None when it cannot be priced."""
    if overrides and resource.resource_type in overrides:
        monthly = overrides[resource.resource_type]
        return LineItem(resource, Quote(monthly, "Custom price override"), overridden=True)

    pricer = PRICERS.get(resource.provider)
    if pricer is None:
        return None
    q = pricer(resource)
    if q is None:
        return None
    return LineItem(resource, q)


def estimate(resources: List[Resource], overrides: Optional[Dict[str, float]] = None) -> CostEstimate:
    """
    Price every resource, keeping input order for the line items.
    Resources no pricer knows are counted by type under `unsupported`.
    """
    line_items: List[LineItem] = []
    unsupported: Counter = Counter()

    for r in resources:
        item = price(r, overrides)
        if item is None:
            unsupported[r.resource_type] += 1
        else:
            line_items.append(item)

    return CostEstimate(line_items=line_items, unsupported=dict(unsupported))
