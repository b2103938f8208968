"""
JSON resource inventory and cost report generator.
"""
import json
from datetime import datetime, timezone
from typing import List

from tfscan import __version__
from tfscan.models.estimate import CostEstimate
from tfscan.models.resource import Resource


def _meta(source_path: str) -> dict:
    return {
        "generated": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "source": source_path,
        "tool": "tfscan",
        "version": __version__,
    }


def build_resources_report(resources: List[Resource], source_path: str) -> str:
    report = {
        "meta": _meta(source_path),
        "resources": [r.to_dict() for r in resources],
    }
    return json.dumps(report, indent=2)


def build_report(estimate: CostEstimate, source_path: str) -> str:
    report = {"meta": _meta(source_path)}
    report.update(estimate.to_dict())
    return json.dumps(report, indent=2)
