from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tfscan.models.resource import Resource

HOURS_PER_MONTH = 730


@dataclass
class Quote:
    monthly_cost: float
    description: str
    hourly_cost: Optional[float] = None
    quantity: Optional[float] = None
    unit: Optional[str] = None

    def __post_init__(self):
        if self.hourly_cost is None:
            self.hourly_cost = self.monthly_cost / HOURS_PER_MONTH


@dataclass
class LineItem:
    resource: Resource
    quote: Quote
    overridden: bool = False

    def to_dict(self) -> dict:
        return {
            "resource_type": self.resource.resource_type,
            "resource_name": self.resource.resource_name,
            "provider": self.resource.provider.value,
            "monthly_cost": round(self.quote.monthly_cost, 2),
            "hourly_cost": round(self.quote.hourly_cost or 0.0, 4),
            "quantity": self.quote.quantity,
            "unit": self.quote.unit,
            "description": self.quote.description,
            "overridden": self.overridden,
        }


@dataclass
class CostEstimate:
    line_items: List[LineItem] = field(default_factory=list)
    unsupported: Dict[str, int] = field(default_factory=dict)
    currency: str = "USD"

    @property
    def total_monthly_cost(self) -> float:
        return round(sum(li.quote.monthly_cost for li in self.line_items), 2)

    @property
    def total_hourly_cost(self) -> float:
        return round(sum(li.quote.hourly_cost or 0.0 for li in self.line_items), 4)

    @property
    def total_annual_cost(self) -> float:
        return round(self.total_monthly_cost * 12, 2)

    @property
    def no_price(self) -> Dict[str, int]:
        """Supported resource types that carry no direct cost."""
        counts: Dict[str, int] = defaultdict(int)
        for li in self.line_items:
            if li.quote.monthly_cost == 0:
                counts[li.resource.resource_type] += 1
        return dict(counts)

    @property
    def resource_count(self) -> int:
        return len(self.line_items) + sum(self.unsupported.values())

    def by_type(self) -> Dict[str, List[LineItem]]:
        grouped: Dict[str, List[LineItem]] = defaultdict(list)
        for li in self.line_items:
            grouped[li.resource.resource_type].append(li)
        return dict(grouped)

    def to_dict(self) -> dict:
        return {
            "currency": self.currency,
            "total_monthly_cost": self.total_monthly_cost,
            "total_hourly_cost": self.total_hourly_cost,
            "total_annual_cost": self.total_annual_cost,
            "summary": {
                "total_detected_resources": self.resource_count,
                "total_supported_resources": len(self.line_items),
                "total_unsupported_resources": sum(self.unsupported.values()),
                "total_no_price_resources": sum(self.no_price.values()),
                "unsupported_resource_counts": dict(self.unsupported),
                "no_price_resource_counts": self.no_price,
            },
            "line_items": [li.to_dict() for li in self.line_items],
        }
