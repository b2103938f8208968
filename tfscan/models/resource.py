from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union

# Only scalar values survive extraction; lists, maps and references are dropped.
AttributeValue = Union[str, int, float, bool]


class Provider(str, Enum):
    AWS     = "aws"
    GCP     = "gcp"
    AZURE   = "azure"
    UNKNOWN = "unknown"


@dataclass
class Resource:
    resource_type: str     # e.g. "aws_instance"
    resource_name: str     # second label of the resource block
    provider: Provider = Provider.UNKNOWN
    attributes: Dict[str, AttributeValue] = field(default_factory=dict)
    source_file: str = ""
    line: int = 0          # 1-based line of the `resource` keyword

    @property
    def qualified_name(self) -> str:
        return f"{self.resource_type}.{self.resource_name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resource_type": self.resource_type,
            "resource_name": self.resource_name,
            "provider": self.provider.value,
            "attributes": dict(self.attributes),
            "source_file": self.source_file,
            "line": self.line,
        }
