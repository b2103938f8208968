from typing import Dict, Union

from tfscan.models.resource import AttributeValue


def num(attrs: Dict[str, AttributeValue], key: str, default: Union[int, float]) -> Union[int, float]:
    """Numeric attribute, accepting numeric strings; anything else gives default."""
    val = attrs.get(key)
    if isinstance(val, bool) or val is None:
        return default
    if isinstance(val, (int, float)):
        return val
    try:
        return float(val)
    except ValueError:
        return default


def text(attrs: Dict[str, AttributeValue], key: str, default: str) -> str:
    val = attrs.get(key)
    if isinstance(val, str) and val:
        return val
    return default
