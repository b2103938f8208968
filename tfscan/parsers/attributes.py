"""
Flat attribute extraction from a block body.

Scalar assignments (`key = "text"`, `key = 12.5`, `key = true`) become map
entries; nested blocks (`label { ... }`) are flattened into `label.key`
entries. Lists, object literals, references, heredocs and function calls are
left out of the result.
"""
import re
from typing import Dict, List, Tuple, Union

from tfscan.models.resource import AttributeValue
from tfscan.parsers.scanner import extract_block, is_escaped, match_brace

_KEY = r"^[ \t]*(\w[\w.-]*)[ \t]*=[ \t]*"
_EOL = r"[ \t\r]*$"

_STRING_RE = re.compile(_KEY + r'"((?:[^"\\\n]|\\.)*)"' + _EOL, re.MULTILINE)
_NUMBER_RE = re.compile(_KEY + r"(-?\d+(?:\.\d+)?)" + _EOL, re.MULTILINE)
_BOOL_RE = re.compile(_KEY + r"(true|false)" + _EOL, re.MULTILINE)

# Identifier sitting right before a `{` on the same line.
_LABEL_RE = re.compile(r"(?<![\w.-])([A-Za-z_][\w-]*)[ \t]*$")
_ASSIGNED_RE = re.compile(r"=\s*$")
_LOOKBACK = 10


def _number(text: str) -> Union[int, float]:
    return float(text) if "." in text else int(text)


def _top_level(body: str) -> Tuple[str, List[int]]:
    """
    Blank the inside of every top-level brace pair, keeping offsets.

    Returns the blanked view and the offsets of the top-level `{` characters
    that sit outside string literals.
    """
    chars = list(body)
    openers: List[int] = []
    in_string = False
    i = 0

    while i < len(body):
        ch = body[i]
        if ch == '"' and not is_escaped(body, i):
            in_string = not in_string
        elif not in_string and ch == "{":
            openers.append(i)
            close = match_brace(body, i)
            if close == -1:
                break
            for j in range(i + 1, close):
                if chars[j] != "\n":
                    chars[j] = " "
            i = close
        i += 1

    return "".join(chars), openers


def _block_label(view: str, brace: int) -> str:
    line_start = view.rfind("\n", 0, brace) + 1
    m = _LABEL_RE.search(view, line_start, brace)
    if m is None:
        return ""
    # `key = label {` is an expression, not a block
    window = view[max(0, m.start() - _LOOKBACK):m.start()]
    if _ASSIGNED_RE.search(window):
        return ""
    return m.group(1)


def parse_attributes(body: str) -> Dict[str, AttributeValue]:
    """
    Parse a block body into a flat attribute map.

    String, number and boolean assignments are collected by three separate
    passes run in that order, so a key assigned twice with different value
    kinds ends up with the value from the later pass, regardless of which
    line came last in the file.
    """
    attrs: Dict[str, AttributeValue] = {}
    view, openers = _top_level(body)

    for m in _STRING_RE.finditer(view):
        attrs[m.group(1)] = m.group(2)

    for m in _NUMBER_RE.finditer(view):
        attrs[m.group(1)] = _number(m.group(2))

    for m in _BOOL_RE.finditer(view):
        attrs[m.group(1)] = m.group(2) == "true"

    for brace in openers:
        label = _block_label(view, brace)
        if not label:
            continue
        inner = extract_block(body, brace)
        if inner is None:
            continue
        for key, value in parse_attributes(inner).items():
            attrs[f"{label}.{key}"] = value

    return attrs
