"""
Linear scanning primitives for the subset of HCL that tfscan understands.

Nothing here is a grammar: comments are blanked in place, `resource` headers
are located with a cursor, and block bodies are cut out by counting braces.
Every function tolerates malformed input and never raises.
"""
import re
from typing import List, NamedTuple, Optional

_KEYWORD = "resource"

# `resource` has already been consumed; this is the rest of the header up to `{`.
_HEADER_RE = re.compile(r'\s+"([^"]+)"\s+"([^"]+)"\s*\{')


class ResourceBlock(NamedTuple):
    resource_type: str
    resource_name: str
    body_start: int     # offset of the first character after `{`
    body: str
    line: int           # 1-based line of the `resource` keyword


def is_escaped(text: str, index: int) -> bool:
    """True when text[index] follows an odd run of backslashes."""
    count = 0
    i = index - 1
    while i >= 0 and text[i] == "\\":
        count += 1
        i -= 1
    return count % 2 == 1


def _blank(chunk: str) -> str:
    return re.sub(r"[^\n]", " ", chunk)


def strip_comments(text: str) -> str:
    """
    Replace `#`, `//` and `/* */` comments with spaces.

    Newlines are kept, so offsets and line numbers in the result match the
    input. String literals are copied untouched. An unterminated block
    comment drops everything after its opening `/*`.
    """
    out: List[str] = []
    in_string = False
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if ch == '"' and not is_escaped(text, i):
            in_string = not in_string
            out.append(ch)
            i += 1
            continue

        if in_string:
            out.append(ch)
            i += 1
            continue

        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                break
            out.append(_blank(text[i:end + 2]))
            i = end + 2
            continue

        if ch == "#" or text.startswith("//", i):
            nl = text.find("\n", i)
            if nl == -1:
                nl = n
            out.append(" " * (nl - i))
            i = nl
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def match_brace(text: str, open_index: int) -> int:
    """
    Return the index of the `}` closing the `{` at open_index, or -1.

    Braces inside string literals are ignored. Comments must already be gone.
    """
    if open_index < 0 or open_index >= len(text) or text[open_index] != "{":
        return -1

    depth = 0
    in_string = False
    for i in range(open_index, len(text)):
        ch = text[i]
        if ch == '"' and not is_escaped(text, i):
            in_string = not in_string
            continue
        if in_string:
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1


def extract_block(text: str, open_index: int) -> Optional[str]:
    """Body strictly between the `{` at open_index and its match, or None."""
    close = match_brace(text, open_index)
    if close == -1:
        return None
    return text[open_index + 1:close]


def _standalone_keyword(text: str, idx: int) -> bool:
    if idx > 0 and (text[idx - 1].isalnum() or text[idx - 1] == "_"):
        return False
    after = idx + len(_KEYWORD)
    if after < len(text) and not (text[after].isspace() or text[after] == '"'):
        return False
    return True


def find_resource_blocks(text: str) -> List[ResourceBlock]:
    """
    Locate every `resource "<type>" "<name>" { ... }` block in file order.

    Expects comment-free text. Candidates with a bad header or unbalanced
    braces are skipped and the scan resumes just past their keyword; after a
    successful match it resumes past the closing brace, so blocks never
    overlap.
    """
    blocks: List[ResourceBlock] = []
    pos = 0
    n = len(text)
    # newlines are counted incrementally so the scan stays linear
    line = 1
    counted_to = 0

    while pos < n:
        idx = text.find(_KEYWORD, pos)
        if idx == -1:
            break
        after_keyword = idx + len(_KEYWORD)

        if not _standalone_keyword(text, idx):
            pos = after_keyword
            continue

        header = _HEADER_RE.match(text, after_keyword)
        if header is None:
            pos = after_keyword
            continue

        brace = header.end() - 1
        close = match_brace(text, brace)
        if close == -1:
            pos = after_keyword
            continue

        line += text.count("\n", counted_to, idx)
        counted_to = idx
        blocks.append(
            ResourceBlock(
                resource_type=header.group(1),
                resource_name=header.group(2),
                body_start=brace + 1,
                body=text[brace + 1:close],
                line=line,
            )
        )
        pos = close + 1

    return blocks
