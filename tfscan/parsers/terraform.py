import os
from typing import List, Tuple

from rich.console import Console

from tfscan.models.resource import Provider, Resource
from tfscan.parsers.attributes import parse_attributes
from tfscan.parsers.scanner import find_resource_blocks, strip_comments

console = Console(stderr=True)

_PROVIDER_PREFIXES = (
    ("aws_", Provider.AWS),
    ("google_", Provider.GCP),
    ("azurerm_", Provider.AZURE),
)


def infer_provider(resource_type: str) -> Provider:
    for prefix, provider in _PROVIDER_PREFIXES:
        if resource_type.startswith(prefix):
            return provider
    return Provider.UNKNOWN


def is_terraform_file(filepath: str) -> bool:
    return filepath.endswith(".tf")


def parse_content(content: str, source_file: str = "") -> List[Resource]:
    """Extract every resource block from raw .tf text, in file order."""
    stripped = strip_comments(content)
    resources: List[Resource] = []

    for block in find_resource_blocks(stripped):
        resources.append(
            Resource(
                resource_type=block.resource_type,
                resource_name=block.resource_name,
                provider=infer_provider(block.resource_type),
                attributes=parse_attributes(block.body),
                source_file=source_file,
                line=block.line,
            )
        )

    return resources


def _read(filepath: str) -> str:
    with open(filepath, encoding="utf-8") as fh:
        return fh.read()


def parse_file(filepath: str) -> List[Resource]:
    try:
        content = _read(filepath)
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"[yellow]Warning:[/yellow] failed to read {filepath}: {exc}")
        return []
    return parse_content(content, filepath)


def scan_directory(path: str) -> Tuple[List[Resource], List[str]]:
    """
    Parse the .tf files directly inside `path` (sub-directories are ignored).

    Returns the resources of all readable files, concatenated in sorted
    file-name order, and the paths of the files that could not be read.
    """
    resources: List[Resource] = []
    skipped: List[str] = []

    try:
        entries = sorted(os.listdir(path))
    except OSError as exc:
        console.print(f"[yellow]Warning:[/yellow] cannot list {path}: {exc}")
        return resources, skipped

    for fname in entries:
        if not is_terraform_file(fname):
            continue
        fpath = os.path.join(path, fname)
        if not os.path.isfile(fpath):
            continue
        try:
            content = _read(fpath)
        except (OSError, UnicodeDecodeError) as exc:
            console.print(f"[yellow]Warning:[/yellow] skipping {fpath}: {exc}")
            skipped.append(fpath)
            continue
        resources.extend(parse_content(content, fpath))

    return resources, skipped


def parse_directory(path: str) -> List[Resource]:
    if os.path.isfile(path):
        return parse_file(path) if is_terraform_file(path) else []
    resources, _ = scan_directory(path)
    return resources
