"""
tfscan CLI entry point.
"""
import os
import sys
from typing import List, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from tfscan import __version__
from tfscan.models.estimate import CostEstimate
from tfscan.models.resource import Resource
from tfscan.parsers import terraform
from tfscan.pricing import engine
from tfscan.reporters import html_reporter, json_reporter, markdown

_BANNER = r"""
  _    __
 | |_ / _|___  ___ __ _ _ __
 | __| |_/ __|/ __/ _` | '_ \
 | |_|  _\__ \ (_| (_| | | | |
  \__|_| |___/\___\__,_|_| |_|
"""

_PROVIDER_COLORS = {
    "aws": "yellow",
    "gcp": "blue",
    "azure": "cyan",
    "unknown": "dim",
}

_DETAIL_LIMIT = 5


def _print_banner(no_color: bool = False) -> None:
    c = Console(stderr=True, no_color=no_color)
    c.print(f"[bold blue]{_BANNER}[/bold blue]")
    c.print(f"  [dim]Terraform resource extractor[/dim]   [dim]v{__version__}[/dim]\n")


def _load(path: str, stderr: Console) -> Tuple[List[Resource], List[str]]:
    """Parse a single .tf file or the .tf files directly inside a directory."""
    if os.path.isfile(path):
        if not terraform.is_terraform_file(path):
            stderr.print(f"[dim]Skipping non-Terraform file:[/dim] {path}")
            return [], []
        return terraform.parse_file(path), []
    return terraform.scan_directory(path)


def _collect(path: str, stderr: Console) -> List[Resource]:
    if not os.path.exists(path):
        stderr.print(f"[red]Path not found:[/red] {path}")
        sys.exit(2)

    with stderr.status(f"[bold]Parsing {path}…"):
        resources, skipped = _load(path, stderr)

    if skipped:
        stderr.print(f"[yellow]{len(skipped)} file(s) could not be read and were skipped.[/yellow]")
    return resources


def _write(content: str, output: Optional[str], stderr: Console) -> None:
    if output:
        with open(output, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
        stderr.print(f"Report written to [bold]{output}[/bold]")
    else:
        click.echo(content)


def _provider_cell(provider: str, no_color: bool) -> str:
    color = _PROVIDER_COLORS.get(provider, "") if not no_color else ""
    return f"[{color}]{provider}[/{color}]" if color else provider


def _print_resource_table(resources: List[Resource], no_color: bool) -> None:
    tbl = Table(title="Terraform Resources", show_header=True, header_style="bold")
    tbl.add_column("#", style="dim", width=4)
    tbl.add_column("Type", width=36)
    tbl.add_column("Name", width=24)
    tbl.add_column("Provider", width=8)
    tbl.add_column("Attributes", justify="right")
    tbl.add_column("Source")

    for i, r in enumerate(resources, 1):
        tbl.add_row(
            str(i),
            r.resource_type,
            r.resource_name,
            _provider_cell(r.provider.value, no_color),
            str(len(r.attributes)),
            f"{os.path.basename(r.source_file)}:{r.line}",
        )

    Console(stderr=True, no_color=no_color).print(tbl)


def _print_cost_table(estimate: CostEstimate, detailed: bool, no_color: bool) -> None:
    out = Console(stderr=True, no_color=no_color)
    tbl = Table(title="Estimated Monthly Cost", show_header=True, header_style="bold")
    tbl.add_column("Type", width=40)
    tbl.add_column("Count", justify="right", width=6)
    tbl.add_column("Monthly (USD)", justify="right")

    groups = sorted(
        estimate.by_type().items(),
        key=lambda kv: -sum(li.quote.monthly_cost for li in kv[1]),
    )
    for rtype, items in groups:
        tbl.add_row(rtype, str(len(items)), f"{sum(li.quote.monthly_cost for li in items):,.2f}")
        if detailed:
            for li in items[:_DETAIL_LIMIT]:
                tbl.add_row(
                    f"  [dim]{li.resource.resource_name}[/dim]",
                    "",
                    f"[dim]{li.quote.monthly_cost:,.2f}[/dim]",
                )
            if len(items) > _DETAIL_LIMIT:
                tbl.add_row(f"  [dim]… and {len(items) - _DETAIL_LIMIT} more[/dim]", "", "")

    tbl.add_section()
    tbl.add_row("[bold]Total[/bold]", str(len(estimate.line_items)), f"[bold]{estimate.total_monthly_cost:,.2f}[/bold]")
    out.print(tbl)

    if estimate.unsupported:
        out.print("[yellow]Some resources could not be priced:[/yellow]")
        for rtype, count in sorted(estimate.unsupported.items()):
            out.print(f"  [dim]{rtype}[/dim] ({count})")


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(__version__)
@click.pass_context
def cli(ctx):
    """tfscan — Terraform resource extractor and cost estimator."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()


@cli.command()
@click.argument("path", type=click.Path())
@click.option(
    "--format", "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Write the JSON inventory to this file (default: stdout). Only used with --format json.",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable rich terminal color output.",
)
def resources(path: str, output_format: str, output: Optional[str], no_color: bool) -> None:
    """
    List the resource blocks found in PATH.

    PATH is a .tf file or a directory; directories are not walked recursively.
    """
    stderr = Console(stderr=True, no_color=no_color)
    found = _collect(path, stderr)

    if output_format.lower() == "json":
        _write(json_reporter.build_resources_report(found, path), output, stderr)
        sys.exit(0)

    if output:
        stderr.print(f"[yellow]Warning:[/yellow] --output is only used with --format json; not writing {output}")
    if not found:
        stderr.print("[yellow]No Terraform resources found.[/yellow]")
    else:
        _print_resource_table(found, no_color)

    sys.exit(0)


@cli.command()
@click.argument("path", type=click.Path())
@click.option(
    "--format", "output_format",
    type=click.Choice(["table", "markdown", "json", "html"], case_sensitive=False),
    default="table",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Write report to this file (default: stdout).",
)
@click.option(
    "--detailed",
    is_flag=True,
    default=False,
    help="Show individual resources under each type in the terminal table.",
)
@click.option(
    "--pricing-file",
    type=click.Path(),
    default=None,
    help="YAML file with per-type monthly price overrides (default: ./tfscan_pricing.yaml).",
)
@click.option(
    "--budget",
    type=float,
    default=None,
    help="Exit with code 1 if the monthly total exceeds this amount in USD (for CI gates).",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable rich terminal color output.",
)
def cost(
    path: str,
    output_format: str,
    output: Optional[str],
    detailed: bool,
    pricing_file: Optional[str],
    budget: Optional[float],
    no_color: bool,
) -> None:
    """
    Estimate the monthly cost of the resources declared in PATH.

    Prices are static on-demand list prices; usage-based services are
    estimated at a baseline or zero.
    """
    _print_banner(no_color)
    stderr = Console(stderr=True, no_color=no_color)

    # 1. Parse
    found = _collect(path, stderr)
    if not found:
        stderr.print("[yellow]No Terraform resources found.[/yellow]")
        sys.exit(0)
    stderr.print(f"Found [bold]{len(found)}[/bold] resources.")

    # 2. Price
    overrides = engine.load_overrides(pricing_file)
    estimate = engine.estimate(found, overrides)
    stderr.print(
        f"Estimated [bold]${estimate.total_monthly_cost:,.2f}[/bold]/month "
        f"([bold]${estimate.total_annual_cost:,.2f}[/bold]/year) "
        f"for {len(estimate.line_items)} priced resource(s)."
    )

    # 3. Report
    fmt = output_format.lower()
    if fmt == "table":
        _print_cost_table(estimate, detailed, no_color)
    else:
        if fmt == "json":
            report_content = json_reporter.build_report(estimate, path)
        elif fmt == "html":
            report_content = html_reporter.build_report(estimate, path)
        else:
            report_content = markdown.build_report(estimate, path)
        _write(report_content, output, stderr)

    # 4. Budget gate
    if budget is not None and estimate.total_monthly_cost > budget:
        stderr.print(
            f"[red]Budget exceeded:[/red] ${estimate.total_monthly_cost:,.2f}/month "
            f"(--budget {budget:,.2f})."
        )
        sys.exit(1)

    sys.exit(0)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
