"""CLI entry point for the commission planner."""

import logging
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .constants import DEFAULT_TOP_RESULTS
from .exceptions import PlannerError
from .exporters import get_exporter
from .parser import RequestParser, priority_summary
from .planner import CombinationScheduler, ConfigLoader, SortMode
from .planner.scheduler import ScheduleResult

app = typer.Typer(
    name="commission-planner",
    help="Rank every combination of course commissions by your priorities",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _print_messages(errors: list[str], warnings: list[str], verbose: bool) -> None:
    if errors:
        console.print(f"\n[bold red]Errors ({len(errors)}):[/bold red]")
        for error in errors:
            console.print(f"  [red]• {error}[/red]")

    if warnings and verbose:
        console.print(f"\n[bold yellow]Warnings ({len(warnings)}):[/bold yellow]")
        for warning in warnings:
            console.print(f"  [yellow]• {warning}[/yellow]")


@app.command()
def plan(
    request_file: Annotated[
        Path,
        typer.Argument(help="Request JSON file with selections and priorities"),
    ],
    catalog: Annotated[
        Optional[Path],
        typer.Option("-c", "--catalog", help="Catalog JSON file with subjects"),
    ] = None,
    config_dir: Annotated[
        Optional[Path],
        typer.Option("--config", help="Directory with planner.json and travel-times.json"),
    ] = None,
    sort: Annotated[
        Optional[SortMode],
        typer.Option("-s", "--sort", help="Sort strategy"),
    ] = None,
    transform: Annotated[
        Optional[str],
        typer.Option("-t", "--transform", help="Weight transform: identity or linear"),
    ] = None,
    prune: Annotated[
        Optional[bool],
        typer.Option("--prune/--no-prune", help="Cut branches violating exclusive priorities early"),
    ] = None,
    strict: Annotated[
        Optional[bool],
        typer.Option("--strict/--no-strict", help="Fail on selected codes missing from the catalog"),
    ] = None,
    top: Annotated[
        int,
        typer.Option("-n", "--top", help="Number of combinations to show"),
    ] = DEFAULT_TOP_RESULTS,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file or directory path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate ranked commission combinations."""
    _setup_logging(verbose)

    if not request_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {request_file}")
        raise typer.Exit(1)
    if catalog is not None and not catalog.exists():
        console.print(f"[bold red]Error:[/bold red] Catalog not found: {catalog}")
        raise typer.Exit(1)

    parser = RequestParser()

    with console.status("[bold green]Loading request..."):
        request = parser.parse_request(request_file)
        subjects = list(request.subjects)
        errors = list(request.errors)
        warnings = list(request.warnings)
        if catalog is not None:
            catalog_result = parser.parse_catalog(catalog)
            known = {s.code for s in subjects}
            subjects.extend(s for s in catalog_result.subjects if s.code not in known)
            errors.extend(catalog_result.errors)
            warnings.extend(catalog_result.warnings)

    _print_messages(errors, warnings, verbose)
    if errors:
        raise typer.Exit(1)

    if not subjects:
        console.print("[bold red]Error:[/bold red] No subjects available. Pass a catalog with --catalog.")
        raise typer.Exit(1)

    overrides = {}
    if transform is not None:
        overrides["transform"] = transform
    if prune is not None:
        overrides["prune"] = prune
    if strict is not None:
        overrides["strict"] = strict
    try:
        loader = ConfigLoader(config_dir)
        config = replace(loader.planner, **overrides)
    except (PlannerError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    sort_mode = sort or request.sort_mode or config.sort_mode
    scheduler = CombinationScheduler(config=config, travel_time=loader.buildings.travel_time)

    console.print(f"\n[bold]Planning for:[/bold] {request_file.name}")
    console.print(f"  Subjects in catalog: {len(subjects)}")
    console.print(f"  Selected subjects: {len(request.selections)}")
    console.print(f"  Priorities: {len(request.priorities)}")

    try:
        with console.status("[bold green]Combining commissions..."):
            result = scheduler.schedule(subjects, request.selections, request.priorities, sort_mode)
    except (PlannerError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _show_results(result, top, verbose)

    if output:
        exporter = get_exporter(format.value)

        if format == OutputFormat.csv:
            # CSV exports to directory
            output_path = output if output.is_dir() else output.parent / output.stem
        else:
            if not output.suffix:
                suffix = "xlsx" if format == OutputFormat.excel else format.value
                output = output.with_suffix(f".{suffix}")
            output_path = output

        with console.status(f"[bold green]Exporting to {format.value}..."):
            exporter.export(result, output_path)

        console.print(f"\n[bold green]✓[/bold green] Exported to: {output_path}")


def _show_results(result: ScheduleResult, top: int, verbose: bool) -> None:
    """Show ranked combinations in a table."""
    stats = result.statistics
    console.print("\n[bold]Results:[/bold]")
    console.print(f"  Combinations explored: {stats.leaves_visited} of {stats.search_space}")
    if stats.branches_pruned:
        console.print(f"  Branches pruned: {stats.branches_pruned}")
    console.print(f"  Combinations accepted: {result.total_combinations}")

    if result.unresolved_codes:
        console.print(
            f"  [yellow]Not in catalog: {', '.join(result.unresolved_codes)}[/yellow]"
        )

    if verbose and result.priorities:
        priority_table = Table(title="Priorities")
        priority_table.add_column("#", style="cyan")
        priority_table.add_column("Priority", style="magenta")
        priority_table.add_column("Satisfied by", style="green")
        for index, priority in enumerate(result.priorities):
            priority_table.add_row(
                str(index + 1),
                priority_summary(priority),
                str(stats.satisfied_by_priority.get(index, 0)),
            )
        console.print(priority_table)

    if not result.combinations:
        console.print("\n[bold yellow]No combination satisfies the exclusive priorities.[/bold yellow]")
        return

    table = Table(title=f"Top {min(top, result.total_combinations)} combinations")
    table.add_column("Rank", style="cyan")
    table.add_column("Weight", style="green")
    table.add_column("Commissions", style="blue", max_width=60)
    table.add_column("Priorities", style="magenta")
    table.add_column("Free days", style="yellow")

    for rank, combination in enumerate(result.combinations[:top], start=1):
        table.add_row(
            str(rank),
            f"{combination.weight:g}",
            ", ".join(f"{s.code} {s.commission_name}" for s in combination.subjects),
            ", ".join(str(i + 1) for i in combination.priorities) or "-",
            ", ".join(d.label[:3] for d in combination.get_free_days()) or "-",
        )

    if result.total_combinations > top:
        table.add_row("...", "...", "...", "...", "...")

    console.print(table)


@app.command()
def validate(
    input_file: Annotated[
        Path,
        typer.Argument(help="Catalog or request JSON file"),
    ],
) -> None:
    """Validate a catalog or request file."""
    if not input_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_file}")
        raise typer.Exit(1)

    parser = RequestParser()

    with console.status("[bold green]Validating file..."):
        validation = parser.validate(input_file)

    console.print(f"\n[bold]Validation Results for:[/bold] {input_file.name}")
    console.print(f"  Detected kind: {validation['kind']}")

    if validation["valid"]:
        console.print("[bold green]✓ File is valid[/bold green]")
    else:
        console.print("[bold red]✗ File has issues[/bold red]")

    if validation["kind"] == "catalog":
        console.print(f"\n  Subjects: {validation.get('subjects', 0)}")
        console.print(f"  Commissions: {validation.get('commissions', 0)}")
    elif validation["kind"] == "request":
        console.print(f"\n  Selections: {validation.get('selections', 0)}")
        console.print(f"  Priorities: {validation.get('priorities', 0)}")

    _print_messages(validation["errors"], validation["warnings"], verbose=True)

    if not validation["valid"]:
        raise typer.Exit(1)


@app.command()
def stats(
    catalog: Annotated[
        Path,
        typer.Argument(help="Catalog JSON file", exists=True, readable=True),
    ],
) -> None:
    """Show statistics for a catalog file."""
    parser = RequestParser()

    with console.status("[bold green]Analyzing catalog..."):
        result = parser.parse_catalog(catalog)
        statistics = parser.get_stats(result)

    console.print(f"\n[bold]Statistics for:[/bold] {catalog.name}")
    console.print(f"  Parse date: {statistics['parse_date']}")

    overview_table = Table(title="Overview", show_header=False)
    overview_table.add_column("Metric", style="cyan")
    overview_table.add_column("Value", style="green")

    overview_table.add_row("Total Subjects", str(statistics["total_subjects"]))
    overview_table.add_row("Total Commissions", str(statistics["total_commissions"]))
    overview_table.add_row("Unique Professors", str(statistics["professors_count"]))
    overview_table.add_row("Errors", str(statistics["errors_count"]))
    overview_table.add_row("Warnings", str(statistics["warnings_count"]))

    console.print(overview_table)

    if statistics["classes_by_day"]:
        day_table = Table(title="Classes by Day")
        day_table.add_column("Day", style="cyan")
        day_table.add_column("Count", style="green")

        for day, count in statistics["classes_by_day"].items():
            day_table.add_row(day.capitalize(), str(count))

        console.print(day_table)

    if statistics["buildings"]:
        building_table = Table(title="Classes by Building")
        building_table.add_column("Building", style="cyan")
        building_table.add_column("Count", style="green")

        for building, count in sorted(statistics["buildings"].items(), key=lambda x: -x[1]):
            building_table.add_row(building, str(count))

        console.print(building_table)


if __name__ == "__main__":
    app()
