"""
Leakscan CLI

Commands:
- scan: full static analysis of a Java source tree -> violations.json
- thresholds: read configured maximum counts from architecture tests

Examples:
    leakscan scan ../artemis/src/main/java -o violations.json
    leakscan scan --workers 8 --log-format json
    leakscan thresholds ../artemis/src/test/java/de/tum/cit/aet/artemis
"""

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from codegraph_leakscan.analysis.pipeline import ScanRun, run_scan
from codegraph_leakscan.analysis.report import ViolationCounts, write_report
from codegraph_leakscan.analysis.thresholds import read_thresholds
from codegraph_leakscan.config import LeakScanSettings
from codegraph_leakscan.exceptions import InvalidConfigurationError, SourceRootNotFoundError
from codegraph_leakscan.infra.logging import setup_logging

app = typer.Typer(
    name="leakscan",
    help="Find persistence entities leaking through REST endpoints and DTOs",
    add_completion=False,
)
console = Console()


def _load_settings(**overrides) -> LeakScanSettings:
    """Settings from env/.env with non-None CLI values on top."""
    try:
        return LeakScanSettings(**{key: value for key, value in overrides.items() if value is not None})
    except ValidationError as e:
        problems = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise InvalidConfigurationError("Invalid configuration", {"errors": problems}) from e


@app.command()
def scan(
    source_root: Optional[Path] = typer.Argument(None, help="Java source root (default: settings)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Report file"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Parser threads"),
    assume_local: Optional[bool] = typer.Option(
        None,
        "--assume-local/--no-assume-local",
        help="Resolve unknown type names into the current package",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ..."),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="console or json"),
):
    """
    Scan a Java source tree for entity leaks.

    Exit code is 1 if the source root does not exist, 2 on invalid
    configuration, 0 otherwise (however many files failed to parse).
    """
    try:
        settings = _load_settings(
            source_root=source_root,
            output_file=output,
            workers=workers,
            assume_local_namespace=assume_local,
            log_level=log_level,
            log_format=log_format,
        )
        setup_logging(settings.log_level, settings.log_format)
    except InvalidConfigurationError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(2)

    console.print("\n[cyan]=== DTO Violation Extractor (Static Analysis) ===[/cyan]")
    console.print(f"Source: {escape(str(settings.source_root))}")
    console.print(f"Output: {escape(str(settings.output_file))}\n")

    try:
        result = run_scan(settings)
    except SourceRootNotFoundError as e:
        console.print(f"[red]❌ ERROR: {escape(e.message)}[/red]")
        raise typer.Exit(1)

    _print_scan_summary(result)
    console.print(f"\n[green]✅ Output written to: {escape(str(settings.output_file))}[/green]\n")


@app.command()
def thresholds(
    test_root: Path = typer.Argument(..., help="Directory containing *EntityUsageArchitectureTest.java files"),
    output: Path = typer.Option(Path("thresholds.json"), "--output", "-o", help="Report file"),
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG, INFO, WARNING, ..."),
):
    """
    Read maximum violation counts from architecture tests (counts only, no details).
    """
    try:
        setup_logging(log_level, "console")
    except InvalidConfigurationError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(2)

    report = read_thresholds(test_root)
    write_report(report, output)

    table = _counts_table("Configured thresholds")
    for module, counts in report.modules.items():
        _add_counts_row(table, escape(module), counts)
    _add_counts_row(table, "[bold]total[/bold]", report.totals)
    console.print(table)
    console.print(f"\n[green]✅ Output written to: {escape(str(output))}[/green]\n")


def _print_scan_summary(result: ScanRun) -> None:
    stats = result.statistics
    report = result.report

    console.print("[cyan]=== RESULTS ===[/cyan]")
    console.print(f"Files analyzed: {stats.files_analyzed:,} / {stats.files_discovered:,}")
    if stats.files_skipped:
        reasons = ", ".join(f"{reason}={count}" for reason, count in sorted(stats.skipped_by_reason.items()))
        console.print(f"[yellow]Files skipped: {stats.files_skipped:,} ({reasons})[/yellow]")
    console.print(f"Entity classes found: {stats.entity_classes:,}")
    console.print(f"REST controllers found: {stats.controllers:,} ({stats.endpoints:,} endpoints)")
    console.print(f"DTO classes found: {stats.dto_classes:,}")
    console.print(f"Duration: {stats.duration_seconds:.1f}s\n")

    table = _counts_table("Violations by module")
    for module, module_report in report.modules.items():
        if module_report.counts.total:
            _add_counts_row(table, escape(module), module_report.counts)
    _add_counts_row(table, "[bold]total[/bold]", report.totals)
    console.print(table)

    console.print(f"\nTOTAL VIOLATIONS: {report.totals.total:,}")


def _counts_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Module", style="cyan")
    table.add_column("Entity returns", justify="right")
    table.add_column("Entity inputs", justify="right")
    table.add_column("DTO entity fields", justify="right")
    return table


def _add_counts_row(table: Table, label: str, counts: ViolationCounts) -> None:
    table.add_row(
        label,
        str(counts.entity_return_violations),
        str(counts.entity_input_violations),
        str(counts.dto_entity_field_violations),
    )


def main():
    app()


if __name__ == "__main__":
    main()
