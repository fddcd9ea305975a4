"""
tabextract CLI

Command-line interface for extracting tables from text and CSV documents
with user-defined regex patterns, and exporting them to CSV, XLSX or RTF.
"""

import asyncio
import json
import sys
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import load_config, max_file_bytes
from .exceptions import ExtractionError, NoDataExtractedError
from .exporter import EXPORTERS, export_rows
from .extractor import Extractor
from .logging_config import setup_logging
from .patterns import compile_patterns
from .renderer import build_table

console = Console()

PATTERN_EXAMPLE = (
    "name: ([A-Z][a-z]+ [A-Z][a-z]+)\n"
    "email: ([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\\.[a-zA-Z]{2,})\n"
    "phone: (\\d{3}-\\d{3}-\\d{4})"
)


def _read_patterns(patterns, patterns_file):
    if patterns and patterns_file:
        raise click.UsageError("Use either --patterns or --patterns-file, not both")
    if patterns_file:
        return Path(patterns_file).read_text(encoding="utf-8")
    return patterns or ""


@click.group()
@click.version_option(version=__version__)
@click.option('--config', '-c', type=click.Path(exists=True), help='Configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--log-format', type=click.Choice(['console', 'json']), help='Log output format')
@click.pass_context
def cli(ctx, config, verbose, log_format):
    """
    tabextract CLI - turn documents into structured tables.

    CSV files are split on commas using the first line as the header. Any
    other text file is matched line by line against named regex patterns,
    one `name: regex` per line.
    """
    settings = load_config(config)
    setup_logging(
        verbose,
        log_format or settings["logging"].get("format", "console"),
        settings["logging"].get("level", "INFO"),
    )
    ctx.obj = settings


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--patterns', '-p', help='Pattern specification, one "name: regex" per line')
@click.option('--patterns-file', '-P', type=click.Path(exists=True, dir_okay=False),
              help='Read the pattern specification from a file')
@click.option('--format', '-f', 'formats', multiple=True, type=click.Choice(sorted(EXPORTERS)),
              help='Export format (repeatable)')
@click.option('--output-dir', '-o', type=click.Path(file_okay=False), help='Directory for exports')
@click.option('--basename', '-b', help='Export file name without extension')
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON')
@click.pass_obj
def extract(settings, file, patterns, patterns_file, formats, output_dir, basename, as_json):
    """
    Extract a table from FILE.

    Example:
        tabextract extract contacts.txt -p "email: (\\S+@\\S+)" -f csv -f xlsx
    """
    spec = _read_patterns(patterns, patterns_file)
    logger = structlog.get_logger()

    extractor = Extractor(
        max_bytes=max_file_bytes(settings),
        encoding=settings["extraction"].get("encoding", "utf-8"),
    )

    try:
        result = asyncio.run(extractor.extract_file(file, spec))
        if not result.rows:
            raise NoDataExtractedError()
    except ExtractionError as e:
        logger.error("extraction_failed", source=file, error=str(e))
        console.print(f"[bold red]✗ Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        console.print(build_table(result.rows))
        console.print(
            f"\n[bold]Total:[/bold] {result.row_count} records "
            f"({result.method}, {result.duration_ms} ms)"
        )
        for warning in result.warnings:
            console.print(f"[yellow]! {escape(warning)}[/yellow]")

    export_formats = formats or settings["export"].get("formats") or []
    target_dir = output_dir or settings["export"].get("output_dir", ".")
    target_name = basename or settings["export"].get("basename", "extracted_data")

    for fmt in export_formats:
        try:
            path = export_rows(result.rows, fmt, output_dir=target_dir, basename=target_name)
        except (OSError, ValueError) as e:
            logger.error("export_failed", format=fmt, error=str(e))
            console.print(f"[bold red]✗ Export to {fmt} failed:[/bold red] {escape(str(e))}")
            sys.exit(1)
        if not as_json:
            console.print(f"✓ Exported {fmt.upper()} to: {path}")


@cli.command()
@click.option('--patterns', '-p', help='Pattern specification, one "name: regex" per line')
@click.option('--patterns-file', '-P', type=click.Path(exists=True, dir_okay=False),
              help='Read the pattern specification from a file')
@click.option('--json', 'as_json', is_flag=True, help='Print the compiled patterns as JSON')
def patterns(patterns, patterns_file, as_json):
    """
    Check a pattern specification without extracting anything.

    Example:
        tabextract patterns -p "price: \\$(\\d+\\.\\d{2})"
    """
    spec = _read_patterns(patterns, patterns_file)
    pattern_set = compile_patterns(spec)

    if as_json:
        click.echo(json.dumps(pattern_set.to_dict(), indent=2))
        return

    table = Table(title="Compiled Patterns", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Regex", style="yellow")
    table.add_column("Groups", style="magenta")

    for field_name, regex in pattern_set.patterns.items():
        table.add_row(escape(field_name), escape(regex.pattern), str(regex.groups))

    console.print(table)

    for warning in pattern_set.warnings:
        console.print(f"[yellow]! {escape(warning)}[/yellow]")

    if pattern_set.used_default:
        console.print(Panel.fit(
            "[bold]No valid patterns found; every non-blank line is captured as `text`.[/bold]\n\n"
            f"Example specification:\n{escape(PATTERN_EXAMPLE)}",
            border_style="yellow"
        ))


def main():
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
