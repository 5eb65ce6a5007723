"""CLI interface for Esploro File Kit."""

import asyncio
import click
from pathlib import Path
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table
import sys

from efk.backend.vocabulary import load_file_types
from efk.config.manager import ConfigManager
from efk.errors import EfkError, MappingError
from efk.export.exporter import ResultExporter
from efk.mapping.mapper import ColumnMapper, load_mapping_config, dump_mapping_config
from efk.mapping.models import FieldMapping, TargetField
from efk.processor.models import ProcessingResult
from efk.table.models import CsvTable
from efk.table.reader import read_csv_file, validate_structure

console = Console()
stderr_console = Console(file=sys.stderr)

FIELD_CHOICES = [field.value for field in TargetField]


class RichProgressSink:
    """Shows batch progress on a rich progress bar."""

    def __init__(self, progress: Progress) -> None:
        self.progress = progress
        self.task = None
        self.total = 0

    def advance(self, current: int, total: int, record_id: str) -> None:
        description = f"[blue]Processing asset {record_id or '(no MMS ID)'}...[/blue]"
        if self.task is None:
            self.total = total
            self.task = self.progress.add_task(description, total=total)
        # the bar counts finished records
        self.progress.update(self.task, completed=current - 1, description=description)

    def close(self) -> None:
        if self.task is not None:
            self.progress.update(self.task, completed=self.total)


def _load_table(csv_path: Path, config_manager: ConfigManager) -> CsvTable:
    if csv_path.suffix.lower() != ".csv":
        raise EfkError(f"Please select a CSV file (got {csv_path.name})")

    table = read_csv_file(csv_path, max_file_size=config_manager.get_max_file_size())
    structure = validate_structure(table)
    if not structure.valid:
        raise EfkError("; ".join(structure.errors))

    console.print(f"[green]✓ Loaded {table.row_count} records from {table.file_name}[/green]")
    return table


def _print_mappings(mappings: list[FieldMapping]) -> None:
    table = Table(title="Column Mapping")
    table.add_column("CSV Column", style="cyan")
    table.add_column("Sample Value")
    table.add_column("Field", style="green")
    table.add_column("Confidence", justify="right")

    for mapping in mappings:
        if mapping.confidence >= 0.8:
            style = "green"
        elif mapping.confidence >= 0.5:
            style = "yellow"
        else:
            style = "red"
        table.add_row(
            mapping.source_header,
            mapping.sample_value,
            mapping.target_field.label,
            f"[{style}]{mapping.confidence:.0%}[/{style}]",
        )
    console.print(table)


def _edit_mappings(mappings: list[FieldMapping]) -> list[FieldMapping]:
    mapper = ColumnMapper()
    edited = []
    for mapping in mappings:
        target = click.prompt(
            f"Field for column '{mapping.source_header}'",
            type=click.Choice(FIELD_CHOICES),
            default=mapping.target_field.value,
        )
        if target != mapping.target_field.value:
            mapping = mapper.reassign(mapping, target)
        edited.append(mapping)
    return edited


def _print_summary(result: ProcessingResult) -> None:
    table = Table(title="Processing Summary")
    table.add_column("Total", style="cyan")
    table.add_column("Successful", style="green")
    table.add_column("Failed", style="red")
    table.add_column("Time")
    table.add_row(
        str(result.total_processed),
        str(result.success_count),
        str(result.failure_count),
        f"{result.processing_time:.1f}s",
    )
    console.print(Panel(
        table,
        title="Success" if result.failure_count == 0 else "Completed with errors",
        border_style="green" if result.failure_count == 0 else "yellow",
    ))

    if result.total_processed:
        details = Table(title="Asset Results")
        details.add_column("Status")
        details.add_column("MMS ID", style="cyan")
        details.add_column("Details", overflow="fold")
        for record in result.combined():
            if record.succeeded:
                note = record.viewer_url or ("File attached" if (record.remote_url or "").strip() else "Validated")
                details.add_row("[green]✓[/green]", record.record_id, note)
            else:
                details.add_row("[red]✗[/red]", record.record_id, f"[red]{record.error_message or ''}[/red]")
        console.print(details)


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """Esploro File Kit - Attach remote files to Esploro assets from a CSV file"""
    pass


@cli.command()
@click.argument('csv_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--config', '-c',
    'config_path',
    type=click.Path(exists=True, path_type=Path),
    help='Path to project config'
)
@click.option(
    '--output', '-o',
    'output_path',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Write the suggested mapping to this YAML file'
)
def suggest(csv_path: Path, config_path: Path | None, output_path: Path | None) -> None:
    """Suggest a column mapping for a CSV file."""
    try:
        config_manager = ConfigManager(str(config_path) if config_path else None)
        table = _load_table(csv_path, config_manager)

        mapper = ColumnMapper()
        mappings = mapper.suggest(table.headers, table.sample(config_manager.get_sample_rows()))
        _print_mappings(mappings)

        validation = mapper.validate(mappings)
        for error in validation.errors:
            console.print(f"[red]✗ {error}[/red]")
        for warning in validation.warnings:
            console.print(f"[yellow]! {warning}[/yellow]")

        if output_path:
            dump_mapping_config(mappings, output_path, name=csv_path.stem)
            console.print(f"[green]✓ Mapping written to {output_path}[/green]")
    except Exception as e:
        stderr_console.print(f"[red]✗ Mapping suggestion failed: {e}[/red]")
        raise click.Abort()


@cli.command()
@click.argument('csv_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--mapping', '-m',
    'mapping_path',
    type=click.Path(exists=True, path_type=Path),
    help='Path to mapping config (suggested from the CSV when omitted)'
)
@click.option(
    '--config', '-c',
    'config_path',
    type=click.Path(exists=True, path_type=Path),
    help='Path to project config'
)
@click.option(
    '--output', '-o',
    'output_path',
    type=click.Path(path_type=Path),
    default=Path('.'),
    show_default=True,
    help='File or directory for the CSV of successful MMS IDs'
)
@click.option('--delay', type=click.FloatRange(min=0), help='Seconds to wait between assets')
@click.option('--yes', '-y', is_flag=True, help='Accept the mapping without asking')
def process(
    csv_path: Path,
    mapping_path: Path | None,
    config_path: Path | None,
    output_path: Path,
    delay: float | None,
    yes: bool,
) -> None:
    """Validate assets and attach the remote files listed in a CSV file."""
    console.print("[blue]Starting asset file processing...[/blue]")

    try:
        config_manager = ConfigManager(str(config_path) if config_path else None)
        table = _load_table(csv_path, config_manager)

        mapper = ColumnMapper()
        if mapping_path:
            console.print(f"[blue] Using mapping config from {mapping_path}[/blue]")
            mappings = mapper.from_config(table, load_mapping_config(mapping_path))
        else:
            mappings = mapper.suggest(table.headers, table.sample(config_manager.get_sample_rows()))
        _print_mappings(mappings)

        if not yes and not click.confirm("Use this mapping?", default=True):
            mappings = _edit_mappings(mappings)
            _print_mappings(mappings)

        validation = mapper.ensure_valid(mappings)
        for warning in validation.warnings:
            console.print(f"[yellow]! {warning}[/yellow]")

        records = mapper.apply(table.rows, mappings)
        if not yes and not click.confirm(f"Process {len(records)} assets?", default=True):
            raise click.Abort()

        result = asyncio.run(_run_batch(config_manager, records, delay))
        _print_summary(result)

        if result.successful:
            exporter = ResultExporter()
            with exporter.to_download_handle(exporter.to_csv(result.successful)) as handle:
                saved = handle.save(output_path)
            console.print(f"[green]✓ MMS IDs of updated assets saved to {saved}[/green]")
        else:
            console.print("[yellow]No assets were updated; no MMS ID file written[/yellow]")

        console.print("[green]✓ Processing completed![/green]")
    except click.Abort:
        raise
    except MappingError as e:
        for error in e.errors:
            stderr_console.print(f"[red]✗ {error}[/red]")
        stderr_console.print("[red]✗ Processing failed: invalid column mapping[/red]")
        raise click.Abort()
    except Exception as e:
        stderr_console.print(f"[red]✗ Processing failed: {e}[/red]")
        raise click.Abort()


async def _run_batch(config_manager: ConfigManager, records, delay: float | None) -> ProcessingResult:
    async with config_manager.get_gateway() as gateway:
        processor = config_manager.get_processor(gateway, pacing_delay=delay)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True
        ) as progress:
            return await processor.run(records, RichProgressSink(progress))


@cli.command(name="file-types")
@click.option(
    '--config', '-c',
    'config_path',
    type=click.Path(exists=True, path_type=Path),
    help='Path to project config'
)
def file_types(config_path: Path | None) -> None:
    """List the file types known to the repository."""
    try:
        config_manager = ConfigManager(str(config_path) if config_path else None)

        async def _load():
            async with config_manager.get_gateway() as gateway:
                return await load_file_types(gateway)

        table = Table(title="File Types")
        table.add_column("Code", style="cyan")
        table.add_column("Description")
        for file_type in asyncio.run(_load()):
            table.add_row(file_type.code, file_type.description)
        console.print(table)
    except Exception as e:
        stderr_console.print(f"[red]✗ Loading file types failed: {e}[/red]")
        raise click.Abort()


if __name__ == "__main__":
    cli()
