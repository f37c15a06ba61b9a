"""CLI application entry point for siegecraft.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from siegecraft import __version__
from siegecraft.cli.output import (
    console,
    create_progress,
    describe_error,
    print_batch_summary,
    print_cancellation_summary,
    print_error,
    print_header,
    print_step,
    print_template_info,
    print_written,
)
from siegecraft.config import (
    GeometryConfig,
    LoggingConfig,
    OutputFormat,
    ProcessingConfig,
    SiegecraftSettings,
    TemplateConfig,
)
from siegecraft.core import GeometryEmitter, TemplateResizer, TopologyExtractor
from siegecraft.core.processor import TemplateProcessor
from siegecraft.exceptions import SiegecraftError
from siegecraft.io import TemplateReader, TemplateWriter, render_output
from siegecraft.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="siegecraft",
    help="Resize siege engine templates while preserving their structure.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Siegecraft[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Resize siege engine templates while preserving their structure."""


def _parse_format(output_format: str) -> OutputFormat:
    try:
        return OutputFormat(output_format.lower())
    except ValueError:
        print_error(
            f"Invalid format: {output_format}",
            details="Valid values: ascii, svg, json",
        )
        raise typer.Exit(code=1)


@app.command("resize")
def resize_command(
    template: Annotated[
        Path,
        typer.Argument(
            help="Path to an ASCII (.txt) or CSV (.csv) template",
            show_default=False,
        ),
    ],
    width: Annotated[
        int,
        typer.Option("--width", "-w", help="Target width in cells", min=1),
    ] = 10,
    height: Annotated[
        int,
        typer.Option("--height", "-H", help="Target height in cells", min=1),
    ] = 10,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (ascii|svg|json)"),
    ] = "ascii",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to this file instead of stdout"),
    ] = None,
    cell_size: Annotated[
        float,
        typer.Option("--cell-size", help="Cell size in SVG/JSON output units", min=0.1),
    ] = 10.0,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Reject templates whose rows differ in length"),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
) -> None:
    """Resize one template and print or save the result.

    Example:
        siegecraft resize tower.txt -w 20 -H 12
    """
    fmt = _parse_format(output_format)
    settings = SiegecraftSettings(
        template=TemplateConfig(allow_ragged_rows=not strict),
        geometry=GeometryConfig(cell_size=cell_size),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    try:
        reader = TemplateReader(
            template, allow_ragged=settings.template.allow_ragged_rows
        )
        source = TopologyExtractor().extract(reader.load())
        logger.info(
            "Template loaded",
            template=str(template),
            width=source.width,
            height=source.height,
            anchors=len(source.anchors),
        )

        resized = TemplateResizer().resize(source, width, height)
        outlines = GeometryEmitter(settings.geometry).emit(resized)
        text = render_output(resized, outlines, fmt, settings.geometry)
        logger.info("Template resized", width=width, height=height, outlines=len(outlines))

        if output is None:
            typer.echo(text, nl=False)
            return

        TemplateWriter(output).write(text)
        if not quiet:
            print_template_info(
                path=str(template),
                template_format=reader.format,
                width=source.width,
                height=source.height,
                anchors=len(source.anchors),
            )
            print_written(str(output), width, height)

    except SiegecraftError as e:
        logger.error("Resize failed", error=str(e), error_type=type(e).__name__)
        message, details = describe_error(e)
        print_error(message, details)
        raise typer.Exit(code=1)


@app.command("batch")
def batch_command(
    templates: Annotated[
        list[Path],
        typer.Argument(help="Template files to resize", show_default=False),
    ],
    width: Annotated[
        int,
        typer.Option("--width", "-w", help="Target width in cells", min=1),
    ] = 10,
    height: Annotated[
        int,
        typer.Option("--height", "-H", help="Target height in cells", min=1),
    ] = 10,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Output directory (default: next to each template)"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (ascii|svg|json)"),
    ] = "ascii",
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-j", help="Number of parallel workers (default: auto)", min=1),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Reject templates whose rows differ in length"),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
) -> None:
    """Resize many templates in parallel.

    Example:
        siegecraft batch towers/*.txt -w 24 -H 16 -o out/
    """
    fmt = _parse_format(output_format)

    missing = [str(p) for p in templates if not p.is_file()]
    if missing:
        print_error(
            f"Template not found: {missing[0]}",
            details=f"{len(missing)} of {len(templates)} paths do not exist",
        )
        raise typer.Exit(code=1)

    settings = SiegecraftSettings(
        template=TemplateConfig(allow_ragged_rows=not strict),
        processing=ProcessingConfig(max_workers=workers, output_format=fmt),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )

    if not quiet:
        print_header(__version__)
        print_step(f"Resizing {len(templates)} templates to {width}x{height}")

    processor = TemplateProcessor(settings, quiet=quiet)
    stats = None

    try:
        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task("Resizing", total=len(templates))

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                stats = processor.process(
                    template_paths=templates,
                    width=width,
                    height=height,
                    output_dir=output_dir,
                    max_workers=workers,
                    progress_callback=update_progress,
                )
        else:
            stats = processor.process(
                template_paths=templates,
                width=width,
                height=height,
                output_dir=output_dir,
                max_workers=workers,
            )
    except KeyboardInterrupt:
        stats = processor.processing_logger.stats
        if not quiet:
            print_cancellation_summary(stats.processed_count, stats.cancelled_count)
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

    for name, error in stats.errors:
        print_error(f"{name}: {error}")

    if not quiet:
        print_batch_summary(
            total_time_s=stats.duration_seconds,
            processed=stats.processed_count,
            errors=stats.error_count,
            avg_time_ms=stats.avg_template_time_ms,
        )

    if stats.error_count:
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
