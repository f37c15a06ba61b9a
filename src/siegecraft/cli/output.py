"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars and formatted messages. Errors go to stderr.
"""

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

from siegecraft.exceptions import (
    MalformedTemplateError,
    SiegecraftError,
    TooSmallError,
)

console = Console()
err_console = Console(stderr=True)

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for batch processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Siegecraft[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_template_info(path: str, template_format: str, width: int, height: int, anchors: int) -> None:
    """Print template information.

    Args:
        path: Path to the template file
        template_format: "ASCII" or "CSV"
        width: Template width in cells
        height: Template height in cells
        anchors: Number of anchors found
    """
    line = Text("  ")
    line.append(path)
    line.append(f" ({template_format})")
    console.print(line)
    console.print(f"  {width}x{height} cells {SYM_DOT} {anchors} anchors")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_written(output_path: str, width: int, height: int) -> None:
    """Print where a single resized template was written."""
    line = Text(f"\n{SYM_OK} ", style="bold green")
    line.append(f"{width}x{height} ", style="bold")
    line.append(output_path)
    console.print(line)


def print_batch_summary(total_time_s: float, processed: int, errors: int, avg_time_ms: float | None) -> None:
    """Print batch summary.

    Args:
        total_time_s: Total processing time in seconds
        processed: Number of templates written
        errors: Number of templates that failed
        avg_time_ms: Average pipeline time per template in milliseconds
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")
    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} templates {SYM_DOT} [{error_style}]{errors} errors[/{error_style}]"
    )
    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg")


def describe_error(error: SiegecraftError) -> tuple[str, str | None]:
    """Split an error into its kind and a detail line.

    Returns:
        (message, details) where details names the offending position or
        dimension when the error carries one
    """
    kind = type(error).__name__.removesuffix("Error")
    if isinstance(error, MalformedTemplateError):
        if error.position is not None:
            row, col = error.position
            return f"{kind}: {error.reason}", f"at row {row}, column {col}"
        return f"{kind}: {error.reason}", None
    if isinstance(error, TooSmallError):
        return (
            f"{kind}: {error.axis} {error.requested} is too small",
            f"minimum {error.axis} is {error.minimum}",
        )
    return f"{kind}: {error}", None


def print_error(message: str, details: str | None = None) -> None:
    """Print error message to stderr.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    err_console.print(f"[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}", highlight=False)
    if details:
        err_console.print(f"  {escape(details)}", highlight=False)


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary."""
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} templates completed {SYM_DOT} {cancelled} tasks cancelled")
