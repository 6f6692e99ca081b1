"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from remote_replace.models.config import ReplaceConfig
from remote_replace.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "DirectoryNotFoundError": [
            "• Check the spelling of the source directory.",
            "• The directory must already exist; nothing is created locally.",
        ],
        "ConfigurationError": [
            "• Run `remote-replace --show-config` to inspect the settings.",
            "• Run `remote-replace init-config --force` to restore defaults.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(console: Console, config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration."""
    content = "\n".join(
        f"{key} = {value if value != '' else '[dim](not set)[/dim]'}"
        for key, value in config_data.items()
    )
    exists = ""
    if not config_path.is_file():
        exists = " [yellow](defaults, file not found)[/yellow]"
    console.print(
        Panel(
            content,
            title=f"Configuration ([dim]{config_path}[/dim]){exists}",
            border_style="cyan",
        )
    )


def print_start_banner(console: Console, config: ReplaceConfig) -> None:
    """Announces the source tree and the remote base before the run."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("Source:", Text(config.source_root))
    table.add_row("Remote:", Text(config.remote_base))
    console.print(
        Panel(
            table,
            title="[bold cyan]Replacing local files from remote[/bold cyan]",
            border_style="cyan",
            expand=False,
        )
    )


def print_file_status(console: Console, success: bool, size: int = 0) -> None:
    """Completes a 'Replacing X...' line with the outcome."""
    if success:
        console.print(f"[green]SUCCESS[/green] [dim]({format_size(size)})[/dim]")
    else:
        console.print("[red]FAILED[/red]")


def print_empty_notice(console: Console, source_root: str) -> None:
    """Reports that the source tree holds no files."""
    console.print(
        f"[yellow]No files found in '{source_root}'. Nothing to replace.[/yellow]"
    )


def print_completion_banner(console: Console, duration: float) -> None:
    """Announces the end of a run."""
    console.print(
        f"\n[bold green]✓ Replace run finished in {format_duration(duration)}."
        "[/bold green]"
    )
