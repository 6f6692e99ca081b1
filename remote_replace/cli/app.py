"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from remote_replace import __version__
from remote_replace.core.replacer import Replacer
from remote_replace.exceptions import RemoteReplaceError
from remote_replace.storage.config_manager import ConfigManager
from remote_replace.utils.structured_logger import create_replace_logger

from .formatters import (
    format_error_with_suggestions,
    print_completion_banner,
    print_config,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("remote_replace")

app = typer.Typer(
    name="remote-replace",
    help=(
        "Overwrite every file of a local directory tree with the file at the same"
        " relative path under a remote base URL."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "remote-replace"


CONFIG_FILE = get_config_dir() / "config.ini"


def _config_manager(ctx: typer.Context) -> ConfigManager:
    options = ctx.obj or {}
    config_file = options.get("config_file")
    if config_file is None:
        return ConfigManager(CONFIG_FILE)
    return ConfigManager(config_file, required=True)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    config_file: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        help="Use this configuration file instead of the default location.",
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """Remote Replace CLI"""
    if version:
        console.print(f"[bold]remote-replace[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("remote_replace").setLevel(log_level)

    ctx.obj = {"config_file": config_file}

    if show_config:
        config_manager = _config_manager(ctx)
        try:
            settings = config_manager.read_settings()
        except RemoteReplaceError as e:
            console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=1) from e
        print_config(console, config_manager.config_file_path, settings)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command(name="init-config")
def init_config(
    ctx: typer.Context,
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing file without asking."
    ),
):
    """Write a configuration file filled with default values."""
    config_manager = _config_manager(ctx)
    config_path = config_manager.config_file_path
    if (
        config_path.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    try:
        config_manager.save_new_config()
    except RemoteReplaceError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    console.print(f"[bold green]✓ Configuration saved to '{config_path}'[/bold green]")


@app.command(name="replace")
def replace_command(
    ctx: typer.Context,
    source_dir: str = typer.Argument(
        ..., help="Local directory whose files will be overwritten."
    ),
    remote_base: str = typer.Argument(
        ..., help="Base URL the relative paths are fetched from."
    ),
    connect_timeout: float | None = typer.Option(
        None, "--connect-timeout", help="Seconds to wait for a connection."
    ),
    read_timeout: float | None = typer.Option(
        None, "--read-timeout", help="Seconds to wait between reads of a response."
    ),
    log_dir: Path | None = typer.Option(  # noqa: B008
        None, "--log-dir", help="Write a JSON lines event log into this directory."
    ),
):
    """Replace every file under SOURCE_DIR with its counterpart under REMOTE_BASE."""
    cli_options = {
        key: value
        for key, value in {
            "source_root": source_dir,
            "remote_base": remote_base,
            "connect_timeout": connect_timeout,
            "read_timeout": read_timeout,
            "log_dir": str(log_dir) if log_dir else None,
        }.items()
        if value is not None
    }

    try:
        config = _config_manager(ctx).load_config(cli_options)
        log_dir_path = Path(config.log_dir) if config.log_dir else None
        events = create_replace_logger(log_dir_path)
    except (RemoteReplaceError, OSError) as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    start_time = time.monotonic()

    async def _replace_async() -> int:
        replacer = Replacer(config, console=console, events=events)
        return await replacer.run()

    try:
        files_found = asyncio.run(_replace_async())
    except RemoteReplaceError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    finally:
        events.logger.close()

    if files_found:
        print_completion_banner(console, time.monotonic() - start_time)
