"""Command-line interface for mkvcon."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import TextIO

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import MkvconConfig, create_sample_config, load_config
from .error_handling import (
    ConfigurationError,
    MediaError,
    MkvconError,
    check_dependencies,
    handle_error,
)
from .robot import (
    DiscInfo,
    Drive,
    aggregate,
    get_drives,
    get_messages,
    get_title_count,
    iter_records,
)
from .robot.attributes import attribute_label
from .services.makemkv import MakeMKVService

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(
    *,
    verbose: bool = False,
    config: MkvconConfig | None = None,
) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO

    # Clean up existing handlers first to prevent resource leaks
    cleanup_logging()

    # Configure RichHandler to show path only at DEBUG level
    show_path = level == logging.DEBUG
    handlers: list[logging.Handler] = [
        RichHandler(console=console, rich_tracebacks=True, show_path=show_path),
    ]

    if config and config.log_dir:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        log_file = config.log_dir / "mkvcon.log"
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            ),
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,  # Force reconfiguration of root logger
    )


def cleanup_logging() -> None:
    """Clean up logging handlers to prevent ResourceWarnings."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if isinstance(handler, logging.FileHandler):
            handler.close()
            root_logger.removeHandler(handler)


def _attributes_table(title: str, attributes: dict[int, str]) -> Table:
    table = Table(title=title)
    table.add_column("Id", justify="right")
    table.add_column("Attribute")
    table.add_column("Value")
    for attribute_id, value in sorted(attributes.items()):
        table.add_row(str(attribute_id), attribute_label(attribute_id), value)
    return table


def print_disc_info(disc_info: DiscInfo, title_count: int | None = None) -> None:
    """Render disc, title and stream attributes."""
    console.print(_attributes_table("Disc", disc_info.attributes))

    if title_count is not None:
        console.print(f"Title count reported by MakeMKV: {title_count}")

    if not disc_info.titles:
        console.print("[yellow]No titles found[/yellow]")

    summary = Table(title="Titles")
    summary.add_column("Title", justify="right")
    summary.add_column("Name")
    summary.add_column("Duration")
    summary.add_column("Chapters", justify="right")
    summary.add_column("Size")
    summary.add_column("Source")
    for title in disc_info.titles:
        summary.add_row(
            str(title.id),
            title.name or "",
            title.duration or "",
            title.chapter_count or "",
            title.disk_size or "",
            title.source_file_name or "",
        )
    if disc_info.titles:
        console.print(summary)

    for stream in disc_info.streams:
        label = f"Stream {stream.id}"
        if stream.title is not None:
            label = f"Title {stream.title} {label}"
        console.print(_attributes_table(label, stream.attributes))


def print_drives(drives: list[Drive]) -> None:
    """Render DRV records as a table."""
    if not drives:
        console.print("[yellow]No drives reported[/yellow]")
        return

    table = Table(title="Drives")
    table.add_column("Index", justify="right")
    table.add_column("Visible")
    table.add_column("Enabled")
    table.add_column("Flags", justify="right")
    table.add_column("Drive")
    table.add_column("Disc")
    for drive in drives:
        table.add_row(
            str(drive.index),
            "yes" if drive.visible else "no",
            "yes" if drive.enabled else "no",
            str(drive.flags),
            drive.drive_name,
            drive.disc_name,
        )
    console.print(table)


def _require_makemkv(config: MkvconConfig) -> None:
    missing_deps = check_dependencies(config.makemkv_con)
    if missing_deps:
        for dep in missing_deps:
            dep.display_to_user()
        sys.exit(1)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Configuration file path",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """mkvcon - inspect discs and robot output from MakeMKV's makemkvcon."""
    try:
        ctx.ensure_object(dict)
        loaded_config = load_config(config)
        ctx.obj["config"] = loaded_config
        ctx.obj["verbose"] = verbose

        setup_logging(verbose=verbose, config=loaded_config)
    except (OSError, ValueError, RuntimeError) as e:
        config_error = ConfigurationError(
            f"Failed to load configuration: {e}",
            config_path=config,
        )
        console.print(f"[red]Configuration Error:[/red] {config_error}")
        sys.exit(1)


@cli.command()
@click.argument("source", type=click.File("r"))
@click.option("--messages", "-m", is_flag=True, help="Also print MSG texts")
def parse(source: TextIO, messages: bool) -> None:
    """Parse saved makemkvcon robot output (use - for stdin)."""
    records = list(iter_records(source))
    if not records:
        MediaError(
            "No robot output records found",
            solution="Capture makemkvcon output with the -r flag",
        ).display_to_user()
        sys.exit(1)

    logger.debug(f"Parsed {len(records)} records")

    drives = get_drives(records)
    if drives:
        print_drives(drives)

    print_disc_info(aggregate(records), get_title_count(records))

    if messages:
        for text in get_messages(records):
            console.print(f"[dim]{text}[/dim]")


@cli.command()
@click.pass_context
def drives(ctx: click.Context) -> None:
    """List optical drives known to MakeMKV."""
    config: MkvconConfig = ctx.obj["config"]
    _require_makemkv(config)

    service = MakeMKVService(config)
    try:
        _, drive_list = asyncio.run(service.get_available_drives())
    except MkvconError as e:
        handle_error(e)
        sys.exit(1)

    print_drives(drive_list)


@cli.command()
@click.argument("disc_index", type=click.IntRange(min=0), required=False)
@click.pass_context
def info(ctx: click.Context, disc_index: int | None) -> None:
    """Scan a disc and show its titles."""
    config: MkvconConfig = ctx.obj["config"]
    _require_makemkv(config)

    service = MakeMKVService(config)
    try:
        result, disc_info = asyncio.run(service.get_structured_disc_info(disc_index))
        result.check()
    except MkvconError as e:
        handle_error(e)
        sys.exit(1)

    if disc_info is None:
        MediaError("MakeMKV returned no robot output").display_to_user()
        sys.exit(1)

    print_disc_info(disc_info, get_title_count(result.records or []))


@cli.group("config")
def config_cmd() -> None:
    """Configuration management commands."""


@config_cmd.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show current configuration."""
    config: MkvconConfig = ctx.obj["config"]

    table = Table()
    table.add_column("Setting")
    table.add_column("Value")

    table.add_row("makemkvcon", config.makemkv_con)
    table.add_row("Log Directory", str(config.log_dir) if config.log_dir else "Not configured")
    table.add_row("Info Timeout", f"{config.info_timeout}s")
    table.add_row("Rip Timeout", f"{config.rip_timeout}s")
    table.add_row("Default Disc", str(config.default_disc_index))
    table.add_row(
        "Default Cache",
        f"{config.default_cache} MB" if config.default_cache else "makemkvcon default",
    )

    console.print(table)


@config_cmd.command("init")
@click.option(
    "--path",
    "-p",
    type=click.Path(path_type=Path),
    default=Path.home() / ".config" / "mkvcon" / "config.toml",
    help="Path for the configuration file",
)
def config_init(path: Path) -> None:
    """Create a sample configuration file."""
    try:
        create_sample_config(path)
        console.print(f"[green]Created sample configuration at {path}[/green]")
    except OSError as e:
        console.print(f"[red]Error creating configuration: {e}[/red]")
        sys.exit(1)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
