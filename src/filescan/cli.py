"""CLI interface for Filescan."""

from __future__ import annotations

import json
import logging
import sys

import click

from filescan.core.file_ops import copy_files, delete_files
from filescan.core.scanner import scan_directory
from filescan.core.walker import ScanOptions
from filescan.errors import FileScanError
from filescan.models.entry import Category
from filescan.models.operation_result import FileOperationResult, OperationType
from filescan.models.scan_result import ScanProgress, ScanResult
from filescan.settings import Settings, parse_value
from filescan.utils import bytes_to_human, format_elapsed

_CATEGORY_LABELS = {
    Category.DOCUMENT: "Documents",
    Category.IMAGE: "Images",
    Category.VIDEO: "Videos",
    Category.AUDIO: "Audio",
    Category.OTHER: "Other",
    Category.FOLDER: "Folders",
}


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _fail(message: str) -> None:
    click.echo(f"{click.style('Error:', fg='red', bold=True)} {message}", err=True)
    sys.exit(1)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """Filescan — scan directory trees and manage the files found."""
    _setup_logging(verbose)


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path")
@click.option("--max-depth", type=click.IntRange(min=0), default=None, help="Deepest level to report (root is 0)")
@click.option("--follow-symlinks/--no-follow-symlinks", default=None, help="Descend into symlinked folders")
@click.option("--list", "list_entries", is_flag=True, help="List every entry found")
@click.option(
    "--category",
    "-c",
    type=click.Choice([c.value for c in Category]),
    default=None,
    help="Only list entries of this category",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scan(
    path: str,
    max_depth: int | None,
    follow_symlinks: bool | None,
    list_entries: bool,
    category: str | None,
    as_json: bool,
) -> None:
    """Scan a directory and summarize its contents."""
    defaults = ScanOptions.from_settings(Settings.instance())
    options = ScanOptions(
        max_depth=max_depth if max_depth is not None else defaults.max_depth,
        follow_symlinks=follow_symlinks if follow_symlinks is not None else defaults.follow_symlinks,
    )

    def on_progress(progress: ScanProgress) -> None:
        if as_json:
            return
        click.echo(f"\r  {progress.scanned_count:>10,} scanned", err=True, nl=False)

    if not as_json:
        click.echo(f"\n{click.style('🔍', bold=True)} Scanning {path}...\n")

    try:
        result = scan_directory(path, options, on_progress)
    except FileScanError as e:
        if not as_json:
            click.echo(err=True)
        _fail(str(e))
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(err=True)
    _print_scan_summary(result)

    if list_entries:
        wanted = Category(category) if category else None
        click.echo()
        for entry in result.entries:
            if wanted is not None and entry.category != wanted:
                continue
            size = "" if entry.is_directory else bytes_to_human(entry.size)
            name = click.style(entry.path + "/", fg="blue") if entry.is_directory else entry.path
            click.echo(f"  {size:>10s}  {name}")
    click.echo()


def _print_scan_summary(result: ScanResult) -> None:
    stats = result.stats
    for cat, count in stats.category_counts().items():
        click.echo(f"  {_CATEGORY_LABELS[cat]:12s} {count:>10,}")

    click.echo(
        f"\n  {stats.total_files:,} files, {stats.total_folders:,} folders — "
        f"{click.style(bytes_to_human(stats.total_size), fg='green', bold=True)} "
        f"in {format_elapsed(result.duration_ms)}"
    )

    if result.failed_entries:
        click.echo(f"\n  {click.style('!', fg='yellow')} {len(result.failed_entries)} item(s) could not be read:")
        for failure in result.failed_entries:
            click.echo(f"    {click.style('✗', fg='red')} {failure.path} — {failure.reason.value}")


# ── delete ───────────────────────────────────────────────────────────────

@main.command()
@click.argument("paths", nargs=-1, required=True)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def delete(paths: tuple[str, ...], yes: bool, as_json: bool) -> None:
    """Move files and folders to the trash."""
    if not yes and not as_json:
        if not click.confirm(f"Move {len(paths)} item(s) to the trash?", default=False):
            click.echo("Aborted.")
            return

    result = delete_files(list(paths))
    _print_operation(result, as_json)


# ── copy ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("sources", nargs=-1, required=True)
@click.option("--to", "target", required=True, help="Folder to copy into")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def copy(sources: tuple[str, ...], target: str, as_json: bool) -> None:
    """Copy files into a folder without overwriting anything."""
    try:
        result = copy_files(list(sources), target)
    except FileScanError as e:
        _fail(str(e))
        return
    _print_operation(result, as_json)


def _print_operation(result: FileOperationResult, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    verb = "Trashed" if result.operation == OperationType.DELETE else "Copied"
    click.echo(
        f"\n  {click.style('✓', fg='green')} {verb} {result.success_count:,} item(s) "
        f"in {format_elapsed(result.duration_ms)}"
    )
    if result.failed_files:
        click.echo(f"  {click.style('!', fg='yellow')} {result.failed_count:,} failed:")
        for failure in result.failed_files:
            click.echo(
                f"    {click.style('✗', fg='red')} {failure.path} — "
                f"{failure.reason.value}: {failure.error_message}"
            )
    click.echo()


# ── config ───────────────────────────────────────────────────────────────

@main.group()
def config() -> None:
    """Show or change scan defaults."""


@config.command("show")
def config_show() -> None:
    """Print the stored settings as JSON."""
    settings = Settings.instance()
    click.echo(f"# {settings.path}")
    click.echo(json.dumps(settings.as_dict(), indent=2))


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Store a setting, e.g. ``scan.max_depth 3``."""
    try:
        parsed = parse_value(key, value)
    except ValueError as e:
        _fail(str(e))
        return
    Settings.instance().set(key, parsed)
    click.echo(f"{key} = {json.dumps(parsed)}")


# ── service ──────────────────────────────────────────────────────────────

@main.group()
def service() -> None:
    """D-Bus service management."""


@service.command("start")
def service_start() -> None:
    """Start the D-Bus service in foreground."""
    from filescan.dbus_service import start_service

    click.echo("Starting Filescan D-Bus service...")
    start_service()
