#!/usr/bin/env python3
"""
install-ops - Resource operations for installers

Main entry point for the install-ops CLI application.
"""

import hashlib
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from core import AuditLogger, OperationError, Settings
from core.notifications import Notification, NotificationLevel
from modules.resource_ops import ResourceOperator, LocalRawOperations, Command


console = Console()


class ConsoleNotifier:
    """Notification sink that prints events and forwards them to the audit log."""

    def __init__(self, audit: Optional[AuditLogger] = None, verbose: bool = False):
        self.audit = audit
        self.verbose = verbose

    def call(self, event: Notification) -> None:
        if self.audit is not None:
            self.audit.call(event)

        if event.level == NotificationLevel.WARN:
            console.print(f"[yellow]warning:[/yellow] {event.describe()}")
        elif event.level == NotificationLevel.INFO or self.verbose:
            console.print(f"[dim]{event.describe()}[/dim]")


def get_settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


def get_operator(ctx: click.Context) -> ResourceOperator:
    """Get a resource operator wired to the configured audit log."""
    settings = get_settings(ctx)
    notifier = ConsoleNotifier(
        audit=AuditLogger(log_path=settings.audit.log_path),
        verbose=ctx.obj["verbose"]
    )
    return ResourceOperator(notifier, raw=LocalRawOperations(settings.download))


def fail(error: Exception) -> None:
    console.print(f"[red]error:[/red] {error}")
    sys.exit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="install-ops")
@click.option("--config", "config_path", default="config.yaml", show_default=True,
              help="YAML settings file.")
@click.option("-v", "--verbose", is_flag=True, help="Print every notification.")
@click.pass_context
def cli(ctx, config_path: str, verbose: bool):
    """
    install-ops - named, audited file, process and download operations.
    """
    ctx.ensure_object(dict)
    ctx.obj["settings"] = Settings.load(config_path)
    ctx.obj["verbose"] = verbose


@cli.command()
@click.pass_context
def status(ctx):
    """Show the active settings."""
    settings = get_settings(ctx)
    op = get_operator(ctx)

    table = Table(title="install-ops settings")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("platform", op.platform.name)
    table.add_row("download.chunk_size", str(settings.download.chunk_size))
    table.add_row("download.timeout", str(settings.download.timeout))
    table.add_row("download.user_agent", settings.download.user_agent)
    table.add_row("audit.log_path", settings.audit.log_path)
    console.print(table)


@cli.command()
@click.argument("url")
@click.argument("dest", type=click.Path(path_type=Path))
@click.option("--sha256", "expected", default=None, help="Expected SHA-256 hex digest.")
@click.pass_context
def download(ctx, url: str, dest: Path, expected: Optional[str]):
    """Download URL to DEST, optionally verifying its SHA-256."""
    op = get_operator(ctx)
    hasher = hashlib.sha256()

    try:
        op.download_file(url, dest, hasher)
    except OperationError as e:
        fail(e)

    digest = hasher.hexdigest()
    if expected and digest.lower() != expected.lower():
        console.print(f"[red]checksum mismatch:[/red] expected {expected}, got {digest}")
        sys.exit(1)

    console.print(f"[green]Downloaded[/green] {dest} (sha256 {digest})")


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--name", default="target", show_default=True, help="What the directory is for.")
@click.pass_context
def mkdir(ctx, path: Path, name: str):
    """Create a directory if it is missing."""
    try:
        created = get_operator(ctx).ensure_dir_exists(name, path)
    except OperationError as e:
        fail(e)

    if created:
        console.print(f"[green]Created[/green] {path}")
    else:
        console.print(f"[dim]Already exists:[/dim] {path}")


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--name", default="target", show_default=True, help="What the directory is for.")
@click.pass_context
def rmdir(ctx, path: Path, name: str):
    """Recursively remove a directory."""
    try:
        get_operator(ctx).remove_dir(name, path)
    except OperationError as e:
        fail(e)

    console.print(f"[green]Removed[/green] {path}")


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("args", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
def run(ctx, args):
    """Run a command and fail unless it exits with status 0."""
    try:
        get_operator(ctx).cmd_status(args[0], Command(args=list(args)))
    except OperationError as e:
        fail(e)


@cli.command("data-path")
@click.pass_context
def data_path(ctx):
    """Print the per-user data directory."""
    try:
        path = get_operator(ctx).get_local_data_path()
    except OperationError as e:
        fail(e)

    click.echo(str(path))


@cli.command()
@click.option("--limit", default=20, show_default=True)
@click.pass_context
def audit(ctx, limit: int):
    """View the audit log."""
    logger = AuditLogger(log_path=get_settings(ctx).audit.log_path)
    entries = logger.get_recent(limit=limit)

    if not entries:
        console.print("[dim]No audit entries found.[/dim]")
        return

    table = Table(title="Recent Audit Log")
    table.add_column("Time", style="dim")
    table.add_column("Event")
    table.add_column("Level")

    for entry in entries:
        time_str = entry.timestamp.split("T")[1].split(".")[0] if "T" in entry.timestamp else entry.timestamp

        level_str = entry.level
        if entry.level == NotificationLevel.WARN.value:
            level_str = f"[yellow]{entry.level}[/yellow]"

        table.add_row(
            time_str,
            entry.description[:60] + "..." if len(entry.description) > 60 else entry.description,
            level_str
        )

    console.print(table)


if __name__ == "__main__":
    cli()
