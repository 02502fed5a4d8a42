"""CLI command implementations"""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsync.config import Settings, load_config, require_credentials
from mdsync.core.models import SyncChange, SyncStats
from mdsync.core.sync import SyncEngine
from mdsync.remote.client import NotionSource


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _configure_logging(verbosity: int) -> None:
    """Send mdsync log records to stderr; the root logger is left unchanged.

    -1 is quiet (warnings only), 0 shows per-page progress, 1+ is debug.
    """
    level = {-1: logging.WARNING, 0: logging.INFO}.get(verbosity, logging.DEBUG)
    app_logger = logging.getLogger("mdsync")
    app_logger.setLevel(level)
    app_logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    app_logger.addHandler(handler)


def _echo_sync(stats: SyncStats, changes: list[SyncChange]) -> None:
    """Print per-file status, any diffs, and a summary line."""
    for change in changes:
        if change.status == 'unchanged':
            continue
        typer.echo(f"  {change.status}: {change.filename}")
        if change.diff:
            typer.echo("".join(change.diff).rstrip("\n"))
    typer.echo(
        f"Sync complete - "
        f"{stats.created} created, "
        f"{stats.updated} updated, "
        f"{stats.unchanged} unchanged, "
        f"{stats.removed} removed, "
        f"{stats.errors} errors"
    )


def sync_cmd(
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory for post files")] = None,
    layout: Annotated[Optional[str], typer.Option("--layout", help="Front matter layout value")] = None,
    require_date: Annotated[Optional[bool], typer.Option("--require-date", help="Fail pages with no publish date")] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Report changes without writing or deleting")] = False,
    diff: Annotated[bool, typer.Option("--diff", help="Show unified diffs for updated posts")] = False,
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="Show debug output")] = 0,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Hide per-page progress")] = False,
    ):
    """Sync published Notion pages into the post directory."""
    _configure_logging(-1 if quiet else verbose)
    settings = _settings(overrides={"output_dir": out, "layout": layout, "require_date": require_date})
    try:
        require_credentials(settings)
    except ValueError as e:
        _fail(str(e))

    output_dir = Path(settings.output_dir)
    engine = SyncEngine(
        NotionSource.from_settings(settings),
        output_dir,
        layout=settings.layout,
        require_date=settings.require_date,
        dry_run=dry_run,
        show_diff=diff,
    )
    typer.echo(f"Syncing Notion -> {output_dir}/" + (" (dry run)" if dry_run else ""))
    try:
        stats = engine.run()
    except RuntimeError as e:
        _fail(str(e))

    _echo_sync(stats, engine.changes)
    if stats.errors:
        typer.echo("Sync finished with errors (see above).", err=True)
        raise typer.Exit(1)


def index_cmd(
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory for post files")] = None,
    ):
    """List local posts by notion_id (no Notion access)."""
    settings = _settings(overrides={"output_dir": out})
    output_dir = Path(settings.output_dir)
    engine = SyncEngine(None, output_dir)
    existing = engine.scan()
    if not existing:
        typer.echo(f"No synced posts found in {output_dir}/.")
        raise typer.Exit(1)
    for notion_id, filename in sorted(existing.items(), key=lambda kv: kv[1]):
        typer.echo(f"{notion_id}  {filename}")
