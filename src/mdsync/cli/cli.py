"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdsync.cli.commands import index_cmd, sync_cmd


app = typer.Typer(name="mdsync", no_args_is_help=True, help="Notion to Markdown post sync")

app.command(name="sync")(sync_cmd)
app.command(name="index")(index_cmd)
