"""
Command-line interface for com-registry-views.

Prints views of a catalog snapshot, filters them and formats identifiers.
"""

from __future__ import annotations

import typer

from crv_common.logging import configure_logging
from crv_ui.cli.commands import register_guid_command, register_view_commands
from crv_ui.context import UIContext

ctx_store = UIContext()

app = typer.Typer(
    help="Browse registration records through alternative views.",
    no_args_is_help=True,
)


@app.callback()
def entry(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON."),
) -> None:
    """Global options shared by every command."""
    configure_logging(debug=debug, json=json_logs or None, force=True)
    ctx_store.debug = debug


register_view_commands(app, ctx_store)
register_guid_command(app, ctx_store)


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
