from __future__ import annotations

from typing import Optional

import typer

from crv_core.api import GuidStyle, format_guid
from crv_ui.cli.errors import reported_errors
from crv_ui.context import UIContext


def register_guid_command(app: typer.Typer, ctx: UIContext) -> None:
    @app.command("guid")
    def guid(
        value: str = typer.Argument(..., help="GUID in braced, plain or hex form."),
        style: Optional[GuidStyle] = typer.Option(
            None, "--style", "-s", help="Output style. Defaults to CRV_GUID_STYLE."
        ),
    ) -> None:
        """Print a GUID in one of the export styles."""
        with reported_errors(ctx.present):
            ctx.present.plain(format_guid(value, style or ctx.settings.guid_style))
