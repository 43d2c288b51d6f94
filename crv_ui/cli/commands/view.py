from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from crv_core.api import (
    CategoryKey,
    MatchMode,
    TreeNode,
    ViewMode,
    ViewSession,
    describe,
    guid_of,
    parse_guid,
)
from crv_ui.cli.errors import reported_errors
from crv_ui.context import UIContext
from crv_ui.render import forest_tree


def _expand_all(ctx: UIContext, session: ViewSession, refresh: bool) -> int:
    """Expand every class-bearing node down to the second level.

    Returns the number of nodes whose interface query failed.
    """
    pending: list[TreeNode] = []
    for root in session.visible:
        if root.class_entry is not None:
            pending.append(root)
        else:
            pending.extend(child for child in root.children if child.class_entry is not None)

    failures = 0
    with ctx.present.status(f"Querying interfaces for {len(pending)} classes..."):
        for node in pending:
            result = session.expand_node(node, force_refresh=refresh)
            if not result.ok:
                failures += 1
                ctx.present.warning(f"{node.label}: {result.error}")
    return failures


def register_view_commands(app: typer.Typer, ctx: UIContext) -> None:
    """Register view related commands on the given Typer app."""

    @app.command("modes")
    def modes() -> None:
        """List the available view modes."""
        rows = [[str(i), mode.value, mode.title] for i, mode in enumerate(ViewMode)]
        ctx.present.table("View Modes", ["#", "Mode", "Title"], rows)

    @app.command("show")
    def show(
        catalog: Optional[Path] = typer.Argument(
            None, help="Catalog snapshot (YAML/JSON). Defaults to CRV_CATALOG."
        ),
        mode: Optional[str] = typer.Option(
            None, "--mode", "-m", help="View mode, e.g. classes-by-server."
        ),
        pattern: str = typer.Option("", "--filter", "-f", help="Filter pattern."),
        match: Optional[str] = typer.Option(
            None,
            "--match",
            help="contains, starts-with, ends-with, equals, glob or regex.",
        ),
        case_sensitive: Optional[bool] = typer.Option(
            None, "--case-sensitive/--ignore-case", help="Case sensitive matching."
        ),
        expand: bool = typer.Option(
            False, "--expand", "-e", help="Resolve interfaces of class nodes."
        ),
        refresh: bool = typer.Option(
            False, "--refresh", help="Bypass cached interface answers when expanding."
        ),
        depth: Optional[int] = typer.Option(
            None, "--depth", "-d", min=1, help="Maximum depth to print."
        ),
    ) -> None:
        """Print a view of the catalog, optionally filtered."""
        with reported_errors(ctx.present):
            settings = ctx.settings
            loaded = ctx.load_catalog(catalog)
            session = ViewSession(
                loaded.store,
                loaded.resolver,
                loaded.categories,
                ViewMode.parse(mode) if mode else settings.default_mode,
            )
            if pattern.strip():
                session.set_filter(
                    pattern,
                    MatchMode.parse(match) if match else settings.match_mode,
                    settings.case_sensitive if case_sensitive is None else case_sensitive,
                )
            failures = _expand_all(ctx, session, refresh) if expand else 0
            if not len(session.visible):
                ctx.present.warning(f"No entries in {session.title}")
                return
            ctx.console.print(forest_tree(session.visible, max_depth=depth))
            if failures:
                ctx.present.warning(f"{failures} interface queries failed")

    @app.command("describe")
    def describe_guid(
        guid: str = typer.Argument(..., help="Class, interface or category GUID."),
        catalog: Optional[Path] = typer.Option(
            None, "--catalog", "-c", help="Catalog snapshot. Defaults to CRV_CATALOG."
        ),
    ) -> None:
        """Describe the record registered under a GUID."""
        with reported_errors(ctx.present):
            loaded = ctx.load_catalog(catalog)
            target = parse_guid(guid)
            store = loaded.store
            for record in [*store.all_classes(), *store.all_interfaces()]:
                if guid_of(record) == target:
                    ctx.present.plain(describe(record).rstrip("\n"))
                    return
            if target in store.implemented_categories():
                name = loaded.categories.name_of(target)
                ctx.present.plain(f"{name}\n" + describe(CategoryKey(target)).rstrip("\n"))
                return
        ctx.present.error(f"No record registered under {guid}")
        raise typer.Exit(1)
