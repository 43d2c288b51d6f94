"""Render forests as Rich trees."""

from __future__ import annotations

from rich.markup import escape
from rich.tree import Tree

from crv_core.api import Forest, ResolutionState, TreeNode

_STATE_MARKERS = {
    ResolutionState.FAILED: " [red](query failed)[/red]",
    ResolutionState.RESOLVING: " [yellow](resolving)[/yellow]",
}


def _node_text(node: TreeNode) -> str:
    if node.is_placeholder:
        return f"[dim]{escape(node.label)}[/dim]"
    style = "bold" if node.children and node.payload is None else ""
    text = escape(node.label)
    if style:
        text = f"[{style}]{text}[/{style}]"
    return text + _STATE_MARKERS.get(node.state, "")


def _add(branch: Tree, node: TreeNode, depth: int, max_depth: int | None) -> None:
    child = branch.add(_node_text(node))
    if max_depth is not None and depth >= max_depth:
        return
    for grandchild in node.children:
        _add(child, grandchild, depth + 1, max_depth)


def forest_tree(forest: Forest, *, max_depth: int | None = None) -> Tree:
    """Build a Rich tree titled with the view title and root count."""
    tree = Tree(f"[bold]{escape(forest.title)}[/bold] ({len(forest)})", guide_style="cyan")
    for node in forest:
        _add(tree, node, 1, max_depth)
    return tree
