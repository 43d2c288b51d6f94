"""Typer CLI for com-registry-views."""
