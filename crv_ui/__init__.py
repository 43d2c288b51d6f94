"""Command-line shell for com-registry-views."""
