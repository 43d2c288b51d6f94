"""Qt presentation layer for com-registry-views."""
