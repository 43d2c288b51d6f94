"""Pytest configuration for crv_gui tests."""

from pathlib import Path

from tests.helpers.optional_imports import missing_modules

MISSING = missing_modules("PySide6", "PySide6.QtCore")

# Skip collection of test files if the Qt binding is missing.
if MISSING:
    collect_ignore = [path.name for path in Path(__file__).parent.glob("test_*.py")]
