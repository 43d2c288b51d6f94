"""Helpers for tests that depend on optional extras (the ``gui`` extra)."""

import importlib.util


def module_available(module_name: str) -> bool:
    # find_spec raises for a dotted name whose parent package is missing
    try:
        return importlib.util.find_spec(module_name) is not None
    except ModuleNotFoundError:
        return False


def missing_modules(*module_names: str) -> list[str]:
    return [name for name in module_names if not module_available(name)]
