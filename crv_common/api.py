"""Public API surface for crv_common."""

from crv_common.config import parse_bool_env, parse_enum_env, parse_int_env
from crv_common.errors import (
    CatalogError,
    ConfigurationError,
    CRVError,
    FatalError,
    FilterConfigurationError,
    InterfaceQueryError,
    ResolutionError,
    ResolutionFatalError,
    ResolutionInProgressError,
    SessionClosedError,
    ViewBuildError,
    error_to_payload,
)
from crv_common.logging import configure_logging

__all__ = [
    "CatalogError",
    "ConfigurationError",
    "CRVError",
    "FatalError",
    "FilterConfigurationError",
    "InterfaceQueryError",
    "ResolutionError",
    "ResolutionFatalError",
    "ResolutionInProgressError",
    "SessionClosedError",
    "ViewBuildError",
    "configure_logging",
    "error_to_payload",
    "parse_bool_env",
    "parse_enum_env",
    "parse_int_env",
]
