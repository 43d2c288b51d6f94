"""Shared error taxonomy for com-registry-views."""

from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, UUID):
        return "{" + str(value).upper() + "}"
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class CRVError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class ConfigurationError(CRVError):
    """Invalid caller-supplied input; retry with corrected input."""


class FilterConfigurationError(ConfigurationError):
    """Invalid filter pattern or match mode."""


class CatalogError(ConfigurationError):
    """A catalog snapshot could not be loaded or validated."""


class ResolutionError(CRVError):
    """The interface query for a node failed; the node stays retryable."""


class InterfaceQueryError(ResolutionError):
    """Raised by interface resolvers when the external query fails."""


class ResolutionInProgressError(ResolutionError):
    """A resolution for the same node is already outstanding."""


class FatalError(CRVError):
    """Unexpected failure; fatal for the current operation only."""


class ViewBuildError(FatalError):
    """Unexpected failure while projecting the store into a view."""


class ResolutionFatalError(FatalError):
    """Unexpected failure while resolving a node's interfaces."""


class SessionClosedError(FatalError):
    """Operation attempted on a closed view session."""


def error_to_payload(error: CRVError) -> dict[str, Any]:
    """Convert a CRVError to a presentation payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
