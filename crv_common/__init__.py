"""Shared helpers for com-registry-views."""

from crv_common.api import CRVError, configure_logging

__all__ = ["configure_logging", "CRVError"]
