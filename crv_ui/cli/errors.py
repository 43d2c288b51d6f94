"""Mapping of typed errors to CLI exit codes."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import typer

from crv_common.errors import ConfigurationError, CRVError, error_to_payload
from crv_ui.presenter import RichPresenter

logger = logging.getLogger(__name__)

EXIT_FATAL = 1
EXIT_CONFIGURATION = 2


@contextmanager
def reported_errors(present: RichPresenter) -> Iterator[None]:
    """Print typed errors and exit; configuration errors exit with 2."""
    try:
        yield
    except ConfigurationError as exc:
        logger.info("Rejected input: %s", exc, extra=error_to_payload(exc))
        present.error(str(exc))
        raise typer.Exit(EXIT_CONFIGURATION) from exc
    except CRVError as exc:
        logger.error("Operation failed: %s", exc, extra=error_to_payload(exc))
        present.error(str(exc))
        raise typer.Exit(EXIT_FATAL) from exc
