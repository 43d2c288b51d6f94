"""Viewer defaults, overridable from the environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from crv_common.config import parse_bool_env, parse_enum_env
from crv_common.errors import ConfigurationError
from crv_core.filtering import MatchMode
from crv_core.guid_format import GuidStyle
from crv_core.views import ViewMode

ENV_DEFAULT_VIEW = "CRV_DEFAULT_VIEW"
ENV_MATCH_MODE = "CRV_MATCH_MODE"
ENV_CASE_SENSITIVE = "CRV_CASE_SENSITIVE"
ENV_GUID_STYLE = "CRV_GUID_STYLE"
ENV_CATALOG = "CRV_CATALOG"


class ViewerSettings(BaseModel):
    """Defaults used when a shell opens a view or applies a filter."""

    model_config = ConfigDict(frozen=True)

    default_mode: ViewMode = ViewMode.CLASSES
    match_mode: MatchMode = MatchMode.CONTAINS
    case_sensitive: bool = False
    guid_style: GuidStyle = GuidStyle.STRING
    catalog_path: Path | None = None

    @field_validator("default_mode", mode="before")
    @classmethod
    def _parse_mode(cls, value: object) -> object:
        if isinstance(value, str):
            return ViewMode.parse(value)
        return value

    @field_validator("match_mode", mode="before")
    @classmethod
    def _parse_match_mode(cls, value: object) -> object:
        if isinstance(value, (str, int)):
            return MatchMode.parse(value)
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ViewerSettings":
        """Build settings from ``CRV_*`` variables; unset ones keep defaults."""
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        try:
            mode = env.get(ENV_DEFAULT_VIEW)
            if mode:
                values["default_mode"] = ViewMode.parse(mode)
            match_mode = env.get(ENV_MATCH_MODE)
            if match_mode:
                values["match_mode"] = MatchMode.parse(match_mode)
            case_sensitive = parse_bool_env(env.get(ENV_CASE_SENSITIVE))
            if case_sensitive is not None:
                values["case_sensitive"] = case_sensitive
            style = parse_enum_env(env.get(ENV_GUID_STYLE), GuidStyle)
            if style is not None:
                values["guid_style"] = style
            catalog = env.get(ENV_CATALOG)
            if catalog:
                values["catalog_path"] = Path(catalog).expanduser()
            return cls(**values)
        except ConfigurationError:
            raise
        except (ValueError, ValidationError) as exc:
            raise ConfigurationError(
                f"Invalid viewer settings: {exc}", cause=exc
            ) from exc
