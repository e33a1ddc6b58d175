"""
Discovery configuration.

Values are layered, later sources winning:

    defaults < topicscope.toml < TOPICSCOPE_* environment < CLI options

Example topicscope.toml:

    [discovery]
    hz_window = 100
    hz_timeout = 3.5
    jobs = 4

    [runtime]
    ros_root = "/opt/ros"

File values are validated strictly (``hz_window = 2.9`` or ``jobs = true``
are errors); environment values are strings and are converted.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import make_config_error

CONFIG_FILENAME = "topicscope.toml"

ENV_HZ_WINDOW = "TOPICSCOPE_HZ_WINDOW"
ENV_HZ_TIMEOUT = "TOPICSCOPE_HZ_TIMEOUT"
ENV_JOBS = "TOPICSCOPE_JOBS"
ENV_ROS_ROOT = "TOPICSCOPE_ROS_ROOT"

_ENV_FIELDS = {
    ENV_HZ_WINDOW: "hz_window",
    ENV_HZ_TIMEOUT: "hz_timeout",
    ENV_JOBS: "jobs",
    ENV_ROS_ROOT: "ros_root",
}

_FILE_TABLES = ("discovery", "runtime")


class DiscoveryConfig(BaseModel):
    """Settings for one discovery run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    hz_window: int = Field(default=50, ge=1)  # messages in the rolling rate window
    # seconds to wait per topic before calling it silent
    hz_timeout: float = Field(default=5.0, gt=0, allow_inf_nan=False)
    jobs: int = Field(default=1, ge=1)  # topics processed concurrently
    ros_root: str = "/opt/ros"

    def override(self, **values: Any) -> DiscoveryConfig:
        """Return a copy with the non-None ``values`` applied and validated."""
        changes = {key: value for key, value in values.items() if value is not None}
        return _validate({**self.model_dump(), **changes}, "options")


def _describe(error: ValidationError, names: Mapping[str, str] | None = None) -> str:
    """One line per pydantic error: "<field>: <message>"."""
    parts = []
    for err in error.errors():
        field = ".".join(str(p) for p in err["loc"]) or "config"
        if names:
            field = names.get(field, field)
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


def _validate(
    data: Mapping[str, Any],
    source: str,
    strict: bool = False,
    names: Mapping[str, str] | None = None,
) -> DiscoveryConfig:
    try:
        return DiscoveryConfig.model_validate(dict(data), strict=strict)
    except ValidationError as e:
        raise make_config_error(_describe(e, names), source) from e


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise make_config_error(f"invalid TOML: {e}", str(path)) from e


def _from_file(config: DiscoveryConfig, path: Path) -> DiscoveryConfig:
    data = _read_toml(path)
    values: dict[str, Any] = {}
    for table in _FILE_TABLES:
        section = data.get(table, {})
        if not isinstance(section, dict):
            raise make_config_error(f"[{table}] must be a table", str(path))
        values.update(section)
    return _validate({**config.model_dump(), **values}, str(path), strict=True)


def _from_env(config: DiscoveryConfig, environ: Mapping[str, str]) -> DiscoveryConfig:
    changes = {}
    for name, field in _ENV_FIELDS.items():
        raw = environ.get(name, "").strip()
        if raw:
            changes[field] = raw
    if not changes:
        return config
    fields_to_env = {field: name for name, field in _ENV_FIELDS.items()}
    return _validate({**config.model_dump(), **changes}, "environment", names=fields_to_env)


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> DiscoveryConfig:
    """
    Load configuration from file and environment.

    Args:
        path: Explicit config file; must exist when given
        environ: Environment mapping (defaults to os.environ)
        cwd: Directory searched for topicscope.toml when no path is given

    Returns:
        The layered DiscoveryConfig

    Raises:
        ConfigError: On a missing explicit file or invalid values
    """
    environ = os.environ if environ is None else environ
    config = DiscoveryConfig()

    if path is not None:
        if not path.is_file():
            raise make_config_error("config file not found", str(path))
        config = _from_file(config, path)
    else:
        candidate = (cwd or Path.cwd()) / CONFIG_FILENAME
        if candidate.is_file():
            config = _from_file(config, candidate)

    return _from_env(config, environ)
