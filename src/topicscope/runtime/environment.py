"""
Locate the ROS runtime to introspect.

An already-sourced shell (ROS_VERSION exported) is used as is. Otherwise
the first `<ros_root>/<distro>/setup.bash` is sourced in a bash subshell
and the resulting environment captured.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ..core.errors import ErrorContext, RuntimeNotFoundError, UnsupportedRuntimeError

logger = logging.getLogger(__name__)

SUPPORTED_VERSIONS = ("1", "2")
SOURCE_TIMEOUT_S = 30


@dataclass(frozen=True)
class RosRuntime:
    """A located ROS installation and the environment to run its tools in."""

    version: str  # "1" or "2"
    distro: str = "unknown"
    env: Mapping[str, str] = field(default_factory=dict, repr=False)
    setup_script: Path | None = None  # None when the caller's shell was already sourced

    @property
    def is_ros2(self) -> bool:
        return self.version == "2"


def find_setup_scripts(ros_root: Path) -> list[Path]:
    """Return `<ros_root>/*/setup.bash` in sorted order."""
    if not ros_root.is_dir():
        return []
    return sorted(p for p in ros_root.glob("*/setup.bash") if p.is_file())


def parse_env_output(output: str) -> dict[str, str]:
    """Parse NUL-separated `env -0` output into a mapping."""
    env: dict[str, str] = {}
    for entry in output.split("\0"):
        key, sep, value = entry.partition("=")
        if sep and key:
            env[key] = value
    return env


def source_setup_script(script: Path) -> dict[str, str]:
    """
    Source ``script`` in bash and capture the resulting environment.

    Raises:
        RuntimeNotFoundError: If bash cannot source the script
    """
    command = ["bash", "-c", 'source "$1" >/dev/null 2>&1 && env -0', "_", str(script)]
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=SOURCE_TIMEOUT_S,
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        raise RuntimeNotFoundError(
            f"Could not source {script}", ErrorContext(" ".join(command), str(e))
        ) from e

    if result.returncode != 0:
        raise RuntimeNotFoundError(
            f"Could not source {script}",
            ErrorContext(" ".join(command), result.stderr or None),
        )
    return parse_env_output(result.stdout)


def locate_runtime(
    ros_root: str | Path = "/opt/ros",
    environ: Mapping[str, str] | None = None,
) -> RosRuntime:
    """
    Find the ROS runtime.

    Args:
        ros_root: Directory holding one subdirectory per installed distro
        environ: Starting environment (defaults to os.environ)

    Returns:
        RosRuntime for ROS 1 or ROS 2

    Raises:
        RuntimeNotFoundError: No ROS_VERSION and nothing to source
        UnsupportedRuntimeError: ROS_VERSION is not 1 or 2
    """
    env = dict(os.environ if environ is None else environ)
    root = Path(ros_root)
    setup_script: Path | None = None

    if not env.get("ROS_VERSION"):
        scripts = find_setup_scripts(root)
        if scripts:
            setup_script = scripts[0]
            logger.info("Sourcing %s", setup_script)
            env = source_setup_script(setup_script)

    version = env.get("ROS_VERSION", "")
    if not version:
        raise RuntimeNotFoundError(f"No ROS found under {root}/")
    if version not in SUPPORTED_VERSIONS:
        raise UnsupportedRuntimeError(f"Unsupported ROS_VERSION: '{version}'")

    distro = env.get("ROS_DISTRO") or "unknown"
    logger.debug("Using ROS %s (%s)", version, distro)
    return RosRuntime(version=version, distro=distro, env=env, setup_script=setup_script)
