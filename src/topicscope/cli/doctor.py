"""
topicscope doctor - environment health check.

Validates that the local environment has everything needed to run a
discovery.
"""

from __future__ import annotations

import importlib
import shutil
import sys

import typer

from topicscope.core.config import load_config
from topicscope.core.errors import TopicScopeError
from topicscope.runtime.environment import locate_runtime

_TOOLS_BY_VERSION = {
    "1": ("rostopic", "rosmsg"),
    "2": ("ros2",),
}


def doctor_command() -> None:
    """Run environment health checks for topicscope."""
    ok_count = 0
    warn_count = 0
    fail_count = 0

    def _ok(msg: str) -> None:
        nonlocal ok_count
        ok_count += 1
        typer.echo(f"  [ok] {msg}")

    def _warn(msg: str) -> None:
        nonlocal warn_count
        warn_count += 1
        typer.echo(f"  [warn] {msg}")

    def _fail(msg: str) -> None:
        nonlocal fail_count
        fail_count += 1
        typer.echo(f"  [FAIL] {msg}")

    typer.echo("topicscope doctor\n")

    # 1. Python version
    typer.echo("Python:")
    v = sys.version_info
    if v >= (3, 11):
        _ok(f"Python {v.major}.{v.minor}.{v.micro}")
    else:
        _fail(f"Python {v.major}.{v.minor}.{v.micro} (3.11+ required)")

    # 2. Core packages
    typer.echo("\nCore packages:")
    for pkg in ("pydantic", "typer", "rich"):
        try:
            mod = importlib.import_module(pkg)
            version = getattr(mod, "__version__", getattr(mod, "VERSION", "?"))
            _ok(f"{pkg} {version}")
        except ImportError:
            _fail(f"{pkg} not importable")

    # 3. Configuration
    typer.echo("\nConfiguration:")
    try:
        config = load_config()
        _ok(
            f"hz_window={config.hz_window} hz_timeout={config.hz_timeout}s "
            f"jobs={config.jobs} ros_root={config.ros_root}"
        )
    except TopicScopeError as e:
        _fail(f"Invalid configuration: {e.message}")
        config = None

    # 4. ROS runtime
    typer.echo("\nROS:")
    runtime = None
    if config is not None:
        try:
            runtime = locate_runtime(config.ros_root)
            _ok(f"ROS {runtime.version} ({runtime.distro})")
            if runtime.setup_script is not None:
                _warn(f"Shell not sourced; using {runtime.setup_script}")
        except TopicScopeError as e:
            _fail(e.message)

    # 5. Command line tools
    if runtime is not None:
        typer.echo("\nTools:")
        path = runtime.env.get("PATH")
        for tool in _TOOLS_BY_VERSION[runtime.version]:
            location = shutil.which(tool, path=path)
            if location:
                _ok(f"{tool}: {location}")
            else:
                _fail(f"{tool} not found on the runtime PATH")

    # Summary
    typer.echo(f"\n{'=' * 40}")
    typer.echo(f"  {ok_count} ok, {warn_count} warnings, {fail_count} failures")

    if fail_count > 0:
        typer.echo("\nSome checks failed. Fix the issues above.")
        raise typer.Exit(code=1)
    elif warn_count > 0:
        typer.echo("\nEnvironment is usable but has warnings.")
    else:
        typer.echo("\nEnvironment is healthy!")
