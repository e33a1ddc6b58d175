"""
topicscope CLI utilities.

Shared helpers used across CLI command modules.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import shutil
import sys
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console

from topicscope._version import get_version
from topicscope.core.errors import TopicScopeError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ROS_TOOLS = ("rostopic", "rosmsg", "ros2")

# stdout carries only JSON; everything for humans goes here.
err_console = Console(stderr=True, highlight=False)


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging on stderr (LOG_LEVEL, or DEBUG with --verbose)."""
    level_name = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def fail(error: TopicScopeError | str) -> NoReturn:
    """Report an error as {"error": ...} on stderr and exit with code 1."""
    message = error.message if isinstance(error, TopicScopeError) else error
    typer.echo(json.dumps({"error": message}), err=True)
    raise typer.Exit(code=1)


def emit_json(data: Any, output: Path | None = None, compact: bool = False) -> None:
    """Write ``data`` as JSON to ``output`` or stdout."""
    text = json.dumps(data) if compact else json.dumps(data, indent=2)
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n")
    err_console.print(f"Wrote {output}")


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"topicscope version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(
            f"  Python:        {platform.python_implementation()} {platform.python_version()}"
        )
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo("")
        typer.echo("ROS:")
        typer.echo(f"  ROS_VERSION:   {os.environ.get('ROS_VERSION') or '(not set)'}")
        typer.echo(f"  ROS_DISTRO:    {os.environ.get('ROS_DISTRO') or '(not set)'}")
        for tool in ROS_TOOLS:
            location = shutil.which(tool)
            status = location if location else "✗ not on PATH"
            typer.echo(f"  {tool + ':':<14} {status}")

        raise typer.Exit()
