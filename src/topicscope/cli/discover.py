"""
`topicscope discover` - the full discovery document.
"""

from __future__ import annotations

from pathlib import Path

import typer

from topicscope.cli.utils import emit_json, err_console, fail
from topicscope.core.config import load_config
from topicscope.core.errors import TopicScopeError
from topicscope.discovery import DiscoveryRunner
from topicscope.runtime import get_backend, locate_runtime


def _print_progress(index: int, total: int, topic: str) -> None:
    err_console.print(f"  [{index}/{total}] {topic}", markup=False)


def discover_command(
    hz_window: int = typer.Option(
        None,
        "--hz-window",
        help="Rolling window size (message count) for rate averaging [default: 50]",
    ),
    hz_timeout: float = typer.Option(
        None,
        "--hz-timeout",
        help="Max seconds to wait per topic for messages before declaring it silent [default: 5]",
    ),
    jobs: int = typer.Option(
        None,
        "--jobs",
        "-j",
        help="Topics to inspect concurrently [default: 1]",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ./topicscope.toml if present)",
    ),
    output: Path = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the document to a file instead of stdout",
    ),
    compact: bool = typer.Option(False, "--compact", help="Single-line JSON"),
) -> None:
    """Discover ROS topics and emit them as one JSON document.

    Examples:
        topicscope discover                         # All topics, defaults
        topicscope discover --hz-timeout 2 -j 8     # Faster on big graphs
        topicscope discover -o topics.json          # Write to a file
    """
    try:
        config = load_config(config_path).override(
            hz_window=hz_window, hz_timeout=hz_timeout, jobs=jobs
        )
        runtime = locate_runtime(config.ros_root)
        runner = DiscoveryRunner(
            runtime, config, backend=get_backend(runtime), progress=_print_progress
        )
        registry = runner.list_topics()

        err_console.print(
            f"Discovering {len(registry)} topic(s) on ROS {runtime.version} "
            f"({runtime.distro}) ...",
            markup=False,
        )
        err_console.print(f"  hz-window={config.hz_window}  hz-timeout={config.hz_timeout}s")

        report = runner.run(registry)
    except TopicScopeError as e:
        fail(e)

    emit_json(report.to_dict(), output, compact)
