"""
`topicscope topics` - list live topics without inspecting them.
"""

from __future__ import annotations

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from topicscope.cli.utils import emit_json, fail
from topicscope.core.config import load_config
from topicscope.core.errors import TopicScopeError
from topicscope.discovery import DiscoveryRunner, TopicRegistry
from topicscope.runtime import get_backend, locate_runtime

console = Console()


def topics_command(
    format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table (default) or json",
    ),
) -> None:
    """List live topics and their message types."""
    if format not in ("table", "json"):
        fail(f"Unknown format: {format}")

    try:
        runtime = locate_runtime(load_config().ros_root)
        registry = DiscoveryRunner(runtime, backend=get_backend(runtime)).list_topics()
    except TopicScopeError as e:
        fail(e)

    if format == "json":
        emit_json([{"name": name, "message_type": t} for name, t in registry.items()])
    else:
        _print_topics_table(registry, runtime.version, runtime.distro)


def _print_topics_table(registry: TopicRegistry, version: str, distro: str) -> None:
    table = Table(title=f"ROS {version} ({distro}): {len(registry)} topic(s)", box=box.SIMPLE)
    table.add_column("Topic", style="cyan")
    table.add_column("Message type")
    for name, message_type in registry.items():
        table.add_row(name, message_type)
    console.print(table)
