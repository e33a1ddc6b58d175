"""
`topicscope schema` - parse one message schema.
"""

from __future__ import annotations

from pathlib import Path

import typer

from topicscope.cli.utils import err_console, fail
from topicscope.core.config import load_config
from topicscope.core.errors import TopicScopeError
from topicscope.core.schema import parse_schema, schema_to_json
from topicscope.runtime import get_backend, locate_runtime


def _read_text(file: str) -> str:
    if file == "-":
        return typer.get_text_stream("stdin", encoding="utf-8", errors="replace").read()
    path = Path(file)
    if not path.is_file():
        fail(f"File not found: {file}")
    return path.read_text(encoding="utf-8", errors="replace")


def schema_command(
    message_type: str = typer.Argument(
        None,
        help="Message type to look up, e.g. geometry_msgs/msg/Twist",
    ),
    file: str = typer.Option(
        None,
        "--file",
        "-f",
        help="Parse schema text from a file instead ('-' for stdin)",
    ),
    compact: bool = typer.Option(False, "--compact", help="Single-line JSON"),
) -> None:
    """Print the parsed schema of a message type as JSON.

    Examples:
        topicscope schema geometry_msgs/msg/Twist
        rosmsg show geometry_msgs/Twist | topicscope schema -f -
    """
    if (message_type is None) == (file is None):
        fail("Give either a MESSAGE_TYPE or --file, not both")

    if file is not None:
        text = _read_text(file)
    else:
        try:
            config = load_config()
            runtime = locate_runtime(config.ros_root)
        except TopicScopeError as e:
            fail(e)
        text = get_backend(runtime).schema_text(message_type)
        if not text.strip():
            err_console.print(f"No interface text for {message_type}", markup=False)

    typer.echo(schema_to_json(parse_schema(text), indent=None if compact else 2))
