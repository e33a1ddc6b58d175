"""
topicscope CLI.

- discover.py: full discovery document
- schema.py: parse a single message schema
- topics.py: list topics
- doctor.py: environment health check
- utils.py: shared helpers
"""

from __future__ import annotations

import typer

from topicscope.cli.discover import discover_command
from topicscope.cli.doctor import doctor_command
from topicscope.cli.schema import schema_command
from topicscope.cli.topics import topics_command
from topicscope.cli.utils import err_console, setup_logging, version_callback

app = typer.Typer(
    help="""topicscope – discover ROS topics, their schemas, endpoints and rates

Commands:
  • discover: JSON document for every live topic
  • schema:   parse one message schema
  • topics:   list topics and types
  • doctor:   check the environment
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging on stderr"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No progress output"),
) -> None:
    """topicscope CLI main callback for global options."""
    setup_logging(verbose)
    err_console.quiet = quiet


app.command(name="discover")(discover_command)
app.command(name="schema")(schema_command)
app.command(name="topics")(topics_command)
app.command(name="doctor")(doctor_command)


def main() -> None:
    app(standalone_mode=True)


__all__ = ["app", "main"]
