"""
Error types for topicscope configuration, runtime location and discovery.

The schema parser itself never raises; these cover the layers around it.
"""

from dataclasses import dataclass
from typing import Optional


class TopicScopeError(Exception):
    """Base exception for all topicscope errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ConfigError(TopicScopeError):
    """
    Raised when configuration cannot be loaded or is out of range.

    Examples:
    - Explicit config file that does not exist
    - Invalid TOML
    - Non-numeric environment override
    - hz_window < 1
    """

    pass


class RuntimeNotFoundError(TopicScopeError):
    """
    Raised when no ROS installation can be located.

    Examples:
    - ROS_VERSION unset and no setup.bash under the ROS root
    - setup.bash sourced but did not export ROS_VERSION
    """

    pass


class UnsupportedRuntimeError(TopicScopeError):
    """Raised when ROS_VERSION is neither "1" nor "2"."""

    pass


class NoTopicsError(TopicScopeError):
    """Raised when topic enumeration yields nothing."""

    pass


@dataclass
class ErrorContext:
    """
    Context for an error raised around an external command.

    Attributes:
        command: The command line (or file) involved
        detail: Optional extra detail, e.g. captured stderr
    """

    command: str
    detail: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "while running: bash -c ... (detail)"
        """
        location = f"while running: {self.command}"
        if self.detail:
            return f"{location}\n  {self.detail.strip()}"
        return location


def make_config_error(message: str, source: str | None = None) -> ConfigError:
    """
    Helper to create a ConfigError, naming the file or variable at fault.

    Args:
        message: Error description
        source: Optional config file path or environment variable name

    Returns:
        ConfigError with the source prefixed when given
    """
    if source:
        return ConfigError(f"{source}: {message}")
    return ConfigError(message)
