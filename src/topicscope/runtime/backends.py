"""
ROS introspection backends.

Each backend wraps one generation of the ROS command line tools:

- Ros1Backend: rostopic / rosmsg
- Ros2Backend: ros2 topic / ros2 interface
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .commands import CommandRunner
from .scrapers import (
    UNKNOWN_TYPE,
    EndpointSet,
    parse_average_rate,
    parse_plain_topic_list,
    parse_ros1_topic_info,
    parse_ros1_topic_list,
    parse_ros2_topic_info,
    parse_ros2_topic_list,
)

if TYPE_CHECKING:
    from ..discovery.models import TopicRegistry
    from .environment import RosRuntime

logger = logging.getLogger(__name__)

# `rostopic hz` / `ros2 topic hz` are Python scripts; unbuffered output
# keeps the last rate line visible when they are killed at the timeout.
_RATE_ENV = {"PYTHONUNBUFFERED": "1"}


class RosBackend(ABC):
    """Introspection commands for one ROS generation."""

    version: str = ""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    @abstractmethod
    def list_topics(self, registry: TopicRegistry) -> TopicRegistry:
        """Record every live topic and its message type in ``registry``."""

    @abstractmethod
    def schema_text(self, message_type: str) -> str:
        """Return the indented interface text for ``message_type`` ("" if unknown)."""

    @abstractmethod
    def endpoints(self, topic: str) -> EndpointSet:
        """Return the nodes publishing and subscribing to ``topic``."""

    @abstractmethod
    def rate_command(self, topic: str, window: int) -> list[str]:
        """Build the rate measurement command line."""

    def measure_rate(self, topic: str, window: int, timeout: float) -> float | None:
        """
        Measure the average message rate of ``topic``.

        Returns:
            Rate in Hz, or None if nothing arrived within ``timeout``
        """
        output = self.runner.run(
            self.rate_command(topic, window),
            timeout=timeout,
            merge_stderr=True,
            extra_env=_RATE_ENV,
        )
        rate = parse_average_rate(output)
        if rate is None:
            logger.debug("No messages on %s within %ss", topic, timeout)
        return rate


class Ros1Backend(RosBackend):
    version = "1"

    def list_topics(self, registry: TopicRegistry) -> TopicRegistry:
        for name, message_type in parse_ros1_topic_list(
            self.runner.run(["rostopic", "list", "-v"])
        ):
            registry.add(name, message_type)

        if not registry:
            # Older masters: plain list, one type lookup per topic.
            logger.debug("rostopic list -v returned nothing, falling back to rostopic list")
            for name in parse_plain_topic_list(self.runner.run(["rostopic", "list"])):
                message_type = self.runner.run(["rostopic", "type", name]).strip()
                registry.add(name, message_type or UNKNOWN_TYPE)
        return registry

    def schema_text(self, message_type: str) -> str:
        return self.runner.run(["rosmsg", "show", message_type])

    def endpoints(self, topic: str) -> EndpointSet:
        return parse_ros1_topic_info(self.runner.run(["rostopic", "info", topic]))

    def rate_command(self, topic: str, window: int) -> list[str]:
        return ["rostopic", "hz", "-w", str(window), topic]


class Ros2Backend(RosBackend):
    version = "2"

    def list_topics(self, registry: TopicRegistry) -> TopicRegistry:
        for name, message_type in parse_ros2_topic_list(
            self.runner.run(["ros2", "topic", "list", "-t"])
        ):
            registry.add(name, message_type)
        return registry

    def schema_text(self, message_type: str) -> str:
        return self.runner.run(["ros2", "interface", "show", message_type, "--no-comments"])

    def endpoints(self, topic: str) -> EndpointSet:
        return parse_ros2_topic_info(self.runner.run(["ros2", "topic", "info", "-v", topic]))

    def rate_command(self, topic: str, window: int) -> list[str]:
        return ["ros2", "topic", "hz", "--window", str(window), topic]


_BACKENDS: dict[str, type[RosBackend]] = {
    Ros1Backend.version: Ros1Backend,
    Ros2Backend.version: Ros2Backend,
}


def get_backend(runtime: RosRuntime, runner: CommandRunner | None = None) -> RosBackend:
    """Return the backend matching ``runtime.version``."""
    backend_cls = _BACKENDS[runtime.version]
    return backend_cls(runner or CommandRunner(runtime.env))
