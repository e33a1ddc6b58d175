"""
Parsers for the human-readable output of `rostopic` and `ros2 topic`.

All functions are pure: captured text in, plain Python values out.
"""

from __future__ import annotations

import re
from typing import NamedTuple

UNKNOWN_TYPE = "unknown"

#  * /topic [pkg/Type] 1 publisher
_ROS1_VERBOSE_TOPIC = re.compile(r"^ \* (/[^ ]+) \[([^\]]+)\]")
# /topic [pkg/msg/Type]
_ROS2_TYPED_TOPIC = re.compile(r"^(/[^ ]+) \[([^\]]+)\]")
#  * /node (http://host:port/)
_ROS1_NODE_ENTRY = re.compile(r"^ \* (/[^ ]+)")
_AVERAGE_RATE = re.compile(r"average rate:\s*(\S+)")


class EndpointSet(NamedTuple):
    """Nodes attached to one topic."""

    publishers: list[str]
    subscribers: list[str]


def parse_ros1_topic_list(text: str) -> list[tuple[str, str]]:
    """
    Parse `rostopic list -v`.

    A topic listed under both "Published topics" and "Subscribed topics"
    keeps its first position; the later type wins.
    """
    types: dict[str, str] = {}
    for line in text.splitlines():
        match = _ROS1_VERBOSE_TOPIC.match(line)
        if match:
            types[match.group(1)] = match.group(2)
    return list(types.items())


def parse_plain_topic_list(text: str) -> list[str]:
    """Parse `rostopic list`: one topic per line."""
    names = []
    for line in text.splitlines():
        name = line.replace(" ", "")
        if name:
            names.append(name)
    return names


def parse_ros2_topic_list(text: str) -> list[tuple[str, str]]:
    """Parse `ros2 topic list -t`; untyped lines get type "unknown"."""
    topics = []
    for line in text.splitlines():
        match = _ROS2_TYPED_TOPIC.match(line)
        if match:
            topics.append((match.group(1), match.group(2)))
            continue
        name = line.replace(" ", "")
        if name:
            topics.append((name, UNKNOWN_TYPE))
    return topics


def parse_ros1_topic_info(text: str) -> EndpointSet:
    """Parse the Publishers/Subscribers sections of `rostopic info`."""
    endpoints = EndpointSet([], [])
    section: list[str] | None = None
    for line in text.splitlines():
        if line.startswith("Publishers:"):
            section = endpoints.publishers
            continue
        if line.startswith("Subscribers:"):
            section = endpoints.subscribers
            continue
        match = _ROS1_NODE_ENTRY.match(line)
        if match and section is not None:
            section.append(match.group(1))
    return endpoints


def parse_ros2_topic_info(text: str) -> EndpointSet:
    """
    Parse `ros2 topic info -v`.

    Each endpoint block names the node, its namespace and the endpoint
    type; the "Endpoint type" line closes the block.
    """
    endpoints = EndpointSet([], [])
    node_name = ""
    node_ns = ""
    for line in text.splitlines():
        s = line.strip()
        if s.startswith("Node name: "):
            node_name = s[len("Node name: ") :]
        elif s.startswith("Node namespace: "):
            node_ns = s[len("Node namespace: ") :]
        elif s.startswith("Endpoint type: "):
            kind = s[len("Endpoint type: ") :]
            path = (node_ns or "/").rstrip("/") + "/" + (node_name or "unknown")
            if kind == "PUBLISHER":
                endpoints.publishers.append(path)
            elif kind == "SUBSCRIPTION":
                endpoints.subscribers.append(path)
            node_name = ""
            node_ns = ""
    return endpoints


def parse_average_rate(text: str) -> float | None:
    """Return the last reported "average rate: N" value, or None."""
    rate = None
    for match in _AVERAGE_RATE.finditer(text):
        try:
            rate = float(match.group(1))
        except ValueError:
            continue
    return rate
