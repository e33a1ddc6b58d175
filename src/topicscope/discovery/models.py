"""
Data models for a discovery run.

These models hold the topic registry built during enumeration, the
per-topic results and the final report document.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from ..core.schema import FieldRecord, schema_to_dicts


class TopicRegistry(Mapping[str, str]):
    """
    Topic name to message type, in first-seen order.

    One registry belongs to one discovery run; re-adding a topic keeps
    its position and replaces its type.
    """

    def __init__(self) -> None:
        self._types: dict[str, str] = {}

    def add(self, name: str, message_type: str) -> None:
        self._types[name] = message_type

    def __getitem__(self, name: str) -> str:
        return self._types[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"TopicRegistry({self._types!r})"


@dataclass
class TopicReport:
    """Everything discovered about one topic."""

    name: str
    message_type: str
    schema: list[FieldRecord] = field(default_factory=list)
    publishers: list[str] = field(default_factory=list)
    subscribers: list[str] = field(default_factory=list)
    frequency_hz: float | None = None  # None: no messages within the timeout

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "message_type": self.message_type,
            "schema": schema_to_dicts(self.schema),
            "publishers": self.publishers,
            "subscribers": self.subscribers,
            "frequency_hz": self.frequency_hz,
        }


def utc_timestamp(now: datetime | None = None) -> str:
    """Format ``now`` (default: current time) as 2026-01-01T00:00:00Z."""
    return (now or datetime.now(UTC)).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class DiscoveryReport:
    """The complete discovery document."""

    ros_version: str
    ros_distro: str
    hz_window: int
    hz_timeout: float
    discovered_at: str = field(default_factory=utc_timestamp)
    topics: list[TopicReport] = field(default_factory=list)

    @property
    def topic_count(self) -> int:
        return len(self.topics)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        # Whole-second timeouts print as integers, like the CLI flag.
        timeout: float | int = self.hz_timeout
        if float(timeout).is_integer():
            timeout = int(timeout)
        return {
            "ros_version": self.ros_version,
            "ros_distro": self.ros_distro,
            "discovered_at": self.discovered_at,
            "settings": {
                "hz_window": self.hz_window,
                "hz_timeout_s": timeout,
            },
            "topic_count": self.topic_count,
            "topics": [t.to_dict() for t in self.topics],
        }
