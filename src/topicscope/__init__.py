"""
topicscope - discover ROS topics with their schemas, endpoints and rates.

Parses `rosmsg show` / `ros2 interface show` output into nested field
records and assembles a JSON document describing every live topic.
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import (
    ConfigError,
    NoTopicsError,
    RuntimeNotFoundError,
    TopicScopeError,
    UnsupportedRuntimeError,
)
from .core.schema import FieldRecord, parse_schema, schema_to_json

__version__ = get_version()

__all__ = [
    "__version__",
    "FieldRecord",
    "parse_schema",
    "schema_to_json",
    "TopicScopeError",
    "ConfigError",
    "RuntimeNotFoundError",
    "UnsupportedRuntimeError",
    "NoTopicsError",
]
