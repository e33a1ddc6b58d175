"""
topicscope core: schema parsing, configuration and errors.
"""

from .config import DiscoveryConfig, load_config
from .errors import (
    ConfigError,
    NoTopicsError,
    RuntimeNotFoundError,
    TopicScopeError,
    UnsupportedRuntimeError,
)
from .lines import ClassifiedLine, FieldKind, classify_line, classify_lines
from .schema import FieldRecord, SchemaBuilder, parse_schema, schema_to_dicts, schema_to_json

__all__ = [
    "ClassifiedLine",
    "ConfigError",
    "DiscoveryConfig",
    "FieldKind",
    "FieldRecord",
    "NoTopicsError",
    "RuntimeNotFoundError",
    "SchemaBuilder",
    "TopicScopeError",
    "UnsupportedRuntimeError",
    "classify_line",
    "classify_lines",
    "load_config",
    "parse_schema",
    "schema_to_dicts",
    "schema_to_json",
]
