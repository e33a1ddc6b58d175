"""
Schema parser for ROS message definitions.

Builds a nested list of FieldRecord from the indented text printed by
`rosmsg show` (two spaces per level) or `ros2 interface show --no-comments`
(one tab per level). Nesting is inferred only by comparing each line's
indent with the previous line's, so no indent unit is assumed:

    Vector3 linear            [FieldRecord(Vector3 linear, children=[
    \\tfloat64 x                   FieldRecord(float64 x),
    \\tfloat64 y                   FieldRecord(float64 y)]),
    Vector3 angular            FieldRecord(Vector3 angular, children=[
    \\tfloat64 x                   FieldRecord(float64 x)])]

Each record is linked into its container as soon as its line is read, so
the tree is complete up to the last processed line at any point; the
stack only decides where the next record goes.

Mixed tabs and spaces inside one input are not normalized. Widths are raw
character counts and the result for such input is undefined.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any, NamedTuple

from pydantic import BaseModel, Field

from .lines import ClassifiedLine, FieldKind, classify_lines


class FieldRecord(BaseModel):
    """
    One schema entry: a constant or a (possibly nested) field.

    ``children`` stays None until the first child is attached, so a leaf
    never serializes a ``fields`` key.
    """

    type: str
    name: str
    kind: FieldKind = Field(default=FieldKind.FIELD, exclude=True)
    value: str | None = None  # constants only
    default: str | None = None  # fields only
    children: list[FieldRecord] | None = Field(default=None, serialization_alias="fields")

    @property
    def is_constant(self) -> bool:
        return self.kind == FieldKind.CONSTANT

    def add_child(self, record: FieldRecord) -> None:
        """Append a child, creating the children list on first use."""
        if self.children is None:
            self.children = []
        self.children.append(record)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON-ready form: type, name, value|default, fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class _OpenRecord(NamedTuple):
    indent: int
    record: FieldRecord


class SchemaBuilder:
    """
    Indentation-tracked tree builder.

    Feed classified lines in input order with :meth:`add`; read the root
    list from :attr:`schema` at any time. One builder per parse.
    """

    def __init__(self) -> None:
        self._root: list[FieldRecord] = []
        # Open ancestors, strictly increasing indent from bottom to top.
        self._stack: list[_OpenRecord] = []
        self._current: FieldRecord | None = None
        self._prev_indent = 0

    @property
    def schema(self) -> list[FieldRecord]:
        return self._root

    @property
    def depth(self) -> int:
        """Number of currently open ancestors of the last record."""
        return len(self._stack)

    def add(self, line: ClassifiedLine) -> FieldRecord:
        """Attach the record for ``line`` and return it."""
        record = line.to_record()

        if self._current is None:
            self._root.append(record)
        elif line.indent > self._prev_indent:
            # Any deeper indent is exactly one level down.
            parent = self._current
            self._stack.append(_OpenRecord(self._prev_indent, parent))
            parent.add_child(record)
        else:
            while self._stack and self._stack[-1].indent >= line.indent:
                self._stack.pop()
            if self._stack:
                self._stack[-1].record.add_child(record)
            else:
                self._root.append(record)

        self._current = record
        self._prev_indent = line.indent
        return record

    def extend(self, lines: Iterable[ClassifiedLine]) -> SchemaBuilder:
        for line in lines:
            self.add(line)
        return self


def parse_schema(text: str) -> list[FieldRecord]:
    """
    Parse schema text into its top-level records.

    Args:
        text: Captured interface text; may be empty (unknown type)

    Returns:
        Ordered list of top-level FieldRecord, empty for empty input
    """
    return SchemaBuilder().extend(classify_lines(text)).schema


def schema_to_dicts(schema: Iterable[FieldRecord]) -> list[dict[str, Any]]:
    return [record.to_dict() for record in schema]


def schema_to_json(schema: Iterable[FieldRecord], indent: int | None = None) -> str:
    """Serialize a parsed schema as a JSON array."""
    return json.dumps(schema_to_dicts(schema), indent=indent)
