"""
Line classifier for ROS message definition text.

Turns one raw line of `rosmsg show` / `ros2 interface show` output into an
indent width plus a (kind, type, name, extra) record. Blank lines, comment
lines and lines without a name token are skipped.

Examples:
    "uint8 DEBUG=10"        -> constant  type=uint8    name=DEBUG  extra=10
    "  float64 x 0.0"       -> field     type=float64  name=x      extra=0.0
    "\\tstring<=10 label"    -> field     type=string<=10 name=label
    "# just a comment"      -> skipped
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schema import FieldRecord

COMMENT_MARKER = "#"
ASSIGNMENT_MARKER = "="


class FieldKind(StrEnum):
    """Kinds of schema entries."""

    CONSTANT = "constant"
    FIELD = "field"


@dataclass(frozen=True)
class ClassifiedLine:
    """One non-blank schema line, decomposed."""

    indent: int
    kind: FieldKind
    type: str
    name: str
    extra: str | None = None  # constant value, or field default/annotation

    def to_record(self) -> FieldRecord:
        """Build a fresh, childless FieldRecord for this line."""
        from .schema import FieldRecord

        if self.kind == FieldKind.CONSTANT:
            return FieldRecord(type=self.type, name=self.name, kind=self.kind, value=self.extra)
        return FieldRecord(type=self.type, name=self.name, kind=self.kind, default=self.extra)


def classify_line(raw: str) -> ClassifiedLine | None:
    """
    Classify a single line of schema text.

    Args:
        raw: One line, without its trailing newline

    Returns:
        The classified line, or None if the line should be skipped
    """
    content = raw.split(COMMENT_MARKER, 1)[0].rstrip()
    stripped = content.lstrip()
    if not stripped:
        return None

    # Raw character count; tabs and spaces both count as one.
    indent = len(content) - len(stripped)

    parts = stripped.split(None, 1)
    field_type = parts[0]
    remainder = parts[1] if len(parts) > 1 else ""

    if ASSIGNMENT_MARKER in remainder:
        name, value = remainder.split(ASSIGNMENT_MARKER, 1)
        name = name.strip()
        if not name:
            return None
        return ClassifiedLine(
            indent=indent,
            kind=FieldKind.CONSTANT,
            type=field_type,
            name=name,
            extra=value.strip(),
        )

    tokens = stripped.split(None, 2)
    if len(tokens) < 2:
        return None
    return ClassifiedLine(
        indent=indent,
        kind=FieldKind.FIELD,
        type=tokens[0],
        name=tokens[1],
        extra=tokens[2] if len(tokens) > 2 else None,
    )


def classify_lines(text: str) -> Iterator[ClassifiedLine]:
    """Yield the classified lines of a text blob in order, dropping skips."""
    for raw in text.split("\n"):
        line = classify_line(raw)
        if line is not None:
            yield line
