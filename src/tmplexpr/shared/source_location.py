"""
Source Location

Positions and spans into template source text.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """
    A point in template source.

    - offset: 0-based character offset from the start of the template
    - line: 1-based line number
    - column: 1-based column number
    """
    offset: int
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceLocation:
    """
    Span of template source (start inclusive, end exclusive).

    Immutable (frozen) so locations can be shared between a rewritten
    expression and its sub-expressions.
    """
    start: Position
    end: Position
    source: str = ""

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def location_from_source(source: str, start: Position = Position(0, 1, 1)) -> SourceLocation:
    """Span covering `source` when it begins at `start`."""
    from ..utils.position import advance_position_with_clone
    return SourceLocation(start=start, end=advance_position_with_clone(start, source, len(source)), source=source)
