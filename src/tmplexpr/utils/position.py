"""
Position arithmetic over template source.
"""

from ..shared.source_location import Position


def advance_position_with_clone(pos: Position, source: str, num_chars: int) -> Position:
    """
    Return the position reached by moving `pos` forward over the first
    `num_chars` characters of `source`.

    Newlines bump the line and reset the column; `pos` itself is not modified.
    """
    lines = 0
    last_newline = -1
    for i in range(num_chars):
        if source[i] == "\n":
            lines += 1
            last_newline = i
    if last_newline == -1:
        column = pos.column + num_chars
    else:
        column = num_chars - last_newline
    return Position(offset=pos.offset + num_chars, line=pos.line + lines, column=column)
