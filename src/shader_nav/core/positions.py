from bisect import bisect_right

from shader_nav.errors import PositionError
from shader_nav.models import Position


class PositionMap:
    """Converts between zero-based (line, character) positions and byte offsets.

    Characters are counted in bytes, so the mapping is exact for ASCII text.
    Built once per source snapshot and never mutated.
    """

    def __init__(self, source: bytes) -> None:
        self._length = len(source)
        starts = [0]
        index = source.find(b"\n")
        while index != -1:
            starts.append(index + 1)
            index = source.find(b"\n", index + 1)
        self._line_starts: tuple[int, ...] = tuple(starts)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_length(self, line: int) -> int:
        """Length of ``line`` in bytes, excluding its line terminator."""
        if not 0 <= line < len(self._line_starts):
            raise PositionError(f"Line {line} is outside the text ({len(self._line_starts)} lines)")
        start = self._line_starts[line]
        if line + 1 < len(self._line_starts):
            end = self._line_starts[line + 1] - 1
        else:
            end = self._length
        return end - start

    def offset_for_position(self, pos: Position) -> int:
        length = self.line_length(pos.line)
        if pos.character > length:
            raise PositionError(f"Character {pos.character} is past the end of line {pos.line} (length {length})")
        return self._line_starts[pos.line] + pos.character

    def position_for_offset(self, offset: int) -> Position:
        if not 0 <= offset <= self._length:
            raise PositionError(f"Offset {offset} is outside the text (length {self._length})")
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line=line, character=offset - self._line_starts[line])
