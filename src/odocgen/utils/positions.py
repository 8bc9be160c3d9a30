"""Byte offset to line/column lookup.

tree-sitter reports node positions as byte offsets into the UTF-8 source.
``LineIndex`` precomputes the offset of every newline once per file so each
lookup is a binary search.
"""

from bisect import bisect_right


class LineIndex:
    """Maps byte offsets of one source buffer to (line, column) pairs.

    Lines are 1-based. The column is the distance from the preceding
    newline byte, so the first character of a line has column 1.
    """

    def __init__(self, source: bytes) -> None:
        self.newlines: list[int] = [
            i for i, byte in enumerate(source) if byte == 0x0A
        ]

    def locate(self, offset: int) -> tuple[int, int]:
        """Return the (line, column) of a byte offset.

        Offsets past the last newline belong to the final line, which is
        correct whether or not the file ends with a newline.
        """
        # Index of the first newline strictly after the offset.
        i = bisect_right(self.newlines, offset)
        if i == 0:
            return 1, offset + 1
        return i + 1, offset - self.newlines[i - 1]

    @property
    def line_count(self) -> int:
        return len(self.newlines) + 1
