"""Cell grid for one frame and the frame-to-frame diff.

A Buffer covers a Rect with a flat, row-major list of Cells. Writes are
clipped to that Rect: anything outside is dropped, never wrapped and never
an error.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from .style import Style
from .text import graphemes, str_width
from .types import Rect, RectLike


@dataclass
class Cell:
    symbol: str = " "
    style: Style = field(default_factory=Style)

    def set_symbol(self, symbol: str) -> "Cell":
        self.symbol = symbol
        return self

    def set_style(self, style: Style) -> "Cell":
        self.style = self.style.patch(style)
        return self

    def reset(self) -> None:
        self.symbol = " "
        self.style = Style()

    def copy(self) -> "Cell":
        return Cell(self.symbol, self.style)


# (x, y, cell) in absolute terminal coordinates
Update = Tuple[int, int, Cell]


class Buffer:
    def __init__(self, area: RectLike, content: Optional[List[Cell]] = None):
        self.area = Rect.coerce(area)
        if content is None:
            content = [Cell() for _ in range(self.area.area)]
        elif len(content) != self.area.area:
            raise ValueError(
                f"buffer content has {len(content)} cells, area {self.area} needs {self.area.area}"
            )
        self.content = content

    @classmethod
    def empty(cls, area: RectLike) -> "Buffer":
        return cls(area)

    @classmethod
    def with_lines(cls, lines: Sequence[str]) -> "Buffer":
        """Build a buffer whose rows read ``lines``; width is the widest line."""
        width = max((str_width(line) for line in lines), default=0)
        buf = cls(Rect(0, 0, width, len(lines)))
        for y, line in enumerate(lines):
            buf.set_string(0, y, line, Style())
        return buf

    def index_of(self, x: int, y: int) -> int:
        if not self.area.contains(x, y):
            raise IndexError(f"({x}, {y}) is outside {self.area}")
        return (y - self.area.y) * self.area.width + (x - self.area.x)

    def pos_of(self, i: int) -> Tuple[int, int]:
        if not 0 <= i < len(self.content):
            raise IndexError(f"cell index {i} is outside {self.area}")
        return (self.area.x + i % self.area.width, self.area.y + i // self.area.width)

    def get(self, x: int, y: int) -> Optional[Cell]:
        if not self.area.contains(x, y):
            return None
        return self.content[self.index_of(x, y)]

    def set_string(self, x: int, y: int, text: str, style: Optional[Style] = None) -> Tuple[int, int]:
        return self.set_stringn(x, y, text, max(0, self.area.right - x), style)

    def set_stringn(
        self, x: int, y: int, text: str, width: int, style: Optional[Style] = None
    ) -> Tuple[int, int]:
        """Write ``text`` from ``(x, y)`` along the row, at most ``width`` cells.

        Cells left of or beyond the buffer area are skipped. A wide character
        that would not fit whole is dropped together with the rest of the text.
        Returns the position just after the last cell written.
        """
        if not text or width <= 0 or not self.area.top <= y < self.area.bottom:
            return (x, y)
        style = style or Style()
        limit = min(self.area.right, x + width)
        row_start = (y - self.area.y) * self.area.width - self.area.x
        row_lo = row_start + self.area.left
        row_hi = row_start + self.area.right
        cx = x
        for symbol, w in graphemes(text):
            if cx + w > limit:
                break
            if cx >= self.area.left:
                i = row_start + cx
                # landing on the tail of a wide symbol blanks its head
                if self.content[i].symbol == "":
                    k = i - 1
                    while k >= row_lo and self.content[k].symbol == "":
                        self.content[k].set_symbol(" ")
                        k -= 1
                    if k >= row_lo:
                        self.content[k].set_symbol(" ")
                self.content[i].set_symbol(symbol).set_style(style)
                # trailing halves of a wide symbol are blanked out
                for j in range(i + 1, i + w):
                    self.content[j].set_symbol("").set_style(style)
                # so are orphaned tails of whatever was overwritten
                j = i + w
                while j < row_hi and self.content[j].symbol == "":
                    self.content[j].set_symbol(" ")
                    j += 1
            cx += w
        return (cx, y)

    def set_style(self, area: RectLike, style: Style) -> None:
        target = self.area.intersection(Rect.coerce(area))
        for y in range(target.top, target.bottom):
            for x in range(target.left, target.right):
                self.content[self.index_of(x, y)].set_style(style)

    def reset(self) -> None:
        for c in self.content:
            c.reset()

    def resize(self, area: RectLike) -> None:
        area = Rect.coerce(area)
        length = area.area
        if len(self.content) > length:
            del self.content[length:]
        else:
            self.content.extend(Cell() for _ in range(length - len(self.content)))
        self.area = area

    def merge(self, other: "Buffer") -> None:
        """Grow to cover ``other`` as well; ``other``'s cells win."""
        area = self.area.union(other.area)
        merged = Buffer(area)
        for buf in (self, other):
            for i, cell in enumerate(buf.content):
                x, y = buf.pos_of(i)
                merged.content[merged.index_of(x, y)] = cell.copy()
        self.area = area
        self.content = merged.content

    def diff(self, other: "Buffer") -> List[Update]:
        """Cells of ``other`` (the next frame) that differ from this one.

        Both buffers must cover the same area. The cell hidden behind a wide
        symbol is never emitted; cells a wide symbol used to cover are
        re-emitted so the terminal repaints them.
        """
        if self.area != other.area:
            raise ValueError(f"cannot diff buffers of different areas: {self.area} vs {other.area}")
        updates: List[Update] = []
        invalidated = 0
        to_skip = 0
        for i, (current, previous) in enumerate(zip(other.content, self.content)):
            if (current != previous or invalidated > 0) and to_skip == 0:
                x, y = self.pos_of(i)
                updates.append((x, y, current))
            current_w = str_width(current.symbol)
            to_skip = max(current_w - 1, 0)
            affected = max(current_w, str_width(previous.symbol))
            invalidated = max(affected, invalidated) - 1
            if invalidated < 0:
                invalidated = 0
        return updates

    def lines(self) -> List[str]:
        w = self.area.width
        return [
            "".join(c.symbol for c in self.content[row * w:(row + 1) * w])
            for row in range(self.area.height)
        ]

    def __str__(self) -> str:
        return "\n".join(self.lines())

    def __repr__(self) -> str:
        return f"Buffer(area={self.area!r}, lines={self.lines()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Buffer):
            return NotImplemented
        return self.area == other.area and self.content == other.content


def diff(previous: Buffer, current: Buffer) -> List[Update]:
    return previous.diff(current)


def apply_updates(buf: Buffer, updates: Iterable[Update]) -> None:
    """Write ``updates`` into ``buf``, dropping any outside its area."""
    for x, y, cell in updates:
        target = buf.get(x, y)
        if target is not None:
            target.symbol = cell.symbol
            target.style = cell.style


__all__ = [
    "Cell",
    "Update",
    "Buffer",
    "diff",
    "apply_updates",
]
