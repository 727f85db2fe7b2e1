from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Tuple, TypeAlias, Union, Sequence, TYPE_CHECKING
import enum

if TYPE_CHECKING:
    from .layout import ConstraintLike, Direction


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def to_tuple(self) -> Tuple[int, int]:
        return (int(self.x), int(self.y))

    def __iter__(self) -> Iterator[int]:
        yield from (int(self.x), int(self.y))


@dataclass(frozen=True)
class Size:
    width: int
    height: int

    def to_tuple(self) -> Tuple[int, int]:
        return (int(self.width), int(self.height))

    def __iter__(self) -> Iterator[int]:
        yield from (int(self.width), int(self.height))


@dataclass(frozen=True)
class Margin:
    """Symmetric inset: ``horizontal`` cells on the left and right,
    ``vertical`` rows on the top and bottom."""

    horizontal: int = 0
    vertical: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "horizontal", max(0, int(self.horizontal)))
        object.__setattr__(self, "vertical", max(0, int(self.vertical)))

    @staticmethod
    def uniform(n: int) -> "Margin":
        return Margin(n, n)


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", max(0, int(self.x)))
        object.__setattr__(self, "y", max(0, int(self.y)))
        object.__setattr__(self, "width", max(0, int(self.width)))
        object.__setattr__(self, "height", max(0, int(self.height)))

    @staticmethod
    def from_tuple(t: Tuple[int, int, int, int]) -> "Rect":
        x, y, w, h = t
        return Rect(int(x), int(y), int(w), int(h))

    @staticmethod
    def coerce(rect: "RectLike") -> "Rect":
        if isinstance(rect, Rect):
            return rect
        return Rect.from_tuple(rect)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (int(self.x), int(self.y), int(self.width), int(self.height))

    def __iter__(self) -> Iterator[int]:
        yield from (int(self.x), int(self.y), int(self.width), int(self.height))

    @property
    def area(self) -> int:
        return int(self.width * self.height)

    @property
    def left(self) -> int:
        return int(self.x)

    @property
    def top(self) -> int:
        return int(self.y)

    @property
    def right(self) -> int:
        return int(self.x + self.width)

    @property
    def bottom(self) -> int:
        return int(self.y + self.height)

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom

    def inner(self, margin: Margin) -> "Rect":
        """Inset by ``margin`` on both axes.

        Each inset is clamped to half the dimension, so an oversized margin
        yields a zero-sized rect inside the original instead of a negative one.
        """
        dx = min(margin.horizontal, self.width // 2)
        dy = min(margin.vertical, self.height // 2)
        return Rect(
            self.x + dx,
            self.y + dy,
            max(0, self.width - 2 * margin.horizontal),
            max(0, self.height - 2 * margin.vertical),
        )

    def intersection(self, other: "Rect") -> "Rect":
        x1 = max(self.left, other.left)
        y1 = max(self.top, other.top)
        x2 = min(self.right, other.right)
        y2 = min(self.bottom, other.bottom)
        return Rect(x1, y1, max(0, x2 - x1), max(0, y2 - y1))

    def intersects(self, other: "Rect") -> bool:
        return (
            self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )

    def union(self, other: "Rect") -> "Rect":
        x1 = min(self.left, other.left)
        y1 = min(self.top, other.top)
        x2 = max(self.right, other.right)
        y2 = max(self.bottom, other.bottom)
        return Rect(x1, y1, x2 - x1, y2 - y1)

    def split(
        self,
        constraints: Sequence["ConstraintLike"],
        spacing: int = 0,
        direction: "Direction | None" = None,
    ) -> list["Rect"]:
        from .layout import Direction, split

        return split(self, constraints, spacing, direction or Direction.HORIZONTAL)


RectLike: TypeAlias = Union[Rect, Tuple[int, int, int, int]]

__all__ = [
    "Point",
    "Size",
    "Margin",
    "Rect",
    "RectLike",
]


# Colour and modifier tags carried by Style. The core never interprets them;
# only a backend turns them into terminal output.

class Color(enum.IntEnum):
    Reset = 0
    Black = 1
    Red = 2
    Green = 3
    Yellow = 4
    Blue = 5
    Magenta = 6
    Cyan = 7
    Gray = 8
    DarkGray = 9
    LightRed = 10
    LightGreen = 11
    LightYellow = 12
    LightBlue = 13
    LightMagenta = 14
    LightCyan = 15
    White = 16


class Mod(enum.IntFlag):
    NONE = 0
    BOLD = 1 << 0
    DIM = 1 << 1
    ITALIC = 1 << 2
    UNDERLINED = 1 << 3
    SLOW_BLINK = 1 << 4
    RAPID_BLINK = 1 << 5
    REVERSED = 1 << 6
    HIDDEN = 1 << 7
    CROSSED_OUT = 1 << 8


__all__ += [
    "Color",
    "Mod",
]
