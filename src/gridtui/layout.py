"""Constraint-driven partitioning of a container length.

The solver is a single greedy pass: every constraint, in declared order,
takes what it asks for out of a running budget, and whatever no longer fits
is clamped, then hidden. Earlier entries always win over later ones.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Union
import enum

from .types import Margin, Rect, RectLike


@dataclass(frozen=True)
class Length:
    """Exactly ``n`` cells."""

    n: int


@dataclass(frozen=True)
class Percentage:
    """``p`` percent of the full container length, rounded half up."""

    p: int


@dataclass(frozen=True)
class Ratio:
    """``num / den`` of the full container length, rounded half up."""

    num: int
    den: int


@dataclass(frozen=True)
class Min:
    """At least ``n`` cells; absorbs budget left over after the pass."""

    n: int


@dataclass(frozen=True)
class Max:
    """At most ``n`` cells."""

    n: int


Constraint = Union[Length, Percentage, Ratio, Min, Max]
# Bare ints are accepted as Length for quick call sites.
ConstraintLike = Union[Constraint, int]


class Direction(enum.IntEnum):
    VERTICAL = 0
    HORIZONTAL = 1


def _round_half_up(num: int, den: int) -> int:
    # num / den rounded half up, in integers to avoid float drift
    if den <= 0:
        return 0
    return (2 * num + den) // (2 * den)


def _as_constraint(c: ConstraintLike) -> Constraint:
    if isinstance(c, (Length, Percentage, Ratio, Min, Max)):
        return c
    if isinstance(c, int) and not isinstance(c, bool):
        return Length(c)
    raise TypeError(f"not a layout constraint: {c!r}")


def _desired(c: Constraint, length: int) -> int:
    if isinstance(c, Length):
        return max(0, int(c.n))
    if isinstance(c, Percentage):
        return _round_half_up(max(0, int(c.p)) * length, 100)
    if isinstance(c, Ratio):
        return _round_half_up(max(0, int(c.num)) * length, int(c.den))
    # Min and Max both start from their bound
    return max(0, int(c.n))


def solve(length: int, constraints: Sequence[ConstraintLike], spacing: int = 0) -> list[int]:
    """Allocate ``length`` cells among ``constraints``.

    ``spacing`` cells sit between adjacent segments and are taken out of the
    budget before any constraint is looked at. Percentages and ratios are of
    ``length`` itself, while every allocation still comes out of the
    shrinking budget, so once it runs dry later segments get 0.

    Example: solve(28, [Percentage(60), Length(10), Percentage(60)], 1)
    -> [17, 9, 0]
    """
    cs = [_as_constraint(c) for c in constraints]
    if not cs:
        return []
    length = max(0, int(length))
    spacing = max(0, int(spacing))
    remaining = max(0, length - spacing * (len(cs) - 1))

    sizes: list[int] = []
    grow = None
    for i, c in enumerate(cs):
        if isinstance(c, Min):
            grow = i
        take = min(_desired(c, length), remaining)
        sizes.append(take)
        remaining -= take

    if grow is not None and remaining > 0:
        sizes[grow] += remaining
    return sizes


def split(
    area: RectLike,
    constraints: Sequence[ConstraintLike],
    spacing: int = 0,
    direction: Direction = Direction.HORIZONTAL,
) -> list[Rect]:
    """Partition ``area`` along ``direction``; one Rect per constraint.

    Segments never leave ``area``: one that starts past the far edge comes
    back zero-sized at that edge.
    """
    area = Rect.coerce(area)
    spacing = max(0, int(spacing))
    horizontal = direction == Direction.HORIZONTAL
    total = area.width if horizontal else area.height
    start = area.x if horizontal else area.y
    end = start + total

    rects = []
    pos = start
    for size in solve(total, constraints, spacing):
        at = min(pos, end)
        size = min(size, end - at)
        if horizontal:
            rects.append(Rect(at, area.y, size, area.height))
        else:
            rects.append(Rect(area.x, at, area.width, size))
        pos += size + spacing
    return rects


@dataclass(frozen=True)
class Layout:
    """Reusable split recipe: margin first, then constraints along an axis."""

    direction: Direction = Direction.VERTICAL
    constraints: Sequence[ConstraintLike] = field(default_factory=tuple)
    margin: Margin = field(default_factory=Margin)
    spacing: int = 0

    def split(self, area: RectLike) -> list[Rect]:
        inner = Rect.coerce(area).inner(self.margin)
        return split(inner, self.constraints, self.spacing, self.direction)


def margin(rect: RectLike, *, all: int | None = None, x: int = 0, y: int = 0) -> Rect:
    if all is not None:
        x = y = int(all)
    return Rect.coerce(rect).inner(Margin(x, y))


def _fraction_lengths(avail: int, fractions: Sequence[float]) -> list[int]:
    # Last segment takes the rounding remainder so the whole span is used.
    fr_sum = sum(fractions) or 1.0
    lengths = []
    used = 0
    for i, f in enumerate(fractions):
        if i < len(fractions) - 1:
            n = max(0, int(round(avail * (f / fr_sum))))
        else:
            n = max(0, avail - used)
        lengths.append(n)
        used += n
    return lengths


def split_h(rect: RectLike, *fractions: float, gap: int = 0) -> list[Rect]:
    """Split horizontally (stacked vertically) by fractions.

    Example: split_h((0,0,80,24), 0.7, 0.3, gap=1)
    """
    r = Rect.coerce(rect)
    avail = max(0, r.height - max(0, (len(fractions) - 1) * gap))
    lengths = _fraction_lengths(avail, fractions)
    return split(r, [Length(n) for n in lengths], gap, Direction.VERTICAL)


def split_v(rect: RectLike, *fractions: float, gap: int = 0) -> list[Rect]:
    """Split vertically (columns) by fractions.

    Example: split_v((0,0,80,24), 0.25, 0.5, 0.25, gap=1)
    """
    r = Rect.coerce(rect)
    avail = max(0, r.width - max(0, (len(fractions) - 1) * gap))
    lengths = _fraction_lengths(avail, fractions)
    return split(r, [Length(n) for n in lengths], gap, Direction.HORIZONTAL)


__all__ = [
    "Length",
    "Percentage",
    "Ratio",
    "Min",
    "Max",
    "Constraint",
    "ConstraintLike",
    "Direction",
    "solve",
    "split",
    "Layout",
    "margin",
    "split_h",
    "split_v",
]
