from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable
import enum

from .buffer import Buffer
from .layout import ConstraintLike, Direction, Length, split
from .style import Style
from .text import str_width
from .types import Margin, Rect, RectLike


@runtime_checkable
class Widget(Protocol):
    """Anything drawable: writes cells into ``buf`` inside ``area`` only."""

    def render(self, area: Rect, buf: Buffer) -> None:
        ...


class Borders(enum.IntFlag):
    NONE = 0
    TOP = 1 << 0
    RIGHT = 1 << 1
    BOTTOM = 1 << 2
    LEFT = 1 << 3
    ALL = TOP | RIGHT | BOTTOM | LEFT


class BorderType(enum.IntEnum):
    PLAIN = 0
    ROUNDED = 1
    DOUBLE = 2
    THICK = 3


# vertical, horizontal, top-left, top-right, bottom-left, bottom-right
_BORDER_SYMBOLS = {
    BorderType.PLAIN: ("│", "─", "┌", "┐", "└", "┘"),
    BorderType.ROUNDED: ("│", "─", "╭", "╮", "╰", "╯"),
    BorderType.DOUBLE: ("║", "═", "╔", "╗", "╚", "╝"),
    BorderType.THICK: ("┃", "━", "┏", "┓", "┗", "┛"),
}


@dataclass(frozen=True)
class Block:
    """Border and optional title drawn around another widget's area."""

    title: Optional[str] = None
    borders: Borders = Borders.NONE
    border_type: BorderType = BorderType.PLAIN
    border_style: Style = field(default_factory=Style)
    title_style: Style = field(default_factory=Style)
    style: Style = field(default_factory=Style)

    @staticmethod
    def bordered(title: Optional[str] = None) -> "Block":
        return Block(title=title, borders=Borders.ALL)

    def inner(self, area: RectLike) -> Rect:
        x, y, w, h = Rect.coerce(area)
        if self.borders & Borders.LEFT and w:
            x += 1
            w -= 1
        if (self.borders & Borders.TOP or self.title) and h:
            y += 1
            h -= 1
        if self.borders & Borders.RIGHT and w:
            w -= 1
        if self.borders & Borders.BOTTOM and h:
            h -= 1
        return Rect(x, y, w, h)

    def render(self, area: Rect, buf: Buffer) -> None:
        area = Rect.coerce(area)
        if area.is_empty():
            return
        buf.set_style(area, self.style)
        vertical, horizontal, tl, tr, bl, br = _BORDER_SYMBOLS[BorderType(self.border_type)]
        st = self.border_style
        b = self.borders
        last_x = area.right - 1
        last_y = area.bottom - 1

        if b & Borders.LEFT:
            for y in range(area.top, area.bottom):
                buf.set_stringn(area.left, y, vertical, 1, st)
        if b & Borders.RIGHT:
            for y in range(area.top, area.bottom):
                buf.set_stringn(last_x, y, vertical, 1, st)
        if b & Borders.TOP:
            for x in range(area.left, area.right):
                buf.set_stringn(x, area.top, horizontal, 1, st)
        if b & Borders.BOTTOM:
            for x in range(area.left, area.right):
                buf.set_stringn(x, last_y, horizontal, 1, st)

        if b & Borders.TOP and b & Borders.LEFT:
            buf.set_stringn(area.left, area.top, tl, 1, st)
        if b & Borders.TOP and b & Borders.RIGHT:
            buf.set_stringn(last_x, area.top, tr, 1, st)
        if b & Borders.BOTTOM and b & Borders.LEFT:
            buf.set_stringn(area.left, last_y, bl, 1, st)
        if b & Borders.BOTTOM and b & Borders.RIGHT:
            buf.set_stringn(last_x, last_y, br, 1, st)

        if self.title:
            lx = 1 if b & Borders.LEFT else 0
            rx = 1 if b & Borders.RIGHT else 0
            buf.set_stringn(area.left + lx, area.top, self.title, area.width - lx - rx, self.title_style)


# Row content comes in shapes; renderers only ever ask for (text, style) pairs.

@dataclass(frozen=True)
class PlainCells:
    cells: Tuple[str, ...]

    def spans(self) -> list[tuple[str, Style]]:
        return [(str(text), Style()) for text in self.cells]


@dataclass(frozen=True)
class StyledCells:
    cells: Tuple[Tuple[str, Style], ...]

    def spans(self) -> list[tuple[str, Style]]:
        return [(str(text), style) for text, style in self.cells]


RowContent = Union[PlainCells, StyledCells]


@dataclass(frozen=True)
class Row:
    content: RowContent
    height: int = 1
    style: Style = field(default_factory=Style)

    @staticmethod
    def data(cells: Iterable[str], height: int = 1, style: Optional[Style] = None) -> "Row":
        return Row(PlainCells(tuple(cells)), height, style or Style())

    @staticmethod
    def styled(cells: Iterable[tuple[str, Style]], height: int = 1, style: Optional[Style] = None) -> "Row":
        return Row(StyledCells(tuple(cells)), height, style or Style())

    def spans(self) -> list[tuple[str, Style]]:
        if isinstance(self.content, (PlainCells, StyledCells)):
            return self.content.spans()
        raise TypeError(f"unsupported row content: {type(self.content).__name__}")


RowLike = Union[Row, Sequence[str]]


def _as_row(row: RowLike) -> Row:
    if isinstance(row, Row):
        return row
    return Row.data(row)


@dataclass(frozen=True)
class TableConfig:
    """Every table option, each independent of the others."""

    block: Optional[Block] = None
    widths: Tuple[ConstraintLike, ...] = ()
    column_spacing: int = 1
    margin: Margin = field(default_factory=Margin)
    highlight_symbol: Optional[str] = None
    selected: Optional[int] = None
    header_gap: int = 1
    style: Style = field(default_factory=Style)
    header_style: Style = field(default_factory=Style)
    highlight_style: Style = field(default_factory=Style)

    def __post_init__(self) -> None:
        object.__setattr__(self, "widths", tuple(self.widths))
        object.__setattr__(self, "column_spacing", max(0, int(self.column_spacing)))
        object.__setattr__(self, "header_gap", max(0, int(self.header_gap)))


@dataclass(frozen=True)
class Table:
    """Header row plus body rows laid out in constrained columns.

    Example:
        Table(["Name", "Size"], [["a.txt", "12"], ["b.txt", "7"]],
              TableConfig(block=Block.bordered("Files"), widths=(Length(8), Length(4))))
    """

    header: RowLike
    rows: Sequence[RowLike] = ()
    config: TableConfig = field(default_factory=TableConfig)

    def __post_init__(self) -> None:
        object.__setattr__(self, "header", _as_row(self.header))
        object.__setattr__(self, "rows", tuple(_as_row(r) for r in self.rows))

    # Configuration helpers; each returns a new Table and the last call wins.
    def _with(self, **changes) -> "Table":
        return replace(self, config=replace(self.config, **changes))

    def with_block(self, block: Optional[Block]) -> "Table":
        return self._with(block=block)

    def with_widths(self, widths: Iterable[ConstraintLike]) -> "Table":
        return self._with(widths=tuple(widths))

    def with_column_spacing(self, spacing: int) -> "Table":
        return self._with(column_spacing=spacing)

    def with_margin(self, margin: Margin) -> "Table":
        return self._with(margin=margin)

    def with_highlight_symbol(self, symbol: Optional[str]) -> "Table":
        return self._with(highlight_symbol=symbol)

    def with_header_gap(self, gap: int) -> "Table":
        return self._with(header_gap=gap)

    def with_style(self, style: Style) -> "Table":
        return self._with(style=style)

    def with_header_style(self, style: Style) -> "Table":
        return self._with(header_style=style)

    def with_highlight_style(self, style: Style) -> "Table":
        return self._with(highlight_style=style)

    def select(self, index: Optional[int]) -> "Table":
        return self._with(selected=index)

    def render(self, area: Rect, buf: Buffer) -> None:
        area = Rect.coerce(area)
        if area.is_empty():
            return
        cfg = self.config
        buf.set_style(area, cfg.style)

        body = area
        if cfg.block is not None:
            cfg.block.render(area, buf)
            body = cfg.block.inner(area)
        body = body.inner(cfg.margin)
        if body.is_empty():
            return

        # The highlight column is reserved on every row, selected or not.
        symbol = cfg.highlight_symbol or ""
        hl_width = min(str_width(symbol), body.width)
        data_area = Rect(body.x + hl_width, body.y, body.width - hl_width, body.height)
        columns = split(data_area, cfg.widths, cfg.column_spacing, Direction.HORIZONTAL)

        rows: list[Row] = [self.header, *self.rows]
        heights = [max(0, int(r.height)) for r in rows]
        # header, gap, then body rows; a row that is cut short is not drawn
        wanted = [heights[0], cfg.header_gap, *heights[1:]]
        slots = split(body, [Length(h) for h in wanted], 0, Direction.VERTICAL)
        slots = [slots[0], *slots[2:]]

        for i, (row, want, slot) in enumerate(zip(rows, heights, slots)):
            if slot.height < want:
                break
            if want == 0:
                continue
            if i == 0:
                style = cfg.header_style.patch(row.style)
            else:
                style = row.style
            buf.set_style(slot, style)
            if i > 0 and cfg.selected is not None and i - 1 == cfg.selected:
                buf.set_style(slot, cfg.highlight_style)
                style = style.patch(cfg.highlight_style)
                if hl_width:
                    buf.set_stringn(body.x, slot.y, symbol, hl_width, style)
            self._render_cells(buf, row, columns, slot, style)

    @staticmethod
    def _render_cells(buf: Buffer, row: Row, columns: Sequence[Rect], slot: Rect, style: Style) -> None:
        for col, (text, cell_style) in zip(columns, row.spans()):
            if col.width == 0:
                continue
            # explicit newlines fill the lines of a taller row; nothing wraps
            for dy, line in enumerate(text.split("\n")[:slot.height]):
                buf.set_stringn(col.x, slot.y + dy, line, col.width, style.patch(cell_style))


__all__ = [
    "Widget",
    "Borders",
    "BorderType",
    "Block",
    "PlainCells",
    "StyledCells",
    "RowContent",
    "Row",
    "RowLike",
    "TableConfig",
    "Table",
]
