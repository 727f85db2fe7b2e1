import logging

from .types import (
    Point,
    Size,
    Margin,
    Rect,
    RectLike,
    Color,
    Mod,
)
from .style import Style, rgb, color_indexed
from .layout import (
    Length,
    Percentage,
    Ratio,
    Min,
    Max,
    Constraint,
    Direction,
    Layout,
    solve,
    split,
)
from .buffer import Cell, Buffer, diff
from .widgets import (
    Widget,
    Borders,
    BorderType,
    Block,
    PlainCells,
    StyledCells,
    Row,
    TableConfig,
    Table,
)
from .backend import Backend, BackendError, TestBackend, AnsiBackend, raw_mode, alt_screen
from .terminal import Terminal, Frame, CompletedFrame, render, headless_render

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Point",
    "Size",
    "Margin",
    "Rect",
    "RectLike",
    "Color",
    "Mod",
    "Style",
    "rgb",
    "color_indexed",
    "Length",
    "Percentage",
    "Ratio",
    "Min",
    "Max",
    "Constraint",
    "Direction",
    "Layout",
    "solve",
    "split",
    "Cell",
    "Buffer",
    "diff",
    "Widget",
    "Borders",
    "BorderType",
    "Block",
    "PlainCells",
    "StyledCells",
    "Row",
    "TableConfig",
    "Table",
    "Backend",
    "BackendError",
    "TestBackend",
    "AnsiBackend",
    "raw_mode",
    "alt_screen",
    "Terminal",
    "Frame",
    "CompletedFrame",
    "render",
    "headless_render",
]
