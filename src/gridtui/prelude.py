"""Convenience imports for quick starts and REPLs.

Usage:
    from gridtui.prelude import *
"""
from .types import (
    Rect, Point, Size, Margin, RectLike,
    Color, Mod,
)
from .style import Style, rgb, color_indexed
from .layout import (
    Length, Percentage, Ratio, Min, Max, Direction, Layout,
    solve, split, margin, split_h, split_v,
)
from .buffer import Cell, Buffer
from .widgets import Block, Borders, BorderType, Row, Table, TableConfig
from .backend import AnsiBackend, TestBackend, raw_mode, alt_screen
from .terminal import Terminal, render, headless_render

__all__ = [name for name in globals().keys() if not name.startswith('_')]
